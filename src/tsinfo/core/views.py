"""View models handed to the web UI."""

from dataclasses import dataclass, field
from enum import Enum


class Priority(Enum):
    """Severity of a warning, matching the UI notice classes."""

    ERROR = "error"
    WARN = "warn"
    SYSTEM = "system"


@dataclass(frozen=True)
class StatusWarning:
    """A localized warning message."""

    message: str
    priority: Priority = Priority.SYSTEM


@dataclass(frozen=True)
class LockInfo:
    """Tailnet lock details, present only when lock is enabled."""

    lock_signed: str
    lock_signing: str
    pub_key: str
    node_key: str


@dataclass(frozen=True)
class StatusInfo:
    """Summary shown on the status page."""

    ts_version: str
    key_expiration: str
    online: str
    in_net_map: str
    tags: str
    logged_in: str
    ts_health: str
    lock_enabled: str
    lock_info: LockInfo | None = None


@dataclass(frozen=True)
class ConnectionInfo:
    """Summary shown on the connection page."""

    host_name: str
    dns_name: str
    tailscale_ips: str
    magic_dns_suffix: str
    advertised_routes: str
    accept_routes: str
    accept_dns: str
    run_ssh: str
    exit_node_local: str
    use_exit_node: str
    advertise_exit_node: str


@dataclass(frozen=True)
class DashboardInfo:
    """Compact summary for the dashboard widget."""

    host_name: str
    dns_name: str
    tailscale_ips: list[str] = field(default_factory=list)
    online: str = ""


@dataclass(frozen=True)
class PeerStatus:
    """One row of the peer table."""

    name: str
    ip: list[str] = field(default_factory=list)
    login_name: str = ""
    shared_user: bool = False
    exit_node_active: bool = False
    exit_node_available: bool = False
    mullvad: bool = False
    traffic: bool = False
    tx_bytes: int = 0
    rx_bytes: int = 0
    online: bool = False
    active: bool = False
    relayed: bool = False
    address: str = ""
