"""Snapshots of tailscaled local API responses.

The daemon omits most fields when they are empty, so every attribute whose
presence matters is kept as ``None`` when absent. Fields where absence can
only mean "false" or "empty" get that default here instead.
"""

from dataclasses import dataclass, field
from typing import Any


def _str_list(value: Any) -> list[str] | None:
    """Return a list of strings, or None if the field was absent."""
    if value is None:
        return None
    return [str(item) for item in value]


def _obj(value: Any) -> dict:
    """Return a JSON object, treating null and non-objects as empty."""
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Location:
    """Geographic location of a node (set for Mullvad exit nodes)."""

    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    city_code: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(
            country=data.get("Country"),
            country_code=data.get("CountryCode"),
            city=data.get("City"),
            city_code=data.get("CityCode"),
        )


@dataclass(frozen=True)
class Node:
    """A node entry from the status response, either Self or a peer."""

    id: str = ""
    public_key: str = ""
    host_name: str | None = None
    dns_name: str | None = None
    os: str = ""
    user_id: int = 0
    tailscale_ips: list[str] = field(default_factory=list)
    allowed_ips: list[str] = field(default_factory=list)
    tags: list[str] | None = None
    relay: str = ""
    cur_addr: str = ""
    rx_bytes: int = 0
    tx_bytes: int = 0
    online: bool | None = None
    active: bool = False
    exit_node: bool = False
    exit_node_option: bool = False
    sharee_node: bool | None = None
    in_network_map: bool | None = None
    key_expiry: str | None = None
    cap_map: dict[str, Any] | None = None
    location: Location | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        location = data.get("Location")
        cap_map = data.get("CapMap")
        return cls(
            id=data.get("ID") or "",
            public_key=data.get("PublicKey") or "",
            host_name=data.get("HostName"),
            dns_name=data.get("DNSName"),
            os=data.get("OS") or "",
            user_id=int(data.get("UserID") or 0),
            tailscale_ips=_str_list(data.get("TailscaleIPs")) or [],
            allowed_ips=_str_list(data.get("AllowedIPs")) or [],
            tags=_str_list(data.get("Tags")),
            relay=data.get("Relay") or "",
            cur_addr=data.get("CurAddr") or "",
            rx_bytes=int(data.get("RxBytes") or 0),
            tx_bytes=int(data.get("TxBytes") or 0),
            online=data.get("Online"),
            active=bool(data.get("Active", False)),
            exit_node=bool(data.get("ExitNode", False)),
            exit_node_option=bool(data.get("ExitNodeOption", False)),
            sharee_node=data.get("ShareeNode"),
            in_network_map=data.get("InNetworkMap"),
            key_expiry=data.get("KeyExpiry"),
            cap_map=dict(cap_map) if isinstance(cap_map, dict) else None,
            location=Location.from_dict(location) if isinstance(location, dict) else None,
        )


@dataclass(frozen=True)
class UserProfile:
    """A user entry from the status response."""

    id: int = 0
    login_name: str = ""
    display_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            id=int(data.get("ID") or 0),
            login_name=data.get("LoginName") or "",
            display_name=data.get("DisplayName") or "",
        )


@dataclass(frozen=True)
class Tailnet:
    """The tailnet this node is logged into."""

    name: str = ""
    magic_dns_suffix: str = ""
    magic_dns_enabled: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Tailnet":
        return cls(
            name=data.get("Name") or "",
            magic_dns_suffix=data.get("MagicDNSSuffix") or "",
            magic_dns_enabled=bool(data.get("MagicDNSEnabled", False)),
        )


@dataclass(frozen=True)
class Status:
    """Response of ``/localapi/v0/status``."""

    version: str | None = None
    backend_state: str = ""
    auth_url: str = ""
    tailscale_ips: list[str] | None = None
    magic_dns_suffix: str | None = None
    health: list[str] | None = None
    current_tailnet: Tailnet | None = None
    self_node: Node = field(default_factory=Node)
    # Keyed by peer public key, in the order the daemon returned them.
    peers: dict[str, Node] = field(default_factory=dict)
    users: dict[int, UserProfile] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict | None) -> "Status":
        data = _obj(data)
        tailnet = data.get("CurrentTailnet")
        return cls(
            version=data.get("Version"),
            backend_state=data.get("BackendState") or "",
            auth_url=data.get("AuthURL") or "",
            tailscale_ips=_str_list(data.get("TailscaleIPs")),
            magic_dns_suffix=data.get("MagicDNSSuffix"),
            health=_str_list(data.get("Health")),
            current_tailnet=Tailnet.from_dict(tailnet) if isinstance(tailnet, dict) else None,
            self_node=Node.from_dict(_obj(data.get("Self"))),
            peers={key: Node.from_dict(_obj(peer)) for key, peer in _obj(data.get("Peer")).items()},
            users={
                int(user_id): UserProfile.from_dict(_obj(user))
                for user_id, user in _obj(data.get("User")).items()
            },
        )


@dataclass(frozen=True)
class Prefs:
    """Response of ``/localapi/v0/prefs``."""

    route_all: bool | None = None
    corp_dns: bool | None = None
    run_ssh: bool | None = None
    exit_node_id: str = ""
    exit_node_ip: str = ""
    exit_node_allow_lan_access: bool | None = None
    advertise_routes: list[str] | None = None
    logged_out: bool | None = None
    hostname: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "Prefs":
        data = _obj(data)
        return cls(
            route_all=data.get("RouteAll"),
            corp_dns=data.get("CorpDNS"),
            run_ssh=data.get("RunSSH"),
            exit_node_id=data.get("ExitNodeID") or "",
            exit_node_ip=data.get("ExitNodeIP") or "",
            exit_node_allow_lan_access=data.get("ExitNodeAllowLANAccess"),
            advertise_routes=_str_list(data.get("AdvertiseRoutes")),
            logged_out=data.get("LoggedOut"),
            hostname=data.get("Hostname") or "",
        )


@dataclass(frozen=True)
class TrustedKey:
    """A tailnet lock key trusted to sign nodes."""

    key: str = ""
    votes: int = 0


@dataclass(frozen=True)
class FilteredPeer:
    """A peer hidden from the netmap because it lacks a lock signature."""

    name: str = ""
    id: int = 0
    stable_id: str = ""
    node_key: str = ""
    tailscale_ips: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LockStatus:
    """Response of ``/localapi/v0/tka/status``."""

    enabled: bool = False
    node_key: str = ""
    node_key_signed: bool = False
    public_key: str = ""
    trusted_keys: list[TrustedKey] = field(default_factory=list)
    filtered_peers: list[FilteredPeer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "LockStatus":
        data = _obj(data)
        return cls(
            enabled=bool(data.get("Enabled", False)),
            node_key=data.get("NodeKey") or "",
            node_key_signed=bool(data.get("NodeKeySigned", False)),
            public_key=data.get("PublicKey") or "",
            trusted_keys=[
                TrustedKey(key=item.get("Key") or "", votes=int(item.get("Votes") or 0))
                for item in data.get("TrustedKeys") or []
            ],
            filtered_peers=[
                FilteredPeer(
                    name=item.get("Name") or "",
                    id=int(item.get("ID") or 0),
                    stable_id=item.get("StableID") or "",
                    node_key=item.get("NodeKey") or "",
                    tailscale_ips=_str_list(item.get("TailscaleIPs")) or [],
                )
                for item in data.get("FilteredPeers") or []
            ],
        )


@dataclass(frozen=True)
class ServeConfig:
    """Response of ``/localapi/v0/serve-config``."""

    # "host:port" -> enabled, in the order the daemon returned them.
    allow_funnel: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict | None) -> "ServeConfig":
        data = _obj(data)
        return cls(
            allow_funnel={str(key): bool(value) for key, value in _obj(data.get("AllowFunnel")).items()},
        )
