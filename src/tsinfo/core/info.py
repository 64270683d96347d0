"""Derive UI view models from tailscaled state."""

import logging
import re
from datetime import datetime, timezone
from email.utils import format_datetime

from tsinfo.core.config import PluginConfig, load_plugin_config
from tsinfo.core.localapi import LocalAPI
from tsinfo.core.models import LockStatus, Prefs, ServeConfig, Status
from tsinfo.core.translate import Translator
from tsinfo.core.views import (
    ConnectionInfo,
    DashboardInfo,
    LockInfo,
    PeerStatus,
    Priority,
    StatusInfo,
    StatusWarning,
)

logger = logging.getLogger(__name__)

EXIT_NODE_ROUTES = ("0.0.0.0/0", "::/0")
MULLVAD_TAG = "tag:mullvad-exit-node"
FUNNEL_PORTS_CAP = "https://tailscale.com/cap/funnel-ports?ports="

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InvalidStateError(RuntimeError):
    """Raised when tailscaled has not populated a required value."""

    pass


def _leading_int(text: str) -> int:
    """Parse the leading integer of ``text``, or 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, assuming UTC when no offset is given."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Info:
    """View models for one request, built from a single daemon snapshot.

    The snapshots are fetched once in the constructor and never refreshed;
    create a new instance to see newer state.
    """

    def __init__(
        self,
        tr: Translator,
        client: LocalAPI | None = None,
        config: PluginConfig | None = None,
    ) -> None:
        """Fetch status, prefs, lock and serve state from ``client``.

        Args:
            tr: Translator used for every user-facing string
            client: Daemon client. Defaults to a LocalAPI on the configured socket.
            config: Unraid SMB/NetBIOS flags. Defaults to the config files.

        Raises:
            LocalAPIError: If the daemon cannot be queried.
        """
        if config is None:
            config = load_plugin_config()
        self._tr = tr
        self.smb_enabled = config.smb_enabled
        self.use_netbios = config.use_netbios

        if client is None:
            with LocalAPI() as local_api:
                self._fetch(local_api)
        else:
            self._fetch(client)

    def _fetch(self, client) -> None:
        self.status = Status.from_dict(client.get_status())
        self.prefs = Prefs.from_dict(client.get_prefs())
        self.lock = LockStatus.from_dict(client.get_tka_status())
        self.serve = ServeConfig.from_dict(client.get_serve_config())
        logger.debug(
            "Loaded status: backend=%s peers=%d lock=%s",
            self.status.backend_state,
            len(self.status.peers),
            self.lock.enabled,
        )

    def get_status(self) -> Status:
        return self.status

    def get_prefs(self) -> Prefs:
        return self.prefs

    def get_lock(self) -> LockStatus:
        return self.lock

    def get_serve(self) -> ServeConfig:
        return self.serve

    def tr(self, key: str, **placeholders) -> str:
        return self._tr.tr(key, **placeholders)

    def _yes_no(self, value: bool | None) -> str:
        """Render a flag as yes/no, or unknown when the field was absent."""
        if value is None:
            return self.tr("unknown")
        return self.tr("yes") if value else self.tr("no")

    # --- View models ---

    def get_status_info(self) -> StatusInfo:
        """Build the status page summary."""
        status = self.status
        node = status.self_node
        lock_enabled = self.get_tailscale_lock_enabled()

        lock_info = None
        if lock_enabled:
            lock_info = LockInfo(
                lock_signed=self._yes_no(self.get_tailscale_lock_signed()),
                lock_signing=self._yes_no(self.get_tailscale_lock_signing()),
                pub_key=self.get_tailscale_lock_pubkey(),
                node_key=self.get_tailscale_lock_nodekey(),
            )

        return StatusInfo(
            ts_version=status.version if status.version is not None else self.tr("unknown"),
            key_expiration=node.key_expiry if node.key_expiry is not None else self.tr("disabled"),
            online=self._yes_no(node.online),
            in_net_map=self._yes_no(node.in_network_map),
            tags="\n".join(node.tags) if node.tags is not None else "",
            logged_in=self._yes_no(None if self.prefs.logged_out is None else not self.prefs.logged_out),
            ts_health="\n".join(status.health) if status.health is not None else "",
            lock_enabled=self._yes_no(lock_enabled),
            lock_info=lock_info,
        )

    def get_connection_info(self) -> ConnectionInfo:
        """Build the connection page summary."""
        status = self.status
        node = status.self_node
        prefs = self.prefs
        unknown = self.tr("unknown")

        if not self.advertises_exit_node():
            advertise_exit_node = self.tr("no")
        elif node.exit_node_option:
            advertise_exit_node = self.tr("yes")
        else:
            # tailscaled only sets ExitNodeOption once the route is approved
            advertise_exit_node = self.tr("info.unapproved")

        return ConnectionInfo(
            host_name=node.host_name if node.host_name is not None else unknown,
            dns_name=node.dns_name if node.dns_name is not None else unknown,
            tailscale_ips="\n".join(status.tailscale_ips) if status.tailscale_ips is not None else unknown,
            magic_dns_suffix=status.magic_dns_suffix if status.magic_dns_suffix is not None else unknown,
            advertised_routes=(
                "\n".join(prefs.advertise_routes) if prefs.advertise_routes is not None else self.tr("none")
            ),
            accept_routes=self._yes_no(prefs.route_all),
            accept_dns=self._yes_no(prefs.corp_dns),
            run_ssh=self._yes_no(prefs.run_ssh),
            exit_node_local=self._yes_no(prefs.exit_node_allow_lan_access),
            use_exit_node=self._yes_no(self.uses_exit_node()),
            advertise_exit_node=advertise_exit_node,
        )

    def get_dashboard_info(self) -> DashboardInfo:
        """Build the dashboard widget summary."""
        node = self.status.self_node
        unknown = self.tr("unknown")
        return DashboardInfo(
            host_name=node.host_name if node.host_name is not None else unknown,
            dns_name=node.dns_name if node.dns_name is not None else unknown,
            tailscale_ips=list(self.status.tailscale_ips or []),
            online=self._yes_no(node.online),
        )

    def get_peer_status(self) -> list[PeerStatus]:
        """Build one row per peer, in the order tailscaled reported them.

        Every peer's UserID must exist in the status user table.
        """
        result = []
        for peer in self.status.peers.values():
            exit_node_active = peer.exit_node
            exit_node_available = not peer.exit_node and peer.exit_node_option

            traffic = peer.tx_bytes > 0 or peer.rx_bytes > 0

            online = bool(peer.online)
            active = online and peer.active
            relayed = False
            address = ""
            if active:
                if peer.relay and not peer.cur_addr:
                    relayed = True
                    address = peer.relay
                elif peer.cur_addr:
                    address = peer.cur_addr

            result.append(
                PeerStatus(
                    name=(peer.dns_name or "").strip("."),
                    ip=list(peer.tailscale_ips),
                    login_name=self.status.users[peer.user_id].login_name,
                    shared_user=peer.sharee_node is not None,
                    exit_node_active=exit_node_active,
                    exit_node_available=exit_node_available,
                    mullvad=MULLVAD_TAG in (peer.tags or []),
                    traffic=traffic,
                    tx_bytes=peer.tx_bytes if traffic else 0,
                    rx_bytes=peer.rx_bytes if traffic else 0,
                    online=online,
                    active=active,
                    relayed=relayed,
                    address=address,
                )
            )
        return result

    # --- Warnings ---

    def get_key_expiration_warning(self, now: datetime | None = None) -> StatusWarning | None:
        """Warn about node key expiry, more urgently as it approaches.

        Returns None when key expiry is disabled.
        """
        key_expiry = self.status.self_node.key_expiry
        if key_expiry is None:
            return None

        try:
            expiry = _parse_timestamp(key_expiry).astimezone()
        except ValueError:
            logger.warning("Unparseable KeyExpiry %r", key_expiry)
            return None

        now = (now or datetime.now()).astimezone()
        days = abs(expiry - now).days
        expiry_print = format_datetime(expiry.astimezone(timezone.utc), usegmt=True)
        message = self.tr("warnings.key_expiration", days=days, expiry=expiry_print)

        if days <= 7:
            priority = Priority.ERROR
        elif days <= 30:
            priority = Priority.WARN
        else:
            priority = Priority.SYSTEM
        return StatusWarning(message, priority)

    def get_tailscale_lock_warning(self) -> StatusWarning | None:
        """Warn when this node joined a locked tailnet without a signature."""
        if self.get_tailscale_lock_enabled() and not self.get_tailscale_lock_signed():
            return StatusWarning(self.tr("warnings.lock"), Priority.ERROR)
        return None

    def get_tailscale_netbios_warning(self) -> StatusWarning | None:
        """Warn when NetBIOS is on and SMB is not explicitly disabled."""
        if self.use_netbios == "yes" and self.smb_enabled != "no":
            return StatusWarning(self.tr("warnings.netbios"), Priority.WARN)
        return None

    def get_warnings(self) -> list[StatusWarning]:
        """Collect every active warning."""
        warnings = [
            self.get_key_expiration_warning(),
            self.get_tailscale_lock_warning(),
            self.get_tailscale_netbios_warning(),
        ]
        return [w for w in warnings if w is not None]

    # --- Tailnet lock ---

    def get_tailscale_lock_enabled(self) -> bool:
        return self.lock.enabled

    def get_tailscale_lock_signed(self) -> bool:
        if not self.get_tailscale_lock_enabled():
            return False
        return self.lock.node_key_signed

    def get_tailscale_lock_nodekey(self) -> str:
        if not self.get_tailscale_lock_enabled():
            return ""
        return self.lock.node_key

    def get_tailscale_lock_pubkey(self) -> str:
        if not self.get_tailscale_lock_enabled():
            return ""
        return self.lock.public_key

    def get_tailscale_lock_signing(self) -> bool:
        """Check whether this node's lock key is a trusted signer."""
        if not self.get_tailscale_lock_signed():
            return False
        my_key = self.get_tailscale_lock_pubkey()
        return any(item.key == my_key for item in self.lock.trusted_keys)

    def get_tailscale_lock_pending(self) -> dict[str, str]:
        """Map peer name to node key for peers awaiting a signature.

        Only populated when this node can sign. Peers sharing a name keep
        the last node key reported.
        """
        if not self.get_tailscale_lock_signing():
            return {}
        return {item.name: item.node_key for item in self.lock.filtered_peers}

    # --- Preferences and status projections ---

    def advertises_exit_node(self) -> bool:
        return any(route in EXIT_NODE_ROUTES for route in self.prefs.advertise_routes or [])

    def uses_exit_node(self) -> bool:
        return bool(self.prefs.exit_node_id or self.prefs.exit_node_ip)

    def exit_node_local_access(self) -> bool:
        return bool(self.prefs.exit_node_allow_lan_access)

    def accepts_dns(self) -> bool:
        return bool(self.prefs.corp_dns)

    def accepts_routes(self) -> bool:
        return bool(self.prefs.route_all)

    def runs_ssh(self) -> bool:
        return bool(self.prefs.run_ssh)

    def is_online(self) -> bool:
        return bool(self.status.self_node.online)

    def get_auth_url(self) -> str:
        return self.status.auth_url

    def needs_login(self) -> bool:
        return self.status.backend_state == "NeedsLogin"

    def get_tailnet_name(self) -> str:
        if self.status.current_tailnet is None:
            return ""
        return self.status.current_tailnet.name

    def get_advertised_routes(self) -> list[str]:
        """Get advertised subnet routes, excluding the exit node routes."""
        return [route for route in self.prefs.advertise_routes or [] if route not in EXIT_NODE_ROUTES]

    def is_approved_route(self, route: str) -> bool:
        return route in self.status.self_node.allowed_ips

    def get_exit_nodes(self) -> dict[str, str]:
        """Map peer ID to a display label for every peer offering to be an exit node."""
        exit_nodes = {}
        for peer in self.status.peers.values():
            if not peer.exit_node_option:
                continue
            label = peer.dns_name or ""
            if peer.location is not None and peer.location.city is not None:
                label += f" ({peer.location.city})"
            exit_nodes[peer.id] = label
        return exit_nodes

    def get_current_exit_node(self) -> str:
        for peer in self.status.peers.values():
            if peer.exit_node:
                return peer.id
        return ""

    def connected_via_ts(self, server_addr: str) -> bool:
        """Check whether a request reached us on one of our Tailscale IPs."""
        return server_addr in (self.status.tailscale_ips or [])

    def get_allowed_funnel_ports(self) -> list[int]:
        """Get the ports the funnel-ports capability allows.

        Entries that are not numbers parse as 0.
        """
        for cap in self.status.self_node.cap_map or {}:
            if cap.startswith(FUNNEL_PORTS_CAP):
                return [_leading_int(port) for port in cap[len(FUNNEL_PORTS_CAP) :].split(",")]
        return []

    def get_funnel_port(self) -> int | None:
        """Get the port of the first funnel binding, or None if funnel is off.

        With several bindings, the first one reported by tailscaled wins.
        """
        if not self.serve.allow_funnel:
            return None
        funnel_key = next(iter(self.serve.allow_funnel))
        parts = funnel_key.split(":")
        if len(parts) == 2 and parts[1].isdigit():
            return int(parts[1])
        return None

    def get_dns_name(self) -> str:
        """Get this node's MagicDNS name.

        Raises:
            InvalidStateError: If tailscaled has not reported a DNS name yet.
        """
        dns_name = self.status.self_node.dns_name
        if dns_name is None:
            raise InvalidStateError("DNSName not set in Tailscale status.")
        return dns_name
