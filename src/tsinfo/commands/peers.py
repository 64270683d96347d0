"""Peer and exit node listings."""

from dataclasses import asdict

from rich.markup import escape

from tsinfo.commands.common import json_option, load_info
from tsinfo.core.views import PeerStatus
from tsinfo.utils.output import create_table, info, print_json, print_table


def _connectivity(peer: PeerStatus, tr) -> str:
    """Describe the peer's connection state with colour."""
    if not peer.online:
        return f"[red]{escape(tr('peers.offline'))}[/red]"
    if not peer.active:
        return f"[yellow]{escape(tr('peers.idle'))}[/yellow]"
    if peer.relayed:
        return f"[green]{escape(tr('peers.relay', address=peer.address))}[/green]"
    if peer.address:
        return f"[green]{escape(tr('peers.direct', address=peer.address))}[/green]"
    return f"[green]{escape(tr('peers.active'))}[/green]"


def _exit_role(peer: PeerStatus, tr) -> str:
    labels = []
    if peer.exit_node_active:
        labels.append(tr("peers.in_use"))
    elif peer.exit_node_available:
        labels.append(tr("peers.available"))
    if peer.mullvad:
        labels.append(tr("peers.mullvad"))
    return escape(", ".join(labels))


def peers(as_json: bool = json_option()) -> None:
    """List peers with connectivity, exit node role and traffic."""
    tsinfo = load_info()
    tr = tsinfo.tr
    peer_list = tsinfo.get_peer_status()

    if as_json:
        print_json([asdict(peer) for peer in peer_list])
        return

    table = create_table(
        tr("peers.title"),
        [tr("peers.name"), tr("peers.ip"), tr("peers.login"), tr("peers.status"), tr("peers.exit"), tr("peers.traffic")],
    )
    for peer in peer_list:
        login = peer.login_name
        if peer.shared_user:
            login += f" ({tr('peers.shared')})"
        traffic = f"{peer.tx_bytes}/{peer.rx_bytes}" if peer.traffic else ""
        table.add_row(
            escape(peer.name),
            escape("\n".join(peer.ip)),
            escape(login),
            _connectivity(peer, tr),
            _exit_role(peer, tr),
            traffic,
        )
    print_table(table)


def exit_nodes() -> None:
    """List peers that offer to act as an exit node."""
    tsinfo = load_info()
    tr = tsinfo.tr
    nodes = tsinfo.get_exit_nodes()

    if not nodes:
        info(tr("exit_nodes.none"))
        return

    current = tsinfo.get_current_exit_node()
    table = create_table(tr("exit_nodes.title"), ["ID", tr("peers.name"), ""])
    for node_id, label in nodes.items():
        marker = f"[green]{escape(tr('exit_nodes.current'))}[/green]" if node_id == current else ""
        table.add_row(escape(node_id), escape(label), marker)
    print_table(table)
