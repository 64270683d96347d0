"""Tailnet lock and funnel details."""

from rich.markup import escape

from tsinfo.commands.common import load_info
from tsinfo.utils.output import create_table, info, key_value_table, print_table, section


def lock() -> None:
    """Show tailnet lock keys and peers awaiting a signature."""
    tsinfo = load_info()
    tr = tsinfo.tr

    if not tsinfo.get_tailscale_lock_enabled():
        info(tr("lock.not_enabled"))
        return

    section(tr("lock.title"))
    print_table(
        key_value_table(
            [
                (tr("info.lock_signed"), tr("yes") if tsinfo.get_tailscale_lock_signed() else tr("no")),
                (tr("info.lock_signing"), tr("yes") if tsinfo.get_tailscale_lock_signing() else tr("no")),
                (tr("info.pub_key"), tsinfo.get_tailscale_lock_pubkey()),
                (tr("info.node_key"), tsinfo.get_tailscale_lock_nodekey()),
            ]
        )
    )

    # Only signers can act on pending peers
    if not tsinfo.get_tailscale_lock_signing():
        return

    pending = tsinfo.get_tailscale_lock_pending()
    if not pending:
        info(tr("lock.no_pending"))
        return
    table = create_table(tr("lock.pending"), [tr("peers.name"), tr("info.node_key")])
    for name, node_key in pending.items():
        table.add_row(escape(name), escape(node_key))
    print_table(table)


def funnel() -> None:
    """Show the funnel port and the ports funnel may use."""
    tsinfo = load_info()
    tr = tsinfo.tr

    section(tr("funnel.title"))
    port = tsinfo.get_funnel_port()
    allowed = tsinfo.get_allowed_funnel_ports()
    print_table(
        key_value_table(
            [
                (tr("funnel.port"), str(port) if port is not None else tr("funnel.not_enabled")),
                (tr("funnel.allowed_ports"), ", ".join(str(p) for p in allowed) or tr("none")),
            ]
        )
    )
