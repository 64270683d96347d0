"""Status, connection and dashboard summaries."""

from dataclasses import asdict

import typer

from tsinfo.commands.common import json_option, load_info
from tsinfo.core.info import InvalidStateError
from tsinfo.utils.output import error, info, key_value_table, print_json, print_table, section, warning


def status(as_json: bool = json_option()) -> None:
    """Show node status, tailnet lock state and warnings."""
    tsinfo = load_info()
    tr = tsinfo.tr
    status_info = tsinfo.get_status_info()
    warnings = tsinfo.get_warnings()

    if as_json:
        print_json({"status": asdict(status_info), "warnings": [asdict(w) for w in warnings]})
        return

    if tsinfo.needs_login():
        info(tr("info.login_needed", url=tsinfo.get_auth_url()))

    section(tr("info.tailnet") + (f": {tsinfo.get_tailnet_name()}" if tsinfo.get_tailnet_name() else ""))
    rows = [
        (tr("info.version"), status_info.ts_version),
        (tr("info.key_expiration"), status_info.key_expiration),
        (tr("info.online"), status_info.online),
        (tr("info.in_net_map"), status_info.in_net_map),
        (tr("info.tags"), status_info.tags),
        (tr("info.logged_in"), status_info.logged_in),
        (tr("info.health"), status_info.ts_health),
        (tr("info.lock_enabled"), status_info.lock_enabled),
    ]
    if status_info.lock_info is not None:
        rows += [
            (tr("info.lock_signed"), status_info.lock_info.lock_signed),
            (tr("info.lock_signing"), status_info.lock_info.lock_signing),
            (tr("info.pub_key"), status_info.lock_info.pub_key),
            (tr("info.node_key"), status_info.lock_info.node_key),
        ]
    print_table(key_value_table(rows))

    if warnings:
        section(tr("warnings.title"))
        for item in warnings:
            warning(item)


def connection(
    as_json: bool = json_option(),
    server_addr: str = typer.Option(
        None, "--server-addr", help="Address a request was received on, to check if it came over Tailscale."
    ),
) -> None:
    """Show connection settings and advertised routes."""
    tsinfo = load_info()
    tr = tsinfo.tr
    conn = tsinfo.get_connection_info()
    routes = tsinfo.get_advertised_routes()

    if as_json:
        data = asdict(conn)
        data["routes"] = {route: tsinfo.is_approved_route(route) for route in routes}
        if server_addr is not None:
            data["connected_via_ts"] = tsinfo.connected_via_ts(server_addr)
        print_json(data)
        return

    section(tr("info.hostname") + f": {conn.host_name}")
    print_table(
        key_value_table(
            [
                (tr("info.dns_name"), conn.dns_name),
                (tr("info.ips"), conn.tailscale_ips),
                (tr("info.magic_dns"), conn.magic_dns_suffix),
                (tr("info.routes"), conn.advertised_routes),
                (tr("info.accept_routes"), conn.accept_routes),
                (tr("info.accept_dns"), conn.accept_dns),
                (tr("info.run_ssh"), conn.run_ssh),
                (tr("info.exit_node_local"), conn.exit_node_local),
                (tr("info.use_exit_node"), conn.use_exit_node),
                (tr("info.advertise_exit_node"), conn.advertise_exit_node),
            ]
        )
    )

    if routes:
        section(tr("info.routes"))
        for route in routes:
            state = tr("info.approved") if tsinfo.is_approved_route(route) else tr("info.pending")
            info(f"{route} ({state})")

    if server_addr is not None:
        if tsinfo.connected_via_ts(server_addr):
            info(tr("info.via_ts", address=server_addr))
        else:
            info(tr("info.not_via_ts", address=server_addr))


def dashboard(as_json: bool = json_option()) -> None:
    """Show the compact dashboard summary."""
    tsinfo = load_info()
    tr = tsinfo.tr
    dash = tsinfo.get_dashboard_info()

    if as_json:
        print_json(asdict(dash))
        return

    try:
        title = tsinfo.get_dns_name()
    except InvalidStateError as e:
        error(str(e))
        raise typer.Exit(1) from None

    section(title)
    print_table(
        key_value_table(
            [
                (tr("info.hostname"), dash.host_name),
                (tr("info.ips"), ", ".join(dash.tailscale_ips)),
                (tr("info.online"), dash.online),
            ]
        )
    )
