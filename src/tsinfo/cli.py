"""Main CLI application."""

import typer

from tsinfo import __version__
from tsinfo.commands import lock, peers, status
from tsinfo.utils.output import setup_logging

app = typer.Typer(
    name="tsinfo",
    help="Tailscale status summaries for the admin panel",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tsinfo {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Tailscale status summaries for the admin panel."""
    setup_logging(verbose)


app.command(name="status")(status.status)
app.command(name="connection")(status.connection)
app.command(name="dashboard")(status.dashboard)
app.command(name="peers")(peers.peers)
app.command(name="exit-nodes")(peers.exit_nodes)
app.command(name="lock")(lock.lock)
app.command(name="funnel")(lock.funnel)


if __name__ == "__main__":
    app()
