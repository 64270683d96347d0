"""Helpers shared by CLI commands."""

import typer

from tsinfo.core.info import Info
from tsinfo.core.localapi import LocalAPIError
from tsinfo.core.translate import Translator
from tsinfo.utils.output import error


def load_info() -> Info:
    """Query tailscaled once, exiting with an error if it is unreachable."""
    try:
        return Info(Translator.load())
    except LocalAPIError as e:
        error(str(e))
        raise typer.Exit(1) from None


def json_option():
    return typer.Option(False, "--json", help="Print JSON instead of tables.")
