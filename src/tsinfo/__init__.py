"""Tailscale status view models for the Unraid admin panel."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tsinfo")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"
