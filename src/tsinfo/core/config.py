"""Configuration paths and settings management."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SOCKET = "/var/run/tailscale/tailscaled.sock"
DEFAULT_SHARE_CFG = "/boot/config/share.cfg"
DEFAULT_IDENT_CFG = "/boot/config/ident.cfg"
DEFAULT_LANGUAGE = "en"


def get_socket_path() -> Path:
    """Get the tailscaled local API socket path."""
    return Path(os.environ.get("TSINFO_SOCKET", DEFAULT_SOCKET))


def get_share_cfg_path() -> Path:
    """Get the Unraid share settings file."""
    return Path(os.environ.get("TSINFO_SHARE_CFG", DEFAULT_SHARE_CFG))


def get_ident_cfg_path() -> Path:
    """Get the Unraid identification settings file."""
    return Path(os.environ.get("TSINFO_IDENT_CFG", DEFAULT_IDENT_CFG))


def get_language() -> str:
    """Get the UI language code."""
    return os.environ.get("TSINFO_LANG", "").strip() or DEFAULT_LANGUAGE


def get_locale_dir() -> Path:
    """Get the directory holding translation catalogues."""
    override = os.environ.get("TSINFO_LOCALE_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "locales"


def parse_cfg(path: Path) -> dict[str, str]:
    """Parse an Unraid ``KEY="value"`` settings file.

    Args:
        path: File to read

    Returns:
        Dict of settings. Empty if the file is missing or unreadable.
    """
    if not path.exists():
        logger.debug("Config file %s not found", path)
        return {}

    try:
        content = path.read_text()
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
        return {}

    result = {}
    for line in content.splitlines():
        line = line.strip()
        # Skip blanks, comments and section headers
        if not line or line.startswith(("#", ";", "[")):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        result[key.strip()] = value
    return result


@dataclass(frozen=True)
class PluginConfig:
    """Unraid settings that affect Tailscale warnings."""

    smb_enabled: str = ""
    use_netbios: str = ""


def load_plugin_config() -> PluginConfig:
    """Load SMB and NetBIOS flags from the Unraid config files."""
    share = parse_cfg(get_share_cfg_path())
    ident = parse_cfg(get_ident_cfg_path())
    return PluginConfig(
        smb_enabled=share.get("shareSMBEnabled", ""),
        use_netbios=ident.get("USE_NETBIOS", ""),
    )
