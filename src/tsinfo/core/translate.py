"""Translation catalogue lookup."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from tsinfo.core.config import DEFAULT_LANGUAGE, get_language, get_locale_dir

logger = logging.getLogger(__name__)


class Translator:
    """Resolve dotted message keys against a nested catalogue."""

    def __init__(self, messages: Mapping[str, Any] | None = None) -> None:
        self.messages: Mapping[str, Any] = messages or {}

    @classmethod
    def load(cls, language: str | None = None, locale_dir: Path | None = None) -> "Translator":
        """Load ``<locale_dir>/<language>.yaml``, falling back to English.

        A missing or malformed catalogue gives a translator that echoes keys.
        """
        language = language or get_language()
        locale_dir = locale_dir or get_locale_dir()

        for lang in dict.fromkeys([language, DEFAULT_LANGUAGE]):
            path = locale_dir / f"{lang}.yaml"
            if not path.exists():
                logger.debug("No catalogue for '%s' at %s", lang, path)
                continue
            try:
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Could not load catalogue %s: %s", path, e)
                continue
            if not isinstance(data, dict):
                logger.warning("Catalogue %s is not a mapping", path)
                continue
            return cls(data)

        return cls()

    def _lookup(self, key: str) -> str | None:
        value = self.messages.get(key)
        if isinstance(value, str):
            return value

        node: Any = self.messages
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def tr(self, key: str, **placeholders: Any) -> str:
        """Return the message for ``key`` with ``placeholders`` applied.

        Unknown keys are returned as-is.
        """
        template = self._lookup(key)
        if template is None:
            return key
        if not placeholders:
            return template
        try:
            return template.format(**placeholders)
        except (KeyError, IndexError, ValueError):
            return template

    __call__ = tr
