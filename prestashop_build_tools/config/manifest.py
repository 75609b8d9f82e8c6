"""Read-only, dot-path access to a project's ``composer.json``."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Mapping

from ..utils.errors import ManifestError

#: Key under ``extra`` holding this tool's project defaults.
EXTRA_KEY = "extra.prestashop-build-tools"


class Manifest:
    """Parsed JSON manifest scoped to a single file.

    The file is read once at construction; there is no write path.

    Args:
        path: Location of the manifest, normally ``<working-dir>/composer.json``.

    Raises:
        ManifestError: If *path* is missing, not a regular file, unreadable
            or does not contain valid JSON.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.is_file():
            raise ManifestError(f"This is not a valid composer.json file: '{self.path}'")
        self._data = self._read(self.path)

    @staticmethod
    def _read(path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ManifestError(f"Cannot read the composer.json file: '{path}' ({exc})") from exc

    @property
    def data(self) -> Any:
        """Deep copy of the parsed document."""
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at the dot-separated *key* or *default*.

        Any missing segment, or a segment reached through a non-mapping
        value, yields *default*::

            >>> m.get("extra.prestashop-build-tools.name")
            'mymodule'
        """
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node

    def __repr__(self) -> str:
        return f"Manifest({str(self.path)!r})"
