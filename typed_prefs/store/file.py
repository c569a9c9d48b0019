"""JSON-file preference store.

Each scope lives in ``<directory>/<name>.json``::

    {
      "flag": {"kind": "boolean", "value": true},
      "tags": {"kind": "string_set", "value": ["a", "b"]}
    }

A missing file is an empty scope. Writes go to a temporary file in the same
directory which then replaces the scope file, so readers never see a partial
document.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import PreferenceStoreError
from ..values import PrefKind, coerce
from .base import Entry, MappingStore

logger = logging.getLogger(__name__)

_SCOPE_NAME_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


def _encode(entry: Entry) -> dict[str, Any]:
    value = entry.value
    if entry.kind is PrefKind.STRING_SET:
        value = sorted(value)
    return {"kind": entry.kind.value, "value": value}


def _decode(key: str, raw: Any) -> Entry:
    if not isinstance(raw, dict) or "kind" not in raw or "value" not in raw:
        raise ValueError(f"malformed entry for {key!r}")
    kind = PrefKind(raw["kind"])
    if not kind.is_primitive:
        raise ValueError(f"entry for {key!r} has non-primitive kind {kind.value!r}")
    return Entry(kind, coerce(kind, raw["value"]))


class FileStore(MappingStore):
    def __init__(self, name: str, directory: Path | str) -> None:
        if not _SCOPE_NAME_RE.fullmatch(name):
            raise PreferenceStoreError(f"invalid scope name {name!r}")
        self.path = Path(directory) / f"{name}.json"
        super().__init__(name, self._load())

    def _load(self) -> dict[str, Entry]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
            if not isinstance(document, dict):
                raise ValueError("top level is not an object")
            return {key: _decode(key, raw) for key, raw in document.items()}
        except (OSError, ValueError, TypeError) as exc:
            # json.JSONDecodeError and the value-range errors are ValueErrors.
            raise PreferenceStoreError(f"cannot load preferences from {self.path}: {exc}") from exc

    def reload(self) -> None:
        """Re-read the scope file, dropping the in-memory view."""
        entries = self._load()
        with self._lock:
            self._entries = entries

    def _persist(self, entries: Mapping[str, Entry]) -> None:
        document = {key: _encode(entry) for key, entry in entries.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.stem}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2, sort_keys=True)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error(
                "persist_failed",
                extra={"event_type": "persist_failed", "scope": self.name},
            )
            raise PreferenceStoreError(f"cannot write preferences to {self.path}: {exc}") from exc
