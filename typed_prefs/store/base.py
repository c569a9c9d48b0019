"""Preference store contract and the dict-backed base shared by the backends.

A store is a flat map of string keys to typed entries. Reads go straight to
the store; writes are staged on an :class:`Editor` and applied together by
``commit()``. Within one commit, a pending ``clear()`` runs first, then
removals, then puts.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from .. import metrics
from ..errors import PreferenceTypeError
from ..values import PrefKind, coerce

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Entry:
    kind: PrefKind
    value: Any


class PreferenceEditor(Protocol):
    def put_boolean(self, key: str, value: bool) -> PreferenceEditor: ...
    def put_float(self, key: str, value: float) -> PreferenceEditor: ...
    def put_int(self, key: str, value: int) -> PreferenceEditor: ...
    def put_long(self, key: str, value: int) -> PreferenceEditor: ...
    def put_string(self, key: str, value: str) -> PreferenceEditor: ...
    def put_string_set(self, key: str, value: frozenset[str]) -> PreferenceEditor: ...
    def remove(self, key: str) -> PreferenceEditor: ...
    def clear(self) -> PreferenceEditor: ...
    def commit(self) -> None: ...


class PreferenceStore(Protocol):
    """Typed key-value persistence for one scope."""

    name: str

    def get_boolean(self, key: str, default: bool) -> bool: ...
    def get_float(self, key: str, default: float) -> float: ...
    def get_int(self, key: str, default: int) -> int: ...
    def get_long(self, key: str, default: int) -> int: ...
    def get_string(self, key: str, default: str | None) -> str | None: ...
    def get_string_set(
        self, key: str, default: frozenset[str] | None
    ) -> frozenset[str] | None: ...
    def contains(self, key: str) -> bool: ...
    def get_all(self) -> dict[str, Any]: ...
    def edit(self) -> PreferenceEditor: ...


class Editor:
    """Staged writes against a :class:`MappingStore`."""

    def __init__(self, store: MappingStore) -> None:
        self._store = store
        self._puts: dict[str, Entry] = {}
        self._removals: set[str] = set()
        self._clear = False

    def _put(self, key: str, kind: PrefKind, value: Any) -> Editor:
        self._puts[key] = Entry(kind, coerce(kind, value))
        self._removals.discard(key)
        return self

    def put_boolean(self, key: str, value: bool) -> Editor:
        return self._put(key, PrefKind.BOOLEAN, value)

    def put_float(self, key: str, value: float) -> Editor:
        return self._put(key, PrefKind.FLOAT, value)

    def put_int(self, key: str, value: int) -> Editor:
        return self._put(key, PrefKind.INT, value)

    def put_long(self, key: str, value: int) -> Editor:
        return self._put(key, PrefKind.LONG, value)

    def put_string(self, key: str, value: str) -> Editor:
        return self._put(key, PrefKind.STRING, value)

    def put_string_set(self, key: str, value: frozenset[str]) -> Editor:
        return self._put(key, PrefKind.STRING_SET, value)

    def remove(self, key: str) -> Editor:
        self._puts.pop(key, None)
        self._removals.add(key)
        return self

    def clear(self) -> Editor:
        self._clear = True
        return self

    def commit(self) -> None:
        self._store._apply(self._clear, self._removals, self._puts)
        self._puts = {}
        self._removals = set()
        self._clear = False


class MappingStore:
    """Dict-backed store. Subclasses decide how entries are persisted."""

    def __init__(self, name: str, entries: Mapping[str, Entry] | None = None) -> None:
        self.name = name
        self._entries: dict[str, Entry] = dict(entries or {})
        self._lock = threading.Lock()

    def _read(self, key: str, kind: PrefKind, default: Any) -> Any:
        entry = self._entries.get(key, _MISSING)
        if entry is _MISSING:
            return default
        if entry.kind is not kind:
            raise PreferenceTypeError(
                f"{key!r} in scope {self.name!r} holds a {entry.kind.value}, "
                f"not a {kind.value}",
                key=key,
            )
        return entry.value

    def get_boolean(self, key: str, default: bool) -> bool:
        return self._read(key, PrefKind.BOOLEAN, default)

    def get_float(self, key: str, default: float) -> float:
        return self._read(key, PrefKind.FLOAT, default)

    def get_int(self, key: str, default: int) -> int:
        return self._read(key, PrefKind.INT, default)

    def get_long(self, key: str, default: int) -> int:
        return self._read(key, PrefKind.LONG, default)

    def get_string(self, key: str, default: str | None) -> str | None:
        return self._read(key, PrefKind.STRING, default)

    def get_string_set(
        self, key: str, default: frozenset[str] | None
    ) -> frozenset[str] | None:
        return self._read(key, PrefKind.STRING_SET, default)

    def contains(self, key: str) -> bool:
        return key in self._entries

    def get_all(self) -> dict[str, Any]:
        return {key: entry.value for key, entry in self._entries.items()}

    def entries(self) -> dict[str, Entry]:
        return dict(self._entries)

    def edit(self) -> Editor:
        return Editor(self)

    def _apply(
        self, clear: bool, removals: set[str], puts: Mapping[str, Entry]
    ) -> None:
        with self._lock, metrics.commit_ms.time():
            entries = {} if clear else dict(self._entries)
            for key in removals:
                entries.pop(key, None)
            entries.update(puts)
            self._persist(entries)
            self._entries = entries
        logger.debug(
            "commit",
            extra={
                "event_type": "commit",
                "scope": self.name,
                "puts": len(puts),
                "removals": len(removals),
                "cleared": clear,
            },
        )

    def _persist(self, entries: Mapping[str, Entry]) -> None:
        """Write ``entries`` to the backing medium; called under the lock."""
