from __future__ import annotations

import logging
from typing import Any, TypeVar

from . import metrics
from .errors import PreferenceDecodeError, PreferenceKeyError, PreferenceTypeError
from .serializer import PydanticSerializer, Serializer
from .store.base import PreferenceEditor, PreferenceStore
from .values import PrefKind, kind_of

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _check_key(key: object) -> str:
    if not isinstance(key, str) or not key:
        raise PreferenceKeyError(f"preference keys must be non-empty strings, got {key!r}")
    return key


class Preferences:
    """Typed get/put over a single preference store.

    The kind of the value passed to :meth:`get` or :meth:`put` picks the typed
    store call. Values outside the primitive kinds are stored as JSON strings
    through ``serializer``.
    """

    def __init__(self, store: PreferenceStore, serializer: Serializer | None = None) -> None:
        self.store = store
        self.serializer = serializer or PydanticSerializer()

    @property
    def scope(self) -> str:
        return self.store.name

    def _log(self, event: str, key: str, kind: PrefKind) -> None:
        logger.debug(
            event,
            extra={"event_type": event, "scope": self.scope, "key": key, "kind": kind.value},
        )

    def get(self, key: str, default: T) -> T:
        """Return the value stored under ``key``, or ``default`` when unset.

        ``default`` also decides how the entry is read, so it must have the
        same kind the value was written with.
        """
        _check_key(key)
        kind = kind_of(default)
        metrics.reads_total.inc()
        self._log("get", key, kind)
        if not self.store.contains(key):
            metrics.misses_total.inc()
            return default

        if kind is PrefKind.BOOLEAN:
            return self.store.get_boolean(key, default)
        if kind is PrefKind.FLOAT:
            return self.store.get_float(key, default)
        if kind is PrefKind.INT:
            return self.store.get_int(key, default)
        if kind is PrefKind.LONG:
            value = self.store.get_long(key, default)
            return type(default)(value)
        if kind is PrefKind.STRING:
            return self.store.get_string(key, default)
        if kind is PrefKind.STRING_SET:
            return self.store.get_string_set(key, frozenset(default))
        if kind is PrefKind.OBJECT:
            return self._decode(key, type(default), self.store.get_string(key, None), default)
        raise AssertionError(f"unhandled preference kind {kind!r}")

    def get_object(self, key: str, target_type: type[T], default: T | None = None) -> T | None:
        """Decode the JSON string stored under ``key`` into ``target_type``."""
        _check_key(key)
        metrics.reads_total.inc()
        self._log("get_object", key, PrefKind.OBJECT)
        text = self.store.get_string(key, None)
        if text is None:
            metrics.misses_total.inc()
        return self._decode(key, target_type, text, default)

    def _decode(
        self, key: str, target_type: type[T], text: str | None, default: T | None
    ) -> T | None:
        if text is None:
            return default
        try:
            return self.serializer.from_json(text, target_type)
        except PreferenceDecodeError as exc:
            metrics.decode_errors_total.inc()
            exc.key = key
            logger.warning(
                "decode_failed",
                extra={
                    "event_type": "decode_failed",
                    "scope": self.scope,
                    "key": key,
                    "kind": PrefKind.OBJECT.value,
                    "error_category": exc.category,
                },
            )
            raise

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and commit immediately."""
        _check_key(key)
        if value is None:
            raise PreferenceTypeError(
                f"cannot store None under {key!r}; use remove()", key=key
            )
        kind = kind_of(value)
        editor = self.store.edit()
        self._write(editor, key, kind, value)
        editor.commit()
        metrics.writes_total.inc()
        self._log("put", key, kind)

    def _write(self, editor: PreferenceEditor, key: str, kind: PrefKind, value: Any) -> None:
        if kind is PrefKind.BOOLEAN:
            editor.put_boolean(key, value)
        elif kind is PrefKind.FLOAT:
            editor.put_float(key, value)
        elif kind is PrefKind.INT:
            editor.put_int(key, value)
        elif kind is PrefKind.LONG:
            editor.put_long(key, value)
        elif kind is PrefKind.STRING:
            editor.put_string(key, value)
        elif kind is PrefKind.STRING_SET:
            editor.put_string_set(key, value)
        elif kind is PrefKind.OBJECT:
            editor.put_string(key, self.serializer.to_json(value))
        else:
            raise AssertionError(f"unhandled preference kind {kind!r}")

    def remove(self, key: str) -> None:
        _check_key(key)
        self.store.edit().remove(key).commit()

    def contains(self, key: str) -> bool:
        return self.store.contains(_check_key(key))

    def clear(self) -> None:
        self.store.edit().clear().commit()

    def all(self) -> dict[str, Any]:
        return self.store.get_all()
