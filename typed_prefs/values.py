"""Value kinds understood by preference stores.

A stored entry always carries one of the :class:`PrefKind` members. The six
primitive kinds map onto Python types as follows::

    bool                    -> BOOLEAN
    float                   -> FLOAT
    int                     -> INT      (32-bit signed)
    Long                    -> LONG     (64-bit signed)
    str                     -> STRING
    set / frozenset of str  -> STRING_SET

Everything else is an ``OBJECT`` and travels through the JSON serializer as a
``STRING`` entry.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import PreferenceTypeError, PreferenceValueError

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1


class PrefKind(str, Enum):
    BOOLEAN = "boolean"
    FLOAT = "float"
    INT = "int"
    LONG = "long"
    STRING = "string"
    STRING_SET = "string_set"
    OBJECT = "object"

    @property
    def is_primitive(self) -> bool:
        return self is not PrefKind.OBJECT


class Long(int):
    """Marks an integer as a 64-bit long preference.

    ``prefs.put("launches", Long(3))`` stores a long entry and
    ``prefs.get("launches", Long(0))`` reads it back.
    """

    def __repr__(self) -> str:
        return f"Long({int(self)})"


def kind_of(value: Any) -> PrefKind:
    """Classify ``value`` into the kind used to store or read it."""
    if value is None:
        raise PreferenceTypeError("None has no preference kind")
    # bool and Long are int subclasses, so order matters here.
    if isinstance(value, bool):
        return PrefKind.BOOLEAN
    if isinstance(value, Long):
        return PrefKind.LONG
    if isinstance(value, int):
        return PrefKind.INT
    if isinstance(value, float):
        return PrefKind.FLOAT
    if isinstance(value, str):
        return PrefKind.STRING
    if isinstance(value, (set, frozenset)):
        return PrefKind.STRING_SET
    return PrefKind.OBJECT


def check_int(value: Any, kind: PrefKind) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreferenceTypeError(f"{value!r} is not a {kind.value}")
    low, high = (INT_MIN, INT_MAX) if kind is PrefKind.INT else (LONG_MIN, LONG_MAX)
    if not low <= value <= high:
        raise PreferenceValueError(f"{value} does not fit in a {kind.value} preference")
    return int(value)


def check_string_set(values: Any) -> frozenset[str]:
    if not isinstance(values, (set, frozenset, list)):
        raise PreferenceTypeError(f"{values!r} is not a string set")
    members = frozenset(values)
    bad = [m for m in members if not isinstance(m, str)]
    if bad:
        raise PreferenceTypeError(f"string set contains non-string members: {bad!r}")
    return members


def coerce(kind: PrefKind, value: Any) -> Any:
    """Check ``value`` against ``kind`` and return its canonical stored form.

    Nothing is converted across types: a string is never read as a boolean
    and a float is never truncated to an int.
    """
    if kind is PrefKind.BOOLEAN:
        if not isinstance(value, bool):
            raise PreferenceTypeError(f"{value!r} is not a boolean")
        return value
    if kind is PrefKind.FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PreferenceTypeError(f"{value!r} is not a float")
        return float(value)
    if kind is PrefKind.INT or kind is PrefKind.LONG:
        return check_int(value, kind)
    if kind is PrefKind.STRING:
        if not isinstance(value, str):
            raise PreferenceTypeError(f"{value!r} is not a string")
        return value
    if kind is PrefKind.STRING_SET:
        return check_string_set(value)
    raise PreferenceTypeError(f"{kind.value} values are not stored directly")
