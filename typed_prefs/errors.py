from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    KEY = "key"
    TYPE = "type"
    VALUE = "value"
    DECODE = "decode"
    STORE = "store"


class PreferenceError(Exception):
    """Base class for every error raised by this package."""

    category: ErrorCategory = ErrorCategory.STORE

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class PreferenceKeyError(PreferenceError):
    category = ErrorCategory.KEY


class PreferenceTypeError(PreferenceError, TypeError):
    """A value's kind does not match the kind stored under its key."""

    category = ErrorCategory.TYPE


class PreferenceValueError(PreferenceError, ValueError):
    category = ErrorCategory.VALUE


class PreferenceDecodeError(PreferenceError):
    """The serializer could not turn a value into JSON or back."""

    category = ErrorCategory.DECODE


class PreferenceStoreError(PreferenceError):
    category = ErrorCategory.STORE
