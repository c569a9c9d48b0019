from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError

from .errors import PreferenceDecodeError

T = TypeVar("T")


class Serializer(Protocol):
    def to_json(self, value: Any) -> str:  # noqa: D401
        """Marshal ``value`` to JSON text."""

    def from_json(self, text: str, target_type: type[T]) -> T:  # noqa: D401
        """Unmarshal JSON ``text`` into an instance of ``target_type``."""


@lru_cache(maxsize=128)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", repr(target_type))


class PydanticSerializer:
    """JSON serializer for arbitrary objects built on pydantic ``TypeAdapter``.

    Handles pydantic models, dataclasses, ``TypedDict``s and plain containers.
    The adapter for each target type is built once and reused.
    """

    def to_json(self, value: Any) -> str:
        try:
            return _adapter(type(value)).dump_json(value).decode("utf-8")
        except (PydanticSchemaGenerationError, PydanticSerializationError) as exc:
            raise PreferenceDecodeError(
                f"cannot serialize {_type_name(type(value))} to JSON: {exc}"
            ) from exc

    def from_json(self, text: str, target_type: type[T]) -> T:
        try:
            return _adapter(target_type).validate_json(text)
        except (PydanticSchemaGenerationError, ValidationError) as exc:
            raise PreferenceDecodeError(
                f"cannot parse JSON as {_type_name(target_type)}: {exc}"
            ) from exc
