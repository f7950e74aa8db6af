"""pydantic-backed implementation of Serializer."""

from __future__ import annotations

import functools
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from flixor_core.exceptions import CacheDecodeError, CacheEncodeError

T = TypeVar("T")


@functools.lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    """Build (once per type) the TypeAdapter used to decode payloads."""
    return TypeAdapter(type_)


class PydanticJSONSerializer:
    """Encodes values as JSON via pydantic, decoding against a caller-given type.

    Models are written by alias so API models with camelCase aliases
    validate back without extra configuration.
    """

    def encode(self, value: Any) -> bytes:
        """Serialize a value to JSON bytes."""
        try:
            return _adapter(type(value)).dump_json(value, by_alias=True)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            msg = f"Cannot encode {type(value).__name__} for caching: {e}"
            raise CacheEncodeError(msg) from e

    def decode(self, data: bytes, type_: type[T]) -> T:
        """Deserialize JSON bytes as ``type_``."""
        try:
            adapter = _adapter(type_)
        except TypeError as e:
            msg = f"Cannot build a decoder for {type_!r}: {e}"
            raise CacheDecodeError(msg) from e
        try:
            result: T = adapter.validate_json(data)
        except ValidationError as e:
            msg = f"Cached payload does not decode as {type_!r}"
            raise CacheDecodeError(msg) from e
        return result
