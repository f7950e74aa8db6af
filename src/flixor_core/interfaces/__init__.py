"""Public interface re-exports for flixor_core."""

from flixor_core.interfaces.cache import CacheClient
from flixor_core.interfaces.serializer import Serializer

__all__ = [
    "CacheClient",
    "Serializer",
]
