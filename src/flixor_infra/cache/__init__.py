"""Two-tier TTL cache: bounded memory tier over a persistent disk tier."""

from flixor_infra.cache.disk_tier import DiskTier, hash_key
from flixor_infra.cache.manager import CacheManager
from flixor_infra.cache.memory_tier import MemoryTier
from flixor_infra.cache.patterns import compile_glob
from flixor_infra.cache.serializer import PydanticJSONSerializer
from flixor_infra.cache.sweeper import PeriodicSweeper

__all__ = [
    "CacheManager",
    "DiskTier",
    "MemoryTier",
    "PeriodicSweeper",
    "PydanticJSONSerializer",
    "compile_glob",
    "hash_key",
]
