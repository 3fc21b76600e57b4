"""Key-based save/restore of build directories to a shared local cache."""

from .cache import LocalCache, restore_cache, save_cache
from .config import CacheSettings, load_settings
from .errors import (
    CacheError,
    CacheErrorKind,
    CacheOperationError,
    ReserveCacheError,
    ValidationError,
)
from .schemas import CacheEntry

__all__ = [
    "CacheEntry",
    "CacheError",
    "CacheErrorKind",
    "CacheOperationError",
    "CacheSettings",
    "LocalCache",
    "ReserveCacheError",
    "ValidationError",
    "load_settings",
    "restore_cache",
    "save_cache",
]
