from __future__ import annotations

from enum import StrEnum


class CacheErrorKind(StrEnum):
    VALIDATION = "validation"
    OPERATIONAL = "operational"
    RESERVE = "reserve"


class CacheError(Exception):
    """Base error for cache operations, tagged with a kind."""

    kind: CacheErrorKind = CacheErrorKind.OPERATIONAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CacheError, ValueError):
    kind = CacheErrorKind.VALIDATION


class ReserveCacheError(CacheError):
    kind = CacheErrorKind.RESERVE


class CacheOperationError(CacheError):
    kind = CacheErrorKind.OPERATIONAL

    def __init__(self, message: str, *, command: str, returncode: int) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
