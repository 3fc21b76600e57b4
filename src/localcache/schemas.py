from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

ARCHIVE_SUFFIX = ".tar.lz4"


class DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CacheEntry(DTOBase):
    name: str
    path: Path
    size: int = Field(ge=0)
    mtime_ns: int = Field(ge=0)

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000, tz=timezone.utc)

    @classmethod
    def from_path(cls, path: Path) -> CacheEntry:
        stat = os.stat(path)
        return cls(name=path.name, path=path, size=stat.st_size, mtime_ns=stat.st_mtime_ns)


def archive_name(sanitized_key: str) -> str:
    return f"{sanitized_key}{ARCHIVE_SUFFIX}"
