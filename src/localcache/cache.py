from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from localcache.config import CacheSettings
from localcache.keys import sanitize_key, validate_key, validate_paths
from localcache.schemas import CacheEntry, archive_name
from localcache.storage import CacheLocator, CacheMatch
from localcache.transport import ArchiveTransport

logger = logging.getLogger(__name__)


class LocalCache:
    """Key-based save/restore of a single path to a shared cache directory."""

    def __init__(
        self,
        settings: CacheSettings,
        *,
        transport: ArchiveTransport | None = None,
    ) -> None:
        self.settings = settings
        self.locator = CacheLocator(settings.directory)
        self.transport = transport or ArchiveTransport()

    @property
    def directory(self) -> Path:
        return self.settings.directory

    def resolve(
        self,
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
    ) -> CacheMatch | None:
        validate_key(primary_key)
        return self.locator.resolve(primary_key, restore_keys)

    def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
    ) -> str | None:
        """Restore the first path from the best matching entry.

        Returns the matched key, which equals ``primary_key`` on an exact hit,
        or ``None`` when nothing matched.
        """
        validate_key(primary_key)
        validate_paths(paths)
        path = paths[0]

        match = self.locator.resolve(primary_key, restore_keys)
        if match is None:
            return None

        entry = match.entry
        logger.info(
            "Restoring cache: %s Created: %s Size: %s",
            entry.name,
            entry.modified_at.isoformat(),
            format_bytes(entry.size),
        )
        self.transport.unpack(entry.path, path)
        return match.key

    def save(self, paths: Sequence[str], key: str) -> CacheEntry:
        """Archive the first path under ``key``. Additional paths are ignored."""
        validate_paths(paths)
        validate_key(key)
        if len(paths) > 1:
            logger.warning(
                "only the first path is cached path=%s ignored=%d", paths[0], len(paths) - 1
            )
        path = paths[0]

        directory = self.settings.directory
        directory.mkdir(parents=True, exist_ok=True)

        name = archive_name(sanitize_key(key))
        archive_path = directory / name
        logger.info("Save cache: %s", name)
        self.transport.pack(path, archive_path)
        return CacheEntry.from_path(archive_path)


def restore_cache(
    paths: Sequence[str],
    primary_key: str,
    restore_keys: Sequence[str] | None = None,
    *,
    settings: CacheSettings | None = None,
) -> str | None:
    return LocalCache(settings or CacheSettings.from_env()).restore(
        paths, primary_key, restore_keys
    )


def save_cache(
    paths: Sequence[str],
    key: str,
    *,
    settings: CacheSettings | None = None,
) -> CacheEntry:
    return LocalCache(settings or CacheSettings.from_env()).save(paths, key)


def format_bytes(size: int) -> str:
    if size < 1000:
        return f"{size} B"

    value = float(size)
    for unit in ("kB", "MB", "GB"):
        value /= 1000
        if value < 1000:
            return f"{value:.1f} {unit}"
    return f"{value / 1000:.1f} TB"
