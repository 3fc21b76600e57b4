from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from localcache.keys import sanitize_key
from localcache.schemas import CacheEntry

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CacheMatch:
    key: str
    entry: CacheEntry
    exact: bool


class CacheLocator:
    """Resolve the best archive in a cache directory for a key and its fallbacks.

    Candidates are tried in order and the first one with any matching file wins.
    Within that candidate, the file with the newest modification time is chosen;
    on equal times the later file in name order wins.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def scan(self, prefixes: Sequence[str]) -> list[CacheEntry]:
        if not prefixes or not self.directory.is_dir():
            return []

        entries: list[CacheEntry] = []
        for path in sorted(self.directory.iterdir(), key=lambda item: item.name):
            if path.name.startswith(".") or not path.is_file():
                continue
            if not any(path.name.startswith(prefix) for prefix in prefixes):
                continue
            try:
                entries.append(CacheEntry.from_path(path))
            except FileNotFoundError:
                logger.info("local_cache skip entry=%s reason=removed_during_scan", path.name)
        return entries

    def resolve(
        self,
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
    ) -> CacheMatch | None:
        matchers = _build_matchers(primary_key, restore_keys)
        entries = self.scan([matcher for _, matcher in matchers])

        for index, (key, matcher) in enumerate(matchers):
            potential = [entry for entry in entries if entry.name.startswith(matcher)]
            if not potential:
                continue

            latest = _latest_entry(potential)
            logger.info(
                "local_cache hit key=%s entry=%s candidates=%d exact=%s",
                key,
                latest.name,
                len(potential),
                index == 0,
            )
            return CacheMatch(key=key, entry=latest, exact=index == 0)

        logger.info(
            "local_cache miss key=%s restore_keys=%d dir=%s",
            primary_key,
            len(matchers) - 1,
            self.directory,
        )
        return None


def _build_matchers(
    primary_key: str,
    restore_keys: Sequence[str] | None,
) -> list[tuple[str, str]]:
    matchers = [(primary_key, sanitize_key(primary_key))]
    for key in restore_keys or []:
        # Blank restore keys are skipped; the rest match on their stripped form.
        if key.strip():
            matchers.append((key, sanitize_key(key.strip())))
    return matchers


def _latest_entry(entries: list[CacheEntry]) -> CacheEntry:
    latest = entries[0]
    for entry in entries[1:]:
        if entry.mtime_ns >= latest.mtime_ns:
            latest = entry
    return latest
