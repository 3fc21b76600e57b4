from __future__ import annotations

import pytest

from helpers import GZIP_PACK_COMMAND, GZIP_UNPACK_COMMAND
from localcache import CacheSettings, LocalCache
from localcache.transport import ArchiveTransport


@pytest.fixture
def settings(tmp_path) -> CacheSettings:
    return CacheSettings(cache_dir=str(tmp_path / "cache"), scope="acme/widgets")


@pytest.fixture
def gzip_transport() -> ArchiveTransport:
    return ArchiveTransport(pack_command=GZIP_PACK_COMMAND, unpack_command=GZIP_UNPACK_COMMAND)


@pytest.fixture
def local_cache(settings, gzip_transport) -> LocalCache:
    return LocalCache(settings, transport=gzip_transport)
