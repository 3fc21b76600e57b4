"""Archive packing and subprocess output relay."""

from .archive import PACK_COMMAND, UNPACK_COMMAND, ArchiveTransport
from .process import run_streaming

__all__ = ["PACK_COMMAND", "UNPACK_COMMAND", "ArchiveTransport", "run_streaming"]
