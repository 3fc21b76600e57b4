from __future__ import annotations

import logging
import os
import shlex
import uuid
from pathlib import Path

from localcache.transport.process import LineSink, run_streaming

logger = logging.getLogger(__name__)

PACK_COMMAND = "tar cf - -C {base_dir} {folder} | lz4 -v > {archive} 2>/dev/null"
UNPACK_COMMAND = "lz4 -d -v -c {archive} 2>/dev/null | tar xf - -C {base_dir}"


class ArchiveTransport:
    """Pack a directory into a compressed tarball and unpack it again.

    Both directions shell out to a fixed pipeline template. Placeholders are
    ``{base_dir}``, ``{folder}`` (pack only) and ``{archive}``; every value is
    shell-quoted before substitution.
    """

    def __init__(
        self,
        *,
        pack_command: str = PACK_COMMAND,
        unpack_command: str = UNPACK_COMMAND,
        on_stdout: LineSink | None = None,
        on_stderr: LineSink | None = None,
    ) -> None:
        self.pack_command = pack_command
        self.unpack_command = unpack_command
        self.on_stdout = on_stdout
        self.on_stderr = on_stderr

    def pack(self, source: str | Path, archive_path: str | Path) -> None:
        source_path = Path(os.path.abspath(source))
        archive_path = Path(archive_path)
        # Locator scans skip dotfiles; the rename below publishes the archive.
        partial_path = archive_path.with_name(f".{uuid.uuid4().hex}.partial")

        # A trailing slash makes tar archive a symlinked directory's contents
        # under the link's own name.
        folder = f"{source_path.name}/" if source_path.is_dir() else source_path.name
        command = self.pack_command.format(
            base_dir=shlex.quote(str(source_path.parent)),
            folder=shlex.quote(folder),
            archive=shlex.quote(str(partial_path)),
        )
        try:
            self._run(command)
            os.replace(partial_path, archive_path)
        finally:
            if partial_path.exists():
                partial_path.unlink()

        logger.info("archive packed source=%s archive=%s", source_path, archive_path)

    def unpack(self, archive_path: str | Path, destination: str | Path) -> None:
        base_dir = Path(os.path.abspath(destination)).parent
        base_dir.mkdir(parents=True, exist_ok=True)

        command = self.unpack_command.format(
            archive=shlex.quote(str(archive_path)),
            base_dir=shlex.quote(str(base_dir)),
        )
        self._run(command)
        logger.info("archive unpacked archive=%s base_dir=%s", archive_path, base_dir)

    def _run(self, command: str) -> None:
        run_streaming(command, on_stdout=self.on_stdout, on_stderr=self.on_stderr)
