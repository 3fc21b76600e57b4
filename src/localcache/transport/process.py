from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable
from typing import IO

from localcache.errors import CacheOperationError

logger = logging.getLogger(__name__)

LineSink = Callable[[str], None]


def run_streaming(
    command: str,
    *,
    on_stdout: LineSink | None = None,
    on_stderr: LineSink | None = None,
) -> None:
    """Run a shell pipeline and relay its output line by line while it runs.

    The pipeline runs under ``bash -o pipefail`` so a failing stage fails the
    whole command. Raises ``CacheOperationError`` on a non-zero exit.
    """
    stdout_sink = on_stdout or logger.info
    stderr_sink = on_stderr or logger.warning

    logger.debug("run command=%s", command)
    process = subprocess.Popen(
        ["bash", "-o", "pipefail", "-c", command],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        errors="replace",
    )
    readers = [
        threading.Thread(target=_relay_lines, args=(process.stdout, stdout_sink), daemon=True),
        threading.Thread(target=_relay_lines, args=(process.stderr, stderr_sink), daemon=True),
    ]
    for reader in readers:
        reader.start()

    returncode = process.wait()
    for reader in readers:
        reader.join()

    if returncode != 0:
        raise CacheOperationError(
            f"Command failed with exit code {returncode}: {command}",
            command=command,
            returncode=returncode,
        )


def _relay_lines(stream: IO[str] | None, sink: LineSink) -> None:
    if stream is None:
        return
    with stream:
        for raw_line in stream:
            line = raw_line.strip()
            if line:
                sink(line)
