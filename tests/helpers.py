from __future__ import annotations

import shutil
from pathlib import Path

import pytest

GZIP_PACK_COMMAND = "tar cf - -C {base_dir} {folder} | gzip -c > {archive}"
GZIP_UNPACK_COMMAND = "gzip -d -c {archive} | tar xf - -C {base_dir}"

requires_lz4 = pytest.mark.skipif(shutil.which("lz4") is None, reason="lz4 binary not installed")


def write_tree(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def read_tree(root: Path) -> dict[str, str]:
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
