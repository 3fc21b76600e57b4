from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence

from localcache.errors import ValidationError

MAX_KEY_LENGTH = 255
MAX_SANITIZED_LENGTH = 100
REPLACEMENT = "!"

_RESERVED_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x80-\x9f]")
_LEADING_DOTS = re.compile(r"^\.+")
_TRAILING_DOTS = re.compile(r"\.+$")
_REPEATED_REPLACEMENT = re.compile(rf"(?:{re.escape(REPLACEMENT)})+")
_WINDOWS_RESERVED_NAME = re.compile(r"^(con|prn|aux|nul|com\d|lpt\d)$", re.IGNORECASE)


def sanitize_key(key: str) -> str:
    """Map a cache key onto a single filesystem-safe path segment."""
    name = unicodedata.normalize("NFC", key)
    name = _RESERVED_CHARS.sub(REPLACEMENT, name)
    name = _CONTROL_CHARS.sub(REPLACEMENT, name)
    name = _REPEATED_REPLACEMENT.sub(REPLACEMENT, name)
    if len(name) > 1:
        name = name.strip(REPLACEMENT)

    # Relative-path dots go last so the result never starts with ".".
    name = _LEADING_DOTS.sub(REPLACEMENT, name)
    name = _TRAILING_DOTS.sub("", name)
    name = _REPEATED_REPLACEMENT.sub(REPLACEMENT, name)

    if _WINDOWS_RESERVED_NAME.match(name):
        name = f"{name}{REPLACEMENT}"

    return name[:MAX_SANITIZED_LENGTH]


def validate_key(key: str) -> None:
    if not sanitize_key(key):
        raise ValidationError(f"Key Validation Error: {key!r} cannot be empty.")
    if len(key) > MAX_KEY_LENGTH:
        raise ValidationError(
            f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise ValidationError(f"Key Validation Error: {key} cannot contain commas.")


def validate_paths(paths: Sequence[str] | None) -> None:
    if not paths:
        raise ValidationError(
            "Path Validation Error: At least one directory or file path is required"
        )
