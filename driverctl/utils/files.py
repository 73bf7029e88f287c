"""File helpers."""

from __future__ import annotations

import os
from pathlib import Path

from driverctl.errors import ConfigIOError, ConfigParseError


def read_text(path: str | Path) -> str:
    """Read a whole UTF-8 text file, wrapping OS and decoding errors."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as exc:
        raise ConfigIOError(
            f"cannot read {path}: {exc.strerror or exc}",
            details={"path": str(path)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigParseError(
            f"{path} is not valid UTF-8: {exc.reason} at byte {exc.start}",
            details={"path": str(path)},
        ) from exc


def write_text_preserving_mode(path: str | Path, content: str) -> None:
    """Overwrite ``path`` with ``content``, keeping its permission bits.

    Single open/write/close: there is no temporary file and rename, so an
    interrupted write can leave the file truncated.
    """
    try:
        mode = os.stat(path).st_mode & 0o7777
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(path, mode)
    except OSError as exc:
        raise ConfigIOError(
            f"cannot write {path}: {exc.strerror or exc}",
            details={"path": str(path)},
        ) from exc


def replace_text(content: str, old: str, new: str, count: int) -> tuple[str, int]:
    """Replace up to ``count`` literal occurrences of ``old`` with ``new``.

    Every other character is left untouched.

    Returns:
        The new content and the number of replacements made
    """
    replacements = min(content.count(old), count)
    if replacements == 0:
        return content, 0
    return content.replace(old, new, count), replacements
