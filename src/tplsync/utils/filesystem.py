"""File system utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one step.

    The content goes to a temporary file in the same directory which is then
    renamed over the target, so readers never observe a half-written file.
    The original file is preserved if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600 files; keep the mode a plain write would give.
        mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def read_text_if_exists(path: Path) -> str | None:
    """Return the file content, or None when the file does not exist."""
    if not path.is_file():
        return None
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
