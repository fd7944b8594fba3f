from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..errors import PyQuartoError


class FsError(PyQuartoError, ValueError):
    pass


def resolve_path(cwd: Path, path_str: str, *, confine: bool = False) -> Path:
    p = Path(path_str).expanduser()
    if not p.is_absolute():
        p = (cwd / p).resolve()
    else:
        p = p.resolve()
    if confine:
        try:
            p.relative_to(cwd.resolve())
        except ValueError:
            raise FsError(f"Path escapes working directory: {path_str}")
    return p


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text_atomic(path: Path, content: str, *, mkdirs: bool = True) -> None:
    """Write via a sibling temp file and os.replace so readers never see a partial file."""
    if mkdirs:
        path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise


def write_bytes(path: Path, data: bytes, *, mkdirs: bool = True) -> None:
    if mkdirs:
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
