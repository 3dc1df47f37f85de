"""Write bank dumps so that a failed run leaves no partial files behind."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple


def _stage(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return tmp


def write_atomic(path: Path, data: bytes) -> None:
    path = Path(path)
    tmp = _stage(path, data)
    try:
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _backup(path: Path) -> Optional[Path]:
    if not path.exists():
        return None
    fd, name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".bak", dir=path.parent)
    os.close(fd)
    os.replace(path, name)
    return Path(name)


def commit_outputs(outputs: Sequence[Tuple[Path, bytes]]) -> List[Path]:
    """Write every ``(path, data)`` pair or none of them.

    All files are staged first; renames only start once staging succeeded.
    Files already at the targets are moved aside and put back if any
    rename fails.
    """

    pairs = [(Path(path), data) for path, data in outputs]
    targets = [path.resolve() for path, _ in pairs]
    if len(set(targets)) != len(targets):
        raise ValueError("output paths must be distinct")

    staged: List[Tuple[Path, Path]] = []
    try:
        for path, data in pairs:
            staged.append((_stage(path, data), path))
    except BaseException:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    replaced: List[Tuple[Path, Optional[Path]]] = []
    try:
        for tmp, path in staged:
            replaced.append((path, _backup(path)))
            os.replace(tmp, path)
    except BaseException:
        for path, backup in reversed(replaced):
            if backup is not None:
                os.replace(backup, path)
            else:
                path.unlink(missing_ok=True)
        raise
    finally:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)

    for _, backup in replaced:
        if backup is not None:
            backup.unlink(missing_ok=True)
    return [path for path, _ in replaced]
