"""Filesystem helpers for moving frozen data around.

Copies are deliberately unforgiving: the first unreadable source entry or
unwritable destination entry aborts the whole copy with a CopyError. A
partial archive is worse than a loud failure.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path
from typing import Iterable

from chdump.core.errors import CopyError

FILE_MODE = 0o644


def copy_file(source: Path, destination: Path) -> None:
    """Copy file contents byte for byte and set the destination mode to 0644."""
    try:
        shutil.copyfile(source, destination)
        os.chmod(destination, FILE_MODE)
    except OSError as exc:
        raise CopyError(f"can't copy {source} to {destination}: {exc}") from exc


def copy_directory(source: Path, destination: Path) -> None:
    """
    Recursively copy a directory tree.

    Destination directories are created (including parents) with the
    permission bits of the matching source directory. Files already present
    in the destination are overwritten; paths not present in the source are
    left untouched.

    Raises:
        CopyError: On the first entry that cannot be read or written.
    """
    source = Path(source)
    destination = Path(destination)

    try:
        source_mode = stat.S_IMODE(source.stat().st_mode)
    except OSError as exc:
        raise CopyError(f"can't read {source}: {exc}") from exc
    if not source.is_dir():
        raise CopyError(f"{source} is not a directory")

    try:
        destination.mkdir(mode=source_mode, parents=True, exist_ok=True)
        entries = sorted(source.iterdir())
    except OSError as exc:
        raise CopyError(f"can't copy {source} to {destination}: {exc}") from exc

    for entry in entries:
        target = destination / entry.name
        if entry.is_dir():
            copy_directory(entry, target)
        else:
            copy_file(entry, target)


def ensure_directories(paths: Iterable[Path]) -> None:
    """
    Create each directory if absent, otherwise verify it is a directory.

    Raises:
        CopyError: If a path exists but is not a directory, or cannot be created.
    """
    for path in paths:
        path = Path(path)
        if path.exists():
            if not path.is_dir():
                raise CopyError(f"can't create directory: {path} (not a directory)")
            continue
        try:
            path.mkdir(parents=True)
        except OSError as exc:
            raise CopyError(f"can't create directory: {path}: {exc}") from exc


def find_missing_directory(paths: Iterable[Path]) -> Path | None:
    """Return the first path that does not exist, or None."""
    for path in paths:
        if not Path(path).exists():
            return Path(path)
    return None
