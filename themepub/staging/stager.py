# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Stage a filtered snapshot of the theme package into the scratch directory.

The staging contract:
  1. the destination is wiped and recreated on every run, so nothing from
     an earlier (possibly failed) run survives
  2. only the depth-1 entries of the source are considered, hidden ones
     included, files and directories alike
  3. every entry not named in the exclusion set is copied recursively to
     the same relative path
  4. symlinks are copied as symlinks, never followed

The manifest rewrite is a separate step (see manifest.py) and always runs
on the staged copy after this function returns.

A failure half-way through leaves a partial destination. That is fine: the
next run deletes it unconditionally before copying again.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from themepub.logging.logger import get_logger
from themepub.publish.exceptions import StagingError
from themepub.utils.filesystem import reset_directory
from themepub.utils.paths import is_within

_logger: logging.Logger = get_logger(__name__)

DEFAULT_EXCLUDES: frozenset[str] = frozenset({"node_modules", "src", ".turbo"})


def _check_layout(source: Path, dest: Path) -> None:
    """Refuse layouts where wiping `dest` would also wipe `source`."""
    if is_within(dest, source):
        raise StagingError(
            f"Staging directory {dest} is inside the source directory {source}"
        )
    if is_within(source, dest):
        raise StagingError(
            f"Source directory {source} is inside the staging directory {dest}"
        )


def prepare_directory(dest: Path) -> Path:
    """Remove `dest` if it exists, then create it (and any missing parents)."""
    existed = dest.exists() or dest.is_symlink()
    reset_directory(dest)
    _logger.debug(
        "Staging directory prepared",
        extra={"path": str(dest), "removed_previous": existed},
    )
    return dest


def _copy_entry(src: Path, dst: Path) -> None:
    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)


def stage(
    source: Path,
    dest: Path,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
) -> list[str]:
    """
    Copy the source directory's top-level entries, minus `excludes`, into `dest`.

    Entries are processed in name order so the returned list (and the log
    output) is the same on every machine.

    Args:
        source: The package directory to snapshot.
        dest: Scratch directory. Wiped before copying.
        excludes: Top-level entry names that are never copied.

    Returns:
        Names of the copied entries, relative to `dest`, in copy order.

    Raises:
        StagingError: If `dest` and `source` overlap.
        FileNotFoundError: If `source` does not exist.
        OSError: Any other filesystem failure, unchanged.
    """
    _check_layout(source, dest)
    excluded = frozenset(excludes)

    prepare_directory(dest)

    copied: list[str] = []
    skipped: list[str] = []
    for entry in sorted(source.iterdir(), key=lambda p: p.name):
        if entry.name in excluded:
            skipped.append(entry.name)
            continue
        _copy_entry(entry, dest / entry.name)
        copied.append(entry.name)

    _logger.info(
        "Staged package files",
        extra={
            "source": str(source),
            "dest": str(dest),
            "copied": len(copied),
            "excluded": skipped,
        },
    )
    return copied
