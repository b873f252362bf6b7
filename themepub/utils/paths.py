# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for themepub.

The rules:
  - configured paths are relative to the workspace root
  - the workspace root is found by a marker file, not by guessing
  - the scratch directory must never overlap the directory it copies from
"""

from pathlib import Path


def resolve_workspace_root(start: Path, marker: str = "pnpm-workspace.yaml") -> Path:
    """
    Walk up from `start` to find the workspace root.

    The root is the first directory (starting with `start` itself) that
    contains `marker`. This works no matter which package directory the
    user happens to run the command from.

    Raises:
        FileNotFoundError: If no ancestor directory contains the marker.
    """
    current = start.resolve()
    while True:
        if (current / marker).exists():
            return current
        if current == current.parent:
            break
        current = current.parent
    raise FileNotFoundError(
        f"Cannot find workspace root. No {marker} found in {start} or any ancestor directory."
    )


def is_within(target: Path, base: Path) -> bool:
    """True if `target` resolves to `base` itself or somewhere beneath it."""
    resolved_target = target.resolve()
    resolved_base = base.resolve()
    return resolved_target == resolved_base or resolved_base in resolved_target.parents
