# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Rewrite the staged package.json for the forked package.

Three fields change, everything else passes through untouched and in its
original key order:
  - `name` becomes the published name
  - `scripts.prepublishOnly` is dropped, since the build already ran and
    the staged copy has no sources to rebuild from
  - `peerDependencies.<theme dependency>` is pinned to the package's own
    `version`, if that peer entry is present

The transform itself is a pure function on dicts. Loading and writing are
thin wrappers around it so each half can be tested on its own.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from themepub.logging.logger import get_logger
from themepub.publish.exceptions import ManifestError
from themepub.utils.filesystem import atomic_write, safe_read

_logger: logging.Logger = get_logger(__name__)

MANIFEST_FILENAME = "package.json"


def load_manifest(path: Path) -> dict[str, Any]:
    """
    Parse a package.json into an ordered dict.

    Raises:
        FileNotFoundError: If the manifest is missing.
        ManifestError: If it is not valid JSON or not a JSON object.
    """
    raw = safe_read(path)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as err:
        raise ManifestError(f"Invalid JSON in {path}: {err}") from err
    if not isinstance(parsed, dict):
        raise ManifestError(f"{path} must contain a JSON object, got {type(parsed).__name__}")
    return parsed


def transform_manifest(
    manifest: dict[str, Any],
    published_name: str,
    theme_dependency: str = "nextra",
) -> dict[str, Any]:
    """
    Return a rewritten copy of `manifest`. The input is not modified.

    Raises:
        ManifestError: If the theme dependency must be pinned but the
            manifest has no `version` to pin it to.
    """
    result = copy.deepcopy(manifest)
    result["name"] = published_name

    scripts = result.get("scripts")
    if isinstance(scripts, dict):
        scripts.pop("prepublishOnly", None)

    peers = result.get("peerDependencies")
    if isinstance(peers, dict) and peers.get(theme_dependency):
        version = result.get("version")
        if not isinstance(version, str) or not version:
            raise ManifestError(
                f"Cannot pin peer dependency {theme_dependency!r}: manifest has no version"
            )
        peers[theme_dependency] = version

    return result


def dump_manifest(manifest: dict[str, Any]) -> str:
    """Serialize with 2-space indentation and a trailing newline, like npm does."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_manifest(path: Path, manifest: dict[str, Any]) -> None:
    atomic_write(path, dump_manifest(manifest))


def rewrite_manifest(
    path: Path,
    published_name: str,
    theme_dependency: str = "nextra",
) -> dict[str, Any]:
    """
    Load, transform, and overwrite the manifest at `path`.

    Only ever call this on the staged copy; the source package.json must
    stay untouched.

    Returns:
        The manifest as written.
    """
    original = load_manifest(path)
    rewritten = transform_manifest(original, published_name, theme_dependency)
    write_manifest(path, rewritten)

    _logger.info(
        "Rewrote package manifest",
        extra={
            "path": str(path),
            "from_name": original.get("name"),
            "to_name": published_name,
            "version": rewritten.get("version"),
        },
    )
    return rewritten
