# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The publish pipeline: Build → Stage → Login → Publish.

Strictly sequential. Each step runs to completion before the next one
starts, and the first exception ends the run. Nothing is rolled back: a
build that already ran stays built, a half-filled staging directory stays
half-filled until the next run wipes it.

The help check is not part of this module. The CLI handles it before any
config is loaded or any path is resolved, so `--help` never touches the
filesystem.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from themepub.cli.options import Options
from themepub.config.schema import PublishConfig
from themepub.logging.logger import get_logger
from themepub.publish.runner import CommandRunner
from themepub.staging.manifest import MANIFEST_FILENAME, rewrite_manifest
from themepub.staging.stager import stage
from themepub.utils.paths import resolve_workspace_root

_logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class PublishPaths:
    """Absolute locations the pipeline works with."""

    root: Path
    source: Path
    staging: Path

    @classmethod
    def from_config(cls, config: PublishConfig, cwd: Optional[Path] = None) -> "PublishPaths":
        """
        Resolve the workspace root and the configured directories beneath it.

        An explicit `root_directory` wins; otherwise we walk up from `cwd`
        (default: the current directory) looking for the workspace marker.
        """
        start = cwd if cwd is not None else Path.cwd()
        if config.root_directory is not None:
            root = (start / config.root_directory).resolve()
        else:
            root = resolve_workspace_root(start, config.workspace_marker)
        return cls(
            root=root,
            source=root / config.source_directory,
            staging=root / config.staging_directory,
        )


@dataclass(frozen=True)
class PublishResult:
    """What a completed run did."""

    built: bool
    staged_entries: list[str]
    published_name: str
    version: Optional[str]


def _step(title: str) -> None:
    _logger.info(f"==> {title}")


def run_publish(
    options: Options,
    config: PublishConfig,
    paths: PublishPaths,
    runner: CommandRunner,
) -> PublishResult:
    """
    Run the whole release sequence.

    Args:
        options: Parsed command-line flags. Only `skip_build` matters here.
        config: Names, directories, and commands to use.
        paths: Resolved workspace paths.
        runner: Executes the external build, login, and publish commands.

    Returns:
        A PublishResult describing the run.

    Raises:
        CommandFailed: An external command exited non-zero.
        PublishError: Staging or manifest problems.
        OSError: Filesystem failures while staging.
    """
    built = False
    if options.skip_build:
        _logger.info("Skipping build", extra={"package": config.package_name})
    else:
        _step(f"Building {config.package_name}...")
        runner.run(config.build_command, cwd=paths.root)
        built = True

    _step(f"Preparing {paths.staging.name} directory...")
    staged = stage(paths.source, paths.staging, config.excludes)

    _step("Updating package.json name...")
    manifest = rewrite_manifest(
        paths.staging / MANIFEST_FILENAME,
        config.published_name,
        config.theme_dependency,
    )

    _step("Running registry login...")
    runner.run(config.login_command, cwd=paths.staging)

    _step("Publishing...")
    runner.run(config.publish_command, cwd=paths.staging)

    version = manifest.get("version")
    _logger.info(
        "==> Done!",
        extra={"published_name": config.published_name, "version": version},
    )
    return PublishResult(
        built=built,
        staged_entries=staged,
        published_name=config.published_name,
        version=version if isinstance(version, str) else None,
    )
