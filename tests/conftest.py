# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for themepub tests.

The key pieces:
  - RecordingRunner, a CommandRunner that remembers every call and can be
    told to fail on a given command
  - a fake workspace with a theme package that has every kind of entry the
    stager cares about (excluded dirs, hidden files, nested dirs)
"""

import json
import logging
import textwrap
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import pytest

from themepub.publish.exceptions import CommandFailed

SAMPLE_MANIFEST = {
    "name": "nextra-theme-docs",
    "version": "1.2.3",
    "description": "A Nextra theme for documentation sites.",
    "scripts": {"build": "tsup", "prepublishOnly": "pnpm build"},
    "peerDependencies": {"next": ">=13", "nextra": "workspace:*"},
}


class RecordingRunner:
    """CommandRunner fake. Fails with `exit_code` on any command whose program+first arg match."""

    def __init__(self, fail_on: Optional[tuple[str, ...]] = None, exit_code: int = 1) -> None:
        self.calls: list[tuple[tuple[str, ...], Optional[Path]]] = []
        self._fail_on = fail_on
        self._exit_code = exit_code

    def run(self, command: Sequence[str], cwd: Optional[Path] = None) -> None:
        self.calls.append((tuple(command), cwd))
        if self._fail_on is not None and tuple(command[: len(self._fail_on)]) == self._fail_on:
            raise CommandFailed(command, self._exit_code)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [command for command, _ in self.calls]


@pytest.fixture()
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def make_runner():  # type: ignore[no-untyped-def]
    """Factory for runners that fail on a chosen command."""
    return RecordingRunner


@pytest.fixture()
def theme_package(tmp_path: Path) -> Path:
    """A package directory shaped like nextra-theme-docs after a build."""
    pkg = tmp_path / "workspace" / "packages" / "nextra-theme-docs"
    (pkg / "dist" / "components").mkdir(parents=True)
    (pkg / "dist" / "index.js").write_text("export {}\n", encoding="utf-8")
    (pkg / "dist" / "components" / "navbar.js").write_text("// navbar\n", encoding="utf-8")
    (pkg / "style.css").write_text("body {}\n", encoding="utf-8")
    (pkg / "README.md").write_text("# theme\n", encoding="utf-8")
    (pkg / ".npmignore").write_text("*.map\n", encoding="utf-8")
    (pkg / "node_modules" / "react").mkdir(parents=True)
    (pkg / "node_modules" / "react" / "index.js").write_text("", encoding="utf-8")
    (pkg / "src").mkdir()
    (pkg / "src" / "index.tsx").write_text("export {}\n", encoding="utf-8")
    (pkg / ".turbo").mkdir()
    (pkg / ".turbo" / "turbo-build.log").write_text("cached\n", encoding="utf-8")
    (pkg / "package.json").write_text(json.dumps(SAMPLE_MANIFEST, indent=2) + "\n", encoding="utf-8")
    return pkg


@pytest.fixture()
def workspace(theme_package: Path) -> Path:
    """Workspace root holding the theme package, identified by pnpm-workspace.yaml."""
    root = theme_package.parent.parent
    (root / "pnpm-workspace.yaml").write_text("packages:\n  - packages/*\n", encoding="utf-8")
    return root


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A small valid config overriding a couple of defaults."""
    config_content = textwrap.dedent("""\
        published_name: "nextra-theme-docs-fork"
        staging_directory: "out/stage"
        log_level: "debug"
        login_command: ["npm", "whoami"]
    """)
    config_file = tmp_path / "themepub.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (unknown key)."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text("publish_to: jsr\n", encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture(autouse=True)
def _reset_themepub_logger() -> None:
    """Drop handlers installed by configure_logging so tests don't leak streams."""
    yield  # type: ignore[misc]
    logger = logging.getLogger("themepub")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
