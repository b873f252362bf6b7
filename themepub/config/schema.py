# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schema for themepub.

Every default matches the release workflow for the Neovate fork of
nextra-theme-docs, so running without a config file does the right thing.
A YAML file only needs the keys it wants to change.

The model uses pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PublishConfig(BaseModel):
    """Everything the publish pipeline needs: names, paths, and commands."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    package_name: str = Field(
        default="nextra-theme-docs",
        min_length=1,
        description="Workspace package that gets built and staged",
    )
    published_name: str = Field(
        default="nextra-theme-docs-neovate",
        min_length=1,
        description="Name written into the staged package.json",
    )
    theme_dependency: str = Field(
        default="nextra",
        min_length=1,
        description="Peer dependency pinned to the package's own version",
    )
    root_directory: Optional[str] = Field(
        default=None,
        description="Workspace root; found via workspace_marker when unset",
    )
    workspace_marker: str = Field(
        default="pnpm-workspace.yaml",
        min_length=1,
        description="File whose presence identifies the workspace root",
    )
    source_directory: str = Field(
        default="packages/nextra-theme-docs",
        description="Package directory to stage, relative to the workspace root",
    )
    staging_directory: str = Field(
        default="tmp",
        description="Scratch directory, relative to the workspace root. Wiped every run.",
    )
    excludes: tuple[str, ...] = Field(
        default=("node_modules", "src", ".turbo"),
        description="Top-level entries of the source directory that are never staged",
    )
    build_command: tuple[str, ...] = Field(
        default=("pnpm", "--filter", "nextra-theme-docs", "build"),
        min_length=1,
        description="Run from the workspace root",
    )
    login_command: tuple[str, ...] = Field(
        default=("npm", "login"),
        min_length=1,
        description="Run from the staging directory; may prompt on the terminal",
    )
    publish_command: tuple[str, ...] = Field(
        default=("npm", "publish"),
        min_length=1,
        description="Run from the staging directory",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional JSON log file, relative to the current directory",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}")
        return upper

    @field_validator("excludes")
    @classmethod
    def _check_excludes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            if not name or "/" in name or "\\" in name:
                raise ValueError(f"exclude entries must be plain top-level names, got {name!r}")
        return value
