# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the publish pipeline.

Nothing in the pipeline catches these. They travel up to the CLI, which
turns any of them into `Error: <message>` and exit code 1.
"""

from collections.abc import Sequence


class PublishError(Exception):
    """Base for failures the pipeline detects itself."""


class CommandFailed(PublishError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int) -> None:
        self.command = tuple(command)
        self.exit_code = exit_code
        super().__init__(f"Command failed with exit code {exit_code}: {' '.join(self.command)}")


class StagingError(PublishError):
    """The staging layout is unsafe, e.g. the scratch directory overlaps the source."""


class ManifestError(PublishError):
    """The staged package.json cannot be parsed or transformed."""
