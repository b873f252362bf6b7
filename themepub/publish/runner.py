# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runners for external commands.

The pipeline never calls subprocess directly. It talks to a CommandRunner,
which has exactly one method: run(command, cwd). Production uses
SubprocessRunner; --dry-run swaps in DryRunRunner; tests pass a recording
fake. Swapping the runner is the only thing needed to exercise the whole
pipeline without pnpm or npm installed.

SubprocessRunner deliberately does not capture output. The child inherits
our stdin, stdout, and stderr so that interactive flows like `npm login`
can prompt the user directly. There is no timeout either: a login waiting
for input blocks for as long as the user takes.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Protocol

from themepub.logging.logger import get_logger
from themepub.publish.exceptions import CommandFailed

_logger: logging.Logger = get_logger(__name__)


def format_command(command: Sequence[str]) -> str:
    """Render a command the way a user would type it, prefixed with `$`."""
    return "$ " + " ".join(command)


class CommandRunner(Protocol):
    """Anything that can run an external command to completion."""

    def run(self, command: Sequence[str], cwd: Optional[Path] = None) -> None:
        """Run `command` in `cwd`; raise CommandFailed on a non-zero exit."""
        ...


class SubprocessRunner:
    """Runs commands as child processes with inherited terminal streams."""

    def run(self, command: Sequence[str], cwd: Optional[Path] = None) -> None:
        if not command:
            raise ValueError("Cannot run an empty command")

        _logger.info(
            format_command(command),
            extra={"cwd": str(cwd) if cwd is not None else None},
        )

        # A missing executable raises FileNotFoundError here; we let it propagate.
        completed = subprocess.run(
            list(command),
            cwd=str(cwd) if cwd is not None else None,
            check=False,
        )

        if completed.returncode != 0:
            _logger.debug(
                "Command exited non-zero",
                extra={"command": list(command), "exit_code": completed.returncode},
            )
            raise CommandFailed(command, completed.returncode)


class DryRunRunner:
    """Logs what would run and runs nothing."""

    def run(self, command: Sequence[str], cwd: Optional[Path] = None) -> None:
        if not command:
            raise ValueError("Cannot run an empty command")
        _logger.info(
            "Dry run — skipping " + format_command(command),
            extra={"cwd": str(cwd) if cwd is not None else None},
        )
