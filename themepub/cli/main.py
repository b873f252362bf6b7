# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for themepub.

Usage:
    themepub [--skip-build] [--dry-run] [--config PATH]
    themepub --help
    python -m themepub.cli.main --skip-build

The flow:
  1. Parse flags (never fails)
  2. If help was requested, print usage and exit 0. Nothing else happens.
  3. Load config, set up logging, resolve workspace paths
  4. Run Build → Stage → Login → Publish
  5. Exit 0, or on any exception print `Error: <message>` to stderr and exit 1
"""

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from themepub.cli.exit_codes import FAILURE, SUCCESS
from themepub.cli.options import USAGE, parse_options
from themepub.config.loader import load_config
from themepub.logging.logger import configure_logging, get_logger
from themepub.publish.pipeline import PublishPaths, run_publish
from themepub.publish.runner import CommandRunner, DryRunRunner, SubprocessRunner

_logger = get_logger(__name__)


def run(
    argv: Sequence[str],
    runner: Optional[CommandRunner] = None,
    cwd: Optional[Path] = None,
) -> int:
    """
    Execute one invocation and return its exit code.

    `runner` and `cwd` exist so tests can drive the full sequence without
    real external tools or a real workspace.
    """
    options = parse_options(argv)
    if options.help:
        sys.stdout.write(USAGE)
        return SUCCESS

    try:
        # Defaults first, so a broken config file still gets logged as JSON.
        configure_logging()
        config = load_config(options.config_path)
        configure_logging(
            config.log_level,
            Path(config.log_file) if config.log_file is not None else None,
        )

        if runner is None:
            runner = DryRunRunner() if options.dry_run else SubprocessRunner()

        paths = PublishPaths.from_config(config, cwd=cwd)
        _logger.debug(
            "Resolved paths",
            extra={"root": str(paths.root), "source": str(paths.source), "staging": str(paths.staging)},
        )
        run_publish(options, config, paths, runner)
    except Exception as err:
        _logger.error("Publish failed", extra={"error": str(err)}, exc_info=True)
        sys.stderr.write(f"Error: {err}\n")
        return FAILURE

    return SUCCESS


def main() -> None:
    """Console-script entrypoint."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
