# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Command-line flag parsing.

This is intentionally not argparse. Flags are recognized by plain
membership, and anything unrecognized is ignored rather than rejected, so
the tool can be called from scripts that pass extra arguments through.
Parsing can never fail.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})
SKIP_BUILD_FLAG = "--skip-build"
DRY_RUN_FLAG = "--dry-run"
CONFIG_FLAG = "--config"

USAGE = """
Usage: themepub [options]

Build and publish nextra-theme-docs-neovate package to npm.

Steps:
  1. Build nextra-theme-docs package
  2. Copy files to ./tmp (excluding node_modules, src, .turbo)
  3. Rename package to nextra-theme-docs-neovate
  4. Run npm login
  5. Publish to npm

Options:
  -h, --help        Show this help message
  --skip-build      Skip the build step
  --dry-run         Stage the package but only log the external commands
  --config PATH     Read settings from a YAML file
"""


@dataclass(frozen=True)
class Options:
    help: bool = False
    skip_build: bool = False
    dry_run: bool = False
    config_path: Optional[Path] = None


def _config_path(args: Sequence[str]) -> Optional[Path]:
    """Value of the last `--config PATH` or `--config=PATH`, if any."""
    found: Optional[Path] = None
    for index, arg in enumerate(args):
        if arg == CONFIG_FLAG and index + 1 < len(args):
            found = Path(args[index + 1])
        elif arg.startswith(CONFIG_FLAG + "=") and len(arg) > len(CONFIG_FLAG) + 1:
            found = Path(arg[len(CONFIG_FLAG) + 1:])
    return found


def parse_options(args: Sequence[str]) -> Options:
    """
    Build an Options record from the arguments after the program name.

    `-h`/`--help` anywhere means help, whatever else is present.
    """
    return Options(
        help=any(arg in HELP_FLAGS for arg in args),
        skip_build=SKIP_BUILD_FLAG in args,
        dry_run=DRY_RUN_FLAG in args,
        config_path=_config_path(args),
    )
