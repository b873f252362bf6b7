# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
themepub — build, stage, and publish the Neovate fork of nextra-theme-docs.

External tools (pnpm, npm) are only sequenced, never reimplemented.
"""

__version__ = "0.1.0"
