# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes. These are the only two the tool ever returns.
"""

SUCCESS: int = 0
FAILURE: int = 1
