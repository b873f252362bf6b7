# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Publish orchestration: command runners, pipeline errors, and the
Build → Stage → Login → Publish sequence.
"""
