# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Staging: filtered copy of the package into the scratch directory, then the
package.json rewrite on that copy.
"""
