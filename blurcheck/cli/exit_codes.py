# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

SUCCESS means every check passed. VALIDATION_ERROR means the run completed
and at least one check failed. RUNTIME_ERROR covers fatal setup and fetch
failures as well as checks that could not run at all.
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4
