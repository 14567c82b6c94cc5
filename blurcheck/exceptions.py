# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Fatal errors for a validation run.

Verification failures are never raised; they come back as CheckResult
values. These exceptions cover the things that stop a run outright: no
version to validate, a workspace we cannot create, a staging area we
cannot reach.
"""


class BlurCheckError(Exception):
    """Base for all fatal run errors."""


class InputError(BlurCheckError):
    """Raised when the release version cannot be resolved from args or prompts."""


class WorkspaceError(BlurCheckError):
    """Raised when the release working directory cannot be reset or created."""


class FetchError(BlurCheckError):
    """Raised when the staging index or an artifact cannot be downloaded."""
