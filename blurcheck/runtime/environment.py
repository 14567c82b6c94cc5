# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Pre-flight environment validation.

A validation run shells out to a signature verifier, a version control
client and a build tool. Finding out at the end of a long download that gpg
isn't installed is annoying, so we look for them up front and say so in the
log. Missing tools don't abort the run: the affected checks report the
problem in their own results.
"""

import platform
import shutil
import sys
from dataclasses import dataclass
from typing import NamedTuple

from blurcheck.config.schema import ToolsConfig
from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str


@dataclass(frozen=True)
class ToolCheck:
    """Whether one external executable is on PATH."""

    name: str
    executable: str
    found: bool
    path: str


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor = sys.version_info[:2]
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"blurcheck requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
    )


def check_tool(name: str, executable: str) -> ToolCheck:
    location = shutil.which(executable)
    return ToolCheck(name=name, executable=executable, found=location is not None, path=location or "")


def validate_tools(tools: ToolsConfig) -> list[ToolCheck]:
    """
    Look up every external tool the checks will invoke.

    Returns one ToolCheck per tool; missing ones are logged as warnings.
    """
    checks = [
        check_tool("signature", tools.signature_command[0]),
        check_tool("git", tools.git_executable),
        check_tool("build", tools.build_command[0]),
    ]

    for check in checks:
        if check.found:
            _logger.info("Tool available", extra={"tool": check.name, "path": check.path})
        else:
            _logger.warning(
                "Tool not found on PATH",
                extra={"tool": check.name, "executable": check.executable},
            )

    return checks
