# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
External command execution.

The signature verifier, version control client and build tool are black
boxes. Checks never call subprocess directly: they take a CommandRunner and
get back a CommandResult holding the exit status and the combined
stdout/stderr text. Tests substitute a scripted runner, so no check needs a
real network, keyring or JDK to be exercised.

A command that cannot be started at all (binary missing, permission
denied) is reported as a CommandResult with exit code 127 and the OS error
as its output. Callers then decide whether that is a failed verification or
a failed tool, same as for any other non-zero exit.
"""

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)

COMMAND_NOT_RUNNABLE: int = 127


@dataclass(frozen=True)
class CommandResult:
    """Exit status plus combined output of one external command."""

    args: tuple[str, ...]
    exit_code: int
    output: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def output_tail(self, max_lines: int = 20) -> list[str]:
        """Last non-empty lines of output, for error reports."""
        lines = [line for line in self.output.splitlines() if line.strip()]
        return lines[-max_lines:]


class CommandRunner(Protocol):
    """Anything that can run a command line and report how it went."""

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult: ...


class SubprocessRunner:
    """
    Runs commands with subprocess.run, stderr folded into stdout.

    No timeout: clones and builds take as long as they take, and the
    operator can always interrupt the run.
    """

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        argv = tuple(str(a) for a in args)
        _logger.info(
            "Running command",
            extra={"command": list(argv), "cwd": str(cwd) if cwd is not None else None},
        )

        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as err:
            _logger.error(
                "Command could not be started",
                extra={"command": list(argv), "error": str(err)},
            )
            return CommandResult(args=argv, exit_code=COMMAND_NOT_RUNNABLE, output=str(err))

        result = CommandResult(args=argv, exit_code=completed.returncode, output=completed.stdout or "")
        log_fn = _logger.info if result.ok else _logger.warning
        log_fn(
            "Command finished",
            extra={"command": list(argv), "exit_code": result.exit_code},
        )
        return result
