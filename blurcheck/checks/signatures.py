# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Detached OpenPGP signature verification.

gpg's exit status conflates "bad signature" with "missing public key" and
assorted keyring trouble, while release managers have always judged the
result by the "Good signature" line. We keep that contract: the verdict is
a substring match on the combined output. The match lives behind
`is_good_signature` so a structured status check can replace it later
without touching the loop.

A verifier that can't be started produces non-matching output and
therefore a fail, not an error.
"""

from collections.abc import Sequence
from pathlib import Path

from blurcheck.checks.checksums import find_archives
from blurcheck.checks.results import CheckResult
from blurcheck.external.commands import CommandRunner
from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)

GOOD_SIGNATURE_MARKER = "Good signature"


def is_good_signature(output: str) -> bool:
    return GOOD_SIGNATURE_MARKER in output


def verify_signature(
    archive: Path,
    runner: CommandRunner,
    signature_command: Sequence[str],
) -> CheckResult:
    """Run `<signature_command> <archive>.asc <archive>` and judge its output."""
    label = f"{archive.name} - Signature"
    signature = archive.with_name(archive.name + ".asc")

    result = runner.run([*signature_command, str(signature), str(archive)])

    if is_good_signature(result.output):
        return CheckResult.from_entries("signature", label, [])

    _logger.error(
        "Signature not verified",
        extra={"file": archive.name, "exit_code": result.exit_code, "output": result.output_tail(5)},
    )
    return CheckResult.fail("signature", label, detail=f"verifier exited with {result.exit_code}")


def verify_signatures(
    dist_dir: Path,
    runner: CommandRunner,
    signature_command: Sequence[str],
) -> list[CheckResult]:
    """One signature result per `.gz` archive in dist_dir."""
    return [verify_signature(a, runner, signature_command) for a in find_archives(dist_dir)]
