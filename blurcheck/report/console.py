# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Human-readable report on stdout.

This is the release manager's view of a run, kept apart from the JSON log
on stderr. Result lines carry a fixed prefix so the output can be grepped:

    ✓.....apache-blur-0.2.4-incubating-src.tar.gz - MD5
    fail.....Source Build Check
    error.....Source Build Check

Offending entries follow a failing line, one per line.
"""

import sys
from typing import Optional, TextIO

from blurcheck.checks.results import CheckResult, CheckStatus, ValidationReport
from blurcheck.utils.formatting import format_size

PASS_MARK = "✓"
_PREFIXES = {
    CheckStatus.PASS: PASS_MARK,
    CheckStatus.FAIL: "fail",
    CheckStatus.ERROR: "error",
}
_PROGRESS_WIDTH = 60

BANNER = (
    "********************************************\n"
    "* Apache Blur Incubating Release Validator *\n"
    "********************************************"
)


class ConsoleReporter:
    """Writes section headers, progress and result lines to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def banner(self) -> None:
        self._write(BANNER + "\n")

    def section(self, title: str) -> None:
        # \r returns over any progress line still on screen.
        self._write(f"\r{title}\n")

    def fetch_started(self, index: int, total: int) -> None:
        self._write(f"\r{f'Fetching {index} of {total}':<{_PROGRESS_WIDTH}}\n")

    def fetch_progress(self, fetched: int, total: Optional[int]) -> None:
        total_text = format_size(total) if total is not None else "?"
        self._write(f"\r{f'{format_size(fetched)} of {total_text}':<{_PROGRESS_WIDTH}}")

    def result(self, result: CheckResult) -> None:
        # A copyright line that was read is echoed whatever the verdict.
        echo_detail = result.check == "notice_year" and result.status is not CheckStatus.ERROR
        if echo_detail and result.detail:
            self._write(f"{result.detail}\n")
        self._write(f"{_PREFIXES[result.status]}.....{result.label}\n")
        if result.status is CheckStatus.PASS:
            return
        if result.detail and not echo_detail:
            self._write(f"  {result.detail}\n")
        for entry in result.entries:
            self._write(f"{entry}\n")

    def results(self, results: list[CheckResult]) -> None:
        for result in results:
            self.result(result)

    def fatal(self, message: str) -> None:
        self._write(f"\rfatal.....{message}\n")

    def summary(self, report: ValidationReport) -> None:
        passed = report.count(CheckStatus.PASS)
        failed = report.count(CheckStatus.FAIL)
        errored = report.count(CheckStatus.ERROR)
        verdict = "PASSED" if report.passed else "FAILED"
        self._write(
            f"\n{report.tag}: {verdict} ({passed} passed, {failed} failed, {errored} errors)\n"
        )
