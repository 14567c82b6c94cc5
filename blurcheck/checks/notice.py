# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""NOTICE copyright year check."""

from datetime import date
from pathlib import Path
from typing import Optional

from blurcheck.checks.results import CheckResult
from blurcheck.logging.logger import get_logger
from blurcheck.utils.filesystem import read_text_lines

_logger = get_logger(__name__)

NOTICE_FILE = "NOTICE"
COPYRIGHT_LINE_INDEX = 1


def copyright_line(notice_lines: list[str]) -> Optional[str]:
    """The second line of NOTICE, where the Apache template puts the copyright."""
    if len(notice_lines) <= COPYRIGHT_LINE_INDEX:
        return None
    return notice_lines[COPYRIGHT_LINE_INDEX].rstrip("\r\n")


def check_notice_year(source_root: Path, today: Optional[date] = None) -> CheckResult:
    """
    Pass when NOTICE's copyright line contains the current year.

    The copyright line, when there is one, is carried in `detail` so the
    report can echo it.
    """
    year = str((today or date.today()).year)
    notice_path = source_root / NOTICE_FILE

    try:
        lines = read_text_lines(notice_path)
    except OSError as err:
        _logger.error("NOTICE unreadable", extra={"path": str(notice_path), "error": str(err)})
        return CheckResult.error("notice_year", "Current year is in NOTICE", detail=str(err))

    line = copyright_line(lines)
    if line is None:
        _logger.error("NOTICE has no copyright line", extra={"path": str(notice_path), "lines": len(lines)})
        return CheckResult.fail(
            "notice_year", "Current year is missing from NOTICE", entries=["NOTICE has no copyright line"]
        )

    if year in line:
        return CheckResult.from_entries("notice_year", "Current year is in NOTICE", [], detail=line)

    _logger.error("NOTICE year is stale", extra={"year": year, "line": line})
    return CheckResult.fail("notice_year", "Current year is missing from NOTICE", detail=line)
