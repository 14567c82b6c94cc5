# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Outcome types shared by every verification check.

A check ends in one of three states:
  pass : the artifact or tree is what the release process says it should be
  fail : verification ran and found a problem
  error: verification could not run (a tool failed, an input is missing)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check against one subject."""

    check: str
    label: str
    status: CheckStatus
    entries: list[str] = field(default_factory=list)
    detail: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASS

    @classmethod
    def from_entries(
        cls, check: str, label: str, entries: list[str], detail: Optional[str] = None
    ) -> "CheckResult":
        """Pass when nothing offending was found, fail otherwise."""
        status = CheckStatus.PASS if not entries else CheckStatus.FAIL
        return cls(check=check, label=label, status=status, entries=entries, detail=detail)

    @classmethod
    def fail(
        cls,
        check: str,
        label: str,
        entries: Optional[list[str]] = None,
        detail: Optional[str] = None,
    ) -> "CheckResult":
        return cls(
            check=check,
            label=label,
            status=CheckStatus.FAIL,
            entries=entries or [],
            detail=detail,
        )

    @classmethod
    def error(
        cls, check: str, label: str, detail: str, entries: Optional[list[str]] = None
    ) -> "CheckResult":
        return cls(
            check=check,
            label=label,
            status=CheckStatus.ERROR,
            entries=entries or [],
            detail=detail,
        )


@dataclass
class ValidationReport:
    """Every result of one run, in the order the checks produced them."""

    tag: str
    results: list[CheckResult] = field(default_factory=list)

    def extend(self, results: list[CheckResult]) -> None:
        self.results.extend(results)

    @property
    def passed(self) -> bool:
        return bool(self.results) and all(r.passed for r in self.results)

    @property
    def failed(self) -> list[CheckResult]:
        return [r for r in self.results if r.status is CheckStatus.FAIL]

    @property
    def errored(self) -> list[CheckResult]:
        return [r for r in self.results if r.status is CheckStatus.ERROR]

    def count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status is status)
