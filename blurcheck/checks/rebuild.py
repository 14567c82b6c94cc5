# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Source rebuild check.

Proves the published source archive is what the tagged source builds into:

1. clone the repository into <tag>/src
2. check out tags/<tag>
3. build with the configured command (tests skipped: this checks
   buildability and packaging, not correctness)
4. list the published and the rebuilt source archives
5. compare the listings

Comparison modes:
  exact: listings must be identical, member order included. A rebuilt
         archive with the same files in a different order fails, and its
         diff is empty. This is the historical behaviour.
  set:   only the set of member names matters.

Whatever the mode, a failing comparison reports the symmetric difference:
published-only entries first, then rebuilt-only entries.

A clone, checkout or build that exits non-zero ends the check with an
error naming the step. Comparing against a stale or missing archive would
only produce a misleading diff.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from blurcheck.checks.archive import ArchiveError, list_members
from blurcheck.checks.results import CheckResult
from blurcheck.config.schema import ListingCompareMode
from blurcheck.external.commands import CommandResult, CommandRunner
from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)

CHECK_NAME = "source_build"
LABEL = "Source Build Check"


@dataclass(frozen=True)
class ListingComparison:
    matches: bool
    diff: list[str]


def listing_diff(published: Sequence[str], rebuilt: Sequence[str]) -> list[str]:
    """Entries present in exactly one listing, each side in its own order."""
    rebuilt_set = set(rebuilt)
    published_set = set(published)
    only_published = [entry for entry in published if entry not in rebuilt_set]
    only_rebuilt = [entry for entry in rebuilt if entry not in published_set]
    return only_published + only_rebuilt


def compare_listings(
    published: Sequence[str],
    rebuilt: Sequence[str],
    mode: ListingCompareMode = "exact",
) -> ListingComparison:
    if mode == "set":
        matches = set(published) == set(rebuilt)
    else:
        matches = list(published) == list(rebuilt)
    return ListingComparison(matches=matches, diff=[] if matches else listing_diff(published, rebuilt))


def _step_error(step: str, result: CommandResult) -> CheckResult:
    _logger.error(
        "Rebuild step failed",
        extra={"step": step, "exit_code": result.exit_code, "command": list(result.args)},
    )
    return CheckResult.error(
        CHECK_NAME,
        LABEL,
        detail=f"{step} failed with exit code {result.exit_code}",
        entries=result.output_tail(),
    )


def rebuild_source(
    src_dir: Path,
    tag: str,
    runner: CommandRunner,
    repo_url: str,
    git_executable: str,
    build_command: Sequence[str],
) -> Optional[CheckResult]:
    """
    Clone, check out and build. Returns an error result for the first failing step, else None.
    """
    steps: list[tuple[str, list[str], Optional[Path]]] = [
        ("clone", [git_executable, "clone", "-q", repo_url, str(src_dir)], None),
        ("checkout", [git_executable, "checkout", "-q", f"tags/{tag}"], src_dir),
        ("build", list(build_command), src_dir),
    ]

    for step, args, cwd in steps:
        _logger.info("Rebuild step", extra={"step": step})
        result = runner.run(args, cwd=cwd)
        if not result.ok:
            return _step_error(step, result)

    return None


def check_source_build(
    published_archive: Path,
    rebuilt_archive: Path,
    src_dir: Path,
    tag: str,
    runner: CommandRunner,
    repo_url: str,
    git_executable: str,
    build_command: Sequence[str],
    mode: ListingCompareMode = "exact",
) -> CheckResult:
    """Rebuild from the tag and compare the two source archive listings."""
    failure = rebuild_source(src_dir, tag, runner, repo_url, git_executable, build_command)
    if failure is not None:
        return failure

    try:
        published = list_members(published_archive)
        rebuilt = list_members(rebuilt_archive)
    except ArchiveError as err:
        _logger.error("Cannot list source archive", extra={"error": str(err)})
        return CheckResult.error(CHECK_NAME, LABEL, detail=str(err))

    comparison = compare_listings(published, rebuilt, mode)

    if comparison.matches:
        _logger.info("Source archives match", extra={"members": len(published), "mode": mode})
        return CheckResult.from_entries(CHECK_NAME, LABEL, [])

    _logger.error(
        "Source archives differ",
        extra={"mode": mode, "published": len(published), "rebuilt": len(rebuilt), "diff": len(comparison.diff)},
    )
    detail = None if comparison.diff else "same members, different order"
    return CheckResult.fail(CHECK_NAME, LABEL, entries=comparison.diff, detail=detail)
