# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the source rebuild check.

The build is simulated: the fake runner's "build" step writes the rebuilt
archive where the real build would drop it.
"""

import io
import shutil
import sys
from pathlib import Path

from blurcheck.checks.rebuild import check_source_build, compare_listings, listing_diff
from blurcheck.checks.results import CheckStatus
from blurcheck.external.commands import CommandResult, SubprocessRunner
from blurcheck.logging.logger import configure_logging

ARCHIVE = "apache-blur-0.2.4-incubating-src.tar.gz"
TAG = "release-0.2.4-incubating"
BUILD = ["mvn", "install", "-Dhadoop2", "-DskipTests"]

MEMBERS = [
    ("apache-blur-0.2.4-incubating-src", None),
    ("apache-blur-0.2.4-incubating-src/pom.xml", b"<project/>"),
    ("apache-blur-0.2.4-incubating-src/LICENSE", b"license"),
]


class TestCompareListings:
    def test_identical_listings_pass(self) -> None:
        comparison = compare_listings(["a", "b"], ["a", "b"])
        assert comparison.matches
        assert comparison.diff == []

    def test_order_only_difference_fails_exact_with_empty_diff(self) -> None:
        comparison = compare_listings(["a", "b"], ["b", "a"], "exact")
        assert not comparison.matches
        assert comparison.diff == []

    def test_order_only_difference_passes_set(self) -> None:
        assert compare_listings(["a", "b"], ["b", "a"], "set").matches

    def test_diff_lists_published_only_then_rebuilt_only(self) -> None:
        assert listing_diff(["a", "b", "c"], ["c", "d", "a"]) == ["b", "d"]

    def test_set_mode_still_reports_real_differences(self) -> None:
        comparison = compare_listings(["a", "b"], ["a", "c"], "set")
        assert not comparison.matches
        assert comparison.diff == ["b", "c"]


def _setup(tmp_path: Path, make_tarball, rebuilt_members):  # type: ignore[no-untyped-def]
    published = make_tarball(tmp_path / "dist" / ARCHIVE, MEMBERS)
    src_dir = tmp_path / "src"
    src_dir.mkdir()

    def _build(args, cwd):  # type: ignore[no-untyped-def]
        target = cwd / "distribution" / "target" / ARCHIVE
        if rebuilt_members is MEMBERS:
            target.parent.mkdir(parents=True)
            shutil.copy(published, target)
        else:
            make_tarball(target, rebuilt_members)
        return CommandResult(args=args, exit_code=0, output="BUILD SUCCESS")

    return published, src_dir, _build


def _run(published: Path, src_dir: Path, runner, mode="exact"):  # type: ignore[no-untyped-def]
    return check_source_build(
        published_archive=published,
        rebuilt_archive=src_dir / "distribution" / "target" / ARCHIVE,
        src_dir=src_dir,
        tag=TAG,
        runner=runner,
        repo_url="https://git.example.org/blur.git",
        git_executable="git",
        build_command=BUILD,
        mode=mode,
    )


def test_matching_rebuild_passes(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    published, src_dir, build = _setup(tmp_path, make_tarball, MEMBERS)
    runner = make_runner({"mvn": build})

    result = _run(published, src_dir, runner)

    assert result.status is CheckStatus.PASS
    assert result.label == "Source Build Check"
    assert [args for args, _ in runner.calls] == [
        ("git", "clone", "-q", "https://git.example.org/blur.git", str(src_dir)),
        ("git", "checkout", "-q", f"tags/{TAG}"),
        tuple(BUILD),
    ]
    assert [cwd for _, cwd in runner.calls] == [None, src_dir, src_dir]


def test_extra_rebuilt_file_is_itemized(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    rebuilt = [*MEMBERS, ("apache-blur-0.2.4-incubating-src/stray.txt", b"oops")]
    published, src_dir, build = _setup(tmp_path, make_tarball, rebuilt)

    result = _run(published, src_dir, make_runner({"mvn": build}))

    assert result.status is CheckStatus.FAIL
    assert result.entries == ["apache-blur-0.2.4-incubating-src/stray.txt"]


def test_reordered_rebuild_fails_exact_mode(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    reordered = [MEMBERS[0], MEMBERS[2], MEMBERS[1]]
    published, src_dir, build = _setup(tmp_path, make_tarball, reordered)

    result = _run(published, src_dir, make_runner({"mvn": build}))

    assert result.status is CheckStatus.FAIL
    assert result.entries == []


def test_reordered_rebuild_passes_set_mode(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    reordered = [MEMBERS[0], MEMBERS[2], MEMBERS[1]]
    published, src_dir, build = _setup(tmp_path, make_tarball, reordered)

    result = _run(published, src_dir, make_runner({"mvn": build}), mode="set")

    assert result.status is CheckStatus.PASS


def test_failed_build_is_an_error_not_a_diff(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    published, src_dir, _ = _setup(tmp_path, make_tarball, MEMBERS)
    runner = make_runner(
        {"mvn": CommandResult(args=tuple(BUILD), exit_code=1, output="[ERROR] BUILD FAILURE\n")}
    )

    result = _run(published, src_dir, runner)

    assert result.status is CheckStatus.ERROR
    assert result.detail == "build failed with exit code 1"
    assert result.entries == ["[ERROR] BUILD FAILURE"]


def test_failed_checkout_stops_before_build(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    published, src_dir, _ = _setup(tmp_path, make_tarball, MEMBERS)
    runner = make_runner(
        {"checkout": CommandResult(args=(), exit_code=1, output="error: pathspec 'tags/x' did not match")}
    )

    result = _run(published, src_dir, runner)

    assert result.status is CheckStatus.ERROR
    assert result.detail.startswith("checkout failed")
    assert len(runner.calls) == 2


def test_missing_rebuilt_archive_is_an_error(tmp_path: Path, make_runner, make_tarball) -> None:  # type: ignore[no-untyped-def]
    published, src_dir, _ = _setup(tmp_path, make_tarball, MEMBERS)

    result = _run(published, src_dir, make_runner())

    assert result.status is CheckStatus.ERROR
    assert "Archive not found" in result.detail


def test_failing_real_clone_keeps_step_and_output(tmp_path: Path, make_tarball) -> None:  # type: ignore[no-untyped-def]
    published, src_dir, _ = _setup(tmp_path, make_tarball, MEMBERS)
    configure_logging("DEBUG", stream=io.StringIO())

    # The interpreter stands in for git; "clone" isn't a script it can open.
    result = check_source_build(
        published_archive=published,
        rebuilt_archive=src_dir / "distribution" / "target" / ARCHIVE,
        src_dir=src_dir,
        tag=TAG,
        runner=SubprocessRunner(),
        repo_url="https://git.example.org/blur.git",
        git_executable=sys.executable,
        build_command=BUILD,
    )

    assert result.status is CheckStatus.ERROR
    assert result.detail == "clone failed with exit code 2"
    assert any("clone" in line for line in result.entries)
