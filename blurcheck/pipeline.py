# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The validation pipeline.

Stages run strictly in order, each reporting before the next starts:

  setup      reset <tag>/dist and <tag>/src
  fetch      download every staged artifact
  checksums  MD5 + SHA1 per archive
  signatures detached signature per archive
  rebuild    clone, checkout, build, compare source archive listings
  license    extract published source, check LICENSE both ways
  notice     copyright year in NOTICE

Setup and fetch failures are fatal and propagate as BlurCheckError. From
there on every stage is isolated: an unexpected exception inside one stage
becomes an error result for that stage and the run carries on, so the
operator always gets the complete report in one pass.

Collaborators (command runner, fetch function, reporter, clock) are passed
in; nothing reads module-level state.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional, Protocol

from blurcheck.checks.archive import ArchiveError, extract_archive
from blurcheck.checks.checksums import verify_checksums
from blurcheck.checks.license import check_license
from blurcheck.checks.notice import check_notice_year
from blurcheck.checks.rebuild import check_source_build
from blurcheck.checks.results import CheckResult, ValidationReport
from blurcheck.checks.signatures import verify_signatures
from blurcheck.config.schema import BlurCheckConfig
from blurcheck.external.commands import CommandRunner, SubprocessRunner
from blurcheck.fetch.downloader import (
    FetchedArtifact,
    ProgressCallback,
    StartCallback,
    fetch_artifacts,
)
from blurcheck.logging.logger import get_logger
from blurcheck.release.identifier import ReleaseIdentifier
from blurcheck.release.workspace import WorkspaceLayout, prepare_workspace
from blurcheck.report.console import ConsoleReporter

_logger = get_logger(__name__)


class ArtifactFetcher(Protocol):
    def __call__(
        self,
        url: str,
        artifact_prefix: str,
        dist_dir: Path,
        timeout: float,
        on_start: Optional[StartCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> list[FetchedArtifact]: ...


@dataclass
class PipelineContext:
    """Everything a run needs, handed to each stage explicitly."""

    release: ReleaseIdentifier
    config: BlurCheckConfig
    workdir: Path
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    fetcher: ArtifactFetcher = fetch_artifacts
    reporter: ConsoleReporter = field(default_factory=ConsoleReporter)
    today: Callable[[], date] = date.today


def _guarded(
    stage: str,
    labels: list[tuple[str, str]],
    run: Callable[[], list[CheckResult]],
) -> list[CheckResult]:
    """Run one stage; an unexpected exception becomes an error result per expected check."""
    try:
        return run()
    except Exception as err:
        _logger.error("Stage crashed", extra={"stage": stage, "error": str(err)}, exc_info=True)
        detail = f"{stage} stage crashed: {err}"
        return [CheckResult.error(check, label, detail=detail) for check, label in labels]


def setup_workspace(ctx: PipelineContext) -> WorkspaceLayout:
    ctx.reporter.section(f"Setting up release folders... ({ctx.release.tag})")
    return prepare_workspace(ctx.workdir, ctx.release.tag)


def download_artifacts(ctx: PipelineContext, layout: WorkspaceLayout) -> list[FetchedArtifact]:
    ctx.reporter.section("Downloading artifacts...")
    return ctx.fetcher(
        ctx.release.url,
        ctx.release.artifact_prefix,
        layout.dist_dir,
        ctx.config.project.http_timeout_seconds,
        on_start=ctx.reporter.fetch_started,
        on_progress=ctx.reporter.fetch_progress,
    )


def run_checksums(ctx: PipelineContext, layout: WorkspaceLayout) -> list[CheckResult]:
    ctx.reporter.section("Verifying checksums...")
    return _guarded("checksums", [("checksum", "Checksums")], lambda: verify_checksums(layout.dist_dir))


def run_signatures(ctx: PipelineContext, layout: WorkspaceLayout) -> list[CheckResult]:
    ctx.reporter.section("Verifying signatures...")
    return _guarded(
        "signatures",
        [("signature", "Signatures")],
        lambda: verify_signatures(layout.dist_dir, ctx.runner, ctx.config.tools.signature_command),
    )


def run_source_build(ctx: PipelineContext, layout: WorkspaceLayout) -> list[CheckResult]:
    ctx.reporter.section("Verifying src build...")
    tools = ctx.config.tools
    return _guarded(
        "rebuild",
        [("source_build", "Source Build Check")],
        lambda: [
            check_source_build(
                published_archive=layout.published_source_archive(ctx.release),
                rebuilt_archive=layout.rebuilt_source_archive(
                    ctx.release, ctx.config.checks.build_output_dir
                ),
                src_dir=layout.src_dir,
                tag=ctx.release.tag,
                runner=ctx.runner,
                repo_url=ctx.config.project.repo_url,
                git_executable=tools.git_executable,
                build_command=tools.build_command,
                mode=ctx.config.checks.listing_compare,
            )
        ],
    )


def run_license(ctx: PipelineContext, layout: WorkspaceLayout) -> list[CheckResult]:
    ctx.reporter.section("Verifying license file...")
    labels = [
        ("license_references", "All License File Libs exist"),
        ("license_declarations", "All Libs in License File"),
    ]

    def _run() -> list[CheckResult]:
        try:
            extract_archive(layout.published_source_archive(ctx.release), layout.dist_dir)
        except ArchiveError as err:
            _logger.error("Cannot extract published source", extra={"error": str(err)})
            return [CheckResult.error(check, label, detail=str(err)) for check, label in labels]
        return check_license(
            layout.extracted_source_root(ctx.release),
            ctx.config.checks.vendor_dirs,
            ctx.config.checks.script_suffix,
        )

    return _guarded("license", labels, _run)


def run_notice(ctx: PipelineContext, layout: WorkspaceLayout) -> list[CheckResult]:
    ctx.reporter.section("Verifying copyright in NOTICE...")
    return _guarded(
        "notice",
        [("notice_year", "Current year is in NOTICE")],
        lambda: [check_notice_year(layout.extracted_source_root(ctx.release), ctx.today())],
    )


_STAGES = (run_checksums, run_signatures, run_source_build, run_license, run_notice)


def run_pipeline(ctx: PipelineContext) -> ValidationReport:
    """
    Run every stage for one release and return the collected results.

    Raises:
        BlurCheckError: If the workspace can't be prepared or the fetch fails.
    """
    report = ValidationReport(tag=ctx.release.tag)

    layout = setup_workspace(ctx)
    artifacts = download_artifacts(ctx, layout)
    _logger.info("Fetch complete", extra={"artifacts": len(artifacts)})

    for stage in _STAGES:
        results = stage(ctx, layout)
        ctx.reporter.results(results)
        report.extend(results)

    _logger.info(
        "Validation finished",
        extra={
            "tag": report.tag,
            "passed": report.passed,
            "failed": len(report.failed),
            "errors": len(report.errored),
        },
    )
    return report
