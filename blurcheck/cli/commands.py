# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Command handler for the blurcheck CLI.

The handler loads config, sets up logging, resolves the release, runs the
pipeline and maps the outcome onto an exit code. The verification report
itself goes to stdout through ConsoleReporter; everything diagnostic goes
through the structured logger.
"""

import argparse
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from blurcheck.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from blurcheck.config.exceptions import ConfigError
from blurcheck.config.loader import load_config
from blurcheck.config.schema import BlurCheckConfig
from blurcheck.exceptions import BlurCheckError, InputError
from blurcheck.external.commands import CommandRunner, SubprocessRunner
from blurcheck.logging.logger import configure_logging, get_logger
from blurcheck.pipeline import PipelineContext, run_pipeline
from blurcheck.release.identifier import build_identifier, resolve_release_input
from blurcheck.report.console import ConsoleReporter
from blurcheck.runtime.environment import check_minimum_python, get_system_info, validate_tools

_logger = get_logger("blurcheck.cli")


def _load(args: argparse.Namespace) -> tuple[int, Optional[BlurCheckConfig]]:
    """
    Load config and configure logging. CLI flags take precedence over the file.

    Returns (exit_code, config); config is None when exit_code isn't SUCCESS.
    """
    config_path = Path(args.config) if args.config is not None else None

    try:
        config = load_config(config_path)
    except ConfigError as err:
        configure_logging(args.log_level or "ERROR")
        _logger.error("Configuration error", extra={"error": str(err)})
        return CONFIG_ERROR, None

    if args.listing_compare is not None:
        checks = config.checks.model_copy(update={"listing_compare": args.listing_compare})
        config = config.model_copy(update={"checks": checks})

    log_file = config.global_config.log_file
    configure_logging(
        args.log_level or config.global_config.log_level,
        Path(log_file) if log_file is not None else None,
    )
    return SUCCESS, config


def handle_validate(
    args: argparse.Namespace,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[ConsoleReporter] = None,
    prompt_fn: Optional[Callable[[str], str]] = input,
) -> int:
    """Validate one release candidate end to end."""
    exit_code, config = _load(args)
    if exit_code != SUCCESS or config is None:
        return exit_code

    reporter = reporter if reporter is not None else ConsoleReporter()
    reporter.banner()

    try:
        check_minimum_python()
    except RuntimeError as err:
        _logger.error("Unsupported interpreter", extra={"error": str(err)})
        return RUNTIME_ERROR

    positional = [value for value in (args.version, args.candidate) if value is not None]
    try:
        release_input = resolve_release_input(positional, None if args.no_input else prompt_fn)
    except (InputError, EOFError) as err:
        _logger.error("No release version given", extra={"error": str(err)})
        reporter.fatal("a release version is required")
        return USER_ERROR

    release = build_identifier(release_input, config.project)

    info = get_system_info()
    _logger.info(
        "Starting validation",
        extra={
            "tag": release.tag,
            "python_version": info.python_version,
            "platform": info.platform,
            "listing_compare": config.checks.listing_compare,
        },
    )
    validate_tools(config.tools)

    ctx = PipelineContext(
        release=release,
        config=config,
        workdir=Path(args.workdir),
        runner=runner if runner is not None else SubprocessRunner(),
        reporter=reporter,
    )

    try:
        report = run_pipeline(ctx)
    except BlurCheckError as err:
        _logger.error("Validation aborted", extra={"tag": release.tag, "error": str(err)})
        reporter.fatal(str(err))
        return RUNTIME_ERROR

    reporter.summary(report)

    if report.errored:
        return RUNTIME_ERROR
    if not report.passed:
        return VALIDATION_ERROR
    return SUCCESS
