# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for blurcheck.

Usage:
    blurcheck                          # prompts for version and candidate
    blurcheck 0.2.4                    # prompts for candidate only
    blurcheck 0.2.4 rc1
    blurcheck 0.2.4 rc1 --listing-compare set --log-level INFO
"""

import argparse
import sys
from typing import Optional

from blurcheck import __version__
from blurcheck.cli.commands import handle_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blurcheck",
        description="Validate an Apache Blur (incubating) release candidate.",
    )
    parser.add_argument(
        "version",
        nargs="?",
        default=None,
        help="Release version, e.g. 0.2.4. Prompted for when omitted.",
    )
    parser.add_argument(
        "candidate",
        nargs="?",
        default=None,
        help="Release candidate label, e.g. rc1. Prompted for when omitted.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (logs go to stderr).",
    )
    parser.add_argument(
        "--workdir",
        type=str,
        default=".",
        help="Directory in which the release-<version>-incubating[-<rc>] tree is created.",
    )
    parser.add_argument(
        "--listing-compare",
        type=str,
        default=None,
        dest="listing_compare",
        choices=["exact", "set"],
        help="How the rebuilt source archive listing is compared (default: exact).",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        default=False,
        dest="no_input",
        help="Never prompt; a missing version is an error.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.
    """
    args = build_parser().parse_args(argv)
    sys.exit(handle_validate(args))


if __name__ == "__main__":
    main()
