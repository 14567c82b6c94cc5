# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
LICENSE completeness checks over the extracted source tree.

Two independent directions:

  references exist: every LICENSE line starting with "./" names a bundled
                    file, and that file must be in the tree.
  scripts declared: every script in a vendored-library directory must be
                    named in LICENSE, as "<dir>/<file>" anywhere in the text.

The second check only looks at files directly inside each directory, not
at subdirectories.
"""

from collections.abc import Sequence
from pathlib import Path

from blurcheck.checks.results import CheckResult
from blurcheck.logging.logger import get_logger
from blurcheck.utils.filesystem import read_text_lines

_logger = get_logger(__name__)

LICENSE_FILE = "LICENSE"
REFERENCE_PREFIX = "./"


def find_missing_references(license_lines: Sequence[str], source_root: Path) -> list[str]:
    """
    LICENSE path references that don't exist under source_root.

    Returned entries are the reference lines as written, line ending removed.
    """
    missing: list[str] = []
    for line in license_lines:
        if not line.startswith(REFERENCE_PREFIX):
            continue
        reference = line.rstrip("\r\n")
        if not (source_root / reference).exists():
            missing.append(reference)
    return missing


def find_undeclared_scripts(
    license_text: str,
    source_root: Path,
    vendor_dirs: Sequence[str],
    script_suffix: str,
) -> list[str]:
    """
    Vendored scripts whose "<dir>/<file>" path never appears in LICENSE.

    Directories missing from the tree are skipped, not reported.
    """
    undeclared: list[str] = []
    for vendor_dir in vendor_dirs:
        directory = source_root / vendor_dir
        if not directory.is_dir():
            _logger.debug("Vendor directory absent", extra={"dir": vendor_dir})
            continue
        for script in sorted(directory.iterdir()):
            if not script.is_file() or not script.name.endswith(script_suffix):
                continue
            relative = f"{vendor_dir.rstrip('/')}/{script.name}"
            if relative not in license_text:
                undeclared.append(relative)
    return undeclared


def check_license(
    source_root: Path,
    vendor_dirs: Sequence[str],
    script_suffix: str,
) -> list[CheckResult]:
    """
    Both LICENSE checks. A LICENSE that can't be read errors both.
    """
    exists_label = "All License File Libs exist"
    declared_label = "All Libs in License File"

    license_path = source_root / LICENSE_FILE
    try:
        lines = read_text_lines(license_path)
    except OSError as err:
        _logger.error("LICENSE unreadable", extra={"path": str(license_path), "error": str(err)})
        detail = f"cannot read {license_path}: {err}"
        return [
            CheckResult.error("license_references", exists_label, detail=detail),
            CheckResult.error("license_declarations", declared_label, detail=detail),
        ]

    missing = find_missing_references(lines, source_root)
    undeclared = find_undeclared_scripts("".join(lines), source_root, vendor_dirs, script_suffix)

    _logger.info(
        "LICENSE checked",
        extra={"missing_references": len(missing), "undeclared_scripts": len(undeclared)},
    )

    return [
        CheckResult.from_entries(
            "license_references",
            exists_label if not missing else "License File Libs missing",
            missing,
        ),
        CheckResult.from_entries(
            "license_declarations",
            declared_label if not undeclared else "Libs missing from License File",
            undeclared,
        ),
    ]
