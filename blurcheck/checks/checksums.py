# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
MD5 and SHA1 verification of staged archives.

Every `.gz` archive in the dist directory ships with `<archive>.md5` and
`<archive>.sha1`. Each must hold exactly one line in the format the release
tooling writes:

    MD5 (<basename>) = <hex>
    <hex>  <basename>

The comparison is an exact string match against the line we render from
the recomputed digest, after dropping the trailing newline. A digest in a
different layout (bare hex, `md5sum` style) fails even if the hash itself
is right.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Optional

from blurcheck.checks.results import CheckResult
from blurcheck.logging.logger import get_logger
from blurcheck.utils.hashing import compute_md5, compute_sha1, format_md5_line, format_sha1_line

_logger = get_logger(__name__)

ARCHIVE_GLOB = "*.gz"


def find_archives(dist_dir: Path) -> list[Path]:
    """All `.gz` files directly under dist_dir, sorted by name."""
    return sorted(p for p in dist_dir.glob(ARCHIVE_GLOB) if p.is_file())


def _read_digest_line(digest_path: Path) -> Optional[str]:
    try:
        content = digest_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    if content.endswith("\r\n"):
        return content[:-2]
    if content.endswith("\n") or content.endswith("\r"):
        return content[:-1]
    return content


def _verify_one(
    archive: Path,
    algorithm: str,
    suffix: str,
    compute: Callable[[Path], str],
    render: Callable[[str, str], str],
) -> CheckResult:
    label = f"{archive.name} - {algorithm}"
    digest_path = archive.with_name(archive.name + suffix)

    proposed = _read_digest_line(digest_path)
    if proposed is None:
        _logger.error("Digest file missing", extra={"file": digest_path.name})
        return CheckResult.fail("checksum", label, detail=f"{digest_path.name} not found")

    actual = render(archive.name, compute(archive))
    if actual == proposed:
        _logger.debug("Digest verified", extra={"file": archive.name, "algorithm": algorithm})
        return CheckResult.from_entries("checksum", label, [])

    _logger.error(
        "Digest mismatch",
        extra={"file": archive.name, "algorithm": algorithm, "expected": proposed, "actual": actual},
    )
    # Hashes are not itemized, the verdict alone says enough.
    return CheckResult.fail("checksum", label, detail="digest mismatch")


def verify_archive_checksums(archive: Path) -> list[CheckResult]:
    """MD5 then SHA1 result for a single archive."""
    return [
        _verify_one(archive, "MD5", ".md5", compute_md5, format_md5_line),
        _verify_one(archive, "SHA1", ".sha1", compute_sha1, format_sha1_line),
    ]


def verify_checksums(dist_dir: Path) -> list[CheckResult]:
    """
    Verify both digests of every archive in dist_dir.

    Archives are independent: a bad or missing digest file fails that
    archive/algorithm pair and the loop moves on.
    """
    results: list[CheckResult] = []
    for archive in find_archives(dist_dir):
        results.extend(verify_archive_checksums(archive))
    return results
