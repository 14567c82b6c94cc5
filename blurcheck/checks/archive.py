# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Source archive listing and extraction.

Listings keep the member order stored in the archive, which is what the
rebuild comparison's exact mode relies on. Extraction validates every
member first: the archive under test is untrusted until the checks say
otherwise, so absolute paths, `..` components and links that escape the
target directory are skipped.
"""

import tarfile
from pathlib import Path

from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)


class ArchiveError(Exception):
    """Raised when an archive is missing or cannot be read."""


def list_members(archive_path: Path) -> list[str]:
    """
    Member names of a tar archive in stored order.

    Directory members carry a trailing slash, matching `tar -tf` output.

    Raises:
        ArchiveError: If the archive is missing or unreadable.
    """
    if not archive_path.is_file():
        raise ArchiveError(f"Archive not found: {archive_path}")

    try:
        with tarfile.open(archive_path, "r:*") as tar:
            return [m.name + "/" if m.isdir() else m.name for m in tar.getmembers()]
    except (tarfile.TarError, OSError) as err:
        raise ArchiveError(f"Cannot read archive {archive_path}: {err}") from err


def _is_safe_member(member: tarfile.TarInfo, extract_dir: Path) -> bool:
    if member.name.startswith("/") or member.name.startswith("\\"):
        return False

    if ".." in member.name.split("/"):
        return False

    resolved = (extract_dir / member.name).resolve()
    try:
        resolved.relative_to(extract_dir.resolve())
    except ValueError:
        return False

    if member.issym() or member.islnk():
        link_target = (extract_dir / member.name).parent / member.linkname
        if member.islnk():
            link_target = extract_dir / member.linkname
        try:
            link_target.resolve().relative_to(extract_dir.resolve())
        except ValueError:
            return False

    return not (member.ischr() or member.isblk() or member.isfifo() or member.isdev())


def extract_archive(archive_path: Path, extract_dir: Path) -> int:
    """
    Extract a tar archive into extract_dir, skipping unsafe members.

    Returns:
        Number of regular files extracted.

    Raises:
        ArchiveError: If the archive is missing or unreadable.
    """
    if not archive_path.is_file():
        raise ArchiveError(f"Archive not found: {archive_path}")

    extract_dir.mkdir(parents=True, exist_ok=True)
    file_count = 0

    try:
        with tarfile.open(archive_path, "r:*") as tar:
            for member in tar.getmembers():
                if not _is_safe_member(member, extract_dir):
                    _logger.warning("Skipping unsafe archive member", extra={"member": member.name})
                    continue
                tar.extract(member, path=extract_dir, set_attrs=False)
                if member.isfile():
                    file_count += 1
    except (tarfile.TarError, OSError) as err:
        raise ArchiveError(f"Cannot extract archive {archive_path}: {err}") from err

    _logger.info(
        "Archive extracted",
        extra={"archive": archive_path.name, "files": file_count, "target": str(extract_dir)},
    )
    return file_count
