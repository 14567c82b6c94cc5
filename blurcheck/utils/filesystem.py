# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem operations for blurcheck.

Downloads land through a temp file in the target directory followed by a
rename. Rename on the same filesystem is atomic on POSIX, so an interrupted
download leaves a stray temp file instead of a truncated artifact that a
later check could mistake for the real thing.
"""

import tempfile
from collections.abc import Iterable
from pathlib import Path


def atomic_write_chunks(target_path: Path, chunks: Iterable[bytes]) -> int:
    """
    Write a stream of byte chunks to a file atomically.

    Args:
        target_path: Where the final file should end up.
        chunks: Byte chunks, consumed in order.

    Returns:
        Total number of bytes written.

    Raises:
        OSError: If the write or rename fails. Whatever the chunk iterator
                 raises is propagated after the temp file is removed.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd = tempfile.NamedTemporaryFile(
        mode="wb",
        dir=str(target_path.parent),
        prefix=".blurcheck_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)
    written = 0

    try:
        for chunk in chunks:
            temp_fd.write(chunk)
            written += len(chunk)
        temp_fd.flush()
        temp_fd.close()
        temp_path.rename(target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise

    return written


def read_text_lines(file_path: Path, encoding: str = "utf-8") -> list[str]:
    """
    Read a text file and return its lines with line endings kept.

    Undecodable bytes are replaced rather than raising: LICENSE and NOTICE
    files occasionally carry stray Latin-1 characters, and the checks only
    care about ASCII paths and digits.

    Raises:
        FileNotFoundError: If the path doesn't exist.
        IsADirectoryError: If the path is a directory.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Expected a file, got a directory: {file_path}")
    with open(file_path, encoding=encoding, errors="replace", newline="") as f:
        return f.readlines()
