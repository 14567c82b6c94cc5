# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hashing utilities for blurcheck.

Apache release artifacts ship MD5 and SHA1 digest files next to each
archive. These helpers compute the digests in chunks and render them in the
exact line formats the release tooling writes, so verification is a plain
string comparison.
"""

import hashlib
from pathlib import Path

HASH_BUFFER_SIZE = 65536  # 64 KiB


def compute_digest(file_path: Path, algorithm: str) -> str:
    """
    Compute the hex digest of a file with the given hashlib algorithm.

    Reads the file in chunks so multi-hundred-megabyte binary archives never
    sit in memory at once.

    Args:
        file_path: Path to the file to hash.
        algorithm: Any name accepted by hashlib.new, e.g. "md5" or "sha1".

    Returns:
        Lowercase hex string of the digest.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the file can't be read.
    """
    hasher = hashlib.new(algorithm)
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(HASH_BUFFER_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest()


def compute_md5(file_path: Path) -> str:
    return compute_digest(file_path, "md5")


def compute_sha1(file_path: Path) -> str:
    return compute_digest(file_path, "sha1")


def format_md5_line(file_name: str, digest: str) -> str:
    """BSD-style line: `MD5 (<name>) = <hex>`."""
    return f"MD5 ({file_name}) = {digest}"


def format_sha1_line(file_name: str, digest: str) -> str:
    """GNU coreutils line: `<hex>  <name>`, two spaces between hash and name."""
    return f"{digest}  {file_name}"
