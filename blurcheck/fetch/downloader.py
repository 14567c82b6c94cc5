# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Artifact download from the staging area.

One GET for the index page, then one streamed GET per artifact. There is no
retry: a network error aborts the whole run, and the next run starts again
from a clean workspace. Progress is reported through a callback invoked
after every chunk, which is how the console shows "<fetched> of <total>"
while the blocking download is in flight.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from http.client import HTTPException
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from blurcheck import __version__
from blurcheck.exceptions import FetchError
from blurcheck.fetch.index import find_artifact_names
from blurcheck.logging.logger import get_logger
from blurcheck.utils.filesystem import atomic_write_chunks

_logger = get_logger(__name__)

_STREAM_CHUNK_SIZE = 65536
_USER_AGENT = f"blurcheck/{__version__}"

# (index, total) before each download starts.
StartCallback = Callable[[int, int], None]
# (bytes fetched so far, content length or None when the server didn't say).
ProgressCallback = Callable[[int, Optional[int]], None]


@dataclass(frozen=True)
class FetchedArtifact:
    name: str
    path: Path
    size: int


def _open(url: str, timeout: float):  # type: ignore[no-untyped-def]
    try:
        req = Request(url, headers={"User-Agent": _USER_AGENT}, method="GET")
        return urlopen(req, timeout=timeout)
    except HTTPError as err:
        raise FetchError(f"HTTP {err.code} fetching {url}") from err
    except (URLError, OSError, HTTPException, ValueError) as err:
        raise FetchError(f"Cannot fetch {url}: {err}") from err


def fetch_index(url: str, timeout: float) -> str:
    """
    Download the staging directory listing as text.

    Raises:
        FetchError: On any HTTP or network failure.
    """
    with _open(url, timeout) as resp:
        try:
            body = resp.read()
        except (OSError, HTTPException) as err:
            raise FetchError(f"Cannot read index {url}: {err}") from err
        charset = resp.headers.get_content_charset() or "utf-8"
    try:
        return body.decode(charset, errors="replace")
    except LookupError:
        _logger.warning("Unknown index charset", extra={"url": url, "charset": charset})
        return body.decode("utf-8", errors="replace")


def _content_length(resp) -> Optional[int]:  # type: ignore[no-untyped-def]
    raw = resp.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def download_file(
    url: str,
    target_path: Path,
    timeout: float,
    on_progress: Optional[ProgressCallback] = None,
) -> int:
    """
    Stream one file to disk, reporting progress after each chunk.

    Returns:
        Number of bytes written.

    Raises:
        FetchError: On any HTTP or network failure. No partial file is left behind.
    """
    with _open(url, timeout) as resp:
        total = _content_length(resp)

        def _chunks() -> Iterator[bytes]:
            fetched = 0
            while True:
                try:
                    chunk = resp.read(_STREAM_CHUNK_SIZE)
                except (OSError, HTTPException) as err:
                    raise FetchError(f"Download interrupted for {url}: {err}") from err
                if not chunk:
                    break
                fetched += len(chunk)
                if on_progress is not None:
                    on_progress(fetched, total)
                yield chunk

        size = atomic_write_chunks(target_path, _chunks())

    _logger.info(
        "Downloaded artifact",
        extra={"file": target_path.name, "bytes": size, "content_length": total},
    )
    return size


def fetch_artifacts(
    url: str,
    artifact_prefix: str,
    dist_dir: Path,
    timeout: float,
    on_start: Optional[StartCallback] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> list[FetchedArtifact]:
    """
    Download every artifact listed under `url` whose name starts with the prefix.

    Digest and signature files (.md5, .sha1, .asc) carry the same prefix, so
    they come along without being asked for.

    Raises:
        FetchError: On any HTTP or network failure.
    """
    index_html = fetch_index(url, timeout)
    names = find_artifact_names(index_html, artifact_prefix)

    _logger.info("Artifacts listed", extra={"url": url, "count": len(names)})
    if not names:
        _logger.warning("No artifacts matched", extra={"url": url, "prefix": artifact_prefix})

    base_url = url.rstrip("/") + "/"
    fetched: list[FetchedArtifact] = []
    for idx, name in enumerate(names, start=1):
        if on_start is not None:
            on_start(idx, len(names))
        target = dist_dir / name
        size = download_file(base_url + name, target, timeout, on_progress)
        fetched.append(FetchedArtifact(name=name, path=target, size=size))

    return fetched
