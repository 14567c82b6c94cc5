# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Per-release working directory.

Each run starts from nothing: the `<tag>` directory is destroyed and
`<tag>/dist` (downloaded artifacts, extracted source) and `<tag>/src`
(clone + build) are recreated. The directory is left behind afterwards for
manual inspection.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path

from blurcheck.exceptions import WorkspaceError
from blurcheck.logging.logger import get_logger
from blurcheck.release.identifier import ReleaseIdentifier

_logger = get_logger(__name__)


@dataclass(frozen=True)
class WorkspaceLayout:
    """Paths every stage of the pipeline reads from or writes to."""

    root: Path
    dist_dir: Path
    src_dir: Path

    @classmethod
    def for_tag(cls, workdir: Path, tag: str) -> "WorkspaceLayout":
        root = workdir / tag
        return cls(root=root, dist_dir=root / "dist", src_dir=root / "src")

    def published_source_archive(self, release: ReleaseIdentifier) -> Path:
        return self.dist_dir / release.source_archive_name

    def rebuilt_source_archive(self, release: ReleaseIdentifier, build_output_dir: str) -> Path:
        return self.src_dir / build_output_dir / release.source_archive_name

    def extracted_source_root(self, release: ReleaseIdentifier) -> Path:
        return self.dist_dir / release.source_root_name


def prepare_workspace(workdir: Path, tag: str) -> WorkspaceLayout:
    """
    Reset `<workdir>/<tag>` and create its dist/ and src/ subdirectories.

    Raises:
        WorkspaceError: If the old tree can't be removed or the new one created.
    """
    layout = WorkspaceLayout.for_tag(workdir, tag)

    try:
        if layout.root.exists():
            _logger.info("Removing previous workspace", extra={"path": str(layout.root)})
            shutil.rmtree(layout.root)
        layout.dist_dir.mkdir(parents=True)
        layout.src_dir.mkdir(parents=True)
    except OSError as err:
        raise WorkspaceError(f"Cannot prepare workspace {layout.root}: {err}") from err

    _logger.info("Workspace ready", extra={"path": str(layout.root)})
    return layout
