# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for blurcheck tests.

The fixtures stand in for the outside world: config files on disk, a
scripted command runner instead of gpg/git/mvn, and a tarball builder for
source archives with a controlled member order.
"""

import io
import logging
import tarfile
import textwrap
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Union

import pytest

from blurcheck.external.commands import CommandResult

Response = Union[CommandResult, Callable[[tuple[str, ...], Optional[Path]], CommandResult]]


class FakeRunner:
    """
    CommandRunner that answers from a script instead of spawning processes.

    `responses` maps a keyword to a result (or a function producing one);
    the first keyword found among a command's arguments wins. Commands that
    match nothing succeed with empty output. Every call is recorded.
    """

    def __init__(self, responses: Optional[dict[str, Response]] = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[tuple[str, ...], Optional[Path]]] = []

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        argv = tuple(str(a) for a in args)
        self.calls.append((argv, cwd))
        for keyword, response in self.responses.items():
            if keyword in argv:
                return response(argv, cwd) if callable(response) else response
        return CommandResult(args=argv, exit_code=0, output="")


@pytest.fixture()
def make_runner() -> Callable[..., FakeRunner]:
    return FakeRunner


def write_tarball(path: Path, members: Sequence[tuple[str, Optional[bytes]]]) -> Path:
    """
    Write a gzipped tarball with members in exactly the given order.

    A member with content None is a directory.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        for name, content in members:
            info = tarfile.TarInfo(name=name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(content))
    return path


@pytest.fixture()
def make_tarball() -> Callable[[Path, Sequence[tuple[str, Optional[bytes]]]], Path]:
    return write_tarball


@pytest.fixture(autouse=True)
def _reset_package_logger() -> None:
    """Drop handlers installed by configure_logging so tests don't leak streams."""
    yield  # type: ignore[misc]
    logger = logging.getLogger("blurcheck")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (missing config_version)."""
    config_content = textwrap.dedent("""\
        global:
          log_level: "INFO"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
