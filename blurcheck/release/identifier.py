# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release input resolution.

The operator supplies a version and an optional release candidate label,
either as positional arguments or by answering prompts. No format checks
are applied to either: the release manager is trusted input, and any
non-empty version string is accepted.

From that input we derive everything else a run needs to know about the
release: the version control tag (which doubles as the working directory
name), the staging URL, and the names of the published source archive and
its extracted root.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal, Optional

from blurcheck.config.schema import ProjectConfig
from blurcheck.exceptions import InputError
from blurcheck.logging.logger import get_logger

_logger = get_logger(__name__)

InputSource = Literal["args", "prompt"]

VERSION_PROMPT = "Enter version:"
CANDIDATE_PROMPT = "Enter release candidate (enter for blank):"


@dataclass(frozen=True)
class ReleaseInput:
    """What the operator asked us to validate, and how we learned it."""

    version: str
    candidate: Optional[str] = None
    source: InputSource = "args"


@dataclass(frozen=True)
class ReleaseIdentifier:
    """Everything derived from a ReleaseInput plus the project settings."""

    version: str
    candidate: Optional[str]
    tag: str
    url: str
    artifact_prefix: str

    @property
    def source_root_name(self) -> str:
        """Top-level directory inside the published source archive."""
        return f"{self.artifact_prefix}-src"

    @property
    def source_archive_name(self) -> str:
        return f"{self.source_root_name}.tar.gz"


def _ask(prompt_fn: Callable[[str], str], message: str) -> str:
    # input() strips the newline already; chomp whatever a custom prompt returns.
    return prompt_fn(message + "\n").rstrip("\r\n")


def resolve_release_input(
    argv: Sequence[str],
    prompt_fn: Optional[Callable[[str], str]] = input,
) -> ReleaseInput:
    """
    Build a ReleaseInput from positional arguments, prompting for the gaps.

    The version comes from argv[0] or a prompt; the candidate from argv[1]
    or a prompt. A blank candidate means "no candidate". `source` records
    "prompt" if either value had to be asked for.

    Args:
        argv: Positional arguments, at most two are used.
        prompt_fn: Called with the prompt text to read one line of input.
                   Pass None to disable prompting entirely.

    Raises:
        InputError: If no non-empty version could be obtained.
    """
    source: InputSource = "args"

    if len(argv) > 0:
        version = argv[0]
    elif prompt_fn is not None:
        version = _ask(prompt_fn, VERSION_PROMPT)
        source = "prompt"
    else:
        raise InputError("A release version is required")

    if len(argv) > 1:
        candidate: Optional[str] = argv[1]
    elif prompt_fn is not None:
        candidate = _ask(prompt_fn, CANDIDATE_PROMPT)
        source = "prompt"
    else:
        candidate = None

    if not version:
        raise InputError("A release version is required")

    return ReleaseInput(version=version, candidate=candidate or None, source=source)


def build_identifier(release: ReleaseInput, project: ProjectConfig) -> ReleaseIdentifier:
    """
    Derive the tag, staging URL and artifact prefix for a release.

    tag:    release-<version>-incubating[-<candidate>]
    url:    <dist_base_url>/<version>-incubating/
    prefix: <project name>-<version>-incubating
    """
    tag = f"release-{release.version}-incubating"
    if release.candidate:
        tag += f"-{release.candidate}"

    url = f"{project.dist_base_url.rstrip('/')}/{release.version}-incubating/"

    identifier = ReleaseIdentifier(
        version=release.version,
        candidate=release.candidate,
        tag=tag,
        url=url,
        artifact_prefix=f"{project.name}-{release.version}-incubating",
    )

    _logger.info(
        "Release resolved",
        extra={"tag": identifier.tag, "url": identifier.url, "input_source": release.source},
    )
    return identifier
