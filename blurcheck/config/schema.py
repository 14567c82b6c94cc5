# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for blurcheck.

Every section of the YAML file gets its own frozen pydantic model. Frozen
means once you create it, you cannot mutate it. A validation run reads its
settings once at startup and never changes them.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every field has a default matching the Apache Blur release process, so
running without a config file is the normal case.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blurcheck.logging.logger import DEFAULT_LOG_LEVEL, resolve_log_level

ListingCompareMode = Literal["exact", "set"]

DEFAULT_VENDOR_DIRS: tuple[str, ...] = (
    "blur-console/src/main/webapp/libs",
    "blur-console/src/main/webapp/js/utils",
    "blur-gui/src/main/webapp/js",
)


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        resolve_log_level(value)
        return value.upper()


class ProjectConfig(BaseModel):
    """Where the release lives: artifact naming, staging area, source repository."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    name: str = Field(
        default="apache-blur",
        description="Artifact name prefix, e.g. apache-blur-<version>-incubating-src.tar.gz",
    )
    dist_base_url: str = Field(
        default="https://dist.apache.org/repos/dist/dev/incubator/blur/",
        description="Staging root; the release directory is <base>/<version>-incubating/",
    )
    repo_url: str = Field(
        default="https://git-wip-us.apache.org/repos/asf/incubator-blur.git",
        description="Version control URL cloned for the rebuild check",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Read timeout for the index page and each artifact download",
    )


class ChecksConfig(BaseModel):
    """Knobs for the individual verification checks."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    listing_compare: ListingCompareMode = Field(
        default="exact",
        description=(
            "'exact' passes the rebuild check only when both archive listings are "
            "identical including member order; 'set' ignores order"
        ),
    )
    vendor_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VENDOR_DIRS),
        description="Vendored script directories whose files must be named in LICENSE",
    )
    script_suffix: str = Field(
        default=".js",
        description="File suffix of vendored scripts",
    )
    build_output_dir: str = Field(
        default="distribution/target",
        description="Where the build drops the rebuilt source archive, relative to the checkout",
    )


class ToolsConfig(BaseModel):
    """External command lines. Arguments are appended by the checks."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    signature_command: list[str] = Field(
        default_factory=lambda: ["gpg", "--verify"],
        min_length=1,
        description="Detached signature verifier; invoked as <cmd> <file>.asc <file>",
    )
    git_executable: str = Field(default="git", description="Version control client")
    build_command: list[str] = Field(
        default_factory=lambda: ["mvn", "install", "-Dhadoop2", "-DskipTests"],
        min_length=1,
        description="Build invoked from the checkout root",
    )


class BlurCheckConfig(BaseModel):
    """
    Top-level config container.

    A YAML file needs only `global:` with a config_version; every other
    section falls back to the defaults above.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, populate_by_name=True
    )

    global_config: GlobalConfig = Field(
        alias="global", default_factory=lambda: GlobalConfig(config_version="1.0.0")
    )
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    checks: ChecksConfig = Field(default_factory=ChecksConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
