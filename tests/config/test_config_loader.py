# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

We test:
  1. No path means the built-in defaults
  2. Valid YAML loads into a frozen, correct config object
  3. Missing required fields and unknown keys raise ConfigValidationError
  4. Broken or missing files raise ConfigLoadError
"""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from blurcheck.config.exceptions import ConfigLoadError, ConfigValidationError
from blurcheck.config.loader import load_config
from blurcheck.config.schema import DEFAULT_VENDOR_DIRS

SAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "blurcheck.yaml"


class TestDefaults:
    def test_no_path_returns_defaults(self) -> None:
        config = load_config(None)
        assert config.project.name == "apache-blur"
        assert config.checks.listing_compare == "exact"
        assert config.checks.vendor_dirs == list(DEFAULT_VENDOR_DIRS)
        assert config.tools.build_command == ["mvn", "install", "-Dhadoop2", "-DskipTests"]
        assert config.global_config.log_level == "WARNING"

    def test_sample_config_matches_defaults(self) -> None:
        assert load_config(SAMPLE_CONFIG) == load_config(None)


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.config_version == "1.0.0"
        assert config.global_config.log_level == "DEBUG"
        assert config.project.http_timeout_seconds == 30.0

    def test_overrides_are_applied(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              log_level: "info"
            checks:
              listing_compare: "set"
              script_suffix: ".ts"
            tools:
              signature_command: ["gpg2", "--verify"]
        """)
        config_file = tmp_path / "override.yaml"
        config_file.write_text(content, encoding="utf-8")

        config = load_config(config_file)
        assert config.global_config.log_level == "INFO"
        assert config.checks.listing_compare == "set"
        assert config.checks.script_suffix == ".ts"
        assert config.tools.signature_command == ["gpg2", "--verify"]

    def test_config_is_frozen(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(ValidationError):
            config.checks.listing_compare = "set"  # type: ignore[misc]


class TestInvalidConfig:
    def test_missing_required_field(self, invalid_config_file: Path) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "extra.yaml"
        config_file.write_text(
            'global:\n  config_version: "1.0.0"\n  surprise: true\n', encoding="utf-8"
        )
        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_unknown_compare_mode_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "mode.yaml"
        config_file.write_text(
            'global:\n  config_version: "1.0.0"\nchecks:\n  listing_compare: "fuzzy"\n',
            encoding="utf-8",
        )
        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_bad_log_level_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "level.yaml"
        config_file.write_text(
            'global:\n  config_version: "1.0.0"\n  log_level: "LOUD"\n', encoding="utf-8"
        )
        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_broken_yaml(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(config_file)
