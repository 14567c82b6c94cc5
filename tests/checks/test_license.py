# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the LICENSE completeness checks."""

from pathlib import Path

from blurcheck.checks.license import check_license, find_missing_references, find_undeclared_scripts
from blurcheck.checks.results import CheckStatus
from blurcheck.config.schema import DEFAULT_VENDOR_DIRS

GUI_JS = "blur-gui/src/main/webapp/js"
CONSOLE_LIBS = "blur-console/src/main/webapp/libs"


def _touch(root: Path, relative: str, content: str = "") -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestMissingReferences:
    def test_absent_reference_reported_once(self, tmp_path: Path) -> None:
        lines = ["Apache License\n", "./foo/bar.jar\n", "  ./indented/is/not/a/reference.jar\n"]

        assert find_missing_references(lines, tmp_path) == ["./foo/bar.jar"]

    def test_present_reference_passes(self, tmp_path: Path) -> None:
        _touch(tmp_path, "foo/bar.jar")
        assert find_missing_references(["./foo/bar.jar\r\n"], tmp_path) == []

    def test_directory_reference_counts_as_present(self, tmp_path: Path) -> None:
        (tmp_path / "docs" / "licenses").mkdir(parents=True)
        assert find_missing_references(["./docs/licenses"], tmp_path) == []


class TestUndeclaredScripts:
    def test_undeclared_script_reported_once(self, tmp_path: Path) -> None:
        _touch(tmp_path, f"{GUI_JS}/app.js")
        _touch(tmp_path, f"{GUI_JS}/declared.js")

        undeclared = find_undeclared_scripts(
            f"This bundles {GUI_JS}/declared.js under MIT.\n", tmp_path, DEFAULT_VENDOR_DIRS, ".js"
        )

        assert undeclared == [f"{GUI_JS}/app.js"]

    def test_substring_anywhere_counts(self, tmp_path: Path) -> None:
        _touch(tmp_path, f"{CONSOLE_LIBS}/d3.min.js")
        text = f"d3 ({CONSOLE_LIBS}/d3.min.js, BSD)"
        assert find_undeclared_scripts(text, tmp_path, DEFAULT_VENDOR_DIRS, ".js") == []

    def test_other_suffixes_and_subdirectories_ignored(self, tmp_path: Path) -> None:
        _touch(tmp_path, f"{GUI_JS}/style.css")
        _touch(tmp_path, f"{GUI_JS}/nested/deep.js")
        assert find_undeclared_scripts("", tmp_path, DEFAULT_VENDOR_DIRS, ".js") == []

    def test_absent_vendor_directories_are_skipped(self, tmp_path: Path) -> None:
        assert find_undeclared_scripts("", tmp_path, DEFAULT_VENDOR_DIRS, ".js") == []


class TestCheckLicense:
    def test_both_checks_pass(self, tmp_path: Path) -> None:
        _touch(tmp_path, "lib/x.jar")
        _touch(tmp_path, f"{GUI_JS}/app.js")
        _touch(tmp_path, "LICENSE", f"./lib/x.jar\nBundles {GUI_JS}/app.js\n")

        references, declarations = check_license(tmp_path, DEFAULT_VENDOR_DIRS, ".js")

        assert references.status is CheckStatus.PASS
        assert references.label == "All License File Libs exist"
        assert declarations.status is CheckStatus.PASS
        assert declarations.label == "All Libs in License File"

    def test_checks_fail_independently(self, tmp_path: Path) -> None:
        _touch(tmp_path, f"{GUI_JS}/app.js")
        _touch(tmp_path, "LICENSE", f"./lib/gone.jar\nBundles {GUI_JS}/app.js\n")

        references, declarations = check_license(tmp_path, DEFAULT_VENDOR_DIRS, ".js")

        assert references.status is CheckStatus.FAIL
        assert references.label == "License File Libs missing"
        assert references.entries == ["./lib/gone.jar"]
        assert declarations.status is CheckStatus.PASS

    def test_missing_license_errors_both(self, tmp_path: Path) -> None:
        results = check_license(tmp_path, DEFAULT_VENDOR_DIRS, ".js")
        assert [r.status for r in results] == [CheckStatus.ERROR, CheckStatus.ERROR]
