"""Unit tests for the CLI — command registration and basic behavior."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from addonforge.cli.app import app

runner = CliRunner()


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("validate", "info", "compare", "check", "scan"):
            assert command in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()


class TestValidateCommand:
    def test_valid_package(self, make_addon_file):
        path = make_addon_file("addon.zap", "beta", "1.2.0")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "VALID" in result.output

    def test_rejected_package(self, tmp_path: Path):
        path = tmp_path / "addon.zap"
        path.write_bytes(b"junk")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "UNREADABLE_ZIP_FILE" in result.output


class TestInfoCommand:
    def test_info(self, make_addon_file):
        path = make_addon_file("addon.zap", "alpha", "2.8.1", java_version="11")
        result = runner.invoke(app, ["info", str(path)])
        assert result.exit_code == 0
        assert "addon-2.8.1.zap" in result.output
        assert "alpha" in result.output

    def test_info_invalid(self, tmp_path: Path):
        result = runner.invoke(app, ["info", str(tmp_path / "absent.zap")])
        assert result.exit_code == 1
        assert "Invalid add-on" in result.output


class TestCompareCommand:
    def test_update(self, make_addon_file):
        old = make_addon_file("addon.zap", "release", "1.0.0")
        new = make_addon_file("addon.zap", "release", "1.1.0")
        result = runner.invoke(app, ["compare", str(new), str(old)])
        assert result.exit_code == 0
        assert "is an update" in result.output

    def test_not_update(self, make_addon_file):
        old = make_addon_file("addon.zap", "release", "1.0.0")
        new = make_addon_file("addon.zap", "release", "1.1.0")
        result = runner.invoke(app, ["compare", str(old), str(new)])
        assert result.exit_code == 1
        assert "not an update" in result.output

    def test_different_add_ons(self, make_addon_file):
        a = make_addon_file("one.zap")
        b = make_addon_file("two.zap")
        result = runner.invoke(app, ["compare", str(a), str(b)])
        assert result.exit_code == 1
        assert "Cannot compare" in result.output


class TestCheckCommand:
    def test_compatible(self, make_addon_file):
        path = make_addon_file(
            "addon.zap", extra="<not-before-version>2.4.0</not-before-version>"
        )
        result = runner.invoke(app, ["check", str(path), "--host-version", "2.5.0"])
        assert result.exit_code == 0
        assert "can be activated" in result.output

    def test_incompatible_host(self, make_addon_file):
        path = make_addon_file(
            "addon.zap", extra="<not-from-version>2.7.0</not-from-version>"
        )
        result = runner.invoke(app, ["check", str(path), "--host-version", "2.7.0"])
        assert result.exit_code == 1

    def test_missing_dependency(self, make_addon_file, tmp_path: Path):
        path = make_addon_file(
            "addon.zap",
            extra="<dependencies><addons><addon><id>AddOn2</id></addon></addons></dependencies>",
        )
        catalog = tmp_path / "catalog.xml"
        catalog.write_text("<ZAP></ZAP>", encoding="utf-8")
        result = runner.invoke(app, ["check", str(path), "--catalog", str(catalog)])
        assert result.exit_code == 1
        assert "AddOn2" in result.output


class TestScanCommand:
    def test_scan(self, tmp_path: Path, make_addon_file):
        make_addon_file("first.zap", directory=tmp_path)
        make_addon_file("second.zap", directory=tmp_path)
        result = runner.invoke(app, ["scan", str(tmp_path)])
        assert result.exit_code == 0
        assert "first" in result.output
        assert "second" in result.output

    def test_scan_empty(self, tmp_path: Path):
        result = runner.invoke(app, ["scan", str(tmp_path)])
        assert result.exit_code == 0
        assert "No add-on packages" in result.output

    def test_scan_not_a_directory(self, tmp_path: Path):
        result = runner.invoke(app, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 1
