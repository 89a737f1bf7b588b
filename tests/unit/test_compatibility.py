"""Tests for the compatibility gate — host bounds and minimum Java version."""

from __future__ import annotations

import pytest

from addonforge.core.compatibility import (
    CompatibilityGate,
    can_load_in_version,
    can_run_in_java_version,
)
from addonforge.models.descriptor import PackageDescriptor
from addonforge.models.versioning import RuntimeVersion, Version


def _addon(not_before: str | None = None, not_from: str | None = None) -> PackageDescriptor:
    return PackageDescriptor.from_file_name("test-alpha-1.zap").model_copy(
        update={
            "not_before_version": Version.parse(not_before) if not_before else None,
            "not_from_version": Version.parse(not_from) if not_from else None,
        }
    )


class TestCanLoadInVersion:
    def test_no_bounds(self):
        assert can_load_in_version(_addon(), "1.0.0") is True

    @pytest.mark.parametrize(
        ("host", "expected"),
        [("2.4.0", True), ("2.5.0", True), ("1.4.0", False), ("2.0.alpha", False)],
    )
    def test_not_before(self, host, expected):
        assert can_load_in_version(_addon(not_before="2.4.0"), host) is expected

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("2.4.0", True),
            ("2.5.0", True),
            ("2.7.0", True),
            ("2.8.0", False),
            ("2.8.0.1", False),
            ("2.9.0", False),
        ],
    )
    def test_not_from(self, host, expected):
        assert can_load_in_version(_addon("2.4.0", "2.8.0"), host) is expected

    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("2.4.0", True),
            ("2.5.0", True),
            ("2.6.0", True),
            ("2.7.0", False),
            ("2.7.0.1", False),
            ("2.8.0", False),
        ],
    )
    def test_not_before_not_from(self, host, expected):
        assert can_load_in_version(_addon("2.4.0", "2.7.0"), host) is expected

    def test_unparseable_host_without_bounds(self):
        assert can_load_in_version(_addon(), "dev build") is False

    def test_oversized_host_component(self):
        assert can_load_in_version(_addon(), "9" * 5000) is False
        assert can_load_in_version(_addon("2.4.0"), "2." + "9" * 5000) is False

    def test_accepts_version_instance(self):
        assert can_load_in_version(_addon("2.4.0"), Version.parse("2.4")) is True


class TestCanRunInJavaVersion:
    def _with_java(self, required: str | None) -> PackageDescriptor:
        return PackageDescriptor.from_file_name("addon-release-2.zap").model_copy(
            update={"min_java_version": RuntimeVersion.parse(required) if required else None}
        )

    def test_no_minimum(self):
        assert can_run_in_java_version(self._with_java(None), "1.8") is True

    @pytest.mark.parametrize(
        ("required", "running", "expected"),
        [
            ("1.8", "9", True),
            ("1.8", "9.1.2", True),
            ("1.8", "1.8", True),
            ("1.8", "1.7", False),
            ("10", "9", False),
            ("10", "9.1.2", False),
            ("11", "11.0.2", True),
            ("11", "17-ea", True),
        ],
    )
    def test_minimum(self, required, running, expected):
        assert can_run_in_java_version(self._with_java(required), running) is expected

    def test_unparseable_runtime(self):
        assert can_run_in_java_version(self._with_java("11"), "unknown") is False

    def test_oversized_runtime_component(self):
        assert can_run_in_java_version(self._with_java("11"), "9" * 5000) is False


class TestCompatibilityGate:
    def test_unset_versions_are_not_checked(self):
        gate = CompatibilityGate()
        addon = _addon("9.0.0")
        assert gate.can_load(addon) is True
        assert gate.can_run(addon) is True
        assert gate.issues(addon) == []

    def test_issues(self):
        addon = _addon("2.4.0", "2.7.0").model_copy(
            update={"min_java_version": RuntimeVersion.parse("17")}
        )
        issues = CompatibilityGate(host_version="2.7.0", java_version="11").issues(addon)
        assert len(issues) == 2
        assert "host version 2.7.0" in issues[0]
        assert "Java 17" in issues[1]
