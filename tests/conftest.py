"""Shared test fixtures for addonforge."""

from __future__ import annotations

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from addonforge.core.catalog import AddOnCatalog
from addonforge.core.validator import ManifestValidator

MANIFEST_NAME = ManifestValidator().manifest_entry_name


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


def build_manifest(
    status: str,
    version: str,
    java_version: str | None = None,
    extra: str = "",
) -> str:
    """Manifest XML with the given status/version and optional extra elements."""
    parts = ["<zapaddon>", f"<version>{version}</version>", f"<status>{status}</status>"]
    if java_version:
        parts.append(f"<dependencies><javaversion>{java_version}</javaversion></dependencies>")
    parts.append(extra)
    parts.append("</zapaddon>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Archive factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_addon_file(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write an add-on archive with a generated manifest.

    Each archive goes into its own sub-directory so the same file name can
    be created more than once per test.
    """
    counter = {"n": 0}

    def _factory(
        file_name: str,
        status: str = "release",
        version: str = "1.0.0",
        java_version: str | None = None,
        extra: str = "",
        directory: Path | None = None,
    ) -> Path:
        if directory is None:
            counter["n"] += 1
            directory = tmp_dir / f"pkg{counter['n']}"
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / file_name
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr(MANIFEST_NAME, build_manifest(status, version, java_version, extra))
        return path

    return _factory


@pytest.fixture
def make_zip(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a zip with arbitrary ``{entry: content}`` entries."""

    def _factory(file_name: str, entries: dict[str, str | bytes]) -> Path:
        path = tmp_dir / file_name
        with zipfile.ZipFile(path, "w") as zf:
            for name, content in entries.items():
                zf.writestr(name, content)
        return path

    return _factory


# ---------------------------------------------------------------------------
# Release catalog
# ---------------------------------------------------------------------------

CATALOG_XML = """
<ZAP>
    <addon>AddOn1</addon>
    <addon_AddOn1>
        <name>Add-on 1</name>
        <version>1.0.0</version>
        <status>release</status>
        <file>AddOn1-release-1.zap</file>
        <dependencies>
            <addons>
                <addon><id>AddOn2</id></addon>
                <addon><id>AddOn3</id></addon>
            </addons>
        </dependencies>
    </addon_AddOn1>
    <addon>AddOn2</addon>
    <addon_AddOn2>
        <version>1.0.0</version>
        <status>beta</status>
        <file>AddOn2-beta-1.zap</file>
    </addon_AddOn2>
    <addon>AddOn3</addon>
    <addon_AddOn3>
        <version>2.1.0</version>
        <status>release</status>
        <file>AddOn3-release-2.zap</file>
        <dependencies>
            <addons>
                <addon><id>AddOn8</id></addon>
            </addons>
        </dependencies>
    </addon_AddOn3>
    <addon>AddOn8</addon>
    <addon_AddOn8>
        <version>1.0.0</version>
        <status>alpha</status>
        <file>AddOn8-alpha-1.zap</file>
    </addon_AddOn8>
    <addon>AddOn9</addon>
    <addon_AddOn9>
        <version>1.0.0</version>
        <status>release</status>
        <file>AddOn9-release-1.zap</file>
        <dependencies>
            <addons>
                <addon><id>AddOn2</id></addon>
            </addons>
        </dependencies>
    </addon_AddOn9>
</ZAP>
"""


@pytest.fixture
def catalog() -> AddOnCatalog:
    """Catalog where AddOn1 -> {AddOn2, AddOn3}, AddOn3 -> AddOn8, AddOn9 -> AddOn2."""
    return AddOnCatalog.from_xml(CATALOG_XML)
