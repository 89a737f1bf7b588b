"""Add-on manifest schema and its XML reader.

The manifest is an XML document stored inside the package archive::

    <zapaddon>
        <version>1.2.0</version>
        <status>beta</status>
        <not-before-version>2.4.0</not-before-version>
        <dependencies>
            <javaversion>1.8</javaversion>
            <addons><addon><id>commonlib</id></addon></addons>
        </dependencies>
        <bundle prefix="msgs">org.example.Messages</bundle>
        <helpset localetoken="%LC%">org.example.help%LC%.helpset</helpset>
    </zapaddon>

The same element layout is used for the entries of a release catalog, so
``AddOnManifest.from_element`` serves both.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from pydantic import BaseModel, ConfigDict

from addonforge.core.errors import ParseError
from addonforge.models.status import AddOnStatus
from addonforge.models.versioning import RuntimeVersion, Version

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_ROOT = "zapaddon"


# ---------------------------------------------------------------------------
# Resource metadata blocks
# ---------------------------------------------------------------------------

class BundleData(BaseModel):
    """Declared resource bundle: base name plus optional key prefix."""

    model_config = ConfigDict(frozen=True)

    base_name: str = ""
    prefix: str = ""

    @property
    def is_empty(self) -> bool:
        return self.base_name == ""


class HelpSetData(BaseModel):
    """Declared help set: base name plus optional locale token."""

    model_config = ConfigDict(frozen=True)

    base_name: str = ""
    locale_token: str = ""

    @property
    def is_empty(self) -> bool:
        return self.base_name == ""


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class AddOnManifest(BaseModel):
    """Parsed contents of an add-on manifest.

    Examples
    --------
    >>> manifest = AddOnManifest.from_xml(
    ...     b"<zapaddon><version>1.6.7</version><status>beta</status></zapaddon>"
    ... )
    >>> manifest.status
    <AddOnStatus.BETA: 'beta'>
    >>> str(manifest.version)
    '1.6.7'
    >>> manifest.bundle.is_empty
    True
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str = ""
    description: str = ""
    author: str = ""
    url: str = ""
    changes: str = ""
    version: Version
    status: AddOnStatus
    not_before_version: Version | None = None
    not_from_version: Version | None = None
    java_version: RuntimeVersion | None = None
    dependencies: tuple[str, ...] = ()
    bundle: BundleData = BundleData()
    helpset: HelpSetData = HelpSetData()

    @classmethod
    def from_xml(cls, data: bytes | str, root: str = DEFAULT_MANIFEST_ROOT) -> AddOnManifest:
        """Parse manifest XML.

        Raises
        ------
        xml.etree.ElementTree.ParseError
            If *data* is not well-formed XML (an empty document included).
        ParseError
            If the root element is wrong or a required field is missing or
            malformed.
        """
        element = ET.fromstring(data)
        if element.tag != root:
            raise ParseError(
                f"Manifest root element is <{element.tag}>, expected <{root}>."
            )
        return cls.from_element(element)

    @classmethod
    def from_element(cls, element: ET.Element) -> AddOnManifest:
        """Build a manifest from an already parsed element tree."""
        version_text = _required_text(element, "version")
        status_text = _required_text(element, "status")

        manifest_id = _optional_text(element, "id")
        if manifest_id is not None:
            check_add_on_id(manifest_id)

        java_version = None
        dependencies: list[str] = []
        deps = element.find("dependencies")
        if deps is not None:
            java_text = _optional_text(deps, "javaversion")
            if java_text:
                java_version = RuntimeVersion.parse(java_text)
            for addon in deps.findall("addons/addon"):
                dep_id = _required_text(addon, "id")
                check_add_on_id(dep_id)
                if dep_id not in dependencies:
                    dependencies.append(dep_id)

        return cls(
            id=manifest_id,
            name=_optional_text(element, "name") or "",
            description=_optional_text(element, "description") or "",
            author=_optional_text(element, "author") or "",
            url=_optional_text(element, "url") or "",
            changes=_optional_text(element, "changes") or "",
            version=Version.parse(version_text),
            status=AddOnStatus.parse(status_text),
            not_before_version=_optional_version(element, "not-before-version"),
            not_from_version=_optional_version(element, "not-from-version"),
            java_version=java_version,
            dependencies=tuple(dependencies),
            bundle=_read_bundle(element),
            helpset=_read_helpset(element),
        )


def check_add_on_id(add_on_id: str) -> str:
    """Return *add_on_id* unchanged, or raise ``ParseError`` if unusable."""
    if not add_on_id:
        raise ParseError("Add-on id must not be empty.")
    if "/" in add_on_id or "\\" in add_on_id:
        raise ParseError(f"Add-on id {add_on_id!r} must not contain path separators.")
    return add_on_id


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------

def _optional_text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None:
        return None
    return (child.text or "").strip()


def _required_text(element: ET.Element, tag: str) -> str:
    text = _optional_text(element, tag)
    if not text:
        raise ParseError(f"Manifest element <{tag}> is missing or empty.")
    return text


def _optional_version(element: ET.Element, tag: str) -> Version | None:
    text = _optional_text(element, tag)
    if not text:
        return None
    return Version.parse(text)


def _read_bundle(element: ET.Element) -> BundleData:
    child = element.find("bundle")
    if child is None:
        return BundleData()
    base_name = (child.text or "").strip()
    if not base_name:
        raise ParseError("Manifest element <bundle> must declare a base name.")
    return BundleData(base_name=base_name, prefix=child.get("prefix", ""))


def _read_helpset(element: ET.Element) -> HelpSetData:
    child = element.find("helpset")
    if child is None:
        return HelpSetData()
    base_name = (child.text or "").strip()
    if not base_name:
        raise ParseError("Manifest element <helpset> must declare a base name.")
    logger.debug("Manifest declares help set %s.", base_name)
    return HelpSetData(base_name=base_name, locale_token=child.get("localetoken", ""))
