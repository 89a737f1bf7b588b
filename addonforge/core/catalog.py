"""Release catalog — the published list of add-ons and their manifests.

A catalog is an XML document listing add-on ids and, for each one, an
``addon_<id>`` element with the same children as a manifest::

    <ZAP>
        <addon>commonlib</addon>
        <addon_commonlib>
            <version>1.2.0</version>
            <status>release</status>
            <file>commonlib-release-1.2.0.zap</file>
        </addon_commonlib>
    </ZAP>

Catalog entries become detached descriptors: they describe add-ons that are
published but not necessarily present on disk.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from addonforge.core.errors import ParseError
from addonforge.models.descriptor import PackageDescriptor
from addonforge.models.manifest import AddOnManifest

logger = logging.getLogger(__name__)

_ENTRY_PREFIX = "addon_"


class AddOnCatalog:
    """Id-keyed collection of published add-on descriptors.

    Examples
    --------
    >>> catalog = AddOnCatalog.from_xml(
    ...     "<ZAP><addon>a</addon><addon_a><version>1</version>"
    ...     "<status>beta</status></addon_a></ZAP>"
    ... )
    >>> catalog.get("a").status.value
    'beta'
    >>> "b" in catalog
    False
    """

    def __init__(self, descriptors: dict[str, PackageDescriptor] | None = None) -> None:
        self._descriptors: dict[str, PackageDescriptor] = dict(descriptors or {})

    @classmethod
    def from_xml(cls, data: bytes | str) -> AddOnCatalog:
        """Parse a catalog document.

        Entries whose manifest data is invalid are logged and skipped; a
        document that is not well-formed raises ``ParseError``.
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise ParseError(f"Catalog is not well-formed XML: {exc}") from exc

        entries = {child.tag: child for child in root}
        descriptors: dict[str, PackageDescriptor] = {}
        for listed in root.findall("addon"):
            add_on_id = (listed.text or "").strip()
            entry = entries.get(f"{_ENTRY_PREFIX}{add_on_id}") if add_on_id else None
            if entry is None:
                logger.warning("Catalog lists add-on %r without an entry.", add_on_id)
                continue
            try:
                manifest = AddOnManifest.from_element(entry)
                descriptors[add_on_id] = PackageDescriptor.from_manifest(add_on_id, manifest)
            except ValueError as exc:
                logger.warning("Skipping catalog entry %r: %s", add_on_id, exc)
        logger.info("Loaded %d add-on(s) from catalog.", len(descriptors))
        return cls(descriptors)

    @classmethod
    def from_path(cls, path: Path) -> AddOnCatalog:
        return cls.from_xml(path.read_bytes())

    def get(self, add_on_id: str) -> PackageDescriptor | None:
        return self._descriptors.get(add_on_id)

    def __getitem__(self, add_on_id: str) -> PackageDescriptor:
        return self._descriptors[add_on_id]

    def __contains__(self, add_on_id: object) -> bool:
        return add_on_id in self._descriptors

    def __iter__(self) -> Iterator[PackageDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)
