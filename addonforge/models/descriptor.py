"""Package descriptor — the in-memory record of one add-on.

A descriptor is built through one of three explicit constructors that all
converge on the same immutable model:

* ``PackageDescriptor.from_file_name`` — legacy path; everything comes
  from a name of the form ``<id>-<status>-<fileVersion>.<ext>``.
* ``PackageDescriptor.from_archive`` — validated archive; the name only
  supplies the id, the manifest supplies everything else.
* ``PackageDescriptor.from_manifest`` — an id plus an already parsed
  manifest (used by the two above and by the release catalog).

The only part of a descriptor that can change is its file backing, and
even that is done by returning a copy (``attach`` / ``detach``).
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from addonforge.config import settings
from addonforge.core.errors import IOFailure, ParseError
from addonforge.core.validator import ManifestValidator
from addonforge.models.manifest import AddOnManifest, BundleData, HelpSetData, check_add_on_id
from addonforge.models.status import AddOnStatus
from addonforge.models.validation import ValidationResult
from addonforge.models.versioning import RuntimeVersion, Version

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File backing
# ---------------------------------------------------------------------------

class AttachedFile(BaseModel):
    """The descriptor is backed by an archive on disk."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["attached"] = "attached"
    path: Path
    last_modified: datetime

    @classmethod
    def probe(cls, path: Path) -> AttachedFile:
        """Read the modification time of *path* from the filesystem."""
        mtime = path.stat().st_mtime
        return cls(path=path, last_modified=datetime.fromtimestamp(mtime, tz=timezone.utc))


class Detached(BaseModel):
    """The descriptor is known only by its metadata."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["detached"] = "detached"


FileBacking = Union[AttachedFile, Detached]


# ---------------------------------------------------------------------------
# File name helpers
# ---------------------------------------------------------------------------

def has_extension(file_name: str, extension: str | None = None) -> bool:
    """True if *file_name* ends with the package extension, ignoring case."""
    ext = (extension or settings.package_extension).lower()
    return file_name.lower().endswith(ext)


def strip_extension(file_name: str, extension: str | None = None) -> str:
    ext = extension or settings.package_extension
    if has_extension(file_name, ext):
        return file_name[: -len(ext)]
    return file_name


def id_from_file_name(file_name: str, extension: str | None = None) -> str:
    """The add-on id: the file name up to the first ``-``, extension removed.

    >>> id_from_file_name("addon-alpha-2.zap")
    'addon'
    >>> id_from_file_name("addon.ZAP")
    'addon'
    """
    stem = strip_extension(file_name, extension)
    return check_add_on_id(stem.split("-", 1)[0])


_LEGACY_NAME_RE = re.compile(r"^(?P<id>[^-/\\]+)-(?P<status>[^-]+)-(?P<file_version>[0-9]+)$")


def _match_legacy_name(file_name: str, extension: str | None = None) -> re.Match[str] | None:
    if not file_name or not has_extension(file_name, extension):
        return None
    return _LEGACY_NAME_RE.match(strip_extension(file_name, extension))


def is_legacy_add_on_name(file_name: str | None, extension: str | None = None) -> bool:
    """True for names such as ``test-alpha-1.zap`` with a known status.

    >>> is_legacy_add_on_name("test-alpha-1.zap")
    True
    >>> is_legacy_add_on_name("test-1.zap")
    False
    """
    if file_name is None:
        return False
    match = _match_legacy_name(file_name, extension)
    if match is None:
        return False
    try:
        AddOnStatus.parse(match.group("status"))
    except ParseError:
        return False
    return True


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

class PackageDescriptor(BaseModel):
    """Identity, version, status and requirements of a single add-on.

    Examples
    --------
    >>> addon = PackageDescriptor.from_file_name("test-alpha-1.zap")
    >>> addon.id, addon.status.value, str(addon.version), addon.file_version
    ('test', 'alpha', '1.0.0', 1)
    >>> addon.has_file
    False
    """

    model_config = ConfigDict(frozen=True)

    id: str
    status: AddOnStatus
    version: Version
    file_version: int = 0
    backing: FileBacking = Field(default_factory=Detached, discriminator="kind")
    dependencies: tuple[str, ...] = ()
    not_before_version: Version | None = None
    not_from_version: Version | None = None
    min_java_version: RuntimeVersion | None = None
    bundle: BundleData = BundleData()
    helpset: HelpSetData = HelpSetData()
    name: str = ""
    description: str = ""
    author: str = ""
    url: str = ""
    changes: str = ""

    @field_validator("id")
    @classmethod
    def _valid_id(cls, value: str) -> str:
        return check_add_on_id(value)

    # -- Constructors -------------------------------------------------------

    @classmethod
    def from_file_name(cls, file_name: str, extension: str | None = None) -> PackageDescriptor:
        """Build a detached descriptor from a legacy ``id-status-N`` name.

        Raises
        ------
        ParseError
            If the name does not follow the legacy convention or its status
            is not a known status.
        """
        match = _match_legacy_name(file_name, extension)
        if match is None:
            raise ParseError(
                f"{file_name!r} is not a legacy add-on name (<id>-<status>-<version>)."
            )
        file_version = int(match.group("file_version"))
        return cls(
            id=match.group("id"),
            status=AddOnStatus.parse(match.group("status")),
            version=Version.from_file_version(file_version),
            file_version=file_version,
        )

    @classmethod
    def from_archive(cls, path: Path | str | None) -> PackageDescriptor:
        """Validate the archive at *path* and build a descriptor from it.

        The file name supplies the id (unless the manifest overrides it);
        status, version and requirements come from the manifest.

        Raises
        ------
        IOFailure
            If the path is absent, wrongly named, unreadable or not a zip.
        ValidationFailure
            If the manifest is missing or invalid.
        """
        return cls.from_validation(ManifestValidator().validate(path))

    @classmethod
    def from_validation(cls, result: ValidationResult) -> PackageDescriptor:
        """Build a file-backed descriptor from a VALID validation result.

        Raises the error matching the classification for any other result,
        so a rejected package never yields a descriptor.
        """
        manifest = result.raise_for_validity()
        file_path = result.path
        add_on_id = manifest.id or id_from_file_name(file_path.name)
        if manifest.id:
            logger.debug("Manifest of %s declares add-on id %r.", file_path, manifest.id)
        if result.last_modified is not None:
            backing = AttachedFile(path=file_path, last_modified=result.last_modified)
        else:
            try:
                backing = AttachedFile.probe(file_path)
            except OSError as exc:
                raise IOFailure(
                    f"{file_path}: cannot read modification time.", result=result
                ) from exc
        return cls.from_manifest(add_on_id, manifest, backing=backing)

    @classmethod
    def from_manifest(
        cls,
        add_on_id: str,
        manifest: AddOnManifest,
        backing: FileBacking | None = None,
    ) -> PackageDescriptor:
        """Build a descriptor whose data comes entirely from *manifest*."""
        return cls(
            id=add_on_id,
            status=manifest.status,
            version=manifest.version,
            file_version=manifest.version.major,
            backing=backing if backing is not None else Detached(),
            dependencies=tuple(d for d in manifest.dependencies if d != add_on_id),
            not_before_version=manifest.not_before_version,
            not_from_version=manifest.not_from_version,
            min_java_version=manifest.java_version,
            bundle=manifest.bundle,
            helpset=manifest.helpset,
            name=manifest.name,
            description=manifest.description,
            author=manifest.author,
            url=manifest.url,
            changes=manifest.changes,
        )

    # -- File backing -------------------------------------------------------

    @property
    def has_file(self) -> bool:
        return isinstance(self.backing, AttachedFile)

    @property
    def file(self) -> Path | None:
        return self.backing.path if isinstance(self.backing, AttachedFile) else None

    @property
    def last_modified(self) -> datetime | None:
        return self.backing.last_modified if isinstance(self.backing, AttachedFile) else None

    def detach(self) -> PackageDescriptor:
        """Return a copy that is no longer backed by a file."""
        return self.model_copy(update={"backing": Detached()})

    def attach(self, path: Path, last_modified: datetime | None = None) -> PackageDescriptor:
        """Return a copy backed by *path* (modification time read from disk if omitted)."""
        if last_modified is None:
            backing = AttachedFile.probe(path)
        else:
            backing = AttachedFile(path=path, last_modified=last_modified)
        return self.model_copy(update={"backing": backing})

    # -- Naming -------------------------------------------------------------

    def is_same_lineage(self, other: PackageDescriptor) -> bool:
        return self.id == other.id

    def normalised_file_name(self, extension: str | None = None) -> str:
        """Canonical ``<id>-<version><ext>`` name, e.g. ``addon-2.8.1.zap``."""
        return f"{self.id}-{self.version}{extension or settings.package_extension}"

    def __str__(self) -> str:
        return f"{self.id} {self.version} ({self.status.value})"
