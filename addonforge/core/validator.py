"""Manifest validator — the gatekeeper run before any archive is trusted.

``ManifestValidator.validate`` walks a strict precedence chain and returns
the first classification that applies:

1. INVALID_PATH         — no path, or a path without a file name
2. INVALID_FILE_NAME    — wrong extension (compared case-insensitively), or
                           an unusable id when the manifest declares none
3. FILE_NOT_READABLE    — missing, a directory, or not readable
4. UNREADABLE_ZIP_FILE  — not a zip archive, or a manifest entry that cannot
                           be extracted (encrypted, unknown compression)
5. MISSING_MANIFEST     — no entry with the manifest name
6. INVALID_MANIFEST     — oversized, malformed XML or bad/missing required fields
7. VALID

Expected failures are returned as data, never raised.  Each call opens its
own archive handle inside a ``with`` block, so concurrent validation of
independent paths needs no locking.
"""

from __future__ import annotations

import io
import logging
import os
import xml.etree.ElementTree as ET
import zipfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from addonforge.config import settings
from addonforge.core.errors import ParseError
from addonforge.models.manifest import AddOnManifest, check_add_on_id
from addonforge.models.validation import ValidationResult, Validity

logger = logging.getLogger(__name__)


class FileFacts(BaseModel):
    """What the caller knows about a candidate path.

    ``content`` optionally carries the archive bytes so that validation can
    run without touching the filesystem again.
    """

    model_config = ConfigDict(frozen=True)

    exists: bool
    is_dir: bool = False
    is_readable: bool = True
    last_modified: datetime | None = None
    content: bytes | None = None

    @classmethod
    def probe(cls, path: Path) -> FileFacts:
        """Gather facts for *path* from the filesystem."""
        if not path.exists():
            return cls(exists=False, is_readable=False)
        mtime = path.stat().st_mtime
        return cls(
            exists=True,
            is_dir=path.is_dir(),
            is_readable=os.access(path, os.R_OK),
            last_modified=datetime.fromtimestamp(mtime, tz=timezone.utc),
        )


class ManifestValidator:
    """Classifies candidate add-on packages.

    Parameters
    ----------
    extension:
        Package file extension, e.g. ``.zap``.
    manifest_entry_name:
        Exact name of the manifest entry inside the archive.
    manifest_root:
        Required root element of the manifest document.
    max_manifest_size:
        Largest manifest, in bytes, that is read from an archive.

    Examples
    --------
    >>> validator = ManifestValidator()
    >>> validator.validate(None).validity
    <Validity.INVALID_PATH: 'invalid_path'>
    >>> validator.validate("notes.txt").validity
    <Validity.INVALID_FILE_NAME: 'invalid_file_name'>
    """

    def __init__(
        self,
        extension: str | None = None,
        manifest_entry_name: str | None = None,
        manifest_root: str | None = None,
        max_manifest_size: int | None = None,
    ) -> None:
        self._extension = extension or settings.package_extension
        self._manifest_entry_name = manifest_entry_name or settings.manifest_entry_name
        self._manifest_root = manifest_root or settings.manifest_root
        self._max_manifest_size = max_manifest_size or settings.max_manifest_size

    @property
    def manifest_entry_name(self) -> str:
        return self._manifest_entry_name

    def is_add_on_file_name(self, file_name: str | None) -> bool:
        """True if *file_name* ends with the package extension (any case)."""
        if not file_name:
            return False
        return file_name.lower().endswith(self._extension.lower())

    def validate(
        self,
        path: Path | str | None,
        facts: FileFacts | None = None,
    ) -> ValidationResult:
        """Classify the package at *path*.

        Parameters
        ----------
        path:
            Candidate package path.  ``None`` and ``""`` are INVALID_PATH.
        facts:
            Filesystem facts supplied by the caller.  Probed from disk
            when omitted.

        Returns
        -------
        ValidationResult
            The first classification that applies; VALID results carry the
            parsed manifest.
        """
        if path is None or path == "":
            return self._reject(Validity.INVALID_PATH, None)
        file_path = Path(path)
        if not file_path.name:
            return self._reject(Validity.INVALID_PATH, file_path)

        if not self.is_add_on_file_name(file_path.name):
            return self._reject(Validity.INVALID_FILE_NAME, file_path)

        if facts is None:
            facts = FileFacts.probe(file_path)
        if not facts.exists or facts.is_dir or not facts.is_readable:
            return self._reject(Validity.FILE_NOT_READABLE, file_path)

        source = io.BytesIO(facts.content) if facts.content is not None else file_path
        limit = self._max_manifest_size
        try:
            with zipfile.ZipFile(source) as archive:
                if self._manifest_entry_name not in archive.namelist():
                    return self._reject(Validity.MISSING_MANIFEST, file_path)
                with archive.open(self._manifest_entry_name) as entry:
                    data = entry.read(limit + 1)
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            OSError,
            RuntimeError,
            NotImplementedError,
        ) as exc:
            # Encrypted entries raise RuntimeError, unknown compression NotImplementedError.
            return self._reject(Validity.UNREADABLE_ZIP_FILE, file_path, exc)

        if len(data) > limit:
            exc = ParseError(f"Manifest exceeds {limit} bytes.")
            return self._reject(Validity.INVALID_MANIFEST, file_path, exc)

        try:
            manifest = AddOnManifest.from_xml(data, root=self._manifest_root)
        except (ET.ParseError, ValueError) as exc:
            return self._reject(Validity.INVALID_MANIFEST, file_path, exc)

        if manifest.id is None:
            try:
                check_add_on_id(self._id_from_name(file_path.name))
            except ParseError as exc:
                return self._reject(Validity.INVALID_FILE_NAME, file_path, exc)

        logger.debug(
            "Validated add-on %s (%s %s).", file_path, manifest.version, manifest.status.value
        )
        return ValidationResult(
            validity=Validity.VALID,
            path=file_path,
            manifest=manifest,
            last_modified=facts.last_modified,
        )

    def _id_from_name(self, file_name: str) -> str:
        return file_name[: -len(self._extension)].split("-", 1)[0]

    def _reject(
        self,
        validity: Validity,
        path: Path | None,
        exc: BaseException | None = None,
    ) -> ValidationResult:
        result = ValidationResult(validity=validity, path=path, exception=exc)
        logger.debug("Rejected add-on candidate: %s", result.reason)
        return result


def is_add_on_file_name(file_name: str | None) -> bool:
    """Module-level shortcut using the configured extension."""
    return ManifestValidator().is_add_on_file_name(file_name)


def is_add_on(path: Path | str | None) -> bool:
    """True if *path* is a valid add-on package."""
    return ManifestValidator().validate(path).is_valid
