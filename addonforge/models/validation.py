"""Validation outcome of a candidate add-on package."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from addonforge.core.errors import IOFailure, ValidationFailure
from addonforge.models.manifest import AddOnManifest


class Validity(str, Enum):
    """Classification of a candidate package, in precedence order."""

    INVALID_PATH = "invalid_path"
    INVALID_FILE_NAME = "invalid_file_name"
    FILE_NOT_READABLE = "file_not_readable"
    UNREADABLE_ZIP_FILE = "unreadable_zip_file"
    MISSING_MANIFEST = "missing_manifest"
    INVALID_MANIFEST = "invalid_manifest"
    VALID = "valid"


_REASONS: dict[Validity, str] = {
    Validity.INVALID_PATH: "The path is empty or has no file name.",
    Validity.INVALID_FILE_NAME: "The file name does not have the add-on extension.",
    Validity.FILE_NOT_READABLE: "The path is not a readable file.",
    Validity.UNREADABLE_ZIP_FILE: "The file could not be opened as a zip archive.",
    Validity.MISSING_MANIFEST: "The archive does not contain a manifest.",
    Validity.INVALID_MANIFEST: "The manifest is malformed or incomplete.",
    Validity.VALID: "The add-on is valid.",
}

# Classifications reported as IOFailure when a caller demands validity.
_IO_FAILURES = frozenset({
    Validity.INVALID_PATH,
    Validity.INVALID_FILE_NAME,
    Validity.FILE_NOT_READABLE,
    Validity.UNREADABLE_ZIP_FILE,
})


class ValidationResult(BaseModel):
    """Immutable result of ``ManifestValidator.validate``.

    ``exception`` holds the underlying failure for UNREADABLE_ZIP_FILE,
    INVALID_MANIFEST and an unusable file-name id; ``manifest`` is only set when the result is VALID, together
    with the file modification time seen during validation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    validity: Validity
    path: Path | None = None
    exception: BaseException | None = None
    manifest: AddOnManifest | None = None
    last_modified: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return self.validity is Validity.VALID

    @property
    def reason(self) -> str:
        """Human-readable reason, including the cause message when present."""
        message = _REASONS[self.validity]
        if self.path is not None and not self.is_valid:
            message = f"{self.path}: {message}"
        if self.exception is not None:
            message = f"{message} ({self.exception})"
        return message

    def raise_for_validity(self) -> AddOnManifest:
        """Return the manifest, or raise the error matching the classification.

        Raises
        ------
        IOFailure
            For path, file-name, readability and archive failures.
        ValidationFailure
            For a missing or invalid manifest.
        """
        if self.is_valid and self.manifest is not None:
            return self.manifest
        if self.validity in _IO_FAILURES:
            raise IOFailure(self.reason, result=self) from self.exception
        raise ValidationFailure(self) from self.exception
