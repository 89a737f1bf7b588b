"""Directory scanner — finds the best add-on of every lineage in a folder.

Every file carrying the package extension is validated (concurrently, each
worker owning its own archive handle).  Valid packages become descriptors;
when several share an id, the update decision picks the one to keep and
the rest are reported as superseded.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from addonforge.config import settings
from addonforge.core.errors import AddOnError, IOFailure
from addonforge.core.update_decider import is_update_to
from addonforge.core.validator import ManifestValidator
from addonforge.models.descriptor import PackageDescriptor
from addonforge.models.validation import ValidationResult, Validity

logger = logging.getLogger(__name__)


class ScanReport(BaseModel):
    """Outcome of scanning one directory."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    add_ons: dict[str, PackageDescriptor] = Field(default_factory=dict)
    superseded: list[PackageDescriptor] = Field(default_factory=list)
    rejected: list[ValidationResult] = Field(default_factory=list)

    def sorted_add_ons(self) -> list[PackageDescriptor]:
        return sorted(self.add_ons.values(), key=lambda d: d.id)


class AddOnScanner:
    """Validates the packages in a directory and keeps the newest per id.

    Parameters
    ----------
    validator:
        Validator to classify candidates; a default one is built from the
        settings when omitted.
    workers:
        Size of the validation thread pool.
    """

    def __init__(
        self,
        validator: ManifestValidator | None = None,
        workers: int | None = None,
    ) -> None:
        self._validator = validator or ManifestValidator()
        self._workers = workers or settings.scan_workers

    def candidates(self, directory: Path) -> list[Path]:
        """Entries of *directory* whose name carries the package extension."""
        return sorted(
            p for p in directory.iterdir() if self._validator.is_add_on_file_name(p.name)
        )

    def scan(self, directory: Path) -> ScanReport:
        """Scan *directory* (non-recursively).

        Raises
        ------
        NotADirectoryError
            If *directory* is not a directory.
        """
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        paths = self.candidates(directory)
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            results = list(pool.map(self._validator.validate, paths))

        add_ons: dict[str, PackageDescriptor] = {}
        superseded: list[PackageDescriptor] = []
        rejected: list[ValidationResult] = []
        for result in results:
            if not result.is_valid:
                logger.warning("Rejected %s", result.reason)
                rejected.append(result)
                continue
            try:
                descriptor = PackageDescriptor.from_validation(result)
            except AddOnError as exc:
                # The file vanished after validation, or its name yields no id.
                validity = (
                    Validity.FILE_NOT_READABLE
                    if isinstance(exc, IOFailure)
                    else Validity.INVALID_FILE_NAME
                )
                rejected.append(
                    ValidationResult(validity=validity, path=result.path, exception=exc)
                )
                logger.warning("Rejected %s", rejected[-1].reason)
                continue
            incumbent = add_ons.get(descriptor.id)
            if incumbent is None:
                add_ons[descriptor.id] = descriptor
            elif is_update_to(descriptor, incumbent):
                add_ons[descriptor.id] = descriptor
                superseded.append(incumbent)
            else:
                superseded.append(descriptor)

        logger.info(
            "Scanned %s: %d add-on(s), %d superseded, %d rejected.",
            directory,
            len(add_ons),
            len(superseded),
            len(rejected),
        )
        return ScanReport(
            directory=directory,
            add_ons=add_ons,
            superseded=superseded,
            rejected=rejected,
        )
