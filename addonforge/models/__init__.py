"""addonforge data models — all Pydantic v2, all frozen (immutable)."""

from addonforge.models.versioning import Ordering, RuntimeVersion, Version, compare
from addonforge.models.status import AddOnStatus, status_rank
from addonforge.models.manifest import AddOnManifest, BundleData, HelpSetData
from addonforge.models.validation import ValidationResult, Validity
from addonforge.models.descriptor import (
    AttachedFile,
    Detached,
    FileBacking,
    PackageDescriptor,
    id_from_file_name,
    is_legacy_add_on_name,
)

__all__ = [
    # versioning
    "Ordering",
    "Version",
    "RuntimeVersion",
    "compare",
    # status
    "AddOnStatus",
    "status_rank",
    # manifest
    "AddOnManifest",
    "BundleData",
    "HelpSetData",
    # validation
    "Validity",
    "ValidationResult",
    # descriptor
    "AttachedFile",
    "Detached",
    "FileBacking",
    "PackageDescriptor",
    "id_from_file_name",
    "is_legacy_add_on_name",
]
