"""addonforge: add-on package descriptors, validation and compatibility.

Answers the questions an extension host asks before activating a package:
  - is the file a well-formed, readable add-on (ManifestValidator)
  - what id, version and status does it declare (PackageDescriptor)
  - does one add-on supersede another (is_update_to)
  - may it load in this host / Java runtime (can_load_in_version,
    can_run_in_java_version) and what does it directly depend on
    (depends_on)
"""

__version__ = "0.1.0"
__description__ = "Add-on package descriptors, validation and compatibility checks"

from addonforge.models import PackageDescriptor, ValidationResult, Validity
from addonforge.core.validator import ManifestValidator
from addonforge.core.update_decider import is_update_to
from addonforge.core.compatibility import can_load_in_version, can_run_in_java_version
from addonforge.core.dependencies import depends_on, depends_on_any

__all__ = [
    "PackageDescriptor",
    "ValidationResult",
    "Validity",
    "ManifestValidator",
    "is_update_to",
    "can_load_in_version",
    "can_run_in_java_version",
    "depends_on",
    "depends_on_any",
    "__version__",
]
