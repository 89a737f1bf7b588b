"""Error taxonomy for add-on parsing, validation and comparison.

Every error raised by addonforge derives from ``AddOnError`` so callers can
catch the whole family at a single seam.  The concrete classes also derive
from the closest builtin (``ValueError`` / ``OSError``) so generic handlers
keep working.

The validator itself never raises these for malformed input; it encodes
the outcome in a ``ValidationResult``.  They are raised by the operations
that *presume* valid input: descriptor construction, version parsing, and
same-lineage comparisons.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from addonforge.models.validation import ValidationResult


class AddOnError(Exception):
    """Base class for all addonforge errors."""


class ParseError(AddOnError, ValueError):
    """Raised when a version, status or file name token is malformed."""


class IdentityMismatchError(AddOnError, ValueError):
    """Raised when two descriptors of different lineage are compared."""

    def __init__(self, candidate_id: str, incumbent_id: str) -> None:
        super().__init__(
            f"Add-on '{candidate_id}' cannot be compared with add-on "
            f"'{incumbent_id}': identities differ."
        )
        self.candidate_id = candidate_id
        self.incumbent_id = incumbent_id


class IOFailure(AddOnError, OSError):
    """Raised when a package path is absent, unreadable or not an archive."""

    def __init__(self, message: str, result: ValidationResult | None = None) -> None:
        super().__init__(message)
        self.result = result


class ValidationFailure(AddOnError):
    """Raised when an archive was readable but its manifest was rejected.

    Carries the ``ValidationResult`` so the classification and the nested
    cause remain available to the caller.
    """

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.reason)
        self.result = result

    @property
    def validity(self):
        return self.result.validity
