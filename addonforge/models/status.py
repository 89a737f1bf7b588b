"""Add-on maturity status — a closed, strictly ordered set."""

from __future__ import annotations

from enum import Enum

from addonforge.core.errors import ParseError


class AddOnStatus(str, Enum):
    """Maturity level declared by an add-on.

    Members are declared in ascending rank.  There is no ``unknown``
    member: an undeclared status is ``None`` and ranks below every member
    (see ``status_rank``).
    """

    EXAMPLE = "example"
    ALPHA = "alpha"
    BETA = "beta"
    WEEKLY = "weekly"
    RELEASE = "release"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, text: str) -> AddOnStatus:
        """Exact, case-sensitive match against the member values."""
        for member in cls:
            if member.value == text:
                return member
        raise ParseError(
            f"Unknown add-on status {text!r}; expected one of "
            f"{', '.join(m.value for m in cls)}."
        )


_RANKS: dict[AddOnStatus, int] = {status: rank for rank, status in enumerate(AddOnStatus, start=1)}

UNKNOWN_RANK = 0


def status_rank(status: AddOnStatus | None) -> int:
    """Rank of *status*; ``None`` (undeclared) ranks lowest."""
    return UNKNOWN_RANK if status is None else status.rank
