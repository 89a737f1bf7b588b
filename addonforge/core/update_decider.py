"""Update decision — is one add-on a legitimate replacement for another?

Only descriptors of the same lineage (equal ``id``) can be compared.  The
decision is an ordered tie-break chain where the first decisive criterion
wins:

1. status rank     — higher status wins regardless of version
2. version         — higher version wins
3. file presence   — a descriptor with a backing file beats one without
4. modification    — a strictly newer file wins

Because every step is a strict comparison, ``is_update_to(x, x)`` is always
false and the relation never holds in both directions.
"""

from __future__ import annotations

import logging

from addonforge.core.errors import IdentityMismatchError
from addonforge.models.descriptor import AttachedFile, Detached, PackageDescriptor
from addonforge.models.status import status_rank
from addonforge.models.versioning import Ordering

logger = logging.getLogger(__name__)


def is_update_to(candidate: PackageDescriptor, incumbent: PackageDescriptor) -> bool:
    """Return ``True`` if *candidate* should replace *incumbent*.

    Raises
    ------
    IdentityMismatchError
        If the two descriptors do not share the same ``id``.

    Examples
    --------
    >>> old = PackageDescriptor.from_file_name("test-alpha-1.zap")
    >>> new = PackageDescriptor.from_file_name("test-alpha-2.zap")
    >>> is_update_to(new, old), is_update_to(old, new)
    (True, False)
    """
    if not candidate.is_same_lineage(incumbent):
        raise IdentityMismatchError(candidate.id, incumbent.id)

    candidate_rank = status_rank(candidate.status)
    incumbent_rank = status_rank(incumbent.status)
    if candidate_rank != incumbent_rank:
        return candidate_rank > incumbent_rank

    ordering = candidate.version.compare(incumbent.version)
    if ordering is not Ordering.EQUAL:
        return ordering is Ordering.GREATER

    return _fresher_backing(candidate.backing, incumbent.backing)


def _fresher_backing(
    candidate: AttachedFile | Detached,
    incumbent: AttachedFile | Detached,
) -> bool:
    if isinstance(candidate, Detached):
        return False
    if isinstance(incumbent, Detached):
        return True
    return candidate.last_modified > incumbent.last_modified


class UpdateDecider:
    """Picks the best descriptor of a lineage using ``is_update_to``.

    Examples
    --------
    >>> decider = UpdateDecider()
    >>> a1 = PackageDescriptor.from_file_name("test-alpha-1.zap")
    >>> a2 = PackageDescriptor.from_file_name("test-alpha-2.zap")
    >>> decider.latest([a1, a2]) is a2
    True
    """

    def is_update_to(self, candidate: PackageDescriptor, incumbent: PackageDescriptor) -> bool:
        return is_update_to(candidate, incumbent)

    def latest(self, descriptors: list[PackageDescriptor]) -> PackageDescriptor | None:
        """Return the descriptor no other one updates, or ``None`` if empty.

        All descriptors must share the same lineage.  Among indistinguishable
        descriptors the first one wins.
        """
        best: PackageDescriptor | None = None
        for descriptor in descriptors:
            if best is None or is_update_to(descriptor, best):
                best = descriptor
        if best is not None:
            logger.debug("Latest %s of %d candidate(s): %s.", best.id, len(descriptors), best)
        return best
