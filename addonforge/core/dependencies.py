"""Direct (single-hop) dependency checks between add-ons."""

from __future__ import annotations

from collections.abc import Iterable

from addonforge.models.descriptor import PackageDescriptor


def depends_on(descriptor: PackageDescriptor, other: PackageDescriptor) -> bool:
    """True if *descriptor* directly declares *other* as a dependency.

    An add-on never depends on itself, whatever its manifest says.
    """
    if other.id == descriptor.id:
        return False
    return other.id in descriptor.dependencies


def depends_on_any(descriptor: PackageDescriptor, others: Iterable[PackageDescriptor]) -> bool:
    """True if *descriptor* directly depends on at least one of *others*."""
    return any(depends_on(descriptor, other) for other in others)


def unmet_dependencies(
    descriptor: PackageDescriptor,
    available: Iterable[PackageDescriptor],
) -> list[str]:
    """Declared dependency ids with no matching add-on in *available*.

    Order follows the declaration order in the manifest.
    """
    present = {other.id for other in available}
    return [dep for dep in descriptor.dependencies if dep not in present]


class DependencyChecker:
    """Checks declared dependencies against a set of known add-ons.

    Parameters
    ----------
    known:
        Add-ons available to satisfy dependencies (installed add-ons or the
        entries of a release catalog), keyed by id.
    """

    def __init__(self, known: Iterable[PackageDescriptor] = ()) -> None:
        self._known: dict[str, PackageDescriptor] = {d.id: d for d in known}

    def depends_on(
        self,
        descriptor: PackageDescriptor,
        other: PackageDescriptor | Iterable[PackageDescriptor],
    ) -> bool:
        if isinstance(other, PackageDescriptor):
            return depends_on(descriptor, other)
        return depends_on_any(descriptor, other)

    def resolve(self, descriptor: PackageDescriptor) -> list[PackageDescriptor]:
        """Known add-ons that *descriptor* directly depends on."""
        return [self._known[dep] for dep in descriptor.dependencies if dep in self._known]

    def unmet(self, descriptor: PackageDescriptor) -> list[str]:
        return unmet_dependencies(descriptor, self._known.values())
