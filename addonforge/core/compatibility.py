"""Compatibility gate — may an add-on load in this host and runtime?"""

from __future__ import annotations

import logging

from addonforge.core.errors import ParseError
from addonforge.models.descriptor import PackageDescriptor
from addonforge.models.versioning import RuntimeVersion, Version

logger = logging.getLogger(__name__)


def can_load_in_version(descriptor: PackageDescriptor, host_version: str | Version) -> bool:
    """True if *host_version* lies within the add-on's declared bounds.

    ``not_before_version`` is inclusive, ``not_from_version`` is exclusive.
    A host version that does not parse fails every check and yields
    ``False`` instead of raising.

    Examples
    --------
    >>> addon = PackageDescriptor.from_file_name("test-alpha-1.zap").model_copy(
    ...     update={"not_before_version": Version.parse("2.4.0")}
    ... )
    >>> can_load_in_version(addon, "2.4.0"), can_load_in_version(addon, "1.4.0")
    (True, False)
    >>> can_load_in_version(addon, "2.0.alpha")
    False
    """
    try:
        host = host_version if isinstance(host_version, Version) else Version.parse(host_version)
    except ParseError:
        logger.debug("Host version %r is not a valid version.", host_version)
        return False

    if descriptor.not_before_version is not None and host < descriptor.not_before_version:
        return False
    if descriptor.not_from_version is not None and host >= descriptor.not_from_version:
        return False
    return True


def can_run_in_java_version(
    descriptor: PackageDescriptor,
    runtime_version: str | RuntimeVersion,
) -> bool:
    """True if *runtime_version* meets the add-on's minimum Java version.

    Both sides are reduced to their leading numeric components, with the
    legacy ``1.x`` form read as ``x``; an unparseable runtime report yields
    ``False``.
    """
    required = descriptor.min_java_version
    if required is None:
        return True
    try:
        running = (
            runtime_version
            if isinstance(runtime_version, RuntimeVersion)
            else RuntimeVersion.parse(runtime_version)
        )
    except ParseError:
        logger.debug("Runtime version %r is not a valid version.", runtime_version)
        return False
    return running >= required


class CompatibilityGate:
    """Binds the host and runtime versions the add-ons are checked against.

    Unset versions are not checked.
    """

    def __init__(self, host_version: str | None = None, java_version: str | None = None) -> None:
        self._host_version = host_version
        self._java_version = java_version

    def can_load(self, descriptor: PackageDescriptor) -> bool:
        if self._host_version is None:
            return True
        return can_load_in_version(descriptor, self._host_version)

    def can_run(self, descriptor: PackageDescriptor) -> bool:
        if self._java_version is None:
            return True
        return can_run_in_java_version(descriptor, self._java_version)

    def issues(self, descriptor: PackageDescriptor) -> list[str]:
        """Human-readable reasons the add-on cannot be activated (empty if none)."""
        problems: list[str] = []
        if not self.can_load(descriptor):
            problems.append(
                f"{descriptor.id} does not support host version {self._host_version} "
                f"(not before {descriptor.not_before_version or '-'}, "
                f"not from {descriptor.not_from_version or '-'})."
            )
        if not self.can_run(descriptor):
            problems.append(
                f"{descriptor.id} requires Java {descriptor.min_java_version}, "
                f"running {self._java_version}."
            )
        return problems
