"""Version tokens — dotted add-on versions and coarse runtime versions.

``Version`` is the strict form used for add-on and host versions: every
dot-separated component must be a non-negative integer.  ``RuntimeVersion``
is the tolerant form used for Java runtime reports, which may carry a
legacy ``1.`` prefix and vendor suffixes (``1.8.0_151``, ``11-ea``).

Both compare component-wise, left to right, with missing trailing
components treated as zero, so ``1.0`` == ``1.0.0`` < ``1.0.0.1``.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from addonforge.core.errors import ParseError

_COMPONENT_RE = re.compile(r"[0-9]+")
_RUNTIME_PREFIX_RE = re.compile(r"\s*([0-9]+(?:\.[0-9]+)*)")


class Ordering(IntEnum):
    """Three-way comparison outcome."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def compare_components(left: tuple[int, ...], right: tuple[int, ...]) -> Ordering:
    """Compare two component tuples, padding the shorter one with zeros."""
    width = max(len(left), len(right))
    for index in range(width):
        a = left[index] if index < len(left) else 0
        b = right[index] if index < len(right) else 0
        if a != b:
            return Ordering.LESS if a < b else Ordering.GREATER
    return Ordering.EQUAL


def _to_int(part: str, text: str) -> int:
    try:
        return int(part)
    except ValueError as exc:
        # int() refuses digit strings past the interpreter's conversion limit.
        raise ParseError(f"Invalid version {text[:32]!r}...: component too long.") from exc


def _split_version(text: str) -> tuple[int, ...]:
    if not isinstance(text, str) or not text:
        raise ParseError(f"Version must be a non-empty string, got {text!r}.")
    components: list[int] = []
    for part in text.split("."):
        if not _COMPONENT_RE.fullmatch(part):
            raise ParseError(f"Invalid version {text!r}: component {part!r} is not numeric.")
        components.append(_to_int(part, text))
    return tuple(components)


def _strip_trailing_zeros(components: tuple[int, ...]) -> tuple[int, ...]:
    end = len(components)
    while end > 0 and components[end - 1] == 0:
        end -= 1
    return components[:end]


class _ComponentOrdered(BaseModel):
    """Shared ordering for models carrying a ``components`` tuple."""

    model_config = ConfigDict(frozen=True)

    text: str
    components: tuple[int, ...]

    def compare(self, other: _ComponentOrdered) -> Ordering:
        return compare_components(self.components, other.components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) is Ordering.EQUAL

    def __hash__(self) -> int:
        return hash((type(self).__name__, _strip_trailing_zeros(self.components)))

    def __lt__(self, other: _ComponentOrdered) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __le__(self, other: _ComponentOrdered) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) is not Ordering.GREATER

    def __gt__(self, other: _ComponentOrdered) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) is Ordering.GREATER

    def __ge__(self, other: _ComponentOrdered) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.compare(other) is not Ordering.LESS

    def __str__(self) -> str:
        return self.text


class Version(_ComponentOrdered):
    """A strict dotted version such as ``2.4.0`` or ``1``.

    The original text is kept verbatim for display; ordering only looks at
    the numeric components.

    Examples
    --------
    >>> Version.parse("2.4") == Version.parse("2.4.0")
    True
    >>> Version.parse("2.7.0") < Version.parse("2.7.0.1")
    True
    >>> str(Version.parse("3.2.10"))
    '3.2.10'
    """

    @model_validator(mode="before")
    @classmethod
    def _coerce_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"text": data, "components": _split_version(data)}
        return data

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse *text*, raising ``ParseError`` when it is not a valid version."""
        return cls(text=text, components=_split_version(text))

    @classmethod
    def from_file_version(cls, file_version: int) -> Version:
        """Build the ``N.0.0`` version implied by a legacy file version."""
        return cls.parse(f"{file_version}.0.0")

    @property
    def major(self) -> int:
        return self.components[0]


class RuntimeVersion(_ComponentOrdered):
    """A coarse Java runtime version, normalised for minimum-bound checks.

    Only the leading numeric components are kept.  The legacy ``1.x``
    numbering collapses to ``x`` so that ``1.8`` and ``8`` are the same
    release and both sort below ``9``.

    Examples
    --------
    >>> RuntimeVersion.parse("1.8").components
    (8,)
    >>> RuntimeVersion.parse("9.1.2") >= RuntimeVersion.parse("1.8")
    True
    >>> RuntimeVersion.parse("11-ea").components
    (11,)
    """

    @classmethod
    def parse(cls, text: str) -> RuntimeVersion:
        if not isinstance(text, str):
            raise ParseError(f"Runtime version must be a string, got {text!r}.")
        match = _RUNTIME_PREFIX_RE.match(text)
        if match is None:
            raise ParseError(f"Invalid runtime version {text!r}: no leading number.")
        components = tuple(_to_int(part, text) for part in match.group(1).split("."))
        if len(components) > 1 and components[0] == 1:
            components = components[1:]
        return cls(text=text, components=components)


def compare(a: str | Version, b: str | Version) -> Ordering:
    """Compare two versions given as text or ``Version`` instances."""
    left = a if isinstance(a, Version) else Version.parse(a)
    right = b if isinstance(b, Version) else Version.parse(b)
    return left.compare(right)
