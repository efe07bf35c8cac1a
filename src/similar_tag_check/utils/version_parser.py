"""
Digit-aware version sequences for comparing arbitrary tag strings.

A version sequence is a string chunked into alternating runs of ASCII digits and
non-digits. For example, ``v15.010-rc.1`` consists of:

- the literal part ``v``
- the digit part ``15``
- the literal part ``.``
- the digit part ``010`` (numerically equal to ``10``)
- the literal part ``-rc.``
- the digit part ``1``

Sequences are ordered part by part, where digit parts compare by numeric value and
always sort before literal parts. That ordering is only meaningful between strings
that share a formatting pattern (see ``Version.is_same_pattern``), e.g.:

- ``v1.99.99 < v2.0.0``
- ``v1.050 == v1.50``
- ``2.0.0 < v1.0.0`` (inconsistent with semantic meaning)
- ``v1.00 < v1.0-beta.1`` (inconsistent with textual and semantic ordering)
"""

import enum
import re
from typing import NamedTuple, Optional, Tuple, Union

# ASCII only: \d would also match other Unicode decimal digits
_PART_RE = re.compile(r"[0-9]+|[^0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")


class PartKind(enum.IntEnum):
    """Kind of a version part. The numeric values define the cross-kind order."""

    DIGITS = 0
    LITERAL = 1


class Ordering(enum.IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


PartKey = Union[Tuple[int, int, str], Tuple[int, str]]


class VersionPart(NamedTuple):
    """A single run of a version string, either all ASCII digits or no ASCII digits."""

    kind: PartKind
    text: str

    @classmethod
    def digits(cls, text: str) -> "VersionPart":
        """Build a digit part.

        :raises ValueError: If ``text`` is empty or contains anything but ASCII digits.
        """
        if not _DIGITS_RE.fullmatch(text):
            raise ValueError(f"Digit part should only contain ASCII digits: {text!r}")
        return cls(PartKind.DIGITS, text)

    @classmethod
    def literal(cls, text: str) -> "VersionPart":
        """Build a literal part.

        :raises ValueError: If ``text`` is empty or contains an ASCII digit.
        """
        if not text or _DIGITS_RE.search(text):
            raise ValueError(f"Literal part should not contain ASCII digits: {text!r}")
        return cls(PartKind.LITERAL, text)

    @property
    def is_digits(self) -> bool:
        return self.kind is PartKind.DIGITS

    @property
    def sort_key(self) -> PartKey:
        if self.kind is PartKind.DIGITS:
            # Numeric order for any length: drop leading zeros, then longer is bigger
            significant = self.text.lstrip("0")
            return (PartKind.DIGITS, len(significant), significant)
        return (PartKind.LITERAL, self.text)

    def __str__(self) -> str:
        return self.text


def tokenize(text: str) -> Tuple[VersionPart, ...]:
    """Chunk an arbitrary string into alternating digit and literal parts.

    >>> [str(p) for p in tokenize("v1.2-rc3")]
    ['v', '1', '.', '2', '-rc', '3']
    """
    return tuple(
        VersionPart.digits(chunk) if chunk[0] in "0123456789" else VersionPart.literal(chunk)
        for chunk in _PART_RE.findall(text)
    )


class Version:
    """An immutable version sequence parsed from a tag string.

    Instances compare with the digit-aware ordering described in the module
    docstring, and ``str()`` gives back the exact source string.
    """

    __slots__ = ("_text", "_parts", "_key")

    def __init__(self, text: str) -> None:
        self._text = text
        self._parts = tokenize(text)
        self._key = tuple(part.sort_key for part in self._parts)

    @property
    def parts(self) -> Tuple[VersionPart, ...]:
        return self._parts

    @property
    def pattern(self) -> Tuple[Optional[str], ...]:
        """The formatting pattern: ``None`` for each digit part, the text of each literal part."""
        return tuple(None if part.is_digits else part.text for part in self._parts)

    def is_same_pattern(self, other: "Version") -> bool:
        """Determine whether two version sequences follow the same formatting pattern.

        This holds when the order and count of digit and literal parts match and
        the literal parts are textually equal. Digit values are ignored.

        Same pattern:

        - ``v1.0.10`` and ``v3.44.247``
        - ``2.1`` and ``10.0``
        - ``1.0.0-rc.1`` and ``2.0.0-rc.3``

        Different patterns:

        - ``latest`` and ``2025-11-12T13-14-15Z``
        - ``.34`` and ``0.34``
        - ``1.1.0`` and ``v1.1.0``
        - ``2.0.0-alpha.1`` and ``2.0.0-beta.1``
        """
        return self.pattern == other.pattern

    def __repr__(self) -> str:
        return f"<Version({self._text!r})>"

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self):
        return iter(self._parts)

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key <= other._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key >= other._key

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key > other._key

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key != other._key


def same_pattern(a: Version, b: Version) -> bool:
    return a.is_same_pattern(b)


def compare(a: Version, b: Version) -> Ordering:
    """Three-way comparison of two version sequences."""
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL
