"""Byte ranges: the ``Range`` and ``Content-Range`` header grammars.

``Range: bytes=0-499, 1000-, -200`` parses into a list of range specs,
one of three frozen dataclasses:

- ``ByteRange(first, last)``: inclusive ``first-last``
- ``OpenByteRange(first)``: ``first-``, up to the end
- ``SuffixByteRange(length)``: ``-length``, the final *length* bytes

``Content-Range: bytes 0-499/1234`` parses into a ``ContentRange``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from httpfields.errors import HeaderSyntaxError

# byte-range-set = 1#( byte-range-spec / suffix-byte-range-spec ), with the
# list rule's empty elements allowed (RFC 7230 section 7)
_RANGE_HEADER = re.compile(r"\s*bytes=(?P<set>(?:[\d,-][\d\s,-]*)?)", re.IGNORECASE)
_RANGE_SPEC = re.compile(r"(?P<first>\d+)?-(?P<last>\d+)?")
_CONTENT_RANGE = re.compile(
    r"\s*bytes\s+(?P<first>\d+)\s*-\s*(?P<last>\d+)\s*/\s*(?P<total>\d+|\*)\s*",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Inclusive range ``first-last``."""

    first: int
    last: int

    def __str__(self) -> str:
        return f"{self.first}-{self.last}"

    @property
    def length(self) -> int:
        return self.last - self.first + 1


@dataclass(frozen=True, slots=True)
class OpenByteRange:
    """Range ``first-``: from *first* to the end of the representation."""

    first: int

    def __str__(self) -> str:
        return f"{self.first}-"


@dataclass(frozen=True, slots=True)
class SuffixByteRange:
    """Range ``-length``: the last *length* bytes."""

    length: int

    def __str__(self) -> str:
        return f"-{self.length}"


RangeSpec: TypeAlias = ByteRange | OpenByteRange | SuffixByteRange


def parse_byte_ranges(value: str) -> list[RangeSpec]:
    """Parse a ``Range`` header value into its specs, in header order.

    Raises:
        HeaderSyntaxError: On a grammar mismatch, a spec with
            ``first > last``, or a lone ``-0`` spec.
    """
    m = _RANGE_HEADER.fullmatch(value)
    if m is None:
        msg = f"invalid syntax for byte-ranges-specifier: {value!r}"
        raise HeaderSyntaxError(msg)

    result: list[RangeSpec] = []
    for element in m.group("set").split(","):
        element = element.strip()
        if not element:
            continue
        spec = _RANGE_SPEC.fullmatch(element)
        if spec is None or (spec.group("first") is None and spec.group("last") is None):
            msg = f"invalid byte-range-spec: {element!r}"
            raise HeaderSyntaxError(msg)
        first, last = spec.group("first"), spec.group("last")
        if first is not None and last is not None:
            if int(first) > int(last):
                msg = f"last-byte-pos must be greater than or equal to first-byte-pos: {element!r}"
                raise HeaderSyntaxError(msg)
            result.append(ByteRange(int(first), int(last)))
        elif first is not None:
            result.append(OpenByteRange(int(first)))
        else:
            result.append(SuffixByteRange(int(last)))

    if not result:
        msg = f"no byte-range-spec in {value!r}"
        raise HeaderSyntaxError(msg)
    if result == [SuffixByteRange(0)]:
        msg = "only one suffix-byte-range-spec with zero suffix-length"
        raise HeaderSyntaxError(msg)
    return result


def format_byte_range(spec: RangeSpec) -> str:
    """Render one spec as a full ``Range`` value (``bytes=0-1023``).

    Raises:
        HeaderSyntaxError: If the spec has negative bounds, ``first > last``,
            or is a zero-length suffix.
    """
    match spec:
        case ByteRange(first=first, last=last):
            if first < 0:
                raise HeaderSyntaxError("range.first is negative")
            if last < 0:
                raise HeaderSyntaxError("range.last is negative")
            if first > last:
                raise HeaderSyntaxError("range.first must be <= range.last")
        case OpenByteRange(first=first):
            if first < 0:
                raise HeaderSyntaxError("range.first is negative")
        case SuffixByteRange(length=length):
            if length <= 0:
                raise HeaderSyntaxError("suffix length must be positive")
        case _:
            msg = f"range spec required, not {type(spec).__name__}"
            raise TypeError(msg)
    return f"bytes={spec}"


def byte_range_from(value: int | range | RangeSpec, last: int | None = None) -> RangeSpec:
    """Build a spec from the shorthand forms accepted by ``set_range``.

    - ``n > 0``: the first *n* bytes (``0-(n-1)``)
    - ``n < 0``: the last ``|n|`` bytes (``-|n|``)
    - ``(first, last)``: inclusive bounds
    - ``range(start, stop)``: step 1, *stop* exclusive
    - a spec instance, returned as is
    """
    if isinstance(value, bool):
        raise TypeError("range or int is required")
    if last is not None:
        if not isinstance(value, int):
            raise TypeError("first must be an int when last is given")
        return ByteRange(value, last)
    match value:
        case ByteRange() | OpenByteRange() | SuffixByteRange():
            return value
        case int() if value > 0:
            return ByteRange(0, value - 1)
        case int() if value < 0:
            return SuffixByteRange(-value)
        case int():
            raise HeaderSyntaxError("range must not be empty")
        case range() if value.step == 1 and len(value) > 0:
            return ByteRange(value.start, value.stop - 1)
        case range():
            msg = f"range must be non-empty with step 1: {value!r}"
            raise HeaderSyntaxError(msg)
        case _:
            raise TypeError("range or int is required")


@dataclass(frozen=True, slots=True)
class ContentRange:
    """A parsed ``Content-Range``: inclusive bounds plus the complete length.

    ``total`` is ``None`` when the sender wrote ``*`` (length unknown).
    """

    first: int
    last: int
    total: int | None = None

    def __str__(self) -> str:
        total = "*" if self.total is None else str(self.total)
        return f"bytes {self.first}-{self.last}/{total}"

    @property
    def length(self) -> int:
        """Number of bytes covered by the range."""
        return self.last - self.first + 1

    @classmethod
    def parse(cls, value: str) -> ContentRange:
        """Parse ``bytes <first>-<last>/<total|*>``.

        Raises:
            HeaderSyntaxError: On a grammar mismatch or ``first > last``.
        """
        m = _CONTENT_RANGE.fullmatch(value)
        if m is None:
            msg = f"wrong Content-Range format: {value!r}"
            raise HeaderSyntaxError(msg)
        first, last = int(m.group("first")), int(m.group("last"))
        if first > last:
            msg = f"Content-Range first byte is after last byte: {value!r}"
            raise HeaderSyntaxError(msg)
        total = None if m.group("total") == "*" else int(m.group("total"))
        return cls(first, last, total)
