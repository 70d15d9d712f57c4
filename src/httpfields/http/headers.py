"""Mutable, case-insensitive, multi-valued HTTP header fields.

Implements ``MutableMapping[str, str]``. Names are stored lowercased;
each name maps to a non-empty list of values kept in append order.
``__getitem__`` joins the values with ``", "``, ``get_all`` returns
them individually.

No stored value ever contains CR or LF, so serializing a ``Headers``
cannot inject extra header lines.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from httpfields._internal.types import HeaderFields, HeaderValue
from httpfields.config import get_config
from httpfields.errors import HeaderValueError

logger = logging.getLogger("httpfields.headers")


def capitalize_name(name: str) -> str:
    """Return the display form of a header name (``content-type`` -> ``Content-Type``).

    Cosmetic only; lookups never depend on it.
    """
    return "-".join(part.capitalize() for part in name.split("-"))


def _canonical(key: Any) -> str:
    if not isinstance(key, str):
        msg = f"header name must be str, not {type(key).__name__}"
        raise TypeError(msg)
    return key.lower()


def _expand(key: str, value: Any, out: list[str], *, strip: bool = False) -> None:
    """Flatten *value* into *out*, validating every resulting string.

    Mappings contribute each key followed by its value; other iterables
    contribute each element. Nested ``None`` entries are skipped.
    """
    match value:
        case None:
            return
        case str():
            text = value
        case bytes() | bytearray():
            text = bytes(value).decode("latin-1")
        case Mapping():
            for k, v in value.items():
                _expand(key, k, out, strip=strip)
                _expand(key, v, out, strip=strip)
            return
        case Iterable():
            for item in value:
                _expand(key, item, out, strip=strip)
            return
        case _:
            text = str(value)

    if strip:
        text = text.strip()
    if "\r" in text or "\n" in text:
        msg = f"header {key!r} has field value {text!r}, this cannot include CR/LF"
        raise HeaderValueError(msg)
    out.append(text)


class Headers(MutableMapping[str, str]):
    """Case-insensitive header store for one HTTP message.

    Usage::

        headers = Headers({"Content-Type": "text/html"})
        headers.add("Set-Cookie", ["a=1", "b=2"])
        headers["set-cookie"]           # "a=1, b=2"
        headers.get_all("Set-Cookie")   # ["a=1", "b=2"]
        headers["Content-Type"] = None  # removes the field
    """

    __slots__ = ("_header",)

    def __init__(self, fields: HeaderFields | None = None) -> None:
        self._header: dict[str, list[str]] = {}
        self.initialize(fields)

    def initialize(self, fields: HeaderFields | None) -> None:
        """Replace every field with *fields*.

        *fields* is a mapping or an iterable of ``(name, value)`` pairs.
        Each resulting value is stripped of surrounding whitespace. A
        ``None`` value skips the entry; a repeated name overwrites the
        earlier one. Both are logged when the active config is verbose.

        Raises:
            HeaderValueError: If any value contains CR or LF. The store
                is left unchanged.
        """
        verbose = get_config().verbose
        header: dict[str, list[str]] = {}
        items = fields.items() if isinstance(fields, Mapping) else (fields or ())

        for key, value in items:
            name = _canonical(key)
            if verbose and name in header:
                logger.warning("duplicated HTTP header: %s", key)
            if value is None:
                if verbose:
                    logger.warning("nil HTTP header: %s", key)
                continue
            values: list[str] = []
            _expand(key, value, values, strip=True)
            if values:
                header[name] = values
            else:
                header.pop(name, None)

        self._header = header

    # -- Mapping protocol --

    def __getitem__(self, key: str) -> str:
        try:
            return ", ".join(self._header[_canonical(key)])
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: str, value: HeaderValue) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        try:
            del self._header[_canonical(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._header

    def __iter__(self) -> Iterator[str]:
        return iter(self._header)

    def __len__(self) -> int:
        return len(self._header)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._header.items())
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the joined values for *key*, or *default* if missing."""
        values = self._header.get(_canonical(key))
        if values is None:
            return default
        return ", ".join(values)

    # -- Mutation --

    def set(self, key: str, value: HeaderValue) -> None:
        """Replace the values of *key*; ``None`` removes the field.

        Strings are stored as given (not stripped). Sequences and
        mappings are flattened into several values.

        Raises:
            HeaderValueError: If any value contains CR or LF.
        """
        name = _canonical(key)
        if value is None:
            self._header.pop(name, None)
            return
        values: list[str] = []
        _expand(key, value, values)
        if values:
            self._header[name] = values
        else:
            self._header.pop(name, None)

    def add(self, key: str, value: HeaderValue) -> None:
        """Append values to *key*, creating the field if needed.

        Raises:
            HeaderValueError: If any value contains CR or LF. Nothing is
                appended in that case.
        """
        name = _canonical(key)
        values: list[str] = []
        _expand(key, value, values)
        if values:
            self._header.setdefault(name, []).extend(values)

    def delete(self, key: str) -> list[str] | None:
        """Remove *key* and return its values, or ``None`` if absent."""
        return self._header.pop(_canonical(key), None)

    # -- Multi-value access --

    def get_all(self, key: str) -> list[str] | None:
        """Return a copy of the values for *key*, or ``None`` if absent."""
        values = self._header.get(_canonical(key))
        if values is None:
            return None
        return list(values)

    def get_list(self, key: str) -> list[str]:
        """Return a copy of the values for *key*, or ``[]`` if absent."""
        return self.get_all(key) or []

    # -- Snapshots --
    # Each returns a fresh iterator over a copy taken at call time, so the
    # store may be mutated while iterating.

    def each_header(self) -> Iterator[tuple[str, str]]:
        """Iterate ``(name, joined_value)`` pairs."""
        return iter([(k, ", ".join(v)) for k, v in self._header.items()])

    def each_name(self) -> Iterator[str]:
        """Iterate canonical (lowercased) names."""
        return iter(list(self._header))

    def each_capitalized_name(self) -> Iterator[str]:
        """Iterate display-capitalized names."""
        return iter([capitalize_name(k) for k in self._header])

    def each_value(self) -> Iterator[str]:
        """Iterate joined values."""
        return iter([", ".join(v) for v in self._header.values()])

    def each_capitalized(self) -> Iterator[tuple[str, str]]:
        """Iterate ``(Capitalized-Name, joined_value)`` pairs."""
        return iter([(capitalize_name(k), ", ".join(v)) for k, v in self._header.items()])

    def to_dict(self) -> dict[str, list[str]]:
        """Return a deep copy: canonical name -> list of values."""
        return {k: list(v) for k, v in self._header.items()}

    def copy(self) -> Headers:
        """Return an independent copy of this store."""
        clone = type(self)()
        clone._header = self.to_dict()
        return clone

    def to_wire(self) -> str:
        """Render the header block: ``Name: v1, v2\\r\\n`` per field, then a blank line."""
        lines = [f"{name}: {value}\r\n" for name, value in self.each_capitalized()]
        return "".join(lines) + "\r\n"
