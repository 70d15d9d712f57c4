"""HeaderBearer: header access and typed header views for HTTP messages.

``Request`` and ``Response`` each own one ``Headers`` and mix this in.
Every accessor goes through the ``Headers`` public API (``get``,
``get_list``, item assignment, ``delete``), never its storage, so
validation applies to values composed here too.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from httpfields.config import get_config
from httpfields.errors import HeaderSyntaxError
from httpfields.http.auth import basic_encode
from httpfields.http.content_type import ContentType, format_content_type
from httpfields.http.forms import URLENCODED, FormSubmission, encode_form
from httpfields.http.ranges import (
    ContentRange,
    RangeSpec,
    byte_range_from,
    format_byte_range,
    parse_byte_ranges,
)

if TYPE_CHECKING:
    from httpfields._internal.types import FormParams, HeaderFields, HeaderValue
    from httpfields.http.headers import Headers

_CHUNKED = re.compile(r"(?:\A|[^\-\w])chunked(?![\-\w])", re.IGNORECASE)
_CLOSE = re.compile(r"(?:\A|,)\s*close\s*(?:\Z|,)", re.IGNORECASE)
_KEEP_ALIVE = re.compile(r"(?:\A|,)\s*keep-alive\s*(?:\Z|,)", re.IGNORECASE)
_DIGITS = re.compile(r"\d+")


class HeaderBearer:
    """Mixin for message types that own a ``headers: Headers`` attribute.

    Also expects ``body`` and ``form`` attributes, which the form
    helpers stage for the transmission layer.
    """

    __slots__ = ()

    headers: Headers
    body: str | bytes | None
    form: FormSubmission | None

    # -- Headers contract, forwarded --

    def __getitem__(self, key: str) -> str:
        return self.headers[key]

    def __setitem__(self, key: str, value: HeaderValue) -> None:
        self.headers[key] = value

    def __delitem__(self, key: str) -> None:
        del self.headers[key]

    def __contains__(self, key: object) -> bool:
        return key in self.headers

    def __iter__(self) -> Iterator[str]:
        return iter(self.headers)

    def initialize_headers(self, fields: HeaderFields | None) -> None:
        """Replace all header fields; see ``Headers.initialize``."""
        self.headers.initialize(fields)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.headers.get(key, default)

    def add(self, key: str, value: HeaderValue) -> None:
        self.headers.add(key, value)

    def get_all(self, key: str) -> list[str] | None:
        return self.headers.get_all(key)

    def delete(self, key: str) -> list[str] | None:
        return self.headers.delete(key)

    def each_header(self) -> Iterator[tuple[str, str]]:
        return self.headers.each_header()

    def each_name(self) -> Iterator[str]:
        return self.headers.each_name()

    def each_capitalized_name(self) -> Iterator[str]:
        return self.headers.each_capitalized_name()

    def each_value(self) -> Iterator[str]:
        return self.headers.each_value()

    def each_capitalized(self) -> Iterator[tuple[str, str]]:
        return self.headers.each_capitalized()

    def to_dict(self) -> dict[str, list[str]]:
        return self.headers.to_dict()

    # -- Range --

    @property
    def ranges(self) -> list[RangeSpec] | None:
        """The parsed ``Range`` header, or ``None`` if absent.

        Raises:
            HeaderSyntaxError: If the header is malformed.
        """
        value = self.headers.get("Range")
        if value is None:
            return None
        return parse_byte_ranges(value)

    @ranges.setter
    def ranges(self, value: int | range | RangeSpec | None) -> None:
        self.set_range(value)

    def set_range(self, value: int | range | RangeSpec | None, last: int | None = None) -> None:
        """Set the ``Range`` header; ``None`` removes it.

        Usage::

            msg.set_range(0, 1023)       # bytes=0-1023
            msg.set_range(500)           # bytes=0-499
            msg.set_range(-500)          # bytes=-500
            msg.set_range(range(0, 10))  # bytes=0-9

        Raises:
            HeaderSyntaxError: On negative bounds or ``first > last``.
            TypeError: If *value* is not an int, range, or range spec.
        """
        if value is None:
            self.headers.delete("Range")
            return
        self.headers["Range"] = format_byte_range(byte_range_from(value, last))

    # -- Content-Length --

    @property
    def content_length(self) -> int | None:
        """The first digit run of ``Content-Length`` as an int, or ``None``.

        Raises:
            HeaderSyntaxError: If the header holds no digits.
        """
        value = self.headers.get("Content-Length")
        if value is None:
            return None
        m = _DIGITS.search(value)
        if m is None:
            msg = f"wrong Content-Length format: {value!r}"
            raise HeaderSyntaxError(msg)
        return int(m.group())

    @content_length.setter
    def content_length(self, length: int | str | None) -> None:
        if length is None:
            self.headers.delete("Content-Length")
            return
        self.headers["Content-Length"] = str(int(length))

    # -- Transfer-Encoding / Connection --

    @property
    def is_chunked(self) -> bool:
        """True if ``Transfer-Encoding`` lists the ``chunked`` token."""
        value = self.headers.get("Transfer-Encoding")
        return value is not None and _CHUNKED.search(value) is not None

    @property
    def is_connection_close(self) -> bool:
        """True if ``Connection`` or ``Proxy-Connection`` carries ``close``."""
        return self._has_connection_token(_CLOSE)

    @property
    def is_connection_keep_alive(self) -> bool:
        """True if ``Connection`` or ``Proxy-Connection`` carries ``keep-alive``."""
        return self._has_connection_token(_KEEP_ALIVE)

    def _has_connection_token(self, token: re.Pattern[str]) -> bool:
        for name in ("Connection", "Proxy-Connection"):
            if any(token.search(v) for v in self.headers.get_list(name)):
                return True
        return False

    # -- Content-Range --

    @property
    def content_range(self) -> ContentRange | None:
        """The parsed ``Content-Range`` header, or ``None`` if absent.

        Raises:
            HeaderSyntaxError: If the header is malformed.
        """
        value = self.headers.get("Content-Range")
        if value is None:
            return None
        return ContentRange.parse(value)

    @property
    def range_length(self) -> int | None:
        """Byte count covered by ``Content-Range``, or ``None`` if absent."""
        cr = self.content_range
        return None if cr is None else cr.length

    # -- Content-Type --

    def _parsed_content_type(self) -> ContentType | None:
        value = self.headers.get("Content-Type")
        if value is None:
            return None
        return ContentType.parse(value)

    @property
    def content_type(self) -> str | None:
        """``main/sub`` from ``Content-Type`` (parameters dropped), or ``None``."""
        ct = self._parsed_content_type()
        return None if ct is None else ct.mime_type

    @content_type.setter
    def content_type(self, value: str | None) -> None:
        if value is None:
            self.headers.delete("Content-Type")
            return
        self.set_content_type(value)

    @property
    def main_type(self) -> str | None:
        """``text`` for ``text/html``; ``None`` if Content-Type is absent."""
        ct = self._parsed_content_type()
        return None if ct is None else ct.main_type

    @property
    def sub_type(self) -> str | None:
        """``html`` for ``text/html``; ``None`` if absent or not given."""
        ct = self._parsed_content_type()
        return None if ct is None else ct.sub_type

    @property
    def type_params(self) -> dict[str, str] | None:
        """Content-Type parameters in header order, or ``None`` if absent."""
        ct = self._parsed_content_type()
        return None if ct is None else dict(ct.params)

    def set_content_type(
        self,
        mime_type: str,
        params: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        """Set ``Content-Type`` to ``mime_type; k1=v1; k2=v2``."""
        self.headers["Content-Type"] = format_content_type(mime_type, params)

    # -- Forms --

    def set_form_data(self, params: FormParams, sep: str | None = None) -> None:
        """URL-encode *params* into the body and set the urlencoded content type.

        *sep* replaces ``&`` between records; it defaults to the active
        config's ``form_separator``.
        """
        query = encode_form(params, get_config().form_separator if sep is None else sep)
        self.body = query
        self.form = None
        self.content_type = URLENCODED

    def set_form(
        self,
        params: FormParams,
        enctype: str = URLENCODED,
        *,
        boundary: str | None = None,
        charset: str | None = None,
    ) -> FormSubmission:
        """Stage an HTML form for the transmission layer to encode.

        Clears any body. Content-Type is set to *enctype* as given.

        Raises:
            ValueError: If *enctype* is not urlencoded or multipart/form-data.
        """
        submission = FormSubmission.stage(params, enctype, boundary=boundary, charset=charset)
        self.form = submission
        self.body = None
        self.content_type = submission.enctype
        return submission

    # -- Authorization --

    def basic_auth(self, account: str, password: str) -> None:
        """Set ``Authorization`` for HTTP Basic authentication."""
        self.headers["Authorization"] = basic_encode(account, password)

    def proxy_basic_auth(self, account: str, password: str) -> None:
        """Set ``Proxy-Authorization`` for HTTP Basic authentication."""
        self.headers["Proxy-Authorization"] = basic_encode(account, password)

