"""Form bodies: URL-encoding and deferred form staging.

``encode_form()`` renders ``application/x-www-form-urlencoded`` data
with stdlib ``urllib.parse`` quoting. ``FormSubmission`` records a form
(params, encoding, boundary, charset) for the transmission layer to
render later; nothing here produces multipart bytes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus

from httpfields._internal.types import FormParams

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"

_ENCTYPES = frozenset({URLENCODED, MULTIPART})


def _pairs(params: FormParams) -> list[tuple[Any, ...]]:
    if isinstance(params, Mapping):
        return list(params.items())
    pairs: list[tuple[Any, ...]] = []
    for item in params:
        if isinstance(item, str | bytes) or len(item) not in (2, 3):
            msg = f"form item must be (name, value) or (name, value, options), got {item!r}"
            raise ValueError(msg)
        pairs.append(tuple(item))
    return pairs


def encode_form(params: FormParams, sep: str = "&") -> str:
    """URL-encode *params* as a query string.

    List and tuple values repeat the key (``q=a&q=b``). A ``None``
    value renders the bare key. Spaces become ``+``.

    Usage::

        encode_form({"q": "ruby", "lang": "en"})            # "q=ruby&lang=en"
        encode_form([("q", ["ruby", "perl"])], sep=";")      # "q=ruby;q=perl"
    """
    parts: list[str] = []
    for name, value, *_ in _pairs(params):
        key = quote_plus(str(name))
        values = value if isinstance(value, list | tuple) else [value]
        for v in values:
            if v is None:
                parts.append(key)
            else:
                parts.append(f"{key}={quote_plus(str(v))}")
    return sep.join(parts)


def check_enctype(enctype: str) -> str:
    """Return *enctype* unchanged if it names a supported form encoding.

    Raises:
        ValueError: Unless *enctype* is ``application/x-www-form-urlencoded``
            or ``multipart/form-data`` (case-insensitive, no parameters).
    """
    if enctype.lower() not in _ENCTYPES:
        msg = f"invalid enctype: {enctype}"
        raise ValueError(msg)
    return enctype


@dataclass(frozen=True, slots=True)
class FormSubmission:
    """A staged HTML form data set, not yet encoded.

    Each param is ``(name, value)`` or ``(name, value, options)`` where
    *options* may carry ``filename`` and ``content_type`` for file fields.
    ``boundary`` and ``charset`` apply to multipart rendering.
    """

    params: tuple[tuple[Any, ...], ...]
    enctype: str = URLENCODED
    boundary: str | None = None
    charset: str | None = None

    @classmethod
    def stage(
        cls,
        params: FormParams,
        enctype: str = URLENCODED,
        *,
        boundary: str | None = None,
        charset: str | None = None,
    ) -> FormSubmission:
        """Validate *enctype* and record the form without encoding it."""
        return cls(tuple(_pairs(params)), check_enctype(enctype), boundary, charset)

    @property
    def multipart(self) -> bool:
        return self.enctype.lower() == MULTIPART
