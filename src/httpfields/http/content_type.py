"""Content-Type parsing and formatting: ``type/subtype; key=value; ...``."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ContentType:
    """A parsed ``Content-Type`` value.

    ``sub_type`` is ``None`` when the header carries only a main type
    (``Content-Type: text``). ``params`` keeps header order.
    """

    main_type: str
    sub_type: str | None = None
    params: dict[str, str] = field(default_factory=dict)

    @property
    def mime_type(self) -> str:
        """``main/sub``, or just the main type when there is no subtype."""
        if self.sub_type is None:
            return self.main_type
        return f"{self.main_type}/{self.sub_type}"

    def __str__(self) -> str:
        return format_content_type(self.mime_type, self.params)

    @classmethod
    def parse(cls, value: str) -> ContentType:
        """Split *value* on ``;`` into the type token and its parameters.

        Every piece is stripped. A parameter without ``=`` gets an empty
        value; empty segments are skipped.
        """
        type_token, *segments = value.split(";")
        main, slash, sub = type_token.partition("/")
        params: dict[str, str] = {}
        for segment in segments:
            if not segment.strip():
                continue
            key, _, val = segment.partition("=")
            params[key.strip()] = val.strip()
        return cls(main.strip(), sub.strip() if slash else None, params)


def format_content_type(
    mime_type: str,
    params: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
) -> str:
    """Compose ``type; k1=v1; k2=v2`` from a type and ordered parameters."""
    items = params.items() if isinstance(params, Mapping) else (params or ())
    return mime_type + "".join(f"; {k}={v}" for k, v in items)
