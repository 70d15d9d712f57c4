"""httpfields exception hierarchy.

Two families live here. Header validation and syntax errors are raised
synchronously by ``Headers`` and the semantic accessors. Protocol errors
are a classification for the transmission layer to raise when a
response indicates a failure; nothing in this package raises them.
"""

from enum import StrEnum
from typing import Any, ClassVar


class HTTPFieldsError(Exception):
    """Base for all httpfields-specific errors."""


class HeaderValueError(HTTPFieldsError, ValueError):
    """Raised when a header field value would corrupt the wire format.

    Values containing CR or LF are rejected at insertion time and never
    sanitized.
    """


class HeaderSyntaxError(HTTPFieldsError, ValueError):
    """Raised when a structured header value does not match its grammar.

    Covers ``Range``, ``Content-Range`` and ``Content-Length``, and
    out-of-bounds arguments to ``set_range``.
    """


class ErrorKind(StrEnum):
    """Retry classification of a protocol error."""

    GENERIC = "generic"
    RETRIABLE = "retriable"
    CLIENT = "client"
    FATAL = "fatal"


class ProtocolError(HTTPFieldsError):
    """A classified protocol failure tied to the response that caused it.

    The error holds a reference to ``response`` for inspection; it does
    not own it. ``message`` and ``response`` are read-only, and both are
    kept in ``args`` so copies and pickles rebuild the same error.

    Supports structural pattern matching on both fields::

        match err:
            case HTTPRetriableError(response=res) if res.status == 503:
                retry_with_backoff()
            case HTTPClientException(message=msg):
                log.info("giving up: %s", msg)
    """

    __match_args__ = ("message", "response")

    FIELD_NAMES: ClassVar[tuple[str, ...]] = ("message", "response")
    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC

    def __init__(self, message: str, response: Any = None) -> None:
        super().__init__(message, response)

    @property
    def message(self) -> str:
        return self.args[0]

    @property
    def response(self) -> Any:
        return self.args[1]

    def __str__(self) -> str:
        return self.message

    @property
    def retriable(self) -> bool:
        """True when the originating operation may be retried unmodified."""
        return self.kind is ErrorKind.RETRIABLE

    def fields(self, *names: str) -> dict[str, Any]:
        """Return the structured fields of this error.

        With no *names*, returns both ``message`` and ``response``.
        Otherwise returns only the requested names that are valid fields,
        in the order requested.
        """
        wanted = names or self.FIELD_NAMES
        return {name: getattr(self, name) for name in wanted if name in self.FIELD_NAMES}


class HTTPError(ProtocolError):
    """Unspecified protocol failure. Retry policy is up to the caller."""


class HTTPRetriableError(ProtocolError):
    """The caller may safely retry the originating operation."""

    kind = ErrorKind.RETRIABLE


class HTTPClientException(ProtocolError):  # noqa: N818: conventional name for 4xx failures
    """The response reports a client-side condition.

    Retrying the same request unmodified will not fix it.
    """

    kind = ErrorKind.CLIENT


class HTTPFatalError(ProtocolError):
    """Unrecoverable failure; the caller should abort."""

    kind = ErrorKind.FATAL
