"""HTTP response message: status line plus one owned ``Headers``.

``raise_for_status()`` maps a status class to the protocol error the
caller should see, the same way for every response:

- 1xx: ``HTTPError``
- 2xx: no error
- 3xx: ``HTTPRetriableError``
- 4xx: ``HTTPClientException``
- 5xx: ``HTTPFatalError``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus

from httpfields.errors import (
    HTTPClientException,
    HTTPError,
    HTTPFatalError,
    HTTPRetriableError,
    ProtocolError,
)
from httpfields.http.bearer import HeaderBearer
from httpfields.http.forms import FormSubmission
from httpfields.http.headers import Headers

_ERROR_TYPES: dict[int, type[ProtocolError] | None] = {
    1: HTTPError,
    2: None,
    3: HTTPRetriableError,
    4: HTTPClientException,
    5: HTTPFatalError,
}


@dataclass(slots=True)
class Response(HeaderBearer):
    """A received HTTP response.

    ``reason`` defaults to the standard phrase for ``status``.
    """

    status: int = 200
    reason: str = ""
    headers: Headers = field(default_factory=Headers)
    body: str | bytes | None = None
    form: FormSubmission | None = None
    http_version: str = "1.1"

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        if not self.reason:
            try:
                self.reason = HTTPStatus(self.status).phrase
            except ValueError:
                self.reason = ""

    @property
    def code(self) -> str:
        """The status code as it appears on the status line."""
        return str(self.status)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_error(self) -> bool:
        return self.status >= 400

    @property
    def error_type(self) -> type[ProtocolError] | None:
        """The protocol error class for this status, or ``None`` for 2xx."""
        return _ERROR_TYPES.get(self.status // 100, HTTPError)

    def raise_for_status(self) -> None:
        """Raise the classified error for a non-2xx status.

        Raises:
            ProtocolError: The ``error_type`` subclass, carrying this
                response.
        """
        error_type = self.error_type
        if error_type is not None:
            raise error_type(f'{self.status} "{self.reason}"', self)
