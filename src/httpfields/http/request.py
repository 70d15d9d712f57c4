"""HTTP request message: method, target, and one owned ``Headers``."""

from __future__ import annotations

from dataclasses import dataclass, field

from httpfields.http.bearer import HeaderBearer
from httpfields.http.forms import FormSubmission
from httpfields.http.headers import Headers


@dataclass(slots=True)
class Request(HeaderBearer):
    """An outgoing HTTP request.

    ``headers`` accepts a ``Headers`` or anything ``Headers()`` accepts::

        req = Request("POST", "/search", {"Accept": "text/html"})
        req.set_form_data({"q": "python"})
        req.body          # "q=python"
        req.content_type  # "application/x-www-form-urlencoded"

    ``body`` and ``form`` are staged here and rendered by the
    transmission layer.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    body: str | bytes | None = None
    form: FormSubmission | None = None
    http_version: str = "1.1"

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        self.method = self.method.upper()

    @property
    def request_line(self) -> str:
        """``GET /path HTTP/1.1``"""
        return f"{self.method} {self.path} HTTP/{self.http_version}"
