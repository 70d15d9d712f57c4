"""httpfields: the semantic layer of an HTTP message.

A case-insensitive, multi-valued header store with strict value
validation, typed views over the structured header fields, and a
classified protocol error hierarchy for retry decisions.

Basic usage::

    from httpfields import Request

    req = Request("GET", "/video.mp4", {"Accept": "*/*"})
    req.set_range(0, 1023)
    req["Range"]   # "bytes=0-1023"
    req.ranges     # [ByteRange(first=0, last=1023)]

Classified errors::

    from httpfields import HTTPRetriableError

    match err:
        case HTTPRetriableError(response=res):
            retry(res)
"""

__version__ = "0.1.0"
__all__ = [
    "ByteRange",
    "ContentRange",
    "ContentType",
    "ErrorKind",
    "FieldsConfig",
    "FormSubmission",
    "HTTPClientException",
    "HTTPError",
    "HTTPFatalError",
    "HTTPFieldsError",
    "HTTPRetriableError",
    "HeaderBearer",
    "HeaderSyntaxError",
    "HeaderValueError",
    "Headers",
    "OpenByteRange",
    "ProtocolError",
    "Request",
    "Response",
    "SuffixByteRange",
    "get_config",
    "use_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import httpfields`` fast while providing a clean top-level API.
    """
    if name == "Headers":
        from httpfields.http.headers import Headers

        return Headers

    if name == "HeaderBearer":
        from httpfields.http.bearer import HeaderBearer

        return HeaderBearer

    if name == "Request":
        from httpfields.http.request import Request

        return Request

    if name == "Response":
        from httpfields.http.response import Response

        return Response

    if name in ("ByteRange", "OpenByteRange", "SuffixByteRange", "ContentRange"):
        from httpfields.http import ranges as _ranges

        return getattr(_ranges, name)

    if name == "ContentType":
        from httpfields.http.content_type import ContentType

        return ContentType

    if name == "FormSubmission":
        from httpfields.http.forms import FormSubmission

        return FormSubmission

    if name in ("FieldsConfig", "get_config", "use_config"):
        from httpfields import config as _config

        return getattr(_config, name)

    if name in (
        "ErrorKind",
        "HTTPClientException",
        "HTTPError",
        "HTTPFatalError",
        "HTTPFieldsError",
        "HTTPRetriableError",
        "HeaderSyntaxError",
        "HeaderValueError",
        "ProtocolError",
    ):
        from httpfields import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
