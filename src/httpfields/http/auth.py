"""HTTP Basic credentials (RFC 7617)."""

import base64


def basic_encode(account: str, password: str) -> str:
    """Return the ``Authorization`` value ``Basic <base64(account:password)>``.

    Credentials are encoded as UTF-8; the base64 text has no line breaks.
    """
    token = base64.b64encode(f"{account}:{password}".encode()).decode("ascii")
    return f"Basic {token}"
