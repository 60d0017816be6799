"""Redirect target construction for signed submissions."""

from __future__ import annotations

from urllib.parse import quote

# every printable, non-space ASCII character; existing %XX escapes survive
_PRINTABLE_ASCII = "".join(chr(c) for c in range(0x21, 0x7F))


def compose_redirect_url(redirect_url: str, request_token: str, signature_hex: str) -> str:
    """Append ``request-token`` and ``signature`` to *redirect_url*.

    The caller's URL is not validated or restructured. Only characters that
    cannot appear in a Location header (spaces, controls, non-ASCII) are
    percent-encoded. The token is fully percent-encoded so ``&``, ``=``,
    ``#`` and friends cannot split or truncate the query string; tokens
    made of unreserved characters come through unchanged. The hex
    signature needs no escaping.
    """
    base = quote(redirect_url, safe=_PRINTABLE_ASCII)
    token = quote(request_token, safe="")
    return f"{base}?request-token={token}&signature={signature_hex}"
