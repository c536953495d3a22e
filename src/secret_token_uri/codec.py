"""Encoding and decoding of RFC 8959 ``secret-token:`` URIs.

A secret-token URI is the literal prefix ``secret-token:`` followed by a
percent-encoded payload::

    secret-token-uri = "secret-token:" 1*( unreserved / pct-encoded / "+" )

:func:`decode` and :func:`decode_bytes` treat malformed input as an ordinary
outcome and return ``None``. :func:`parse` and :func:`parse_bytes` perform the
same checks but raise :class:`MalformedSecretTokenError` with the reason.
"""

from __future__ import annotations

import logging

from .exceptions import MalformedSecretTokenError
from .utils.percent import percent_decode, percent_encode

logger = logging.getLogger(__name__)

SCHEME = "secret-token"
PREFIX = f"{SCHEME}:"


def encode(token: str | bytes) -> str:
    """Return the secret-token URI carrying ``token``.

    Text is UTF-8 encoded first. Bytes outside the unreserved set, ``+``
    included, are escaped with uppercase hex digits.
    """
    data = token.encode("utf-8") if isinstance(token, str) else bytes(token)
    return f"{PREFIX}{percent_encode(data)}"


def parse_bytes(uri: str | bytes) -> bytes:
    """Decode ``uri`` into the raw token bytes, raising on malformed input."""
    if isinstance(uri, (bytes, bytearray)):
        try:
            uri = bytes(uri).decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedSecretTokenError("non_ascii", "secret-token URI contains non-ASCII bytes") from exc
    if not uri.startswith(PREFIX):
        raise MalformedSecretTokenError("missing_prefix", f"URI does not start with {PREFIX!r}")
    return percent_decode(uri[len(PREFIX) :])


def parse(uri: str | bytes) -> str:
    """Decode ``uri`` into a UTF-8 token, raising on malformed input."""
    data = parse_bytes(uri)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedSecretTokenError("invalid_utf8", "secret-token payload is not valid UTF-8") from exc


def decode_bytes(uri: str | bytes) -> bytes | None:
    """Return the raw token bytes, or ``None`` when ``uri`` is malformed."""
    try:
        return parse_bytes(uri)
    except MalformedSecretTokenError as exc:
        logger.debug("Rejected secret-token URI: %s", exc.code)
        return None


def decode(uri: str | bytes) -> str | None:
    """Return the decoded token, or ``None`` when ``uri`` is malformed.

    The token must also be valid UTF-8; use :func:`decode_bytes` for binary
    secrets.
    """
    try:
        return parse(uri)
    except MalformedSecretTokenError as exc:
        logger.debug("Rejected secret-token URI: %s", exc.code)
        return None


def is_secret_token(candidate: str | bytes) -> bool:
    """True if ``candidate`` is a well-formed secret-token URI."""
    return decode_bytes(candidate) is not None
