"""Percent-encoding helpers restricted to the secret-token payload grammar."""

from __future__ import annotations

import re
from urllib.parse import quote_from_bytes, unquote_to_bytes

from ..exceptions import MalformedSecretTokenError

# ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~")

_PAYLOAD_RE = re.compile(r"(?:[A-Za-z0-9\-._~+]|%[0-9A-Fa-f]{2})+")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def percent_encode(data: bytes) -> str:
    """Escape every byte outside the unreserved set as an uppercase ``%XX`` triplet."""
    # quote_from_bytes never escapes the RFC 3986 unreserved set and emits uppercase hex.
    return quote_from_bytes(data, safe="")


def validate_payload(payload: str) -> None:
    """Raise :class:`MalformedSecretTokenError` unless ``payload`` matches the grammar."""
    if not payload:
        raise MalformedSecretTokenError("empty_payload", "secret-token URI has an empty payload")
    if not payload.isascii():
        raise MalformedSecretTokenError("non_ascii", "secret-token payload contains non-ASCII characters")
    if _PAYLOAD_RE.fullmatch(payload):
        return
    if _BAD_ESCAPE_RE.search(payload):
        raise MalformedSecretTokenError("invalid_escape", "secret-token payload contains a malformed percent escape")
    raise MalformedSecretTokenError("invalid_character", "secret-token payload contains a character that must be escaped")


def percent_decode(payload: str) -> bytes:
    """Validate ``payload`` and return the bytes it encodes."""
    validate_payload(payload)
    return unquote_to_bytes(payload)
