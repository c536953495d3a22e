"""secret-token-uri package."""

from importlib.metadata import PackageNotFoundError, version as _version

from .codec import PREFIX, SCHEME, decode, decode_bytes, encode, is_secret_token, parse, parse_bytes
from .exceptions import ConfigurationError, MalformedSecretTokenError, SecretTokenError

__all__ = [
    "__version__",
    "SCHEME",
    "PREFIX",
    "decode",
    "decode_bytes",
    "encode",
    "is_secret_token",
    "parse",
    "parse_bytes",
    "SecretTokenError",
    "MalformedSecretTokenError",
    "ConfigurationError",
]
try:
    __version__ = _version("secret-token-uri")
except PackageNotFoundError:
    __version__ = "0.0.0"
