"""Custom exceptions for secret-token URI handling."""


class SecretTokenError(Exception):
    """Base exception for secret-token failures."""


class MalformedSecretTokenError(SecretTokenError, ValueError):
    """Raised when a candidate is not a well-formed secret-token URI.

    The message never contains the candidate itself, only the reason. ``code``
    is a stable identifier callers can branch on.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class ConfigurationError(SecretTokenError):
    """Raised when configuration is invalid or incomplete."""
