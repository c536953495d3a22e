"""Pydantic types for carrying credentials in secret-token URI form."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, SecretStr, field_validator

from .codec import encode, parse


def _token_from_uri(value: Any) -> Any:
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    if isinstance(value, (str, bytes)):
        return SecretStr(parse(value))
    return value


SecretTokenStr = Annotated[SecretStr, BeforeValidator(_token_from_uri)]
"""Field type that accepts a secret-token URI and stores the decoded token."""


class SecretTokenURI(BaseModel):
    """A validated secret-token URI."""

    model_config = ConfigDict(frozen=True)

    uri: SecretStr = Field(description="Well-formed secret-token URI. Masked in reprs and dumps.")

    @field_validator("uri")
    @classmethod
    def _validate_uri(cls, value: SecretStr) -> SecretStr:
        parse(value.get_secret_value())
        return value

    @property
    def token(self) -> SecretStr:
        return SecretStr(parse(self.uri.get_secret_value()))

    @classmethod
    def from_token(cls, token: str | bytes) -> "SecretTokenURI":
        """Build the URI for ``token``.

        Binary tokens that are not valid UTF-8 are rejected, since :attr:`token`
        exposes text.
        """
        return cls(uri=SecretStr(encode(token)))
