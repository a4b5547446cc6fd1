"""Pydantic models for the Object Storage SDK.

Frozen models give the token and per-call request options value semantics:
a refresh replaces the ``AuthToken`` as a whole, and every verb builds a
fresh ``RequestOptions``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import Credentials


def build_auth_body(credentials: Credentials) -> dict[str, Any]:
    """Build the password-method identity request body for ``credentials``."""
    return {
        "auth": {
            "identity": {
                "methods": ["password"],
                "password": {
                    "user": {
                        "id": credentials.user_id,
                        "password": credentials.password.get_secret_value(),
                    },
                },
            },
            "scope": {
                "project": {
                    "id": credentials.project_id,
                },
            },
        },
    }


class AuthToken(BaseModel):
    """Bearer token with its expiration instant."""

    model_config = ConfigDict(frozen=True)

    token: str = ""
    expires_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("expires_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive expirations as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @classmethod
    def from_identity_response(cls, token: str, body: dict[str, Any]) -> Self:
        """Create a token from the subject token header and parsed body."""
        return cls(token=token, expires_at=body["token"]["expires_at"])

    def is_expired(self, margin_seconds: int = 600) -> bool:
        """Check whether the token is expired or within ``margin_seconds`` of it."""
        refresh_limit = self.expires_at - timedelta(seconds=margin_seconds)
        return datetime.now(UTC) >= refresh_limit


class RequestOptions(BaseModel):
    """Configuration of a single resource request."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | str | None = None
    raw_encoding: bool = False

    @field_validator("method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        """HTTP verbs are sent upper-cased."""
        return v.upper()

    def with_headers(self, headers: dict[str, str]) -> Self:
        """Return a copy with ``headers`` merged over the existing ones."""
        return self.model_copy(update={"headers": {**self.headers, **headers}})
