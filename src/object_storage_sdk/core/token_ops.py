"""Centralized token operations for the Object Storage SDK.

Holds the credentials-derived identity request body and the current bearer
token, and turns identity responses into new tokens.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ..errors import AuthTokenError
from ..models import AuthToken, build_auth_body

if TYPE_CHECKING:
    import httpx

    from ..config import Credentials

SUBJECT_TOKEN_HEADER = "x-subject-token"


class TokenOperations:
    """Token state and identity exchange payloads for one client.

    The identity request body is built once from the credentials and reused
    for every exchange. The token is only ever replaced as a whole.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        refresh_margin_seconds: int = 600,
    ) -> None:
        """Initialize token operations.

        Args:
            credentials: Identity credentials.
            refresh_margin_seconds: How long before expiration a token is
                considered expired.
        """
        self._credentials = credentials
        self._auth_body = build_auth_body(credentials)
        self._refresh_margin_seconds = refresh_margin_seconds
        self._token = AuthToken()

    @property
    def auth_body(self) -> dict[str, Any]:
        """Identity request body."""
        return self._auth_body

    @property
    def token(self) -> AuthToken:
        """Current token."""
        return self._token

    def set_token(self, token: AuthToken) -> None:
        """Replace the current token."""
        self._token = token

    def is_expired(self, token: AuthToken | None = None) -> bool:
        """Check ``token`` (the current token by default) against the margin."""
        token = token or self._token
        return token.is_expired(self._refresh_margin_seconds)

    def build_identity_request_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def build_identity_request_body(self) -> bytes:
        return json.dumps(self._auth_body).encode("utf-8")

    def process_identity_response(self, response: httpx.Response) -> AuthToken:
        """Parse an identity response into a token and make it current.

        Args:
            response: Response of the identity exchange.

        Returns:
            The new token.

        Raises:
            AuthTokenError: If the exchange was rejected or the response
                lacks the subject token or expiration. The current token is
                left unchanged.
        """
        if not 200 <= response.status_code < 300:
            raise AuthTokenError(status_code=response.status_code)

        subject_token = response.headers.get(SUBJECT_TOKEN_HEADER)
        if not subject_token:
            raise AuthTokenError("Identity response is missing the subject token")

        try:
            token = AuthToken.from_identity_response(subject_token, response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise AuthTokenError("Identity response has no usable expiration", cause=e) from e

        self._token = token
        return token
