"""Authenticated async HTTP client for the Object Storage SDK.

Every resource request refreshes the bearer token when needed, attaches it,
and classifies the response status into a result or an SDK error.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Self

import httpx

from .config import ObjectStorageConfig
from .core.http_executor import AsyncHTTPExecutor
from .core.token_ops import TokenOperations
from .errors import AuthTokenError
from .http import create_async_http_client
from .models import AuthToken, RequestOptions
from .telemetry import configure_telemetry, get_logger, trace_operation

if TYPE_CHECKING:
    from .config import Credentials
    from .types import StorageResponse


class HttpClient:
    """Async client for Swift-style object storage requests."""

    def __init__(
        self,
        credentials: Credentials,
        config: ObjectStorageConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Identity credentials.
            config: SDK configuration (defaults are used when omitted).
            http_client: Optional pre-built httpx client; not closed by
                ``close()``.
            transport: Optional transport for the client built here.
        """
        self.credentials = credentials
        self.config = config or ObjectStorageConfig()
        configure_telemetry(self.config.telemetry)
        self._owns_http = http_client is None
        self._http = http_client or create_async_http_client(self.config, transport)
        self._executor = AsyncHTTPExecutor(self._http)
        self._token_ops = TokenOperations(
            credentials,
            refresh_margin_seconds=self.config.refresh_margin_seconds,
        )
        self._refresh_lock = asyncio.Lock()
        self._logger = get_logger()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if it was created here."""
        if self._owns_http:
            await self._http.aclose()

    def get_auth_body(self) -> dict[str, Any]:
        """Identity request body built from the credentials."""
        return self._token_ops.auth_body

    def get_token(self) -> AuthToken:
        """Current bearer token and its expiration."""
        return self._token_ops.token

    def set_token(self, token: AuthToken) -> None:
        """Replace the current bearer token."""
        self._token_ops.set_token(token)

    def is_expired(self, token: AuthToken | None = None) -> bool:
        """Check whether ``token`` (the current token by default) needs a refresh."""
        return self._token_ops.is_expired(token)

    async def refresh_token(self) -> None:
        """Re-authenticate if the current token is expired or about to expire.

        Concurrent callers observing an expired token share one identity
        exchange.

        Raises:
            AuthTokenError: If the identity exchange fails. The current token
                is left unchanged.
        """
        if not self.is_expired():
            return

        async with self._refresh_lock:
            if not self.is_expired():
                return

            with trace_operation(
                "refresh_token",
                attributes={"identity.url": self.config.identity_url_str},
            ):
                try:
                    response = await self._http.post(
                        self.config.identity_url_str,
                        headers=self._token_ops.build_identity_request_headers(),
                        content=self._token_ops.build_identity_request_body(),
                    )
                except httpx.HTTPError as e:
                    self._logger.error(
                        "Error received while requesting authorization token",
                        error=str(e),
                    )
                    raise AuthTokenError(cause=e) from e

                try:
                    self._token_ops.process_identity_response(response)
                except AuthTokenError as e:
                    self._logger.error(
                        "Identity service rejected authorization token request",
                        status=response.status_code,
                        error=e.message,
                    )
                    raise

    async def send(self, options: RequestOptions) -> StorageResponse:
        """Send an authenticated request.

        Args:
            options: Request configuration.

        Returns:
            The response for statuses 200, 201 and 204.

        Raises:
            AuthTokenError: If the token refresh fails.
            ObjectStorageError: Classified failure of the request itself.
        """
        await self.refresh_token()

        options = options.with_headers(
            {
                "Content-Type": "application/json",
                "X-Auth-Token": self._token_ops.token.token,
            }
        )
        return await self._executor.execute(options)

    async def get(self, url: str, raw_encoding: bool = False) -> StorageResponse:
        """GET ``url``; ``raw_encoding`` keeps the body as bytes."""
        return await self.send(RequestOptions(method="GET", url=url, raw_encoding=raw_encoding))

    async def put(
        self,
        url: str,
        data: bytes | str | None = None,
        raw_encoding: bool = False,
    ) -> StorageResponse:
        """PUT ``data`` to ``url``.

        With ``raw_encoding`` the server is asked to detect the content type
        from the bytes.
        """
        headers = {"X-Detect-Content-Type": "true"} if raw_encoding else {}
        return await self.send(
            RequestOptions(
                method="PUT",
                url=url,
                headers=headers,
                body=data,
                raw_encoding=raw_encoding,
            )
        )

    async def delete(self, url: str) -> StorageResponse:
        return await self.send(RequestOptions(method="DELETE", url=url))

    async def post(self, url: str, headers: dict[str, str]) -> StorageResponse:
        """POST with caller-supplied headers, used for metadata updates."""
        return await self.send(RequestOptions(method="POST", url=url, headers=headers))

    async def head(self, url: str) -> StorageResponse:
        """HEAD ``url``; metadata is returned in the response headers."""
        return await self.send(RequestOptions(method="HEAD", url=url))
