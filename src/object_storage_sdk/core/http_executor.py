"""Centralized HTTP executor for the Object Storage SDK.

Sends one request and classifies its outcome. No retries are performed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from ..errors import ErrorKind
from ..telemetry import get_logger, trace_operation
from ..types import StorageResponse
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..models import RequestOptions


def to_storage_response(response: httpx.Response, *, raw_encoding: bool) -> StorageResponse:
    """Convert an httpx response into a StorageResponse.

    Args:
        response: Received response.
        raw_encoding: Keep the body as bytes instead of decoding it.

    Returns:
        StorageResponse with lower-cased header names.
    """
    return StorageResponse(
        status_code=response.status_code,
        headers={k.lower(): v for k, v in response.headers.items()},
        body=response.content if raw_encoding else response.text,
    )


class AsyncHTTPExecutor:
    """Asynchronous HTTP executor with status classification."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize async HTTP executor.

        Args:
            client: Async HTTP client.
        """
        self._client = client
        self._logger = get_logger()

    async def execute(self, options: RequestOptions) -> StorageResponse:
        """Execute a single request and classify the response status.

        Args:
            options: Request configuration.

        Returns:
            StorageResponse for statuses 200, 201 and 204.

        Raises:
            TransportError: When no response was received.
            ResourceNotFoundError: On 404.
            TimeoutError: On 408.
            DeleteConflictError: On 409.
            BadRequestError: On 411, 416 and 422.
            ServerError: On any other status.
        """
        with trace_operation(
            "object_storage_request",
            attributes={"http.method": options.method, "http.url": options.url},
        ) as span:
            try:
                response = await self._client.request(
                    options.method,
                    options.url,
                    headers=options.headers,
                    content=options.body,
                )
            except httpx.HTTPError as e:
                self._logger.error(
                    "Error caught making request to object storage",
                    error=str(e),
                )
                raise ErrorFactory.from_exception(e) from e

            status = response.status_code
            span.set_attribute("http.status_code", status)

            if ErrorFactory.is_success(status):
                return to_storage_response(response, raw_encoding=options.raw_encoding)

            error = ErrorFactory.from_status(status, url=options.url)
            if error.kind is ErrorKind.SERVER:
                self._logger.error(
                    "Unexpected status code returned from request to object storage",
                    status=status,
                    body=response.text,
                )
            raise error
