"""
Shared test fixtures for Object Storage SDK tests.

Provides credentials, configuration, and an ``httpx.MockTransport`` backed
client whose identity endpoint issues tokens.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from object_storage_sdk.client import HttpClient
from object_storage_sdk.config import (
    Credentials,
    ObjectStorageConfig,
    TelemetryConfig,
)
from object_storage_sdk.models import AuthToken

IDENTITY_URL = "https://identity.example.com/v3/auth/tokens"
ACCOUNT_URL = "https://dal.objectstorage.open.softlayer.com:443/v1/AUTH_pid"

Handler = Callable[[httpx.Request], httpx.Response]


def expires_in(minutes: float) -> str:
    """ISO-8601 expiration ``minutes`` from now."""
    return (datetime.now(UTC) + timedelta(minutes=minutes)).isoformat()


def fresh_token(value: str = "fresh-token") -> AuthToken:
    """Token valid for an hour."""
    return AuthToken(token=value, expires_at=datetime.now(UTC) + timedelta(hours=1))


def identity_response(token: str = "issued-token", minutes: float = 60) -> httpx.Response:
    """Successful identity exchange response."""
    return httpx.Response(
        201,
        headers={"x-subject-token": token},
        json={"token": {"expires_at": expires_in(minutes)}},
    )


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records requests and answers identity exchanges."""

    def __init__(self, handler: Handler, *, identity: Handler | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.identity_requests: list[httpx.Request] = []
        self._resource_handler = handler
        self._identity_handler = identity or (lambda request: identity_response())
        super().__init__(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == IDENTITY_URL:
            self.identity_requests.append(request)
            return self._identity_handler(request)
        self.requests.append(request)
        return self._resource_handler(request)


@pytest.fixture
def credentials() -> Credentials:
    """Credentials for a Dallas project."""
    return Credentials(user_id="u", password="p", project_id="pid", region="dallas")


@pytest.fixture
def config() -> ObjectStorageConfig:
    """Configuration pointing at the fake identity endpoint."""
    return ObjectStorageConfig(
        identity_url=IDENTITY_URL,
        telemetry=TelemetryConfig(enabled=False),
    )


@pytest.fixture
def make_client(
    credentials: Credentials,
    config: ObjectStorageConfig,
) -> Callable[..., tuple[HttpClient, RecordingTransport]]:
    """Build an HttpClient over a RecordingTransport."""

    def _make(
        handler: Handler | None = None,
        *,
        identity: Handler | None = None,
    ) -> tuple[HttpClient, RecordingTransport]:
        transport = RecordingTransport(
            handler or (lambda request: httpx.Response(200, text="ok")),
            identity=identity,
        )
        return HttpClient(credentials, config, transport=transport), transport

    return _make
