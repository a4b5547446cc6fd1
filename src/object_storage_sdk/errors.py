"""Error classes for the Object Storage SDK.

Every failure surfaced by the SDK is an ``ObjectStorageError`` carrying an
``ErrorKind`` discriminant, so callers can classify errors without relying
on class identity.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Discriminant for SDK errors."""

    AUTH_TOKEN = "auth_token"
    RESOURCE_NOT_FOUND = "resource_not_found"
    TIMEOUT = "timeout"
    DELETE_CONFLICT = "delete_conflict"
    BAD_REQUEST = "bad_request"
    SERVER = "server"
    TRANSPORT = "transport"
    INVALID_CONFIG = "invalid_config"


class ObjectStorageError(Exception):
    """Base error for the Object Storage SDK."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind | str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = ErrorKind(kind)
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "kind": self.kind.value,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, message={self.message!r})"


class AuthTokenError(ObjectStorageError):
    """Re-authentication exchange with the identity service failed."""

    def __init__(
        self,
        message: str = "An error occurred retrieving the authentication token",
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorKind.AUTH_TOKEN,
            status_code=status_code,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class ResourceNotFoundError(ObjectStorageError):
    """Target account, container or object does not exist."""

    def __init__(
        self,
        message: str = "Unable to locate specified resource",
        *,
        resource: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorKind.RESOURCE_NOT_FOUND,
            status_code=404,
            details={"resource": resource} if resource else None,
        )


class TimeoutError(ObjectStorageError):
    """Server reported a request timeout."""

    def __init__(self, message: str = "The request timed out") -> None:
        super().__init__(message, ErrorKind.TIMEOUT, status_code=408)


class DeleteConflictError(ObjectStorageError):
    """Resource state prevents deletion, e.g. a non-empty container."""

    def __init__(
        self,
        message: str = (
            "There was a conflict deleting the container. "
            "Containers must be empty before deletion"
        ),
    ) -> None:
        super().__init__(message, ErrorKind.DELETE_CONFLICT, status_code=409)


class BadRequestError(ObjectStorageError):
    """Malformed or invalid request."""

    def __init__(
        self,
        message: str = "Bad request",
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, ErrorKind.BAD_REQUEST, status_code=status_code)


class ServerError(ObjectStorageError):
    """Any unclassified non-success status."""

    def __init__(
        self,
        message: str = "A server error occurred",
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, ErrorKind.SERVER, status_code=status_code)


class TransportError(ObjectStorageError):
    """No HTTP response was obtained (DNS, connection, read failure)."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorKind.TRANSPORT,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class InvalidConfigError(ObjectStorageError):
    """Invalid SDK configuration or missing credentials."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorKind.INVALID_CONFIG,
            details={"field": field} if field else None,
        )
