"""Object Storage Python SDK."""

from .client import HttpClient
from .config import Credentials, ObjectStorageConfig, Region, TelemetryConfig
from .errors import (
    AuthTokenError,
    BadRequestError,
    DeleteConflictError,
    ErrorKind,
    InvalidConfigError,
    ObjectStorageError,
    ResourceNotFoundError,
    ServerError,
    TimeoutError,
    TransportError,
)
from .factory import create_object_storage
from .models import AuthToken, RequestOptions
from .storage import (
    LocalObjectStorage,
    LocalObjectStorageContainer,
    LocalObjectStorageObject,
    ObjectStorage,
    ObjectStorageContainer,
    ObjectStorageObject,
)
from .telemetry import configure_telemetry
from .types import StorageResponse

__all__ = [
    "HttpClient",
    "Credentials",
    "ObjectStorageConfig",
    "Region",
    "TelemetryConfig",
    "AuthTokenError",
    "BadRequestError",
    "DeleteConflictError",
    "ErrorKind",
    "InvalidConfigError",
    "ObjectStorageError",
    "ResourceNotFoundError",
    "ServerError",
    "TimeoutError",
    "TransportError",
    "create_object_storage",
    "AuthToken",
    "RequestOptions",
    "LocalObjectStorage",
    "LocalObjectStorageContainer",
    "LocalObjectStorageObject",
    "ObjectStorage",
    "ObjectStorageContainer",
    "ObjectStorageObject",
    "configure_telemetry",
    "StorageResponse",
]

__version__ = "0.1.0"
