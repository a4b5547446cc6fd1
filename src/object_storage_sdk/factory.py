"""Selection of the remote or local storage backend."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from pydantic import ValidationError

from .config import Credentials
from .errors import InvalidConfigError
from .storage.local import LocalObjectStorage
from .storage.remote import ObjectStorage

if TYPE_CHECKING:
    from .config import ObjectStorageConfig
    from .storage.base import StorageBase

DEFAULT_LOCAL_BASE_DIR = Path(tempfile.gettempdir()) / "localObjectStorage"


def create_object_storage(
    credentials: Credentials | Mapping[str, Any] | None = None,
    *,
    base_dir: str | Path | None = None,
    config: ObjectStorageConfig | None = None,
) -> StorageBase:
    """Create the storage backend matching the given options.

    With credentials, a remote ``ObjectStorage`` is returned; the region name
    ``london`` selects the London endpoint and any other name Dallas. Without
    credentials, a ``LocalObjectStorage`` rooted at ``base_dir`` is returned.

    Args:
        credentials: Credentials model or a raw mapping such as a service
            binding's credentials block.
        base_dir: Root directory of the local backend.
        config: SDK configuration for the remote backend.

    Raises:
        InvalidConfigError: If a credentials mapping is incomplete.
    """
    if not credentials:
        return LocalObjectStorage(base_dir or DEFAULT_LOCAL_BASE_DIR)

    if not isinstance(credentials, Credentials):
        try:
            credentials = Credentials.model_validate(credentials)
        except ValidationError as e:
            msg = f"Invalid Object Storage credentials: {e.error_count()} error(s)"
            raise InvalidConfigError(msg, field="credentials") from e

    return ObjectStorage(credentials, config)
