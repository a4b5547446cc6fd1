"""Local filesystem emulation of object storage, for development only.

Layout under the base directory::

    .metadata/account.json                  account metadata
    <container>/                            one directory per container
    <container>/<object>                    raw object bytes
    <container>/.metadata/container.json    container metadata
    <container>/.metadata/objects/<object>.json
                                            object content type and metadata

Metadata is stored and returned under the same lower-cased header names the
remote service reports (``x-container-meta-<key>`` ...).
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any, Mapping

from ..errors import (
    BadRequestError,
    DeleteConflictError,
    InvalidConfigError,
    ResourceNotFoundError,
)
from ..metadata import MetadataLevel, stored_key
from ..telemetry import get_logger, traced_async
from .base import ContainerBase, ObjectBase, StorageBase

METADATA_DIR = ".metadata"
BINARY_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def _validate_name(name: str) -> str:
    """Reject names that are empty, hidden or escape their directory."""
    if not name or name in {".", ".."} or name.startswith("."):
        raise BadRequestError(f"Invalid resource name: {name!r}")
    if "/" in name or "\\" in name or "\x00" in name:
        raise BadRequestError(f"Invalid resource name: {name!r}")
    return name


def _read_json(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(path: Path, data: Mapping[str, str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(dict(data), sort_keys=True), encoding="utf-8")


def _merge_metadata(path: Path, level: MetadataLevel, metadata: Mapping[str, Any]) -> None:
    stored = _read_json(path)
    for key, value in metadata.items():
        stored[stored_key(level, key)] = str(value)
    _write_json(path, stored)


def _remove_metadata(path: Path, level: MetadataLevel, metadata: Mapping[str, Any]) -> None:
    stored = _read_json(path)
    for key in metadata:
        stored.pop(stored_key(level, key), None)
    _write_json(path, stored)


def _filter_metadata(stored: Mapping[str, str], level: MetadataLevel) -> dict[str, str]:
    return {k: v for k, v in stored.items() if k.startswith(level.header_prefix)}


class LocalObjectStorageObject(ObjectBase):
    """An object stored as a file of a local container."""

    def __init__(self, name: str, container: LocalObjectStorageContainer) -> None:
        self.name = _validate_name(name)
        self.container = container
        self.path = container.path / name
        self.metadata_path = container.path / METADATA_DIR / "objects" / f"{name}.json"
        self.data: str | bytes | None = None
        self.content_type: str | None = None

    def __repr__(self) -> str:
        return f"LocalObjectStorageObject(name={self.name!r}, container={self.container.name!r})"

    def _read(self) -> tuple[bytes, str | None]:
        if not self.path.is_file():
            raise ResourceNotFoundError(resource=str(self.path))
        return self.path.read_bytes(), _read_json(self.metadata_path).get("content-type")

    def _require_exists(self) -> None:
        if not self.path.is_file():
            raise ResourceNotFoundError(resource=str(self.path))

    @traced_async()
    async def load(self, should_cache: bool = False, binary: bool = False) -> str | bytes:
        """Load the content of this object.

        Args:
            should_cache: Keep the content on ``self.data``.
            binary: Return bytes instead of decoded text.
        """
        content, content_type = await asyncio.to_thread(self._read)
        data: str | bytes = content if binary else content.decode("utf-8")
        self.content_type = content_type
        if should_cache:
            self.data = data
        return data

    async def metadata(self) -> dict[str, str]:
        await asyncio.to_thread(self._require_exists)
        stored = await asyncio.to_thread(_read_json, self.metadata_path)
        return _filter_metadata(stored, MetadataLevel.OBJECT)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._require_exists)
        await asyncio.to_thread(
            _merge_metadata, self.metadata_path, MetadataLevel.OBJECT, metadata
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._require_exists)
        await asyncio.to_thread(
            _remove_metadata, self.metadata_path, MetadataLevel.OBJECT, metadata
        )


class LocalObjectStorageContainer(ContainerBase):
    """A container stored as a directory."""

    def __init__(self, name: str, storage: LocalObjectStorage) -> None:
        self.name = _validate_name(name)
        self.storage = storage
        self.path = storage.base_dir / name
        self.metadata_path = self.path / METADATA_DIR / "container.json"

    def __repr__(self) -> str:
        return f"LocalObjectStorageContainer(name={self.name!r})"

    def _require_exists(self) -> None:
        if not self.path.is_dir():
            raise ResourceNotFoundError(resource=str(self.path))

    def _list_names(self) -> list[str]:
        self._require_exists()
        return sorted(
            entry.name
            for entry in self.path.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )

    def _write_object(self, obj: LocalObjectStorageObject, content: bytes, binary: bool) -> None:
        self._require_exists()
        obj.path.write_bytes(content)
        stored = _read_json(obj.metadata_path)
        stored["content-type"] = BINARY_CONTENT_TYPE if binary else TEXT_CONTENT_TYPE
        _write_json(obj.metadata_path, stored)

    def _delete_object(self, obj: LocalObjectStorageObject) -> None:
        self._require_exists()
        if not obj.path.is_file():
            raise ResourceNotFoundError(resource=str(obj.path))
        obj.path.unlink()
        obj.metadata_path.unlink(missing_ok=True)

    @traced_async()
    async def list_objects(self) -> list[LocalObjectStorageObject]:
        names = await asyncio.to_thread(self._list_names)
        return [LocalObjectStorageObject(name, self) for name in names]

    async def get_object(self, object_name: str) -> LocalObjectStorageObject:
        obj = LocalObjectStorageObject(object_name, self)
        await asyncio.to_thread(obj._require_exists)
        return obj

    @traced_async()
    async def create_object(
        self,
        object_name: str,
        data: str | bytes | None = None,
        binary: bool = False,
    ) -> LocalObjectStorageObject:
        """Create or overwrite an object.

        Args:
            object_name: Name of the object.
            data: Content to store; text is stored UTF-8 encoded.
            binary: Record the content as binary.
        """
        obj = LocalObjectStorageObject(object_name, self)
        if data is None:
            content = b""
        elif isinstance(data, str):
            content = data.encode("utf-8")
        else:
            content = bytes(data)
        await asyncio.to_thread(self._write_object, obj, content, binary)
        return obj

    @traced_async()
    async def delete_object(self, object_name: str) -> None:
        obj = LocalObjectStorageObject(object_name, self)
        await asyncio.to_thread(self._delete_object, obj)

    async def metadata(self) -> dict[str, str]:
        await asyncio.to_thread(self._require_exists)
        stored = await asyncio.to_thread(_read_json, self.metadata_path)
        return _filter_metadata(stored, MetadataLevel.CONTAINER)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._require_exists)
        await asyncio.to_thread(
            _merge_metadata, self.metadata_path, MetadataLevel.CONTAINER, metadata
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._require_exists)
        await asyncio.to_thread(
            _remove_metadata, self.metadata_path, MetadataLevel.CONTAINER, metadata
        )


class LocalObjectStorage(StorageBase):
    """Object storage account emulated on the local filesystem.

    Not for production use.
    """

    def __init__(self, base_dir: str | Path) -> None:
        """Initialize local storage, creating ``base_dir`` if needed.

        Raises:
            InvalidConfigError: If ``base_dir`` is empty or not a directory.
        """
        if not base_dir or not str(base_dir).strip():
            raise InvalidConfigError(
                "No base_dir for Local Object Storage instance found", field="base_dir"
            )

        self.base_dir = Path(base_dir)
        if self.base_dir.exists() and not self.base_dir.is_dir():
            raise InvalidConfigError(
                f"Local Object Storage base_dir is not a directory: {self.base_dir}",
                field="base_dir",
            )
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.metadata_path = self.base_dir / METADATA_DIR / "account.json"

        get_logger().warning(
            "Local object storage enabled, not for production use",
            base_dir=str(self.base_dir),
        )

    def __repr__(self) -> str:
        return f"LocalObjectStorage(base_dir={str(self.base_dir)!r})"

    def _list_names(self) -> list[str]:
        return sorted(
            entry.name
            for entry in self.base_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )

    def _create(self, container: LocalObjectStorageContainer) -> None:
        container.path.mkdir(exist_ok=True)

    def _delete(self, container: LocalObjectStorageContainer) -> None:
        if container._list_names():
            raise DeleteConflictError()
        shutil.rmtree(container.path)

    def _reset(self) -> None:
        shutil.rmtree(self.base_dir, ignore_errors=True)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    async def init_and_empty(self) -> None:
        """Remove every container and all metadata.

        Development helper with no remote counterpart.
        """
        await asyncio.to_thread(self._reset)

    @traced_async()
    async def list_containers(self) -> list[LocalObjectStorageContainer]:
        names = await asyncio.to_thread(self._list_names)
        return [LocalObjectStorageContainer(name, self) for name in names]

    @traced_async()
    async def create_container(self, container_name: str) -> LocalObjectStorageContainer:
        container = LocalObjectStorageContainer(container_name, self)
        await asyncio.to_thread(self._create, container)
        return container

    async def get_container(self, container_name: str) -> LocalObjectStorageContainer:
        container = LocalObjectStorageContainer(container_name, self)
        await asyncio.to_thread(container._require_exists)
        return container

    @traced_async()
    async def delete_container(self, container_name: str) -> None:
        """Delete a container.

        Raises:
            ResourceNotFoundError: If the container does not exist.
            DeleteConflictError: If the container still holds objects.
        """
        container = LocalObjectStorageContainer(container_name, self)
        await asyncio.to_thread(self._delete, container)

    async def metadata(self) -> dict[str, str]:
        stored = await asyncio.to_thread(_read_json, self.metadata_path)
        return _filter_metadata(stored, MetadataLevel.ACCOUNT)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(
            _merge_metadata, self.metadata_path, MetadataLevel.ACCOUNT, metadata
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await asyncio.to_thread(
            _remove_metadata, self.metadata_path, MetadataLevel.ACCOUNT, metadata
        )
