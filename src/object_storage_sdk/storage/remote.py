"""Remote Swift-style object storage: account, containers and objects.

Each operation builds a resource URL and forwards one verb to the
authenticated ``HttpClient``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ..client import HttpClient
from ..config import Credentials
from ..metadata import MetadataLevel, remove_headers, update_headers
from .base import ContainerBase, ObjectBase, StorageBase

if TYPE_CHECKING:
    from ..config import ObjectStorageConfig


def _split_names(body: str | bytes) -> list[str]:
    """Names from a plain-text listing, one per line, blanks skipped."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return [name for name in body.split("\n") if name]


class ObjectStorageObject(ObjectBase):
    """An object stored in a remote container."""

    def __init__(self, name: str, container: ObjectStorageContainer) -> None:
        self.name = name
        self.container = container
        self.client = container.client
        self.base_resource_url = f"{container.base_resource_url}/{name}"
        self.data: str | bytes | None = None
        self.content_type: str | None = None

    def __repr__(self) -> str:
        return f"ObjectStorageObject(name={self.name!r}, container={self.container.name!r})"

    async def load(self, should_cache: bool = False, binary: bool = False) -> str | bytes:
        """Load the content of this object.

        Args:
            should_cache: Keep the content on ``self.data``.
            binary: Return bytes instead of decoded text.

        Returns:
            Object content.
        """
        response = await self.client.get(self.base_resource_url, binary)
        self.content_type = response.content_type
        if should_cache:
            self.data = response.body
        return response.body

    async def metadata(self) -> dict[str, str]:
        response = await self.client.head(self.base_resource_url)
        return response.headers_with_prefix(MetadataLevel.OBJECT.header_prefix)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, update_headers(MetadataLevel.OBJECT, metadata)
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, remove_headers(MetadataLevel.OBJECT, metadata)
        )


class ObjectStorageContainer(ContainerBase):
    """A container of a remote account."""

    def __init__(self, name: str, storage: ObjectStorage) -> None:
        self.name = name
        self.storage = storage
        self.client = storage.client
        self.base_resource_url = f"{storage.base_resource_url}/{name}"

    def __repr__(self) -> str:
        return f"ObjectStorageContainer(name={self.name!r})"

    def _object_url(self, object_name: str) -> str:
        return f"{self.base_resource_url}/{object_name}"

    async def list_objects(self) -> list[ObjectStorageObject]:
        response = await self.client.get(self.base_resource_url)
        return [ObjectStorageObject(name, self) for name in _split_names(response.body)]

    async def get_object(self, object_name: str) -> ObjectStorageObject:
        await self.client.get(self._object_url(object_name))
        return ObjectStorageObject(object_name, self)

    async def create_object(
        self,
        object_name: str,
        data: str | bytes | None = None,
        binary: bool = False,
    ) -> ObjectStorageObject:
        """Create or overwrite an object.

        Args:
            object_name: Name of the object.
            data: Content to store.
            binary: Let the server detect the content type from the bytes.
        """
        await self.client.put(self._object_url(object_name), data, binary)
        return ObjectStorageObject(object_name, self)

    async def delete_object(self, object_name: str) -> None:
        await self.client.delete(self._object_url(object_name))

    async def metadata(self) -> dict[str, str]:
        response = await self.client.head(self.base_resource_url)
        return response.headers_with_prefix(MetadataLevel.CONTAINER.header_prefix)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, update_headers(MetadataLevel.CONTAINER, metadata)
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, remove_headers(MetadataLevel.CONTAINER, metadata)
        )


class ObjectStorage(StorageBase):
    """Remote object storage account.

    Without explicit credentials, the first bound ``Object-Storage`` service
    in ``VCAP_SERVICES`` is used.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        config: ObjectStorageConfig | None = None,
        *,
        client: HttpClient | None = None,
    ) -> None:
        """Initialize the account.

        Args:
            credentials: Identity credentials and region.
            config: SDK configuration for the client built here.
            client: Optional pre-built authenticated client.

        Raises:
            InvalidConfigError: If no credentials are given or bound.
        """
        self.credentials = credentials or Credentials.from_vcap_services()
        self.base_resource_url = self.credentials.account_url
        self.client = client or HttpClient(self.credentials, config)

    def __repr__(self) -> str:
        return f"ObjectStorage(base_resource_url={self.base_resource_url!r})"

    def _container_url(self, container_name: str) -> str:
        return f"{self.base_resource_url}/{container_name}"

    async def close(self) -> None:
        await self.client.close()

    async def list_containers(self) -> list[ObjectStorageContainer]:
        response = await self.client.get(self.base_resource_url)
        return [ObjectStorageContainer(name, self) for name in _split_names(response.body)]

    async def create_container(self, container_name: str) -> ObjectStorageContainer:
        await self.client.put(self._container_url(container_name))
        return ObjectStorageContainer(container_name, self)

    async def get_container(self, container_name: str) -> ObjectStorageContainer:
        await self.client.get(self._container_url(container_name))
        return ObjectStorageContainer(container_name, self)

    async def delete_container(self, container_name: str) -> None:
        """Delete a container.

        Raises:
            DeleteConflictError: If the container still holds objects.
        """
        await self.client.delete(self._container_url(container_name))

    async def metadata(self) -> dict[str, str]:
        response = await self.client.head(self.base_resource_url)
        return response.headers_with_prefix(MetadataLevel.ACCOUNT.header_prefix)

    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, update_headers(MetadataLevel.ACCOUNT, metadata)
        )

    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        await self.client.post(
            self.base_resource_url, remove_headers(MetadataLevel.ACCOUNT, metadata)
        )
