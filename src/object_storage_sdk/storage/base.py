"""Abstract interfaces shared by the remote and local storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Self


class ObjectBase(ABC):
    """A named blob inside a container."""

    name: str
    data: str | bytes | None
    content_type: str | None

    @abstractmethod
    async def load(self, should_cache: bool = False, binary: bool = False) -> str | bytes:
        """Load the object content, as bytes when ``binary`` is set."""

    @abstractmethod
    async def metadata(self) -> dict[str, str]:
        """Object metadata keyed by lower-cased header name."""

    @abstractmethod
    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Create or update metadata entries."""

    @abstractmethod
    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Remove the metadata entries named by the keys of ``metadata``."""


class ContainerBase(ABC):
    """A named collection of objects."""

    name: str

    @abstractmethod
    async def list_objects(self) -> list[ObjectBase]:
        """List the objects of this container."""

    @abstractmethod
    async def get_object(self, object_name: str) -> ObjectBase:
        """Retrieve an existing object."""

    @abstractmethod
    async def create_object(
        self,
        object_name: str,
        data: str | bytes | None = None,
        binary: bool = False,
    ) -> ObjectBase:
        """Create or overwrite an object."""

    @abstractmethod
    async def delete_object(self, object_name: str) -> None:
        """Delete an object."""

    @abstractmethod
    async def metadata(self) -> dict[str, str]:
        """Container metadata keyed by lower-cased header name."""

    @abstractmethod
    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Create or update metadata entries."""

    @abstractmethod
    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Remove the metadata entries named by the keys of ``metadata``."""


class StorageBase(ABC):
    """An account holding containers."""

    @abstractmethod
    async def list_containers(self) -> list[ContainerBase]:
        """List the containers of the account."""

    @abstractmethod
    async def create_container(self, container_name: str) -> ContainerBase:
        """Create a container (no-op if it exists)."""

    @abstractmethod
    async def get_container(self, container_name: str) -> ContainerBase:
        """Retrieve an existing container."""

    @abstractmethod
    async def delete_container(self, container_name: str) -> None:
        """Delete an empty container."""

    @abstractmethod
    async def metadata(self) -> dict[str, str]:
        """Account metadata keyed by lower-cased header name."""

    @abstractmethod
    async def update_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Create or update metadata entries."""

    @abstractmethod
    async def delete_metadata(self, metadata: Mapping[str, Any]) -> None:
        """Remove the metadata entries named by the keys of ``metadata``."""

    async def close(self) -> None:
        """Release backend resources."""

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
