"""Account, container and object wrappers for remote and local storage."""

from .base import ContainerBase, ObjectBase, StorageBase
from .local import LocalObjectStorage, LocalObjectStorageContainer, LocalObjectStorageObject
from .remote import ObjectStorage, ObjectStorageContainer, ObjectStorageObject

__all__ = [
    "ContainerBase",
    "ObjectBase",
    "StorageBase",
    "LocalObjectStorage",
    "LocalObjectStorageContainer",
    "LocalObjectStorageObject",
    "ObjectStorage",
    "ObjectStorageContainer",
    "ObjectStorageObject",
]
