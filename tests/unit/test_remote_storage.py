"""Unit tests for the remote account, container and object wrappers."""

from __future__ import annotations

import httpx
import pytest

from conftest import ACCOUNT_URL, fresh_token
from object_storage_sdk.errors import DeleteConflictError, ResourceNotFoundError
from object_storage_sdk.storage import (
    ObjectStorage,
    ObjectStorageContainer,
    ObjectStorageObject,
)


@pytest.fixture
def make_storage(make_client):
    """Build an ObjectStorage over a recording transport with a valid token."""

    def _make(handler=None):
        client, transport = make_client(handler)
        client.set_token(fresh_token())
        return ObjectStorage(client.credentials, client=client), transport

    return _make


class TestObjectStorage:
    """Tests for account operations."""

    def test_base_resource_url(self, make_storage) -> None:
        storage, _ = make_storage()

        assert storage.base_resource_url == ACCOUNT_URL

    @pytest.mark.asyncio
    async def test_list_containers_splits_lines(self, make_storage) -> None:
        storage, transport = make_storage(
            lambda request: httpx.Response(200, text="alpha\nbeta\n")
        )

        containers = await storage.list_containers()

        assert [c.name for c in containers] == ["alpha", "beta"]
        assert all(isinstance(c, ObjectStorageContainer) for c in containers)
        assert transport.requests[0].url == httpx.URL(ACCOUNT_URL)

    @pytest.mark.asyncio
    async def test_empty_listing(self, make_storage) -> None:
        storage, _ = make_storage(lambda request: httpx.Response(204))

        assert await storage.list_containers() == []

    @pytest.mark.asyncio
    async def test_create_container_puts(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(201))

        container = await storage.create_container("photos")

        request = transport.requests[0]
        assert request.method == "PUT"
        assert request.url == httpx.URL(f"{ACCOUNT_URL}/photos")
        assert container.base_resource_url == f"{ACCOUNT_URL}/photos"

    @pytest.mark.asyncio
    async def test_get_missing_container_raises(self, make_storage) -> None:
        storage, _ = make_storage(lambda request: httpx.Response(404))

        with pytest.raises(ResourceNotFoundError):
            await storage.get_container("missing")

    @pytest.mark.asyncio
    async def test_delete_non_empty_container_conflicts(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(409))

        with pytest.raises(DeleteConflictError):
            await storage.delete_container("photos")

        assert transport.requests[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_metadata_filters_account_headers(self, make_storage) -> None:
        storage, transport = make_storage(
            lambda request: httpx.Response(
                204,
                headers={
                    "X-Account-Meta-Owner": "ops",
                    "X-Account-Container-Count": "2",
                    "Content-Length": "0",
                },
            )
        )

        metadata = await storage.metadata()

        assert transport.requests[0].method == "HEAD"
        assert metadata == {
            "x-account-meta-owner": "ops",
            "x-account-container-count": "2",
        }

    @pytest.mark.asyncio
    async def test_update_metadata_headers(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))

        await storage.update_metadata({"Owner": "ops", "Quota": 10})

        request = transport.requests[0]
        assert request.method == "POST"
        assert request.headers["X-Account-Meta-Owner"] == "ops"
        assert request.headers["X-Account-Meta-Quota"] == "10"

    @pytest.mark.asyncio
    async def test_delete_metadata_headers(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))

        await storage.delete_metadata({"Owner": ""})

        request = transport.requests[0]
        assert request.method == "POST"
        assert "X-Remove-Account-Meta-Owner" in request.headers


class TestObjectStorageContainer:
    """Tests for container operations."""

    @pytest.mark.asyncio
    async def test_list_objects(self, make_storage) -> None:
        storage, transport = make_storage(
            lambda request: httpx.Response(200, text="a.txt\nb.png")
        )
        container = ObjectStorageContainer("photos", storage)

        objects = await container.list_objects()

        assert [o.name for o in objects] == ["a.txt", "b.png"]
        assert objects[0].base_resource_url == f"{ACCOUNT_URL}/photos/a.txt"
        assert transport.requests[0].url == httpx.URL(f"{ACCOUNT_URL}/photos")

    @pytest.mark.asyncio
    async def test_create_object_puts_data(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(201))
        container = ObjectStorageContainer("photos", storage)

        obj = await container.create_object("note.txt", "hello")

        request = transport.requests[0]
        assert request.method == "PUT"
        assert request.url == httpx.URL(f"{ACCOUNT_URL}/photos/note.txt")
        assert request.content == b"hello"
        assert isinstance(obj, ObjectStorageObject)

    @pytest.mark.asyncio
    async def test_create_binary_object_requests_detection(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(201))
        container = ObjectStorageContainer("photos", storage)

        await container.create_object("img.png", b"\x89PNG", binary=True)

        assert transport.requests[0].headers["X-Detect-Content-Type"] == "true"

    @pytest.mark.asyncio
    async def test_get_object_checks_existence(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(200, text="x"))
        container = ObjectStorageContainer("photos", storage)

        obj = await container.get_object("note.txt")

        assert obj.name == "note.txt"
        assert transport.requests[0].method == "GET"

    @pytest.mark.asyncio
    async def test_delete_object(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))
        container = ObjectStorageContainer("photos", storage)

        await container.delete_object("note.txt")

        request = transport.requests[0]
        assert request.method == "DELETE"
        assert request.url == httpx.URL(f"{ACCOUNT_URL}/photos/note.txt")

    @pytest.mark.asyncio
    async def test_update_metadata_headers(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))
        container = ObjectStorageContainer("photos", storage)

        await container.update_metadata({"Color": "blue"})

        assert transport.requests[0].headers["X-Container-Meta-Color"] == "blue"

    @pytest.mark.asyncio
    async def test_delete_metadata_headers(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))
        container = ObjectStorageContainer("photos", storage)

        await container.delete_metadata({"Color": ""})

        assert "X-Remove-Container-Meta-Color" in transport.requests[0].headers

    @pytest.mark.asyncio
    async def test_metadata_filters_container_headers(self, make_storage) -> None:
        storage, _ = make_storage(
            lambda request: httpx.Response(
                204,
                headers={"X-Container-Meta-Color": "blue", "X-Trans-Id": "tx1"},
            )
        )
        container = ObjectStorageContainer("photos", storage)

        assert await container.metadata() == {"x-container-meta-color": "blue"}


class TestObjectStorageObject:
    """Tests for object operations."""

    @pytest.mark.asyncio
    async def test_load_text(self, make_storage) -> None:
        storage, _ = make_storage(
            lambda request: httpx.Response(
                200, text="hello", headers={"Content-Type": "text/plain"}
            )
        )
        obj = ObjectStorageObject("note.txt", ObjectStorageContainer("photos", storage))

        data = await obj.load()

        assert data == "hello"
        assert obj.content_type == "text/plain"
        assert obj.data is None

    @pytest.mark.asyncio
    async def test_load_cached_binary(self, make_storage) -> None:
        storage, _ = make_storage(lambda request: httpx.Response(200, content=b"\x00\xff"))
        obj = ObjectStorageObject("img.png", ObjectStorageContainer("photos", storage))

        data = await obj.load(should_cache=True, binary=True)

        assert data == b"\x00\xff"
        assert obj.data == b"\x00\xff"

    @pytest.mark.asyncio
    async def test_load_missing_object_raises(self, make_storage) -> None:
        storage, _ = make_storage(lambda request: httpx.Response(404))
        obj = ObjectStorageObject("gone", ObjectStorageContainer("photos", storage))

        with pytest.raises(ResourceNotFoundError):
            await obj.load()

    @pytest.mark.asyncio
    async def test_metadata_round_trip_headers(self, make_storage) -> None:
        storage, transport = make_storage(
            lambda request: httpx.Response(
                200, headers={"X-Object-Meta-Author": "kim", "Etag": "abc"}
            )
        )
        obj = ObjectStorageObject("note.txt", ObjectStorageContainer("photos", storage))

        await obj.update_metadata({"Author": "kim"})
        metadata = await obj.metadata()

        assert transport.requests[0].headers["X-Object-Meta-Author"] == "kim"
        assert metadata == {"x-object-meta-author": "kim"}

    @pytest.mark.asyncio
    async def test_delete_metadata_headers(self, make_storage) -> None:
        storage, transport = make_storage(lambda request: httpx.Response(204))
        obj = ObjectStorageObject("note.txt", ObjectStorageContainer("photos", storage))

        await obj.delete_metadata({"Author": ""})

        assert "X-Remove-Object-Meta-Author" in transport.requests[0].headers
