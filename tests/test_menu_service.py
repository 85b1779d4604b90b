"""
MenuService ordering and failure mapping, without HTTP.
"""

from __future__ import annotations

import asyncio
import re
import time

import pytest
from botocore.exceptions import EndpointConnectionError
from pymongo.errors import AutoReconnect

from menu_api.core.errors import NotFoundError, UpstreamFailure
from menu_api.schemas.menu import MenuItemCreate, MenuItemUpdate
from menu_api.services.attachments import ImageUpload
from menu_api.services.menu import MenuService, storage_key

IMAGE = ImageUpload(filename="dish.jpg", content_type="image/jpeg", data=b"\xff\xd8\xff")
DATA = MenuItemCreate(name="Pozole", description="Pork and hominy", price=11)


def test_storage_key_is_uuid_then_filename() -> None:
    key = storage_key("my dish.jpg")

    assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}-my dish\.jpg", key)
    assert storage_key("my dish.jpg") != key


def test_upload_finishes_before_insert(repository, storage) -> None:
    order: list[str] = []
    put_object, insert = storage.put_object, repository.insert

    def tracking_put(*args):
        order.append("put")
        return put_object(*args)

    def tracking_insert(document):
        order.append("insert")
        return insert(document)

    storage.put_object = tracking_put
    repository.insert = tracking_insert
    service = MenuService(repository, storage, upload_timeout=5)

    item = asyncio.run(service.create_item(DATA, IMAGE))

    assert order == ["put", "insert"]
    assert item.image_url == storage.object_url(storage.put_calls[0])


def test_upload_timeout_is_upstream_failure(repository, storage) -> None:
    def slow_put(key, data, content_type):
        time.sleep(0.5)
        storage.objects[key] = (data, content_type)
        return key

    storage.put_object = slow_put
    service = MenuService(repository, storage, upload_timeout=0.05)

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(service.create_item(DATA, IMAGE))

    assert excinfo.value.service == "storage"
    assert "timed out" in excinfo.value.message
    assert repository.docs == {}
    # the worker thread is not cancelled: the object still lands, orphaned
    assert len(storage.objects) == 1


def test_botocore_error_is_upstream_failure(service: MenuService, repository, storage) -> None:
    storage.error = EndpointConnectionError(endpoint_url="https://s3.test")

    with pytest.raises(UpstreamFailure):
        asyncio.run(service.create_item(DATA, IMAGE))

    assert repository.docs == {}


def test_database_failure_after_upload_leaves_object(service: MenuService, repository, storage) -> None:
    def broken_insert(document):
        raise AutoReconnect("primary stepped down")

    repository.insert = broken_insert

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(service.create_item(DATA, IMAGE))

    assert excinfo.value.service == "mongodb"
    # uploaded object stays orphaned; no compensation
    assert len(storage.objects) == 1


def test_update_with_image_checks_existence_first(service: MenuService, storage) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(service.update_item("65f0c0ffee0000000000beef", MenuItemUpdate(), IMAGE))

    assert storage.put_calls == []


def test_update_with_no_fields_returns_current_item(service: MenuService) -> None:
    created = asyncio.run(service.create_item(DATA))

    updated = asyncio.run(service.update_item(created.id, MenuItemUpdate()))

    assert updated == created


def test_delete_unknown_is_not_found(service: MenuService) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(service.delete_item("65f0c0ffee0000000000beef"))
