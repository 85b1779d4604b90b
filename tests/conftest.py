from __future__ import annotations

from urllib.parse import quote

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from menu_api.dependencies import get_menu_service
from menu_api.main import app
from menu_api.schemas.menu import MenuItem
from menu_api.services.menu import MenuService


class InMemoryMenuRepository:
    """Test double for MenuRepository: documents keyed by ObjectId string."""

    def __init__(self) -> None:
        self.docs: dict[str, dict] = {}

    def _item(self, item_id: str) -> MenuItem:
        doc = self.docs[item_id]
        return MenuItem(
            id=item_id,
            name=doc.get("name") or "",
            description=doc.get("description") or "",
            price=doc.get("price"),
            image_url=doc.get("image_url") or "",
        )

    def insert(self, document: dict) -> MenuItem:
        item_id = str(ObjectId())
        self.docs[item_id] = dict(document)
        return self._item(item_id)

    def find_all(self) -> list[MenuItem]:
        return [self._item(item_id) for item_id in self.docs]

    def find_by_id(self, item_id: str) -> MenuItem | None:
        return self._item(item_id) if item_id in self.docs else None

    def update_by_id(self, item_id: str, fields: dict) -> MenuItem | None:
        if item_id not in self.docs:
            return None
        self.docs[item_id].update(fields)
        return self._item(item_id)

    def delete_by_id(self, item_id: str) -> bool:
        return self.docs.pop(item_id, None) is not None

    def ping(self) -> bool:
        return True


class InMemoryObjectStorage:
    """Test double for ObjectStorage. Records every put_object call."""

    base_url = "https://storage.test/menu-images"

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.put_calls: list[str] = []
        self.error: Exception | None = None

    def put_object(self, key: str, data: bytes, content_type: str) -> str:
        self.put_calls.append(key)
        if self.error is not None:
            raise self.error
        self.objects[key] = (data, content_type)
        return key

    def object_url(self, key: str) -> str:
        return f"{self.base_url}/{quote(key)}"


@pytest.fixture()
def repository() -> InMemoryMenuRepository:
    return InMemoryMenuRepository()


@pytest.fixture()
def storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture()
def service(repository: InMemoryMenuRepository, storage: InMemoryObjectStorage) -> MenuService:
    return MenuService(repository, storage, upload_timeout=5)


@pytest.fixture()
def client(service: MenuService):
    # no `with`: lifespan (real MongoDB / S3) is not started
    app.dependency_overrides[get_menu_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
