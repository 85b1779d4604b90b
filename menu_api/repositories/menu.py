"""
Хранилище блюд в MongoDB.

Тонкая обёртка над pymongo Collection: документ ↔ MenuItem, ObjectId ↔ строковый id.
Вызовы синхронные - сервис гоняет их в threadpool.
"""
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from menu_api.schemas.menu import MenuItem


def _object_id(item_id: str) -> ObjectId | None:
    """Строка → ObjectId. Кривой id - None (для клиента это просто «не найдено»)."""
    try:
        return ObjectId(item_id)
    except (InvalidId, TypeError):
        return None


def _doc_to_menu_item(doc: dict) -> MenuItem:
    """Документ из Mongo → Pydantic. _id → id (строка)."""
    return MenuItem(
        id=str(doc["_id"]),
        name=doc.get("name") or "",
        description=doc.get("description") or "",
        price=doc.get("price"),
        image_url=doc.get("image_url") or "",
    )


class MenuRepository:
    """insert / find_all / find_by_id / update_by_id / delete_by_id над коллекцией меню."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def insert(self, document: dict) -> MenuItem:
        body = dict(document)
        result = self.collection.insert_one(body)
        body["_id"] = result.inserted_id
        return _doc_to_menu_item(body)

    def find_all(self) -> list[MenuItem]:
        return [_doc_to_menu_item(doc) for doc in self.collection.find()]

    def find_by_id(self, item_id: str) -> MenuItem | None:
        oid = _object_id(item_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid})
        return _doc_to_menu_item(doc) if doc else None

    def update_by_id(self, item_id: str, fields: dict) -> MenuItem | None:
        """$set присланных полей, возвращает документ после обновления или None."""
        oid = _object_id(item_id)
        if oid is None:
            return None
        if not fields:
            # пустой $set MongoDB не принимает
            return self.find_by_id(item_id)
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return _doc_to_menu_item(doc) if doc else None

    def delete_by_id(self, item_id: str) -> bool:
        oid = _object_id(item_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    def ping(self) -> bool:
        """Жив ли MongoDB (для /health)."""
        try:
            self.collection.database.client.admin.command("ping")
        except PyMongoError:
            return False
        return True
