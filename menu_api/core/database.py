"""
Подключение к MongoDB (облако: Atlas, Railway и т.д.).

Один клиент на процесс: создаётся при старте (lifespan в main) и закрывается при остановке.
Клиент не лежит в глобальной переменной - main кладёт его в app.state и передаёт дальше.
"""
import logging

from pymongo import MongoClient
from pymongo.collection import Collection

from menu_api.core.config import settings

logger = logging.getLogger(__name__)


def connect_to_mongo(uri: str | None = None) -> MongoClient:
    """Подключиться к MongoDB и проверить доступность. Вызывается в lifespan при старте."""
    client = MongoClient(uri or settings.MONGO_URI)
    client.admin.command("ping")
    logger.info("Connected to MongoDB (db=%s)", settings.MONGO_DB_NAME)
    return client


def get_menu_collection(client: MongoClient) -> Collection:
    """Коллекция блюд меню."""
    return client[settings.MONGO_DB_NAME][settings.MONGO_COLLECTION]


def close_mongo_connection(client: MongoClient | None) -> None:
    """Закрыть соединение. Вызывается в lifespan при остановке."""
    if client:
        client.close()
