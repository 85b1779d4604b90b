"""
Сервис меню: загрузка картинки → запись в MongoDB.

Порядок жёсткий: сначала картинка целиком в хранилище и её URL, только потом документ в базе.
Ошибка хранилища - документ не пишем. Ошибка базы после загрузки - объект в бакете остаётся
(сиротой), откатов нет. Ошибки boto3 / pymongo логируем и превращаем в UpstreamFailure.
"""
import asyncio
import logging
import uuid

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from pymongo.errors import PyMongoError

from menu_api.core.config import settings
from menu_api.core.errors import NotFoundError, UpstreamFailure
from menu_api.core.storage import ObjectStorage
from menu_api.repositories.menu import MenuRepository
from menu_api.schemas.menu import MenuItem, MenuItemCreate, MenuItemUpdate
from menu_api.services.attachments import ImageUpload

logger = logging.getLogger(__name__)


def storage_key(filename: str) -> str:
    """Уникальный ключ объекта: "<uuid4>-<имя файла>". Коллизии не проверяем."""
    return f"{uuid.uuid4()}-{filename}"


class MenuService:
    """CRUD блюд поверх MenuRepository и ObjectStorage."""

    def __init__(
        self,
        repository: MenuRepository,
        storage: ObjectStorage,
        upload_timeout: float | None = None,
    ):
        self.repository = repository
        self.storage = storage
        self.upload_timeout = upload_timeout if upload_timeout is not None else settings.STORAGE_TIMEOUT_SECONDS

    async def _db(self, func, *args):
        """Вызов репозитория в threadpool. PyMongoError → UpstreamFailure."""
        try:
            return await run_in_threadpool(func, *args)
        except PyMongoError as exc:
            logger.exception("MongoDB operation %s failed", getattr(func, "__name__", func))
            raise UpstreamFailure("mongodb", f"Database error: {exc}") from exc

    async def _upload(self, image: ImageUpload) -> str:
        """Загрузить картинку и вернуть её URL. Ждём завершения, но не дольше upload_timeout."""
        key = storage_key(image.filename)
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self.storage.put_object, key, image.data, image.content_type),
                timeout=self.upload_timeout,
            )
        except asyncio.TimeoutError as exc:
            # поток с put_object не отменяется: объект может долететь после 500 и остаться сиротой
            logger.error("Upload of %s timed out after %ss", key, self.upload_timeout)
            raise UpstreamFailure("storage", f"Image upload timed out after {self.upload_timeout}s") from exc
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Upload of %s failed", key)
            raise UpstreamFailure("storage", f"Image upload failed: {exc}") from exc
        return self.storage.object_url(key)

    async def list_items(self) -> list[MenuItem]:
        return await self._db(self.repository.find_all)

    async def get_item(self, item_id: str) -> MenuItem:
        item = await self._db(self.repository.find_by_id, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return item

    async def create_item(self, data: MenuItemCreate, image: ImageUpload | None = None) -> MenuItem:
        """Create: без картинки - сразу в базу с image_url="", с картинкой - после загрузки."""
        image_url = await self._upload(image) if image else ""
        item = await self._db(self.repository.insert, data.to_document(image_url))
        logger.info("Created menu item %s", item.id)
        return item

    async def update_item(
        self,
        item_id: str,
        data: MenuItemUpdate,
        image: ImageUpload | None = None,
    ) -> MenuItem:
        """
        Update по id. Несуществующий id - NotFoundError.

        С картинкой сначала проверяем, что блюдо есть (чтобы не грузить файл впустую),
        потом загрузка и $set с новым image_url. Без картинки image_url берём из запроса как есть.
        """
        fields = data.to_document()
        if image:
            if await self._db(self.repository.find_by_id, item_id) is None:
                raise NotFoundError("Item not found")
            fields["image_url"] = await self._upload(image)

        item = await self._db(self.repository.update_by_id, item_id, fields)
        if item is None:
            raise NotFoundError("Item not found")
        logger.info("Updated menu item %s", item_id)
        return item

    async def delete_item(self, item_id: str) -> None:
        if not await self._db(self.repository.delete_by_id, item_id):
            raise NotFoundError("Item not found")
        logger.info("Deleted menu item %s", item_id)

    async def ping(self) -> bool:
        return await run_in_threadpool(self.repository.ping)
