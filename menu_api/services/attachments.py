"""
Фильтр картинок из multipart-запроса.

Проверяем Content-Type и размер до какой-либо загрузки в хранилище.
Отказ - AttachmentRejected (400), а не ошибка хранилища.
"""
import logging
from dataclasses import dataclass

from fastapi import UploadFile

from menu_api.core.config import settings
from menu_api.core.errors import AttachmentRejected

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """Картинка, прошедшая фильтр: имя файла, тип и байты в памяти."""

    filename: str
    content_type: str
    data: bytes


async def accept_image(
    upload: UploadFile | None,
    allowed_types: frozenset[str] | None = None,
    max_bytes: int | None = None,
) -> ImageUpload | None:
    """
    Прочитать и проверить картинку.

    None, если файла нет (пустая часть формы без имени тоже считается «нет файла»).
    Читаем не больше max_bytes + 1, чтобы не тащить в память огромный файл.
    """
    if upload is None or not upload.filename:
        return None

    allowed = allowed_types if allowed_types is not None else settings.allowed_image_types()
    limit = max_bytes if max_bytes is not None else settings.MAX_IMAGE_BYTES

    content_type = (upload.content_type or "").lower()
    if content_type not in allowed:
        logger.warning("Rejected attachment %r: content type %r", upload.filename, content_type)
        raise AttachmentRejected(
            f"File type not allowed: {content_type or 'unknown'}. Allowed: {', '.join(sorted(allowed))}"
        )

    data = await upload.read(limit + 1)
    if len(data) > limit:
        logger.warning("Rejected attachment %r: larger than %d bytes", upload.filename, limit)
        raise AttachmentRejected(f"File too large. Limit: {limit} bytes")

    return ImageUpload(filename=upload.filename, content_type=content_type, data=data)
