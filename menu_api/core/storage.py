"""
S3 / MinIO клиент для картинок блюд.

Загрузка байтов под ключом и публичная ссылка на объект.
Ссылка всегда собирается из базового URL + ключ (без подписей) - и при создании, и при обновлении.
"""
import logging
from urllib.parse import quote

import boto3
from botocore.config import Config

from menu_api.core.config import settings

logger = logging.getLogger(__name__)


def create_s3_client():
    """Создать S3 клиент. Один на процесс - вызывается в lifespan."""
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT or None,
        aws_access_key_id=settings.S3_ACCESS_KEY or None,
        aws_secret_access_key=settings.S3_SECRET_KEY or None,
        region_name=settings.S3_REGION,
        config=Config(
            signature_version="s3v4",
            connect_timeout=settings.STORAGE_TIMEOUT_SECONDS,
            read_timeout=settings.STORAGE_TIMEOUT_SECONDS,
        ),
    )


class ObjectStorage:
    """Бакет с картинками: put_object + object_url."""

    def __init__(self, client, bucket: str, public_base_url: str):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """Положить байты под key с Content-Type. Ошибки boto3 летят наружу."""
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.info("Stored s3://%s/%s (%d bytes, %s)", self.bucket, key, len(data), content_type)
        return key

    def object_url(self, key: str) -> str:
        """Публичная ссылка на объект."""
        return f"{self.public_base_url}/{quote(key)}"


def create_object_storage(client=None) -> ObjectStorage:
    """ObjectStorage из settings."""
    return ObjectStorage(
        client=client or create_s3_client(),
        bucket=settings.S3_BUCKET,
        public_base_url=settings.public_base_url(),
    )
