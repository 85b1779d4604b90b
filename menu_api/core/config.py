"""
Конфигурация приложения из переменных окружения.

Один класс Settings (pydantic-settings), все секреты и настройки читаются из .env.
В коде используем только settings.*, не os.getenv.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки из env."""

    # MongoDB - URI из .env (Atlas, Railway и т.д.)
    MONGO_URI: str = ""
    MONGO_DB_NAME: str = "menu"
    MONGO_COLLECTION: str = "menuitems"

    # Объектное хранилище (S3 / MinIO / GCS interop)
    S3_BUCKET: str = ""
    S3_ENDPOINT: str = ""
    S3_REGION: str = "us-east-1"
    S3_ACCESS_KEY: str = ""
    S3_SECRET_KEY: str = ""
    # База для публичных ссылок на картинки; пусто - собираем из endpoint/bucket
    S3_PUBLIC_BASE_URL: str = ""
    STORAGE_TIMEOUT_SECONDS: float = 30.0

    # Картинки блюд
    MAX_IMAGE_BYTES: int = 10 * 1024 * 1024  # 10 MiB
    ALLOWED_IMAGE_TYPES: str = "image/jpeg,image/png,image/gif"

    # CORS: список origin через запятую в .env ("*" - любой)
    CORS_ORIGINS: str = "*"

    # Сервер
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Логирование
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def cors_list(self) -> list[str]:
        """CORS origins как список для CORSMiddleware."""
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]

    def allowed_image_types(self) -> frozenset[str]:
        """ALLOWED_IMAGE_TYPES как множество MIME-типов в нижнем регистре."""
        return frozenset(x.strip().lower() for x in self.ALLOWED_IMAGE_TYPES.split(",") if x.strip())

    def public_base_url(self) -> str:
        """Префикс публичной ссылки на объект (без завершающего '/')."""
        if self.S3_PUBLIC_BASE_URL:
            return self.S3_PUBLIC_BASE_URL.rstrip("/")
        if self.S3_ENDPOINT:
            return f"{self.S3_ENDPOINT.rstrip('/')}/{self.S3_BUCKET}"
        return f"https://{self.S3_BUCKET}.s3.{self.S3_REGION}.amazonaws.com"


# Глобальный экземпляр - импортируй: from menu_api.core.config import settings
settings = Settings()
