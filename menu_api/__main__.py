"""
Запуск сервера: python -m menu_api (или консольная команда menu-api).

Хост и порт из config (HOST, PORT).
"""
import uvicorn

from menu_api.core.config import settings


def main() -> None:
    uvicorn.run("menu_api.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
