"""
Точка входа FastAPI.

lifespan: MongoDB, S3 клиент и MenuService создаются при старте, клиент Mongo закрывается при остановке.
CORS, exception handlers (структурированные ответы), подключение роутеров (health, menu).
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from menu_api.core.config import settings
from menu_api.core.database import close_mongo_connection, connect_to_mongo, get_menu_collection
from menu_api.core.errors import MenuError
from menu_api.core.storage import create_object_storage
from menu_api.repositories.menu import MenuRepository
from menu_api.routers import health, menu
from menu_api.schemas.common import ErrorResponse
from menu_api.services.menu import MenuService

# Логирование
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл: при старте - Mongo + хранилище, при остановке - отключение."""
    logger.info("Starting up: connecting to MongoDB...")
    client = connect_to_mongo()
    storage = create_object_storage()
    logger.info("Object storage: bucket=%s, public URLs under %s", storage.bucket, storage.public_base_url)
    app.state.mongo_client = client
    app.state.menu_service = MenuService(MenuRepository(get_menu_collection(client)), storage)
    yield
    logger.info("Shutting down: closing MongoDB...")
    close_mongo_connection(client)


app = FastAPI(
    title="Restaurant Menu API",
    description="CRUD меню ресторана: блюда в MongoDB, картинки в S3. Ошибки: success=false, error, message.",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - список origins из конфига
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Доменные ошибки меню - статус и код берём из самого исключения.
# UpstreamFailure уже залогирован в сервисе с traceback, здесь только ответ.
@app.exception_handler(MenuError)
async def menu_exception_handler(request: Request, exc: MenuError):
    body = ErrorResponse(error=exc.error, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Обработчик неожиданных исключений - структурированный ответ
@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    body = ErrorResponse(error="internal_server_error", message="An unexpected error occurred")
    return JSONResponse(status_code=500, content=body.model_dump())


# Обработчик HTTPException - структурированный ответ
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail and "message" in detail:
        body = ErrorResponse(error=detail["error"], message=detail["message"])
    else:
        body = ErrorResponse(error="request_failed", message=str(detail) if detail else "Request failed")
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Обработчик валидации (422) - структурированный ответ
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    msg = "; ".join(f"{e.get('loc', [])}: {e.get('msg', '')}" for e in errors[:3])
    body = ErrorResponse(error="validation_error", message=msg or "Validation failed")
    return JSONResponse(status_code=422, content=body.model_dump())


# Роутеры
app.include_router(health.router)
app.include_router(menu.router)
