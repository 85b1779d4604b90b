"""
Health check: жив ли сервис, доступна ли БД.

Эндпоинт для оркестраторов (Docker, Railway) и мониторинга.
"""
from fastapi import APIRouter, Depends

from menu_api.dependencies import get_menu_service
from menu_api.schemas.common import HealthStatus
from menu_api.services.menu import MenuService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health(service: MenuService = Depends(get_menu_service)):
    """Проверка живости сервиса и MongoDB."""
    mongo = "connected" if await service.ping() else "disconnected"
    return HealthStatus(mongo=mongo)
