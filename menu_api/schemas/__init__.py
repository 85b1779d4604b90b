# schemas - Pydantic-модели для запроса/ответа API. Валидация и сериализация из коробки.
from menu_api.schemas.common import ErrorResponse, HealthStatus
from menu_api.schemas.menu import MenuItem, MenuItemCreate, MenuItemUpdate

__all__ = ["ErrorResponse", "HealthStatus", "MenuItem", "MenuItemCreate", "MenuItemUpdate"]
