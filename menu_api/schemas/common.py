"""
Структура ответов API об ошибках.

Ошибка: { "success": false, "error": "<code>", "message": "<text>" }
Успешные ответы отдают сущность меню напрямую (MenuItem / список / 204 без тела).
"""
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Ответ с ошибкой: success=false, error и message."""

    success: bool = False
    error: str = Field(..., description="Код ошибки (например, not_found, validation_error)")
    message: str = Field(..., description="Человекочитаемое сообщение")


class HealthStatus(BaseModel):
    """Ответ /health."""

    status: str = "ok"
    mongo: str
