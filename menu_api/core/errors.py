"""
Доменные ошибки сервиса меню.

Каждая ошибка знает свой HTTP-статус и код; main.py превращает их в ErrorResponse.
"""
from __future__ import annotations


class MenuError(Exception):
    """База для ошибок, которые отдаются клиенту как структурированный ответ."""

    status_code: int = 500
    error: str = "internal_server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MenuError):
    """Не хватает обязательных полей или значение не разбирается."""

    status_code = 400
    error = "validation_error"


class AttachmentRejected(MenuError):
    """Картинка недопустимого типа или слишком большая."""

    status_code = 400
    error = "attachment_rejected"


class NotFoundError(MenuError):
    status_code = 404
    error = "not_found"


class UpstreamFailure(MenuError):
    """Сбой объектного хранилища или MongoDB."""

    status_code = 500
    error = "upstream_failure"

    def __init__(self, service: str, message: str) -> None:
        super().__init__(message)
        self.service = service
