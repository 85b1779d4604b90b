"""
Зависимости для роутеров.

Сервис создаётся один раз в lifespan и лежит в app.state; роутеры получают его через Depends.
В тестах подменяется через app.dependency_overrides[get_menu_service].
"""
from fastapi import Request

from menu_api.services.menu import MenuService


def get_menu_service(request: Request) -> MenuService:
    return request.app.state.menu_service
