# repositories - доступ к MongoDB, по модулю на коллекцию.
from menu_api.repositories.menu import MenuRepository

__all__ = ["MenuRepository"]
