"""
Схемы для ресурса меню (блюда).

MenuItemCreate - поля из multipart-формы при создании (обязательные name, description, price).
MenuItemUpdate - поля при PUT: что прислали, то и пишем, валидации обязательности нет.
MenuItem - ответ API, id строкой и картинка в поле imageUrl.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from menu_api.core.errors import ValidationError

REQUIRED_FIELDS = ("name", "description", "price")


def _describe(exc: PydanticValidationError) -> str:
    """Ошибки pydantic в одну строку для клиента."""
    parts = []
    for err in exc.errors()[:3]:
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', '')}" if loc else err.get("msg", ""))
    return "; ".join(parts) or "Invalid menu item"


class MenuItemCreate(BaseModel):
    """Тело запроса при создании."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)

    @classmethod
    def from_form(
        cls,
        name: str | None,
        description: str | None,
        price: str | None,
    ) -> "MenuItemCreate":
        """Собрать из полей формы. Пустые или отсутствующие поля - ValidationError (400)."""
        values = {"name": name, "description": description, "price": price}
        missing = [field for field in REQUIRED_FIELDS if not values[field]]
        if missing:
            raise ValidationError(
                f"Name, description and price are required (missing: {', '.join(missing)})"
            )
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    def to_document(self, image_url: str = "") -> dict:
        """Документ для MongoDB. Без картинки image_url - пустая строка."""
        return {**self.model_dump(), "image_url": image_url}


class MenuItemUpdate(BaseModel):
    """
    Тело PUT. Обязательных полей нет.

    В документ попадают только присланные поля (exclude_unset), остальные в MongoDB не трогаем.
    Присланная пустая строка пишется как есть (name="", image_url="" очищают поле).
    Пустой price пропускаем: число из "" не сделать, цена остаётся прежней.
    image_url приходит от клиента как есть - текущее значение из базы не перечитываем.
    """

    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)
    image_url: str | None = None

    @classmethod
    def from_form(
        cls,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        image_url: str | None = None,
    ) -> "MenuItemUpdate":
        values = {
            "name": name,
            "description": description,
            "price": price if price else None,
            "image_url": image_url,
        }
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc

    def to_document(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MenuItem(BaseModel):
    """Ответ API: блюдо с id. id в MongoDB - ObjectId, в API отдаём строкой."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    description: str = ""
    price: float | None = None
    image_url: str = Field(default="", alias="imageUrl")
