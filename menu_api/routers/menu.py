"""
CRUD для меню (/api/menu).

Роутер разбирает multipart-форму, проверяет поля и картинку, вызывает MenuService.
Ошибки - доменные исключения (menu_api.core.errors), в ответ их превращает main.py.
"""
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status

from menu_api.dependencies import get_menu_service
from menu_api.schemas.common import ErrorResponse
from menu_api.schemas.menu import MenuItem, MenuItemCreate, MenuItemUpdate
from menu_api.services.attachments import accept_image
from menu_api.services.menu import MenuService

router = APIRouter(prefix="/api/menu", tags=["menu"])

# поле формы PUT -> аргумент MenuItemUpdate.from_form
UPDATE_FORM_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "imageUrl": "image_url",
}


@router.get("", response_model=list[MenuItem], responses={500: {"model": ErrorResponse}})
async def list_items(service: MenuService = Depends(get_menu_service)):
    """Read: все блюда, без пагинации."""
    return await service.list_items()


@router.get(
    "/{item_id}",
    response_model=MenuItem,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(item_id: str, service: MenuService = Depends(get_menu_service)):
    """Read: одно блюдо по id."""
    return await service.get_item(item_id)


@router.post(
    "",
    response_model=MenuItem,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create(
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: MenuService = Depends(get_menu_service),
):
    """Create: поля формы + необязательная картинка (image)."""
    data = MenuItemCreate.from_form(name, description, price)
    upload = await accept_image(image)
    return await service.create_item(data, upload)


@router.put(
    "/{item_id}",
    response_model=MenuItem,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def update(
    item_id: str,
    request: Request,
    image: UploadFile | None = File(None),
    service: MenuService = Depends(get_menu_service),
):
    """
    Update: поля формы name, description, price, imageUrl + необязательная картинка (image).

    Форму читаем сами: Form(None) превращает "" в None, а здесь присланное пустое поле
    должно записаться, а отсутствующее - остаться как есть.
    Без новой картинки imageUrl пишется таким, каким его прислал клиент.
    """
    form = await request.form()
    sent = {
        field: form[key]
        for key, field in UPDATE_FORM_FIELDS.items()
        if isinstance(form.get(key), str)
    }
    data = MenuItemUpdate.from_form(**sent)
    upload = await accept_image(image)
    return await service.update_item(item_id, data, upload)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete(item_id: str, service: MenuService = Depends(get_menu_service)):
    """Delete: 204 без тела, повторный DELETE - 404."""
    await service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
