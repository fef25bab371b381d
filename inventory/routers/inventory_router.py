# inventory/routers/inventory_router.py

from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Request, Response, status
from starlette.concurrency import run_in_threadpool

from inventory.core import ValidationError
from inventory.core.multipart import FilePart, extract_boundary, is_multipart, parse_multipart
from inventory.database import InventoryDatabase, get_db, get_photo_repository
from inventory.repositories import PhotoRepository
from inventory.schemas import (
    DeviceSummary,
    DeviceResponse,
    DeviceUpdate,
    DeviceRegistered,
    DeviceUpdated,
    MessageResponse,
)
from inventory.services import (
    create_device_service,
    get_all_devices_service,
    get_device_by_id_service,
    update_device_service,
    update_device_photo_service,
    delete_device_service,
    read_device_photo_service,
    search_device_service,
)

router = APIRouter(tags=["Inventory"])

MULTIPART_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "inventory_name": {"type": "string"},
                        "description": {"type": "string"},
                        "photo": {"type": "string", "format": "binary"},
                    },
                }
            }
        }
    }
}

PHOTO_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {"photo": {"type": "string", "format": "binary"}},
                }
            }
        }
    }
}

SEARCH_BODY = {
    "requestBody": {
        "content": {
            "application/x-www-form-urlencoded": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "has_photo": {"type": "boolean"},
                    },
                }
            }
        }
    }
}

TRUTHY = {"true", "on"}


async def read_multipart_form(request: Request) -> dict[str, str | FilePart]:
    content_type = request.headers.get("content-type", "")
    if not is_multipart(content_type):
        raise ValidationError("Content-Type must be multipart/form-data")
    if not extract_boundary(content_type):
        raise ValidationError("Multipart boundary is missing")
    body = await request.body()
    return parse_multipart(body, content_type)


def text_field(form: dict, name: str) -> str | None:
    value = form.get(name)
    return value if isinstance(value, str) else None


@router.post("/register", response_model=DeviceRegistered, status_code=status.HTTP_201_CREATED, openapi_extra=MULTIPART_BODY)
async def register_device_route(request: Request, db: InventoryDatabase = Depends(get_db), photos: PhotoRepository = Depends(get_photo_repository)):
    """
    Registers a new device from a multipart form with `inventory_name`,
    `description` and an optional `photo` file.
    """
    form = await read_multipart_form(request)
    photo = form.get("photo")
    device = await run_in_threadpool(
        create_device_service,
        db,
        photos,
        text_field(form, "inventory_name"),
        text_field(form, "description"),
        photo if isinstance(photo, FilePart) else None,
    )
    return DeviceRegistered(id=device.id)


@router.get("/inventory", response_model=list[DeviceSummary])
def get_all_devices_route(db: InventoryDatabase = Depends(get_db)):
    return get_all_devices_service(db)


@router.get("/inventory/{dev_id}", response_model=DeviceResponse)
def get_device_by_id_route(dev_id: int, db: InventoryDatabase = Depends(get_db)):
    return get_device_by_id_service(db, dev_id)


@router.put("/inventory/{dev_id}", response_model=DeviceUpdated)
def update_device_route(dev_id: int, device_data: DeviceUpdate, db: InventoryDatabase = Depends(get_db)):
    device = update_device_service(db, dev_id, device_data)
    return DeviceUpdated(item=device)


@router.delete("/inventory/{dev_id}", response_model=MessageResponse)
def delete_device_route(dev_id: int, db: InventoryDatabase = Depends(get_db), photos: PhotoRepository = Depends(get_photo_repository)):
    delete_device_service(db, photos, dev_id)
    return MessageResponse(message="Deleted")


@router.get(
    "/inventory/{dev_id}/photo",
    response_class=Response,
    responses={200: {"content": {"image/jpeg": {"schema": {"type": "string", "format": "binary"}}}}},
)
def get_device_photo_route(dev_id: int, db: InventoryDatabase = Depends(get_db), photos: PhotoRepository = Depends(get_photo_repository)):
    data = read_device_photo_service(db, photos, dev_id)
    return Response(content=data, media_type="image/jpeg")


@router.put("/inventory/{dev_id}/photo", response_model=MessageResponse, openapi_extra=PHOTO_BODY)
async def update_device_photo_route(dev_id: int, request: Request, db: InventoryDatabase = Depends(get_db), photos: PhotoRepository = Depends(get_photo_repository)):
    form = await read_multipart_form(request)
    photo = form.get("photo")
    await run_in_threadpool(
        update_device_photo_service,
        db,
        photos,
        dev_id,
        photo if isinstance(photo, FilePart) else None,
    )
    return MessageResponse(message="Photo updated")


@router.post("/search", response_model=DeviceResponse, openapi_extra=SEARCH_BODY)
async def search_device_route(request: Request, db: InventoryDatabase = Depends(get_db)):
    """
    Looks a device up by id from an urlencoded form. When `has_photo` is
    checked the photo link is appended to the description.
    """
    body = await request.body()
    form = parse_qs(body.decode("utf-8", errors="replace"))
    raw_id = form.get("id", [""])[0].strip()
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise ValidationError("A numeric id is required")
    has_photo = form.get("has_photo", [""])[0].lower() in TRUTHY
    return await run_in_threadpool(search_device_service, db, int(raw_id), has_photo)
