# inventory/services/device_service.py

from pathlib import Path

from inventory.core import logger, ValidationError, NotFoundError, StorageError
from inventory.core.multipart import FilePart
from inventory.database import InventoryDatabase
from inventory.repositories import DeviceRepository, PhotoRepository
from inventory.schemas import DeviceResponse, DeviceSummary, DeviceUpdate, photo_url_for


def has_upload(photo: FilePart | None) -> bool:
    # A file input left empty is still sent, with an empty filename
    return isinstance(photo, FilePart) and bool(photo.filename)


def _not_found(dev_id: int) -> NotFoundError:
    logger.warning(f"Device {dev_id} not found")
    return NotFoundError("Not found")


def create_device_service(db: InventoryDatabase, photos: PhotoRepository, name: str | None, description: str | None = None, photo: FilePart | None = None) -> DeviceResponse:
    if not name:
        logger.warning("Registration rejected: inventory_name missing")
        raise ValidationError("Inventory name is required")

    device_repo = DeviceRepository(db)
    with db.lock:
        dev_id = db.allocate_id()
        photo_filename = None
        if has_upload(photo):
            photo_filename = photos.save_photo_repository(dev_id, photo)

        device = device_repo.create_device_repository(
            name=name,
            description=description or "",
            photo_filename=photo_filename,
            dev_id=dev_id,
        )

    logger.info(f"Device {device.id} registered ({device.name})")
    return DeviceResponse.model_validate(device)


def get_all_devices_service(db: InventoryDatabase) -> list[DeviceSummary]:
    device_repo = DeviceRepository(db)
    return [DeviceSummary.model_validate(device) for device in device_repo.get_all_devices_repository()]


def get_device_by_id_service(db: InventoryDatabase, dev_id: int) -> DeviceResponse:
    device = DeviceRepository(db).get_device_by_id_repository(dev_id)
    if not device:
        raise _not_found(dev_id)
    return DeviceResponse.model_validate(device)


def update_device_service(db: InventoryDatabase, dev_id: int, device_data: DeviceUpdate) -> DeviceResponse:
    """
    Partial update. An empty or missing name keeps the current one; a
    description that is present, even empty, replaces the current one.
    """
    update_data = {}
    if device_data.inventory_name:
        update_data["name"] = device_data.inventory_name
    if device_data.description is not None:
        update_data["description"] = device_data.description

    device = DeviceRepository(db).update_device_repository(dev_id, update_data)
    if not device:
        raise _not_found(dev_id)

    if update_data:
        logger.info(f"Device {dev_id} updated: {sorted(update_data)}")
    return DeviceResponse.model_validate(device)


def update_device_photo_service(db: InventoryDatabase, photos: PhotoRepository, dev_id: int, photo: FilePart | None) -> DeviceResponse:
    device_repo = DeviceRepository(db)
    with db.lock:
        device = device_repo.get_device_by_id_repository(dev_id)
        if not device:
            raise _not_found(dev_id)
        if not has_upload(photo):
            logger.warning(f"Photo update for device {dev_id} rejected: no file")
            raise ValidationError("No file uploaded")

        photos.delete_photo_repository(device.photo_filename)
        try:
            photo_filename = photos.save_photo_repository(dev_id, photo)
        except StorageError:
            # The old file is gone; do not keep pointing at it
            device_repo.update_device_repository(dev_id, {"photo_filename": None})
            raise

        device = device_repo.update_device_repository(dev_id, {"photo_filename": photo_filename})

    logger.info(f"Photo of device {dev_id} replaced with {photo_filename}")
    return DeviceResponse.model_validate(device)


def delete_device_service(db: InventoryDatabase, photos: PhotoRepository, dev_id: int) -> None:
    device_repo = DeviceRepository(db)
    with db.lock:
        device = device_repo.get_device_by_id_repository(dev_id)
        if not device:
            raise _not_found(dev_id)
        photos.delete_photo_repository(device.photo_filename)
        device_repo.delete_device_repository(dev_id)


def get_device_photo_path_service(db: InventoryDatabase, photos: PhotoRepository, dev_id: int) -> Path:
    with db.lock:
        device = DeviceRepository(db).get_device_by_id_repository(dev_id)
        path = photos.get_photo_path_repository(device.photo_filename) if device else None
    if path is None:
        raise _not_found(dev_id)
    return path


def search_device_service(db: InventoryDatabase, dev_id: int, has_photo: bool = False) -> DeviceResponse:
    """
    Looks a device up by id. With ``has_photo`` set and a photo attached, the
    photo link is appended to the description.
    """
    device = get_device_by_id_service(db, dev_id)
    if has_photo and device.photo_filename:
        link = photo_url_for(device.id)
        device = device.model_copy(update={"description": f"{device.description} (Photo link: {link})"})
    return device


def read_device_photo_service(db: InventoryDatabase, photos: PhotoRepository, dev_id: int) -> bytes:
    """Reads the photo bytes under the lock so a concurrent delete or replace cannot interleave."""
    with db.lock:
        path = get_device_photo_path_service(db, photos, dev_id)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise _not_found(dev_id) from None
