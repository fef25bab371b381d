# Device Service
from .device_service import (
    create_device_service,
    get_all_devices_service,
    get_device_by_id_service,
    update_device_service,
    update_device_photo_service,
    delete_device_service,
    get_device_photo_path_service,
    read_device_photo_service,
    search_device_service,
    has_upload,
)
