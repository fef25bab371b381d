# Device Schemas
from .device_schema import (
    DeviceUpdate,
    DeviceSummary,
    DeviceResponse,
    DeviceRegistered,
    DeviceUpdated,
    MessageResponse,
    photo_url_for,
)
