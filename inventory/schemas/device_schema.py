# inventory/schemas/device_schema.py

from datetime import datetime

from pydantic import BaseModel, model_validator

from inventory.models import DeviceRecord


def photo_url_for(dev_id: int) -> str:
    return f"/inventory/{dev_id}/photo"


class DeviceUpdate(BaseModel):
    inventory_name: str | None = None
    description: str | None = None


class DeviceSummary(BaseModel):
    id: int
    inventory_name: str
    description: str = ""
    photo_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def from_record(cls, data):
        # Records store the name as `name`; the API calls it `inventory_name`
        if isinstance(data, DeviceRecord):
            return {
                "id": data.id,
                "inventory_name": data.name,
                "description": data.description,
                "photo_filename": data.photo_filename,
                "created_at": data.created_at,
                "photo_url": photo_url_for(data.id) if data.photo_filename else None,
            }
        return data


class DeviceResponse(DeviceSummary):
    photo_filename: str | None = None
    created_at: datetime


class DeviceRegistered(BaseModel):
    message: str = "Device registered"
    id: int


class DeviceUpdated(BaseModel):
    message: str = "Updated"
    item: DeviceResponse


class MessageResponse(BaseModel):
    message: str
