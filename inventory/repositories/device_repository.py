from dataclasses import replace

from inventory.models import DeviceRecord
from inventory.database import InventoryDatabase
from inventory.core import logger


class DeviceRepository:
    """Record CRUD over the in-memory database. Returned records are copies."""

    def __init__(self, db: InventoryDatabase):
        self.db = db


    def get_device_by_id_repository(self, dev_id: int) -> DeviceRecord | None:
        with self.db.lock:
            device = self.db.records.get(dev_id)
            return replace(device) if device else None

    def get_all_devices_repository(self) -> list[DeviceRecord]:
        with self.db.lock:
            return [replace(device) for device in self.db.records.values()]


    def create_device_repository(self, dev_id: int, name: str, description: str = "", photo_filename: str | None = None) -> DeviceRecord:
        with self.db.lock:
            device = DeviceRecord(id=dev_id, name=name, description=description, photo_filename=photo_filename)
            self.db.records[dev_id] = device
            logger.info(f"Device {dev_id} stored")
            return replace(device)


    def update_device_repository(self, dev_id: int, update_data: dict) -> DeviceRecord | None:
        with self.db.lock:
            device = self.db.records.get(dev_id)

            if not device:
                logger.info(f"No device found with id {dev_id}")
                return None

            for key, value in update_data.items():
                setattr(device, key, value)
            return replace(device)


    def delete_device_repository(self, dev_id: int) -> bool:
        with self.db.lock:
            if self.db.records.pop(dev_id, None) is None:
                logger.info(f"No device found with id {dev_id}")
                return False
            logger.info(f"Device {dev_id} deleted")
            return True
