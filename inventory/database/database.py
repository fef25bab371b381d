# inventory/database/database.py

import threading
from pathlib import Path

from fastapi import Request

from inventory.models import DeviceRecord
from inventory.core import logger


class InventoryDatabase:
    """
    Process-lifetime inventory state.

    Records are kept in insertion order, keyed by id. ``lock`` guards both
    the records and the id counter; service functions hold it for the whole
    of each operation, including photo file writes.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.records: dict[int, DeviceRecord] = {}
        self._next_id = 1

    def allocate_id(self) -> int:
        with self.lock:
            new_id = self._next_id
            self._next_id += 1
            return new_id


def init_storage(cache_dir: Path) -> Path:
    """Creates the cache directory and its photos/ subdirectory."""
    photos_dir = Path(cache_dir) / "photos"
    photos_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Photo storage ready at {photos_dir.resolve()}")
    return photos_dir


# --- FastAPI dependencies ---
def get_db(request: Request) -> InventoryDatabase:
    return request.app.state.db


def get_photo_repository(request: Request):
    return request.app.state.photos
