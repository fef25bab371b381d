from .database import InventoryDatabase, init_storage, get_db, get_photo_repository
