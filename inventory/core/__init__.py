from .settings import settings, Settings
from .logger import logger
from .errors import InventoryError, ValidationError, NotFoundError, StorageError
