from .device_repository import DeviceRepository
from .photo_repository import PhotoRepository, photo_filename_for
