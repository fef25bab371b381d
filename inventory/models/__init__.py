from .device import DeviceRecord
