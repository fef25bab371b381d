# inventory/models/device.py

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DeviceRecord:
    id: int
    name: str
    description: str = ""
    photo_filename: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
