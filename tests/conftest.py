"""
Shared pytest fixtures for the inventory service tests.
"""
import pytest

from inventory.core import Settings
from inventory.core import discord_logger
from inventory.database import InventoryDatabase, init_storage
from inventory.repositories import PhotoRepository


@pytest.fixture(autouse=True)
def reset_alert_throttle():
    """Each test starts without remembered alert times."""
    discord_logger._last_alert_time.clear()
    yield
    discord_logger._last_alert_time.clear()


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        HOST="127.0.0.1",
        PORT=3000,
        CACHE_DIR=tmp_path / "cache",
        LOG_DIR=tmp_path / "logs",
        DISCORD_WEBHOOK_URL=None,
    )


@pytest.fixture
def db():
    return InventoryDatabase()


@pytest.fixture
def photos(app_settings):
    photos_dir = init_storage(app_settings.CACHE_DIR)
    return PhotoRepository(photos_dir)


def build_multipart(fields, boundary="testboundary"):
    """
    Encodes ``fields`` as a multipart/form-data body.

    Values are either text or (filename, bytes) tuples.
    Returns (body, content_type).
    """
    chunks = []
    for name, value in fields:
        chunks.append(f"--{boundary}\r\n".encode())
        if isinstance(value, tuple):
            filename, data = value
            chunks.append(
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                "Content-Type: application/octet-stream\r\n\r\n".encode()
            )
            chunks.append(data)
        else:
            chunks.append(f'Content-Disposition: form-data; name="{name}"\r\n\r\n{value}'.encode())
        chunks.append(b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode())
    return b"".join(chunks), f"multipart/form-data; boundary={boundary}"


@pytest.fixture
def multipart():
    return build_multipart
