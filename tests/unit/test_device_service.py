"""
Unit tests for the inventory store operations.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from inventory.core import NotFoundError, StorageError, ValidationError
from inventory.core.multipart import FilePart
from inventory.repositories import PhotoRepository
from inventory.schemas import DeviceUpdate
from inventory.services import (
    create_device_service,
    delete_device_service,
    get_all_devices_service,
    get_device_by_id_service,
    get_device_photo_path_service,
    read_device_photo_service,
    search_device_service,
    update_device_photo_service,
    update_device_service,
)


def _ids(db):
    return [device.id for device in get_all_devices_service(db)]


class TestCreate:

    def test_ids_start_at_one_and_increase(self, db, photos):
        created = [create_device_service(db, photos, f"device-{n}") for n in range(5)]

        assert [device.id for device in created] == [1, 2, 3, 4, 5]

    def test_ids_never_reused_after_delete(self, db, photos):
        create_device_service(db, photos, "a")
        create_device_service(db, photos, "b")
        delete_device_service(db, photos, 2)

        third = create_device_service(db, photos, "c")

        assert third.id == 3
        assert _ids(db) == [1, 3]

    def test_defaults(self, db, photos):
        device = create_device_service(db, photos, "Laptop")

        assert device.inventory_name == "Laptop"
        assert device.description == ""
        assert device.photo_filename is None
        assert device.photo_url is None
        assert device.created_at.tzinfo is not None

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_name_is_rejected_without_consuming_an_id(self, db, photos, name):
        with pytest.raises(ValidationError):
            create_device_service(db, photos, name, "desc")

        assert get_all_devices_service(db) == []
        assert create_device_service(db, photos, "ok").id == 1

    def test_photo_round_trip(self, db, photos):
        data = b"\x89PNG\r\n\x1a\n\x00\x01"
        device = create_device_service(db, photos, "Camera", photo=FilePart("a.png", data))

        assert device.photo_filename == "photo_1.png"
        assert device.photo_url == "/inventory/1/photo"
        assert get_device_photo_path_service(db, photos, 1).read_bytes() == data
        assert read_device_photo_service(db, photos, 1) == data

    def test_photo_without_extension_defaults_to_jpg(self, db, photos):
        device = create_device_service(db, photos, "Camera", photo=FilePart("snapshot", b"x"))

        assert device.photo_filename == "photo_1.jpg"

    def test_empty_file_input_counts_as_no_photo(self, db, photos):
        device = create_device_service(db, photos, "Camera", photo=FilePart("", b""))

        assert device.photo_filename is None
        assert list(photos.photos_dir.iterdir()) == []

    def test_storage_failure_is_reported_and_nothing_is_stored(self, db, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        broken = PhotoRepository(blocker)

        with pytest.raises(StorageError):
            create_device_service(db, broken, "Camera", photo=FilePart("a.png", b"x"))

        assert get_all_devices_service(db) == []

    def test_concurrent_creates_never_share_an_id(self, db, photos):
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(lambda n: create_device_service(db, photos, f"d{n}"), range(100)))

        ids = sorted(device.id for device in created)
        assert ids == list(range(1, 101))


class TestReadOperations:

    def test_list_preserves_insertion_order_and_is_repeatable(self, db, photos):
        for name in ("x", "y", "z"):
            create_device_service(db, photos, name)

        first = get_all_devices_service(db)
        second = get_all_devices_service(db)

        assert [d.inventory_name for d in first] == ["x", "y", "z"]
        assert first == second

    def test_get_unknown_id(self, db):
        with pytest.raises(NotFoundError):
            get_device_by_id_service(db, 42)

    def test_returned_records_are_detached(self, db, photos):
        create_device_service(db, photos, "Laptop")
        device = get_device_by_id_service(db, 1)
        device.description = "changed locally"

        assert get_device_by_id_service(db, 1).description == ""

    def test_photo_path_without_photo(self, db, photos):
        create_device_service(db, photos, "Laptop")

        with pytest.raises(NotFoundError):
            get_device_photo_path_service(db, photos, 1)

    def test_photo_path_when_file_vanished(self, db, photos):
        create_device_service(db, photos, "Laptop", photo=FilePart("a.png", b"x"))
        (photos.photos_dir / "photo_1.png").unlink()

        with pytest.raises(NotFoundError):
            get_device_photo_path_service(db, photos, 1)

    def test_photo_path_unknown_id(self, db, photos):
        with pytest.raises(NotFoundError):
            get_device_photo_path_service(db, photos, 9)


class TestUpdate:

    def test_description_only_keeps_name(self, db, photos):
        create_device_service(db, photos, "Laptop", "old")

        device = update_device_service(db, 1, DeviceUpdate(description="new"))

        assert device.inventory_name == "Laptop"
        assert device.description == "new"

    def test_name_only_keeps_description(self, db, photos):
        create_device_service(db, photos, "Laptop", "old")

        device = update_device_service(db, 1, DeviceUpdate(inventory_name="Notebook"))

        assert device.inventory_name == "Notebook"
        assert device.description == "old"

    def test_empty_name_is_a_no_op(self, db, photos):
        create_device_service(db, photos, "Laptop", "old")

        device = update_device_service(db, 1, DeviceUpdate(inventory_name=""))

        assert device.inventory_name == "Laptop"

    def test_empty_description_replaces(self, db, photos):
        create_device_service(db, photos, "Laptop", "old")

        device = update_device_service(db, 1, DeviceUpdate(description=""))

        assert device.description == ""

    def test_update_unknown_id(self, db):
        with pytest.raises(NotFoundError):
            update_device_service(db, 3, DeviceUpdate(description="x"))


class TestUpdatePhoto:

    def test_replaces_bytes_and_removes_old_file(self, db, photos):
        create_device_service(db, photos, "Camera", photo=FilePart("a.png", b"old"))

        device = update_device_photo_service(db, photos, 1, FilePart("b.gif", b"new"))

        assert device.photo_filename == "photo_1.gif"
        assert get_device_photo_path_service(db, photos, 1).read_bytes() == b"new"
        assert not (photos.photos_dir / "photo_1.png").exists()
        assert sorted(p.name for p in photos.photos_dir.iterdir()) == ["photo_1.gif"]

    def test_same_extension_overwrites(self, db, photos):
        create_device_service(db, photos, "Camera", photo=FilePart("a.png", b"old"))

        update_device_photo_service(db, photos, 1, FilePart("c.png", b"new"))

        assert (photos.photos_dir / "photo_1.png").read_bytes() == b"new"

    def test_adds_photo_to_device_without_one(self, db, photos):
        create_device_service(db, photos, "Camera")

        device = update_device_photo_service(db, photos, 1, FilePart("a.jpeg", b"img"))

        assert device.photo_filename == "photo_1.jpeg"

    def test_missing_photo(self, db, photos):
        create_device_service(db, photos, "Camera")

        with pytest.raises(ValidationError):
            update_device_photo_service(db, photos, 1, None)

    def test_unknown_id(self, db, photos):
        with pytest.raises(NotFoundError):
            update_device_photo_service(db, photos, 5, FilePart("a.png", b"x"))

    def test_old_file_already_gone_is_tolerated(self, db, photos):
        create_device_service(db, photos, "Camera", photo=FilePart("a.png", b"old"))
        (photos.photos_dir / "photo_1.png").unlink()

        device = update_device_photo_service(db, photos, 1, FilePart("a.png", b"new"))

        assert device.photo_filename == "photo_1.png"


class TestDelete:

    def test_removes_record_and_photo(self, db, photos):
        create_device_service(db, photos, "Camera", photo=FilePart("a.png", b"x"))

        delete_device_service(db, photos, 1)

        assert get_all_devices_service(db) == []
        assert list(photos.photos_dir.iterdir()) == []
        with pytest.raises(NotFoundError):
            get_device_by_id_service(db, 1)

    def test_missing_photo_file_does_not_block_delete(self, db, photos):
        create_device_service(db, photos, "Camera", photo=FilePart("a.png", b"x"))
        (photos.photos_dir / "photo_1.png").unlink()

        delete_device_service(db, photos, 1)

        assert get_all_devices_service(db) == []

    def test_unknown_id(self, db, photos):
        with pytest.raises(NotFoundError):
            delete_device_service(db, photos, 1)


class TestSearch:

    def test_appends_photo_link_when_requested(self, db, photos):
        create_device_service(db, photos, "Camera", "Front door", FilePart("a.png", b"x"))

        device = search_device_service(db, 1, has_photo=True)

        assert device.description == "Front door (Photo link: /inventory/1/photo)"
        assert get_device_by_id_service(db, 1).description == "Front door"

    def test_no_link_without_flag(self, db, photos):
        create_device_service(db, photos, "Camera", "Front door", FilePart("a.png", b"x"))

        assert search_device_service(db, 1).description == "Front door"

    def test_no_link_without_photo(self, db, photos):
        create_device_service(db, photos, "Camera", "Front door")

        assert search_device_service(db, 1, has_photo=True).description == "Front door"

    def test_unknown_id(self, db):
        with pytest.raises(NotFoundError):
            search_device_service(db, 1)


class TestDeviceRepository:

    def test_create_stores_record_under_given_id(self, db):
        from inventory.repositories import DeviceRepository

        repo = DeviceRepository(db)
        device = repo.create_device_repository(7, "Router", "rack 2")

        assert device.id == 7
        assert repo.get_device_by_id_repository(7).name == "Router"
        assert db.allocate_id() == 1
