import os
import tempfile
from pathlib import Path, PurePosixPath, PureWindowsPath

from inventory.core import logger, StorageError
from inventory.core.multipart import FilePart

DEFAULT_EXTENSION = ".jpg"


def photo_filename_for(dev_id: int, original_filename: str) -> str:
    """``photo_<id><ext>``, keeping the upload's extension or falling back to .jpg."""
    # Browsers on Windows may send a full client path
    basename = PureWindowsPath(PurePosixPath(original_filename or "").name).name
    ext = PurePosixPath(basename).suffix
    return f"photo_{dev_id}{ext or DEFAULT_EXTENSION}"


class PhotoRepository:

    def __init__(self, photos_dir: Path):
        self.photos_dir = Path(photos_dir)

    def path_for(self, filename: str) -> Path:
        return self.photos_dir / filename

    def save_photo_repository(self, dev_id: int, photo: FilePart) -> str:
        """
        Writes the photo under its derived filename and returns that name.

        Bytes go to a temporary file in the same directory first and are then
        moved into place, so readers never see a partially written photo.
        """
        filename = photo_filename_for(dev_id, photo.filename)
        target = self.path_for(filename)
        tmp_path = None
        try:
            self.photos_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{filename}.", suffix=".tmp", dir=self.photos_dir)
            with os.fdopen(fd, "wb") as handle:
                handle.write(photo.data)
            os.replace(tmp_path, target)
        except OSError as e:
            logger.error(f"Could not save photo {target}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                self.delete_file(Path(tmp_path))
            raise StorageError("Error saving file") from e

        logger.info(f"Saved photo {filename} ({len(photo.data)} bytes)")
        return filename

    def delete_photo_repository(self, filename: str | None) -> bool:
        """Best-effort removal; failures are logged and reported as False."""
        if not filename:
            return False
        return self.delete_file(self.path_for(filename))

    def delete_file(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not delete photo file {path}: {e}")
            return False
        return True

    def get_photo_path_repository(self, filename: str | None) -> Path | None:
        if not filename:
            return None
        path = self.path_for(filename)
        return path if path.is_file() else None
