from fastapi import status


class InventoryError(Exception):
    """Base error for inventory operations; carries the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(InventoryError):
    """A required field is missing or the request body is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(InventoryError):
    """No record (or photo) exists for the requested id."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(InventoryError):
    """A photo file could not be written to the cache directory."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
