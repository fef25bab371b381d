# inventory/routers/forms_router.py

from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["Forms"])


def _serve_form(filename: str) -> FileResponse:
    path = STATIC_DIR / filename
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{filename} not found")
    return FileResponse(path, media_type="text/html")


@router.get("/RegisterForm.html", response_class=FileResponse)
def register_form_route():
    """Web form for registering a device."""
    return _serve_form("RegisterForm.html")


@router.get("/SearchForm.html", response_class=FileResponse)
def search_form_route():
    """Web form for searching a device by id."""
    return _serve_form("SearchForm.html")
