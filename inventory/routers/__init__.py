# inventory/routers/__init__.py

from fastapi import APIRouter

from . import inventory_router, forms_router

api_router = APIRouter()

api_router.include_router(inventory_router.router)
api_router.include_router(forms_router.router)
