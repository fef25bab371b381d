from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory.core import Settings, settings as default_settings, logger, InventoryError
from inventory.core.discord_logger import send_discord_alert
from inventory.database import InventoryDatabase, init_storage
from inventory.repositories import PhotoRepository
from inventory.routers import api_router


api_description = """
Inventory registration service.

Devices are registered with a name, a description and an optional photo,
then listed, updated, searched by id and deleted. Photos are stored under
`<cache>/photos` as `photo_<id><ext>`; all other state lives in memory and
is lost when the process exits.
"""


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_storage(app_settings.CACHE_DIR)
        base_url = f"http://{app_settings.HOST}:{app_settings.PORT}"
        logger.info(f"Server started at {base_url}")
        logger.info(f"Documentation: {base_url}/api-docs")
        send_discord_alert("Inventory service started.", level="INFO", webhook_url=app_settings.DISCORD_WEBHOOK_URL)

        yield

        logger.info(f"Stopping inventory service ({len(app.state.db.records)} devices discarded)")

    app = FastAPI(
        title="Inventory Service API",
        description=api_description,
        version="1.0.0",
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.db = InventoryDatabase()
    app.state.photos = PhotoRepository(app_settings.photos_dir)

    # --- Middleware CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # --- Error handling ---
    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        message = f"Error 500 on {request.method} {request.url.path}: {exc}"
        logger.exception(message)
        send_discord_alert(message, level="CRITICAL", webhook_url=app_settings.DISCORD_WEBHOOK_URL)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error."}
        )

    return app


app = create_app()
