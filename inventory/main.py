# inventory/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from inventory.api.api import api_router
from inventory.core.config import Settings, settings as default_settings
from inventory.core.errors import setup_exception_handlers
from inventory.core.logging import setup_logging, setup_request_logging
from inventory.db.init_db import init_db


def create_application(settings: Settings = default_settings) -> FastAPI:
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables_on_startup:
            logger.info("Creating tables on {}", settings.database_url.split("@")[-1])
            init_db()
        logger.info("{} {} started", settings.PROJECT_NAME, settings.VERSION)
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- LOGGING / ERRORS ----------
    setup_request_logging(app)
    setup_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/healthz", tags=["system"])
    def healthz():
        return {"status": "ok"}

    return app


app = create_application()


def run() -> None:
    """Serve the API with uvicorn (``dynasty-inventory-api`` entry point)."""
    import uvicorn

    uvicorn.run("inventory.main:app", host="0.0.0.0", port=5000, reload=default_settings.debug)


if __name__ == "__main__":
    run()
