"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.products import router as products_router
from app.config import Settings, get_settings
from app.database import Database, get_database
from app.exceptions import register_exception_handlers
from app.models import Product  # noqa: F401 - Import to register models

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Console logging, plus a log file when one is configured."""
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Set specific log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup and dispose it on shutdown."""
    database: Database = app.state.database
    database.connect()
    try:
        yield
    finally:
        database.disconnect()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its Database for the given settings."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Product API",
        description="Create, read, update and delete products",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router)

    @app.get("/health")
    def health_check(database: Database = Depends(get_database)):
        """Health check endpoint."""
        if not database.ping():
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Start the HTTP server on the configured port."""
    settings = get_settings()
    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
