"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from essential_times.api.errors import (
    database_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from essential_times.api.routes import router as api_router
from essential_times.core.config import settings
from essential_times.core.database import SessionLocal, init_db
from essential_times.core.logging import configure_logging
from essential_times.services.images import UPLOADS_URL_PREFIX
from essential_times.services.seed import seed_defaults

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and seed default accounts/categories before serving."""
    init_db()
    db = SessionLocal()
    try:
        seed_defaults(db, settings)
    finally:
        db.close()
    logger.info("Essential Times API ready (env=%s)", settings.APP_ENV)
    yield


def _mount_client_bundle(app: FastAPI, build_dir: str) -> None:
    """Serve the browser bundle; unknown non-API paths fall back to index.html."""
    root = os.path.realpath(build_dir)
    index = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    def client_bundle(full_path: str) -> FileResponse:
        if full_path.startswith(settings.API_PREFIX.lstrip("/") + "/"):
            raise HTTPException(status_code=404, detail="Not found")
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        if not os.path.isfile(index):
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(index)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Essential Times API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    if os.path.isdir(settings.CLIENT_BUILD_DIR):
        _mount_client_bundle(app, settings.CLIENT_BUILD_DIR)

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn on HOST:PORT."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    serve()
