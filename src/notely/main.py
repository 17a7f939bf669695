# Main application entry point
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .api import auth_router, health_router, notes_router, register_error_handlers, users_router
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import create_tables, dispose_engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting Notely application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    # tests run against their own in-memory database
    if os.getenv("NOTELY_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTELY_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down Notely application")
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    description="Personal notes API with token authentication",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(health_router, prefix="/api")

# uploaded profile pictures
Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
app.mount("/storage", StaticFiles(directory=settings.storage_root, check_dir=False), name="storage")


@app.get("/")
async def root():
    return {"message": "Notely API"}


@app.get("/api/")
async def api_root():
    return {
        "message": "Notely API",
        "version": __version__,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {
            "authentication": "/api/auth/",
            "notes": "/api/notes",
            "user": "/api/user",
            "health": "/api/health",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notely.main:app", host=settings.host, port=settings.port, reload=settings.reload)
