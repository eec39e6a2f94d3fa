"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api import assets, auth, users
from src.api.errors import register_exception_handlers
from src.api.middleware import RequestLoggingMiddleware
from src.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Configure standard library logging for the whole application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging(settings.log_level)
    logger.info(f"Starting Dev Assets API ({settings.environment})")
    yield
    logger.info("Shutting down Dev Assets API")


app = FastAPI(
    title="Dev Assets API",
    description="Share assets, comment on them and like them",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Request logging and CORS for development
if settings.is_development:
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(assets.router)
app.include_router(users.router)

# Uploaded avatars are public
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount(settings.uploads_url_path, StaticFiles(directory=settings.upload_dir), name="uploads")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
