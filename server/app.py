"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config.config import Config
from server.middleware import RequestIDMiddleware
from server.routes import ask, diagnostics, health, search
from server.schemas.responses import API_VERSION
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config = Config()
    logger.info(
        f"VoxQuery API {API_VERSION} starting up",
        extra={"extra_fields": {"version": API_VERSION, "config": config.describe()}},
    )

    missing = config.missing_credentials()
    if missing:
        logger.warning(f"Missing credentials (affected providers answer with a configuration message): {missing}")

    yield

    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="VoxQuery API",
        description="Voice assistant answer engine: model first, real-time search fallback, spoken-length summaries",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes are registered first so /v1/* takes precedence over static files
    app.include_router(health.router)
    app.include_router(ask.router)
    app.include_router(search.router)
    app.include_router(diagnostics.router)

    # Serve the voice front end from /frontend when it is deployed alongside
    frontend_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend")
    if os.path.isdir(frontend_dir):
        app.mount("/", StaticFiles(directory=frontend_dir, html=True), name="frontend")
    else:
        logger.info(f"Frontend directory not found at {frontend_dir}; skipping static mount")

    return app
