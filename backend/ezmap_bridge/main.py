"""
EzMap Bridge API

FastAPI application hosting the shared-file channels.
"""

from contextlib import asynccontextmanager
import logging
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ezmap_bridge import __version__
from ezmap_bridge.config import Settings, settings as default_settings
from ezmap_bridge.api.v1.router import api_router
from ezmap_bridge.features.shared_file import (
    DirectoryContentProvider,
    SharedFileService,
)


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> SharedFileService:
    """One service (and relay state) per application session."""
    provider = None
    if settings.content_root:
        provider = DirectoryContentProvider(settings.content_root)
        logger.info(f"Content locators served from {settings.content_root}")
    else:
        logger.info("No content root configured, content:// locators will not resolve")

    return SharedFileService(
        cache_dir=settings.cache_dir,
        provider=provider,
        relay_launch_to_stream=settings.relay_launch_to_stream,
    )


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting EzMap Bridge API...")
    logger.info(f"Shared file cache: {app.state.settings.cache_dir}")
    yield
    logger.info("Shutting down...")


# === App Creation ===
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="EzMap Bridge API",
        description="Relays shared GPX files to the EzMap application layer",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.shared_file_service = build_service(settings)

    # === Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Routes ===
    app.include_router(api_router, prefix="/api/v1")

    # === Health Check ===
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
