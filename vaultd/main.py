"""Main FastAPI application for vaultd daemon.

This module creates and configures the FastAPI application that serves the
in-memory vault cache over a REST API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vault_library.cache import VaultCacheService
from vault_library.config import VaultSettings
from vault_library.config.loader import load_config
from vault_library.remote import ObsidianRestClient
from vault_library.remote import RemoteDocumentStore

from . import __version__
from .routers import cache_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: VaultSettings | None = None,
    remote: RemoteDocumentStore | None = None,
) -> FastAPI:
    """Create the vaultd application.

    Args:
        settings: Settings to use instead of loading vaultd.yaml
        remote: Document store to mirror instead of the Obsidian REST API

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager.

        Starts the background cache build on startup and stops refresh and
        waits for running cycles on shutdown.
        """
        # Startup
        config = settings if settings is not None else load_config()
        app.state.settings = config
        app.state.cache_service = None
        logger.info(f"Starting vaultd daemon on {config.host}:{config.port}")

        owned_client: ObsidianRestClient | None = None
        if config.cache_enabled:
            try:
                store = remote
                if store is None:
                    owned_client = ObsidianRestClient.from_settings(config)
                    store = owned_client
                service = VaultCacheService.from_settings(config, store)
                app.state.cache_service = service
                service.start_background_build()
            except Exception as e:
                logger.error(f"Failed to start vault cache: {e}")
                # Don't fail startup, just log the error
        else:
            logger.info("Vault cache is disabled by configuration.")

        yield

        # Shutdown
        logger.info("Shutting down vaultd daemon")
        if app.state.cache_service is not None:
            await app.state.cache_service.aclose()
        if owned_client is not None:
            await owned_client.aclose()

    app = FastAPI(
        title="vaultd",
        description="REST API daemon serving an in-memory mirror of an Obsidian vault",
        version=__version__,
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(status_router)
    app.include_router(cache_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Welcome message with API information
        """
        return {
            "name": "vaultd",
            "version": __version__,
            "description": "REST API daemon serving an in-memory Obsidian vault cache",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()
