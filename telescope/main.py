"""
Application factory for FastAPI.

This module wires the capture pipeline into FastAPI applications.

- install_telescope() adds the middleware to an existing app
- create_app() builds the standalone app served by ``python -m telescope``

Usage:
    from telescope.main import create_app, install_telescope
    from telescope.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings and an in-memory recorder
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings, recorder=InMemoryRecorder())

    # Existing app
    pipeline = install_telescope(my_app, settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI

from application.ports import Recorder
from infrastructure import ContextVarRpcContext, RouteHandlerResolver, build_recorder
from telescope.capture import CaptureConfig, CapturePipeline, TelescopeMiddleware
from telescope.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    recorder: Optional[Recorder] = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        recorder: Optional Recorder. If not provided, one is built from
                  settings.recorder.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    app = FastAPI(
        title="Request Telescope",
        description="Request and response capture for FastAPI services",
        version="1.0.0",
        lifespan=_lifespan,
    )

    _include_routers(app)

    install_telescope(app, settings, recorder=recorder)

    _log_capture_status(settings)

    return app


def install_telescope(
    app: FastAPI,
    settings: Settings,
    recorder: Optional[Recorder] = None,
) -> CapturePipeline:
    """
    Add the telescope middleware to an app.

    Apps built by create_app() shut the pipeline's worker pool down on
    exit. Other apps should call ``pipeline.shutdown()`` from their own
    lifespan; captures that have not started by then are dropped.

    Returns:
        The CapturePipeline serving the app.
    """
    if recorder is None:
        recorder = build_recorder(settings.recorder, settings.capture_dir)

    pipeline = CapturePipeline(
        CaptureConfig.from_settings(settings),
        recorder,
        rpc_context=ContextVarRpcContext(),
        max_workers=settings.max_workers,
        max_pending=settings.max_pending_captures,
    )
    app.add_middleware(
        TelescopeMiddleware,
        pipeline=pipeline,
        resolver=RouteHandlerResolver(settings.rpc_path_prefixes_list),
    )
    app.state.telescope = pipeline
    return pipeline


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    pipeline = getattr(app.state, "telescope", None)
    if pipeline is not None:
        pipeline.shutdown()


def _configure_logging(settings: Settings) -> None:
    """Set the root log level from settings."""
    logging.basicConfig(level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for request-telescope")


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import health_router

    # Health router (no prefix - /health at root)
    app.include_router(health_router)


def _log_capture_status(settings: Settings) -> None:
    """Log the capture configuration at startup."""
    if not settings.enabled or "request" not in settings.enabled_kinds_list:
        logger.warning("=== TELESCOPE REQUEST CAPTURE DISABLED ===")
        return

    logger.info(
        "Telescope capture enabled → recorder=%s limit=%dKB",
        settings.recorder,
        settings.response_size_limit,
    )
    if settings.ignore_paths_list:
        logger.info("Ignoring paths: %s", ", ".join(settings.ignore_paths_list))


# Default app instance for uvicorn
# This allows: uvicorn telescope.main:app --reload
app = create_app()
