"""
FastAPI Dependency Providers for Request Telescope.

Usage in routers:
    from api.deps import get_pipeline

    @router.get("/status")
    def status(pipeline: CapturePipeline = Depends(get_pipeline)):
        return {"enabled": pipeline.enabled}

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_pipeline] = lambda: fake_pipeline
"""

from typing import Optional

from fastapi import Request

from telescope.capture import CapturePipeline
from telescope.settings import Settings, get_settings as _get_settings


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from telescope.settings.
    """
    return _get_settings()


def get_pipeline(request: Request) -> Optional[CapturePipeline]:
    """
    Get the capture pipeline installed on the app, if any.

    Returns:
        The CapturePipeline stored by install_telescope(), or None
    """
    return getattr(request.app.state, "telescope", None)
