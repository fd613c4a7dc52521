"""
Health check router.

This router provides health check endpoints for monitoring and load
balancers, plus a read-only view of the capture configuration.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from api.deps import get_pipeline
from telescope.capture import CapturePipeline

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/telescope")
def telescope_status(pipeline: Optional[CapturePipeline] = Depends(get_pipeline)):
    """
    Report whether request capture is active and how it is configured.

    Hidden field names are reported; values are never exposed.
    """
    if pipeline is None:
        return {"installed": False, "enabled": False}

    config = pipeline.config
    return {
        "installed": True,
        "enabled": pipeline.enabled,
        "recorder": type(pipeline.recorder).__name__,
        "size_limit_kb": config.size_limit_kb,
        "ignore_paths": list(config.ignore_paths),
        "only_paths": list(config.only_paths),
        "hidden_response_parameters": list(config.hidden_response_parameters),
    }
