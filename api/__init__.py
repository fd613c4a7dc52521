"""
API package for Request Telescope.

This package contains:
- deps.py: FastAPI dependency providers
- routers/: API route handlers
"""

from api.deps import get_pipeline, get_settings

__all__ = [
    "get_settings",
    "get_pipeline",
]
