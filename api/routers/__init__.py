"""
Router package for Request Telescope.

- health: liveness and capture status endpoints
"""

from api.routers.health import router as health_router

__all__ = [
    "health_router",
]
