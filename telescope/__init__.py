"""
Request Telescope.

Captures request/response metadata from FastAPI and Starlette services,
redacts sensitive fields, truncates oversized bodies and hands each entry
to a recorder.
"""

__version__ = "1.0.0"
