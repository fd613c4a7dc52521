"""
Domain layer for Request Telescope.

Pure value objects with no dependency on FastAPI, recorders or the runtime.
"""
