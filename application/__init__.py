"""
Application layer for Request Telescope.

Holds the ports (Protocols) describing every collaborator of the capture
pipeline.
"""
