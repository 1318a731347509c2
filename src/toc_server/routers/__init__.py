"""API routers for the share server."""
