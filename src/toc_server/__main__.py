"""Server module entry point for running with python -m toc_server."""

import os

import uvicorn

# Configure the root RichHandler before uvicorn starts; its loggers propagate to it
from tocideator.utils.logging_config import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info(
        "Starting toc-ideator share server",
        extra={
            "host": host,
            "port": port,
        },
    )

    uvicorn.run(
        "toc_server.main:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # Keep our logging configuration
    )
