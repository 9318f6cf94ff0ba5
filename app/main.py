"""
MindCheck FastAPI Application

This is the main application entry point for the assessment API.
It creates the FastAPI application through the factory, which registers
routes, middleware, and exception handlers.
"""

import logging

import uvicorn

from app.app_factory import create_application
from app.core.config.settings import get_settings

logger = logging.getLogger(__name__)

# This is the exported app that Uvicorn will use when run with "app.main:app"
app = create_application()

if __name__ == "__main__":
    # This block runs only when the script is executed directly (not through Uvicorn)
    settings = get_settings()

    logger.info(
        f"Starting Uvicorn server. Host: {settings.SERVER_HOST}, Port: {settings.SERVER_PORT}, LogLevel: {settings.LOG_LEVEL.lower()}"
    )
    uvicorn.run(
        "app.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
        # sessions are held in process memory
        workers=settings.UVICORN_WORKERS,
    )
