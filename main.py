# wild-button-clicker/main.py

import sys

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
import uvicorn
import logging

# Import the logging setup function
from app.core.logging_config import setup_logging
# Import the routers
from app.integrations.routers import health, slack_events
from app.services.button_clicker import ButtonClicker
from app.services.event_dispatcher import EventDispatcher
from config import ConfigError, load_settings

# Get a logger for the main application file
logger = logging.getLogger(__name__)


def create_app(settings, clicker=None) -> FastAPI:
    """Builds the FastAPI app around one Settings object."""
    if settings.production:
        # Release mode: no interactive docs or schema.
        app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    else:
        app = FastAPI()

    app.state.settings = settings
    app.state.dispatcher = EventDispatcher(settings, clicker or ButtonClicker(settings))

    @app.exception_handler(HTTPException)
    async def plain_text_http_error(request: Request, exc: HTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    # Include the routers
    app.include_router(health.router, tags=["health"])
    app.include_router(slack_events.router, tags=["slack_events"])
    return app


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig()
        logger.critical(str(e))
        sys.exit(1)

    # --- Initialize Logging ---
    setup_logging(settings)
    logger.info(f"Starting wild button clicker in {'production' if settings.production else 'development'} mode")

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning" if settings.production else "info",
    )


if __name__ == "__main__":
    main()
