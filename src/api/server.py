"""
Process entrypoint.

Loads configuration, configures logging and serves the API with uvicorn.
A missing DATABASE_URL is fatal: the process exits before any port is bound.
Uvicorn handles SIGINT/SIGTERM by running the lifespan shutdown, which closes
the database pool before the process exits.
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from src.api.main import create_app
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_settings() -> Settings:
    """Load settings, exiting the process with status 1 if they are invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        if any(err["loc"] == ("database_url",) for err in e.errors()):
            logger.error("ERROR: DATABASE_URL is not defined")
        else:
            logger.error(f"ERROR: invalid configuration: {e}")
        sys.exit(1)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    app = create_app(settings)
    logger.info(f"Server starting on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    logger.info("Server shut down gracefully")


if __name__ == "__main__":
    main()
