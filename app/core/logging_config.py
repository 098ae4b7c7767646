import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DIR = "logs"
LOG_FILE_NAME = "wild_button.log"


def setup_logging(settings):
    """Configures the application-wide logging with console and rotating file handlers."""

    log_level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to prevent duplicate logs
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    # 1. Console Handler (always enabled)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # 2. Rotating File Handler (production mode or LOG_TO_FILE=true)
    if settings.production or settings.log_to_file:
        log_file_path = os.path.join(LOG_DIR, LOG_FILE_NAME)

        if not os.path.exists(LOG_DIR):
            os.makedirs(LOG_DIR)

        try:
            file_handler = RotatingFileHandler(
                log_file_path,
                maxBytes=5 * 1024 * 1024,
                backupCount=7,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler.setLevel(log_level)
            root_logger.addHandler(file_handler)

            logger = logging.getLogger(__name__)
            logger.info(f"Logging to rotating file enabled: {log_file_path}")

        except OSError as e:
            # Still reaches the console handler.
            root_logger.error(f"Failed to set up rotating file logging: {e}")

    # Suppress verbose logging from specific libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("slack_sdk").setLevel(logging.INFO) # For Slack request signature verification
