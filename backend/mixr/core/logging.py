import logging
import sys
from mixr.core.config import get_settings

def setup_logging():
    """Configure logging for the application."""
    settings = get_settings()

    logger = logging.getLogger("mixr")
    logger.setLevel(settings.log_level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(settings.log_level.upper())
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(handler)

    return logger

def get_logger(name: str):
    """Get a logger instance with the given name."""
    # Ensure the parent 'mixr' logger is configured
    setup_logging()
    return logging.getLogger(f"mixr.{name}")
