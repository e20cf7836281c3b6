"""Logging configuration for the data layer."""

import logging

from network20.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure root logging from settings.

    Args:
        settings: Application settings, defaults to the cached settings.

    Returns:
        logging.Logger: The application logger named after settings.app_name.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return logging.getLogger(settings.app_name)
