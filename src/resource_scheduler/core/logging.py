import logging

from resource_scheduler.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and services embedding the engine."""
    logging.basicConfig(level=level or get_settings().log_level, format=LOG_FORMAT)
