"""
Logging configuration for the attendance & payroll backend
"""
import logging
import sys
from typing import Optional

from attendance_payroll.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that are too chatty at the application level
_QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic": logging.INFO,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger on stdout

    Args:
        level: Overrides settings.LOG_LEVEL (e.g. "DEBUG" for a one-off script)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, env=%s, tz=%s",
        level_name, settings.APP_ENV, settings.REFERENCE_TZ,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)
