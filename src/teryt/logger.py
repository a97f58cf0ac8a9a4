import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .config import get_config, get_int_config

LOG_FILE = "logs/app.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Configures and returns a logger writing to a daily rotated file.

    Calling this with the package name ("teryt") configures every module
    logger below it, since those propagate to the package logger.
    """
    log_level_str = get_config("TERYT_LOG_LEVEL").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    retention_days = get_int_config("TERYT_LOG_RETENTION_DAYS")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Loggers are process-wide; only attach the file handler once
    if logger.hasHandlers():
        return logger

    Path(LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

    # Rotate at midnight and keep one file per retained day
    handler = TimedRotatingFileHandler(
        LOG_FILE,
        when="midnight",
        interval=1,
        backupCount=retention_days
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)

    return logger
