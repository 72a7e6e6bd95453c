"""
Logging setup for tenantdb.

Call :func:`setup_logging` once at process start (the FastAPI lifespan does
this). Modules then use ``logging.getLogger(__name__)`` as usual.

Handlers installed on the root logger:
- stdout, at DEBUG when ``DEBUG`` is on, otherwise INFO
- ``<LOG_DIR>/error.log``, ERROR and above, rotated at 10 MB
- ``<LOG_DIR>/debug.log``, everything, only with ``DEBUG`` or ``ENABLE_DEBUG_LOG``
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from tenantdb.utils.config import Settings, get_settings

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VERBOSE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the root logger from settings.

    Existing root handlers are removed first so that calling this twice (for
    example on reload) does not duplicate output.

    Args:
        settings: Settings to read from. Defaults to :func:`get_settings`.

    Returns:
        logging.Logger: the ``tenantdb`` package logger
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    verbose_formatter = logging.Formatter(VERBOSE_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    standard_formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(standard_formatter)
    console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    root_logger.addHandler(console_handler)

    root_logger.addHandler(
        _rotating_handler(log_dir / "error.log", logging.ERROR, verbose_formatter)
    )

    if settings.DEBUG or settings.ENABLE_DEBUG_LOG:
        root_logger.addHandler(
            _rotating_handler(log_dir / "debug.log", log_level, verbose_formatter)
        )

    # SQL echo only in debug mode
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)

    logger = logging.getLogger('tenantdb')
    logger.info(f"Logging initialized with level {logging.getLevelName(log_level)}")
    return logger
