import logging
import os
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "oysterscore"
DEFAULT_LOG_BACKUP_COUNT = 10
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARK = "_oysterscore_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def setup_logging(level="INFO", log_dir=None, retention_bytes=10 * 1024 * 1024):
    """Configure the package logger.

    Installs a stream handler, plus a rotating ``oysterscore.log`` file in
    ``log_dir`` when given. Calling it again replaces handlers it installed
    earlier rather than stacking them.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {level}")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    stream_handler = _mark(logging.StreamHandler())
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = _mark(
            RotatingFileHandler(
                os.path.join(log_dir, "oysterscore.log"),
                maxBytes=retention_bytes,
                backupCount=DEFAULT_LOG_BACKUP_COUNT,
            )
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
