import inspect
import logging
import sys

from loguru import logger

from tutoring_backend.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "twilio.http_client", "aiosmtplib")


class InterceptHandler(logging.Handler):
    """Hands stdlib records (uvicorn, sqlalchemy, twilio) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging():
    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL, format=LOG_FORMAT, colorize=True)

    # failed notifications and storage errors end up here
    logger.add(settings.LOG_FILE, level="ERROR", format=LOG_FORMAT, rotation="10 MB")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["logger", "setup_logging"]
