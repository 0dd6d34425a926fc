import sys

from loguru import logger

from css_tracker.config import SETTINGS

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)

logger.remove()
logger.configure(extra={"name": "css_tracker"})
logger.add(sys.stderr, format=LOG_FORMAT, level=SETTINGS.LOG_LEVEL.upper())

if SETTINGS.LOG_FILE:
    logger.add(SETTINGS.LOG_FILE, rotation="10 MB", level="DEBUG")


def get_logger(name: str):
    """Zwraca logger z podaną nazwą."""
    return logger.bind(name=name)
