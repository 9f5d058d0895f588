"""
Logging configuration.

loguru writes to stderr by default; this only swaps the default sink for one
with the requested level so debug chatter stays off unless asked for.
"""
import sys
from typing import Optional

from loguru import logger

from caption_validator.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: Optional[str] = None) -> str:
    """
    Route loguru output to stderr at the given level.

    Args:
        level: Level name (DEBUG, INFO, ...). Falls back to settings.LOG_LEVEL.

    Returns:
        The level name that was applied
    """
    resolved = (level or settings.LOG_LEVEL).upper()
    # Raises ValueError for unknown level names
    logger.level(resolved)

    logger.remove()
    logger.add(sys.stderr, level=resolved, format=LOG_FORMAT)
    return resolved
