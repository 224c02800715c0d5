"""
Loguru sink configuration shared by the API and the scripts.
"""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure logging with loguru."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level or ("DEBUG" if debug else "INFO"))
