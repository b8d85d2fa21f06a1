import os
import sys

from loguru import logger

from sasm_launcher.core.constants import LOG_FILE

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: str = LOG_FILE) -> None:
    """
    (Re)configure loguru sinks.

    Args:
        level: Console log level name
        log_file: Path of the rotating debug log, or empty to disable it
    """
    logger.remove()  # Remove default handler

    # Add stderr handler only if available (not in windowed app bundles)
    if sys.stderr:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level.upper())

    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file), exist_ok=True)
            logger.add(
                log_file,
                rotation="1 MB",
                retention="10 days",
                format=FILE_FORMAT,
                level="DEBUG",
            )
        except OSError as e:
            logger.warning(f"File logging disabled: {e}")
