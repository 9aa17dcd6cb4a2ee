import sys
from pathlib import Path

from loguru import logger


def setup_logger(verbose: bool = False, log_file: str | Path | None = None) -> None:
    """
    Configure loguru sinks for a monitoring run.

    Rules:
    1. CONSOLE: always log to stderr, DEBUG+ when verbose, INFO+ otherwise.
    2. FILE: if log_file is given, also log DEBUG+ there (rotated).

    Args:
        verbose: Enable debug output on the console
        log_file: Optional path of a log file
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
    )

    if log_file is not None:
        logger.add(
            Path(log_file),
            rotation="10 MB",
            retention="4 weeks",
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )
