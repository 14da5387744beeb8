import os
import sys

from loguru import logger


def setup_logger(
    *, json_logs: bool = False, level: str = "INFO", log_file: str | None = None
) -> None:
    """Configure loguru for consumers of the analytics library.

    Console level controlled by LOG_LEVEL env (default: INFO).
    When log_file is given, it always captures DEBUG so tolerated provider
    failures (missing metadata, security, holders) can be traced later.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="3 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )
