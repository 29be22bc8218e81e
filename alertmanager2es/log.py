"""Logging setup."""

import sys

from loguru import logger

from alertmanager2es import APPLICATION


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stdout, tagged with the service name."""
    logger.remove()  # Remove default handler
    logger.configure(extra={"service": APPLICATION})
    logger.add(
        sys.stdout,
        format="{time:YYYY-MM-DDTHH:mm:ss.SSSZ} [{extra[service]}] {level}: {message}",
        level=level,
    )
