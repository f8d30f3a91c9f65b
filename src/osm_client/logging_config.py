"""Logging setup for the osm-client command line.

The library disables its own loguru output on import; applications that
want it call ``configure_logging`` or ``logger.enable("osm_client")``.
"""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False) -> None:
    """Send osm_client log records to stderr, at DEBUG when verbose."""
    logger.remove()
    logger.enable("osm_client")
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="{level.icon} <level>{message}</level>",
    )
