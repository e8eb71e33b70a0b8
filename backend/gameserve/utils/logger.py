"""Logging configuration for the application."""
import logging
import sys
from gameserve.config import get_settings

_level = logging.DEBUG if get_settings().environment == "development" else logging.INFO

# Configure service logger
logger = logging.getLogger("gameserve")
logger.setLevel(_level)

# Create console handler
handler = logging.StreamHandler(sys.stdout)
handler.setLevel(_level)

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
handler.setFormatter(formatter)

# Add handler to logger if not already added
if not logger.handlers:
    logger.addHandler(handler)

# Prevent duplicate logs
logger.propagate = False

__all__ = ["logger"]
