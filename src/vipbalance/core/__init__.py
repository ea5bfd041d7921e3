"""Core configuration and logging setup"""

from .config import Config
from .logging import configure_logging

__all__ = ["Config", "configure_logging"]
