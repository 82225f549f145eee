"""Infrastructure configuration module."""

from .application_config import Config
from .dwarf_config import get_config

__all__ = ["Config", "get_config"]
