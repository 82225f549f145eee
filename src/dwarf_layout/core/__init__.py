"""Core module initialization."""

from .debug_info_index import DebugInfoIndex, Entry, Location
from .models import DWAttr, DWTag
from .section_loader import SectionLoader

__all__ = [
    "DWAttr",
    "DWTag",
    "DebugInfoIndex",
    "Entry",
    "Location",
    "SectionLoader",
]
