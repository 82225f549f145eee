"""dwarf-layout - struct layout extraction from DWARF debug information in ELF files."""

from .application import DeclarationFormatter, StructParser
from .infrastructure.config import Config
from .main import main

__all__ = ["Config", "DeclarationFormatter", "StructParser", "main"]
