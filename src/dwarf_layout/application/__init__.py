#!/usr/bin/env python3

"""Application layer: parser facade and declaration rendering."""

from .declaration_formatter import DeclarationFormatter
from .struct_parser import StructParser

__all__ = [
    "DeclarationFormatter",
    "StructParser",
]
