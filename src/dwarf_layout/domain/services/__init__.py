#!/usr/bin/env python3

"""Domain services layer."""

from . import parsing
from .struct_registry import StructRegistry

__all__ = [
    "StructRegistry",
    "parsing",
]
