#!/usr/bin/env python3

"""Domain models for dwarf-layout."""

from . import dwarf

__all__ = [
    "dwarf",
]
