#!/usr/bin/env python3

"""Parsing services for DWARF struct layouts."""

from .array_bounds import ArrayBoundResolver
from .member_enumerator import MemberIterator
from .member_location_parser import parse_location_offset
from .type_resolver import TypeResolver

__all__ = [
    "ArrayBoundResolver",
    "MemberIterator",
    "TypeResolver",
    "parse_location_offset",
]
