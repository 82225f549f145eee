#!/usr/bin/env python3

"""Struct registry entry model."""

from dataclasses import dataclass

from ....core.debug_info_index import Location


@dataclass(frozen=True)
class StructRef:
    """A named struct definition found during the registry scan.

    ``location`` is the first full (non-declaration) definition seen in scan
    order; ``redefinition_count`` counts the later definitions with the same
    name, which never move the location.
    """

    name: str
    size: int
    location: Location
    redefinition_count: int = 0
