#!/usr/bin/env python3

"""Error kinds raised while indexing and resolving DWARF debug information.

Loading errors (``LoadFailureError`` and ``SectionMissingError``) are fatal: no
analysis is possible without the debug sections. Every other error is scoped to
the struct or member being resolved, and callers are expected to skip that item
and carry on.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.debug_info_index import Location


class DwarfLayoutError(Exception):
    """Base class for all errors raised by dwarf_layout."""

    def __init__(self, message: str, location: "Location | None" = None):
        if location is not None:
            message = f"{message} (at {location})"
        super().__init__(message)
        self.location = location


class MalformedEntryError(DwarfLayoutError):
    """An attribute form does not match what the entry kind requires."""


class UnrecognizedTagError(DwarfLayoutError):
    """The entry tag is outside the set of tags the resolver classifies."""

    def __init__(self, tag: str | None, location: "Location | None" = None):
        super().__init__(f"Unrecognized tag {tag}", location)
        self.tag = tag


class OutOfRangeError(DwarfLayoutError):
    """An offset does not land on a valid entry of the addressed unit."""


class TypeMismatchError(DwarfLayoutError):
    """An entry has a different tag than its position requires."""


class LoadFailureError(DwarfLayoutError):
    """The binary could not be opened or its debug information parsed."""


class SectionMissingError(LoadFailureError):
    """A required debug section is absent from the binary."""
