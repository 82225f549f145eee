#!/usr/bin/env python3

"""Element count lookup for DW_TAG_array_type entries.

The count lives on the DW_TAG_subrange_type entry that directly follows the
array entry (its first child). Only that first subrange is read, so the
second dimension of ``int m[3][4]`` is ignored and the result is 3.
"""

from elftools.dwarf.die import DIE

from ....core.debug_info_index import DebugInfoIndex, Location
from ....core.models import WIDE_CONSTANT_FORM_BITS, DWAttr, DWTag
from ....errors import TypeMismatchError
from ....infrastructure.logging import get_logger
from .attribute_reader import read_constant

logger = get_logger(__name__)


class ArrayBoundResolver:
    """Reads the element count of an array from its subrange entry."""

    def __init__(self, index: DebugInfoIndex):
        self.index = index

    def bounds(self, unit_index: int, array_offset: int) -> int:
        """Return the number of elements of the array at ``array_offset``.

        The count is ``DW_AT_count`` when present, otherwise
        ``upper_bound - lower_bound + 1`` with a lower bound of 0 unless one
        is given. A subrange without bounds (``int tail[]``) and an array
        entry without children both give 0, so "empty" and "unknown length"
        are indistinguishable. An all-ones upper bound in a 32 or 64-bit form
        is read as -1, which is how g++ encodes ``char z[0]``, and also gives 0.

        Raises:
            TypeMismatchError: If the entry is not an array, or its first
                child is not a subrange
        """
        location = Location(unit_index, array_offset)
        entries = self.index.entries_from(unit_index, array_offset)

        array_entry = next(entries)
        if array_entry.tag != DWTag.ARRAY_TYPE.value:
            raise TypeMismatchError(f"Expected an array type, found {array_entry.tag}", location)

        subrange = next(entries, None)
        if subrange is None or subrange.depth != 1:
            logger.debug(f"Array at {location} has no subrange, element count unknown")
            return 0

        if subrange.tag != DWTag.SUBRANGE_TYPE.value:
            raise TypeMismatchError(
                f"Expected a subrange after the array, found {subrange.tag}", subrange.location
            )

        count = read_constant(subrange.die, DWAttr.COUNT)
        if count is not None:
            return count

        upper_bound = self._upper_bound(subrange.die)
        if upper_bound is None:
            logger.debug(f"Subrange at {subrange.location} has no upper bound")
            return 0

        lower_bound = read_constant(subrange.die, DWAttr.LOWER_BOUND) or 0
        return max(upper_bound - lower_bound + 1, 0)

    @staticmethod
    def _upper_bound(die: DIE) -> int | None:
        upper_bound = read_constant(die, DWAttr.UPPER_BOUND)
        if upper_bound is None:
            return None

        width = WIDE_CONSTANT_FORM_BITS.get(die.attributes[DWAttr.UPPER_BOUND.value].form)
        if width is not None and upper_bound == (1 << width) - 1:
            return -1
        return upper_bound
