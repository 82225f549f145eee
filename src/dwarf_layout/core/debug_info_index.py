"""Offset-addressed access to the compilation units of .debug_info.

The debug-info tree is never materialised. An entry is addressed by a
``Location`` (unit index + offset inside that unit) and every lookup starts a
fresh forward, depth-first cursor at that offset:

    unit 0:  0x0b  DW_TAG_compile_unit        depth 0
             0x2d    DW_TAG_structure_type    depth 1
             0x36      DW_TAG_member          depth 2
             0x42      DW_TAG_member          depth 2
             0x4e      <null>                 (skipped, closes the struct)
             0x4f    DW_TAG_base_type         depth 1

A cursor started at 0x2d yields the struct at depth 0, its members at depth 1
and the base type at depth 0 again. Nulls only adjust depth. The cost of any
lookup is the distance walked from the cursor start, never a random access.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from elftools.dwarf.compileunit import CompileUnit
from elftools.dwarf.die import DIE
from elftools.dwarf.dwarfinfo import DWARFInfo

from ..errors import OutOfRangeError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class Location:
    """Address of one entry: unit index plus unit-relative offset."""

    unit_index: int
    offset: int

    def __str__(self) -> str:
        return f"unit {self.unit_index} +0x{self.offset:x}"


@dataclass(frozen=True)
class Entry:
    """One step of a depth-first cursor."""

    depth: int
    die: DIE
    location: Location

    @property
    def tag(self) -> str:
        return self.die.tag

    @property
    def attributes(self) -> Any:
        return self.die.attributes


class DebugInfoIndex:
    """Sequence of compilation units with resumable depth-first traversal."""

    def __init__(self, dwarf_info: DWARFInfo):
        """Build the unit list once.

        Args:
            dwarf_info: DWARF information structure from pyelftools
        """
        self.dwarf_info = dwarf_info
        self._units: tuple[CompileUnit, ...] = tuple(dwarf_info.iter_CUs())
        logger.debug(f"Indexed {len(self._units)} compilation units")

    def units(self) -> tuple[CompileUnit, ...]:
        """All compilation units, in section order."""
        return self._units

    def unit(self, unit_index: int) -> CompileUnit:
        """Return the unit handle for an index.

        Raises:
            OutOfRangeError: If no unit has that index
        """
        if not 0 <= unit_index < len(self._units):
            raise OutOfRangeError(
                f"Unit index {unit_index} out of range ({len(self._units)} units)"
            )
        return self._units[unit_index]

    def first_entry_offset(self, unit_index: int) -> int:
        """Unit-relative offset of the unit's top entry (just past its header)."""
        cu = self.unit(unit_index)
        return cu.cu_die_offset - cu.cu_offset

    def entries_from(self, unit_index: int, offset: int) -> Iterator[Entry]:
        """Walk entries depth-first starting at ``offset``.

        The first yielded entry is the one at ``offset`` (depth 0). Null
        entries close sibling lists and are not yielded. The walk continues
        past the starting entry's subtree until the end of the unit.

        Raises:
            OutOfRangeError: If ``offset`` does not land on a non-null entry
        """
        cu = self.unit(unit_index)
        end = cu.cu_offset + cu.size
        position = self._section_offset(cu, Location(unit_index, offset))

        first = self._read_die(cu, position, Location(unit_index, offset))
        if first.is_null():
            raise OutOfRangeError("Offset lands on a null entry", Location(unit_index, offset))

        depth = 0
        die = first
        while True:
            if die.is_null():
                depth -= 1
            else:
                yield Entry(depth, die, Location(unit_index, die.offset - cu.cu_offset))
                if die.has_children:
                    depth += 1

            position = die.offset + die.size
            if position >= end:
                return
            die = self._read_die(cu, position, Location(unit_index, position - cu.cu_offset))

    def unit_entries(self, unit_index: int) -> Iterator[Entry]:
        """Walk every entry of one unit, starting at its top entry."""
        return self.entries_from(unit_index, self.first_entry_offset(unit_index))

    def entry_at(self, location: Location) -> Entry:
        """Read the single entry at a location.

        Raises:
            OutOfRangeError: If the location is not a valid, non-null entry
        """
        return next(self.entries_from(location.unit_index, location.offset))

    def locate(self, section_offset: int) -> Location:
        """Map an offset into the whole .debug_info section to a Location.

        Raises:
            OutOfRangeError: If no unit covers the offset
        """
        for unit_index, cu in enumerate(self._units):
            if cu.cu_offset <= section_offset < cu.cu_offset + cu.size:
                return Location(unit_index, section_offset - cu.cu_offset)
        raise OutOfRangeError(f"Section offset 0x{section_offset:x} is not inside any unit")

    def _section_offset(self, cu: CompileUnit, location: Location) -> int:
        position = cu.cu_offset + location.offset
        if not cu.cu_die_offset <= position < cu.cu_offset + cu.size:
            raise OutOfRangeError("Offset outside the unit's entries", location)
        return position

    def _read_die(self, cu: CompileUnit, position: int, location: Location) -> DIE:
        try:
            return cu.get_DIE_from_refaddr(position)
        except Exception as e:
            raise OutOfRangeError(f"Cannot decode an entry: {e}", location) from e
