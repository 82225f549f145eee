#!/usr/bin/env python3

"""Unit tests for offset-addressed traversal of the debug-info units."""

import pytest

from dwarf_layout.core import DebugInfoIndex, Location
from dwarf_layout.errors import OutOfRangeError
from tests.dwarf_builder import base_type, build_dwarf, member, struct_type


@pytest.fixture
def dwarf():
    return build_dwarf(
        [
            struct_type(
                "point",
                8,
                [member("x", "int", 0, label="x"), member("y", "int", 4, label="y")],
                label="point",
            ),
            base_type("int", 4, label="int"),
        ],
        [base_type("char", 1, label="char")],
    )


@pytest.fixture
def index(dwarf):
    return DebugInfoIndex(dwarf)


class TestLocation:
    """Test the Location value type."""

    @pytest.mark.unit
    def test_str_shows_unit_and_hex_offset(self) -> None:
        assert str(Location(2, 0x2D)) == "unit 2 +0x2d"

    @pytest.mark.unit
    def test_equality_and_ordering(self) -> None:
        assert Location(0, 16) == Location(0, 16)
        assert Location(0, 16) < Location(0, 20) < Location(1, 0)
        assert len({Location(0, 16), Location(0, 16)}) == 1


class TestTraversal:
    """Test depth-first cursors over a unit."""

    @pytest.mark.unit
    def test_units_are_materialised_in_order(self, index, dwarf) -> None:
        assert index.units() == tuple(dwarf.units)
        assert index.unit(1) is dwarf.units[1]

    @pytest.mark.unit
    def test_unit_entries_walks_whole_unit(self, index) -> None:
        walked = [(entry.depth, entry.tag) for entry in index.unit_entries(0)]

        assert walked == [
            (0, "DW_TAG_compile_unit"),
            (1, "DW_TAG_structure_type"),
            (2, "DW_TAG_member"),
            (2, "DW_TAG_member"),
            (1, "DW_TAG_base_type"),
        ]

    @pytest.mark.unit
    def test_cursor_depth_is_relative_to_start(self, index, dwarf) -> None:
        start = dwarf.location("point")
        walked = [(entry.depth, entry.tag) for entry in index.entries_from(0, start.offset)]

        assert walked == [
            (0, "DW_TAG_structure_type"),
            (1, "DW_TAG_member"),
            (1, "DW_TAG_member"),
            (0, "DW_TAG_base_type"),
        ]

    @pytest.mark.unit
    def test_entry_locations_are_unit_relative(self, index, dwarf) -> None:
        entries = list(index.unit_entries(1))

        assert entries[1].location == dwarf.location("char")
        assert entries[1].location.unit_index == 1
        assert entries[1].location.offset == dwarf.section_offset("char") - dwarf.units[1].cu_offset

    @pytest.mark.unit
    def test_first_entry_offset_skips_unit_header(self, index) -> None:
        assert index.first_entry_offset(0) == 11
        assert index.first_entry_offset(1) == 11

    @pytest.mark.unit
    def test_entry_at_reads_single_entry(self, index, dwarf) -> None:
        entry = index.entry_at(dwarf.location("y"))

        assert entry.tag == "DW_TAG_member"
        assert entry.depth == 0
        assert entry.die is dwarf.die("y")
        assert entry.attributes["DW_AT_name"].value == b"y"

    @pytest.mark.unit
    def test_fresh_cursors_are_independent(self, index, dwarf) -> None:
        first = index.entries_from(0, dwarf.location("point").offset)
        second = index.entries_from(0, dwarf.location("point").offset)

        next(first)
        next(first)

        assert next(second).tag == "DW_TAG_structure_type"
        assert next(first).die is dwarf.die("y")


class TestOutOfRange:
    """Test rejection of locations that are not entries."""

    @pytest.mark.unit
    def test_unknown_unit_index(self, index) -> None:
        with pytest.raises(OutOfRangeError):
            index.entry_at(Location(5, 16))

    @pytest.mark.unit
    def test_offset_inside_unit_header(self, index) -> None:
        with pytest.raises(OutOfRangeError):
            index.entry_at(Location(0, 0))

    @pytest.mark.unit
    def test_offset_past_unit_end(self, index) -> None:
        with pytest.raises(OutOfRangeError):
            index.entry_at(Location(0, 10_000))

    @pytest.mark.unit
    def test_offset_in_the_middle_of_an_entry(self, index, dwarf) -> None:
        location = dwarf.location("point")

        with pytest.raises(OutOfRangeError) as exc_info:
            index.entry_at(Location(0, location.offset + 1))

        assert exc_info.value.location == Location(0, location.offset + 1)

    @pytest.mark.unit
    def test_offset_on_null_entry(self, index, dwarf) -> None:
        y = dwarf.die("y")
        null_offset = dwarf.location("y").offset + y.size

        with pytest.raises(OutOfRangeError, match="null entry"):
            index.entry_at(Location(0, null_offset))


class TestSectionOffsets:
    """Test mapping of .debug_info offsets to locations."""

    @pytest.mark.unit
    def test_locate_maps_to_owning_unit(self, index, dwarf) -> None:
        assert index.locate(dwarf.section_offset("char")) == dwarf.location("char")
        assert index.locate(dwarf.section_offset("int")) == dwarf.location("int")

    @pytest.mark.unit
    def test_locate_outside_every_unit(self, index, dwarf) -> None:
        end = dwarf.units[-1].cu_offset + dwarf.units[-1].size

        with pytest.raises(OutOfRangeError):
            index.locate(end)
