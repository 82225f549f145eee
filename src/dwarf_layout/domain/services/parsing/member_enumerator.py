#!/usr/bin/env python3

"""Lazy enumeration of a struct's DW_TAG_member children."""

from collections.abc import Iterator

from ....core.debug_info_index import DebugInfoIndex, Entry
from ....core.models import DWAttr, DWTag
from ....errors import DwarfLayoutError
from ....infrastructure.logging import get_logger
from ...models.dwarf import Member, StructRef, TypeInfo
from .attribute_reader import read_constant, read_name, type_reference
from .member_location_parser import parse_location_offset
from .type_resolver import TypeResolver

logger = get_logger(__name__)


class MemberIterator(Iterator[Member]):
    """Yields the members of one struct, in declaration order.

    Each step opens a fresh cursor at the struct, skips the struct entry and
    ``cursor_index`` further entries, and reads the next one. Enumeration ends
    for good at the first child that is not a member, so members declared
    after a nested type definition are not reported:

        struct outer {
            int a;            <- yielded
            int b;            <- yielded
            struct inner {..} <- ends enumeration
            int c;            <- never reached
        };

    An iterator is single-use. Build a new one to enumerate again; it yields
    the same members.
    """

    def __init__(self, index: DebugInfoIndex, resolver: TypeResolver, struct_ref: StructRef):
        self.index = index
        self.resolver = resolver
        self.struct_ref = struct_ref
        self.cursor_index = 0
        self._exhausted = False

    def __iter__(self) -> "MemberIterator":
        return self

    def __next__(self) -> Member:
        step = self.cursor_index
        self.cursor_index += 1

        if self._exhausted:
            raise StopIteration

        entry = self._entry_after(step)
        if entry is None or entry.depth != 1 or entry.tag != DWTag.MEMBER.value:
            self._exhausted = True
            raise StopIteration

        return self._build_member(entry)

    def _entry_after(self, step: int) -> Entry | None:
        location = self.struct_ref.location
        entries = self.index.entries_from(location.unit_index, location.offset)
        next(entries)  # the struct entry itself
        for _ in range(step):
            if next(entries, None) is None:
                return None
        return next(entries, None)

    def _build_member(self, entry: Entry) -> Member:
        die = entry.die
        location_attr = die.attributes.get(DWAttr.DATA_MEMBER_LOCATION.value)
        offset = parse_location_offset(location_attr.value) if location_attr else None
        bit_offset = None

        # DWARF 5 bit-fields carry a bit offset from the start of the struct instead
        data_bit_offset = read_constant(die, DWAttr.DATA_BIT_OFFSET)
        if offset is None and data_bit_offset is not None:
            offset, bit_offset = divmod(data_bit_offset, 8)

        return Member(
            name=read_name(die),
            size=read_constant(die, DWAttr.BYTE_SIZE) or 0,
            type_ref=self._member_type(entry),
            location=entry.location,
            offset=offset,
            bit_size=read_constant(die, DWAttr.BIT_SIZE),
            bit_offset=bit_offset,
        )

    def _member_type(self, entry: Entry) -> TypeInfo | None:
        try:
            type_location = type_reference(self.index, entry.location, entry.die)
            if type_location is None:
                return None
            return self.resolver.resolve(type_location)
        except DwarfLayoutError as e:
            logger.warning(
                f"Cannot resolve type of member '{read_name(entry.die)}' "
                f"in struct '{self.struct_ref.name}': {e}"
            )
            return None
