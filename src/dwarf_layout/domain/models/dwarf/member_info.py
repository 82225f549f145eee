#!/usr/bin/env python3

"""Struct member model."""

from dataclasses import dataclass

from ....core.debug_info_index import Location
from .type_info import TypeInfo


@dataclass(frozen=True)
class Member:
    """One DW_TAG_member child of a struct."""

    name: str | None  # None for unnamed members (e.g. padding bit-fields)
    size: int
    type_ref: TypeInfo | None  # None only when the member type could not be resolved
    location: Location
    offset: int | None = None  # DW_AT_data_member_location, in bytes
    bit_size: int | None = None
    bit_offset: int | None = None  # bit inside the byte at offset, from DW_AT_data_bit_offset
