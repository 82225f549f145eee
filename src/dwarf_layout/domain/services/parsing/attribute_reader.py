#!/usr/bin/env python3

"""Attribute decoding shared by the registry, resolvers and enumerator.

pyelftools hands out raw attribute values: names are ``bytes``, constants are
``int`` and references are integers whose meaning depends on the form. These
helpers turn them into the values the domain works with and never guess when
the form is unexpected.
"""

from typing import Any

from elftools.dwarf.die import DIE

from ....core.debug_info_index import DebugInfoIndex, Location
from ....core.models import SECTION_REFERENCE_FORM, UNIT_REFERENCE_FORMS, DWAttr
from ....errors import MalformedEntryError


def decode_name(value: Any) -> str | None:
    """Decode a DW_AT_name value, replacing undecodable bytes.

    Returns:
        The name, or None if the value is not a string form
    """
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    return None


def read_name(die: DIE) -> str | None:
    """Return the DW_AT_name of an entry, or None if it has none."""
    attr = die.attributes.get(DWAttr.NAME.value)
    if attr is None:
        return None
    return decode_name(attr.value)


def read_constant(die: DIE, attr_name: DWAttr) -> int | None:
    """Return an integer-valued attribute, or None if absent or not a constant.

    Location expressions and other block forms decode to lists in pyelftools
    and are reported as None here.
    """
    attr = die.attributes.get(attr_name.value)
    if attr is None or isinstance(attr.value, bool) or not isinstance(attr.value, int):
        return None
    return attr.value


def reference_location(index: DebugInfoIndex, origin: Location, attr: Any) -> Location:
    """Turn a reference attribute into the Location it points at.

    Args:
        index: Index used to map section-relative references to their unit
        origin: Location of the entry holding the attribute
        attr: pyelftools attribute value (``form`` and ``value``)

    Raises:
        MalformedEntryError: If the attribute is not a reference into .debug_info
    """
    if attr.form in UNIT_REFERENCE_FORMS:
        return Location(origin.unit_index, attr.value)
    if attr.form == SECTION_REFERENCE_FORM:
        return index.locate(attr.value)
    raise MalformedEntryError(f"Type reference has unsupported form {attr.form}", origin)


def type_reference(index: DebugInfoIndex, origin: Location, die: DIE) -> Location | None:
    """Return the Location named by an entry's DW_AT_type, or None if it has none."""
    attr = die.attributes.get(DWAttr.TYPE.value)
    if attr is None:
        return None
    return reference_location(index, origin, attr)
