#!/usr/bin/env python3

"""DW_AT_data_member_location decoding.

DWARF 3 and later producers emit the member offset as a plain constant.
DWARF 2 producers emit a location expression instead, almost always a single
``DW_OP_plus_uconst`` whose ULEB128 operand is the offset:

    DWARF4:  DW_AT_data_member_location  16           -> 16
    DWARF2:  DW_AT_data_member_location  [0x23, 0x10] -> 16
    DWARF2:  DW_AT_data_member_location  [0x23, 0x90, 0x03] -> 400
"""

from collections.abc import Sequence

from ....infrastructure.logging import get_logger

logger = get_logger(__name__)

# DWARF operation codes used in member location expressions
DW_OP_PLUS_UCONST = 0x23


def _decode_uleb128(data: Sequence[int]) -> int | None:
    """Decode an unsigned LEB128 number occupying all of ``data``."""
    result = 0
    shift = 0
    for position, byte in enumerate(data):
        if not isinstance(byte, int):
            return None
        result |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            # Trailing bytes mean the expression has more than one operation
            return result if position == len(data) - 1 else None
    return None


def _parse_location_expression(expression: Sequence[int]) -> int | None:
    if not expression:
        logger.debug("Empty location expression, cannot extract offset")
        return None

    if expression[0] == DW_OP_PLUS_UCONST:
        offset = _decode_uleb128(expression[1:])
        if offset is None:
            logger.warning(f"Cannot decode DW_OP_plus_uconst operand in {list(expression)}")
        return offset

    logger.warning(
        f"Unsupported member location expression {list(expression)} "
        f"(opcode 0x{expression[0]:x})"
    )
    return None


def parse_location_offset(attr_value: int | Sequence[int] | None) -> int | None:
    """Extract a member's byte offset from DW_AT_data_member_location.

    Args:
        attr_value: The attribute value as decoded by pyelftools: an integer
            constant, a location expression as a list of bytes, or None

    Returns:
        Offset in bytes, or None if it cannot be determined

    Examples:
        >>> parse_location_offset(8)
        8
        >>> parse_location_offset([0x23, 0x10])
        16
        >>> parse_location_offset(None) is None
        True
    """
    if attr_value is None:
        return None

    if isinstance(attr_value, bool):
        return None

    if isinstance(attr_value, int):
        return attr_value

    if isinstance(attr_value, (list, tuple, bytes)):
        return _parse_location_expression(attr_value)

    logger.warning(
        f"Unknown attribute value type for member location: {type(attr_value).__name__}"
    )
    return None
