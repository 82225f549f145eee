"""DWARF constants used by the index and the resolvers.

pyelftools reports tags, attribute names and forms as strings, so the enums
below carry the exact pyelftools spellings as their values.
"""

from enum import Enum


class DWTag(Enum):
    """DWARF tags the struct layout engine looks at."""

    STRUCTURE_TYPE = "DW_TAG_structure_type"
    UNION_TYPE = "DW_TAG_union_type"
    MEMBER = "DW_TAG_member"
    TYPEDEF = "DW_TAG_typedef"
    POINTER_TYPE = "DW_TAG_pointer_type"
    CONST_TYPE = "DW_TAG_const_type"
    BASE_TYPE = "DW_TAG_base_type"
    ARRAY_TYPE = "DW_TAG_array_type"
    SUBRANGE_TYPE = "DW_TAG_subrange_type"
    ENUMERATION_TYPE = "DW_TAG_enumeration_type"
    SUBROUTINE_TYPE = "DW_TAG_subroutine_type"
    FORMAL_PARAMETER = "DW_TAG_formal_parameter"


class DWAttr(Enum):
    """DWARF attribute names the struct layout engine reads."""

    NAME = "DW_AT_name"
    BYTE_SIZE = "DW_AT_byte_size"
    BIT_SIZE = "DW_AT_bit_size"
    DECLARATION = "DW_AT_declaration"
    TYPE = "DW_AT_type"
    UPPER_BOUND = "DW_AT_upper_bound"
    LOWER_BOUND = "DW_AT_lower_bound"
    COUNT = "DW_AT_count"
    DATA_MEMBER_LOCATION = "DW_AT_data_member_location"
    DATA_BIT_OFFSET = "DW_AT_data_bit_offset"


# Reference forms whose value is an offset from the start of the owning unit
UNIT_REFERENCE_FORMS = frozenset(
    {
        "DW_FORM_ref1",
        "DW_FORM_ref2",
        "DW_FORM_ref4",
        "DW_FORM_ref8",
        "DW_FORM_ref_udata",
    }
)

# Reference form whose value is an offset into the whole .debug_info section
SECTION_REFERENCE_FORM = "DW_FORM_ref_addr"

# Constant forms whose all-ones value encodes a bound of -1 (g++ writes the
# upper bound of a zero-length array this way). data1/data2 are left out, an
# all-ones bound there is a real 256 or 65536 element array.
WIDE_CONSTANT_FORM_BITS = {
    "DW_FORM_data4": 32,
    "DW_FORM_data8": 64,
    "DW_FORM_udata": 64,
}
