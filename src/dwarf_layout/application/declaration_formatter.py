#!/usr/bin/env python3

"""C declaration rendering of struct layouts.

Builds pahole-style listings by peeling each member type one hop at a time:

    struct sk_buff {
        struct sk_buff *next;  /* offset: 0 */
        unsigned char cb[48];  /* offset: 40 */
        void (*destructor)();  /* offset: 96 */
        __u8 pkt_type : 3;
    };  /* size: 232 */

Pointer and const placement follows the peel order, so ``char *const`` and
``const char *`` both render as ``const char *``.
"""

from ..domain.models.dwarf import (
    ArrayType,
    BaseType,
    ConstType,
    EnumType,
    Member,
    PointerType,
    StructRef,
    StructType,
    SubroutineType,
    TypedefType,
    TypeInfo,
    UnionType,
    UnknownType,
)
from ..errors import DwarfLayoutError, UnrecognizedTagError
from ..infrastructure.logging import get_logger
from .struct_parser import StructParser

logger = get_logger(__name__)

UNKNOWN_TYPE_TEXT = "? "


class DeclarationFormatter:
    """Renders structs and members as C declarations."""

    def __init__(self, parser: StructParser, max_depth: int = 16, indent: str = "    "):
        """Initialize the formatter.

        Args:
            parser: Parser with structs already loaded
            max_depth: Longest chain of peels followed for one member type
            indent: Prefix of each member line
        """
        self.parser = parser
        self.max_depth = max_depth
        self.indent = indent

    def format_struct(self, struct_ref: StructRef) -> str:
        """Render a full struct declaration.

        Raises:
            DwarfLayoutError: If the struct's own entry cannot be read
        """
        lines = [f"struct {struct_ref.name} {{"]
        for member in self.parser.enumerate_members(struct_ref):
            lines.append(self.indent + self.format_member(member))
        lines.append(f"}};  /* size: {struct_ref.size} */")
        return "\n".join(lines)

    def format_member(self, member: Member) -> str:
        """Render one member line, without indentation."""
        name = member.name or ""
        text = self._member_declarator(member, name)

        if member.bit_size is not None:
            text += f" : {member.bit_size}"
        text += ";"
        if member.offset is not None and member.bit_offset:
            text += f"  /* offset: {member.offset}, bit: {member.bit_offset} */"
        elif member.offset is not None:
            text += f"  /* offset: {member.offset} */"
        return text

    def type_prefix(self, type_info: TypeInfo | None, depth: int = 0) -> str:
        """Return the C text preceding a declarator name for ``type_info``.

        The result ends in a space or ``*`` so a name can be appended as is.
        Unresolvable inner types and chains longer than ``max_depth`` render
        as ``?``.
        """
        if depth > self.max_depth:
            logger.warning(f"Type chain deeper than {self.max_depth} hops, truncated")
            return UNKNOWN_TYPE_TEXT

        if type_info is None:
            return "void "
        if isinstance(type_info, (BaseType, TypedefType)):
            return f"{type_info.name} "
        if isinstance(type_info, StructType):
            return "struct {...} " if type_info.is_anonymous else f"struct {type_info.name} "
        if isinstance(type_info, UnionType):
            return "union {...} "
        if isinstance(type_info, ConstType):
            return "const " + self.type_prefix(self._peel(type_info), depth + 1)
        if isinstance(type_info, PointerType):
            inner = self._peel(type_info)
            if inner is None:
                return "void *"
            return self.type_prefix(inner, depth + 1) + "*"
        if isinstance(type_info, EnumType):
            if type_info.name is not None:
                return f"enum {type_info.name} "
            # Anonymous enums carry their underlying integer type
            inner = self._peel(type_info)
            if inner is None:
                return "enum {...} "
            return "enum " + self.type_prefix(inner, depth + 1)
        if isinstance(type_info, (ArrayType, SubroutineType)):
            # Element type for arrays, return type for subroutines
            return self.type_prefix(self._peel(type_info), depth + 1)
        return UNKNOWN_TYPE_TEXT

    def _member_declarator(self, member: Member, name: str) -> str:
        type_ref = member.type_ref
        if type_ref is None:
            return f"{UNKNOWN_TYPE_TEXT}{name}"

        try:
            if isinstance(type_ref, ArrayType):
                return f"{self.type_prefix(type_ref)}{name}[{type_ref.element_count}]"

            if isinstance(type_ref, PointerType):
                pointee = self._peel(type_ref)
                if isinstance(pointee, SubroutineType):
                    return f"{self.type_prefix(pointee, 1)}(*{name})()"

            return f"{self.type_prefix(type_ref)}{name}"
        except DwarfLayoutError as e:
            logger.warning(f"Cannot render type of member '{name}' at {member.location}: {e}")
            return f"{UNKNOWN_TYPE_TEXT}{name}"

    def _peel(self, type_info: TypeInfo) -> TypeInfo | None:
        try:
            return self.parser.peel(type_info)
        except UnrecognizedTagError as e:
            logger.debug(f"Rendering unrecognized type as unknown: {e}")
            return UnknownType(e.location or type_info.location)
