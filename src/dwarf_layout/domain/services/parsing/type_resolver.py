#!/usr/bin/env python3

"""One-hop type resolution for DWARF type entries.

``resolve`` classifies the single entry at a location into a ``TypeInfo``
variant; it never follows DW_AT_type. ``peel`` follows DW_AT_type exactly
once. A member typed ``const struct foo *`` is therefore rebuilt by the
caller as:

    resolve(member type)  -> PointerType
    peel(PointerType)     -> ConstType
    peel(ConstType)       -> StructType("foo")
    peel(StructType)      -> None

Chain length and cycle policy belong to the caller.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from ....core.debug_info_index import DebugInfoIndex, Entry, Location
from ....core.models import DWAttr, DWTag
from ....errors import MalformedEntryError, UnrecognizedTagError
from ....infrastructure.logging import get_logger
from ...models.dwarf import (
    ANONYMOUS_STRUCT_MARKER,
    ANONYMOUS_STRUCT_NAME,
    ArrayType,
    BaseType,
    ConstType,
    EnumType,
    PointerType,
    StructType,
    SubroutineType,
    TypedefType,
    TypeInfo,
    UnionType,
)
from ...models.dwarf.type_info import POINTER_SIZE
from .array_bounds import ArrayBoundResolver
from .attribute_reader import read_constant, read_name, type_reference

if TYPE_CHECKING:
    from ..struct_registry import StructRegistry

logger = get_logger(__name__)


class TypeResolver:
    """Classifies type entries by tag, one hop at a time.

    Stateless apart from its read-only collaborators: every call opens its
    own cursor, and repeated calls on a location return equal values.
    """

    def __init__(
        self,
        index: DebugInfoIndex,
        registry: "StructRegistry",
        array_bounds: ArrayBoundResolver | None = None,
        pointer_size: int = POINTER_SIZE,
    ):
        """Initialize the resolver.

        Args:
            index: Debug-info index the locations refer to
            registry: Populated struct registry used to size struct types
            array_bounds: Element count lookup (defaults to one over ``index``)
            pointer_size: Size recorded on Pointer and Const types
        """
        self.index = index
        self.registry = registry
        self.array_bounds = array_bounds or ArrayBoundResolver(index)
        self.pointer_size = pointer_size

        self._handlers: dict[str, Callable[[Entry], TypeInfo]] = {
            DWTag.STRUCTURE_TYPE.value: self._resolve_struct,
            DWTag.TYPEDEF.value: self._resolve_typedef,
            DWTag.POINTER_TYPE.value: self._resolve_pointer,
            DWTag.CONST_TYPE.value: self._resolve_const,
            DWTag.BASE_TYPE.value: self._resolve_base,
            DWTag.UNION_TYPE.value: self._resolve_union,
            DWTag.ARRAY_TYPE.value: self._resolve_array,
            DWTag.ENUMERATION_TYPE.value: self._resolve_enum,
            DWTag.SUBROUTINE_TYPE.value: self._resolve_subroutine,
            # Parameters are folded into the subroutine kind; they carry the
            # parameter's type, not a function signature.
            DWTag.FORMAL_PARAMETER.value: self._resolve_subroutine,
        }

    def resolve(self, location: Location) -> TypeInfo:
        """Classify the entry at ``location``.

        Raises:
            OutOfRangeError: If the location is not a valid entry
            UnrecognizedTagError: If the entry's tag is not a handled type tag
            MalformedEntryError: If a required attribute is missing
            TypeMismatchError: If an array entry is not followed by a subrange
        """
        entry = self.index.entry_at(location)
        handler = self._handlers.get(entry.tag)
        if handler is None:
            raise UnrecognizedTagError(entry.tag, location)

        resolved = handler(entry)
        logger.debug(f"Resolved {entry.tag} at {location} -> {resolved}")
        return resolved

    def peel(self, type_info: TypeInfo) -> TypeInfo | None:
        """Resolve the type referenced by ``type_info``'s DW_AT_type.

        Returns:
            The inner type, or None when the entry has no DW_AT_type (for a
            pointer this means ``void *``)

        Raises:
            MalformedEntryError: If DW_AT_type is not a reference
            plus anything ``resolve`` raises for the inner location
        """
        entry = self.index.entry_at(type_info.location)
        inner = type_reference(self.index, entry.location, entry.die)
        if inner is None:
            return None
        return self.resolve(inner)

    def _resolve_struct(self, entry: Entry) -> StructType:
        name = read_name(entry.die)
        ref = self.registry.lookup(name) if name is not None else None
        if ref is None:
            size = read_constant(entry.die, DWAttr.BYTE_SIZE) or 0
            return StructType(ANONYMOUS_STRUCT_NAME, size, entry.location, ANONYMOUS_STRUCT_MARKER)
        # The registered definition, not this entry, is where the members are read from
        return StructType(ref.name, ref.size, ref.location, ref.redefinition_count)

    def _resolve_typedef(self, entry: Entry) -> TypedefType:
        name = self._require_name(entry)
        size = read_constant(entry.die, DWAttr.BYTE_SIZE) or 0
        return TypedefType(name, size, entry.location)

    def _resolve_pointer(self, entry: Entry) -> PointerType:
        return PointerType(entry.location, self.pointer_size)

    def _resolve_const(self, entry: Entry) -> ConstType:
        return ConstType(entry.location, self.pointer_size)

    def _resolve_base(self, entry: Entry) -> BaseType:
        name = self._require_name(entry)
        size = read_constant(entry.die, DWAttr.BYTE_SIZE) or 0
        return BaseType(name, size, entry.location)

    def _resolve_union(self, entry: Entry) -> UnionType:
        return UnionType(entry.location)

    def _resolve_array(self, entry: Entry) -> ArrayType:
        location = entry.location
        return ArrayType(self.array_bounds.bounds(location.unit_index, location.offset), location)

    def _resolve_enum(self, entry: Entry) -> EnumType:
        return EnumType(read_name(entry.die), entry.location)

    def _resolve_subroutine(self, entry: Entry) -> SubroutineType:
        return SubroutineType(entry.location)

    @staticmethod
    def _require_name(entry: Entry) -> str:
        name = read_name(entry.die)
        if name is None:
            raise MalformedEntryError(f"{entry.tag} without a name", entry.location)
        return name
