#!/usr/bin/env python3

"""Resolved type variants.

``TypeInfo`` is a closed union of small frozen dataclasses, one per kind of
type entry the resolver classifies. Consumers dispatch on the variant class
(``match`` or ``isinstance``) or on its ``kind``. Every variant keeps the
location it was resolved from so it can be peeled one more hop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from ....core.debug_info_index import Location

# Default width of Pointer and Const types (64-bit target assumption)
POINTER_SIZE = 8

# redefinition_count of a struct that has no registry entry
ANONYMOUS_STRUCT_MARKER = -1
ANONYMOUS_STRUCT_NAME = "void"


class TypeKind(Enum):
    """Kinds of resolved types."""

    STRUCT = "struct"
    TYPEDEF = "typedef"
    POINTER = "pointer"
    CONST = "const"
    BASE = "base"
    UNION = "union"
    ARRAY = "array"
    ENUM = "enum"
    SUBROUTINE = "subroutine"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StructType:
    """A struct, sized from its registry entry."""

    kind: ClassVar[TypeKind] = TypeKind.STRUCT

    name: str
    size: int
    location: Location
    redefinition_count: int = 0

    @property
    def is_anonymous(self) -> bool:
        """True for the synthetic struct returned when no registry entry matches."""
        return self.redefinition_count == ANONYMOUS_STRUCT_MARKER


@dataclass(frozen=True)
class TypedefType:
    kind: ClassVar[TypeKind] = TypeKind.TYPEDEF

    name: str
    size: int
    location: Location


@dataclass(frozen=True)
class PointerType:
    kind: ClassVar[TypeKind] = TypeKind.POINTER

    location: Location
    size: int = POINTER_SIZE


@dataclass(frozen=True)
class ConstType:
    kind: ClassVar[TypeKind] = TypeKind.CONST

    location: Location
    size: int = POINTER_SIZE


@dataclass(frozen=True)
class BaseType:
    kind: ClassVar[TypeKind] = TypeKind.BASE

    name: str
    size: int
    location: Location


@dataclass(frozen=True)
class UnionType:
    kind: ClassVar[TypeKind] = TypeKind.UNION

    location: Location
    size: int = 0


@dataclass(frozen=True)
class ArrayType:
    """An array; ``element_count`` is a number of elements, not bytes."""

    kind: ClassVar[TypeKind] = TypeKind.ARRAY

    element_count: int
    location: Location


@dataclass(frozen=True)
class EnumType:
    kind: ClassVar[TypeKind] = TypeKind.ENUM

    name: str | None
    location: Location
    size: int = 0


@dataclass(frozen=True)
class SubroutineType:
    kind: ClassVar[TypeKind] = TypeKind.SUBROUTINE

    location: Location
    size: int = 0


@dataclass(frozen=True)
class UnknownType:
    """Placeholder a consumer substitutes for an entry it could not classify."""

    kind: ClassVar[TypeKind] = TypeKind.UNKNOWN

    location: Location


TypeInfo = Union[
    StructType,
    TypedefType,
    PointerType,
    ConstType,
    BaseType,
    UnionType,
    ArrayType,
    EnumType,
    SubroutineType,
    UnknownType,
]
