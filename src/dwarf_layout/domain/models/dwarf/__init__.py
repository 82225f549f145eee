#!/usr/bin/env python3

"""DWARF struct layout domain models."""

from .member_info import Member
from .struct_ref import StructRef
from .type_info import (
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
    TypeKind,
    UnionType,
    UnknownType,
)

__all__ = [
    "ANONYMOUS_STRUCT_MARKER",
    "ANONYMOUS_STRUCT_NAME",
    "ArrayType",
    "BaseType",
    "ConstType",
    "EnumType",
    "Member",
    "PointerType",
    "StructRef",
    "StructType",
    "SubroutineType",
    "TypeInfo",
    "TypeKind",
    "TypedefType",
    "UnionType",
    "UnknownType",
]
