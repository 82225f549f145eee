#!/usr/bin/env python3

"""Struct layout parser (Application Layer).

Wires the debug-info index, the struct registry and the resolvers together
behind the small surface the command line tool uses:

    parser = StructParser(dwarf_info)
    parser.load_all_structs()
    for member in parser.enumerate_members(parser.structs()["foo"]):
        ...
"""

from collections.abc import Mapping
from typing import Any

from elftools.dwarf.dwarfinfo import DWARFInfo

from ..core.debug_info_index import DebugInfoIndex, Location
from ..domain.models.dwarf import StructRef, TypeInfo
from ..domain.services import StructRegistry
from ..domain.services.parsing import ArrayBoundResolver, MemberIterator, TypeResolver
from ..infrastructure.config import get_config
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class StructParser:
    """Entry point for struct discovery, member enumeration and type resolution.

    ``load_all_structs`` must run once before anything is resolved. After that
    the parser only reads, and every call opens its own cursor.
    """

    def __init__(self, dwarf_info: DWARFInfo, config: dict[str, Any] | None = None):
        """Initialize the parser.

        Args:
            dwarf_info: DWARF information structure from pyelftools
            config: Tuning values (defaults to ``get_config()``)
        """
        self.config = config if config is not None else get_config()
        self.index = DebugInfoIndex(dwarf_info)
        self.registry = StructRegistry()
        self.type_resolver = TypeResolver(
            self.index,
            self.registry,
            ArrayBoundResolver(self.index),
            pointer_size=self.config["POINTER_SIZE"],
        )
        logger.debug(f"StructParser initialized over {len(self.index.units())} units")

    def load_all_structs(self) -> None:
        """Scan every unit and register each named struct definition.

        Raises:
            DwarfLayoutError: If an entry cannot be decoded during the scan
        """
        self.registry.populate(self.index, report_every=self.config["PROGRESS_EVERY_CUS"])

    def structs(self) -> Mapping[str, StructRef]:
        """Read-only view of the registered structs, keyed by name."""
        return self.registry.structs

    def enumerate_members(self, struct_ref: StructRef) -> MemberIterator:
        """Return a fresh, single-use iterator over a struct's members."""
        self._require_loaded()
        return MemberIterator(self.index, self.type_resolver, struct_ref)

    def resolve_type(self, location: Location) -> TypeInfo:
        """Classify the type entry at ``location``."""
        self._require_loaded()
        return self.type_resolver.resolve(location)

    def peel(self, type_info: TypeInfo) -> TypeInfo | None:
        """Resolve the type ``type_info`` refers to, or None if it refers to none."""
        self._require_loaded()
        return self.type_resolver.peel(type_info)

    def _require_loaded(self) -> None:
        if not self.registry.is_populated:
            raise RuntimeError("Structs not loaded. Call load_all_structs() first.")
