#!/usr/bin/env python3

"""Registry of named struct definitions discovered across all units."""

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from elftools.dwarf.die import DIE

from ...core.debug_info_index import DebugInfoIndex, Entry
from ...core.models import DWAttr, DWTag
from ...infrastructure.logging import ProgressTracker, get_logger, log_timing
from ..models.dwarf import StructRef
from .parsing.attribute_reader import decode_name

logger = get_logger(__name__)


def scan_struct_attributes(die: DIE) -> tuple[str | None, int | None] | None:
    """Capture name and byte size of a struct entry in attribute storage order.

    The scan gives up on the entry as soon as a DW_AT_declaration is seen and
    stops early once both name and size are captured. A declaration flag
    stored after both of them is therefore never seen and the entry is
    treated as a full definition.

    Returns:
        (name, size), either possibly None, or None for a declaration
    """
    name: str | None = None
    size: int | None = None

    for attr_name, attr in die.attributes.items():
        if attr_name == DWAttr.NAME.value:
            name = decode_name(attr.value)
        elif attr_name == DWAttr.BYTE_SIZE.value:
            if isinstance(attr.value, int):
                size = attr.value
        elif attr_name == DWAttr.DECLARATION.value:
            return None

        if name is not None and size is not None:
            break

    return name, size


class StructRegistry:
    """Name-keyed struct definitions, populated once and read-only afterwards.

    Entries are keyed by struct name. The first full definition of a name
    fixes its location; later definitions only bump ``redefinition_count``.
    Forward declarations and unnamed structs are never registered.
    """

    def __init__(self) -> None:
        self._structs: dict[str, StructRef] = {}
        self._view: Mapping[str, StructRef] = MappingProxyType(self._structs)
        self._populated = False

    @property
    def structs(self) -> Mapping[str, StructRef]:
        """Read-only view of the registry, keyed by struct name."""
        return self._view

    @property
    def is_populated(self) -> bool:
        return self._populated

    def lookup(self, name: str) -> StructRef | None:
        return self._structs.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._structs

    def __len__(self) -> int:
        return len(self._structs)

    @log_timing
    def populate(self, index: DebugInfoIndex, report_every: int = 100) -> None:
        """Scan every unit once and register each named struct definition.

        Calling this again after a successful scan does nothing. A scan that
        fails leaves the registry empty; the error is propagated.

        Args:
            index: Debug-info index to scan
            report_every: Log an INFO progress line every N units
        """
        if self._populated:
            logger.debug("Struct registry already populated, skipping rescan")
            return

        found: dict[str, StructRef] = {}
        tracker = ProgressTracker(logger, report_every)

        with tracker.track_operation("struct registry scan"):
            for unit_index, cu in enumerate(index.units()):
                with tracker.track_cu(cu):
                    for entry in index.unit_entries(unit_index):
                        tracker.count_die()
                        if entry.tag != DWTag.STRUCTURE_TYPE.value:
                            continue
                        if self._register(found, entry):
                            tracker.count_struct()

        self._structs.update(found)
        self._populated = True

        redefined = sum(1 for ref in found.values() if ref.redefinition_count)
        tracker.report_summary()
        logger.info(f"Registered {len(found)} unique structs ({redefined} redefined across units)")

    @staticmethod
    def _register(found: dict[str, StructRef], entry: Entry) -> bool:
        scanned = scan_struct_attributes(entry.die)
        if scanned is None:
            logger.debug(f"Skipping struct declaration at {entry.location}")
            return False

        name, size = scanned
        if name is None:
            return False

        existing = found.get(name)
        if existing is None:
            found[name] = StructRef(name=name, size=size or 0, location=entry.location)
            logger.debug(f"Registered struct '{name}' ({size or 0} bytes) at {entry.location}")
        else:
            found[name] = replace(existing, redefinition_count=existing.redefinition_count + 1)
        return True
