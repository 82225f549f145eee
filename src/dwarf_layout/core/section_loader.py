"""ELF section loading for DWARF struct extraction.

Opens the binary with pyelftools and hands out either raw debug section bytes
or the ready-made pyelftools DWARF context built from them.
"""

from pathlib import Path
from typing import BinaryIO, Optional

from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.elf.elffile import ELFFile

from ..errors import LoadFailureError, SectionMissingError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)

# Well-known DWARF sections the resolver reads through pyelftools
DEBUG_SECTION_NAMES = (
    ".debug_info",
    ".debug_abbrev",
    ".debug_str",
    ".debug_line_str",
    ".debug_str_offsets",
)


class SectionLoader:
    """Opens an ELF binary and exposes its debug sections."""

    def __init__(self, elf_path: Path) -> None:
        """
        Initialize the loader.

        Args:
            elf_path: Path to the ELF file
        """
        self.elf_path = elf_path
        self.elf_file: Optional[ELFFile] = None
        self._file_handle: Optional[BinaryIO] = None

    def open(self) -> None:
        """Open and validate the ELF file.

        Raises:
            LoadFailureError: If the file is missing or is not a valid ELF image
        """
        if not self.elf_path.is_file():
            raise LoadFailureError(f"ELF file not found: {self.elf_path}")

        try:
            # Keep the handle open for the lifetime of the loader: pyelftools
            # reads sections lazily from the stream.
            self._file_handle = open(self.elf_path, "rb")
            self.elf_file = ELFFile(self._file_handle)
        except Exception as e:
            self.close()
            raise LoadFailureError(f"Failed to open ELF file {self.elf_path}: {e}") from e

        logger.debug(
            f"Opened ELF file: {self.elf_path} "
            f"(arch: {self.elf_file.get_machine_arch()}, class: ELF{self.elf_file.elfclass})"
        )
        if self.elf_file.elfclass != 64:
            logger.warning(
                f"{self.elf_path} is a {self.elf_file.elfclass}-bit image; "
                "pointer sizes are reported for a 64-bit target"
            )

    def section_bytes(self, section_name: str) -> bytes:
        """Return the raw bytes of a named section.

        Args:
            section_name: Section name, e.g. ".debug_info"

        Returns:
            Section contents, or an empty byte string if the section is absent
        """
        elf_file = self._require_open()
        section = elf_file.get_section_by_name(section_name)
        if section is None:
            return b""
        return bytes(section.data())

    def load_dwarf_info(self) -> DWARFInfo:
        """Build the pyelftools DWARF context for the opened binary.

        Returns:
            DWARFInfo over the binary's debug sections

        Raises:
            SectionMissingError: If the binary carries no .debug_info section
            LoadFailureError: If the debug sections cannot be parsed
        """
        elf_file = self._require_open()

        present = [name for name in DEBUG_SECTION_NAMES if self.section_bytes(name)]
        logger.debug(f"Debug sections present: {', '.join(present) or 'none'}")
        if ".debug_info" not in present or not elf_file.has_dwarf_info():
            raise SectionMissingError(
                f"No DWARF debug information found in {self.elf_path} "
                "(binary built without -g or stripped?)"
            )

        try:
            dwarf_info = elf_file.get_dwarf_info()
        except Exception as e:
            raise LoadFailureError(f"Failed to load DWARF info from {self.elf_path}: {e}") from e

        logger.info(f"DWARF info loaded from {self.elf_path}")
        return dwarf_info

    def _require_open(self) -> ELFFile:
        if self.elf_file is None:
            raise RuntimeError("ELF file not opened. Call open() first.")
        return self.elf_file

    def close(self) -> None:
        """Close the ELF file."""
        if self._file_handle is not None:
            self._file_handle.close()
            self._file_handle = None
        self.elf_file = None

    def __enter__(self) -> "SectionLoader":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
