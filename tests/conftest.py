"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dwarf_layout.application import StructParser
from dwarf_layout.core import SectionLoader
from dwarf_layout.infrastructure.config import Config
from dwarf_layout.infrastructure.config.dwarf_config import DEFAULT_CONFIG
from dwarf_layout.infrastructure.logging import LoggerSetup

ENV_KEYS = ["ELF_FILE_PATH", "OUTPUT_PATH", "LOG_DIR", "VERBOSE"] + [
    f"DWARF_{key}" for key in DEFAULT_CONFIG
]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run in an empty directory with none of the tool's variables set.

    Variables loaded from a .env file during the test are removed afterwards.
    """
    for key in ENV_KEYS:
        # setenv first so the original state is restored even when a .env
        # file sets a variable that was unset before the test
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Undo LoggerSetup.initialize() around a test."""
    LoggerSetup.reset()
    yield
    LoggerSetup.reset()


@pytest.fixture(scope="session")
def config() -> Config:
    """Load configuration from environment."""
    return Config.from_env()


@pytest.fixture(scope="session")
def elf_file_path(config: Config) -> Path:
    """
    Return path to ELF file, skipping test if not available.
    """
    if config.elf_file_path is None or not config.elf_file_path.exists():
        pytest.skip(f"ELF file not available (ELF_FILE_PATH={config.elf_file_path})")
    return config.elf_file_path


@pytest.fixture(scope="module")
def elf_struct_parser(elf_file_path: Path) -> Generator[StructParser, None, None]:
    """
    StructParser over the real ELF file with all structs loaded.

    Uses module scope because the struct scan walks every unit once.
    """
    with SectionLoader(elf_file_path) as loader:
        parser = StructParser(loader.load_dwarf_info())
        parser.load_all_structs()
        yield parser
