"""Configuration management for the dwarf-layout tool."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """Configuration for the dwarf-layout tool."""

    elf_file_path: Optional[Path]
    output_path: Optional[Path] = None
    verbose: bool = False
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        elf_file_path_str = os.getenv("ELF_FILE_PATH")
        output_path_str = os.getenv("OUTPUT_PATH")
        log_dir_str = os.getenv("LOG_DIR")
        verbose_str = os.getenv("VERBOSE", "false").lower()

        return cls(
            elf_file_path=Path(elf_file_path_str) if elf_file_path_str else None,
            output_path=Path(output_path_str) if output_path_str else None,
            verbose=verbose_str in ("true", "1", "yes"),
            log_dir=Path(log_dir_str) if log_dir_str else None,
        )

    @classmethod
    def from_args(
        cls,
        elf_file_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        verbose: Optional[bool] = None,
        log_dir: Optional[Path] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            elf_file_path: Path to ELF file (overrides env)
            output_path: File to write declarations to (overrides env)
            verbose: Enable verbose output (overrides env)
            log_dir: Directory for the debug log file (overrides env)

        Returns:
            Config object
        """
        config = cls.from_env()

        if elf_file_path is not None:
            config.elf_file_path = elf_file_path
        if output_path is not None:
            config.output_path = output_path
        if verbose:
            config.verbose = verbose
        if log_dir is not None:
            config.log_dir = log_dir

        return config

    def validate(self) -> Path:
        """
        Validate the configuration.

        Returns:
            The ELF file path, checked to name an existing file

        Raises:
            ValueError: If configuration is invalid
        """
        if self.elf_file_path is None:
            raise ValueError("No ELF file given (pass a path or set ELF_FILE_PATH)")

        if not self.elf_file_path.exists():
            raise ValueError(f"ELF file not found: {self.elf_file_path}")

        if not self.elf_file_path.is_file():
            raise ValueError(f"Not a file: {self.elf_file_path}")

        return self.elf_file_path

    def ensure_output_dir(self) -> None:
        """Create the directory holding the output file if it doesn't exist."""
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
