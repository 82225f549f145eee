"""Main entry point for the dwarf-layout tool."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .application import DeclarationFormatter, StructParser
from .core import SectionLoader
from .domain.models.dwarf import StructRef
from .errors import DwarfLayoutError, LoadFailureError
from .infrastructure.config import Config, get_config
from .infrastructure.logging import LoggerSetup, get_logger, log_timing


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Print struct layouts recovered from DWARF debug information in ELF files",
        epilog="""
Examples:
  # Print every struct, sorted by name
  dwarf-layout build/vmlinux

  # Print selected structs
  dwarf-layout build/vmlinux --struct sk_buff,task_struct

  # Read struct names from a file (one per line, # comments allowed)
  dwarf-layout build/vmlinux --symbols-file structs.txt -o layouts.h

  # Verbose mode with debug logs and a log file
  dwarf-layout build/vmlinux --struct sk_buff --verbose --log-dir logs/

  # Using .env file for configuration
  echo 'ELF_FILE_PATH=build/vmlinux' > .env
  dwarf-layout --struct sk_buff
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "elf_file",
        type=Path,
        nargs="?",
        help="Path to the ELF file to analyze (optional if using .env)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write declarations to this file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output with debug logs",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        metavar="DIR",
        help="Also write a timestamped debug log file to this directory",
    )
    parser.add_argument(
        "--struct",
        type=str,
        metavar="NAME",
        help="Print only the named struct(s). Supports comma-separated list: 'foo,bar'",
    )
    parser.add_argument(
        "--symbols-file",
        type=Path,
        metavar="FILE",
        help="Read struct names from file (one name per line). "
        "Alternative to --struct for long lists",
    )
    return parser.parse_args(argv)


def read_struct_names(args: argparse.Namespace) -> list[str] | None:
    """Collect the requested struct names.

    Returns:
        The names in request order, or None when every struct is wanted

    Raises:
        ValueError: If both selection options are given or the file is unreadable
    """
    if args.struct and args.symbols_file:
        raise ValueError("Cannot use both --struct and --symbols-file options")

    if args.struct:
        return [s.strip() for s in args.struct.split(",") if s.strip()]

    if args.symbols_file:
        names = []
        try:
            with open(args.symbols_file, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#"):  # Skip empty lines and comments
                        names.append(line)
        except OSError as e:
            raise ValueError(f"Cannot read symbols file {args.symbols_file}: {e}") from e
        return names

    return None


def render_structs(
    formatter: DeclarationFormatter,
    structs: list[StructRef],
    failed: list[tuple[str, str]],
) -> list[str]:
    """Render each struct, recording failures instead of stopping."""
    logger = get_logger(__name__)
    blocks = []

    for struct_ref in structs:
        try:
            blocks.append(formatter.format_struct(struct_ref))
        except DwarfLayoutError as e:
            logger.error(f"[FAILED] {struct_ref.name}: {e}")
            failed.append((struct_ref.name, str(e)))

    return blocks


@log_timing
def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for printing struct layouts from DWARF debug info."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = Config.from_args(
            elf_file_path=args.elf_file,
            output_path=args.output,
            verbose=args.verbose,
            log_dir=args.log_dir,
        )
        elf_path = config.validate()
        requested = read_struct_names(args)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    # Initialize logging
    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    logger = get_logger(__name__)

    logger.debug(f"ELF file: {config.elf_file_path}")
    logger.debug(f"Output: {config.output_path or 'stdout'}")

    tuning = get_config()
    failed: list[tuple[str, str]] = []
    redefined = 0

    try:
        with SectionLoader(elf_path) as loader:
            parser = StructParser(loader.load_dwarf_info(), tuning)
            parser.load_all_structs()
            structs = parser.structs()

            if requested is None:
                selected = [structs[name] for name in sorted(structs)]
            else:
                selected = []
                for name in requested:
                    if name in structs:
                        selected.append(structs[name])
                    else:
                        logger.error(f"[FAILED] {name}: no struct definition with that name")
                        failed.append((name, "not found"))

            logger.info(f"Printing {len(selected)} of {len(structs)} struct(s)")
            formatter = DeclarationFormatter(parser, max_depth=tuning["MAX_PEEL_DEPTH"])
            blocks = render_structs(formatter, selected, failed)
            redefined = sum(1 for ref in selected if ref.redefinition_count > 0)

    except LoadFailureError as e:
        logger.error(f"Cannot load debug information: {e}")
        sys.exit(1)
    except DwarfLayoutError as e:
        logger.error(f"Fatal error while scanning structs: {e}")
        sys.exit(1)

    text = "\n\n".join(blocks) + "\n" if blocks else ""
    if config.output_path is not None:
        config.ensure_output_dir()
        config.output_path.write_text(text, encoding="utf-8")
        logger.info(f"Declarations written to {config.output_path}")
    else:
        sys.stdout.write(text)

    # Print summary
    logger.info("=" * 70)
    logger.info("LAYOUT SUMMARY")
    logger.info("=" * 70)
    logger.info(f"Structs printed: {len(blocks)}")
    logger.info(f"Redefined across units: {redefined}")
    logger.info(f"Failed: {len(failed)}")

    if failed:
        logger.info("Failed structs:")
        for name, error in failed:
            logger.info(f"  - {name}: {error}")

    sys.exit(0 if not failed else 1)


if __name__ == "__main__":
    main()
