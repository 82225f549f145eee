"""Test suite for dwarf-layout.

Test Structure:
- core/: Tests for section loading and the debug-info index
- domain/: Tests for the struct registry, type resolution and member enumeration
- application/: Tests for the parser facade and declaration rendering
- config/, infrastructure/: Tests for configuration and logging
- integration/: Tests against a real ELF file (ELF_FILE_PATH)

Unit tests run against the in-memory debug info built by dwarf_builder.

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m "not slow"      # Skip slow tests
"""
