"""Integration tests against a real ELF file."""
