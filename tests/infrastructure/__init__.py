"""Infrastructure tests."""
