"""Command-line interface for varmeta."""
