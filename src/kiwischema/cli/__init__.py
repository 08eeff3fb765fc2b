"""Command-line interface for kiwischema."""
