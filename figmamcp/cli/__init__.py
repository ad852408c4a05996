"""Command-line interface for figmamcp."""
