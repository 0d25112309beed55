"""Command-line task tracker backed by a single JSON document."""

__version__ = "0.1.0"
