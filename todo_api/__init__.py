"""Task manager backend: validation, persistence and HTTP API for to-do items."""

__version__ = "1.0.0"
