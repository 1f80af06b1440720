"""jcheck: inspect JPEG documents and selectively modify their metadata."""

__version__ = "0.3.0"
