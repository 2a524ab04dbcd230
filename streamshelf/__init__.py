"""streamshelf: JSON-file backed API for a streaming catalog portfolio."""

__version__ = "1.0.0"
