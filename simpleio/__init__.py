"""Growable buffers, buffer pools, file streams and file locks."""

__version__ = "0.1.0"
__all__ = ["buffer", "enums", "errors", "file", "locking", "runtime", "stream"]