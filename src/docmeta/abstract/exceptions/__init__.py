"""Exception utilities for docmeta."""

from .traced_exceptions import TracedException, format_exception

__all__ = [
    "TracedException",
    "format_exception",
]
