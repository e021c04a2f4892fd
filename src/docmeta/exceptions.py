"""
Re-export exceptions module for cleaner imports.

This allows: from docmeta.exceptions import TracedException
Instead of: from docmeta.abstract.exceptions.traced_exceptions import TracedException
"""

from .abstract.exceptions.traced_exceptions import TracedException, format_exception
from .meta.annotations.errors import (
    AnnotationError,
    AnnotationParseError,
    AnnotationTargetError,
    InvalidPropertyError,
)

__all__ = [
    "TracedException",
    "format_exception",
    "AnnotationError",
    "AnnotationParseError",
    "AnnotationTargetError",
    "InvalidPropertyError",
]
