"""Errors raised while discovering annotations.

Not finding an annotation is never an error: a tag naming an unknown class, a class that is
not an annotation kind, or a conventional documentation tag is simply left out.
"""

from ...abstract.exceptions.traced_exceptions import TracedException


class AnnotationError(TracedException):
    """General error of the annotation system."""


class AnnotationParseError(AnnotationError):
    """Signals a malformed tag: bad value token, mixed argument forms, unknown constant,
    arguments that do not fit the kind's constructor."""


class InvalidPropertyError(AnnotationParseError):
    """Signals a named property that the annotation kind does not declare."""


class AnnotationTargetError(AnnotationError):
    """Signals an annotation kind placed on an element category it does not allow."""
