"""Annotation system for docmeta: metadata declared as tags in docstrings."""

from .errors import (
    AnnotationError,
    AnnotationParseError,
    AnnotationTargetError,
    InvalidPropertyError,
)
from .kinds import (
    Annotation,
    AnnotationMeta,
    AnnotationTarget,
    ElementCategory,
    category_names,
)
from .registry import (
    AnnotationsRegistry,
    ParserDefaults,
    annotation_registry,
    register,
    resolve_constant,
    resolve_kind,
)
from .elements import (
    AnnotatedClass,
    AnnotatedElement,
    AnnotatedMethod,
    AnnotatedProperty,
    reflect,
)

__all__ = [
    # Kinds
    "Annotation",
    "AnnotationMeta",
    "AnnotationTarget",
    "ElementCategory",
    "category_names",
    # Registry
    "AnnotationsRegistry",
    "ParserDefaults",
    "annotation_registry",
    "register",
    "resolve_constant",
    "resolve_kind",
    # Views
    "AnnotatedClass",
    "AnnotatedElement",
    "AnnotatedMethod",
    "AnnotatedProperty",
    "reflect",
    # Errors
    "AnnotationError",
    "AnnotationParseError",
    "AnnotationTargetError",
    "InvalidPropertyError",
]
