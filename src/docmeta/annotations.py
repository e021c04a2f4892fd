"""
Re-export annotations module for cleaner imports.

This allows: from docmeta.annotations import reflect
Instead of: from docmeta.meta.annotations.elements import reflect
"""

from .meta.annotations import (
    Annotation,
    AnnotationMeta,
    AnnotationTarget,
    ElementCategory,
    category_names,
    AnnotationsRegistry,
    ParserDefaults,
    annotation_registry,
    register,
    resolve_constant,
    resolve_kind,
    AnnotatedClass,
    AnnotatedElement,
    AnnotatedMethod,
    AnnotatedProperty,
    reflect,
    AnnotationError,
    AnnotationParseError,
    AnnotationTargetError,
    InvalidPropertyError,
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
