"""Built-in registrations. Every registry created with builtins knows the AnnotationTarget
meta-kind and the ElementCategory constants its tags use."""

from typing import TYPE_CHECKING

from .kinds import AnnotationTarget, ElementCategory

if TYPE_CHECKING:
    from .registry import AnnotationsRegistry


BUILTIN_TYPES: tuple[type, ...] = (AnnotationTarget, ElementCategory)


def register_builtins(registry: "AnnotationsRegistry") -> None:
    for cls in BUILTIN_TYPES:
        registry.register(cls)
