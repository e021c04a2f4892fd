"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2025-12-18
Description: Annotation kinds. A kind is a subclass of Annotation; its class-level annotated
            attributes are the properties a tag may assign. The AnnotationTarget kind restricts
            the element categories a kind may be placed on.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
from functools import reduce
from operator import or_
from typing import Any, Callable, ClassVar, get_origin

from ..classes.constants import ConstantNamespace
from .errors import AnnotationParseError


class ElementCategory(ConstantNamespace):
    """Bits identifying what kind of declaration an element is. They combine: a constructor
    is also a method, an annotation kind is also a type."""

    ANNOTATION_TYPE: int = 1
    CONSTRUCTOR: int = 2
    METHOD: int = 4
    PROPERTY: int = 8
    TYPE: int = 16


def category_names(mask: int) -> list[str]:
    """Names of the categories set in a mask.

    Examples:
        >>> category_names(ElementCategory.METHOD | ElementCategory.CONSTRUCTOR)
        ['CONSTRUCTOR', 'METHOD']
    """
    return [name for name, bit in ElementCategory.items() if mask & bit]


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _property_initializer(cls: type, fields: tuple[str, ...]) -> Callable[..., None]:
    """Create an __init__ taking the given properties in order, each defaulting to its
    class-level value (None when there is none)."""
    parameters = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    parameters.extend(
        inspect.Parameter(
            f, inspect.Parameter.POSITIONAL_OR_KEYWORD, default=getattr(cls, f, None)
        )
        for f in fields
    )
    signature = inspect.Signature(parameters)

    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        bound = signature.bind(self, *args, **kwargs)
        bound.apply_defaults()
        for f in fields:
            setattr(self, f, bound.arguments[f])

    __init__.__signature__ = signature  # type: ignore[attr-defined]
    __init__.__qualname__ = f"{cls.__qualname__}.__init__"
    return __init__


class AnnotationMeta(type):
    """Collects the properties of annotation kinds.

    Public, non ClassVar, annotated class attributes are properties, inherited ones first. A
    kind that declares properties and no __init__ gets one taking its own properties.
    """

    __properties__: tuple[str, ...]

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        **kwargs: Any,
    ) -> Any:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        own = tuple(
            k
            for k, v in inspect.get_annotations(cls).items()
            if not k.startswith("_") and not _is_class_var(v)
        )
        properties: list[str] = []
        for base in reversed(bases):
            if isinstance(base, AnnotationMeta):
                properties.extend(p for p in base.__properties__ if p not in properties)
        properties.extend(p for p in own if p not in properties)
        cls.__properties__ = tuple(properties)

        if own and "__init__" not in namespace:
            cls.__init__ = _property_initializer(cls, own)  # type: ignore[misc]
        return cls


class Annotation(metaclass=AnnotationMeta):
    """Base class of annotation kinds.

    Examples:
        >>> class Column(Annotation):
        ...     name: str | None = None
        ...     nullable: bool = False

        >>> Column("id")
        Column(value=None, name='id', nullable=False)
    """

    value: Any = None

    def __repr__(self) -> str:
        props = ", ".join(f"{p}={getattr(self, p)!r}" for p in type(self).__properties__)
        return f"{type(self).__name__}({props})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, p) == getattr(other, p) for p in type(self).__properties__
        )


class AnnotationTarget(Annotation):
    """Restricts the element categories an annotation kind may be placed on. The value is a
    category, or a list of categories.

    @AnnotationTarget(ElementCategory::ANNOTATION_TYPE)
    """

    @property
    def mask(self) -> int:
        """The allowed categories OR-ed together. 0 allows everything.

        Raises:
            AnnotationParseError: Raised when the value is not made of integers.
        """
        value = self.value
        if value is None:
            return 0
        bits = value if isinstance(value, (list, tuple)) else [value]
        if not all(isinstance(b, int) and not isinstance(b, bool) for b in bits):
            raise AnnotationParseError(
                f"AnnotationTarget expects element categories, got {value!r}.", value=value
            )
        return reduce(or_, bits, 0)

    def allows(self, category: int) -> bool:
        """Check if an element of the given category may carry the restricted kind."""
        mask = self.mask
        return not mask or bool(mask & category)
