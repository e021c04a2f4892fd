"""Access to the runtime description of classes: docstrings, methods, properties, categories.

Everything the annotation parser knows about a declaration goes through these functions.
"""

import inspect
import logging
import sys
from collections.abc import Iterator
from functools import cached_property
from typing import Annotated, Any, get_origin

from typing_extensions import Doc

from .errors import AnnotationParseError
from .kinds import Annotation, ElementCategory

logger = logging.getLogger(__name__)

# Failures of evaluating a string annotation.
_UNRESOLVED = (NameError, AttributeError, SyntaxError, TypeError)


def documentation_text(obj: Any) -> str:
    """The docstring of a class, function or descriptor, "" when it has none.

    Class docstrings are not inherited.
    """
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    if isinstance(obj, type):
        doc = obj.__dict__.get("__doc__")
    else:
        doc = getattr(obj, "__doc__", None)
    return doc if isinstance(doc, str) else ""


def is_subtype_of(cls: Any, base: type) -> bool:
    """Check if cls is a class strictly deriving from base."""
    return isinstance(cls, type) and cls is not base and issubclass(cls, base)


def type_category(cls: type) -> int:
    """TYPE, plus ANNOTATION_TYPE for annotation kinds."""
    if is_subtype_of(cls, Annotation):
        return ElementCategory.TYPE | ElementCategory.ANNOTATION_TYPE
    return ElementCategory.TYPE


def method_category(name: str) -> int:
    """METHOD, plus CONSTRUCTOR for __init__."""
    if name == "__init__":
        return ElementCategory.METHOD | ElementCategory.CONSTRUCTOR
    return ElementCategory.METHOD


def enumerate_methods(cls: type) -> Iterator[tuple[str, Any]]:
    """Yield the (name, function) pairs of the Python functions of a class, including the
    inherited ones. The most derived definition of a name wins, even when it is not a
    function. Static and class methods are unwrapped; members of `object` are left out.
    """
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, (staticmethod, classmethod)):
                attr = attr.__func__
            if inspect.isfunction(attr):
                yield name, attr


def _annotated_doc(annotation: Any) -> str:
    if get_origin(annotation) is not Annotated:
        return ""
    return "\n".join(
        m.documentation for m in annotation.__metadata__ if isinstance(m, Doc)
    )


def _class_annotations(klass: type) -> dict[str, Any]:
    """Own annotations of a class, string annotations evaluated where they resolve.

    A string annotation that cannot be evaluated, such as a name imported only for type
    checking, is kept as a string and documents nothing.
    """
    annotations = inspect.get_annotations(klass)
    if not any(isinstance(a, str) for a in annotations.values()):
        return annotations
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except _UNRESOLVED:
        pass

    module = sys.modules.get(klass.__module__)
    module_globals = dict(vars(module)) if module is not None else {}
    class_locals = dict(vars(klass))
    evaluated: dict[str, Any] = {}
    for name, annotation in annotations.items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, module_globals, class_locals)
            except _UNRESOLVED as e:
                logger.debug(f"Annotation of {klass.__qualname__}.{name} not resolved: {e}")
        evaluated[name] = annotation
    return evaluated


def enumerate_properties(cls: type) -> Iterator[tuple[str, str]]:
    """Yield the (name, docstring) pairs of the properties of a class, including the
    inherited ones.

    Properties are `property` and `cached_property` descriptors, documented by their
    docstring, and annotated class attributes, documented by the `Doc` metadata of an
    `Annotated` type:

        >>> class User:
        ...     name: Annotated[str, Doc("@Column('user_name')")]

    Dunder names are left out.
    """
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        members = vars(klass)
        for name, annotation in _class_annotations(klass).items():
            if name in seen or name.startswith("__"):
                continue
            seen.add(name)
            if isinstance(members.get(name), (property, cached_property)):
                yield name, documentation_text(members[name])
            else:
                yield name, _annotated_doc(annotation)
        for name, attr in members.items():
            if name in seen or name.startswith("__"):
                continue
            if isinstance(attr, (property, cached_property)):
                seen.add(name)
                yield name, documentation_text(attr)


def construct_instance[T](cls: type[T], args: list[Any]) -> T:
    """Instantiate cls with positional arguments, once they are known to fit its signature.

    Raises:
        AnnotationParseError: Raised when the arguments do not fit the constructor.
    """
    try:
        inspect.signature(cls).bind(*args)
    except TypeError as e:
        raise AnnotationParseError(
            f"Arguments {args!r} do not fit the constructor of '{cls.__name__}': {e}",
            kind=cls.__name__,
        ) from e
    return cls(*args)


def declares_property(kind: type[Annotation], name: str) -> bool:
    """Check if an annotation kind declares a property."""
    return name in kind.__properties__


def assign_property(instance: Annotation, name: str, value: Any) -> None:
    setattr(instance, name, value)
