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
Created: 2025-07-11
Updated: 2025-12-20
Description: Namespaces (classes) of typed constants. They hold the static configuration of
            the annotation parser and can be referenced from tags as `Namespace::NAME`.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
from collections.abc import Iterator
from types import UnionType
from typing import Any, NoReturn, Callable, ClassVar, Union, get_origin

from ...abstract.exceptions.traced_exceptions import TracedException


class ConstantsInstantiationError(TracedException):
    """Instantiation error of a Constants class."""


class ConstantsCompositionError(TracedException):
    """Composition error of a Constants class."""


class ConstantsModificationError(TracedException):
    """Modification error of a Constants class."""


def _verify_functions(name: str, namespace: dict[str, Any]) -> None:
    """Verify that no disalowed function is added.
    Disallowed functions are __new__ and __init__.

    Args:
        name (str): name of the class.
        namespace (dict[str, Any]): namespace of the class.

    Raises:
        ConstantsCompositionError: Raised when a disallowed function is added.
    """
    if "__init__" in namespace or "__new__" in namespace:
        raise ConstantsCompositionError(
            f"Constant class '{name}' is disallowed to have __new__ or __init__"
            " method since it shall never be instantiated.",
            namespace=name,
        )


def _instantiation_error(name: str) -> Callable[..., NoReturn]:
    """Helper to format an error message when trying to instantiate a Constants class.

    Args:
        name (str): name of the class.

    Returns:
        Callable[..., NoReturn]: A callable that throws an instantiation error when called.
    """

    def f(*_: Any, **__: Any) -> NoReturn:
        raise ConstantsInstantiationError(
            f"Cannot instantiate constant class '{name}'. Constant class cannot be instantiated.",
            namespace=name,
        )

    return f


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _verify_values(
    name: str, namespace: dict[str, Any], annotations: dict[str, Any], constants: tuple[str, ...]
) -> None:
    """Verify that every constant has a value matching its annotated type.

    Only the origin of the annotation is checked: `frozenset[str]` accepts any frozenset.
    Unions and string annotations are not checked.

    Args:
        name (str): name of the class.
        namespace (dict[str, Any]): namespace of the class.
        annotations (dict[str, Any]): own annotations of the class.
        constants (tuple[str, ...]): names of the constants declared by the class.

    Raises:
        ConstantsCompositionError: Raised when a value is missing or has the wrong type.
    """
    for key in constants:
        if key not in annotations:
            continue
        if key not in namespace:
            raise ConstantsCompositionError(
                f"Attribute '{key}' needs a value in constant class '{name}'.",
                namespace=name,
                constant=key,
            )
        expected = get_origin(annotations[key]) or annotations[key]
        if expected in (Union, UnionType):
            continue
        if expected is float:
            # int is acceptable where float is expected.
            expected = (int, float)
        if isinstance(expected, (type, tuple)) and not isinstance(namespace[key], expected):
            raise ConstantsCompositionError(
                f"Value {namespace[key]!r} of constant '{key}' in class '{name}' is not of"
                f" type {annotations[key]}.",
                namespace=name,
                constant=key,
            )


class ConstantsMetaclass(type):
    __constants__: tuple[str, ...]

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        allow_private: bool = False,
        **kwargs: Any,
    ) -> Any:

        # verify that no function is added.
        _verify_functions(name, namespace)

        # add an __new__ method that throws an error.
        namespace["__new__"] = _instantiation_error(name)

        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        annotations = inspect.get_annotations(cls)
        own = tuple(
            k
            for k, v in annotations.items()
            if (allow_private or not k.startswith("_")) and not _is_class_var(v)
        )
        _verify_values(name, namespace, annotations, own)

        # inherited constants come first, in their declaration order.
        constants: list[str] = []
        for base in reversed(bases):
            if isinstance(base, ConstantsMetaclass):
                constants.extend(k for k in base.__constants__ if k not in constants)
        constants.extend(k for k in own if k not in constants)

        type.__setattr__(cls, "__constants__", tuple(constants))
        return cls

    def __setattr__(cls, name: str, value: Any) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be modified. Reason: Constant"
            " class cannot be modified.",
            namespace=cls.__name__,
            constant=name,
        )

    def __delattr__(cls, name: str) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be deleted. Reason: Constant"
            " class cannot be modified.",
            namespace=cls.__name__,
            constant=name,
        )

    def __repr__(cls) -> str:
        """Returns a string representation of the class."""
        constants = ", ".join(f"{k}={getattr(cls, k)!r}" for k in cls.__constants__)
        return f"<ConstantNamespace {cls.__name__}({constants})>"

    def __iter__(cls) -> Iterator[str]:
        return iter(cls.__constants__)

    def __contains__(cls, name: object) -> bool:
        """Check if a constant name exists."""
        return name in cls.__constants__

    def __len__(cls) -> int:
        """Return the number of constants."""
        return len(cls.__constants__)

    def items(cls) -> list[tuple[str, Any]]:
        """Return all constants as (name, value) pairs."""
        return [(k, getattr(cls, k)) for k in cls.__constants__]

    def keys(cls) -> tuple[str, ...]:
        """Return all constant names."""
        return cls.__constants__

    def values(cls) -> tuple[Any, ...]:
        """Return all constant values."""
        return tuple(getattr(cls, k) for k in cls.__constants__)

    def get(cls, name: str, default: Any = None) -> Any:
        """Get a constant value with optional default."""
        if name not in cls.__constants__:
            return default
        return getattr(cls, name)

    def has_constant(cls, name: str) -> bool:
        """Check if a constant exists."""
        return name in cls.__constants__


class ConstantNamespace(metaclass=ConstantsMetaclass, allow_private=False):
    """Base class to create namespaces (class) of constants.
    Examples:
        >>> class Limits(ConstantNamespace):
        ...    A = 1 # this is not a constant. It needs annotation.
        ...    _A: int = 1 # this is not a constant unless allow_private=True.
        ...    DEPTH: int = 2 # this is a constant.
        ...    TAGS: frozenset[str] = frozenset({"a"}) # checked against frozenset.

        >>> Limits.DEPTH
        2

        >>> Limits.DEPTH = 3 # raises ConstantsModificationError.

        >>> class Broken(ConstantNamespace):
        ...    DEPTH: int = "2" # raises ConstantsCompositionError.
    """

    __constants__: ClassVar[tuple[str, ...]]
