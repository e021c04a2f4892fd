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
Description: Registry of the types tags may refer to. Tag names resolve to annotation kinds
            and `Type::NAME` values resolve to constants of registered types. Nothing is
            discovered implicitly: a type is known once it has been registered.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
import logging
import threading
from collections.abc import Iterable
from enum import EnumMeta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from ..classes.constants import ConstantNamespace, ConstantsMetaclass
from .errors import AnnotationParseError
from .introspection import is_subtype_of
from .kinds import Annotation, AnnotationTarget
from .known_kinds import register_builtins

if TYPE_CHECKING:
    from .elements import AnnotatedClass

logger = logging.getLogger(__name__)


class ParserDefaults(ConstantNamespace):
    """Static configuration of the annotation parser."""

    # Conventional documentation tags. They are never resolved to annotation kinds.
    DOC_TAGS: frozenset[str] = frozenset(
        {
            "abstract", "access", "author", "copyright", "deprecated", "deprec",
            "example", "exception", "global", "ignore", "internal", "param", "return",
            "link", "name", "magic", "package", "see", "since", "static", "staticvar",
            "subpackage", "throws", "todo", "var", "version",
        }
    )


class AnnotationsRegistry:
    """
    Holds the types known to the annotation parser, by name. Annotation kinds and constant
    holders (constant namespaces, enums, plain classes) are registered the same way.

    Examples:
        >>> registry = AnnotationsRegistry()

        >>> @registry.register
        ... class Route(Annotation):
        ...     path: str = "/"

        >>> registry.resolve_kind("Route") is Route
        True
    """

    __types: dict[str, type]
    __names: dict[type, str]
    __kind_elements: dict[type, AnnotatedClass]

    def __init__(
        self, doc_tags: Iterable[str] | None = None, with_builtins: bool = True
    ) -> None:
        """
        Args:
            doc_tags (Iterable[str] | None): Tag names to ignore. Defaults to
                ParserDefaults.DOC_TAGS.
            with_builtins (bool): Whether AnnotationTarget and ElementCategory are registered.
        """
        self.__types = {}
        self.__names = {}
        self.__kind_elements = {}
        self.__lock = threading.Lock()
        self.__parse_lock = threading.RLock()
        self._doc_tags = frozenset(ParserDefaults.DOC_TAGS if doc_tags is None else doc_tags)
        if with_builtins:
            register_builtins(self)

    @property
    def parse_lock(self) -> threading.RLock:
        """Held while annotations are parsed with this registry. Parsing an element may parse
        the kinds it uses, so every element of a registry shares this one re-entrant lock."""
        return self.__parse_lock

    @property
    def doc_tags(self) -> frozenset[str]:
        """Names of the documentation tags skipped by the parser."""
        return self._doc_tags

    def register(self, cls: type | None = None, /, *, name: str | None = None) -> Any:
        """Register a type under its name, or under an alias. Registering a name again
        replaces the previous type. Usable as a decorator, with or without arguments.

        Args:
            cls (type | None): The type to register.
            name (str | None): The name tags use for the type. Defaults to cls.__name__.

        Raises:
            TypeError: Raised when cls is not a class.

        Returns:
            The registered type, or a decorator when cls is not given.
        """
        if cls is None:
            return lambda c: self.register(c, name=name)
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered, got {cls!r}.")

        key = name or cls.__name__
        self.__types[key] = cls
        self.__names.setdefault(cls, key)
        logger.debug(f"Registered type '{key}' -> {cls.__module__}.{cls.__qualname__}")
        return cls

    def unregister(self, name: str) -> None:
        """Forget a registered name. Unknown names are ignored."""
        cls = self.__types.pop(name, None)
        if cls is not None and self.__names.get(cls) == name:
            del self.__names[cls]
            self.__kind_elements.pop(cls, None)

    def has_type(self, name: str) -> bool:
        return name in self.__types

    def list_registered_types(self) -> list[str]:
        """Get all registered names for debugging/introspection."""
        return list(self.__types)

    def resolve_type(self, name: str) -> type | None:
        """The type registered under name, or None."""
        return self.__types.get(name)

    def resolve_kind(self, name: str) -> type[Annotation] | None:
        """The annotation kind registered under name. None when the name is unknown or the type
        is not an annotation kind."""
        cls = self.resolve_type(name)
        if cls is None or not is_subtype_of(cls, Annotation):
            return None
        return cls

    def kind_name(self, kind: type) -> str:
        """The name a type was first registered under, its __name__ when not registered."""
        return self.__names.get(kind, kind.__name__)

    def resolve_constant(self, path: str) -> Any:
        """Resolve a constant reference, `Type::NAME` or `Type.NAME`.

        Args:
            path (str): The reference. The type part is a registered name.

        Raises:
            AnnotationParseError: Raised when the type is not registered or has no such
                constant. Private names, methods and descriptors are not constants.

        Returns:
            Any: The value of the constant.
        """
        type_name, sep, constant = path.rpartition("::")
        if not sep:
            type_name, _, constant = path.rpartition(".")
        holder = self.resolve_type(type_name)
        if holder is None:
            raise AnnotationParseError(
                f"Unknown type '{type_name}' in constant reference '{path}'.", constant=path
            )

        if isinstance(holder, ConstantsMetaclass):
            if holder.has_constant(constant):
                return getattr(holder, constant)
        elif isinstance(holder, EnumMeta):
            if constant in holder.__members__:
                return holder[constant]
        elif not constant.startswith("_"):
            try:
                raw = inspect.getattr_static(holder, constant)
            except AttributeError:
                pass
            else:
                if not (
                    inspect.isroutine(raw)
                    or inspect.isdatadescriptor(raw)
                    or isinstance(raw, type)
                ):
                    return getattr(holder, constant)

        raise AnnotationParseError(
            f"'{type_name}' has no constant '{constant}'.", constant=path
        )

    def reflect(self, kind: type) -> AnnotatedClass:
        """The class wrapper of a registered kind, created once and kept by the registry."""
        # elements depends on this module.
        from .elements import AnnotatedClass

        with self.__lock:
            element = self.__kind_elements.get(kind)
            if element is None:
                element = self.__kind_elements[kind] = AnnotatedClass(kind, self)
        return element

    def target_of(self, kind: type[Annotation]) -> AnnotationTarget | None:
        """The AnnotationTarget placed on a kind, None when the kind is unrestricted.

        Raises:
            AnnotationError: Raised when the docstring of the kind cannot be parsed.
        """
        return self.reflect(kind).get_annotation(AnnotationTarget)


@lru_cache(1)
def annotation_registry() -> AnnotationsRegistry:
    """Default annotation registry, shared by the whole process.

    Returns:
        AnnotationsRegistry: the registry instance.
    """
    return AnnotationsRegistry()


def register(cls: type | None = None, /, *, name: str | None = None) -> Any:
    """This function is a shortcut to `annotation_registry().register()`."""
    return annotation_registry().register(cls, name=name)


def resolve_kind(name: str) -> type[Annotation] | None:
    """This function is a shortcut to `annotation_registry().resolve_kind()`."""
    return annotation_registry().resolve_kind(name)


def resolve_constant(path: str) -> Any:
    """This function is a shortcut to `annotation_registry().resolve_constant()`."""
    return annotation_registry().resolve_constant(path)
