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
Description: Annotated views of classes, methods and properties. Annotations are parsed the
            first time they are queried and kept for the lifetime of the view.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .errors import AnnotationParseError
from .introspection import (
    documentation_text,
    enumerate_methods,
    enumerate_properties,
    method_category,
    type_category,
)
from .kinds import Annotation, ElementCategory
from .parser import parse
from .registry import AnnotationsRegistry, annotation_registry


class AnnotatedElement(ABC):
    """Base class of the annotated views.

    Annotations are looked up by the name used in the tags, or by the kind itself.
    """

    def __init__(self, registry: AnnotationsRegistry | None = None) -> None:
        self._registry = registry or annotation_registry()
        self.__annotations: Mapping[str, Annotation] | None = None
        self.__parsing = False

    @property
    def registry(self) -> AnnotationsRegistry:
        """The registry tags are resolved with."""
        return self._registry

    @property
    @abstractmethod
    def target(self) -> Any:
        """The class, function or descriptor owner being described."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The declared name."""

    @property
    def qualified_name(self) -> str:
        return self.name

    @property
    @abstractmethod
    def doc(self) -> str:
        """The raw docstring, "" when there is none."""

    @property
    @abstractmethod
    def category(self) -> int:
        """ElementCategory bits of the element."""

    def get_annotations(self) -> Mapping[str, Annotation]:
        """All the annotations of the element, by tag name. Parsed on the first call, the same
        read-only mapping is returned afterwards.

        Raises:
            AnnotationParseError: Raised for a malformed tag, an invalid property, or when the
                element is queried again while its own annotations are being parsed.
            AnnotationTargetError: Raised when a kind does not allow this element.
        """
        annotations = self.__annotations
        if annotations is not None:
            return annotations
        with self._registry.parse_lock:
            if self.__annotations is None:
                if self.__parsing:
                    raise AnnotationParseError(
                        f"Circular annotation reference while parsing {self.qualified_name}.",
                        element=self.qualified_name,
                    )
                self.__parsing = True
                try:
                    self.__annotations = MappingProxyType(parse(self))
                finally:
                    self.__parsing = False
            return self.__annotations

    def get_annotation(self, kind: str | type[Annotation]) -> Annotation | None:
        """The annotation of the given kind, None when absent. A name matches the tag
        exactly; a class matches whatever alias the tag used."""
        annotations = self.get_annotations()
        if isinstance(kind, type):
            return next((a for a in annotations.values() if type(a) is kind), None)
        return annotations.get(kind)

    def has_annotation(self, kind: str | type[Annotation]) -> bool:
        return self.get_annotation(kind) is not None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.qualified_name}>"


class AnnotatedMethod(AnnotatedElement):
    """A method of a class. `__init__` is also a constructor."""

    def __init__(
        self,
        owner: type,
        name: str,
        function: Any,
        registry: AnnotationsRegistry | None = None,
    ) -> None:
        super().__init__(registry)
        self._owner = owner
        self._name = name
        self._function = function

    @property
    def owner(self) -> type:
        return self._owner

    @property
    def target(self) -> Any:
        return self._function

    @property
    def name(self) -> str:
        return self._name

    @property
    def qualified_name(self) -> str:
        return f"{self._owner.__qualname__}.{self._name}"

    @property
    def doc(self) -> str:
        return documentation_text(self._function)

    @property
    def category(self) -> int:
        return method_category(self._name)

    def is_constructor(self) -> bool:
        return bool(self.category & ElementCategory.CONSTRUCTOR)


class AnnotatedProperty(AnnotatedElement):
    """A property of a class: a property descriptor or an annotated class attribute."""

    def __init__(
        self,
        owner: type,
        name: str,
        doc: str,
        registry: AnnotationsRegistry | None = None,
    ) -> None:
        super().__init__(registry)
        self._owner = owner
        self._name = name
        self._doc = doc

    @property
    def owner(self) -> type:
        return self._owner

    @property
    def target(self) -> Any:
        return self._owner

    @property
    def name(self) -> str:
        return self._name

    @property
    def qualified_name(self) -> str:
        return f"{self._owner.__qualname__}.{self._name}"

    @property
    def doc(self) -> str:
        return self._doc

    @property
    def category(self) -> int:
        return ElementCategory.PROPERTY


class AnnotatedClass(AnnotatedElement):
    """A class, with views of its methods and properties.

    Examples:
        >>> # Injectable and Route are registered annotation kinds.
        >>> class Service:
        ...     '''@Injectable'''
        ...
        ...     def start(self):
        ...         '''@Route("/start")'''

        >>> AnnotatedClass(Service).get_method("start").has_annotation("Route")
        True
    """

    def __init__(self, cls: type, registry: AnnotationsRegistry | None = None) -> None:
        super().__init__(registry)
        self._cls = cls
        self.__children_lock = threading.Lock()
        self.__methods: Mapping[str, AnnotatedMethod] | None = None
        self.__properties: Mapping[str, AnnotatedProperty] | None = None

    @property
    def target(self) -> type:
        return self._cls

    @property
    def name(self) -> str:
        return self._cls.__name__

    @property
    def qualified_name(self) -> str:
        return self._cls.__qualname__

    @property
    def doc(self) -> str:
        return documentation_text(self._cls)

    @property
    def category(self) -> int:
        return type_category(self._cls)

    def get_methods(self) -> Mapping[str, AnnotatedMethod]:
        """Views of the methods, inherited ones included, by name. Created on the first call."""
        if self.__methods is None:
            with self.__children_lock:
                if self.__methods is None:
                    self.__methods = MappingProxyType(
                        {
                            name: AnnotatedMethod(self._cls, name, function, self._registry)
                            for name, function in enumerate_methods(self._cls)
                        }
                    )
        return self.__methods

    def get_method(self, name: str) -> AnnotatedMethod | None:
        return self.get_methods().get(name)

    def has_method(self, name: str) -> bool:
        return name in self.get_methods()

    def get_properties(self) -> Mapping[str, AnnotatedProperty]:
        """Views of the properties, inherited ones included, by name. Created on the first
        call."""
        if self.__properties is None:
            with self.__children_lock:
                if self.__properties is None:
                    self.__properties = MappingProxyType(
                        {
                            name: AnnotatedProperty(self._cls, name, doc, self._registry)
                            for name, doc in enumerate_properties(self._cls)
                        }
                    )
        return self.__properties

    def get_property(self, name: str) -> AnnotatedProperty | None:
        return self.get_properties().get(name)

    def has_property(self, name: str) -> bool:
        return name in self.get_properties()


def reflect(cls: type, registry: AnnotationsRegistry | None = None) -> AnnotatedClass:
    """Create the annotated view of a class."""
    return AnnotatedClass(cls, registry)
