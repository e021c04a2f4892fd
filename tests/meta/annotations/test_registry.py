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
Description: Tests for the registry of annotation kinds and constant holders.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from enum import Enum

import pytest

from docmeta.annotations import (
    Annotation,
    AnnotationParseError,
    AnnotationTarget,
    AnnotationsRegistry,
    ElementCategory,
    ParserDefaults,
    annotation_registry,
)
from docmeta.constants import ConstantNamespace


class Route(Annotation):
    """@AnnotationTarget(ElementCategory::METHOD)"""

    path: str = "/"


class Plain:
    """Test"""

    FOO = 1
    BAR = "bar"
    _PRIVATE = 2

    def method(self):
        """Test"""

    @property
    def prop(self):
        """Test"""
        return 3

    class Nested:
        """Test"""


class Limits(ConstantNamespace):
    """Test"""

    DEPTH: int = 3
    loose = 4


class Color(Enum):
    RED = 1
    GREEN = 2


@pytest.fixture
def registry():
    r = AnnotationsRegistry()
    for cls in (Route, Plain, Limits, Color):
        r.register(cls)
    return r


class TestRegistration:
    """Test registering and resolving types."""

    def test_builtins(self):
        """Test that a new registry knows the built-in types."""
        registry = AnnotationsRegistry()
        assert registry.resolve_kind("AnnotationTarget") is AnnotationTarget
        assert registry.resolve_type("ElementCategory") is ElementCategory

    def test_without_builtins(self):
        """Test that built-ins can be left out."""
        registry = AnnotationsRegistry(with_builtins=False)
        assert registry.list_registered_types() == []

    def test_decorator_forms(self):
        """Test register used as a plain decorator and with an alias."""
        registry = AnnotationsRegistry()

        @registry.register
        class Table(Annotation):
            """Test"""

        @registry.register(name="orm.Column")
        class Column(Annotation):
            """Test"""

        assert registry.resolve_kind("Table") is Table
        assert registry.resolve_kind("orm.Column") is Column
        assert registry.resolve_kind("Column") is None
        assert registry.kind_name(Column) == "orm.Column"

    def test_register_rejects_non_classes(self, registry):
        """Test that only classes can be registered."""
        with pytest.raises(TypeError):
            registry.register(lambda: None)

    def test_resolve_kind_of_non_annotation(self, registry):
        """Test that registered classes that are not kinds do not resolve as kinds."""
        assert registry.resolve_type("Plain") is Plain
        assert registry.resolve_kind("Plain") is None
        assert registry.resolve_kind("Unknown") is None

    def test_base_annotation_is_not_a_kind(self):
        """Test that the Annotation base itself is not a kind."""
        registry = AnnotationsRegistry()
        registry.register(Annotation)
        assert registry.resolve_kind("Annotation") is None

    def test_kind_name_of_unregistered_type(self, registry):
        """Test that unregistered types are named after their class."""
        assert registry.kind_name(Annotation) == "Annotation"

    def test_unregister(self, registry):
        """Test forgetting a type."""
        registry.unregister("Route")
        registry.unregister("Unknown")
        assert not registry.has_type("Route")
        assert registry.resolve_kind("Route") is None

    def test_doc_tags(self):
        """Test the default and overridden documentation tags."""
        assert AnnotationsRegistry().doc_tags == ParserDefaults.DOC_TAGS
        assert AnnotationsRegistry(doc_tags=["skip"]).doc_tags == frozenset({"skip"})

    def test_default_registry_is_shared(self):
        """Test that the default registry is a single instance."""
        assert annotation_registry() is annotation_registry()
        assert annotation_registry().resolve_kind("AnnotationTarget") is AnnotationTarget


class TestResolveConstant:
    """Test the resolution of constant references."""

    def test_plain_class(self, registry):
        """Test constants of a plain class."""
        assert registry.resolve_constant("Plain::FOO") == 1
        assert registry.resolve_constant("Plain.BAR") == "bar"

    def test_constant_namespace(self, registry):
        """Test that only declared constants of a namespace resolve."""
        assert registry.resolve_constant("Limits::DEPTH") == 3
        assert registry.resolve_constant("ElementCategory::PROPERTY") == 8
        with pytest.raises(AnnotationParseError):
            registry.resolve_constant("Limits::loose")

    def test_enum(self, registry):
        """Test that enum members resolve to the members."""
        assert registry.resolve_constant("Color::GREEN") is Color.GREEN
        with pytest.raises(AnnotationParseError):
            registry.resolve_constant("Color::BLUE")

    def test_aliased_holder(self):
        """Test a holder registered under a dotted alias."""
        registry = AnnotationsRegistry()
        registry.register(Plain, name="pkg.Plain")
        assert registry.resolve_constant("pkg.Plain::FOO") == 1
        assert registry.resolve_constant("pkg.Plain.FOO") == 1

    @pytest.mark.parametrize(
        "path",
        ["Unknown::FOO", "Plain::MISSING", "Plain::_PRIVATE", "Plain::method",
         "Plain::prop", "Plain::Nested"],
    )
    def test_not_constants(self, registry, path):
        """Test that unknown types, missing names, private names and members that are not
        data are rejected."""
        with pytest.raises(AnnotationParseError) as info:
            registry.resolve_constant(path)

        assert info.value.details == {"constant": path}


class TestTargetOf:
    """Test the lookup of the target of a kind."""

    def test_restricted_kind(self, registry):
        """Test that the AnnotationTarget of a kind is found."""
        target = registry.target_of(Route)
        assert isinstance(target, AnnotationTarget)
        assert target.mask == ElementCategory.METHOD

    def test_unrestricted_kind(self, registry):
        """Test that a kind without a target is unrestricted."""

        class Free(Annotation):
            """No tag here."""

        assert registry.target_of(Free) is None

    def test_kind_view_is_cached(self, registry):
        """Test that the registry keeps one view per kind."""
        assert registry.reflect(Route) is registry.reflect(Route)

    def test_target_without_builtins(self):
        """Test that targets are ignored when AnnotationTarget is not registered."""
        registry = AnnotationsRegistry(with_builtins=False)
        registry.register(Route)
        registry.register(ElementCategory)
        assert registry.target_of(Route) is None

    def test_target_with_unknown_constant(self):
        """Test that the arguments of an unresolved target tag are still evaluated."""
        registry = AnnotationsRegistry(with_builtins=False)
        registry.register(Route)
        with pytest.raises(AnnotationParseError):
            registry.target_of(Route)
