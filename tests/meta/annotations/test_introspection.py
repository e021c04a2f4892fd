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
Created: 2025-12-19
Description: Tests for the runtime description of classes and the instantiation helpers.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Annotated, Any

import pytest
from typing_extensions import Doc

from docmeta.annotations import Annotation, AnnotationParseError, ElementCategory
from docmeta.meta.annotations.introspection import (
    assign_property,
    construct_instance,
    declares_property,
    documentation_text,
    enumerate_methods,
    enumerate_properties,
    is_subtype_of,
    method_category,
    type_category,
)

if TYPE_CHECKING:
    from decimal import Decimal


class Kind(Annotation):
    """Test"""

    size: int = 0


class Base:
    """Base docstring."""

    first: Annotated[int, Doc("one"), Doc("two")] = 1

    def shared(self):
        """Base version."""

    def only_base(self):
        pass


class Derived(Base):
    first: Annotated[str, "not a doc"] = "x"

    def shared(self):
        """Derived version."""

    shadowed = 3

    @staticmethod
    def static():
        """Static."""

    @property
    def prop(self):
        """Property."""
        return 1


class Priced:
    price: "Decimal" = None  # type: ignore
    label: Annotated[str, Doc("@Marker")] = ""
    count: "Annotated[int, Doc('@Counter')]" = 0


class TestDescription:
    """Test docstrings, categories and subtypes."""

    def test_documentation_text(self):
        """Test the docstrings of classes, functions and descriptors."""
        assert documentation_text(Base) == "Base docstring."
        assert documentation_text(Derived) == ""
        assert documentation_text(Base.shared) == "Base version."
        assert documentation_text(Base.only_base) == ""
        assert documentation_text(Derived.__dict__["static"]) == "Static."
        assert documentation_text(Derived.__dict__["prop"]) == "Property."

    def test_is_subtype_of(self):
        """Test that only strict subclasses are subtypes."""
        assert is_subtype_of(Kind, Annotation)
        assert not is_subtype_of(Annotation, Annotation)
        assert not is_subtype_of(Base, Annotation)
        assert not is_subtype_of(Kind(), Annotation)

    def test_categories(self):
        """Test the categories of classes and methods."""
        assert type_category(Base) == ElementCategory.TYPE
        assert type_category(Kind) == ElementCategory.TYPE | ElementCategory.ANNOTATION_TYPE
        assert method_category("run") == ElementCategory.METHOD
        assert method_category("__init__") == (
            ElementCategory.METHOD | ElementCategory.CONSTRUCTOR
        )


class TestEnumeration:
    """Test the enumeration of methods and properties."""

    def test_methods(self):
        """Test that the most derived definition wins and object is left out."""
        methods = dict(enumerate_methods(Derived))
        assert methods["shared"] is Derived.__dict__["shared"]
        assert methods["only_base"] is Base.only_base
        assert methods["static"] is Derived.__dict__["static"].__func__
        assert "shadowed" not in methods
        assert "prop" not in methods
        assert "__repr__" not in methods

    def test_shadowed_by_data(self):
        """Test that a data attribute hides an inherited method of the same name."""

        class Hiding(Base):
            shared: Any = None

        assert "shared" not in dict(enumerate_methods(Hiding))

    def test_properties(self):
        """Test annotated attributes and descriptors with their documentation."""
        properties = dict(enumerate_properties(Derived))
        assert properties["first"] == ""
        assert properties["prop"] == "Property."
        assert "shadowed" not in properties

    def test_unresolved_string_annotation(self):
        """Test that an annotation naming a type-checking import leaves the others documented."""
        properties = dict(enumerate_properties(Priced))
        assert properties == {"price": "", "label": "@Marker", "count": "@Counter"}

    def test_inherited_property_docs(self):
        """Test that several Doc metadata are joined."""
        assert dict(enumerate_properties(Base))["first"] == "one\ntwo"


class TestInstantiation:
    """Test the creation of annotation instances."""

    def test_construct(self):
        """Test construction with positional arguments."""
        assert construct_instance(Kind, [3]).size == 3
        assert construct_instance(Kind, []).size == 0

    def test_construct_mismatch(self):
        """Test that arguments not fitting the constructor are a parse error."""
        with pytest.raises(AnnotationParseError) as info:
            construct_instance(Kind, [1, 2])

        assert info.value.details == {"kind": "Kind"}
        assert isinstance(info.value.__cause__, TypeError)

    def test_properties(self):
        """Test the declaration check and the assignment of properties."""
        assert declares_property(Kind, "size")
        assert declares_property(Kind, "value")
        assert not declares_property(Kind, "other")

        kind = Kind()
        assign_property(kind, "size", 7)
        assert kind.size == 7
