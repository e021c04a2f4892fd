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
Description: Turns the docstring of an element into annotation instances: tags are extracted,
            resolved to registered kinds, checked against the kind's AnnotationTarget and
            instantiated with their arguments or properties.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from typing import TYPE_CHECKING, Any

from .errors import AnnotationTargetError, InvalidPropertyError
from .introspection import assign_property, construct_instance, declares_property
from .kinds import Annotation, AnnotationTarget, category_names
from .tags import extract_tags, split_arguments

if TYPE_CHECKING:
    from .elements import AnnotatedElement

logger = logging.getLogger(__name__)


def parse(element: AnnotatedElement) -> dict[str, Annotation]:
    """Parse the docstring of an element for annotations.

    Documentation tags are left out before anything else. The arguments of every other tag
    are evaluated, then tags whose name does not resolve to a registered annotation kind are
    left out. The first malformed tag aborts the whole parse, even when its kind is unknown.

    Args:
        element (AnnotatedElement): Element to parse the docstring of.

    Raises:
        AnnotationParseError: Raised for a malformed tag or an invalid property.
        AnnotationTargetError: Raised when a kind does not allow the element's category.

    Returns:
        dict[str, Annotation]: The annotations by tag name, in order of appearance.
    """
    registry = element.registry
    annotations: dict[str, Annotation] = {}
    for tag in extract_tags(element.doc, registry.doc_tags):
        args, props = split_arguments(tag, registry.resolve_constant)
        kind = registry.resolve_kind(tag.name)
        if kind is None:
            logger.debug(f"@{tag.name} on {element.qualified_name} is not an annotation kind")
            continue
        validate(element, kind)
        annotations[tag.name] = create(kind, tag.name, args, props)
    logger.debug(f"Parsed {len(annotations)} annotation(s) on {element.qualified_name}")
    return annotations


def validate(element: AnnotatedElement, kind: type[Annotation]) -> None:
    """Validate that an element is an acceptable target for an annotation kind.

    The AnnotationTarget class itself is not validated: its own target tag would otherwise
    need to be validated against itself.

    Raises:
        AnnotationTargetError: Raised when the kind restricts its targets and the element
            category is not one of them.
    """
    if element.target is AnnotationTarget:
        return

    target = element.registry.target_of(kind)
    if target is None or target.allows(element.category):
        return

    name = element.registry.kind_name(kind)
    raise AnnotationTargetError(
        f'Invalid annotation "{name}" for "{element.qualified_name}": allowed on'
        f" {', '.join(category_names(target.mask))}, found on"
        f" {', '.join(category_names(element.category))}.",
        kind=name,
        element=element.qualified_name,
    )


def create(
    kind: type[Annotation],
    name: str,
    args: list[Any] | None = None,
    props: dict[str, Any] | None = None,
) -> Annotation:
    """Create an instance of an annotation kind.

    With named properties the kind is instantiated without arguments and each property is
    assigned. Otherwise the arguments are given to the constructor.

    Args:
        kind (type[Annotation]): The annotation kind.
        name (str): Name the kind was referred to with, for error messages.
        args (list[Any] | None): Arguments to pass to the constructor.
        props (dict[str, Any] | None): Properties to populate the annotation with.

    Raises:
        AnnotationParseError: Raised when the arguments do not fit the constructor.
        InvalidPropertyError: Raised when a property is not declared by the kind.

    Returns:
        Annotation: The annotation.
    """
    if not props:
        return construct_instance(kind, args or [])

    for key in props:
        if not declares_property(kind, key):
            raise InvalidPropertyError(
                f"Invalid property {key} for Annotation {name}", kind=name, property=key
            )
    result = construct_instance(kind, [])
    for key, value in props.items():
        assign_property(result, key, value)
    return result
