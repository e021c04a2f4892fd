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
Description: Extraction of the annotation tags written in a docstring and splitting of their
            argument lists. A tag is a line starting with `@`:
                @Name
                @Name('positional', 2)
                @Name(key='value', other=[1, 2])
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any, NamedTuple

from .errors import AnnotationParseError
from .values import ConstantResolver, evaluate, find_top_level, split_top_level

logger = logging.getLogger(__name__)

_TAG_LINE = re.compile(
    r"^[ \t]*(?:\*[ \t]*)?@(?P<name>[A-Za-z_][\w.]*)(?P<rest>[^\n]*)$", re.MULTILINE
)


class Tag(NamedTuple):
    """A tag found in a docstring.

    `arguments` is the raw text between the parentheses, or None when the tag has none.
    """

    name: str
    arguments: str | None


def extract_tags(text: str | None, doc_tags: Iterable[str] = ()) -> Iterator[Tag]:
    """Lazily find the tags of a docstring.

    Args:
        text (str | None): The docstring.
        doc_tags (Iterable[str]): Names of documentation tags (param, return, ...) to skip.

    Raises:
        AnnotationParseError: Raised when the argument list of a tag is not closed on its line.

    Yields:
        Tag: The tags, in order of appearance.
    """
    if not text or not text.strip():
        return
    skipped = frozenset(doc_tags)
    for match in _TAG_LINE.finditer(text):
        name = match["name"]
        if name in skipped:
            logger.debug(f"Skipping documentation tag @{name}")
            continue
        rest = match["rest"].rstrip()
        if not rest.startswith("("):
            yield Tag(name, None)
            continue
        close = rest.rfind(")")
        if close == -1:
            raise AnnotationParseError(
                f"Unterminated argument list for tag '@{name}': {match.group(0).strip()!r}",
                tag=name,
            )
        yield Tag(name, rest[1:close])


def split_arguments(
    tag: Tag, resolve_constant: ConstantResolver
) -> tuple[list[Any], dict[str, Any]]:
    """Split the arguments of a tag into constructor arguments and named properties.

    Args:
        tag (Tag): The tag.
        resolve_constant (ConstantResolver): Resolves the constant references of the values.

    Raises:
        AnnotationParseError: Raised when a value cannot be evaluated, or when the tag mixes
            constructor arguments and named properties.

    Returns:
        tuple[list[Any], dict[str, Any]]: The evaluated arguments and properties. At most one
            of them is non-empty.
    """
    args: list[Any] = []
    props: dict[str, Any] = {}
    if tag.arguments is None:
        return args, props

    for token in split_top_level(tag.arguments):
        token = token.strip()
        if not token:
            continue
        eq = find_top_level(token, "=")
        if eq > 0:
            props[token[:eq].strip()] = evaluate(token[eq + 1 :], resolve_constant)
        else:
            args.append(evaluate(token, resolve_constant))

    if args and props:
        raise AnnotationParseError(
            f"Annotation '{tag.name}' cannot use both named properties and constructor"
            " arguments.",
            tag=tag.name,
        )
    return args, props
