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
Description: Evaluation of the raw value tokens found in annotation tags. Only literals and
            constant references are understood, the text is never executed:
            - "text" or 'text' -> str, verbatim
            - 12, -0x1F, 1_000 -> int
            - 1.5, .5, 1e3 -> float
            - true, False -> bool
            - null, None -> None
            - Type::NAME, Type.NAME -> the value of a registered constant
            - a, b or [a, b] -> list of the evaluated items
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import re
from typing import Any, Callable

from .errors import AnnotationParseError

type ConstantResolver = Callable[[str], Any]

_QUOTES = "'\""

_INT = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|\d[\d_]*)\Z")
_FLOAT = re.compile(
    r"[+-]?(?:(?:\d[\d_]*)?\.\d[\d_]*(?:[eE][+-]?\d+)?|\d[\d_]*\.?(?:[eE][+-]?\d+)?)\Z"
)
_CONSTANT = re.compile(
    r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*(?:::|\.)[A-Za-z_]\w*\Z"
)

_BOOLEANS = {"true": True, "false": False}
_NULLS = ("null", "none")


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split a text on the separators that are neither quoted nor inside brackets.

    Args:
        text (str): The text to split.
        separator (str): A single separator character.

    Raises:
        AnnotationParseError: Raised when a quote or a bracket is left open, or a bracket is
            closed without being opened.

    Returns:
        list[str]: The parts, untrimmed. An empty text gives a single empty part.
    """
    parts: list[str] = []
    start = 0
    depth = 0
    quote: str | None = None
    for i, c in enumerate(text):
        if quote:
            if c == quote:
                quote = None
        elif c in _QUOTES:
            quote = c
        elif c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth < 0:
                raise AnnotationParseError(f"Unbalanced ']' in {text!r}.", token=text)
        elif c == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    if quote:
        raise AnnotationParseError(f"Unterminated string in {text!r}.", token=text)
    if depth:
        raise AnnotationParseError(f"Unbalanced '[' in {text!r}.", token=text)
    parts.append(text[start:])
    return parts


def find_top_level(text: str, char: str) -> int:
    """Return the index of the first `char` that is neither quoted nor inside brackets, or -1."""
    depth = 0
    quote: str | None = None
    for i, c in enumerate(text):
        if quote:
            if c == quote:
                quote = None
        elif c in _QUOTES:
            quote = c
        elif c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
        elif c == char and depth == 0:
            return i
    return -1


def is_quoted(token: str) -> bool:
    """Check if a token is enclosed by the same quote character at both ends."""
    return len(token) >= 2 and token[0] in _QUOTES and token[-1] == token[0]


def is_bracketed(token: str) -> bool:
    """Check if a whole token is a bracketed list, `[1, 2]` but not `[1], [2]`."""
    if len(token) < 2 or token[0] != "[" or token[-1] != "]":
        return False
    depth = 0
    quote: str | None = None
    for i, c in enumerate(token):
        if quote:
            if c == quote:
                quote = None
        elif c in _QUOTES:
            quote = c
        elif c == "[":
            depth += 1
        elif c == "]":
            depth -= 1
            if depth == 0 and i != len(token) - 1:
                return False
    return depth == 0


def _parse_int(token: str) -> int:
    try:
        return int(token, 0)
    except ValueError:
        # base 0 rejects leading zeros.
        return int(token, 10)


def evaluate_literal(token: str, resolve_constant: ConstantResolver) -> Any:
    """Evaluate a single trimmed, non-list, non-string token.

    Args:
        token (str): The token.
        resolve_constant (ConstantResolver): Called with the full path of constant references.

    Raises:
        AnnotationParseError: Raised when the token is not a supported literal.

    Returns:
        Any: The value.
    """
    lowered = token.lower()
    if lowered in _BOOLEANS:
        return _BOOLEANS[lowered]
    if lowered in _NULLS:
        return None
    try:
        if _INT.match(token):
            return _parse_int(token)
        if _FLOAT.match(token):
            return float(token)
    except ValueError as e:
        raise AnnotationParseError(f"Malformed number {token!r}.", token=token) from e
    if _CONSTANT.match(token):
        return resolve_constant(token)
    raise AnnotationParseError(
        f"Cannot evaluate {token!r}. Expected a string, a number, a boolean, null or a"
        " constant reference.",
        token=token,
    )


def evaluate(token: str, resolve_constant: ConstantResolver) -> Any:
    """Evaluate the value of an argument or a property.

    Args:
        token (str): The raw token, surrounding blanks are ignored.
        resolve_constant (ConstantResolver): Resolves `Type::NAME` references.

    Raises:
        AnnotationParseError: Raised when the token, or one of its items, cannot be evaluated.

    Returns:
        Any: The evaluated value.
    """
    token = token.strip()

    # explicit list, possibly empty
    if is_bracketed(token):
        inner = token[1:-1]
        if not inner.strip():
            return []
        return [evaluate(part, resolve_constant) for part in split_top_level(inner)]

    # implicit list
    parts = split_top_level(token)
    if len(parts) > 1:
        return [evaluate(part, resolve_constant) for part in parts]

    # string
    if is_quoted(token):
        return token[1:-1]

    return evaluate_literal(token, resolve_constant)
