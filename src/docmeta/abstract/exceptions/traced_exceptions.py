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
Description: Base exception carrying structured details, and a helper to render any
            exception with its traceback.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"


import traceback
from typing import Any


def format_exception(e: BaseException, *, chain: bool = True) -> str:
    """Format the provided exception to a string with its traceback.

    Args:
        e (BaseException): The exception to format.
        chain (bool): Whether the causes and contexts of the exception are rendered too.

    Returns:
        str: The string representation of the exception with its traceback.
    """
    return "".join(
        traceback.format_exception(type(e), e, e.__traceback__, chain=chain)
    )


class TracedException(Exception):
    """Base traceable exception class.

    Keyword arguments given at construction are kept in `details`, so that a handler can tell
    what failed without parsing the message.

    Examples:
        >>> e = TracedException("bad tag", tag="Foo")
        >>> e.details
        {'tag': 'Foo'}
    """

    def __init__(self, *args: Any, **details: Any) -> None:
        super().__init__(*args)
        self.details: dict[str, Any] = details

    def traceback_format(self, *, chain: bool = True) -> str:
        """Format the exception to a string with its traceback.

        Args:
            chain (bool): Whether the causes and contexts are rendered too.

        Returns:
            str: The string representation of the exception with its traceback.
        """
        return format_exception(self, chain=chain)
