"""
docmeta: Annotations declared in docstrings, discovered at runtime.

This library provides:
- Annotation kinds, declared as classes and referred to from docstring tags
- A registry resolving tag names to kinds and `Type::NAME` references to constants
- Annotated views of classes, methods and properties with lazily parsed annotations
- ConstantNamespace for immutable class-level constants
- TracedException for enhanced exception formatting
"""

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
]
