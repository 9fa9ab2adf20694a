"""
Core subpackage for word math.

Contains types, exceptions, and logging utilities.
"""

from .types import (
    Vector,
    Sign,
    Term,
    RankedMatch,
    WordMathResult,
)
from .exceptions import (
    WordMathError,
    LoadError,
    UnknownWordError,
    EmptyTermsError,
    NoVocabularyError,
    WordMathConfigError,
)

__all__ = [
    # Types
    "Vector",
    "Sign",
    "Term",
    "RankedMatch",
    "WordMathResult",
    # Exceptions
    "WordMathError",
    "LoadError",
    "UnknownWordError",
    "EmptyTermsError",
    "NoVocabularyError",
    "WordMathConfigError",
]
