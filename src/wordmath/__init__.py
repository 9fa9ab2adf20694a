"""
Word Math

Vector arithmetic over pretrained word embeddings: combine words with + and -
and rank the vocabulary by cosine similarity to the result
(king - man + woman ≈ queen).

Key components:
- vocabulary/: source resolution, the immutable VocabularyStore, and the
  GloVe -> JSON converter
- engine/: vector primitives, compose/rank/compute_word_math
- active.py: ActiveVocabulary, atomic replacement of the served store
- config/: YAML configuration with environment overrides
- cli.py: command line entry point
"""

from .active import ActiveVocabulary
from .core.exceptions import (
    EmptyTermsError,
    LoadError,
    NoVocabularyError,
    UnknownWordError,
    WordMathError,
)
from .core.types import RankedMatch, Sign, Term, WordMathResult
from .engine.word_math import compose, compute_word_math, rank, solve
from .vocabulary.store import VocabularyStore, normalize_word

__version__ = "0.1.0"

__all__ = [
    "ActiveVocabulary",
    "VocabularyStore",
    "normalize_word",
    "Term",
    "Sign",
    "RankedMatch",
    "WordMathResult",
    "compose",
    "rank",
    "solve",
    "compute_word_math",
    "WordMathError",
    "LoadError",
    "UnknownWordError",
    "EmptyTermsError",
    "NoVocabularyError",
]
