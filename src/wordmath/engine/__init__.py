"""
Word math engine: vector composition and nearest-neighbour ranking.
"""

from .vector_math import (
    add_vectors,
    subtract_vectors,
    cosine_similarity,
    vector_norm,
)
from .word_math import (
    DEFAULT_LIMIT,
    compose,
    rank,
    solve,
    compute_word_math,
)

__all__ = [
    "add_vectors",
    "subtract_vectors",
    "cosine_similarity",
    "vector_norm",
    "DEFAULT_LIMIT",
    "compose",
    "rank",
    "solve",
    "compute_word_math",
]
