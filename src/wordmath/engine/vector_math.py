"""
Vector primitives for word math.

Plain-Python float arithmetic over equal-length sequences.
"""

import math
from typing import Optional, Sequence

from ..core.types import Vector


def _check_dimensions(vec_a: Sequence[float], vec_b: Sequence[float]) -> None:
    if len(vec_a) != len(vec_b):
        raise ValueError(f"Vector dimensions must match: {len(vec_a)} != {len(vec_b)}")


def add_vectors(vec_a: Sequence[float], vec_b: Sequence[float]) -> Vector:
    """Element-wise a + b."""
    _check_dimensions(vec_a, vec_b)
    return tuple(a + b for a, b in zip(vec_a, vec_b))


def subtract_vectors(vec_a: Sequence[float], vec_b: Sequence[float]) -> Vector:
    """Element-wise a - b."""
    _check_dimensions(vec_a, vec_b)
    return tuple(a - b for a, b in zip(vec_a, vec_b))


def vector_norm(vec: Sequence[float]) -> float:
    """Euclidean (L2) norm."""
    return math.sqrt(sum(v * v for v in vec))


def dot_product(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    _check_dimensions(vec_a, vec_b)
    return sum(a * b for a, b in zip(vec_a, vec_b))


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> Optional[float]:
    """
    Compute cosine similarity between two vectors.
    
    Args:
        vec_a: First vector
        vec_b: Second vector
        
    Returns:
        Similarity in [-1, 1], or None when either vector has zero norm
        
    Raises:
        ValueError: If vectors have different dimensions or are empty
    """
    if not vec_a or not vec_b:
        raise ValueError("Vectors cannot be empty")
    
    dot = dot_product(vec_a, vec_b)
    magnitude_a = vector_norm(vec_a)
    magnitude_b = vector_norm(vec_b)
    
    if magnitude_a == 0 or magnitude_b == 0:
        return None
    
    # Rounding can push |cos| slightly past 1
    return max(-1.0, min(1.0, dot / (magnitude_a * magnitude_b)))
