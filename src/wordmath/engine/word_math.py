"""
Word Math Engine - compose signed word vectors and rank the vocabulary.

Implements:
- Composition of a term list into a single query vector
- Exhaustive cosine-similarity ranking with exclusion of the input words
- Deterministic ordering: similarity descending, then word ascending

The engine holds no state; callers pass the VocabularyStore they own.
"""

import logging
import time
from typing import AbstractSet, Iterable, List, Sequence, Tuple

from ..core.exceptions import EmptyTermsError
from ..core.types import RankedMatch, Sign, TermLike, Vector, WordMathResult, coerce_terms
from ..vocabulary.store import VocabularyStore, normalize_word
from .vector_math import add_vectors, cosine_similarity, subtract_vectors, vector_norm


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def compose(store: VocabularyStore, terms: Sequence[TermLike]) -> Vector:
    """
    Fold the terms' vectors into a single query vector.
    
    Every word is resolved before any arithmetic runs, so an unknown word
    never produces a partial result. The first term seeds the accumulator
    regardless of its sign.
    
    Args:
        store: Vocabulary to resolve words against
        terms: Signed terms in expression order
        
    Returns:
        The composed vector
        
    Raises:
        EmptyTermsError: If no terms were supplied
        UnknownWordError: For the first word missing from the store
    """
    terms = coerce_terms(terms)
    if not terms:
        raise EmptyTermsError()
    
    resolved = [(term, store.get(term.word)) for term in terms]
    
    result = resolved[0][1]
    for term, vector in resolved[1:]:
        if term.sign is Sign.PLUS:
            result = add_vectors(result, vector)
        else:
            result = subtract_vectors(result, vector)
    
    return result


def _score_candidates(
    store: VocabularyStore,
    query_vector: Sequence[float],
    excluded: AbstractSet[str],
) -> Tuple[List[Tuple[str, float]], int]:
    """Score every non-excluded word; zero-norm candidates are skipped."""
    scored = []
    candidates = 0
    for word, vector in store.items():
        if word in excluded:
            continue
        candidates += 1
        similarity = cosine_similarity(query_vector, vector)
        if similarity is None:
            continue
        scored.append((word, similarity))
    return scored, candidates


def _normalize_exclusions(exclude_words: Iterable[str]) -> frozenset:
    return frozenset(normalize_word(w) for w in exclude_words)


def rank(
    store: VocabularyStore,
    query_vector: Sequence[float],
    exclude_words: Iterable[str] = (),
    limit: int = DEFAULT_LIMIT,
) -> List[RankedMatch]:
    """
    Rank vocabulary words by cosine similarity to a query vector.
    
    Args:
        store: Vocabulary to scan
        query_vector: Vector to compare against
        exclude_words: Words never returned (compared after normalization)
        limit: Maximum number of matches
        
    Returns:
        Up to `limit` matches, best first. Ties are broken by word so the
        ordering is reproducible. A zero query vector matches nothing.
        
    Raises:
        ValueError: If limit is less than 1
    """
    return _rank(store, query_vector, _normalize_exclusions(exclude_words), limit)[0]


def _rank(
    store: VocabularyStore,
    query_vector: Sequence[float],
    excluded: AbstractSet[str],
    limit: int,
) -> Tuple[List[RankedMatch], int]:
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    
    if vector_norm(query_vector) == 0:
        logger.warning("Composed vector has zero norm; no similarity is defined")
        return [], sum(1 for w in store.keys() if w not in excluded)
    
    scored, candidates = _score_candidates(store, query_vector, excluded)
    scored.sort(key=lambda item: (-item[1], item[0]))
    
    return [RankedMatch(word=w, similarity=s) for w, s in scored[:limit]], candidates


def solve(
    store: VocabularyStore,
    terms: Sequence[TermLike],
    limit: int = DEFAULT_LIMIT,
) -> WordMathResult:
    """
    Compose the terms and rank the vocabulary, excluding the input words.
    
    Raises:
        EmptyTermsError: If no terms were supplied
        UnknownWordError: If a word is missing from the store
        ValueError: If limit is less than 1
    """
    start_time = time.time()
    terms = coerce_terms(terms)
    
    query_vector = compose(store, terms)
    excluded = _normalize_exclusions(t.word for t in terms)
    matches, candidates = _rank(store, query_vector, excluded, limit)
    
    execution_ms = int((time.time() - start_time) * 1000)
    logger.debug(
        f"Ranked {candidates} candidates in {execution_ms}ms",
        extra={"term_count": len(terms), "vocabulary_size": len(store)},
    )
    
    return WordMathResult(
        terms=terms,
        matches=matches,
        excluded=excluded,
        total_candidates=candidates,
    )


def compute_word_math(
    store: VocabularyStore,
    terms: Sequence[TermLike],
    limit: int = DEFAULT_LIMIT,
) -> List[RankedMatch]:
    """
    Solve a word math expression such as king - man + woman.
    
    Args:
        store: Vocabulary to resolve and rank against
        terms: Signed terms; plain {"word", "sign"} dicts are accepted
        limit: Maximum number of matches (default 5)
        
    Returns:
        Ranked matches, best first, never containing an input word
    """
    return solve(store, terms, limit).matches
