"""
Vocabulary Store - normalized word -> embedding vector lookup.

A VocabularyStore is an immutable snapshot: it is built once from a source
and never mutated afterwards. Reloading builds a new store; see
ActiveVocabulary for the atomic swap.

Ingestion rules:
- Keys are lowercased and stripped; the first row for a normalized key wins
- The first valid vector fixes the dimensionality unless one is declared
- Rows with a mismatched length, non-numeric or non-finite values, or an
  empty key are dropped and counted, never fatal
"""

import collections.abc
import logging
import math
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from ..core.exceptions import LoadError, UnknownWordError
from ..core.types import Vector
from .sources import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, describe_source, read_rows


logger = logging.getLogger(__name__)


def normalize_word(word: str) -> str:
    """
    Fold a word to its lookup key.
    
    Idempotent: normalize_word(normalize_word(w)) == normalize_word(w).
    """
    return word.strip().lower()


def _coerce_vector(values: Any) -> Optional[Vector]:
    """Convert raw row values to a float tuple, or None if the row is unusable."""
    if isinstance(values, (str, bytes)) or not isinstance(values, collections.abc.Iterable):
        return None
    
    vector = []
    for value in values:
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        vector.append(number)
    
    if not vector:
        return None
    return tuple(vector)


class VocabularyStore:
    """
    Read-only mapping of normalized word to embedding vector.
    
    All vectors share the same dimensionality. Iteration order (and the
    order of keys()) is ingestion order, stable for the life of the store.
    """
    
    def __init__(
        self,
        vectors: Mapping[str, Vector],
        dimensions: Optional[int] = None,
        source_ref: Optional[str] = None,
        dropped_count: int = 0,
    ):
        """
        Wrap already-validated vectors.
        
        Use from_mapping() or load() to ingest raw data.
        
        Args:
            vectors: Normalized word -> float tuple, all of equal length
            dimensions: Vector length (inferred from the first vector if omitted)
            source_ref: Label of the source the store was built from
            dropped_count: Number of rows rejected during ingestion
        """
        data = dict(vectors)
        if dimensions is None and data:
            dimensions = len(next(iter(data.values())))
        
        for word, vector in data.items():
            if len(vector) != dimensions:
                raise ValueError(
                    f"Vector for {word!r} has {len(vector)} dimensions, expected {dimensions}"
                )
        
        self._vectors = MappingProxyType(data)
        self._keys = tuple(data)
        self._dimensions = dimensions
        self.source_ref = source_ref
        self.dropped_count = dropped_count
    
    # =========================================================================
    # Construction
    # =========================================================================
    
    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Tuple[Any, Any]],
        dimensions: Optional[int] = None,
        source_ref: Optional[str] = None,
    ) -> "VocabularyStore":
        """
        Ingest raw (word, values) rows with best-effort validation.
        
        Args:
            rows: Raw rows in source order
            dimensions: Declared dimensionality; inferred from the first
                valid row if omitted
            source_ref: Label used in logs and on the resulting store
        """
        vectors = {}
        dropped = 0
        
        for raw_word, values in rows:
            if not isinstance(raw_word, str) or not normalize_word(raw_word):
                logger.debug(f"Dropping row with invalid key: {raw_word!r}")
                dropped += 1
                continue
            
            word = normalize_word(raw_word)
            if word in vectors:
                logger.debug(f"Dropping duplicate entry for {word!r}")
                dropped += 1
                continue
            
            vector = _coerce_vector(values)
            if vector is None:
                logger.debug(f"Dropping {word!r}: vector is not a list of finite numbers")
                dropped += 1
                continue
            
            if dimensions is None:
                dimensions = len(vector)
            elif len(vector) != dimensions:
                logger.debug(
                    f"Dropping {word!r}: {len(vector)} dimensions, expected {dimensions}"
                )
                dropped += 1
                continue
            
            vectors[word] = vector
        
        if dropped:
            logger.info(
                f"Dropped {dropped} malformed or duplicate vocabulary rows",
                extra={"source_ref": source_ref, "dropped": dropped},
            )
        
        return cls(vectors, dimensions=dimensions, source_ref=source_ref, dropped_count=dropped)
    
    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        dimensions: Optional[int] = None,
    ) -> "VocabularyStore":
        """Build a store from an in-memory word -> vector mapping."""
        return cls.from_rows(
            mapping.items(),
            dimensions=dimensions,
            source_ref=describe_source(mapping),
        )
    
    @classmethod
    def load(
        cls,
        source: Any,
        dimensions: Optional[int] = None,
        fmt: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> "VocabularyStore":
        """
        Load a vocabulary from any supported source.
        
        Args:
            source: Path, URL, bytes buffer, file-like object or mapping
            dimensions: Declared dimensionality (optional)
            fmt: Force 'json' or 'text' parsing
            timeout: HTTP timeout for URL sources
            max_retries: HTTP attempts for URL sources
            
        Returns:
            A new VocabularyStore
            
        Raises:
            LoadError: If the source cannot be retrieved, is not well-formed,
                or yields no usable rows
        """
        source_ref = describe_source(source)
        logger.info(f"Loading vocabulary from {source_ref}")
        
        rows = read_rows(source, fmt=fmt, timeout=timeout, max_retries=max_retries)
        store = cls.from_rows(rows, dimensions=dimensions, source_ref=source_ref)
        
        if not store:
            raise LoadError(f"Vocabulary source contains no usable entries: {source_ref}", source_ref)
        
        logger.info(
            f"Loaded {len(store)} words",
            extra={
                "source_ref": source_ref,
                "vocabulary_size": len(store),
                "dimensions": store.dimensions,
            },
        )
        return store
    
    # =========================================================================
    # Lookup
    # =========================================================================
    
    @property
    def dimensions(self) -> Optional[int]:
        """Shared vector length, or None for an empty store."""
        return self._dimensions
    
    def lookup(self, word: str) -> Optional[Vector]:
        """Return the vector for a word, or None if it is not in the vocabulary."""
        return self._vectors.get(normalize_word(word))
    
    def get(self, word: str) -> Vector:
        """
        Return the vector for a word.
        
        Raises:
            UnknownWordError: If the normalized word is not in the vocabulary
        """
        vector = self.lookup(word)
        if vector is None:
            raise UnknownWordError(word)
        return vector
    
    def keys(self) -> Tuple[str, ...]:
        """All normalized words, in ingestion order."""
        return self._keys
    
    def items(self) -> Iterator[Tuple[str, Vector]]:
        """Iterate (word, vector) pairs in ingestion order."""
        vectors = self._vectors
        for word in self._keys:
            yield word, vectors[word]
    
    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._vectors
    
    def __len__(self) -> int:
        return len(self._keys)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)
    
    def __repr__(self) -> str:
        return (
            f"VocabularyStore(words={len(self)}, dimensions={self._dimensions}, "
            f"source_ref={self.source_ref!r})"
        )
