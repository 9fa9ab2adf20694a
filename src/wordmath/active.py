"""
Active vocabulary - the store currently served to callers.

Reloading builds a complete new VocabularyStore first and then swaps the
reference under a lock. A reader takes the reference once per call, so it
sees either the old store or the new one in full. A failed load leaves the
previous store in place.
"""

import logging
import threading
from typing import Any, List, Optional, Sequence

from .core.exceptions import LoadError, NoVocabularyError
from .core.types import RankedMatch, TermLike, WordMathResult
from .engine.word_math import DEFAULT_LIMIT, solve
from .vocabulary.sources import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, describe_source
from .vocabulary.store import VocabularyStore


logger = logging.getLogger(__name__)


class ActiveVocabulary:
    """
    Owner of the active VocabularyStore.
    
    Example:
        >>> vocab = ActiveVocabulary()
        >>> vocab.load_vocabulary("data/embeddings.json")
        True
        >>> vocab.compute_word_math([{"word": "king", "sign": 1},
        ...                          {"word": "man", "sign": -1},
        ...                          {"word": "woman", "sign": 1}])
    """
    
    def __init__(
        self,
        store: Optional[VocabularyStore] = None,
        default_limit: int = DEFAULT_LIMIT,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """
        Args:
            store: Initial store (optional)
            default_limit: Result count when compute_word_math gets no limit
            timeout: HTTP timeout for URL sources
            max_retries: HTTP attempts for URL sources
        """
        self._store = store
        self._swap_lock = threading.Lock()
        self._load_lock = threading.Lock()
        self.default_limit = default_limit
        self.timeout = timeout
        self.max_retries = max_retries
        self.last_error: Optional[LoadError] = None
    
    @property
    def store(self) -> VocabularyStore:
        """
        The current store snapshot.
        
        Raises:
            NoVocabularyError: If nothing has been loaded yet
        """
        store = self._store
        if store is None:
            raise NoVocabularyError("No vocabulary has been loaded")
        return store
    
    @property
    def is_loaded(self) -> bool:
        return self._store is not None
    
    def replace(self, store: VocabularyStore) -> Optional[VocabularyStore]:
        """Swap in a fully built store; returns the previous one."""
        with self._swap_lock:
            previous, self._store = self._store, store
        return previous
    
    def load(self, source: Any, dimensions: Optional[int] = None) -> VocabularyStore:
        """
        Load a new store from a source and make it active.
        
        Loads are serialized; readers keep using the current store while a
        load is in progress.
        
        Raises:
            LoadError: If the source could not be loaded (the current store
                stays active)
        """
        with self._load_lock:
            store = VocabularyStore.load(
                source,
                dimensions=dimensions,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
            self.replace(store)
        return store
    
    def load_vocabulary(self, source_ref: Any, dimensions: Optional[int] = None) -> bool:
        """
        Load a vocabulary, reporting success or failure as a boolean.
        
        The LoadError of a failed attempt is kept on `last_error`.
        """
        try:
            self.load(source_ref, dimensions=dimensions)
        except LoadError as e:
            self.last_error = e
            logger.error(
                f"Failed to load vocabulary: {e}",
                extra={"source_ref": describe_source(source_ref)},
            )
            return False
        
        self.last_error = None
        return True
    
    def solve(self, terms: Sequence[TermLike], limit: Optional[int] = None) -> WordMathResult:
        """Solve against the current store snapshot."""
        return solve(self.store, terms, self.default_limit if limit is None else limit)
    
    def compute_word_math(
        self,
        terms: Sequence[TermLike],
        limit: Optional[int] = None,
    ) -> List[RankedMatch]:
        """
        Solve a word math expression against the active vocabulary.
        
        Raises:
            NoVocabularyError: If nothing has been loaded yet
            EmptyTermsError: If no terms were supplied
            UnknownWordError: If a word is missing from the vocabulary
        """
        return self.solve(terms, limit).matches
