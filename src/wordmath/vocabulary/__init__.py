"""
Vocabulary subpackage: source resolution and the immutable word -> vector store.
"""

from .store import VocabularyStore, normalize_word
from .sources import describe_source, read_rows

__all__ = [
    "VocabularyStore",
    "normalize_word",
    "describe_source",
    "read_rows",
]
