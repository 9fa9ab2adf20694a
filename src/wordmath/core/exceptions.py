"""
Custom exceptions for the word math module.
"""

from typing import Optional


class WordMathError(Exception):
    """Base exception for all word math errors."""
    pass


class LoadError(WordMathError):
    """
    Error loading a vocabulary source.
    
    Raised when:
    - Source is unreachable (missing file, HTTP failure)
    - Source is not a well-formed word -> vector table
    - Source parses but contains no usable rows
    
    Individual malformed rows never raise; they are dropped during ingestion.
    """
    
    def __init__(self, message: str, source_ref: Optional[str] = None):
        super().__init__(message)
        self.source_ref = source_ref


class UnknownWordError(WordMathError, KeyError):
    """
    A requested term does not exist in the active vocabulary.
    
    Carries the exact word the caller supplied (not the normalized form) so
    it can be echoed back to the user.
    """
    
    def __init__(self, word: str):
        super().__init__(f'Word not found: "{word}"')
        self.word = word
    
    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class EmptyTermsError(WordMathError, ValueError):
    """No terms were supplied to the engine."""
    
    def __init__(self, message: str = "At least one term is required"):
        super().__init__(message)


class NoVocabularyError(WordMathError):
    """The active vocabulary was used before any successful load."""
    pass


class WordMathConfigError(WordMathError):
    """
    Error in word math configuration.
    
    Raised when:
    - Configuration file is missing or not valid YAML
    - Configuration values are out of valid range
    """
    pass
