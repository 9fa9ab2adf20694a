"""
Core types for word math.

Defines the signed term supplied by callers, the ranked match returned by
the engine, and the richer result record used by the CLI.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Sequence, Tuple, Union


Vector = Tuple[float, ...]


class Sign(Enum):
    """Operator applied to a term's vector."""
    PLUS = 1
    MINUS = -1
    
    @classmethod
    def from_symbol(cls, symbol: str) -> "Sign":
        """Map an operator symbol ('+', '-' or the unicode minus) to a Sign."""
        if symbol == "+":
            return cls.PLUS
        if symbol in ("-", "−"):
            return cls.MINUS
        raise ValueError(f"Unknown operator: {symbol!r}")
    
    @property
    def symbol(self) -> str:
        return "+" if self is Sign.PLUS else "-"


@dataclass(frozen=True)
class Term:
    """
    A signed word operand.
    
    Attributes:
        word: Word as supplied by the caller (normalized at lookup time)
        sign: PLUS to add the word's vector, MINUS to subtract it. Ignored
            for the first term of an expression, which always seeds the sum.
    """
    word: str
    sign: Sign = Sign.PLUS
    
    def __post_init__(self):
        if not isinstance(self.sign, Sign):
            # Accept +1 / -1 from callers that do not import Sign
            object.__setattr__(self, "sign", Sign(self.sign))
    
    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "sign": self.sign.value}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Term":
        """Create from a {word, sign} or {word, op} dictionary."""
        if "op" in data:
            return cls(word=data["word"], sign=Sign.from_symbol(data["op"]))
        return cls(word=data["word"], sign=Sign(data.get("sign", 1)))


@dataclass(frozen=True)
class RankedMatch:
    """A vocabulary word and its cosine similarity to the query vector."""
    word: str
    similarity: float
    
    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "similarity": self.similarity}


@dataclass
class WordMathResult:
    """
    Outcome of solving a word math expression.
    
    Attributes:
        terms: Terms as supplied
        matches: Ranked matches, best first
        excluded: Normalized input words left out of the ranking
        total_candidates: Vocabulary entries scored after exclusion
    """
    terms: List[Term]
    matches: List[RankedMatch]
    excluded: FrozenSet[str] = field(default_factory=frozenset)
    total_candidates: int = 0
    
    @property
    def expression(self) -> str:
        """Render the terms as 'king - man + woman'."""
        parts: List[str] = []
        for index, term in enumerate(self.terms):
            if index > 0:
                parts.append(term.sign.symbol)
            parts.append(term.word)
        return " ".join(parts)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "expression": self.expression,
            "terms": [t.to_dict() for t in self.terms],
            "matches": [m.to_dict() for m in self.matches],
            "excluded": sorted(self.excluded),
            "total_candidates": self.total_candidates,
        }


TermLike = Union[Term, Dict[str, Any]]


def coerce_terms(terms: Sequence[TermLike]) -> List[Term]:
    """Accept Term instances or plain {word, sign} dictionaries."""
    return [t if isinstance(t, Term) else Term.from_dict(t) for t in terms]
