"""
Embedding converter - turn a GloVe text corpus into a compact JSON table.

The output is the JSON object format VocabularyStore.load reads:
{"word": [v1, v2, ...], ...}

Filtering rules:
- Only purely alphabetic ASCII words are kept
- Words are lowercased; later case variants of a kept word are skipped
- Rows whose length differs from the expected dimensions are skipped
- Values are rounded half up to a fixed number of decimals to bound file size
"""

import json
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union


logger = logging.getLogger(__name__)

ALPHA_WORD = re.compile(r"^[a-z]+$", re.IGNORECASE)
DIMENSIONS_IN_NAME = re.compile(r"(\d+)d")

DEFAULT_MAX_WORDS = 10000
DEFAULT_PRECISION = 4
PROGRESS_INTERVAL = 5000


@dataclass
class ConversionStats:
    """
    Summary of a conversion run.
    
    Attributes:
        words: Number of words written
        dimensions: Expected vector length, if known
        skipped: Lines rejected by the filters
        sample_words: First few words written
        output_path: Where the table was written (None if not written)
        size_bytes: Size of the written file
    """
    words: int = 0
    dimensions: Optional[int] = None
    skipped: int = 0
    sample_words: List[str] = field(default_factory=list)
    output_path: Optional[Path] = None
    size_bytes: int = 0
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "words": self.words,
            "dimensions": self.dimensions if self.dimensions is not None else "unknown",
            "skipped": self.skipped,
            "sample_words": self.sample_words,
            "output_path": str(self.output_path) if self.output_path else None,
            "size_bytes": self.size_bytes,
        }


def round_half_up(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """
    Round with halves going up (toward +inf), so 2.5 -> 3 and -2.5 -> -2.
    
    Built-in round() rounds halves to even instead.
    """
    scale = 10 ** precision
    return math.floor(value * scale + 0.5) / scale


def dimensions_from_filename(path: Union[str, Path]) -> Optional[int]:
    """Infer dimensions from names like 'glove.6B.100d.txt'."""
    match = DIMENSIONS_IN_NAME.search(Path(path).name)
    return int(match.group(1)) if match else None


def convert_lines(
    lines: Iterable[str],
    max_words: int = DEFAULT_MAX_WORDS,
    expected_dimensions: Optional[int] = None,
    precision: int = DEFAULT_PRECISION,
    stats: Optional[ConversionStats] = None,
) -> Dict[str, List[float]]:
    """
    Filter and round GloVe lines into a word -> vector table.
    
    Args:
        lines: 'word v1 ... vN' lines, most frequent words first
        max_words: Stop after this many words are kept
        expected_dimensions: Reject rows of any other length (optional)
        precision: Decimal places to keep
        stats: Optional stats record to fill in
        
    Returns:
        Table in input order
    """
    stats = stats if stats is not None else ConversionStats()
    stats.dimensions = expected_dimensions
    embeddings: Dict[str, List[float]] = {}
    
    for line in lines:
        if len(embeddings) >= max_words:
            break
        
        parts = line.rstrip("\n").split(" ")
        word = parts[0]
        
        if not ALPHA_WORD.match(word):
            stats.skipped += 1
            continue
        
        lower_word = word.lower()
        if lower_word in embeddings:
            stats.skipped += 1
            continue
        
        try:
            vector = [float(v) for v in parts[1:]]
        except ValueError:
            stats.skipped += 1
            continue
        
        if not vector or (expected_dimensions and len(vector) != expected_dimensions):
            stats.skipped += 1
            continue
        
        embeddings[lower_word] = [round_half_up(v, precision) for v in vector]
        
        if len(embeddings) % PROGRESS_INTERVAL == 0:
            logger.info(f"Processed {len(embeddings)} words...")
    
    stats.words = len(embeddings)
    stats.sample_words = list(embeddings)[:10]
    return embeddings


def convert_glove_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    max_words: int = DEFAULT_MAX_WORDS,
    expected_dimensions: Optional[int] = None,
    precision: int = DEFAULT_PRECISION,
) -> ConversionStats:
    """
    Convert a GloVe text file into a JSON vocabulary table.
    
    Args:
        input_path: GloVe text file
        output_path: JSON file to write (parent directories are created)
        max_words: Maximum number of words to keep
        expected_dimensions: Vector length; inferred from the file name if omitted
        precision: Decimal places to keep
        
    Returns:
        ConversionStats for the run
        
    Raises:
        FileNotFoundError: If the input file does not exist
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    
    if not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    
    if expected_dimensions is None:
        expected_dimensions = dimensions_from_filename(input_path)
    
    logger.info(f"Processing {input_path}...")
    logger.info(f"Target: {max_words} words")
    
    stats = ConversionStats()
    with open(input_path, "r", encoding="utf-8") as f:
        embeddings = convert_lines(
            f,
            max_words=max_words,
            expected_dimensions=expected_dimensions,
            precision=precision,
            stats=stats,
        )
    
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(embeddings, f, separators=(",", ":"))
    
    stats.output_path = output_path
    stats.size_bytes = output_path.stat().st_size
    
    logger.info(
        f"Total words processed: {stats.words}",
        extra={"source_ref": str(input_path), "dimensions": expected_dimensions},
    )
    return stats
