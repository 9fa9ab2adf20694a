"""
Shared test fixtures and configuration for pytest.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


ANALOGY_VECTORS = {
    "king": [1.0, 0.0],
    "man": [0.0, 1.0],
    "woman": [1.0, 1.0],
    "queen": [0.9, 0.9],
}


# ============================================================================
# Pytest hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def analogy_vectors() -> dict:
    """The four-word king/man/woman/queen vocabulary."""
    return {word: list(vector) for word, vector in ANALOGY_VECTORS.items()}


@pytest.fixture
def analogy_store(analogy_vectors):
    """VocabularyStore built from the four-word analogy vocabulary."""
    from wordmath.vocabulary.store import VocabularyStore
    
    return VocabularyStore.from_mapping(analogy_vectors)


@pytest.fixture
def compass_store():
    """Store with unit vectors in a few directions plus a zero vector."""
    from wordmath.vocabulary.store import VocabularyStore
    
    return VocabularyStore.from_mapping({
        "east": [1.0, 0.0],
        "north": [0.0, 1.0],
        "west": [-1.0, 0.0],
        "south": [0.0, -1.0],
        "northeast": [1.0, 1.0],
        "void": [0.0, 0.0],
    })


@pytest.fixture
def json_vocabulary_file(tmp_path, analogy_vectors) -> Path:
    """Analogy vocabulary written as a JSON table."""
    path = tmp_path / "embeddings.json"
    path.write_text(json.dumps(analogy_vectors), encoding="utf-8")
    return path


@pytest.fixture
def glove_file(tmp_path) -> Path:
    """Small GloVe-style text file with 3-dimensional vectors."""
    path = tmp_path / "glove.test.3d.txt"
    path.write_text(
        "the 0.418 0.24968 -0.41242\n"
        ", 0.013441 0.23682 -0.16899\n"
        "King 0.50451 0.68607 -0.59517\n"
        "king 0.1 0.2 0.3\n"
        "queen 0.37854 1.8233 -1.2648\n"
        "2010 0.1 0.2 0.3\n"
        "café 0.1 0.2 0.3\n"
        "short 0.1 0.2\n"
        "man 0.12345678 -0.5 0.25\n",
        encoding="utf-8",
    )
    return path
