"""
Unit tests for VocabularyStore.

Tests for:
- Word normalization
- Best-effort ingestion (dimension mismatches, bad values, duplicates)
- Lookup and key ordering
- Immutability
"""

import io
import json

import pytest

from wordmath.core.exceptions import LoadError, UnknownWordError
from wordmath.vocabulary.store import VocabularyStore, normalize_word


class TestNormalizeWord:
    """Tests for normalize_word()."""
    
    def test_lowercases(self):
        assert normalize_word("King") == "king"
    
    def test_strips_whitespace(self):
        assert normalize_word("  queen\t\n") == "queen"
    
    @pytest.mark.parametrize("word", ["King", "  MAN ", "woman", "\tQuEeN\n", ""])
    def test_idempotent(self, word):
        once = normalize_word(word)
        assert normalize_word(once) == once


class TestIngestion:
    """Tests for from_mapping() / from_rows() validation."""
    
    def test_first_vector_fixes_dimensions(self):
        store = VocabularyStore.from_mapping({
            "a": [1.0, 2.0],
            "b": [1.0, 2.0, 3.0],
            "c": [3.0, 4.0],
        })
        
        assert store.dimensions == 2
        assert store.keys() == ("a", "c")
        assert store.dropped_count == 1
    
    def test_declared_dimensions(self):
        store = VocabularyStore.from_mapping(
            {"a": [1.0, 2.0], "b": [1.0, 2.0, 3.0]},
            dimensions=3,
        )
        
        assert store.keys() == ("b",)
        assert store.dimensions == 3
    
    def test_duplicate_keys_keep_first(self):
        store = VocabularyStore.from_rows([
            ("Paris", [1.0, 0.0]),
            ("paris", [0.0, 1.0]),
            (" PARIS ", [5.0, 5.0]),
        ])
        
        assert len(store) == 1
        assert store.get("paris") == (1.0, 0.0)
        assert store.dropped_count == 2
    
    def test_invalid_rows_dropped(self):
        store = VocabularyStore.from_rows([
            ("good", [1.0, 2.0]),
            ("text", "1.0 2.0"),
            ("nan", [float("nan"), 1.0]),
            ("inf", [float("inf"), 1.0]),
            ("bool", [True, False]),
            ("word", ["x", "y"]),
            ("empty", []),
            ("none", None),
            ("   ", [1.0, 2.0]),
            (42, [1.0, 2.0]),
            ("strings", ["3.5", "-1"]),
        ])
        
        assert store.keys() == ("good", "strings")
        assert store.get("strings") == (3.5, -1.0)
        assert store.dropped_count == 9
    
    def test_values_are_floats(self):
        store = VocabularyStore.from_mapping({"a": [1, 2]})
        assert store.get("a") == (1.0, 2.0)
        assert all(isinstance(v, float) for v in store.get("a"))
    
    def test_empty_mapping(self):
        store = VocabularyStore.from_mapping({})
        assert len(store) == 0
        assert store.dimensions is None
    
    def test_constructor_rejects_mixed_dimensions(self):
        with pytest.raises(ValueError, match="dimensions"):
            VocabularyStore({"a": (1.0,), "b": (1.0, 2.0)})


class TestLookup:
    """Tests for get()/lookup()/keys()."""
    
    def test_get_normalizes(self, analogy_store):
        assert analogy_store.get("  KING ") == (1.0, 0.0)
    
    def test_get_unknown(self, analogy_store):
        with pytest.raises(UnknownWordError) as exc_info:
            analogy_store.get("Xyzzy")
        assert exc_info.value.word == "Xyzzy"
    
    def test_unknown_word_is_key_error(self, analogy_store):
        with pytest.raises(KeyError):
            analogy_store.get("xyzzy")
    
    def test_lookup_returns_none(self, analogy_store):
        assert analogy_store.lookup("xyzzy") is None
        assert analogy_store.lookup("Queen") == (0.9, 0.9)
    
    def test_contains(self, analogy_store):
        assert "Woman" in analogy_store
        assert "xyzzy" not in analogy_store
        assert 3 not in analogy_store
    
    def test_keys_stable_order(self, analogy_store):
        assert analogy_store.keys() == ("king", "man", "woman", "queen")
        assert analogy_store.keys() == analogy_store.keys()
        assert list(analogy_store) == list(analogy_store.keys())
    
    def test_items(self, analogy_store):
        items = list(analogy_store.items())
        assert items[0] == ("king", (1.0, 0.0))
        assert len(items) == 4


class TestImmutability:
    """Stores are read-only snapshots."""
    
    def test_source_mapping_changes_do_not_leak(self, analogy_vectors):
        store = VocabularyStore.from_mapping(analogy_vectors)
        analogy_vectors["king"][0] = 99.0
        analogy_vectors["new"] = [1.0, 1.0]
        
        assert store.get("king") == (1.0, 0.0)
        assert "new" not in store
    
    def test_vectors_cannot_be_assigned(self, analogy_store):
        with pytest.raises(TypeError):
            analogy_store._vectors["king"] = (0.0, 0.0)


class TestLoad:
    """Tests for VocabularyStore.load()."""
    
    def test_load_json_file(self, json_vocabulary_file):
        store = VocabularyStore.load(json_vocabulary_file)
        
        assert len(store) == 4
        assert store.dimensions == 2
        assert store.source_ref == str(json_vocabulary_file)
    
    def test_load_glove_file(self, glove_file):
        store = VocabularyStore.load(glove_file)
        
        assert store.dimensions == 3
        assert "queen" in store
        assert store.get("king") == (0.50451, 0.68607, -0.59517)
        assert "short" not in store
    
    def test_load_buffer(self, analogy_vectors):
        store = VocabularyStore.load(json.dumps(analogy_vectors).encode("utf-8"))
        assert len(store) == 4
    
    def test_load_stream(self):
        store = VocabularyStore.load(io.StringIO("cat 1 0\ndog 0 1\n"))
        assert store.keys() == ("cat", "dog")
    
    def test_load_mapping(self, analogy_vectors):
        assert len(VocabularyStore.load(analogy_vectors)) == 4
    
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(LoadError, match="not found"):
            VocabularyStore.load(tmp_path / "missing.json")
    
    def test_load_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"king": [1.0, 0.0', encoding="utf-8")
        
        with pytest.raises(LoadError, match="Invalid JSON"):
            VocabularyStore.load(path)
    
    def test_load_json_not_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[[1.0, 0.0]]", encoding="utf-8")
        
        with pytest.raises(LoadError, match="must be an object"):
            VocabularyStore.load(path)
    
    def test_load_no_usable_rows(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text('{"king": "not a vector"}', encoding="utf-8")
        
        with pytest.raises(LoadError, match="no usable entries"):
            VocabularyStore.load(path)
    
    def test_oversized_number_drops_only_its_row(self, tmp_path):
        """Test a value too large for a float drops its row, not the load."""
        path = tmp_path / "huge.json"
        path.write_text(
            '{"king": [1.0, 0.0], "bad": [1' + "0" * 400 + ', 0.0], "queen": [0.9, 0.9]}',
            encoding="utf-8",
        )
        
        store = VocabularyStore.load(path)
        
        assert store.keys() == ("king", "queen")
        assert store.dropped_count == 1
    
    def test_integer_past_digit_limit(self, tmp_path):
        """Test an integer literal json cannot parse surfaces as LoadError."""
        path = tmp_path / "digits.json"
        path.write_text('{"bad": [1' + "0" * 5000 + "]}", encoding="utf-8")
        
        with pytest.raises(LoadError):
            VocabularyStore.load(path)
    
    def test_load_error_carries_source(self, tmp_path):
        missing = tmp_path / "missing.json"
        with pytest.raises(LoadError) as exc_info:
            VocabularyStore.load(missing)
        assert exc_info.value.source_ref == str(missing)
