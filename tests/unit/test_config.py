"""
Unit tests for WordMathConfig.
"""

import pytest

from wordmath.config import DEFAULT_CONFIG, WordMathConfig
from wordmath.core.exceptions import WordMathConfigError


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in (
        "WORDMATH_VOCABULARY",
        "WORDMATH_EXTENDED_VOCABULARY",
        "WORDMATH_RESULT_LIMIT",
        "WORDMATH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for built-in defaults."""
    
    def test_defaults(self):
        config = WordMathConfig()
        
        assert config.result_limit == 5
        assert config.log_level == "INFO"
        assert config.vocabulary_source() == "data/embeddings.json"
        assert config.vocabulary_source(extended=True) == "data/embeddings-extended.json"
        assert config.get("converter.precision") == 4
    
    def test_defaults_not_shared(self):
        config = WordMathConfig()
        config.config["engine"]["result_limit"] = 99
        
        assert DEFAULT_CONFIG["engine"]["result_limit"] == 5
    
    def test_get_missing_key(self):
        config = WordMathConfig()
        assert config.get("nope.nothing", "fallback") == "fallback"
        assert config.get("engine.result_limit.deeper", 1) == 1


class TestYamlConfig:
    """Tests for YAML loading."""
    
    def test_file_overrides_merge(self, tmp_path):
        path = tmp_path / "wordmath.yaml"
        path.write_text(
            "vocabulary:\n"
            "  default: /srv/glove.json\n"
            "engine:\n"
            "  result_limit: 10\n",
            encoding="utf-8",
        )
        
        config = WordMathConfig(path)
        
        assert config.vocabulary_source() == "/srv/glove.json"
        assert config.vocabulary_source(extended=True) == "data/embeddings-extended.json"
        assert config.result_limit == 10
    
    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        
        assert WordMathConfig(path).result_limit == 5
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(WordMathConfigError, match="not found"):
            WordMathConfig(tmp_path / "missing.yaml")
    
    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("engine: [unclosed\n", encoding="utf-8")
        
        with pytest.raises(WordMathConfigError, match="Invalid YAML"):
            WordMathConfig(path)
    
    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        
        with pytest.raises(WordMathConfigError, match="mapping"):
            WordMathConfig(path)
    
    def test_invalid_limit(self, tmp_path):
        path = tmp_path / "limit.yaml"
        path.write_text("engine:\n  result_limit: 0\n", encoding="utf-8")
        
        with pytest.raises(WordMathConfigError, match="result_limit"):
            WordMathConfig(path)
    
    def test_invalid_dimensions(self, tmp_path):
        path = tmp_path / "dims.yaml"
        path.write_text("vocabulary:\n  dimensions: -3\n", encoding="utf-8")
        
        with pytest.raises(WordMathConfigError, match="dimensions"):
            WordMathConfig(path)


class TestEnvOverrides:
    """Tests for environment variable overrides."""
    
    def test_vocabulary_env(self, monkeypatch):
        monkeypatch.setenv("WORDMATH_VOCABULARY", "https://example.com/e.json")
        monkeypatch.setenv("WORDMATH_EXTENDED_VOCABULARY", "/tmp/big.json")
        
        config = WordMathConfig()
        
        assert config.vocabulary_source() == "https://example.com/e.json"
        assert config.vocabulary_source(extended=True) == "/tmp/big.json"
    
    def test_result_limit_env(self, monkeypatch):
        monkeypatch.setenv("WORDMATH_RESULT_LIMIT", "7")
        assert WordMathConfig().result_limit == 7
    
    def test_bad_result_limit_env(self, monkeypatch):
        monkeypatch.setenv("WORDMATH_RESULT_LIMIT", "lots")
        with pytest.raises(WordMathConfigError, match="integer"):
            WordMathConfig()
    
    def test_log_level_env(self, monkeypatch):
        monkeypatch.setenv("WORDMATH_LOG_LEVEL", "debug")
        assert WordMathConfig().log_level == "DEBUG"
    
    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("WORDMATH_LOG_LEVEL", "chatty")
        with pytest.raises(WordMathConfigError, match="logging level"):
            WordMathConfig()
