"""
Configuration loader for word math.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.exceptions import WordMathConfigError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "vocabulary": {
        "default": "data/embeddings.json",
        "extended": "data/embeddings-extended.json",
        "dimensions": None,
        "timeout": 30,
        "max_retries": 3,
    },
    "engine": {
        "result_limit": 5,
    },
    "converter": {
        "max_words": 10000,
        "precision": 4,
    },
    "logging": {
        "level": "INFO",
        "structured": False,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class WordMathConfig:
    """
    Configuration for word math.
    
    Loads a YAML file over built-in defaults, then applies environment
    variable overrides:
    - WORDMATH_VOCABULARY: default vocabulary source
    - WORDMATH_EXTENDED_VOCABULARY: extended vocabulary source
    - WORDMATH_RESULT_LIMIT: number of ranked matches
    - WORDMATH_LOG_LEVEL: logging level name
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.
        
        Args:
            config_path: Path to YAML config file (optional)
        """
        self.config_path = Path(config_path) if config_path else None
        overrides = self._load_config() if self.config_path else {}
        self.config = _merge(DEFAULT_CONFIG, overrides)
        self._apply_env_overrides()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise WordMathConfigError(f"Config file not found: {self.config_path}")
        
        logger.info(f"Loading config from: {self.config_path}")
        
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise WordMathConfigError(f"Invalid YAML in {self.config_path}: {e}") from e
        
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise WordMathConfigError(f"Config root must be a mapping: {self.config_path}")
        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to loaded config."""
        vocabulary = self.config.setdefault("vocabulary", {})
        
        default_source = os.environ.get("WORDMATH_VOCABULARY")
        if default_source:
            vocabulary["default"] = default_source
        
        extended_source = os.environ.get("WORDMATH_EXTENDED_VOCABULARY")
        if extended_source:
            vocabulary["extended"] = extended_source
        
        result_limit = os.environ.get("WORDMATH_RESULT_LIMIT")
        if result_limit:
            try:
                self.config.setdefault("engine", {})["result_limit"] = int(result_limit)
            except ValueError as e:
                raise WordMathConfigError(
                    f"WORDMATH_RESULT_LIMIT must be an integer, got {result_limit!r}"
                ) from e
        
        log_level = os.environ.get("WORDMATH_LOG_LEVEL")
        if log_level:
            self.config.setdefault("logging", {})["level"] = log_level.upper()

    def _validate(self) -> None:
        limit = self.result_limit
        if not isinstance(limit, int) or limit < 1:
            raise WordMathConfigError(f"engine.result_limit must be a positive integer, got {limit!r}")
        
        dimensions = self.get("vocabulary.dimensions")
        if dimensions is not None and (not isinstance(dimensions, int) or dimensions < 1):
            raise WordMathConfigError(
                f"vocabulary.dimensions must be a positive integer, got {dimensions!r}"
            )
        
        level = self.log_level
        if not isinstance(logging.getLevelName(level), int):
            raise WordMathConfigError(f"Unknown logging level: {level!r}")

    def get_vocabulary_config(self) -> Dict[str, Any]:
        """Get vocabulary source configuration."""
        return self.config.get("vocabulary", {})

    def get_converter_config(self) -> Dict[str, Any]:
        """Get converter configuration."""
        return self.config.get("converter", {})

    @property
    def result_limit(self) -> int:
        return self.get("engine.result_limit", 5)

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    def vocabulary_source(self, extended: bool = False) -> Optional[str]:
        """Source reference for the default or extended vocabulary."""
        return self.get("vocabulary.extended" if extended else "vocabulary.default")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dotted key."""
        keys = key.split(".")
        value = self.config
        
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        
        return value if value is not None else default
