"""
Configuration for word math.
"""

from .config_loader import DEFAULT_CONFIG, WordMathConfig

__all__ = ["DEFAULT_CONFIG", "WordMathConfig"]
