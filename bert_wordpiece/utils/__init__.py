"""
Utility helpers for character classification and tokenization statistics.
"""

from .text import (
    is_whitespace,
    is_control,
    is_punctuation,
    is_cjk_codepoint,
    whitespace_tokenize
)
from .metrics import TokenizationStats, compute_tokenization_stats

__all__ = [
    'is_whitespace',
    'is_control',
    'is_punctuation',
    'is_cjk_codepoint',
    'whitespace_tokenize',
    'TokenizationStats',
    'compute_tokenization_stats'
]
