"""
BERT WordPiece tokenization package.

Converts raw text into WordPiece subword tokens and vocabulary ids using
the two-stage BERT pipeline (basic tokenization followed by greedy
longest-match-first subword matching).
"""

from . import tokenizer
from . import utils

__version__ = "0.1.0"

__all__ = [
    'tokenizer',
    'utils'
]
