"""
Tokenizer package for BERT WordPiece tokenization.
"""

from .errors import TokenizerError, VocabularyLoadError, UnknownTokenError
from .vocab import Vocabulary
from .config import BertTokenizerConfig
from .base import Tokenizer
from .basic_tokenizer import BasicTokenizer
from .wordpiece_tokenizer import WordpieceTokenizer
from .bert_tokenizer import BertTokenizer

__all__ = [
    'TokenizerError',
    'VocabularyLoadError',
    'UnknownTokenError',
    'Vocabulary',
    'BertTokenizerConfig',
    'Tokenizer',
    'BasicTokenizer',
    'WordpieceTokenizer',
    'BertTokenizer'
]
