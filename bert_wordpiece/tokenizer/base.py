"""
Base tokenizer interface.

Tokenization schemes implement this class so callers can swap them
without changing how they are used.
"""

from abc import ABC, abstractmethod
from typing import List


class Tokenizer(ABC):
    """
    Abstract base class for tokenizers.

    All tokenizers must implement:
    - tokenize(): Split text into token strings
    - convert_tokens_to_ids(): Map token strings to vocabulary ids
    - convert_ids_to_tokens(): Map vocabulary ids back to token strings

    And provide:
    - vocab_size: Number of tokens in the vocabulary
    """

    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        """Split `text` into a list of token strings."""
        pass

    @abstractmethod
    def convert_tokens_to_ids(self, tokens: List[str]) -> List[int]:
        """Convert token strings to ids."""
        pass

    @abstractmethod
    def convert_ids_to_tokens(self, ids: List[int]) -> List[str]:
        """Convert ids to token strings."""
        pass

    @property
    @abstractmethod
    def vocab_size(self) -> int:
        """Number of tokens in the vocabulary."""
        pass

    def __len__(self) -> int:
        return self.vocab_size
