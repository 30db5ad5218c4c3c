"""
Exception types raised by the tokenizer package.
"""

from typing import Optional, Union


class TokenizerError(Exception):
    """Base class for all tokenizer errors."""


class VocabularyLoadError(TokenizerError):
    """Raised when a vocabulary source cannot be read or is empty."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class UnknownTokenError(TokenizerError, KeyError):
    """Raised when a token or id has no entry in the vocabulary."""

    def __init__(self, token: Union[str, int]):
        kind = "id" if isinstance(token, int) else "token"
        super().__init__(f"{kind} {token!r} is not in the vocabulary")
        self.token = token

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]
