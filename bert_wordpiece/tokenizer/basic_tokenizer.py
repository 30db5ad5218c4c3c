"""
Basic tokenization: text cleaning, normalization and coarse splitting.

This is the first stage of the BERT pipeline. It turns raw text into
word-like units ready for WordPiece matching:

Input text: "Héllo,  World!"
→ After cleaning: "Héllo,  World!"
→ After whitespace split: ["Héllo,", "World!"]
→ After case folding: ["hello,", "world!"]
→ After punctuation split: ["hello", ",", "world", "!"]
"""

import unicodedata
from typing import Iterable, List, Optional

from ..utils.text import (
    is_cjk_codepoint,
    is_control,
    is_punctuation,
    is_whitespace,
    whitespace_tokenize
)


class BasicTokenizer:
    """
    Runs basic tokenization (punctuation splitting, lower casing, etc.).

    Args:
        do_lower_case: Lowercase the input.
        never_split: Tokens that are never lowercased, accent-stripped or
            split. Matched verbatim (case-sensitive) against whitespace
            delimited words.
        tokenize_chinese_chars: Surround CJK ideographs with whitespace so
            each becomes its own unit.
        strip_accents: Strip combining marks after canonical decomposition.
            None follows `do_lower_case`.
    """

    def __init__(
        self,
        do_lower_case: bool = True,
        never_split: Optional[Iterable[str]] = None,
        tokenize_chinese_chars: bool = True,
        strip_accents: Optional[bool] = None
    ):
        self.do_lower_case = do_lower_case
        self.never_split = frozenset(never_split or ())
        self.tokenize_chinese_chars = tokenize_chinese_chars
        self.strip_accents = do_lower_case if strip_accents is None else strip_accents

    def tokenize(self, text: str) -> List[str]:
        """
        Split `text` into normalized units.

        Args:
            text: Raw input text.

        Returns:
            Ordered list of non-empty units. Empty input yields [].
        """
        text = self._clean_text(text)
        if self.tokenize_chinese_chars:
            text = self._tokenize_chinese_chars(text)

        split_tokens = []
        for token in whitespace_tokenize(text):
            if token in self.never_split:
                split_tokens.append(token)
                continue
            if self.do_lower_case:
                token = token.lower()
            if self.strip_accents:
                token = self._run_strip_accents(token)
            split_tokens.extend(self._run_split_on_punc(token))

        # accent stripping can leave units that are now empty or contain
        # fresh separators
        return whitespace_tokenize(" ".join(split_tokens))

    def _run_strip_accents(self, text: str) -> str:
        """Strip nonspacing marks from a piece of text."""
        text = unicodedata.normalize("NFD", text)
        return "".join(char for char in text if unicodedata.category(char) != "Mn")

    def _run_split_on_punc(self, text: str) -> List[str]:
        """Split punctuation off a piece of text."""
        output: List[List[str]] = []
        start_new_word = True
        for char in text:
            if is_punctuation(char):
                output.append([char])
                start_new_word = True
            else:
                if start_new_word:
                    output.append([])
                start_new_word = False
                output[-1].append(char)
        return ["".join(chars) for chars in output]

    def _tokenize_chinese_chars(self, text: str) -> str:
        """Add whitespace around any CJK character."""
        output = []
        for char in text:
            if is_cjk_codepoint(ord(char)):
                output.append(" ")
                output.append(char)
                output.append(" ")
            else:
                output.append(char)
        return "".join(output)

    def _clean_text(self, text: str) -> str:
        """Remove invalid characters and normalize whitespace."""
        output = []
        for char in text:
            cp = ord(char)
            if cp == 0 or cp == 0xFFFD or is_control(char):
                continue
            if is_whitespace(char):
                output.append(" ")
            else:
                output.append(char)
        return "".join(output)
