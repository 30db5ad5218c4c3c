"""
WordPiece subword matching.

WordPiece breaks each word into the longest vocabulary pieces it can find,
scanning left to right. Pieces after the first carry the "##" prefix, which
marks them as continuations of the previous piece:

    "unaffable" → ["un", "##aff", "##able"]

A word that cannot be fully covered by the vocabulary becomes a single
unknown token; partial matches are discarded.
"""

import logging
from typing import List

from ..utils.text import whitespace_tokenize
from .vocab import Vocabulary

logger = logging.getLogger(__name__)

CONTINUATION_PREFIX = "##"


class WordpieceTokenizer:
    """
    Greedy longest-match-first subword tokenizer.

    Args:
        vocab: Vocabulary the pieces are matched against.
        unk_token: Token emitted for words with no full decomposition.
        max_input_chars_per_word: Words longer than this many codepoints are
            mapped straight to `unk_token`.
    """

    def __init__(
        self,
        vocab: Vocabulary,
        unk_token: str = "[UNK]",
        max_input_chars_per_word: int = 512
    ):
        self.vocab = vocab
        self.unk_token = unk_token
        self.max_input_chars_per_word = max_input_chars_per_word
        if unk_token not in vocab:
            logger.warning(
                f"Unknown token {unk_token!r} is not in the vocabulary; "
                f"it cannot be converted to an id"
            )

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize a piece of text into its word pieces.

        Args:
            text: A single word or whitespace separated words, usually
                already passed through `BasicTokenizer`.

        Returns:
            A list of wordpiece tokens.
        """
        output_tokens = []
        for word in whitespace_tokenize(text):
            output_tokens.extend(self.tokenize_word(word))
        return output_tokens

    def tokenize_word(self, word: str) -> List[str]:
        """
        Decompose a single word into vocabulary pieces.

        At each position the longest remaining substring present in the
        vocabulary is taken. If some position has no match at all the whole
        word maps to `[unk_token]`.

        Example:
            >>> tokenizer.tokenize_word("unaffable")
            ['un', '##aff', '##able']
        """
        if len(word) > self.max_input_chars_per_word:
            return [self.unk_token]

        sub_tokens = []
        start = 0
        while start < len(word):
            end = len(word)
            cur_substr = None
            while start < end:
                substr = word[start:end]
                if start > 0:
                    substr = CONTINUATION_PREFIX + substr
                if substr in self.vocab:
                    cur_substr = substr
                    break
                end -= 1
            if cur_substr is None:
                return [self.unk_token]
            sub_tokens.append(cur_substr)
            start = end

        return sub_tokens
