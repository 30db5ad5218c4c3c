"""
Character classification helpers for BERT-style text normalization.

These predicates decide how the basic tokenizer treats each character:
whitespace is collapsed to a plain space, control characters are dropped,
punctuation is split into single-character units and CJK ideographs are
isolated into their own units.
"""

import unicodedata
from typing import List

# CJK Unified Ideographs blocks (inclusive). Hiragana, Katakana and Hangul
# live outside these blocks and are written with spaces anyway.
CJK_RANGES = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0x20000, 0x2A6DF),
    (0x2A700, 0x2B73F),
    (0x2B740, 0x2B81F),
    (0x2B820, 0x2CEAF),
    (0xF900, 0xFAFF),
    (0x2F800, 0x2FA1F),
)


def is_whitespace(char: str) -> bool:
    """Check whether `char` is a whitespace character."""
    # \t, \n and \r are technically control characters but are treated
    # as whitespace here
    if char in (" ", "\t", "\n", "\r"):
        return True
    return unicodedata.category(char) == "Zs"


def is_control(char: str) -> bool:
    """Check whether `char` is a control character."""
    if char in ("\t", "\n", "\r"):
        return False
    return unicodedata.category(char).startswith("C")


def is_punctuation(char: str) -> bool:
    """
    Check whether `char` is a punctuation character.

    All non-letter/number ASCII characters count as punctuation, even those
    Unicode classifies otherwise ("^", "$" and "`" are symbols), so that they
    are split off consistently.
    """
    cp = ord(char)
    if (33 <= cp <= 47) or (58 <= cp <= 64) or (91 <= cp <= 96) or (123 <= cp <= 126):
        return True
    return unicodedata.category(char).startswith("P")


def is_cjk_codepoint(cp: int) -> bool:
    """Check whether codepoint `cp` is a CJK Unified Ideograph."""
    return any(start <= cp <= end for start, end in CJK_RANGES)


def whitespace_tokenize(text: str) -> List[str]:
    """Strip `text` and split it on runs of whitespace."""
    text = text.strip()
    if not text:
        return []
    return text.split()
