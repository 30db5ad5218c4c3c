"""
Shared fixtures for tokenizer tests.
"""

import pytest

from bert_wordpiece.tokenizer import BertTokenizer, BertTokenizerConfig, Vocabulary


# Position in the list is the token id
VOCAB_TOKENS = [
    "[PAD]", "[UNK]", "[CLS]", "[SEP]", "[MASK]",      # 0-4
    "want", "##want", "##ed", "wa", "un",               # 5-9
    "runn", "##ing", ",", "low", "lowest",              # 10-14
    "hello", "world", "!", "##aff", "##able",           # 15-19
    "[SPECIAL]", "cafe", "中", "国", ".",                # 20-24
]


@pytest.fixture
def vocab_tokens():
    """Ordered tokens of the test vocabulary."""
    return list(VOCAB_TOKENS)


@pytest.fixture
def vocab():
    """Vocabulary built from the test tokens."""
    return Vocabulary(VOCAB_TOKENS, source="test-vocab")


@pytest.fixture
def tokenizer(vocab):
    """Tokenizer with default configuration."""
    return BertTokenizer(vocab)


@pytest.fixture
def vocab_file(tmp_path):
    """Test vocabulary written to a vocab.txt file."""
    path = tmp_path / "vocab.txt"
    path.write_text("\n".join(VOCAB_TOKENS) + "\n", encoding="utf-8")
    return path
