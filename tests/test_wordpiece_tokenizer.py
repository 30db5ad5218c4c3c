"""
Tests for greedy longest-match-first WordPiece matching.
"""

import logging

import pytest

from bert_wordpiece.tokenizer import Vocabulary, WordpieceTokenizer


@pytest.fixture
def wordpiece():
    """WordPiece tokenizer over a small vocabulary."""
    vocab = Vocabulary([
        "[UNK]", "[CLS]", "[SEP]", "want", "##want", "##ed", "wa", "un", "runn", "##ing",
        "low", "lowest", "##est", "##aff", "##able",
    ])
    return WordpieceTokenizer(vocab, unk_token="[UNK]")


class TestWordpieceTokenizer:
    """Test subword decomposition."""

    def test_empty(self, wordpiece):
        assert wordpiece.tokenize("") == []
        assert wordpiece.tokenize("   ") == []

    def test_decomposition(self, wordpiece):
        """Words split into a first piece and ## continuations."""
        assert wordpiece.tokenize("unwanted running") == ["un", "##want", "##ed", "runn", "##ing"]
        assert wordpiece.tokenize_word("unaffable") == ["un", "##aff", "##able"]

    def test_unknown_word(self, wordpiece):
        """A word with no full decomposition is one unknown token."""
        assert wordpiece.tokenize("unwantedX running") == ["[UNK]", "runn", "##ing"]
        assert wordpiece.tokenize_word("zzz") == ["[UNK]"]

    def test_partial_pieces_discarded(self, wordpiece):
        """Pieces matched before a failure are not emitted."""
        # "un" and "##want" match, "##x" does not
        assert wordpiece.tokenize_word("unwantx") == ["[UNK]"]

    def test_longest_match_first(self, wordpiece):
        """The longest vocabulary prefix wins at each position."""
        assert wordpiece.tokenize_word("lowest") == ["lowest"]
        assert wordpiece.tokenize_word("lowlowest") == ["[UNK]"]

    def test_pieces_are_longest_available(self, wordpiece):
        """No emitted piece could have been extended by a longer vocabulary match."""
        word = "unwanted"
        pieces = wordpiece.tokenize_word(word)
        cursor = 0
        for piece in pieces:
            surface = piece[2:] if piece.startswith("##") else piece
            for end in range(len(word), cursor + len(surface), -1):
                candidate = word[cursor:end]
                if cursor > 0:
                    candidate = "##" + candidate
                assert candidate not in wordpiece.vocab
            cursor += len(surface)
        assert cursor == len(word)

    def test_greedy_is_not_globally_optimal(self):
        """Greedy matching can miss a decomposition another split would find."""
        vocab = Vocabulary(["[UNK]", "a", "ab", "##bc"])
        wordpiece = WordpieceTokenizer(vocab)
        # "a" + "##bc" would cover the word, but "ab" is taken first
        assert wordpiece.tokenize_word("abc") == ["[UNK]"]

    def test_max_input_chars_per_word(self):
        """Words over the length limit map straight to the unknown token."""
        vocab = Vocabulary(["[UNK]", "want", "##ed", "runn"])
        wordpiece = WordpieceTokenizer(vocab, max_input_chars_per_word=5)
        assert wordpiece.tokenize_word("wanted") == ["[UNK]"]
        assert wordpiece.tokenize_word("runn") == ["runn"]

    def test_length_counts_codepoints(self):
        """The length limit counts codepoints, not bytes."""
        vocab = Vocabulary(["[UNK]", "日本", "🙂"])
        wordpiece = WordpieceTokenizer(vocab, max_input_chars_per_word=2)
        assert wordpiece.tokenize_word("日本") == ["日本"]
        assert wordpiece.tokenize_word("🙂") == ["🙂"]

    def test_custom_unk_token(self):
        """The configured unknown token is emitted."""
        vocab = Vocabulary(["<unk>", "a"])
        wordpiece = WordpieceTokenizer(vocab, unk_token="<unk>")
        assert wordpiece.tokenize("a b") == ["a", "<unk>"]

    def test_missing_unk_token_warns(self, caplog):
        """An unknown token absent from the vocabulary is reported."""
        with caplog.at_level(logging.WARNING, logger="bert_wordpiece.tokenizer.wordpiece_tokenizer"):
            WordpieceTokenizer(Vocabulary(["a", "b"]), unk_token="[UNK]")
        assert any("[UNK]" in record.getMessage() for record in caplog.records)

    def test_calls_are_independent(self, wordpiece):
        """Results do not depend on earlier calls."""
        first = wordpiece.tokenize("unwanted running")
        wordpiece.tokenize("unwantedX zzz")
        assert wordpiece.tokenize("unwanted running") == first
