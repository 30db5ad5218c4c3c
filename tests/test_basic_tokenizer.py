"""
Tests for basic tokenization and the character classification helpers.
"""

import pytest

from bert_wordpiece.tokenizer import BasicTokenizer
from bert_wordpiece.utils.text import (
    is_cjk_codepoint,
    is_control,
    is_punctuation,
    is_whitespace,
    whitespace_tokenize
)


class TestCharacterClasses:
    """Test character predicates."""

    def test_is_whitespace(self):
        assert is_whitespace(" ")
        assert is_whitespace("\t")
        assert is_whitespace("\r")
        assert is_whitespace("\n")
        assert is_whitespace("\u00a0")

        assert not is_whitespace("A")
        assert not is_whitespace("-")

    def test_is_control(self):
        assert is_control("\u0005")
        assert is_control("\u200b")

        assert not is_control("A")
        assert not is_control(" ")
        assert not is_control("\t")
        assert not is_control("\r")

    def test_is_punctuation(self):
        assert is_punctuation("-")
        assert is_punctuation("$")
        assert is_punctuation("`")
        assert is_punctuation(".")
        assert is_punctuation("¿")

        assert not is_punctuation("A")
        assert not is_punctuation(" ")

    def test_is_cjk_codepoint(self):
        assert is_cjk_codepoint(ord("中"))
        assert is_cjk_codepoint(0x20000)
        assert is_cjk_codepoint(0xF900)

        # Hiragana and Hangul are not ideographs
        assert not is_cjk_codepoint(ord("あ"))
        assert not is_cjk_codepoint(ord("한"))
        assert not is_cjk_codepoint(ord("a"))

    def test_whitespace_tokenize(self):
        assert whitespace_tokenize("  a  b\tc\n") == ["a", "b", "c"]
        assert whitespace_tokenize("") == []
        assert whitespace_tokenize("   ") == []


class TestBasicTokenizer:
    """Test the normalizer and splitter."""

    def test_lower(self):
        """Lowercasing with whitespace and punctuation splitting."""
        tokenizer = BasicTokenizer(do_lower_case=True)
        assert tokenizer.tokenize(" \tHeLLo!how  \n Are yoU?  ") == [
            "hello", "!", "how", "are", "you", "?"
        ]
        assert tokenizer.tokenize("Héllo") == ["hello"]

    def test_no_lower(self):
        """Case and accents are kept without lowercasing."""
        tokenizer = BasicTokenizer(do_lower_case=False)
        assert tokenizer.tokenize(" \tHeLLo!how  \n Are yoU?  ") == [
            "HeLLo", "!", "how", "Are", "yoU", "?"
        ]
        assert tokenizer.tokenize(" \tHäLLo!how  \n Are yoU?  ") == [
            "HäLLo", "!", "how", "Are", "yoU", "?"
        ]

    def test_lower_strips_accents(self):
        """Accents are stripped along with lowercasing by default."""
        tokenizer = BasicTokenizer(do_lower_case=True)
        assert tokenizer.tokenize(" \tHäLLo!how  \n Are yoU?  ") == [
            "hallo", "!", "how", "are", "you", "?"
        ]

    def test_lower_keeps_accents(self):
        """strip_accents=False keeps accents while lowercasing."""
        tokenizer = BasicTokenizer(do_lower_case=True, strip_accents=False)
        assert tokenizer.tokenize(" \tHäLLo!how  \n Are yoU?  ") == [
            "hällo", "!", "how", "are", "you", "?"
        ]

    def test_strip_accents_without_lower(self):
        """strip_accents=True strips accents without lowercasing."""
        tokenizer = BasicTokenizer(do_lower_case=False, strip_accents=True)
        assert tokenizer.tokenize(" \tHäLLo!how  \n Are yoU?  ") == [
            "HaLLo", "!", "how", "Are", "yoU", "?"
        ]

    def test_punctuation_and_spaces(self):
        """Punctuation becomes separate units and runs of spaces collapse."""
        tokenizer = BasicTokenizer(do_lower_case=True)
        assert tokenizer.tokenize("Hello,  World!") == ["hello", ",", "world", "!"]

    def test_chinese(self):
        """CJK ideographs are isolated."""
        tokenizer = BasicTokenizer()
        assert tokenizer.tokenize("ah博推zz") == ["ah", "博", "推", "zz"]

    def test_chinese_disabled(self):
        """CJK ideographs stay attached when isolation is disabled."""
        tokenizer = BasicTokenizer(tokenize_chinese_chars=False)
        assert tokenizer.tokenize("ah博推zz") == ["ah博推zz"]

    def test_never_split(self):
        """Never-split tokens pass through unchanged."""
        tokenizer = BasicTokenizer(do_lower_case=True, never_split=["[UNK]"])
        assert tokenizer.tokenize(" \tHeLLo!how  \n Are yoU? [UNK]") == [
            "hello", "!", "how", "are", "you", "?", "[UNK]"
        ]

    def test_never_split_is_case_sensitive(self):
        """Only verbatim matches are exempt."""
        tokenizer = BasicTokenizer(do_lower_case=True, never_split=["[SPECIAL]"])
        assert tokenizer.tokenize("[special]") == ["[", "special", "]"]
        assert tokenizer.tokenize("Hi, [SPECIAL] !") == ["hi", ",", "[SPECIAL]", "!"]

    def test_never_split_requires_whitespace_boundary(self):
        """A never-split token glued to other text is split normally."""
        tokenizer = BasicTokenizer(do_lower_case=True, never_split=["[SPECIAL]"])
        assert tokenizer.tokenize("([SPECIAL])") == ["(", "[", "special", "]", ")"]

    def test_clean_text(self):
        """Control characters, NUL and U+FFFD are dropped."""
        tokenizer = BasicTokenizer()
        assert tokenizer.tokenize("he\x07llo wor\ufffdld\x00") == ["hello", "world"]
        assert tokenizer.tokenize("zero\u200bwidth") == ["zerowidth"]

    def test_unicode_whitespace(self):
        """Non-breaking and other separators split words."""
        tokenizer = BasicTokenizer()
        assert tokenizer.tokenize("hello\u00a0world\u3000again") == ["hello", "world", "again"]

    def test_unicode_punctuation(self):
        """Unicode punctuation is split like ASCII punctuation."""
        tokenizer = BasicTokenizer()
        assert tokenizer.tokenize("¿qué?") == ["¿", "que", "?"]
        assert tokenizer.tokenize("a$b") == ["a", "$", "b"]

    @pytest.mark.parametrize("text", ["", "   ", "\t\n", "\x00\x07"])
    def test_empty_input(self, text):
        """Blank input yields no units."""
        assert BasicTokenizer().tokenize(text) == []

    def test_no_empty_units(self):
        """Words reduced to nothing by accent stripping are dropped."""
        tokenizer = BasicTokenizer(do_lower_case=True)
        assert tokenizer.tokenize("a \u0301 b") == ["a", "b"]
        for unit in tokenizer.tokenize(" ...  \u0301\u0301 x!! "):
            assert unit != ""
