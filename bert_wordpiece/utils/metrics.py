"""
Tokenization statistics.

Summarizes how a tokenizer segments a sample of texts: how many pieces each
word is broken into, how often the unknown token is produced and how much
of the vocabulary the sample touches.
"""

import logging
from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING, Any, Dict, Iterable

import numpy as np

if TYPE_CHECKING:
    from ..tokenizer.bert_tokenizer import BertTokenizer

logger = logging.getLogger(__name__)


@dataclass
class TokenizationStats:
    """Aggregate statistics over a sample of tokenized texts."""

    num_texts: int = 0
    num_words: int = 0
    num_tokens: int = 0
    unk_count: int = 0
    unk_rate: float = 0.0
    avg_tokens_per_text: float = 0.0
    fertility: float = 0.0  # tokens per word
    continuation_rate: float = 0.0
    max_tokens_per_text: int = 0
    p95_tokens_per_text: float = 0.0
    vocab_coverage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return asdict(self)


def compute_tokenization_stats(
    tokenizer: 'BertTokenizer',
    texts: Iterable[str]
) -> TokenizationStats:
    """
    Tokenize `texts` and compute segmentation statistics.

    Words are the units produced by basic tokenization, or whitespace
    separated words when basic tokenization is disabled.

    Args:
        tokenizer: Tokenizer to evaluate.
        texts: Sample texts.

    Returns:
        TokenizationStats for the sample. All fields are zero for an empty
        sample.
    """
    unk_token = tokenizer.config.unk_token
    tokens_per_text = []
    num_words = 0
    unk_count = 0
    continuation_count = 0
    seen_tokens = set()

    for text in texts:
        if tokenizer.basic_tokenizer is not None:
            words = tokenizer.basic_tokenizer.tokenize(text)
        else:
            words = text.split()
        num_words += len(words)

        tokens = tokenizer.tokenize(text)
        tokens_per_text.append(len(tokens))
        for token in tokens:
            if token == unk_token:
                unk_count += 1
            elif token.startswith("##"):
                continuation_count += 1
            seen_tokens.add(token)

    if not tokens_per_text:
        return TokenizationStats()

    counts = np.asarray(tokens_per_text, dtype=np.int64)
    num_tokens = int(counts.sum())

    stats = TokenizationStats(
        num_texts=len(tokens_per_text),
        num_words=num_words,
        num_tokens=num_tokens,
        unk_count=unk_count,
        unk_rate=unk_count / num_tokens if num_tokens > 0 else 0.0,
        avg_tokens_per_text=float(counts.mean()),
        fertility=num_tokens / num_words if num_words > 0 else 0.0,
        continuation_rate=continuation_count / num_tokens if num_tokens > 0 else 0.0,
        max_tokens_per_text=int(counts.max()),
        p95_tokens_per_text=float(np.percentile(counts, 95)),
        vocab_coverage=len(seen_tokens) / tokenizer.vocab_size
    )
    logger.debug(f"Tokenization stats: {stats.to_dict()}")
    return stats
