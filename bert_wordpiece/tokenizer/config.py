"""
Configuration for the BERT WordPiece tokenizer.

The configuration is an immutable bundle created once, alongside the
vocabulary, and shared read-only by the tokenizer stages.
"""

import json
import logging
from dataclasses import dataclass, field, fields, asdict, replace as dataclass_replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BertTokenizerConfig:
    """
    Configuration class for BERT tokenizer parameters.

    Args:
        do_lower_case: Lowercase (and strip accents from) the input.
        do_basic_tokenize: Run basic tokenization before WordPiece.
        never_split: Tokens passed through basic tokenization unchanged.
            Only has an effect when `do_basic_tokenize` is True.
        unk_token: Token substituted for words with no vocabulary decomposition.
        sep_token: Separator placed after each sequence.
        pad_token: Token used to pad batches.
        cls_token: Classifier token placed at the start of a sequence.
        mask_token: Token used for masked language modeling.
        tokenize_chinese_chars: Isolate each CJK ideograph as its own word.
        strip_accents: Strip accents. None follows `do_lower_case`.
        max_input_chars_per_word: Words longer than this (in codepoints)
            become the unknown token.
        model_max_length: Maximum number of ids produced by `encode`.
    """

    do_lower_case: bool = True
    do_basic_tokenize: bool = True
    never_split: Tuple[str, ...] = field(default_factory=tuple)
    unk_token: str = "[UNK]"
    sep_token: str = "[SEP]"
    pad_token: str = "[PAD]"
    cls_token: str = "[CLS]"
    mask_token: str = "[MASK]"
    tokenize_chinese_chars: bool = True
    strip_accents: Optional[bool] = None
    max_input_chars_per_word: int = 512
    model_max_length: int = 512

    def __post_init__(self):
        """Normalize and validate parameters."""
        never_split = self.never_split
        if isinstance(never_split, str):
            never_split = [never_split]
        # frozen dataclass: bypass __setattr__ for the normalized value
        object.__setattr__(self, 'never_split', tuple(dict.fromkeys(never_split or ())))

        for name in ('unk_token', 'sep_token', 'pad_token', 'cls_token', 'mask_token'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string, got {value!r}")

        if self.max_input_chars_per_word <= 0:
            raise ValueError(
                f"max_input_chars_per_word ({self.max_input_chars_per_word}) must be positive"
            )
        # room for [CLS] A [SEP] B [SEP]
        if self.model_max_length < 3:
            raise ValueError(
                f"model_max_length ({self.model_max_length}) must be at least 3"
            )

    @property
    def special_tokens(self) -> List[str]:
        """The five special tokens in [PAD], [UNK], [CLS], [SEP], [MASK] order."""
        return [self.pad_token, self.unk_token, self.cls_token, self.sep_token, self.mask_token]

    @property
    def effective_strip_accents(self) -> bool:
        """Whether accents are stripped once `strip_accents` defaults are applied."""
        if self.strip_accents is None:
            return self.do_lower_case
        return self.strip_accents

    def replace(self, **changes) -> 'BertTokenizerConfig':
        """
        Return a copy with `changes` applied.

        Raises:
            TypeError: If a key in `changes` is not a config field.
        """
        return dataclass_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        config_dict = asdict(self)
        config_dict['never_split'] = list(self.never_split)
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'BertTokenizerConfig':
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            logger.warning(f"Ignoring unknown tokenizer config keys: {unknown}")
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'BertTokenizerConfig':
        """Load configuration from a JSON file."""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)
