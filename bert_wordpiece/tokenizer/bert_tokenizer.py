"""
BERT Tokenizer Implementation

This module implements the BertTokenizer class which runs the complete
tokenization pipeline for BERT models using the WordPiece algorithm.

TOKENIZATION PIPELINE:
======================
1. Basic tokenization: clean the text, isolate CJK characters, lowercase and
   strip accents, split on whitespace and punctuation
2. WordPiece: split each word into subword tokens from the vocabulary
3. Id conversion: map tokens to vocabulary ids
4. Post-processing (encode only): add [CLS] / [SEP] and token_type_ids

EXAMPLE FLOW:
=============
Input text: "Hello, unaffable world!"
→ After basic tokenization: ["hello", ",", "unaffable", "world", "!"]
→ After WordPiece: ["hello", ",", "un", "##aff", "##able", "world", "!"]
→ After post-processing: ["[CLS]", "hello", ..., "!", "[SEP]"]

The vocabulary and configuration are fixed at construction. Every method is
a pure function of its arguments, so one tokenizer can serve many threads.
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Union

import torch
from tokenizers import Tokenizer as HFTokenizer
from tokenizers import decoders, normalizers, pre_tokenizers, processors
from tokenizers.models import WordPiece

from .base import Tokenizer
from .basic_tokenizer import BasicTokenizer
from .config import BertTokenizerConfig
from .errors import UnknownTokenError
from .vocab import Vocabulary
from .wordpiece_tokenizer import CONTINUATION_PREFIX, WordpieceTokenizer

logger = logging.getLogger(__name__)

VOCAB_FILES_NAMES = {
    "vocab_file": "vocab.txt",
    "config_file": "tokenizer_config.json"
}


class BertTokenizer(Tokenizer):
    """
    BERT Tokenizer - converts text to WordPiece tokens and ids.

    Args:
        vocab: The vocabulary table. Owned by the tokenizer and shared
            read-only with its basic and WordPiece stages.
        config: Tokenizer configuration. Uses defaults if None.

    Example:
        >>> tokenizer = BertTokenizer.from_vocab_file("vocab.txt")
        >>> tokenizer.tokenize("unaffable")
        ['un', '##aff', '##able']
        >>> tokenizer.convert_tokens_to_string(['un', '##aff', '##able'])
        'un aff able'
    """

    vocab_files_names = VOCAB_FILES_NAMES
    model_input_names = ["input_ids", "token_type_ids", "attention_mask"]

    def __init__(self, vocab: Vocabulary, config: Optional[BertTokenizerConfig] = None):
        if not isinstance(vocab, Vocabulary):
            raise TypeError(f"vocab must be a Vocabulary, got {type(vocab).__name__}")
        self.vocab = vocab
        self.config = config or BertTokenizerConfig()

        if self.config.do_basic_tokenize:
            self.basic_tokenizer = BasicTokenizer(
                do_lower_case=self.config.do_lower_case,
                never_split=self.config.never_split,
                tokenize_chinese_chars=self.config.tokenize_chinese_chars,
                strip_accents=self.config.strip_accents
            )
        else:
            self.basic_tokenizer = None
        self.wordpiece_tokenizer = WordpieceTokenizer(
            vocab,
            unk_token=self.config.unk_token,
            max_input_chars_per_word=self.config.max_input_chars_per_word
        )

        # a missing unk token is already reported by the wordpiece stage
        missing = [
            token for token in self.config.special_tokens
            if token not in vocab and token != self.config.unk_token
        ]
        if missing:
            logger.warning(f"Special tokens missing from the vocabulary: {missing}")

    @classmethod
    def from_vocab_file(
        cls,
        vocab_file: Union[str, Path, BinaryIO, TextIO],
        config: Optional[BertTokenizerConfig] = None,
        **kwargs
    ) -> 'BertTokenizer':
        """
        Build a tokenizer from a vocabulary file path or an open stream.

        Args:
            vocab_file: Path to vocab.txt, or a readable stream of its contents.
            config: Base configuration. Uses defaults if None.
            **kwargs: Config fields overriding `config`.

        Raises:
            VocabularyLoadError: If the vocabulary cannot be read or is empty.
        """
        config = config or BertTokenizerConfig()
        if kwargs:
            config = config.replace(**kwargs)

        if hasattr(vocab_file, 'read'):
            vocab = Vocabulary.from_stream(vocab_file)
        else:
            vocab = Vocabulary.from_file(vocab_file)
        return cls(vocab, config)

    # ------------------------------------------------------------------
    # Special tokens
    # ------------------------------------------------------------------

    @property
    def vocab_size(self) -> int:
        """Get vocabulary size."""
        return self.vocab.size()

    @property
    def unk_token_id(self) -> Optional[int]:
        """Get UNK token ID."""
        return self.vocab.lookup_id(self.config.unk_token)

    @property
    def sep_token_id(self) -> Optional[int]:
        """Get SEP token ID."""
        return self.vocab.lookup_id(self.config.sep_token)

    @property
    def pad_token_id(self) -> Optional[int]:
        """Get PAD token ID."""
        return self.vocab.lookup_id(self.config.pad_token)

    @property
    def cls_token_id(self) -> Optional[int]:
        """Get CLS token ID."""
        return self.vocab.lookup_id(self.config.cls_token)

    @property
    def mask_token_id(self) -> Optional[int]:
        """Get MASK token ID."""
        return self.vocab.lookup_id(self.config.mask_token)

    @property
    def all_special_ids(self) -> List[int]:
        """Ids of the special tokens present in the vocabulary."""
        ids = (self.vocab.lookup_id(token) for token in self.config.special_tokens)
        return [token_id for token_id in ids if token_id is not None]

    # ------------------------------------------------------------------
    # Core conversions
    # ------------------------------------------------------------------

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into WordPiece tokens.

        Runs basic tokenization followed by WordPiece on every resulting
        word. With `do_basic_tokenize=False` the raw text goes straight to
        WordPiece, which only splits it on whitespace.
        """
        if self.basic_tokenizer is None:
            return self.wordpiece_tokenizer.tokenize(text)

        split_tokens = []
        for token in self.basic_tokenizer.tokenize(text):
            split_tokens.extend(self.wordpiece_tokenizer.tokenize_word(token))
        return split_tokens

    def convert_tokens_to_ids(self, tokens: List[str]) -> List[int]:
        """
        Convert tokens to vocabulary ids.

        Raises:
            UnknownTokenError: If any token is not in the vocabulary. There is
                no fallback to the unknown token here.
        """
        ids = []
        for token in tokens:
            token_id = self.vocab.lookup_id(token)
            if token_id is None:
                raise UnknownTokenError(token)
            ids.append(token_id)
        return ids

    def convert_ids_to_tokens(self, ids: Union[List[int], torch.Tensor]) -> List[str]:
        """
        Convert vocabulary ids to tokens.

        Raises:
            UnknownTokenError: If an id does not map to a token.
        """
        if torch.is_tensor(ids):
            ids = ids.tolist()
        tokens = []
        for token_id in ids:
            token = self.vocab.lookup_token(token_id)
            if token is None:
                raise UnknownTokenError(token_id)
            tokens.append(token)
        return tokens

    def convert_tokens_to_string(self, tokens: List[str]) -> str:
        """
        Join tokens into a single space separated string.

        The "##" marker is removed from every token; the result is a
        best-effort surface form, not an inverse of `tokenize`.
        """
        return " ".join(token.replace(CONTINUATION_PREFIX, "") for token in tokens)

    def get_vocab(self) -> Dict[str, int]:
        """Get the vocabulary mapping."""
        return self.vocab.get_vocab()

    # ------------------------------------------------------------------
    # Model inputs
    # ------------------------------------------------------------------

    def build_inputs_with_special_tokens(
        self,
        token_ids_0: List[int],
        token_ids_1: Optional[List[int]] = None
    ) -> List[int]:
        """
        Add [CLS] and [SEP] around one or two sequences.

        - single sequence: `[CLS] X [SEP]`
        - pair of sequences: `[CLS] A [SEP] B [SEP]`
        """
        cls_id, sep_id = self.convert_tokens_to_ids([self.config.cls_token, self.config.sep_token])
        if token_ids_1 is None:
            return [cls_id] + list(token_ids_0) + [sep_id]
        return [cls_id] + list(token_ids_0) + [sep_id] + list(token_ids_1) + [sep_id]

    def create_token_type_ids(
        self,
        token_ids_0: List[int],
        token_ids_1: Optional[List[int]] = None
    ) -> List[int]:
        """
        Segment ids for a sequence built with special tokens.

        0 for [CLS], the first sequence and its [SEP]; 1 for the second
        sequence and its [SEP].
        """
        first = [0] * (len(token_ids_0) + 2)
        if token_ids_1 is None:
            return first
        return first + [1] * (len(token_ids_1) + 1)

    def get_special_tokens_mask(
        self,
        token_ids_0: List[int],
        token_ids_1: Optional[List[int]] = None
    ) -> List[int]:
        """1 for special token positions, 0 for sequence tokens."""
        mask = [1] + [0] * len(token_ids_0) + [1]
        if token_ids_1 is None:
            return mask
        return mask + [0] * len(token_ids_1) + [1]

    def num_special_tokens_to_add(self, pair: bool = False) -> int:
        """Number of special tokens added around a single sequence or a pair."""
        return 3 if pair else 2

    def _truncate(
        self,
        ids_0: List[int],
        ids_1: Optional[List[int]],
        num_tokens_to_remove: int
    ):
        """Remove tokens one at a time from the end of the longer sequence."""
        ids_0 = list(ids_0)
        ids_1 = list(ids_1) if ids_1 is not None else None
        for _ in range(num_tokens_to_remove):
            if ids_1 is None or len(ids_0) > len(ids_1):
                ids_0.pop()
            else:
                ids_1.pop()
        return ids_0, ids_1

    def _prepare(
        self,
        text: str,
        text_pair: Optional[str],
        add_special_tokens: bool,
        max_length: Optional[int],
        truncation: bool
    ) -> Dict[str, List[int]]:
        """Tokenize, truncate and assemble the model inputs for one example."""
        ids_0 = self.convert_tokens_to_ids(self.tokenize(text))
        ids_1 = self.convert_tokens_to_ids(self.tokenize(text_pair)) if text_pair is not None else None

        max_length = max_length if max_length is not None else self.config.model_max_length
        num_special = self.num_special_tokens_to_add(ids_1 is not None) if add_special_tokens else 0
        if max_length < num_special:
            raise ValueError(
                f"max_length ({max_length}) is smaller than the number of special "
                f"tokens to add ({num_special})"
            )

        total = len(ids_0) + (len(ids_1) if ids_1 is not None else 0) + num_special
        if total > max_length:
            if not truncation:
                raise ValueError(
                    f"Sequence length {total} exceeds max_length {max_length}; "
                    f"pass truncation=True to shorten it"
                )
            logger.debug(f"Truncating sequence from {total} to {max_length} tokens")
            ids_0, ids_1 = self._truncate(ids_0, ids_1, total - max_length)

        if add_special_tokens:
            input_ids = self.build_inputs_with_special_tokens(ids_0, ids_1)
            token_type_ids = self.create_token_type_ids(ids_0, ids_1)
        else:
            input_ids = ids_0 + (ids_1 or [])
            token_type_ids = [0] * len(ids_0) + [1] * len(ids_1 or [])

        return {
            'input_ids': input_ids,
            'token_type_ids': token_type_ids,
            'attention_mask': [1] * len(input_ids)
        }

    @staticmethod
    def _check_return_tensors(return_tensors: Optional[str]) -> None:
        if return_tensors not in (None, 'pt'):
            raise ValueError(f"return_tensors must be None or 'pt', got {return_tensors!r}")

    def encode(
        self,
        text: str,
        text_pair: Optional[str] = None,
        add_special_tokens: bool = True,
        max_length: Optional[int] = None,
        truncation: bool = True,
        return_tensors: Optional[str] = None
    ) -> Union[List[int], torch.Tensor]:
        """
        Encode text (or a text pair) to token IDs.

        Args:
            text: Input text to encode.
            text_pair: Optional second sequence.
            add_special_tokens: Whether to add [CLS] / [SEP] tokens.
            max_length: Maximum number of ids. Defaults to `model_max_length`.
            truncation: Truncate to `max_length` instead of raising.
            return_tensors: Return format ('pt' for PyTorch tensor).

        Returns:
            List of token IDs or 1-D PyTorch tensor.
        """
        self._check_return_tensors(return_tensors)
        token_ids = self._prepare(text, text_pair, add_special_tokens, max_length, truncation)['input_ids']

        if return_tensors == 'pt':
            return torch.tensor(token_ids, dtype=torch.long)

        return token_ids

    def encode_plus(
        self,
        text: str,
        text_pair: Optional[str] = None,
        add_special_tokens: bool = True,
        max_length: Optional[int] = None,
        truncation: bool = True,
        return_tensors: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Encode text (or a text pair) to all model inputs.

        Returns:
            Dictionary with `input_ids`, `token_type_ids` and `attention_mask`,
            as lists or 1-D PyTorch tensors.
        """
        self._check_return_tensors(return_tensors)
        encoding = self._prepare(text, text_pair, add_special_tokens, max_length, truncation)

        if return_tensors == 'pt':
            return {name: torch.tensor(values, dtype=torch.long) for name, values in encoding.items()}

        return encoding

    def encode_batch(
        self,
        texts: List[str],
        add_special_tokens: bool = True,
        max_length: Optional[int] = None,
        truncation: bool = True,
        return_tensors: Optional[str] = None
    ) -> Union[List[List[int]], torch.Tensor]:
        """
        Encode batch of texts to token IDs.

        Args:
            texts: List of input texts to encode.
            add_special_tokens: Whether to add [CLS] / [SEP] tokens.
            max_length: Maximum number of ids per text.
            truncation: Truncate to `max_length` instead of raising.
            return_tensors: Return format ('pt' for PyTorch tensor).

        Returns:
            List of token ID lists or a (batch, length) tensor padded with
            the pad token id.
        """
        self._check_return_tensors(return_tensors)
        token_ids = [
            self._prepare(text, None, add_special_tokens, max_length, truncation)['input_ids']
            for text in texts
        ]

        if return_tensors == 'pt':
            if not token_ids:
                return torch.empty((0, 0), dtype=torch.long)
            pad_id = self.convert_tokens_to_ids([self.config.pad_token])[0]
            max_len = max(len(ids) for ids in token_ids)
            padded_ids = [ids + [pad_id] * (max_len - len(ids)) for ids in token_ids]
            return torch.tensor(padded_ids, dtype=torch.long)

        return token_ids

    def decode(
        self,
        token_ids: Union[List[int], torch.Tensor],
        skip_special_tokens: bool = True
    ) -> str:
        """
        Decode token IDs back to text.

        Args:
            token_ids: Token IDs to decode.
            skip_special_tokens: Whether to drop special tokens from the output.

        Returns:
            Space separated surface string (see `convert_tokens_to_string`).
        """
        tokens = self.convert_ids_to_tokens(token_ids)
        if skip_special_tokens:
            special = set(self.config.special_tokens)
            tokens = [token for token in tokens if token not in special]
        return self.convert_tokens_to_string(tokens)

    # ------------------------------------------------------------------
    # Persistence and interop
    # ------------------------------------------------------------------

    def save(self, save_path: Union[str, Path]) -> Path:
        """Save the vocabulary and configuration to a directory."""
        save_path = Path(save_path)
        save_path.mkdir(parents=True, exist_ok=True)

        self.vocab.save(save_path / VOCAB_FILES_NAMES['vocab_file'])
        self.config.save(save_path / VOCAB_FILES_NAMES['config_file'])

        logger.info(f"Tokenizer saved to {save_path}")
        return save_path

    @classmethod
    def load(cls, load_path: Union[str, Path]) -> 'BertTokenizer':
        """Load a tokenizer saved with `save`."""
        load_path = Path(load_path)

        config_path = load_path / VOCAB_FILES_NAMES['config_file']
        if config_path.exists():
            config = BertTokenizerConfig.load(config_path)
        else:
            logger.warning(f"No {config_path.name} in {load_path}; using default configuration")
            config = BertTokenizerConfig()

        tokenizer = cls(Vocabulary.from_file(load_path / VOCAB_FILES_NAMES['vocab_file']), config)
        logger.info(f"Tokenizer loaded from {load_path}")
        return tokenizer

    def to_fast_tokenizer(self) -> HFTokenizer:
        """
        Build an equivalent HuggingFace `tokenizers.Tokenizer`.

        The result uses the same vocabulary and normalization settings and
        adds [CLS] / [SEP] through a template post-processor when both are
        in the vocabulary.

        Only the special tokens are registered as added tokens. `never_split`
        entries are not carried over: the result segments text like this
        tokenizer with an empty `never_split`.
        """
        config = self.config
        fast_tokenizer = HFTokenizer(
            WordPiece(
                self.vocab.get_vocab(),
                unk_token=config.unk_token,
                max_input_chars_per_word=config.max_input_chars_per_word
            )
        )
        fast_tokenizer.normalizer = normalizers.BertNormalizer(
            clean_text=True,
            handle_chinese_chars=config.tokenize_chinese_chars,
            strip_accents=config.effective_strip_accents,
            lowercase=config.do_lower_case
        )
        fast_tokenizer.pre_tokenizer = pre_tokenizers.BertPreTokenizer()
        fast_tokenizer.decoder = decoders.WordPiece(prefix=CONTINUATION_PREFIX)

        cls_id, sep_id = self.cls_token_id, self.sep_token_id
        if cls_id is not None and sep_id is not None:
            cls_token, sep_token = config.cls_token, config.sep_token
            fast_tokenizer.post_processor = processors.TemplateProcessing(
                single=f"{cls_token}:0 $A:0 {sep_token}:0",
                pair=f"{cls_token}:0 $A:0 {sep_token}:0 $B:1 {sep_token}:1",
                special_tokens=[(cls_token, cls_id), (sep_token, sep_id)]
            )

        # only tokens already in the vocabulary, so no new ids are appended
        specials = [token for token in config.special_tokens if token in self.vocab]
        if specials:
            fast_tokenizer.add_special_tokens(specials)

        return fast_tokenizer

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(vocab_size={self.vocab_size}, "
            f"do_lower_case={self.config.do_lower_case}, "
            f"do_basic_tokenize={self.config.do_basic_tokenize})"
        )
