"""
Vocabulary table for WordPiece tokenization.

A vocabulary file (typically vocab.txt) holds one token per line; the
zero-based line number becomes the token's id:

    [PAD]       # ID: 0
    [UNK]       # ID: 1
    [CLS]       # ID: 2
    [SEP]       # ID: 3
    [MASK]      # ID: 4
    the         # ID: 5
    ...

The table is built once and never modified afterwards, so a single
instance can be shared by any number of tokenizers and threads.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, List, Optional, TextIO, Union

from .errors import VocabularyLoadError

logger = logging.getLogger(__name__)


class Vocabulary:
    """
    Immutable bidirectional mapping between token strings and dense ids.

    Tokens are assigned ids by position. If a token occurs more than once,
    the last occurrence wins for the token -> id direction; the id -> token
    direction is the exact inverse of that mapping, so ids of shadowed
    duplicates do not resolve to a token.

    Args:
        tokens: Ordered tokens; position i receives id i.
        source: Optional description of where the tokens came from, used in
            log and error messages.

    Example:
        >>> vocab = Vocabulary(["[UNK]", "un", "##aff", "##able"])
        >>> vocab.lookup_id("##aff")
        2
        >>> vocab.lookup_token(3)
        '##able'
    """

    __slots__ = ('_token_to_id', '_id_to_token', '_duplicates', '_num_entries', 'source')

    def __init__(self, tokens: Iterable[str], source: Optional[str] = None):
        token_to_id: Dict[str, int] = {}
        duplicates: List[str] = []
        num_entries = 0
        for index, token in enumerate(tokens):
            if token in token_to_id:
                duplicates.append(token)
            token_to_id[token] = index
            num_entries = index + 1

        if num_entries == 0:
            raise VocabularyLoadError(
                f"Vocabulary is empty{f' ({source})' if source else ''}",
                source=source
            )

        self._token_to_id = token_to_id
        self._id_to_token = {index: token for token, index in token_to_id.items()}
        self._duplicates = tuple(duplicates)
        self._num_entries = num_entries
        self.source = source

        if duplicates:
            preview = ", ".join(repr(t) for t in duplicates[:5])
            logger.warning(
                f"Vocabulary{f' {source}' if source else ''} has {len(duplicates)} "
                f"duplicate entries (last occurrence wins): {preview}"
                f"{', ...' if len(duplicates) > 5 else ''}"
            )

    @classmethod
    def from_stream(
        cls,
        stream: Union[BinaryIO, TextIO],
        source: Optional[str] = None
    ) -> 'Vocabulary':
        """
        Build a vocabulary from an open stream with one token per line.

        Binary streams are decoded as UTF-8, dropping a leading byte-order
        mark. Trailing line terminators are removed; any other whitespace is
        part of the token.

        Raises:
            VocabularyLoadError: If the stream cannot be read or decoded, or
                holds no lines.
        """
        if stream is None:
            raise VocabularyLoadError("No vocabulary stream supplied", source=source)
        source = source or getattr(stream, 'name', None)
        try:
            data = stream.read()
        except (OSError, ValueError) as e:
            raise VocabularyLoadError(f"Unable to read vocabulary: {e}", source=source) from e

        if isinstance(data, bytes):
            try:
                data = data.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise VocabularyLoadError(
                    f"Vocabulary is not valid UTF-8: {e}", source=source
                ) from e

        tokens = [line.rstrip("\r\n") for line in io.StringIO(data)]
        vocab = cls(tokens, source=source)
        logger.info(f"Loaded vocabulary with {vocab.size()} tokens"
                    f"{f' from {source}' if source else ''}")
        return vocab

    @classmethod
    def from_file(cls, vocab_file: Union[str, Path]) -> 'Vocabulary':
        """Load a vocabulary file (e.g. vocab.txt)."""
        vocab_file = Path(vocab_file)
        try:
            with open(vocab_file, 'rb') as reader:
                return cls.from_stream(reader, source=str(vocab_file))
        except OSError as e:
            raise VocabularyLoadError(
                f"Unable to open vocabulary file {vocab_file}: {e}", source=str(vocab_file)
            ) from e

    def lookup_id(self, token: str) -> Optional[int]:
        """Return the id of `token`, or None if it is not in the vocabulary."""
        return self._token_to_id.get(token)

    def lookup_token(self, token_id: int) -> Optional[str]:
        """Return the token with id `token_id`, or None if there is none."""
        return self._id_to_token.get(token_id)

    def size(self) -> int:
        """Number of distinct tokens."""
        return len(self._token_to_id)

    @property
    def duplicates(self) -> tuple:
        """Tokens that appeared more than once in the source, in order seen."""
        return self._duplicates

    @property
    def num_entries(self) -> int:
        """Number of entries read from the source, duplicates included."""
        return self._num_entries

    def get_vocab(self) -> Dict[str, int]:
        """Return a copy of the token -> id mapping."""
        return dict(self._token_to_id)

    def tokens(self) -> List[str]:
        """Return all tokens ordered by id."""
        return [self._id_to_token[i] for i in sorted(self._id_to_token)]

    def save(self, vocab_file: Union[str, Path]) -> Path:
        """Write the vocabulary to `vocab_file`, one token per line in id order."""
        vocab_file = Path(vocab_file)
        if self._duplicates:
            logger.warning(
                "Saving a vocabulary with duplicates; shadowed entries are dropped "
                "and later ids shift"
            )
        with open(vocab_file, 'w', encoding='utf-8') as writer:
            for token in self.tokens():
                writer.write(token + "\n")
        logger.info(f"Vocabulary saved to {vocab_file}")
        return vocab_file

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_id

    def __iter__(self):
        return iter(self.tokens())

    def __repr__(self) -> str:
        return f"Vocabulary(size={self.size()}, source={self.source!r})"
