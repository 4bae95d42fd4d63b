"""Basic byte-level tokenizer implementation."""

import logging
from typing_extensions import override

from .._bpe import bpe_merge, lowest_rank_pair
from .._decorators import measure_time
from ..errors import InvalidConfigurationError
from ..trainer import train_bpe
from ..types import BASE_VOCAB_SIZE, Token
from .base import Tokenizer

log = logging.getLogger(__name__)


class BasicTokenizer(Tokenizer):
    """
    Tokenizer that operates directly on byte sequences without regex splitting.
    """

    def __init__(self) -> None:
        """Initialize a basic byte-level tokenizer."""
        super().__init__()

    @override
    @measure_time
    def train(
        self, text: str | list[str], vocab_size: int, verbose: bool = False
    ) -> None:
        """
        Train the tokenizer on raw text using byte-level BPE.

        This implementation concatenates list inputs, encodes text as UTF-8
        bytes, and learns up to ``vocab_size - 256`` merges on top of the base
        byte vocabulary. Training stops early with a warning when the text runs
        out of pairs to merge.

        :param text: Training text as a single string or list of strings.
        :param vocab_size: Target vocabulary size including the base 256 bytes.
        :param verbose: Log each learned merge when ``True``.
        :raises InvalidConfigurationError: If ``vocab_size`` is not an integer
                                           or is less than 256.
        """
        # bool is an int subclass but never a meaningful size
        if not isinstance(vocab_size, int) or isinstance(vocab_size, bool):
            raise InvalidConfigurationError(
                "vocab size must be an integer", vocab_size=vocab_size
            )
        if vocab_size < BASE_VOCAB_SIZE:
            raise InvalidConfigurationError(
                f"vocab size must be at least {BASE_VOCAB_SIZE}", vocab_size=vocab_size
            )

        # handle list input and convert text to bytes
        if isinstance(text, list):
            text = "".join(text)

        tokens = list(text.encode("utf-8"))

        # merges beyond base byte vocabulary
        n_merges = vocab_size - BASE_VOCAB_SIZE

        result = train_bpe(tokens, n_merges, verbose=verbose)

        if result.n_merges_completed < n_merges:
            log.warning(
                "no more byte pairs to merge after %d merges (requested %d) stopping early",
                result.n_merges_completed,
                n_merges,
            )

        self.merges = result.merges  # used for encoding text -> tokens
        self.vocab = result.vocab  # used for decoding tokens -> text

    @override
    def encode(self, text: str) -> list[Token]:
        """
        Encode text into tokens using byte-level BPE.

        Merges are replayed earliest-learned first, so the result only ever
        contains tokens this tokenizer can decode. Bytes never seen during
        training stay as their raw byte tokens.

        :param text: Input text to encode.
        :returns: Encoded token sequence.
        """
        # encode Unicode text into bytes, each byte in [0-255] token range
        tokens = list(text.encode("utf-8"))

        while len(tokens) >= 2:
            pair = lowest_rank_pair(tokens, self.merges)
            # no adjacent pair has a merge rule
            if pair is None:
                break
            tokens = bpe_merge(tokens, pair, self.merges[pair])

        return tokens
