"""Standalone BPE training module."""

from dataclasses import dataclass
import logging

from ._bpe import bpe_freqs, bpe_merge, most_frequent_pair
from ._sanitise import render_bytes
from .types import BASE_VOCAB_SIZE, Encoding, Token, Vocabulary

log = logging.getLogger(__name__)


@dataclass
class BPETrainingResult:
    """Results from one BPE training run."""

    vocab: Vocabulary
    merges: Encoding
    n_merges_completed: int


def train_bpe(
    tokens: list[Token],
    n_merges: int,
    verbose: bool = False,
) -> BPETrainingResult:
    """
    Learn up to ``n_merges`` merge rules from a byte token sequence.

    Each round recounts adjacent pairs, merges the most frequent one into a
    freshly minted token and records the rule. Ties between equally frequent
    pairs go to the lexicographically smallest pair. Training stops early once
    no pair is left to merge, e.g. when the sequence has collapsed into a
    single token.

    Example:
       >>> result = train_bpe(list(b"aaabdaaabac"), n_merges=3)
       >>> result.merges
       {(97, 97): 256, (97, 98): 257, (256, 257): 258}

    :param tokens: Input token sequence, typically raw bytes 0-255. Left unmodified.
    :param n_merges: Maximum number of merge operations to perform.
    :param verbose: Log each learned merge when ``True``.
    :returns: Training output containing vocab, merge rules, and completed merge count.
    """
    vocab: Vocabulary = [bytes([tok]) for tok in range(BASE_VOCAB_SIZE)]
    merges: Encoding = {}

    for i in range(n_merges):
        freqs = bpe_freqs(tokens)
        # 1. text compressed to single token
        # 2. input too short to form enough pairs before vocab size is met
        if not freqs:
            break

        pair = most_frequent_pair(freqs)
        # ids are dense so the next id is always the current vocab size
        new_tok = len(vocab)
        tokens = bpe_merge(tokens, pair, new_tok)

        vocab.append(vocab[pair[0]] + vocab[pair[1]])
        merges[pair] = new_tok

        if verbose:
            log.info(
                "merge %d/%d (%.2f%%): %s -> %d (%s)",
                i + 1,
                n_merges,
                100 * (i + 1) / n_merges,
                pair,
                new_tok,
                render_bytes(vocab[new_tok]),
            )

    return BPETrainingResult(
        vocab=vocab,
        merges=merges,
        n_merges_completed=len(merges),
    )


__all__ = ["BPETrainingResult", "train_bpe"]
