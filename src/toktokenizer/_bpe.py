"""
Core Byte Pair Encoding (BPE) operations.
"""

from collections import Counter

from .types import Token, TokenPair


def bpe_freqs(tokens: list[Token]) -> Counter[TokenPair]:
    """
    Count every consecutive token pair in a single left-to-right pass.

    :param tokens: Token sequence to scan.
    :return: Mapping of token pairs to their occurrence counts. Empty when
             ``tokens`` holds fewer than two tokens.
    """
    return Counter(zip(tokens, tokens[1:]))


def bpe_merge(tokens: list[Token], target: TokenPair, new_tok: Token) -> list[Token]:
    """
    Merge all occurrences of a target token pair into a single new token.

    Matches never overlap: once a pair at position ``i`` is merged, scanning
    resumes at ``i + 2``, so merging ``(4, 4)`` in ``[4, 4, 4]`` yields
    ``[new_tok, 4]``.

    Note that some merged tokens may be partial utf-8 sequences, so they cannot
    always be decoded into valid strings on their own.

    :param tokens: Original token sequence. Left unmodified.
    :param target: The consecutive pair of tokens to merge.
    :param new_tok: The token that replaces each occurrence of ``target``.
    :return: New token sequence with all target pairs replaced by ``new_tok``.
    """
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and tokens[i] == target[0] and tokens[i + 1] == target[1]:
            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


def most_frequent_pair(freqs: Counter[TokenPair]) -> TokenPair:
    """
    Return the pair with the highest count.

    Ties go to the lexicographically smallest pair so training is reproducible
    regardless of dict ordering.
    """
    return min(freqs, key=lambda pair: (-freqs[pair], pair))


def lowest_rank_pair(tokens: list[Token], merges: dict[TokenPair, Token]) -> TokenPair | None:
    """
    Return the adjacent pair in ``tokens`` that was learned earliest.

    The minted token id doubles as the merge rank: lower ids were learned
    first and later merges may be built on top of them.

    :return: The pair to merge next, or ``None`` if no adjacent pair has a merge rule.
    """
    # pairs without a merge rule rank at infinity and are never chosen
    pair = min(
        zip(tokens, tokens[1:]),
        key=lambda bp: merges.get(bp, float("inf")),
        default=None,
    )
    if pair is None or pair not in merges:
        return None
    return pair
