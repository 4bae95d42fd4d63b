"""
Core types for tokenization.
"""

from typing import Final, TypeAlias

Token: TypeAlias = int
TokenBytes: TypeAlias = bytes
TokenPair: TypeAlias = tuple[Token, Token]
# merged pair -> minted token, in the order merges were learned
Encoding: TypeAlias = dict[TokenPair, Token]
# token id is the list index
Vocabulary: TypeAlias = list[TokenBytes]

# size of the raw byte alphabet every vocabulary starts from
BASE_VOCAB_SIZE: Final[int] = 256
