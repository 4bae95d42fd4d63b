"""toktokenizer: Byte-level BPE tokenization library."""

from ._models.base import Tokenizer
from ._models.basic import BasicTokenizer
from .errors import (
    IOFailureError,
    InvalidConfigurationError,
    InvalidEncodingError,
    ModelLoadError,
    TokTokError,
    VocabularyError,
)
from .factory import from_pretrained, get_tokenizer

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("toktokenizer")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "BasicTokenizer",
    "TokTokError",
    "InvalidConfigurationError",
    "InvalidEncodingError",
    "VocabularyError",
    "IOFailureError",
    "ModelLoadError",
    "get_tokenizer",
    "from_pretrained",
]
