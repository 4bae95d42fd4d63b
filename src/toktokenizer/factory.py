"""Factory functions for creating tokenizers."""

from pathlib import Path

from ._models.basic import BasicTokenizer


def get_tokenizer() -> BasicTokenizer:
    """Create a fresh, untrained byte-level tokenizer."""
    return BasicTokenizer()


def from_pretrained(merges_path: str | Path) -> BasicTokenizer:
    """
    Load a pre-trained tokenizer from a merges file.

    :param merges_path: Path to a merges file written by ``Tokenizer.save``.
    :return: Loaded tokenizer with merge rules and rebuilt vocabulary.
    :raises ModelLoadError: If the file doesn't exist or is malformed.

    .. code-block:: python

        tokenizer = from_pretrained("merges.txt")
        tokens = tokenizer.encode("Hello world")
    """
    tokenizer = BasicTokenizer()
    tokenizer.load(merges_path)
    return tokenizer
