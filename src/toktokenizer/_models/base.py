"""
Base tokenizer interface for byte-level tokenization implementations.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Final

import regex as re

from .._sanitise import render_bytes
from ..errors import IOFailureError, InvalidEncodingError, ModelLoadError, VocabularyError
from ..types import BASE_VOCAB_SIZE, Encoding, Token, Vocabulary

# one merge rule per line: [<left>][<right>] -> [<minted>]
MERGE_LINE: Final = re.compile(r"^\[(\d+)\]\[(\d+)\] -> \[(\d+)\]$")

log = logging.getLogger(__name__)


class Tokenizer(ABC):
    """
    Abstract base class for byte-level tokenizers.

    Manages vocabulary, byte pair merges, and provides serialization methods.
    """

    def __init__(self) -> None:
        """Initialize tokenizer with base 256 vocabulary."""
        super().__init__()
        # byte pair -> merge token
        self.merges: Encoding = {}
        # token -> bytes
        self.vocab: Vocabulary = self._build_vocab()

    @abstractmethod
    def train(
        self, text: str | list[str], vocab_size: int, verbose: bool = False
    ) -> None:
        """Train tokenizer on text to learn merges up to target vocab size."""
        ...

    @abstractmethod
    def encode(self, text: str) -> list[Token]:
        """Encode text into a sequence of tokens."""
        ...

    def encode_batch(self, texts: list[str]) -> list[list[Token]]:
        """Encode multiple texts, preserving input order."""
        return [self.encode(text) for text in texts]

    def decode(self, tokens: list[Token], errors: str = "strict") -> str:
        """
        Decode a sequence of tokens back into text.

        :param tokens: Token sequence to decode.
        :param errors: How to handle invalid UTF-8, passed to ``bytes.decode``.
                       Defaults to "strict" so corrupted sequences are reported.
        :raises VocabularyError: If any token id is not in the vocabulary.
        :raises InvalidEncodingError: If the joined bytes are not valid UTF-8
                                      and ``errors`` is "strict".
        """
        n_toks = len(self.vocab)
        for tok in tokens:
            # negative ids would silently index from the end of the list
            if not 0 <= tok < n_toks:
                raise VocabularyError("token not in vocabulary", invalid_tok=tok)

        # token stream -> byte stream
        txt_bytes = b"".join(self.vocab[tok] for tok in tokens)
        # byte stream -> python string
        try:
            return txt_bytes.decode("utf-8", errors=errors)
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                "decoded bytes are not valid utf-8", position=e.start
            ) from e

    def decode_batch(
        self, token_batch: list[list[Token]], errors: str = "strict"
    ) -> list[str]:
        """Decode multiple token sequences, preserving input order."""
        return [self.decode(tokens, errors=errors) for tokens in token_batch]

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.vocab)

    def save(self, vocab_path: str | Path, merges_path: str | Path) -> None:
        """
        Save tokenizer state to disk.

        Writes a human-readable vocabulary file and a merges file. Only the
        merges file can be loaded back; the vocabulary file renders invalid
        UTF-8 with replacement characters and is meant for inspection.

        :param vocab_path: Destination for ``[<id>] -> (<text>)`` lines.
        :param merges_path: Destination for ``[<left>][<right>] -> [<minted>]`` lines.
        :raises IOFailureError: If either file cannot be written.
        """
        log.info("saving tokenizer to %s and %s", vocab_path, merges_path)

        # render everything up front so a write failure leaves nothing half built
        vocab_body = "".join(
            f"[{tok}] -> ({render_bytes(b)})\n" for tok, b in enumerate(self.vocab)
        )
        merges_body = "".join(
            f"[{pair[0]}][{pair[1]}] -> [{mtok}]\n" for pair, mtok in self.merges.items()
        )

        self._write_file(Path(vocab_path), vocab_body)
        log.debug("saved %d vocabulary entries to %s", len(self.vocab), vocab_path)
        self._write_file(Path(merges_path), merges_body)
        log.debug("saved %d merge rules to %s", len(self.merges), merges_path)

        log.info("tokenizer saved successfully")

    def load(self, merges_path: str | Path) -> None:
        """
        Load tokenizer state from a merges file written by ``save``.

        Restores merge rules in file order and rebuilds the vocabulary.

        :param merges_path: Path to the merges file.
        :raises ModelLoadError: If the file does not exist, a line is malformed,
                                minted ids are not dense from 256, or a rule
                                references a token that is not yet defined.
        """
        path = Path(merges_path)

        if not path.is_file():
            raise ModelLoadError("merges filepath does not exist", model_path=str(path))

        log.info("loading merges from %s", path)

        merges: Encoding = {}

        try:
            with path.open("r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue

                    m = MERGE_LINE.match(line)
                    if m is None:
                        raise ModelLoadError(
                            f"invalid merge format: {line!r}",
                            model_path=str(path),
                            line_no=line_no,
                        )
                    ctok0, ctok1, mtok = map(int, m.groups())

                    expected = BASE_VOCAB_SIZE + len(merges)
                    if mtok != expected:
                        raise ModelLoadError(
                            f"expected merged token {expected} got {mtok}",
                            model_path=str(path),
                            line_no=line_no,
                        )
                    # children must already exist when the parent is minted
                    if ctok0 >= mtok or ctok1 >= mtok:
                        raise ModelLoadError(
                            f"merge references undefined token: {line!r}",
                            model_path=str(path),
                            line_no=line_no,
                        )
                    if (ctok0, ctok1) in merges:
                        raise ModelLoadError(
                            f"duplicate merge rule: {line!r}",
                            model_path=str(path),
                            line_no=line_no,
                        )
                    merges[(ctok0, ctok1)] = mtok
        except (OSError, UnicodeDecodeError) as e:
            raise ModelLoadError("failed to read merges file", model_path=str(path)) from e

        log.debug("loaded %d merge rules", len(merges))

        # atomically update tokenizer state after successful read
        self.merges = merges
        self.vocab = self._build_vocab()

        log.info(
            "merges loaded successfully: %d merge rules, %d total tokens",
            len(self.merges),
            len(self.vocab),
        )

    def _build_vocab(self) -> Vocabulary:
        """
        Build token-to-bytes vocabulary list.

        Adds base 256 byte tokens then merged tokens in merge order so child
        tokens exist before their parent.
        """
        vocab: Vocabulary = [bytes([btok]) for btok in range(BASE_VOCAB_SIZE)]
        for (tok0, tok1), _ in sorted(self.merges.items(), key=lambda x: x[1]):
            vocab.append(vocab[tok0] + vocab[tok1])

        log.debug("built vocabulary with %d tokens", len(vocab))
        return vocab

    @staticmethod
    def _write_file(path: Path, body: str) -> None:
        """Write ``body`` to ``path``, creating parent directories as needed."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(body)
        except OSError as e:
            raise IOFailureError("failed to write tokenizer file", path=str(path)) from e
