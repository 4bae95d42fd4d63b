"""Unit tests for toktokenizer training, encode/decode and edge cases."""

import logging

import pytest

import toktokenizer as ttok
from toktokenizer.errors import (
    InvalidConfigurationError,
    InvalidEncodingError,
    VocabularyError,
)


CORPUS = "hello world hello world the quick brown fox jumps over the lazy dog"


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def basic_tokenizer():
    """Return a trained BasicTokenizer."""
    tok = ttok.BasicTokenizer()
    tok.train(CORPUS, vocab_size=300, verbose=False)
    return tok


# Training
# ---------------------------------------------------------------------------


def test_train_base_vocab_size_performs_no_merges():
    """vocab_size of 256 learns zero merges."""
    tok = ttok.BasicTokenizer()
    tok.train(CORPUS, vocab_size=256)
    assert tok.merges == {}
    assert tok.vocab_size() == 256


@pytest.mark.parametrize("vocab_size", [255, 0, -1])
def test_train_rejects_small_vocab(vocab_size):
    """vocab_size below the byte alphabet raises before training."""
    tok = ttok.BasicTokenizer()
    with pytest.raises(InvalidConfigurationError):
        tok.train(CORPUS, vocab_size=vocab_size)
    assert tok.merges == {}


@pytest.mark.parametrize("vocab_size", ["300", 300.0, True])
def test_train_rejects_non_integer_vocab(vocab_size):
    """Non-integer vocab sizes raise InvalidConfigurationError."""
    tok = ttok.BasicTokenizer()
    with pytest.raises(InvalidConfigurationError):
        tok.train(CORPUS, vocab_size=vocab_size)


def test_train_stops_early_with_warning(caplog):
    """Too few pairs ends training early and logs a warning, not an error."""
    tok = ttok.BasicTokenizer()
    with caplog.at_level(logging.WARNING):
        tok.train("abab", vocab_size=300)
    assert 0 < len(tok.merges) < 300 - 256
    assert "stopping early" in caplog.text


def test_train_empty_corpus():
    """An empty corpus yields the base vocabulary only."""
    tok = ttok.BasicTokenizer()
    tok.train("", vocab_size=300)
    assert tok.merges == {}
    assert tok.vocab_size() == 256


def test_train_accepts_list_input():
    """List input trains the same as the joined string."""
    joined = ttok.BasicTokenizer()
    joined.train(CORPUS, vocab_size=280)
    parts = ttok.BasicTokenizer()
    parts.train([CORPUS[:20], CORPUS[20:]], vocab_size=280)
    assert parts.merges == joined.merges


def test_train_is_deterministic():
    """Two runs on the same corpus learn identical merges."""
    a, b = ttok.BasicTokenizer(), ttok.BasicTokenizer()
    a.train(CORPUS, vocab_size=300)
    b.train(CORPUS, vocab_size=300)
    assert list(a.merges.items()) == list(b.merges.items())


def test_vocab_invariants(basic_tokenizer):
    """Base bytes are fixed and every minted token is its children's concatenation."""
    vocab, merges = basic_tokenizer.vocab, basic_tokenizer.merges
    assert len(vocab) == 256 + len(merges)
    assert all(vocab[i] == bytes([i]) for i in range(256))
    for (tok0, tok1), mtok in merges.items():
        assert tok0 < mtok and tok1 < mtok
        assert vocab[mtok] == vocab[tok0] + vocab[tok1]
    assert list(merges.values()) == list(range(256, len(vocab)))


def test_verbose_logs_each_merge(caplog):
    """Verbose training logs progress for every merge."""
    tok = ttok.BasicTokenizer()
    with caplog.at_level(logging.INFO):
        tok.train("aaabdaaabac", vocab_size=257, verbose=True)
    assert "merge 1/1 (100.00%): (97, 97) -> 256 (aa)" in caplog.text
    assert "train completed in" in caplog.text


# Encode-decode round-trip
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text",
    [
        "hello world",
        "Hello, world!",
        "café naïve 日本語 🎉",
        "   \n\t  ",
        "x",
        "",
    ],
)
def test_encode_decode_roundtrip(basic_tokenizer, text):
    """Encode then decode returns the original text."""
    assert basic_tokenizer.decode(basic_tokenizer.encode(text)) == text


def test_encode_is_stable_under_reencoding(basic_tokenizer):
    """Re-encoding decoded output gives the same tokens."""
    tokens = basic_tokenizer.encode(CORPUS)
    assert basic_tokenizer.encode(basic_tokenizer.decode(tokens)) == tokens


def test_repetitive_text_creates_merges(basic_tokenizer):
    """Text from the corpus compresses below its byte length."""
    text = "hello world"
    tokens = basic_tokenizer.encode(text)
    assert len(tokens) < len(text.encode("utf-8"))
    assert all(0 <= tok < basic_tokenizer.vocab_size() for tok in tokens)


def test_encode_unseen_bytes(basic_tokenizer):
    """Bytes absent from training encode to their raw byte tokens."""
    assert basic_tokenizer.encode("ZZZ") == [90, 90, 90]


def test_encode_untrained_returns_raw_bytes():
    """An untrained tokenizer still encodes and decodes."""
    tok = ttok.get_tokenizer()
    assert tok.encode("hi") == [104, 105]
    assert tok.decode([104, 105]) == "hi"


def test_encode_empty_string(basic_tokenizer):
    """Empty string encodes to an empty list."""
    assert basic_tokenizer.encode("") == []
    assert basic_tokenizer.decode([]) == ""


# Decode errors
# ---------------------------------------------------------------------------


def test_decode_invalid_utf8_raises(basic_tokenizer):
    """A foreign byte sequence is reported, not replaced."""
    with pytest.raises(InvalidEncodingError) as exc_info:
        basic_tokenizer.decode([104, 0xFF])
    assert exc_info.value.position == 1


def test_decode_invalid_utf8_replace_opt_in(basic_tokenizer):
    """Lossy decoding is available when asked for explicitly."""
    assert basic_tokenizer.decode([104, 0xFF], errors="replace") == "h�"


@pytest.mark.parametrize("bad_tok", [-1, 300, 10_000])
def test_decode_unknown_token_raises(basic_tokenizer, bad_tok):
    """Ids outside the vocabulary raise VocabularyError."""
    with pytest.raises(VocabularyError) as exc_info:
        basic_tokenizer.decode([104, bad_tok])
    assert exc_info.value.invalid_tok == bad_tok


# Batch encode/decode
# ---------------------------------------------------------------------------


def test_encode_batch_decode_batch(basic_tokenizer):
    """Batch encode and decode match single-text results."""
    texts = ["First.", "hello world", "Third."]
    encoded = basic_tokenizer.encode_batch(texts)
    decoded = basic_tokenizer.decode_batch(encoded)

    assert decoded == texts
    for text, tokens in zip(texts, encoded):
        assert basic_tokenizer.encode(text) == tokens


def test_batch_empty(basic_tokenizer):
    """Empty batches return empty lists."""
    assert basic_tokenizer.encode_batch([]) == []
    assert basic_tokenizer.decode_batch([]) == []
