"""Train a byte-level BPE tokenizer on a text corpus and save its vocabulary and merges."""

import argparse
import logging
from pathlib import Path

from toktokenizer import BasicTokenizer

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def load_corpus(args: argparse.Namespace) -> str:
    """Read the training text from a local file or a Hugging Face dataset."""
    if args.dataset is None:
        return Path(args.input).read_text(encoding="utf-8")

    # only needed for hub corpora
    from datasets import load_dataset

    print(f"Loading {args.dataset} (split={args.split}) …")
    ds = load_dataset(args.dataset, split=args.split)
    if args.num_docs is not None:
        return "".join(ds[: args.num_docs][args.text_column])
    return "".join(ds[args.text_column])


def main() -> None:
    """Train, report compression stats and save the tokenizer files."""
    parser = argparse.ArgumentParser(
        description="Train a byte-level BPE tokenizer."
    )
    parser.add_argument(
        "--input",
        type=str,
        default="train.txt",
        help="UTF-8 text file to train on (default: train.txt).",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Optional Hugging Face dataset name; overrides --input.",
    )
    parser.add_argument("--split", type=str, default="train", help="Dataset split.")
    parser.add_argument(
        "--text-column", type=str, default="text", help="Dataset text column."
    )
    parser.add_argument(
        "--num-docs",
        type=int,
        default=None,
        help="Number of dataset documents to use (default: all).",
    )
    parser.add_argument(
        "--vocab-size",
        type=int,
        default=500,
        help="Target vocab size including the 256 byte tokens (default: 500).",
    )
    parser.add_argument(
        "--vocab-out", type=str, default="vocab.model", help="Vocabulary output file."
    )
    parser.add_argument(
        "--merges-out", type=str, default="merges.txt", help="Merges output file."
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every learned merge."
    )
    args = parser.parse_args()

    text = load_corpus(args)
    print(f"number of chars {len(text):,}")

    tok = BasicTokenizer()
    tok.train(text, args.vocab_size, verbose=args.verbose)

    encoded = tok.encode(text)
    original_tokens = len(text.encode("utf-8"))
    if encoded:
        print(f"Original tokens (bytes): {original_tokens:,}")
        print(f"Compressed tokens: {len(encoded):,}")
        print(f"Compression ratio: {original_tokens / len(encoded):.2f}x")

    tok.save(args.vocab_out, args.merges_out)


if __name__ == "__main__":
    main()
