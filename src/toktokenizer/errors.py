"""Custom exception hierarchy for toktokenizer errors."""

from .types import Token


class TokTokError(Exception):
    """Base exception for all toktokenizer errors."""


class InvalidConfigurationError(TokTokError):
    """Raised when a tokenizer is configured with unusable settings."""

    def __init__(self, message: str, *, vocab_size: object = None) -> None:
        """Initialize with optional vocab_size that gets appended to the message."""
        if vocab_size is not None:
            message = f"{message} (vocab size: {vocab_size!r})"
        super().__init__(message)
        self.vocab_size = vocab_size


class InvalidEncodingError(TokTokError):
    """Raised when decoded token bytes are not valid text."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (byte offset: {position})"
        super().__init__(message)
        self.position = position


class VocabularyError(TokTokError):
    """Raised when a token id has no vocabulary entry."""

    def __init__(self, message: str, *, invalid_tok: Token | None = None) -> None:
        if invalid_tok is not None:
            message = f"{message} (invalid token: {invalid_tok})"
        super().__init__(message)
        self.invalid_tok = invalid_tok


class IOFailureError(TokTokError):
    """Raised when tokenizer files cannot be written."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        if path:
            message = f"{message} (path: {path})"
        super().__init__(message)
        self.path = path


class ModelLoadError(TokTokError):
    """Raised when loading a merges file fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        line_no: int | None = None,
    ) -> None:
        extra = ""
        if model_path:
            extra += f" (path: {model_path})"
        if line_no is not None:
            extra += f" (line: {line_no})"
        super().__init__(message + extra)
        self.model_path = model_path
        self.line_no = line_no
