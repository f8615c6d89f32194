"""Exceptions raised by the word search core."""


class WordSearchError(Exception):
    """Base class for all word search errors."""


class EmptyWordSourceError(WordSearchError, ValueError):
    """A round could not start because its category produced no words."""

    def __init__(self, category: str, message: str = ""):
        self.category = category
        super().__init__(message or f"No words available for category: {category}")


class InvalidGridSizeError(WordSearchError, ValueError):
    """The requested grid size cannot hold any cells."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Grid size must be positive, got {size}")


class StorageUnavailable(WordSearchError):
    """The persistence backend cannot be read or written."""
