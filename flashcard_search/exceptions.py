"""Exceptions raised by the flashcard search engine."""


class SearchEngineError(Exception):
    """Base class for engine errors."""


class PersistenceError(SearchEngineError):
    """A durable store could not read or write a blob."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{message} (key={key!r})")
        self.key = key


class InvalidPayloadError(SearchEngineError, ValueError):
    """An incremental update carried data that does not describe the given kind."""
