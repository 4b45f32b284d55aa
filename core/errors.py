"""
Error types raised by the flashcard engine.
"""


class PersistenceError(RuntimeError):
    """A local or remote persistence tier failed to read or write."""


class WordSupplyError(RuntimeError):
    """The word catalog could not be fetched."""
