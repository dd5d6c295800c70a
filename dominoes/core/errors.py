"""Exception types raised by the domino engine.

Each error also derives from the built-in exception a caller would
naturally catch (ValueError for bad input, RuntimeError for state misuse).
"""


class DominoError(Exception):
    """Base class for all engine errors."""


class InvalidPipError(DominoError, ValueError):
    """A tile side is outside the 0..MAX_PIP range."""


class InsufficientTilesError(DominoError, ValueError):
    """More tiles were requested than the set still holds."""


class EmptySetError(DominoError, LookupError):
    """A single tile was requested from an exhausted set."""


class BoardNotEmptyError(DominoError, RuntimeError):
    """An opening tile was played on a layout that already has tiles."""


class InvalidPlayerCountError(DominoError, ValueError):
    """A game or round was configured with an unsupported number of players."""


class IllegalPlayError(DominoError, ValueError):
    """A chosen tile is not held by the player or does not fit the layout."""


class CorruptSetError(DominoError, RuntimeError):
    """Standard set generation produced the wrong number of tiles."""
