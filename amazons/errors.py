"""
Exception hierarchy for the Amazons engine.

Every error raised by the engine derives from AmazonsError so that callers
can catch engine failures without also swallowing unrelated bugs. Each
subclass also derives from the closest built-in exception, so code that
already handles ValueError or LookupError keeps working.

Running out of search time is deliberately absent here: the deadline is
ordinary control flow inside search.py and never surfaces as an exception.
"""


class AmazonsError(Exception):
    """Base class for all engine errors."""


class InvalidCoordinate(AmazonsError, ValueError):
    """A square index or dimension lies outside the 10x10 board."""


class InvalidNotation(AmazonsError, ValueError):
    """Move or coordinate text does not match the expected notation.

    The play loop treats this as recoverable and asks for another line.
    """


class NoPieceAtSource(AmazonsError, LookupError):
    """Board.apply() was given a move whose origin holds no piece.

    Moves produced by the enumerator never trigger this, so seeing it means
    the caller passed a move that does not belong to the position.
    """
