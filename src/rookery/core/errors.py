"""Engine exceptions."""

from __future__ import annotations


class InvalidMoveError(ValueError):
    """A move was committed that the board cannot execute.

    Raised by :func:`rookery.core.execution.apply_move` when the source square
    is empty or holds a piece of the other colour.  This is a caller contract
    violation; the engine never returns the board unchanged instead.
    """
