"""Exception hierarchy for the chess core.

Illegal moves are not exceptions: ``Rules.apply`` reports them as an
:class:`~rookery.core.result.IllegalMove` result so the caller can re-prompt.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`rookery`."""


class ParseError(ChessError, ValueError):
    """Move text that does not describe any move."""

    def __init__(self, reason: str, raw_text: str) -> None:
        super().__init__(f"{reason}: {raw_text!r}")
        self.reason = reason
        self.raw_text = raw_text


class InvalidAccessError(ChessError, AttributeError):
    """Variant-specific data requested from the wrong variant."""


class PreconditionError(ChessError, ValueError):
    """An operation was invoked on input it is not defined for."""
