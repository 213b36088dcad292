"""Exceptions raised by the rules core."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by plychess."""


class FormatError(ChessError, ValueError):
    """Malformed FEN, move or square text."""


class IllegalMoveError(ChessError, ValueError):
    """A move that is not in the legal set of the position it was played in."""
