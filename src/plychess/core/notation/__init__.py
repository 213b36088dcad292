"""Notation package: FEN and long algebraic move text."""

from plychess.core.notation.fen import (
    STARTING_FEN,
    normalize_fen,
    position_from_fen,
    position_to_fen,
)
from plychess.core.notation.uci import move_to_uci, parse_uci, parse_uci_move

__all__ = [
    "STARTING_FEN",
    "normalize_fen",
    "position_from_fen",
    "position_to_fen",
    "move_to_uci",
    "parse_uci",
    "parse_uci_move",
]
