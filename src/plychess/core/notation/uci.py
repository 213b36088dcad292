"""Long algebraic (UCI-style) move text: ``e2e4``, ``e1g1``, ``e7e8n``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.enums import PROMOTION_TYPES
from plychess.core.errors import FormatError, IllegalMoveError
from plychess.core.move import Move
from plychess.core.move_generator import MoveGenerator
from plychess.core.piece import kind_from_letter
from plychess.core.types import parse_square

if TYPE_CHECKING:
    from plychess.core.position import Position


def move_to_uci(move: Move) -> str:
    return str(move)


def parse_uci(text: str) -> Move:
    """Parse the shape of a move without consulting any position.

    The returned move carries only squares and the optional promotion piece;
    its flags are filled in when it is resolved against a position.
    """
    text = text.strip()
    if len(text) not in (4, 5):
        raise FormatError(f"Invalid move text: {text!r}")
    try:
        from_sq = parse_square(text[0:2])
        to_sq = parse_square(text[2:4])
        promotion = kind_from_letter(text[4]) if len(text) == 5 else None
    except ValueError as exc:
        raise FormatError(f"Invalid move text: {text!r}") from exc
    if promotion is not None and promotion not in PROMOTION_TYPES:
        raise FormatError(f"Invalid promotion piece in {text!r}")
    return Move(from_sq, to_sq, promotion=promotion)


def parse_uci_move(position: Position, text: str) -> Move:
    """Resolve *text* to the matching legal move of *position*.

    Raises:
        FormatError: if *text* is not a move.
        IllegalMoveError: if no legal move matches it.
    """
    wanted = parse_uci(text)
    for move in MoveGenerator(position).legal_moves(wanted.from_sq):
        if move.to_sq != wanted.to_sq:
            continue
        if move.is_promotion and wanted.promotion is not None:
            return move.with_promotion(wanted.promotion)
        return move
    raise IllegalMoveError(f"Illegal move: {text!r}")
