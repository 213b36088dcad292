"""Core domain layer — single-ply chess rules with zero external dependencies.

Quick start::

    from plychess.core import MoveGenerator, Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).legal_moves_all():
        print(move)
    pos = pos.apply_move(move)
    print(Rules.evaluate(pos))
"""

from plychess.core.board import Board
from plychess.core.enums import (
    PROMOTION_TYPES,
    CastleSide,
    CastlingRights,
    Color,
    GameResult,
    GameStatus,
    PieceType,
)
from plychess.core.errors import ChessError, FormatError, IllegalMoveError
from plychess.core.move import Move
from plychess.core.move_generator import (
    MoveGenerator,
    generate_all_legal_moves,
    generate_legal_moves,
    generate_pseudo_moves,
    is_attacked,
    is_in_check,
)
from plychess.core.notation import (
    STARTING_FEN,
    move_to_uci,
    normalize_fen,
    parse_uci,
    parse_uci_move,
    position_from_fen,
    position_to_fen,
)
from plychess.core.piece import Piece
from plychess.core.position import Position, apply_move
from plychess.core.rules import Rules, evaluate
from plychess.core.types import (
    Square,
    file_of,
    make_square,
    offset_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Errors
    "ChessError",
    "FormatError",
    "IllegalMoveError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "offset_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Operations
    "apply_move",
    "evaluate",
    "generate_all_legal_moves",
    "generate_legal_moves",
    "generate_pseudo_moves",
    "is_attacked",
    "is_in_check",
    # Notation
    "STARTING_FEN",
    "move_to_uci",
    "normalize_fen",
    "parse_uci",
    "parse_uci_move",
    "position_from_fen",
    "position_to_fen",
]
