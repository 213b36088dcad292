"""Position — complete game state (board + metadata) and move application."""

from __future__ import annotations

from plychess.core.board import Board
from plychess.core.enums import (
    PROMOTION_TYPES,
    CastleSide,
    CastlingRights,
    Color,
    PieceType,
)
from plychess.core.errors import IllegalMoveError
from plychess.core.move import Move
from plychess.core.move_generator import MoveGenerator
from plychess.core.piece import Piece
from plychess.core.types import Square, file_of, is_valid_square, make_square, rank_of

# castle side -> (rook home file, rook file after castling)
_ROOK_FILES: dict[CastleSide, tuple[int, int]] = {
    CastleSide.KINGSIDE: (7, 5),
    CastleSide.QUEENSIDE: (0, 3),
}

_ROOK_HOMES: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


class Position:
    """Full chess position: board, side to move, castling, en passant, clocks.

    Positions are values. Nothing in the library mutates one after it has
    been built; :meth:`apply_move` returns the successor and leaves ``self``
    untouched, so a position can be shared freely between callers.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, White to move."""
        return cls()

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def has_castling_right(self, color: Color, side: CastleSide) -> bool:
        return bool(self.castling & CastlingRights.for_side(color, side))

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*; ``self`` is left unchanged.

        Raises:
            IllegalMoveError: see :meth:`resolve_move`.
        """
        return self.successor(self.resolve_move(move))

    def resolve_move(self, move: Move) -> Move:
        """Match *move* against the legal moves of its origin square.

        Only origin, destination and promotion choice are read from *move*;
        the generated move, with its capture, en passant and castling flags,
        is returned. A promotion without a chosen piece promotes to a queen.

        Raises:
            IllegalMoveError: if no legal move matches, or the promotion piece
                is not a knight, bishop, rook or queen.
        """
        if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            raise IllegalMoveError(f"Move leaves the board: {move!r}")

        legal = MoveGenerator(self).legal_moves(move.from_sq)
        resolved = next((m for m in legal if m.to_sq == move.to_sq), None)
        if resolved is None:
            raise IllegalMoveError(f"Illegal move {move} for {self.side_to_move}")

        if resolved.is_promotion:
            kind = move.promotion if move.promotion is not None else PieceType.QUEEN
            if kind not in PROMOTION_TYPES:
                raise IllegalMoveError(f"Cannot promote to {kind.name.lower()}")
            resolved = resolved.with_promotion(kind)
        return resolved

    def successor(self, move: Move) -> Position:
        """Apply a generated *move* without checking legality.

        Used by the legality filter to simulate candidates; callers holding a
        move from outside the generator want :meth:`apply_move`.
        """
        board = self.board.copy()
        piece = board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on the origin square of {move}")
        captured = board[move.to_sq]

        # Lift the piece and drop it (promoted if it reaches the far rank)
        board[move.from_sq] = None
        placed = piece
        if piece.kind == PieceType.PAWN and rank_of(move.to_sq) in (0, 7):
            placed = Piece(piece.color, move.promotion or PieceType.QUEEN)
        board[move.to_sq] = placed

        # En passant: the captured pawn sits behind the destination
        if move.is_en_passant:
            behind = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[behind]
            board[behind] = None

        # Slide the rook for castling
        if move.castle_side != CastleSide.NONE:
            rank = rank_of(move.from_sq)
            home_file, castled_file = _ROOK_FILES[move.castle_side]
            rook_from = make_square(home_file, rank)
            board[make_square(castled_file, rank)] = board[rook_from]
            board[rook_from] = None

        en_passant: Square | None = None
        if move.is_double_step:
            en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        if piece.kind == PieceType.PAWN or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        return Position(
            board=board,
            side_to_move=self.side_to_move.opposite,
            castling=self._castling_after(move, piece, captured),
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def _castling_after(
        self, move: Move, piece: Piece, captured: Piece | None
    ) -> CastlingRights:
        rights = self.castling
        if piece.kind == PieceType.KING:
            rights &= ~CastlingRights.for_color(piece.color)
        if piece.kind == PieceType.ROOK and move.from_sq in _ROOK_HOMES:
            rights &= ~_ROOK_HOMES[move.from_sq]
        if captured is not None and move.to_sq in _ROOK_HOMES:
            rights &= ~_ROOK_HOMES[move.to_sq]
        return rights

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        from plychess.core.notation.fen import position_to_fen

        return f"Position({position_to_fen(self)!r})"


def apply_move(position: Position, move: Move) -> Position:
    """Functional spelling of :meth:`Position.apply_move`."""
    return position.apply_move(move)
