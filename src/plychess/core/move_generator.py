"""Pseudo-legal and legal move generation + attack detection.

Everything here reads the :class:`Position` it is given and nothing else.
Legality is decided by simulation: each pseudo-legal candidate is applied to
a throw-away successor, and dropped if the mover's king is attacked there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.enums import CastleSide, Color, PieceType
from plychess.core.move import Move
from plychess.core.piece import Piece
from plychess.core.types import (
    Square,
    is_valid_square,
    make_square,
    offset_square,
    rank_of,
)

if TYPE_CHECKING:
    from plychess.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (-1, 2),
    (-2, 1),
    (1, -2),
    (2, -1),
    (-1, -2),
    (-2, -1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_KING_HOME_FILE = 4

# side -> (files that must be empty, files the king crosses incl. its
# destination, rook home file, king destination file)
_CASTLE_LAYOUT: dict[
    CastleSide, tuple[tuple[int, ...], tuple[int, ...], int, int]
] = {
    CastleSide.KINGSIDE: ((5, 6), (5, 6), 7, 6),
    CastleSide.QUEENSIDE: ((1, 2, 3), (3, 2), 0, 2),
}


# -- Precomputed lookup tables ---------------------------------------------


def _walk(sq: Square, df: int, dr: int, limit: int) -> tuple[Square, ...]:
    """Up to *limit* squares from *sq* along (df, dr), stopping at the edge."""
    walked: list[Square] = []
    cur = offset_square(sq, df, dr)
    while cur is not None and len(walked) < limit:
        walked.append(cur)
        cur = offset_square(cur, df, dr)
    return tuple(walked)


def _leaper_table(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[Square, ...], ...]:
    return tuple(
        tuple(to_sq for df, dr in offsets for to_sq in _walk(sq, df, dr, 1))
        for sq in range(64)
    )


def _ray_table(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    return tuple(
        tuple(_walk(sq, df, dr, 7) for df, dr in directions) for sq in range(64)
    )


_KNIGHT_TARGETS = _leaper_table(KNIGHT_OFFSETS)
_KING_TARGETS = _leaper_table(KING_OFFSETS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _ray_table(BISHOP_DIRS),
    PieceType.ROOK: _ray_table(ROOK_DIRS),
    PieceType.QUEEN: _ray_table(QUEEN_DIRS),
}


class MoveGenerator:
    """Move generation and attack queries over one :class:`Position`.

    The generator never modifies the position; legality checks run on
    successor positions built by :meth:`Position.successor`.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def pseudo_moves(self, sq: Square) -> list[Move]:
        """Moves of the piece on *sq*, ignoring the safety of its own king.

        Works for either color; an empty or off-board square yields no moves.
        """
        piece = self._piece_on(sq)
        if piece is None:
            return []

        moves: list[Move] = []
        kind = piece.kind
        if kind == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif kind == PieceType.KNIGHT:
            self._gen_step(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
        elif kind == PieceType.KING:
            self._gen_step(sq, piece.color, _KING_TARGETS[sq], moves)
            self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[kind][sq], moves)
        return moves

    def legal_moves(self, sq: Square) -> list[Move]:
        """Moves of the side to move's piece on *sq* that keep its king safe."""
        piece = self._piece_on(sq)
        if piece is None or piece.color != self._pos.side_to_move:
            return []

        mover = piece.color
        return [
            move
            for move in self.pseudo_moves(sq)
            if not MoveGenerator(self._pos.successor(move)).is_in_check(mover)
        ]

    def legal_moves_all(self) -> list[Move]:
        """All legal moves for the side to move, by ascending origin square."""
        legal: list[Move] = []
        for sq in self._board.occupied(self._pos.side_to_move):
            legal.extend(self.legal_moves(sq))
        return legal

    def has_legal_move(self) -> bool:
        return any(
            self.legal_moves(sq)
            for sq in self._board.occupied(self._pos.side_to_move)
        )

    # -- Attack detection ---------------------------------------------------

    def attack_targets(self, sq: Square) -> list[Square]:
        """Squares the piece on *sq* attacks.

        Same patterns as :meth:`pseudo_moves` with three differences: pawns
        attack both forward diagonals whether or not anything stands there,
        pawn pushes attack nothing, and castling is never included. Sliding
        rays stop on (and include) the first occupied square.
        """
        piece = self._piece_on(sq)
        if piece is None:
            return []

        kind = piece.kind
        if kind == PieceType.PAWN:
            reachable = (offset_square(sq, df, piece.color.forward) for df in (-1, 1))
            return [to_sq for to_sq in reachable if to_sq is not None]
        if kind == PieceType.KNIGHT:
            return list(_KNIGHT_TARGETS[sq])
        if kind == PieceType.KING:
            return list(_KING_TARGETS[sq])

        board = self._board
        targets: list[Square] = []
        for ray in _SLIDER_RAYS[kind][sq]:
            for to_sq in ray:
                targets.append(to_sq)
                if board[to_sq] is not None:
                    break
        return targets

    def is_attacked(self, color: Color, sq: Square) -> bool:
        """Is *sq* attacked by any piece of *color*'s opponent?"""
        for attacker_sq in self._board.occupied(color.opposite):
            if sq in self.attack_targets(attacker_sq):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?"""
        return self.is_attacked(color, self._board.king_square(color))

    # -- Piece-specific generators (private) -------------------------------

    def _piece_on(self, sq: Square) -> Piece | None:
        # Negative indices would otherwise wrap onto real squares
        if not is_valid_square(sq):
            return None
        return self._board[sq]

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = color.forward
        start_rank = 1 if color == Color.WHITE else 6
        last_rank = 7 if color == Color.WHITE else 0

        one_step = offset_square(sq, 0, step)
        if one_step is not None and board.is_empty(one_step):
            moves.append(
                Move(sq, one_step, is_promotion=rank_of(one_step) == last_rank)
            )
            if rank_of(sq) == start_rank:
                two_step = offset_square(sq, 0, 2 * step)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, is_double_step=True))

        for df in (-1, 1):
            cap_sq = offset_square(sq, df, step)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(
                        Move(
                            sq,
                            cap_sq,
                            is_capture=True,
                            is_promotion=rank_of(cap_sq) == last_rank,
                        )
                    )
            elif cap_sq == self._pos.en_passant and self._en_passant_victim(
                sq, cap_sq, color
            ):
                moves.append(Move(sq, cap_sq, is_capture=True, is_en_passant=True))

    def _en_passant_victim(self, from_sq: Square, to_sq: Square, color: Color) -> bool:
        behind = make_square(to_sq % 8, rank_of(from_sq))
        victim = self._board[behind]
        return victim is not None and victim.is_a(color.opposite, PieceType.PAWN)

    def _gen_step(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, is_capture=True))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, is_capture=True))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        home_rank = 0 if color == Color.WHITE else 7
        if king_sq != make_square(_KING_HOME_FILE, home_rank):
            return

        board = self._board
        rook = Piece(color, PieceType.ROOK)
        in_check: bool | None = None

        for side, (empty_files, crossed_files, rook_file, king_file) in _CASTLE_LAYOUT.items():
            if not self._pos.has_castling_right(color, side):
                continue
            if board[make_square(rook_file, home_rank)] != rook:
                continue
            if any(not board.is_empty(make_square(f, home_rank)) for f in empty_files):
                continue
            if in_check is None:
                in_check = self.is_attacked(color, king_sq)
            if in_check:
                return
            if any(
                self.is_attacked(color, make_square(f, home_rank)) for f in crossed_files
            ):
                continue
            moves.append(
                Move(king_sq, make_square(king_file, home_rank), castle_side=side)
            )


# -- Functional spellings ---------------------------------------------------


def generate_pseudo_moves(position: Position, sq: Square) -> list[Move]:
    return MoveGenerator(position).pseudo_moves(sq)


def generate_legal_moves(position: Position, sq: Square) -> list[Move]:
    return MoveGenerator(position).legal_moves(sq)


def generate_all_legal_moves(position: Position) -> list[Move]:
    return MoveGenerator(position).legal_moves_all()


def is_attacked(position: Position, color: Color, sq: Square) -> bool:
    """Is *sq* attacked by the opponent of *color* in *position*?"""
    return MoveGenerator(position).is_attacked(color, sq)


def is_in_check(position: Position, color: Color) -> bool:
    return MoveGenerator(position).is_in_check(color)
