"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from plychess.core.enums import Color, PieceType
from plychess.core.piece import Piece
from plychess.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """64 optional pieces with a cached king square per color.

    A board is only written while a position is being built (FEN import or
    move application); once handed out inside a :class:`Position` it is
    treated as read-only.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square (None if that king is missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old = self._squares[sq]
        if old is not None and old.kind == PieceType.KING:
            if self._king_squares[old.color] == sq:
                self._king_squares[old.color] = None

        self._squares[sq] = piece
        if piece is not None and piece.kind == PieceType.KING:
            self._king_squares[piece.color] = sq

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> list[Square]:
        """Squares holding *color*'s pieces, ascending."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def pieces(self, color: Color, kind: PieceType) -> list[Square]:
        """Squares occupied by *color*'s pieces of *kind*, ascending."""
        target = Piece(color, kind)
        return [sq for sq, piece in enumerate(self._squares) if piece == target]

    def count(self, color: Color, kind: PieceType) -> int:
        return len(self.pieces(color, kind))

    def king_square(self, color: Color) -> Square:
        """Square of *color*'s king."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[color] is not None

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        clone = Board()
        clone._squares = list(self._squares)
        clone._king_squares = list(self._king_squares)
        return clone

    @classmethod
    def initial(cls) -> Board:
        """Standard starting placement."""
        b = cls()
        for file, kind in enumerate(_BACK_RANK):
            b[make_square(file, 0)] = Piece(Color.WHITE, kind)
            b[make_square(file, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(file, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(file, 7)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        lines = [
            f"{rank + 1} "
            + " ".join(str(p) if p else "." for p in self._squares[rank * 8 : rank * 8 + 8])
            for rank in reversed(range(8))
        ]
        lines.append("  " + " ".join("abcdefgh"))
        return "\n".join(lines)
