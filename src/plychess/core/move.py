"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from plychess.core.enums import CastleSide, PieceType
from plychess.core.piece import kind_letter
from plychess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A proposed move, as produced by the generator.

    ``is_promotion`` is set by the generator when a pawn reaches the far rank;
    ``promotion`` is the piece the caller wants (queen when left ``None``).
    """

    from_sq: Square
    to_sq: Square
    is_capture: bool = False
    is_en_passant: bool = False
    is_double_step: bool = False
    castle_side: CastleSide = CastleSide.NONE
    is_promotion: bool = False
    promotion: PieceType | None = None

    @property
    def is_castling(self) -> bool:
        return self.castle_side != CastleSide.NONE

    def with_promotion(self, kind: PieceType) -> Move:
        """Copy of this move carrying the caller's promotion choice."""
        return replace(self, promotion=kind)

    def __str__(self) -> str:
        """Long algebraic notation, e.g. ``e2e4`` or ``e7e8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            text += kind_letter(self.promotion)
        return text
