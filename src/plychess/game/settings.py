"""Session settings."""

from __future__ import annotations

from dataclasses import dataclass

from plychess.core.enums import PROMOTION_TYPES, PieceType
from plychess.core.notation import STARTING_FEN


@dataclass
class SessionSettings:
    """All caller-configurable session options."""

    # Position a fresh game starts from
    start_fen: str = STARTING_FEN

    # Piece used when a promoting move arrives without a choice
    default_promotion: PieceType = PieceType.QUEEN

    # Undo depth: None keeps every ply, 0 disables undo
    max_undo: int | None = None

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            raise ValueError(
                f"default_promotion must be one of {[p.name for p in PROMOTION_TYPES]}"
            )
        if self.max_undo is not None and self.max_undo < 0:
            raise ValueError("max_undo must be >= 0 or None")
