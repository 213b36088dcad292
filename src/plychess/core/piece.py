"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from plychess.core.enums import Color, PieceType

_KIND_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_LETTER_KINDS: dict[str, PieceType] = {v: k for k, v in _KIND_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable colored piece."""

    color: Color
    kind: PieceType

    def __str__(self) -> str:
        """FEN letter (uppercase = white, lowercase = black)."""
        letter = _KIND_LETTERS[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create a piece from its FEN letter, e.g. 'N' → white knight."""
        kind = _LETTER_KINDS.get(char.lower()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, kind)

    def is_a(self, color: Color, kind: PieceType) -> bool:
        return self.color == color and self.kind == kind


def kind_letter(kind: PieceType) -> str:
    """Lowercase letter for *kind* ('q' for queen)."""
    return _KIND_LETTERS[kind]


def kind_from_letter(letter: str) -> PieceType:
    """Inverse of :func:`kind_letter`; accepts either case."""
    try:
        return _LETTER_KINDS[letter.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece letter: {letter!r}") from None
