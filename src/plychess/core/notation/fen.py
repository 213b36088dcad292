"""FEN parsing and serialization."""

from __future__ import annotations

from itertools import groupby

from plychess.core.board import Board
from plychess.core.enums import CastlingRights, Color
from plychess.core.errors import FormatError
from plychess.core.piece import Piece
from plychess.core.position import Position
from plychess.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_SIDES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

# Rank index an en-passant target must sit on, by side to move
_EP_RANK: dict[Color, int] = {Color.WHITE: 5, Color.BLACK: 2}


def _split_fields(fen: str) -> list[str]:
    fields = fen.split()
    if len(fields) < 4 or len(fields) > 6:
        raise FormatError(f"Invalid FEN (need 4-6 fields): {fen!r}")
    return fields


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The halfmove clock and fullmove number may be omitted (defaults 0 and 1).

    Raises:
        FormatError: on fewer than 4 or more than 6 fields, or any field that
            does not follow the FEN grammar.
    """
    fields = _split_fields(fen)
    placement, side_field, castling_field, ep_field = fields[:4]

    board = _parse_placement(placement, fen)
    side = _SIDES.get(side_field)
    if side is None:
        raise FormatError(f"Invalid FEN side-to-move field: {side_field!r}")

    return Position(
        board,
        side,
        _parse_castling(castling_field),
        _parse_en_passant(ep_field, side),
        _parse_counter(fields[4], "halfmove clock", 0) if len(fields) > 4 else 0,
        _parse_counter(fields[5], "fullmove number", 1) if len(fields) > 5 else 1,
    )


def _parse_placement(placement: str, fen: str) -> Board:
    rows = placement.split("/")
    if len(rows) != 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank, row in zip(range(7, -1, -1), rows):
        cells: list[Piece | None] = []
        for ch in row:
            if ch in "12345678":
                cells.extend([None] * int(ch))
                continue
            try:
                cells.append(Piece.from_char(ch))
            except ValueError as exc:
                raise FormatError(f"Invalid FEN piece {ch!r}: {fen!r}") from exc
        if len(cells) != 8:
            raise FormatError(f"Invalid FEN rank width: {fen!r}")
        for file, piece in enumerate(cells):
            if piece is not None:
                board[make_square(file, rank)] = piece
    return board


def _parse_castling(field: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if field == "-":
        return castling
    rights = dict(_CASTLING_LETTERS)
    for ch in field:
        right = rights.get(ch)
        if right is None or castling & right:
            raise FormatError(f"Invalid FEN castling field: {field!r}")
        castling |= right
    return castling


def _parse_en_passant(field: str, side: Color) -> Square | None:
    if field == "-":
        return None
    try:
        sq = parse_square(field)
    except ValueError as exc:
        raise FormatError(f"Invalid FEN en-passant square: {field!r}") from exc
    if rank_of(sq) != _EP_RANK[side]:
        raise FormatError(f"Invalid FEN en-passant square for side-to-move: {field!r}")
    return sq


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise FormatError(f"Invalid FEN {name}: {text!r}") from exc
    if value < minimum:
        raise FormatError(f"Invalid FEN {name}: {text!r}")
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    fields = [
        "/".join(_rank_to_str(pos.board, rank) for rank in range(7, -1, -1)),
        "w" if pos.side_to_move == Color.WHITE else "b",
        _castling_to_str(pos.castling),
        "-" if pos.en_passant is None else square_name(pos.en_passant),
        str(pos.halfmove_clock),
        str(pos.fullmove_number),
    ]
    return " ".join(fields)


def _rank_to_str(board: Board, rank: int) -> str:
    cells = [board[make_square(file, rank)] for file in range(8)]
    text = ""
    for is_gap, run in groupby(cells, key=lambda piece: piece is None):
        if is_gap:
            text += str(len(list(run)))
        else:
            text += "".join(str(piece) for piece in run)
    return text


def _castling_to_str(castling: CastlingRights) -> str:
    return "".join(ch for ch, right in _CASTLING_LETTERS if castling & right) or "-"


def normalize_fen(fen: str) -> str:
    """Canonical spelling of *fen*.

    The text goes through the full parser, so anything
    :func:`position_from_fen` rejects raises :class:`FormatError` here too.
    The result collapses whitespace and empty-square runs, orders castling
    letters as ``KQkq`` and fills in omitted move counters.
    """
    return position_to_fen(position_from_fen(fen))
