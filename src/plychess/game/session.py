"""GameSession — the caller-facing surface over the rules core.

Holds the current position of one game in memory, answers legal-move and
status queries, applies moves atomically, and keeps an undo stack.
Listeners subscribe through :attr:`GameSession.events` so a UI (or a test)
can react without polling.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from plychess.core.enums import Color, GameResult, GameStatus, PieceType
from plychess.core.errors import FormatError, IllegalMoveError
from plychess.core.move import Move
from plychess.core.move_generator import MoveGenerator
from plychess.core.notation import parse_uci, position_from_fen, position_to_fen
from plychess.core.position import Position
from plychess.core.rules import Rules
from plychess.core.types import Square, is_valid_square, parse_square
from plychess.game.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One applied ply: the resolved move and the positions around it."""

    move: Move
    position_before: Position
    position_after: Position
    status: GameStatus

    @property
    def fen_after(self) -> str:
        return position_to_fen(self.position_after)


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
StatusCallback = Callable[[GameStatus], None]
LoadCallback = Callable[[str], None]  # FEN of the loaded position
UndoCallback = Callable[[Move, str], None]  # undone move, FEN restored


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_load: list[LoadCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game's worth of state over immutable :class:`Position` values.

    Every mutating call either replaces the current position whole or raises
    and leaves the session exactly as it was.
    """

    __slots__ = ("_settings", "_position", "_status", "_history", "events")

    def __init__(self, settings: SessionSettings | None = None) -> None:
        self._settings = settings if settings is not None else SessionSettings()
        self.events = SessionEvents()
        self._history: list[MoveRecord] = []
        self._position = self._parse(self._settings.start_fen)
        self._status = Rules.evaluate(self._position)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def position(self) -> Position:
        return self._position

    @property
    def fen(self) -> str:
        return position_to_fen(self._position)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def result(self) -> GameResult:
        return Rules.result_for(self._status, self._position.side_to_move)

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        """Undoable plies, oldest first."""
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    # ── Setup ────────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from *fen*, or from the configured start position."""
        self.load_fen(fen if fen is not None else self._settings.start_fen)

    def load_fen(self, fen: str) -> None:
        """Replace the current game with the position described by *fen*.

        Raises:
            FormatError: if *fen* is malformed; the session is unchanged.
        """
        position = self._parse(fen)
        self._position = position
        self._status = Rules.evaluate(position)
        self._history.clear()

        loaded = position_to_fen(position)
        _LOGGER.debug("Loaded position %s (%s)", loaded, self._status.name)
        for cb in self.events.on_load:
            cb(loaded)
        self._emit_status()

    def _parse(self, fen: str) -> Position:
        try:
            position = position_from_fen(fen)
        except FormatError:
            _LOGGER.info("Rejected FEN %r", fen)
            raise
        for color in Color:
            if position.board.count(color, PieceType.KING) != 1:
                _LOGGER.info("Rejected FEN %r: needs one %s king", fen, color)
                raise FormatError(f"FEN must contain exactly one {color} king")
        return position

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, square: Square | str) -> list[Move]:
        """Legal moves from *square* (index or algebraic name)."""
        return MoveGenerator(self._position).legal_moves(self._square(square))

    def all_legal_moves(self) -> list[Move]:
        return MoveGenerator(self._position).legal_moves_all()

    @staticmethod
    def _square(square: Square | str) -> Square:
        if not isinstance(square, str):
            if not is_valid_square(square):
                raise FormatError(f"Invalid square index: {square!r}")
            return square
        try:
            return parse_square(square)
        except ValueError as exc:
            raise FormatError(str(exc)) from exc

    # ── Moves ────────────────────────────────────────────────────────────

    def apply(self, move: Move) -> MoveRecord:
        """Play *move* for the side to move.

        A promoting move without a chosen piece uses the configured default.

        Raises:
            IllegalMoveError: if *move* is not legal here; the session is
                unchanged.
        """
        if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            _LOGGER.info("Rejected off-board move %r", move)
            raise IllegalMoveError(f"Move leaves the board: {move!r}")

        wanted = move
        if wanted.promotion is None:
            wanted = move.with_promotion(self._settings.default_promotion)

        before = self._position
        try:
            resolved = before.resolve_move(wanted)
        except IllegalMoveError:
            _LOGGER.info("Rejected move %s in %s", move, position_to_fen(before))
            raise

        after = before.successor(resolved)
        record = MoveRecord(
            move=resolved,
            position_before=before,
            position_after=after,
            status=Rules.evaluate(after),
        )
        self._position = after
        self._status = record.status
        self._push_history(record)

        _LOGGER.debug("Played %s -> %s", resolved, record.status.name)
        for cb in self.events.on_move:
            cb(record)
        self._emit_status()
        return record

    def play_uci(self, text: str) -> MoveRecord:
        """Play a move given as long algebraic text such as ``e2e4``."""
        return self.apply(parse_uci(text))

    def undo(self) -> Move | None:
        """Take back the last ply. Returns the undone move, or None if empty."""
        if not self._history:
            return None

        record = self._history.pop()
        self._position = record.position_before
        self._status = Rules.evaluate(self._position)
        restored = position_to_fen(self._position)
        _LOGGER.debug("Undid %s", record.move)
        for cb in self.events.on_undo:
            cb(record.move, restored)
        self._emit_status()
        return record.move

    # ── Internal helpers ─────────────────────────────────────────────────

    def _push_history(self, record: MoveRecord) -> None:
        limit = self._settings.max_undo
        if limit == 0:
            return
        self._history.append(record)
        if limit is not None and len(self._history) > limit:
            del self._history[: len(self._history) - limit]

    def _emit_status(self) -> None:
        for cb in self.events.on_status:
            cb(self._status)
