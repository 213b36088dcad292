"""Qt bridge exposing a :class:`GameSession` through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from plychess.core.errors import ChessError
from plychess.core.move import Move
from plychess.game.session import GameSession, MoveRecord


class SessionBridge(QObject):
    """Thread-affine adapter between a Qt UI and a game session.

    Slots never raise: move errors are turned into ``move_rejected`` and
    position errors into ``load_rejected``.
    """

    move_applied = pyqtSignal(object, str)  # Move, FEN after the move
    status_changed = pyqtSignal(object)  # GameStatus
    move_rejected = pyqtSignal(str)
    position_loaded = pyqtSignal(str)
    load_rejected = pyqtSignal(str)
    move_undone = pyqtSignal(object, str)  # Move, FEN restored

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = session if session is not None else GameSession()
        self._session.events.on_move.append(self._forward_move)
        self._session.events.on_status.append(self.status_changed.emit)
        self._session.events.on_load.append(self.position_loaded.emit)
        self._session.events.on_undo.append(self.move_undone.emit)

    @property
    def session(self) -> GameSession:
        return self._session

    def legal_moves(self, square: int | str) -> list[Move]:
        """Plain query for the UI's move highlighting."""
        try:
            return self._session.legal_moves(square)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))
            return []

    @pyqtSlot(object)
    def submit_move(self, move_obj: object) -> None:
        """Apply *move_obj* (a :class:`Move`) to the session."""
        if not isinstance(move_obj, Move):
            self.move_rejected.emit("Bridge received an invalid move")
            return
        try:
            self._session.apply(move_obj)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(str)
    def submit_uci(self, text: str) -> None:
        try:
            self._session.play_uci(text)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(str)
    def load_fen(self, fen: str) -> None:
        try:
            self._session.load_fen(fen)
        except ChessError as exc:
            self.load_rejected.emit(str(exc))

    @pyqtSlot()
    def new_game(self) -> None:
        self._session.new_game()

    @pyqtSlot()
    def undo(self) -> None:
        self._session.undo()

    def _forward_move(self, record: MoveRecord) -> None:
        self.move_applied.emit(record.move, record.fen_after)
