"""Tests for the Qt session bridge."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from plychess.core.enums import GameStatus
from plychess.core.move import Move
from plychess.core.notation import STARTING_FEN
from plychess.core.types import E2, E4
from plychess.game.qt_bridge import SessionBridge
from plychess.game.session import GameSession


class TestSessionBridge:
    def test_submit_move_emits_applied_and_status(self) -> None:
        bridge = SessionBridge()
        applied = QSignalSpy(bridge.move_applied)
        status = QSignalSpy(bridge.status_changed)
        rejected = QSignalSpy(bridge.move_rejected)

        bridge.submit_move(Move(E2, E4))

        assert len(applied) == 1
        assert str(applied[0][0]) == "e2e4"
        assert applied[0][1] == bridge.session.fen
        assert len(status) == 1
        assert status[0][0] == GameStatus.ONGOING
        assert len(rejected) == 0

    def test_illegal_move_rejected(self) -> None:
        bridge = SessionBridge()
        applied = QSignalSpy(bridge.move_applied)
        rejected = QSignalSpy(bridge.move_rejected)

        bridge.submit_uci("e2e5")

        assert len(applied) == 0
        assert len(rejected) == 1
        assert bridge.session.fen == STARTING_FEN

    def test_malformed_uci_rejected(self) -> None:
        bridge = SessionBridge()
        rejected = QSignalSpy(bridge.move_rejected)
        bridge.submit_uci("zz")
        assert len(rejected) == 1

    def test_non_move_rejected(self) -> None:
        bridge = SessionBridge()
        rejected = QSignalSpy(bridge.move_rejected)
        bridge.submit_move("e2e4")
        assert len(rejected) == 1
        assert rejected[0][0] == "Bridge received an invalid move"

    def test_load_fen(self) -> None:
        bridge = SessionBridge()
        loaded = QSignalSpy(bridge.position_loaded)
        status = QSignalSpy(bridge.status_changed)

        bridge.load_fen("7k/6Q1/6K1/8/8/8/8/8 b - - 0 1")

        assert len(loaded) == 1
        assert loaded[0][0] == "7k/6Q1/6K1/8/8/8/8/8 b - - 0 1"
        assert status[0][0] == GameStatus.CHECKMATE

    def test_bad_fen_reported_as_load_rejection(self) -> None:
        bridge = SessionBridge()
        loaded = QSignalSpy(bridge.position_loaded)
        load_rejected = QSignalSpy(bridge.load_rejected)
        move_rejected = QSignalSpy(bridge.move_rejected)
        bridge.load_fen("garbage")
        assert len(loaded) == 0
        assert len(load_rejected) == 1
        assert "Invalid FEN" in load_rejected[0][0]
        assert len(move_rejected) == 0

    def test_undo_emits_restored_position(self) -> None:
        bridge = SessionBridge()
        bridge.submit_uci("e2e4")
        undone = QSignalSpy(bridge.move_undone)
        bridge.undo()
        assert len(undone) == 1
        assert str(undone[0][0]) == "e2e4"
        assert undone[0][1] == STARTING_FEN

    def test_undo_and_new_game(self) -> None:
        session = GameSession()
        bridge = SessionBridge(session)
        bridge.submit_uci("e2e4")
        bridge.undo()
        assert session.fen == STARTING_FEN

        bridge.submit_uci("d2d4")
        loaded = QSignalSpy(bridge.position_loaded)
        bridge.new_game()
        assert len(loaded) == 1
        assert session.fen == STARTING_FEN

    def test_legal_moves_query(self) -> None:
        bridge = SessionBridge()
        rejected = QSignalSpy(bridge.move_rejected)
        assert len(bridge.legal_moves("g1")) == 2
        assert bridge.legal_moves("k9") == []
        assert len(rejected) == 1
