"""Tests for game-end classification."""

import pytest

from plychess.core.enums import Color, GameResult, GameStatus
from plychess.core.notation import parse_uci, position_from_fen
from plychess.core.position import Position
from plychess.core.rules import Rules, evaluate

BACK_RANK_MATE = "R2k4/8/3K4/8/8/8/8/8 b - - 0 1"
QUEEN_MATE = "7k/6Q1/6K1/8/8/8/8/8 b - - 0 1"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"
CHECK = "4k3/8/8/8/8/8/8/4R1K1 b - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestEvaluate:
    def test_starting_position_ongoing(self, start: Position) -> None:
        assert evaluate(start) == GameStatus.ONGOING
        assert not GameStatus.ONGOING.is_terminal

    @pytest.mark.parametrize("fen", [BACK_RANK_MATE, QUEEN_MATE, FOOLS_MATE])
    def test_checkmate(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert Rules.evaluate(pos) == GameStatus.CHECKMATE
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.is_in_check(pos)
        assert not Rules.has_legal_move(pos)

    def test_stalemate(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.evaluate(pos) == GameStatus.STALEMATE
        assert Rules.is_stalemate(pos)
        assert not Rules.is_in_check(pos)
        assert GameStatus.STALEMATE.is_terminal

    def test_check_with_escape(self) -> None:
        pos = position_from_fen(CHECK)
        assert Rules.evaluate(pos) == GameStatus.CHECK
        assert Rules.has_legal_move(pos)
        assert not GameStatus.CHECK.is_terminal

    def test_king_can_capture_unprotected_checker(self) -> None:
        # queen on h1 is not protected, Kxh1 escapes
        pos = position_from_fen("8/8/8/8/8/8/6k1/5K1Q b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.CHECK

    def test_adjacent_king_gives_check_with_escape(self) -> None:
        # the white king on h1 touches h2; Kg3 is free
        pos = position_from_fen("8/8/8/8/8/8/7k/5Q1K b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.CHECK

    def test_fools_mate_from_start(self, start: Position) -> None:
        pos = start
        for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
            pos = pos.apply_move(parse_uci(text))
        assert Rules.evaluate(pos) == GameStatus.CHECKMATE


class TestGameResult:
    def test_white_mated(self) -> None:
        assert Rules.game_result(position_from_fen(FOOLS_MATE)) == GameResult.BLACK_WINS

    def test_black_mated(self) -> None:
        assert Rules.game_result(position_from_fen(QUEEN_MATE)) == GameResult.WHITE_WINS

    def test_stalemate_is_draw(self) -> None:
        assert Rules.game_result(position_from_fen(STALEMATE)) == GameResult.DRAW

    def test_in_progress(self, start: Position) -> None:
        assert Rules.game_result(start) == GameResult.IN_PROGRESS
        assert Rules.game_result(position_from_fen(CHECK)) == GameResult.IN_PROGRESS

    @pytest.mark.parametrize(
        ("status", "side", "expected"),
        [
            (GameStatus.CHECKMATE, Color.WHITE, GameResult.BLACK_WINS),
            (GameStatus.CHECKMATE, Color.BLACK, GameResult.WHITE_WINS),
            (GameStatus.STALEMATE, Color.WHITE, GameResult.DRAW),
            (GameStatus.CHECK, Color.BLACK, GameResult.IN_PROGRESS),
        ],
    )
    def test_result_for(
        self, status: GameStatus, side: Color, expected: GameResult
    ) -> None:
        assert Rules.result_for(status, side) == expected
