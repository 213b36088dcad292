"""Game-end classification: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plychess.core.enums import Color, GameResult, GameStatus
from plychess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from plychess.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Only mate and stalemate end the game here. Repetition, the fifty-move
    rule and insufficient material are left to the caller; the halfmove
    clock is tracked on the position for that purpose.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        return MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.evaluate(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.evaluate(position) == GameStatus.STALEMATE

    @staticmethod
    def evaluate(position: Position) -> GameStatus:
        """Classify *position* for the side to move."""
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(position.side_to_move)
        if gen.has_legal_move():
            return GameStatus.CHECK if in_check else GameStatus.ONGOING
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Winner after checkmate, draw after stalemate, else in progress."""
        return Rules.result_for(Rules.evaluate(position), position.side_to_move)

    @staticmethod
    def result_for(status: GameStatus, side_to_move: Color) -> GameResult:
        """Map an already computed status to a result."""
        if status == GameStatus.CHECKMATE:
            return (
                GameResult.BLACK_WINS
                if side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if status == GameStatus.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS


def evaluate(position: Position) -> GameStatus:
    return Rules.evaluate(position)
