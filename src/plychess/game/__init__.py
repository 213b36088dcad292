"""Game layer — in-memory session over the rules core.

Quick start::

    from plychess.game import GameSession

    session = GameSession()
    session.play_uci("e2e4")
    print(session.fen, session.status)

The PyQt6 adapter lives in :mod:`plychess.game.qt_bridge` and is imported
explicitly by UI code.
"""

from plychess.game.session import GameSession, MoveRecord, SessionEvents
from plychess.game.settings import SessionSettings

__all__ = [
    "GameSession",
    "MoveRecord",
    "SessionEvents",
    "SessionSettings",
]
