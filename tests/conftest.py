"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys

import pytest

from plychess.core.notation import STARTING_FEN, position_from_fen
from plychess.core.position import Position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start() -> Position:
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def kiwipete() -> Position:
    return position_from_fen(KIWIPETE)
