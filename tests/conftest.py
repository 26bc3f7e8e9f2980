"""Shared fixtures: compact board diagrams and deterministic placement order."""

from __future__ import annotations

import pytest

from klopy.board import EMPTY_CELL, Board, active, infected
from klopy.config import Settings
from klopy.game import GameState

# "." empty, upper case = active, lower case = infected; A is player 1, B is player 2
_SYMBOLS = {
    ".": EMPTY_CELL,
    "A": active(1),
    "a": infected(1),
    "B": active(2),
    "b": infected(2),
}


def parse_board(*rows: str) -> Board:
    return Board.from_rows([[_SYMBOLS[ch] for ch in row] for row in rows])


class FixedOrder:
    """Stand-in random source whose shuffle keeps or reverses the order."""

    def __init__(self, reverse: bool = False):
        self.reverse = reverse

    def shuffle(self, seq):
        if self.reverse:
            seq.reverse()


@pytest.fixture
def make_board():
    return parse_board


@pytest.fixture
def settings():
    return Settings(grid_sizes=[3, 4, 5, 10, 15, 20, 25], default_grid_size=20)


@pytest.fixture
def game(settings):
    return GameState(settings=settings, rng=FixedOrder())


@pytest.fixture
def reversed_game(settings):
    return GameState(settings=settings, rng=FixedOrder(reverse=True))
