"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.core.config import MatchConfig
from src.reversi.board import Board
from src.reversi.match import Match
from tests.layouts import STARTING_LAYOUT


@pytest.fixture
def starting_board() -> Board:
    return Board.from_layout(STARTING_LAYOUT)


@pytest.fixture
def match() -> Match:
    """A freshly started match using the default settings."""
    return Match.new_match()


@pytest.fixture
def match_with_config() -> Callable[..., Match]:
    """Call the inner function with any MatchConfig fields you want to override"""

    def _create_match(**overrides) -> Match:
        return Match.new_match(MatchConfig(**overrides))

    return _create_match
