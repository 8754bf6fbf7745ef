"""Unit tests for /src/reversi/match.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from src.core.config import PieceTemplate
from src.core.models import MatchModel
from src.core.shared_types import MatchStatus, RejectionReason
from src.reversi.board import Board
from src.reversi.events import (
    DamageApplied,
    GameEnded,
    MatchStarted,
    PieceFlipped,
    PiecePlaced,
    TurnChanged,
)
from src.reversi.match import Match
from src.reversi.pieces import Piece, Player
from src.reversi.square import Square
from tests.layouts import STARTING_LAYOUT

PAWN = PieceTemplate()
THREE_IN_A_ROW = ["1222.."] + ["......"] * 5


def events_received(listener: Mock) -> list:
    return [call.args[0] for call in listener.call_args_list]


# -- STARTING A MATCH --
def test_new_match(match: Match) -> None:
    assert match.status == MatchStatus.IN_PROGRESS
    assert match.is_active
    assert match.current_player == Player.ONE
    assert match.health == {Player.ONE: 1000, Player.TWO: 1000}
    assert match.winner is None
    assert match.board.to_layout() == STARTING_LAYOUT


def test_match_not_started_yet() -> None:
    match = Match()
    assert match.status == MatchStatus.NOT_STARTED
    assert not match.is_active
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)
    assert not result.accepted
    assert result.reason == RejectionReason.INACTIVE_MATCH


def test_starting_pieces_use_starting_template(
    match_with_config: Callable[..., Match],
) -> None:
    template = PieceTemplate(id=9, name="Guard", attack_power=3, attribute=1)
    match = match_with_config(starting_template=template)
    assert match.piece_at(2, 2) == Piece(9, "Guard", 3, 1, Player.TWO)
    assert match.piece_at(3, 2) == Piece(9, "Guard", 3, 1, Player.ONE)


def test_starting_block_on_larger_board(
    match_with_config: Callable[..., Match],
) -> None:
    """Centre 2x2 block of an 8x8 board: (3,3) to (4,4)"""
    match = match_with_config(board_size=8)
    assert match.board.to_layout() == [
        "........",
        "........",
        "........",
        "...21...",
        "...12...",
        "........",
        "........",
        "........",
    ]


def test_restart_resets_everything(match: Match) -> None:
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    match.start_game()
    assert match.board.to_layout() == STARTING_LAYOUT
    assert match.health == {Player.ONE: 1000, Player.TWO: 1000}
    assert match.current_player == Player.ONE


# -- PLACING PIECES --
def test_accepted_placement(match: Match) -> None:
    """(2,1) brackets (2,2) against (2,3): one flip, 10 * (1 + 0.5) = 15 damage"""
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert result.accepted
    assert result.reason is None
    assert result.flipped == (Square(2, 2),)
    assert result.flipped_count == 1
    assert result.damage == 15
    assert result.health == {Player.ONE: 1000, Player.TWO: 985}
    assert not result.game_over

    assert match.piece_at(2, 1) == Piece(0, "Pawn", 10, 0, Player.ONE)
    assert match.piece_at(2, 2).owner == Player.ONE
    assert match.current_player == Player.TWO


def test_turns_alternate(match: Match) -> None:
    assert match.try_place_piece(2, 1, Player.ONE, PAWN).accepted
    assert match.current_player == Player.TWO
    # (3,1) brackets (3,2) against (3,3)
    assert match.try_place_piece(3, 1, Player.TWO, PAWN).accepted
    assert match.current_player == Player.ONE


def test_damage_scales_with_flips(match: Match) -> None:
    """attack 10, 3 flips, multiplier 0.5 --> 25"""
    match.board = Board.from_layout(THREE_IN_A_ROW)
    result = match.try_place_piece(4, 0, Player.ONE, PAWN)
    assert result.flipped_count == 3
    assert result.damage == 25
    assert match.health[Player.TWO] == 975
    assert match.board.to_layout()[0] == "11111."


def test_damage_uses_placed_piece_attack(match: Match) -> None:
    strong = PieceTemplate(id=1, name="Dragon", attack_power=100, attribute=3)
    result = match.try_place_piece(2, 1, Player.ONE, strong)
    assert result.damage == 150
    assert match.piece_at(2, 1) == Piece(1, "Dragon", 100, 3, Player.ONE)


def test_combo_multiplier_from_config(
    match_with_config: Callable[..., Match],
) -> None:
    match = match_with_config(combo_multiplier=2.0)
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)
    assert result.damage == 30



def test_huge_attack_power(match: Match) -> None:
    """Damage is computed exactly: no float conversion, however large the attack"""
    giant = PieceTemplate(attack_power=10**400)
    result = match.try_place_piece(2, 1, Player.ONE, giant)
    assert result.accepted
    assert result.damage == 15 * 10**399
    assert result.winner == Player.ONE


# -- REJECTIONS --
def assert_nothing_changed(match: Match) -> None:
    assert match.board.to_layout() == STARTING_LAYOUT
    assert match.current_player == Player.ONE
    assert match.health == {Player.ONE: 1000, Player.TWO: 1000}
    assert match.status == MatchStatus.IN_PROGRESS


def test_wrong_turn(match: Match) -> None:
    """(3,1) is a legal square for player two, but it is player one's turn"""
    result = match.try_place_piece(3, 1, Player.TWO, PAWN)
    assert not result.accepted
    assert result.reason == RejectionReason.WRONG_TURN
    assert_nothing_changed(match)


@pytest.mark.parametrize("x, y", [(4, 4), (4, 2), (0, 0), (2, 2), (3, 2)])
def test_illegal_placement(match: Match, x: int, y: int) -> None:
    """Nothing to flip, or the square is occupied"""
    result = match.try_place_piece(x, y, Player.ONE, PAWN)
    assert not result.accepted
    assert result.reason == RejectionReason.ILLEGAL_PLACEMENT
    assert result.damage == 0
    assert result.flipped == ()
    assert_nothing_changed(match)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (6, 2), (2, 6)])
def test_placement_outside_board(match: Match, x: int, y: int) -> None:
    result = match.try_place_piece(x, y, Player.ONE, PAWN)
    assert not result.accepted
    assert result.reason == RejectionReason.INVALID_COORDINATE
    assert_nothing_changed(match)


# -- ENDING THE MATCH --
def test_health_exactly_zero_ends_the_match(
    match_with_config: Callable[..., Match],
) -> None:
    match = match_with_config(max_hp=15)
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert result.accepted
    assert result.game_over
    assert result.status == MatchStatus.WON
    assert result.winner == Player.ONE
    assert match.health[Player.TWO] == 0
    assert not match.is_active
    # no turn switch once the match is over
    assert match.current_player == Player.ONE


def test_health_at_one_keeps_going(match_with_config: Callable[..., Match]) -> None:
    match = match_with_config(max_hp=16)
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert not result.game_over
    assert result.winner is None
    assert match.health[Player.TWO] == 1
    assert match.is_active
    assert match.current_player == Player.TWO


def test_health_goes_below_zero(match_with_config: Callable[..., Match]) -> None:
    """Health is not clamped"""
    match = match_with_config(max_hp=5)
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    assert match.health[Player.TWO] == -10
    assert match.winner == Player.ONE


def test_no_placement_after_match_ended(
    match_with_config: Callable[..., Match],
) -> None:
    match = match_with_config(max_hp=15)
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    layout = match.board.to_layout()

    result = match.try_place_piece(3, 1, Player.ONE, PAWN)
    assert not result.accepted
    assert result.reason == RejectionReason.INACTIVE_MATCH
    assert result.winner == Player.ONE
    assert match.board.to_layout() == layout


def test_both_players_down_is_a_draw(
    match_with_config: Callable[..., Match],
) -> None:
    match = match_with_config(max_hp=15)
    match.health[Player.ONE] = 0
    result = match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert result.game_over
    assert result.status == MatchStatus.DRAW
    assert result.winner is None
    assert not match.is_active


def test_no_automatic_pass() -> None:
    """A player without a legal move keeps the turn. The caller can check has_legal_move."""
    match = Match.new_match()
    match.board = Board.from_layout(["12...."] + ["......"] * 5)
    match.try_place_piece(2, 0, Player.ONE, PAWN)

    assert match.current_player == Player.TWO
    assert not match.has_legal_move(Player.TWO)


# -- NOTIFICATIONS --
def test_start_notifies_listeners() -> None:
    listener = Mock()
    Match.new_match(listeners=[listener])
    assert events_received(listener) == [
        MatchStarted(Player.ONE, {Player.ONE: 1000, Player.TWO: 1000})
    ]


def test_placement_notifications_in_order(match: Match) -> None:
    listener = Mock()
    match.subscribe(listener)
    match.try_place_piece(2, 1, Player.ONE, PAWN)

    pawn_one = Piece(0, "Pawn", 10, 0, Player.ONE)
    assert events_received(listener) == [
        PiecePlaced(Square(2, 1), pawn_one),
        PieceFlipped(Square(2, 2), pawn_one, Player.ONE),
        DamageApplied(Player.TWO, 15, 985),
        TurnChanged(Player.TWO),
    ]


def test_flip_notification_per_piece(match: Match) -> None:
    match.board = Board.from_layout(THREE_IN_A_ROW)
    listener = Mock()
    match.subscribe(listener)
    match.try_place_piece(4, 0, Player.ONE, PAWN)

    flipped = [e for e in events_received(listener) if isinstance(e, PieceFlipped)]
    assert [event.square for event in flipped] == [
        Square(3, 0),
        Square(2, 0),
        Square(1, 0),
    ]
    assert all(event.piece is match.piece_at(event.square.x, 0) for event in flipped)


def test_game_ended_notification(match_with_config: Callable[..., Match]) -> None:
    match = match_with_config(max_hp=15)
    listener = Mock()
    match.subscribe(listener)
    match.try_place_piece(2, 1, Player.ONE, PAWN)

    events = events_received(listener)
    assert events[-1] == GameEnded(Player.ONE)
    assert not any(isinstance(event, TurnChanged) for event in events)


def test_rejected_placement_sends_nothing(match: Match) -> None:
    listener = Mock()
    match.subscribe(listener)
    match.try_place_piece(4, 4, Player.ONE, PAWN)
    match.try_place_piece(3, 1, Player.TWO, PAWN)
    listener.assert_not_called()


def test_unsubscribe(match: Match) -> None:
    listener = Mock()
    match.subscribe(listener)
    match.unsubscribe(listener)
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    listener.assert_not_called()


# -- ISOLATION / SNAPSHOT --
def test_matches_do_not_share_state() -> None:
    first = Match.new_match()
    second = Match.new_match()
    first.try_place_piece(2, 1, Player.ONE, PAWN)

    assert second.board.to_layout() == STARTING_LAYOUT
    assert second.health == {Player.ONE: 1000, Player.TWO: 1000}
    assert second.current_player == Player.ONE


def test_to_model(match: Match) -> None:
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    assert match.to_model() == MatchModel(
        board_layout=[
            "......",
            "..1...",
            "..11..",
            "..12..",
            "......",
            "......",
        ],
        health={"one": 1000, "two": 985},
        piece_count={"one": 4, "two": 1},
        current_player="two",
        status="in progress",
        winner=None,
    )


def test_to_model_with_winner(match_with_config: Callable[..., Match]) -> None:
    match = match_with_config(max_hp=15)
    match.try_place_piece(2, 1, Player.ONE, PAWN)
    model = match.to_model()
    assert model.status == "won"
    assert model.winner == "one"


# -- FAILURES HALFWAY --
def test_failing_damage_calculation_changes_nothing(match: Match) -> None:
    """Damage is worked out before the board is touched, so an error there leaves the match as it was"""
    listener = Mock()
    match.subscribe(listener)
    with patch(
        "src.reversi.match.calculate_damage", side_effect=OverflowError("too big")
    ):
        with pytest.raises(OverflowError):
            match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert match.board.to_layout() == STARTING_LAYOUT
    assert match.current_player == Player.ONE
    assert match.health == {Player.ONE: 1000, Player.TWO: 1000}
    assert match.status == MatchStatus.IN_PROGRESS
    listener.assert_not_called()


def test_failing_listener_does_not_block_the_others(match: Match) -> None:
    """Every event still reaches every listener, then the first error is raised. The placement itself stays committed."""
    failing = Mock(side_effect=RuntimeError("render failed"))
    other = Mock()
    match.subscribe(failing)
    match.subscribe(other)

    with pytest.raises(RuntimeError):
        match.try_place_piece(2, 1, Player.ONE, PAWN)

    assert failing.call_count == 4
    assert [type(event) for event in events_received(other)] == [
        PiecePlaced,
        PieceFlipped,
        DamageApplied,
        TurnChanged,
    ]
    assert match.current_player == Player.TWO
    assert match.health[Player.TWO] == 985
