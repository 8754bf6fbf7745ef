"""
The Match class is the entrypoint into the domain layer for the service layer (or any other presentation layer).
It is responsible for orchestrating all the rules involved in playing a turn:
placement --> capture --> damage --> win check --> turn switch, as a single transaction.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import MatchConfig, PieceTemplate
from src.core.models import MatchModel
from src.core.shared_types import MatchStatus, RejectionReason, Side
from src.reversi.board import Board
from src.reversi.combat import calculate_damage, is_defeated
from src.reversi.events import (
    DamageApplied,
    GameEnded,
    MatchEvent,
    MatchListener,
    MatchStarted,
    PieceFlipped,
    PiecePlaced,
    TurnChanged,
)
from src.reversi.pieces import ACTIVE_PLAYERS, Piece, Player
from src.reversi.square import Square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    """What happened to a placement attempt. Rejections carry a reason and leave every other field at its 'nothing happened' value."""

    accepted: bool
    status: MatchStatus
    health: dict[Player, int]
    reason: Optional[RejectionReason] = None
    flipped: tuple[Square, ...] = ()
    damage: int = 0
    winner: Optional[Player] = None

    @property
    def flipped_count(self) -> int:
        return len(self.flipped)

    @property
    def game_over(self) -> bool:
        return self.status in (MatchStatus.WON, MatchStatus.DRAW)


@dataclass
class Match:
    # --- DOMAIN LAYER API CALLED BY SERVICE ---

    config: MatchConfig = field(default_factory=MatchConfig)
    board: Board = field(init=False)
    current_player: Player = field(init=False, default=Player.ONE)
    health: dict[Player, int] = field(init=False)
    status: MatchStatus = field(init=False, default=MatchStatus.NOT_STARTED)
    winner: Optional[Player] = field(init=False, default=None)
    listeners: list[MatchListener] = field(
        init=False, default_factory=list, repr=False
    )

    def __post_init__(self) -> None:
        self.board = Board(self.config.board_size)
        self.health = {player: self.config.max_hp for player in ACTIVE_PLAYERS}

    @classmethod
    def new_match(
        cls,
        config: Optional[MatchConfig] = None,
        listeners: Optional[list[MatchListener]] = None,
    ) -> Self:
        """Create a match and immediately start it."""
        match = cls(config or MatchConfig())
        for listener in listeners or []:
            match.subscribe(listener)
        match.start_game()
        return match

    @property
    def is_active(self) -> bool:
        return self.status == MatchStatus.IN_PROGRESS

    def subscribe(self, listener: MatchListener) -> None:
        """
        Listeners are called with every event, after the transaction that produced it is committed.

        NOTE: an exception raised by a listener does not stop the other listeners / events.
        Once every event is delivered, the first exception is re-raised to the caller (the match state is already updated at that point).
        """
        self.listeners.append(listener)

    def unsubscribe(self, listener: MatchListener) -> None:
        self.listeners.remove(listener)

    def start_game(self) -> None:
        """
        (Re)start the match.
        ----

        1. Both players back to full health
        2. Player one moves first
        3. Clear the board and put down the four starting pieces on the centre 2x2 block
        """
        self.health = {player: self.config.max_hp for player in ACTIVE_PLAYERS}
        self.current_player = Player.ONE
        self.winner = None
        self.board = Board(self.config.board_size)
        self._setup_starting_pieces()
        self._change_status(MatchStatus.IN_PROGRESS)

        logger.info(
            "Match started on a %dx%d board. Player %s's turn.",
            self.board.size,
            self.board.size,
            self.current_player.name,
        )
        self._notify([MatchStarted(self.current_player, dict(self.health))])

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        """Read-only query for rendering. Out-of-range reads as empty."""
        return self.board.piece_at(x, y)

    def legal_placements(self, player: Player) -> list[Square]:
        return self.board.legal_placements(player)

    def has_legal_move(self, player: Player) -> bool:
        """
        NOTE: a player without a legal move is NOT passed automatically. The caller can use this to detect the situation.
        """
        return self.board.has_legal_move(player)

    def try_place_piece(
        self, x: int, y: int, player: Player, template: PieceTemplate
    ) -> PlacementResult:
        """
        Attempt to place a piece
        -----

        1. reject if the match is over, it is not your turn, or the placement is illegal (no state changes at all)
        2. create the piece from the template and put it on the board
        3. flip every bracketed opponent piece
        4. deal damage to the opponent, scaled by the number of flips
        5. end the match if someone dropped to zero health, otherwise switch turns

        Listeners are only notified after all of the above is done.
        """
        rejection = self._check_placement(x, y, player)
        if rejection is not None:
            logger.debug(
                "Placement at (%d, %d) by player %s rejected: %s",
                x,
                y,
                player.name,
                rejection,
            )
            return PlacementResult(
                accepted=False,
                status=self.status,
                health=dict(self.health),
                reason=rejection,
                winner=self.winner,
            )

        events: list[MatchEvent] = []

        # everything that can still go wrong is worked out before the board is touched
        flipped = self.board.flippable_squares(x, y, player)
        damage = calculate_damage(
            template.attack_power, len(flipped), self.config.combo_multiplier
        )

        # put the new piece on the board
        new_piece = Piece.from_template(template, player)
        self.board.place_at(x, y, new_piece)
        events.append(PiecePlaced(Square(x, y), new_piece))

        # flip. NOTE the new piece does not lie on any of its own scan lines, so the recomputed set matches the one above
        flipped = self.board.flippable_squares(x, y, player)
        events.extend(self._flip(flipped, player))

        # damage
        events.append(self._apply_damage(player.opponent, damage))

        # end of the match, or next turn
        if self._is_match_over():
            self._end_match()
            events.append(GameEnded(self.winner))
        else:
            self._switch_turn()
            events.append(TurnChanged(self.current_player))

        result = PlacementResult(
            accepted=True,
            status=self.status,
            health=dict(self.health),
            flipped=tuple(flipped),
            damage=damage,
            winner=self.winner,
        )
        self._notify(events)
        return result

    def to_model(self) -> MatchModel:
        """Encode into a format the Service layer uses"""
        return MatchModel(
            board_layout=self.board.to_layout(),
            health={
                Side[player.name].value: hp for player, hp in self.health.items()
            },
            piece_count={
                Side[player.name].value: self.board.count(player)
                for player in ACTIVE_PLAYERS
            },
            current_player=Side[self.current_player.name].value,
            status=self.status.value,
            winner=(
                Side[self.winner.name].value if self.winner is not None else None
            ),
        )

    # -- PRIVATE HELPERS ---
    def _setup_starting_pieces(self) -> None:
        """
        Centre 2x2 block, diagonally opposed ownership.
        For the 6x6 board: player two on (2,2) and (3,3), player one on (2,3) and (3,2)
        """
        centre = self.board.size // 2
        starting_squares: dict[Square, Player] = {
            Square(centre - 1, centre - 1): Player.TWO,
            Square(centre, centre): Player.TWO,
            Square(centre - 1, centre): Player.ONE,
            Square(centre, centre - 1): Player.ONE,
        }
        for square, owner in starting_squares.items():
            piece = Piece.from_template(self.config.starting_template, owner)
            self.board.place_at(square.x, square.y, piece)

    def _check_placement(
        self, x: int, y: int, player: Player
    ) -> Optional[RejectionReason]:
        """Returns the reason to reject the placement, or None if it may go ahead."""
        if not self.is_active:
            return RejectionReason.INACTIVE_MATCH
        if player != self.current_player:
            return RejectionReason.WRONG_TURN
        if not self.board.is_valid_coordinate(x, y):
            return RejectionReason.INVALID_COORDINATE
        if not self.board.can_place(x, y, player):
            return RejectionReason.ILLEGAL_PLACEMENT
        return None

    def _flip(self, squares: list[Square], player: Player) -> list[PieceFlipped]:
        flipped: list[PieceFlipped] = []
        for square in squares:
            piece = self.board.piece_at(square.x, square.y)
            # for the type checker: the scan only returns occupied squares
            assert piece is not None
            piece.set_owner(player)
            flipped.append(PieceFlipped(square, piece, player))
        logger.debug("Player %s flipped %d piece(s)", player.name, len(squares))
        return flipped

    def _apply_damage(self, target: Player, damage: int) -> DamageApplied:
        self.health[target] -= damage
        logger.debug(
            "Player %s takes %d damage -> HP: %d",
            target.name,
            damage,
            self.health[target],
        )
        return DamageApplied(target, damage, self.health[target])

    def _is_match_over(self) -> bool:
        return any(is_defeated(hp) for hp in self.health.values())

    def _end_match(self) -> None:
        """The player still standing wins. If nobody is (both at zero or below), it is a draw."""
        survivors = [
            player for player, hp in self.health.items() if not is_defeated(hp)
        ]
        if len(survivors) == 1:
            self.winner = survivors[0]
            self._change_status(MatchStatus.WON)
            logger.info("Player %s wins!", self.winner.name)
        else:
            self.winner = None
            self._change_status(MatchStatus.DRAW)
            logger.info("Match ended in a draw.")

    def _switch_turn(self) -> None:
        self.current_player = self.current_player.opponent
        logger.debug("=== Player %s's turn ===", self.current_player.name)

    def _change_status(self, new_status: MatchStatus) -> None:
        self.status = new_status

    def _notify(self, events: list[MatchEvent]) -> None:
        first_error: Optional[Exception] = None
        for event in events:
            for listener in list(self.listeners):
                try:
                    listener(event)
                except Exception as error:
                    logger.exception("Listener %r failed on %r", listener, event)
                    if first_error is None:
                        first_error = error
        if first_error is not None:
            raise first_error
