"""
Game Engine

Runs the turn loop for four players: draw, win check, discard, and the
claims other players can make on each discard. Scores are accumulated
across rounds.
"""

import logging
import random
from enum import IntEnum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .tiles import Wind
from .hand import PickupAction
from .wall import Wall, DiscardPile
from .state import GameState
from .player import Player
from .policy import Policy
from .scoring import ScoreEngine, DEFAULT_SCORE_TABLE

logger = logging.getLogger(__name__)


NUM_PLAYERS = 4
# Highest session total a player can reach
SCORE_CAP = 3000
ROUNDS_PER_WIND = 4


class GamePhase(IntEnum):
    """Phases of a round"""
    NOT_STARTED = 0
    DRAWING = 1      # Current player draws a tile
    DISCARDING = 2   # Current player must discard
    CLAIMING = 3     # Other players can claim the discard
    GAME_OVER = 4


@dataclass
class RoundResult:
    """
    Outcome of one round.

    Attributes:
        winner: Seat of the winning player, None if the wall ran out
        scores: Final full-hand score of every player (bonuses for the winner)
        turns: Number of tiles drawn from the wall or the discard pile
    """
    winner: Optional[int]
    scores: List[int] = field(default_factory=list)
    turns: int = 0

    @property
    def exhausted(self) -> bool:
        return self.winner is None


class Game:
    """
    Mahjong game engine.

    Drive a round either step by step with advance(), or all at once with
    play_round(). Operations called in the wrong phase raise RuntimeError.
    """

    def __init__(
        self,
        policies: Optional[Sequence[Policy]] = None,
        seed: Optional[int] = None,
        engine: Optional[ScoreEngine] = None,
    ):
        """
        Initialize a new game.

        Args:
            policies: One policy per seat, random policies if not given
            seed: Random seed for the wall and the starting player
            engine: Score engine shared by all players
        """
        if policies is not None and len(policies) != NUM_PLAYERS:
            raise ValueError(f"Expected {NUM_PLAYERS} policies, got {len(policies)}")

        self.seed = seed
        self.engine = engine or ScoreEngine(DEFAULT_SCORE_TABLE)
        self.wall = Wall(seed)
        self.discard_pile = DiscardPile()
        self.players: List[Player] = [
            Player(
                i,
                policy=policies[i] if policies is not None else None,
                engine=self.engine,
            )
            for i in range(NUM_PLAYERS)
        ]

        self.phase = GamePhase.NOT_STARTED
        self.current_player = 0
        self.round_wind = Wind.EAST
        self.round_number = 0
        self.turn_count = 0
        self.winner: Optional[int] = None
        self.totals = [0] * NUM_PLAYERS
        self.last_result: Optional[RoundResult] = None

    # Round setup

    def reset(self, seed: Optional[int] = None, start_player: Optional[int] = None) -> None:
        """
        Shuffle a new wall and deal 13 tiles to every player.

        The East seat starts unless start_player is given.
        """
        if seed is not None:
            self.seed = seed
        self.wall.reset(seed)
        self.discard_pile = DiscardPile()
        for player in self.players:
            player.deal(self.wall)

        if start_player is None:
            start_player = self.east_seat()
        self.current_player = start_player
        self.turn_count = 0
        self.winner = None
        self.last_result = None
        self.phase = GamePhase.DRAWING
        logger.debug("Round %d dealt, player %d starts", self.round_number, start_player)

    def east_seat(self) -> int:
        for player in self.players:
            if player.seat_wind == Wind.EAST:
                return player.number
        return 0

    def random_start_player(self) -> int:
        """Starting seat drawn from the game seed, used by batch simulations"""
        return random.Random(self.seed).randrange(NUM_PLAYERS)

    def next_round(self) -> None:
        """Rotate the seat winds, advance the round wind every four rounds and redeal"""
        for player in self.players:
            player.rotate_seat_wind()
        self.round_number += 1
        if self.round_number % ROUNDS_PER_WIND == 0:
            self.round_wind = Wind((self.round_wind + 1) % 4)
            logger.info("Round wind is now %s", self.round_wind.name)
        self.reset()

    # Observations

    def get_game_state_for_player(self, player_number: int) -> GameState:
        """
        The view of one player: their own full hand and the revealed tiles
        of everyone else.
        """
        hands = []
        for player in self.players:
            if player.number == player_number:
                hands.append(player.full_hand())
            else:
                hands.append(player.visible_hand())
        return GameState(
            player_number=player_number,
            round_wind=self.round_wind,
            hands=hands,
            seat_winds=[player.seat_wind for player in self.players],
            discard_pile=self.discard_pile.copy(),
            engine=self.engine,
        )

    # Turn steps

    def _require_phase(self, phase: GamePhase) -> None:
        if self.phase != phase:
            raise RuntimeError(f"Cannot do this in phase {self.phase.name}, expected {phase.name}")

    def start_turn(self, player_number: int) -> bool:
        """
        Draw a tile for a player, sort the hand and check for a win.

        Returns:
            True if the round ended, by a win or by an empty wall
        """
        self._require_phase(GamePhase.DRAWING)
        self.current_player = player_number
        player = self.players[player_number]

        tile = player.draw_tile(self.wall)
        if tile is None:
            logger.info("Wall exhausted after %d turns", self.turn_count)
            self.phase = GamePhase.GAME_OVER
            return True

        self.turn_count += 1
        player.hand.sort()
        if self._check_win(player_number):
            return True
        self.phase = GamePhase.DISCARDING
        return False

    def player_discard(self, player_number: int, index: Optional[int] = None) -> None:
        """
        Discard a tile for the current player.

        Args:
            player_number: Must be the current player
            index: Hand index to discard; the player's policy chooses if None
        """
        self._require_phase(GamePhase.DISCARDING)
        if player_number != self.current_player:
            raise RuntimeError(f"Player {player_number} cannot discard on player {self.current_player}'s turn")

        player = self.players[player_number]
        if index is None:
            player.discard_tile(self.discard_pile, self.get_game_state_for_player(player_number))
        else:
            tile = player.hand.discard_tile(index, self.discard_pile)
            logger.debug("Player %d discards %s", player_number, tile)
        self.phase = GamePhase.CLAIMING

    @staticmethod
    def prioritize_pickup_action(actions: Sequence[PickupAction]) -> Tuple[Optional[int], PickupAction]:
        """
        Pick the claim that is carried out.

        Kong beats pong, which beats chow. Among equal claims the lowest seat wins.

        Returns:
            (player_number, action), or (None, NONE) if nobody claims
        """
        for wanted in (PickupAction.KONG, PickupAction.PONG, PickupAction.CHOW):
            for player_number, action in enumerate(actions):
                if action == wanted:
                    return player_number, wanted
        return None, PickupAction.NONE

    def pickup_action(self, discarder: int) -> Tuple[Optional[int], PickupAction]:
        """Ask every other player whether they claim the newest discard"""
        self._require_phase(GamePhase.CLAIMING)
        tile = self.discard_pile.last
        actions = []
        for player in self.players:
            if player.number == discarder or tile is None:
                actions.append(PickupAction.NONE)
            else:
                state = self.get_game_state_for_player(player.number)
                actions.append(player.choose_pickup_action(tile, discarder, state))
        return self.prioritize_pickup_action(actions)

    def claim_discard(self, player_number: int, action: PickupAction) -> bool:
        """
        Move the newest discard into a player's hand and reveal the group.

        No replacement tile is drawn after a kong.

        Returns:
            True if the claim completed a winning hand
        """
        self._require_phase(GamePhase.CLAIMING)
        player = self.players[player_number]
        tile = player.pick_tile_from_discard(self.discard_pile)
        player.reveal_combination(tile, action)
        player.hand.sort()
        self.turn_count += 1
        self.current_player = player_number
        logger.debug("Player %d claims %s with %s", player_number, tile, PickupAction(action).name)

        if self._check_win(player_number):
            return True
        self.phase = GamePhase.DISCARDING
        return False

    def resolve_claims(self) -> None:
        """Carry out the strongest claim on the newest discard, or pass the turn on"""
        player_number, action = self.pickup_action(self.current_player)
        if action != PickupAction.NONE:
            self.claim_discard(player_number, action)
        else:
            self.current_player = (self.current_player + 1) % NUM_PLAYERS
            self.phase = GamePhase.DRAWING

    def _check_win(self, player_number: int) -> bool:
        player = self.players[player_number]
        if not player.has_winning_hand():
            return False
        self.winner = player_number
        self.phase = GamePhase.GAME_OVER
        logger.info(
            "Player %d wins with %d points",
            player_number,
            player.total_score(self.round_wind, full_hand=True, mahjong=True),
        )
        return True

    # Round loop

    def advance(self) -> None:
        """Perform the next step of the round with the players' policies"""
        if self.phase == GamePhase.NOT_STARTED:
            raise RuntimeError("Game not started, call reset() first")
        if self.phase == GamePhase.DRAWING:
            self.start_turn(self.current_player)
        elif self.phase == GamePhase.DISCARDING:
            self.player_discard(self.current_player)
        elif self.phase == GamePhase.CLAIMING:
            self.resolve_claims()
        else:
            raise RuntimeError("Round is already over")

    def play_round(self) -> RoundResult:
        """Play the current round to the end, dealing first if needed"""
        if self.phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            self.reset()
        while self.phase != GamePhase.GAME_OVER:
            self.advance()
        return self.finish_round()

    def finish_round(self) -> RoundResult:
        """
        Score every full hand and add the scores to the session totals.

        The winner's score includes the mahjong bonuses. Totals are capped at
        SCORE_CAP.
        """
        self._require_phase(GamePhase.GAME_OVER)
        if self.last_result is not None:
            return self.last_result

        scores = []
        for player in self.players:
            score = player.total_score(
                self.round_wind,
                full_hand=True,
                mahjong=(player.number == self.winner),
            )
            scores.append(score)
            self.totals[player.number] = min(SCORE_CAP, self.totals[player.number] + score)

        self.last_result = RoundResult(winner=self.winner, scores=scores, turns=self.turn_count)
        return self.last_result

    def __repr__(self) -> str:
        return f"Game(phase={self.phase.name}, current={self.current_player}, wall={self.wall.remaining})"
