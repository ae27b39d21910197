"""
Player Module

A seat at the table: the hand, the seat wind and the policy that makes
the player's decisions.
"""

import logging
from typing import Optional, Tuple

from .tiles import Tile, Wind
from .hand import Hand, PickupAction
from .wall import Wall, DiscardPile
from .state import GameState
from .policy import Policy, RandomPolicy
from .scoring import ScoreEngine, DEFAULT_SCORE_TABLE, mahjong_bonus

logger = logging.getLogger(__name__)


class Player:
    """
    Represents a Mahjong player.

    Attributes:
        number: Seat index (0-3)
        hand: Tiles in the player's hand
        seat_wind: Current seat wind, starts as Wind(number)
        policy: Makes discard and pickup decisions
        latest_tile: The last tile that entered the hand
        latest_origin: Where it came from, "wall" or "discard"
    """

    def __init__(
        self,
        number: int,
        policy: Optional[Policy] = None,
        engine: Optional[ScoreEngine] = None,
    ):
        self.number = number
        self.hand = Hand()
        self.seat_wind = Wind(number % 4)
        self.policy = policy or RandomPolicy()
        self.engine = engine or ScoreEngine(DEFAULT_SCORE_TABLE)
        self.latest_tile: Optional[Tile] = None
        self.latest_origin: Optional[str] = None

    def deal(self, wall: Wall) -> None:
        """Take a fresh 13-tile hand from the wall"""
        self.hand = Hand()
        self.hand.draw_hand(wall)
        self.latest_tile = self.hand.get_tile(-1)
        self.latest_origin = "wall"

    def draw_tile(self, wall: Wall) -> Optional[Tile]:
        tile = self.hand.draw_tile(wall)
        if tile is not None:
            self.latest_tile = tile
            self.latest_origin = "wall"
            logger.debug("Player %d draws %s", self.number, tile)
        return tile

    def pick_tile_from_discard(self, discard_pile: DiscardPile) -> Tile:
        tile = self.hand.pick_tile_from_discard(discard_pile)
        self.latest_tile = tile
        self.latest_origin = "discard"
        return tile

    def discard_tile(self, discard_pile: DiscardPile, state: GameState) -> Tile:
        """Let the policy choose a hidden tile and discard it"""
        index = self.policy.select_discard(self.hand.valid_discards(), state)
        tile = self.hand.discard_tile(index, discard_pile)
        logger.debug("Player %d discards %s", self.number, tile)
        return tile

    def choose_pickup_action(self, tile: Tile, discarder: int, state: GameState) -> PickupAction:
        """
        Decide whether to claim a discard.

        The policy is only asked when a pickup is possible; declining is
        always one of its options.
        """
        action = self.hand.available_actions(tile, self.number, discarder)
        if action == PickupAction.NONE:
            return PickupAction.NONE
        return self.policy.select_pickup([action, PickupAction.NONE], state)

    def reveal_combination(self, tile: Tile, action: PickupAction) -> None:
        self.hand.reveal_combination(tile, action, choose_chow=self.policy.choose_chow)

    def has_winning_hand(self) -> bool:
        return self.hand.is_winning_hand()

    def score(self, round_wind: int, full_hand: bool = False, mahjong: bool = False) -> Tuple[int, int]:
        """
        Score of the hand as (base, multiplier).

        Args:
            round_wind: Current round wind
            full_hand: Score every tile instead of the revealed ones only
            mahjong: Add the bonuses of a winning hand
        """
        if full_hand:
            base, multiplier = self.hand.get_max_score(round_wind, self.seat_wind, self.engine)
        else:
            base, multiplier = self.hand.get_visible_score(round_wind, self.seat_wind, self.engine)

        if mahjong:
            base, multiplier = mahjong_bonus(
                base, multiplier,
                self.hand.is_fully_concealed,
                self.hand.all_suits(),
                self.hand.all_ranks(),
            )
        return base, multiplier

    def total_score(self, round_wind: int, full_hand: bool = False, mahjong: bool = False) -> int:
        base, multiplier = self.score(round_wind, full_hand, mahjong)
        return base * 2 ** multiplier

    def full_hand(self) -> Hand:
        return self.hand.copy()

    def visible_hand(self) -> Hand:
        return self.hand.visible_hand()

    def rotate_seat_wind(self) -> None:
        self.seat_wind = self.seat_wind.rotated()

    def __repr__(self) -> str:
        return f"Player({self.number}, {self.seat_wind.name}, {self.policy!r})"
