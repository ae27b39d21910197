"""
Game State

What one player is allowed to see: their own full hand, the revealed tiles
of every opponent and the discard pile. Policies decide from this view.
"""

from dataclasses import dataclass, field
from typing import List

from .tiles import Tile, TileSet, Wind
from .hand import Hand
from .wall import DiscardPile
from .scoring import ScoreEngine, DEFAULT_SCORE_TABLE


@dataclass
class GameState:
    """
    Observable state for one player.

    Attributes:
        player_number: Seat of the observing player
        round_wind: Current round wind
        hands: One hand per seat; the observer's is full, the others revealed-only
        seat_winds: Seat wind of every player
        discard_pile: Snapshot of the discard pile
    """
    player_number: int
    round_wind: Wind
    hands: List[Hand]
    seat_winds: List[Wind]
    discard_pile: DiscardPile = field(default_factory=DiscardPile)
    engine: ScoreEngine = field(default_factory=lambda: ScoreEngine(DEFAULT_SCORE_TABLE), repr=False)

    @property
    def own_hand(self) -> Hand:
        return self.hands[self.player_number]

    def count(self, tile: Tile) -> int:
        """Copies of a tile kind the observer has seen (discards and every visible hand)"""
        return self.discard_pile.count(tile) + sum(hand.count(tile) for hand in self.hands)

    @property
    def used_tiles(self) -> int:
        return len(self.discard_pile) + sum(len(hand) for hand in self.hands)

    @property
    def unused_tiles(self) -> int:
        return TileSet.NUM_TILES - self.used_tiles

    def score_state(self) -> int:
        """
        Own best score minus the best score of every opponent.

        Opponent hands only hold what they revealed, so this is the score
        difference as far as the observer can tell.
        """
        total = 0
        for index, hand in enumerate(self.hands):
            base, multiplier = hand.get_max_score(self.round_wind, self.seat_winds[index], self.engine)
            score = base * 2 ** multiplier
            total += score if index == self.player_number else -score
        return total
