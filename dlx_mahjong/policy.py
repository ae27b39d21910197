"""
Computer Player Policies

Policies choose which tile to discard, whether to claim a discard and
which run to reveal when a chow can be formed in more than one way.
"""

from typing import List, Optional, Sequence
import numpy as np

from .tiles import TileSet
from .hand import PickupAction
from .state import GameState


class Policy:
    """Base policy: uniform random choices."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the policy.

        Args:
            seed: Random seed for reproducibility
        """
        self.rng = np.random.default_rng(seed)

    def select_discard(self, valid_discards: Sequence[int], state: GameState) -> int:
        """Pick a hand index among the valid discards"""
        return int(self.rng.choice(valid_discards))

    def select_pickup(self, actions: Sequence[PickupAction], state: GameState) -> PickupAction:
        """Pick one of the offered pickup actions (NONE is always among them)"""
        return PickupAction(int(self.rng.choice([int(action) for action in actions])))

    def choose_chow(self, starters: Sequence[int]) -> int:
        """Pick the starting rank of the run to reveal"""
        return int(self.rng.choice(starters))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RandomPolicy(Policy):
    """Selects uniformly from valid actions. Baseline for comparisons."""


class TileCountPolicy(Policy):
    """
    Discards the tile least likely to become part of a group.

    Each candidate discard is rated
        1000 * copies in hand + 100 * copies not yet seen
        + 10 * is honor + tiles of the same suit in hand
    and the lowest rating is thrown; equal ratings are settled by a coin flip.
    On pickups it takes the strongest action, except that a chow is only
    taken with probability chow_rate. With probability randomness it acts
    like RandomPolicy instead.
    """

    name = "tile_count"

    def __init__(self, seed: Optional[int] = None, randomness: float = 0.05, chow_rate: float = 0.5):
        super().__init__(seed)
        self.randomness = randomness
        self.chow_rate = chow_rate

    def _act_randomly(self) -> bool:
        return self.rng.random() < self.randomness

    def discard_rating(self, index: int, state: GameState) -> int:
        hand = state.own_hand
        tile = hand.get_tile(index)
        unseen = TileSet.COPIES_PER_TYPE - state.count(tile)
        return 1000 * hand.count(tile) + 100 * unseen + 10 * int(tile.is_honor) + hand.count_suit(tile.suit)

    def select_discard(self, valid_discards: Sequence[int], state: GameState) -> int:
        if self._act_randomly():
            return super().select_discard(valid_discards, state)

        preferred = None
        minimal_rating = None
        for index in valid_discards:
            rating = self.discard_rating(index, state)
            if minimal_rating is None or rating < minimal_rating:
                preferred = index
                minimal_rating = rating
            elif rating == minimal_rating and self.rng.random() < 0.5:
                preferred = index
        return preferred

    def select_pickup(self, actions: Sequence[PickupAction], state: GameState) -> PickupAction:
        if self._act_randomly():
            return super().select_pickup(actions, state)

        strongest = PickupAction(max(actions))
        if strongest == PickupAction.CHOW and self.rng.random() >= self.chow_rate:
            return PickupAction.NONE
        return strongest


POLICIES = {
    RandomPolicy.name: RandomPolicy,
    TileCountPolicy.name: TileCountPolicy,
}


def make_policy(name: str, seed: Optional[int] = None, **kwargs) -> Policy:
    """
    Create a policy by name.

    Raises:
        ValueError: if the name is unknown
    """
    if name not in POLICIES:
        raise ValueError(f"Unknown policy {name!r}, choose from {sorted(POLICIES)}")
    return POLICIES[name](seed=seed, **kwargs)


def available_policies() -> List[str]:
    return sorted(POLICIES)
