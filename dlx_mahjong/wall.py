"""
Wall and Discard Pile

The wall holds the undrawn tiles of a round. The discard pile collects
discarded tiles; the newest one can be picked up by another player.
"""

import random
from typing import List, Optional

from .tiles import Tile, TileSet


HAND_SIZE = 13


class Wall:
    """
    The shuffled, undrawn part of the tile set.

    Attributes:
        tiles: Remaining tiles in the wall (drawn from the end)
        dealt_count: Number of tiles that have been dealt/drawn
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)
        self.tiles: List[Tile] = []
        self.dealt_count = 0
        self._create_wall()

    def _create_wall(self) -> None:
        """Create and shuffle a new wall"""
        self.tiles = list(TileSet.create_full_set())
        self.dealt_count = 0
        self.shuffle()

    def shuffle(self) -> None:
        self._rng.shuffle(self.tiles)

    def draw(self) -> Optional[Tile]:
        """
        Draw one tile from the wall.
        Returns None if wall is empty.
        """
        if not self.tiles:
            return None
        tile = self.tiles.pop()
        self.dealt_count += 1
        return tile

    def deal_hand(self) -> List[Tile]:
        """
        Draw the 13 tiles of a starting hand.

        Raises:
            ValueError: if the wall holds fewer than 13 tiles
        """
        if len(self.tiles) < HAND_SIZE:
            raise ValueError(f"Cannot deal a hand from a wall of {len(self.tiles)} tiles")
        return [self.draw() for _ in range(HAND_SIZE)]

    def reset(self, seed: Optional[int] = None) -> None:
        """Rebuild the full wall, reseeding the shuffle if a seed is given"""
        if seed is not None:
            self.seed = seed
            self._rng = random.Random(seed)
        self._create_wall()

    @property
    def remaining(self) -> int:
        """Number of tiles remaining in the wall"""
        return len(self.tiles)

    @property
    def is_empty(self) -> bool:
        return len(self.tiles) == 0

    def __len__(self) -> int:
        return len(self.tiles)

    def __repr__(self) -> str:
        return f"Wall({self.remaining} tiles remaining)"


class DiscardPile:
    """Discarded tiles in the order they were thrown."""

    def __init__(self, tiles: Optional[List[Tile]] = None):
        self.tiles: List[Tile] = list(tiles) if tiles else []

    def add(self, tile: Tile) -> None:
        self.tiles.append(tile)

    def pop(self) -> Tile:
        """
        Take the newest discard, e.g. for a pickup.

        Raises:
            ValueError: if the pile is empty
        """
        if not self.tiles:
            raise ValueError("Discard pile is empty")
        return self.tiles.pop()

    @property
    def last(self) -> Optional[Tile]:
        """Newest discard, or None if the pile is empty"""
        return self.tiles[-1] if self.tiles else None

    def count(self, tile: Tile) -> int:
        """Count discarded tiles of the same kind"""
        return sum(1 for t in self.tiles if t == tile)

    def to_count_array(self):
        return TileSet(self.tiles).to_count_array()

    def copy(self) -> 'DiscardPile':
        return DiscardPile([tile.copy() for tile in self.tiles])

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __repr__(self) -> str:
        return f"DiscardPile({len(self.tiles)} tiles)"
