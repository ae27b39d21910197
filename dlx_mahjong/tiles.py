"""
Mahjong Tiles System

Defines all 136 tiles of the set:
- 9 Circles x4 = 36
- 9 Bamboos x4 = 36
- 9 Characters x4 = 36
- 4 Winds (East, South, West, North) x4 = 16
- 3 Dragons (Red, Green, White) x4 = 12
Total: 136 tiles

Every tile carries a visibility flag. Tiles start hidden and are revealed
once they become part of a group picked up from the discard pile.
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np


class Suit(IntEnum):
    """Tile suits"""
    CIRCLES = 0     # Numbers 1-9
    BAMBOOS = 1     # Numbers 1-9
    CHARACTERS = 2  # Numbers 1-9
    WINDS = 3       # East, South, West, North
    DRAGONS = 4     # Red, Green, White


NUMBERED_SUITS = (Suit.CIRCLES, Suit.BAMBOOS, Suit.CHARACTERS)
HONOR_SUITS = (Suit.WINDS, Suit.DRAGONS)


class Wind(IntEnum):
    """Wind tile ranks, also used for seat and round winds"""
    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    def rotated(self) -> 'Wind':
        """Wind for the next round (fixed decrement modulo 4)"""
        return Wind((self + 3) % 4)


class Dragon(IntEnum):
    """Dragon tile ranks"""
    RED = 0
    GREEN = 1
    WHITE = 2


@dataclass(eq=False)
class Tile:
    """
    Represents a single Mahjong tile.

    Attributes:
        suit: The suit of the tile
        rank: The rank within the suit (1-9 for numbered suits, 0-3 winds, 0-2 dragons)
        hidden: Whether the tile is concealed in its owner's hand
    """
    suit: Suit
    rank: int
    hidden: bool = field(default=True)

    def __post_init__(self):
        """Validate tile values"""
        self.suit = Suit(self.suit)
        if self.suit in NUMBERED_SUITS:
            if not 1 <= self.rank <= 9:
                raise ValueError(f"Numbered suits must have rank 1-9, got {self.rank}")
        elif self.suit == Suit.WINDS:
            if not 0 <= self.rank <= 3:
                raise ValueError(f"Wind tiles must have rank 0-3, got {self.rank}")
        elif not 0 <= self.rank <= 2:
            raise ValueError(f"Dragon tiles must have rank 0-2, got {self.rank}")

    @property
    def is_honor(self) -> bool:
        """Check if tile is an honor tile (Wind or Dragon)"""
        return self.suit in HONOR_SUITS

    @property
    def is_terminal(self) -> bool:
        """Check if tile is a terminal (1 or 9 of numbered suits)"""
        return self.suit in NUMBERED_SUITS and self.rank in (1, 9)

    @property
    def tile_index(self) -> int:
        """
        Get unique index for this tile kind (0-33).
        Used for count arrays, ignores visibility.
        """
        if self.suit in NUMBERED_SUITS:
            return self.suit * 9 + self.rank - 1  # 0-26
        elif self.suit == Suit.WINDS:
            return 27 + self.rank  # 27-30
        return 31 + self.rank  # 31-33

    def set_visible(self) -> None:
        """Reveal the tile. There is no way back to hidden."""
        self.hidden = False

    def copy(self) -> 'Tile':
        return Tile(self.suit, self.rank, self.hidden)

    def describe(self, with_visibility: bool = False) -> str:
        text = str(self)
        if with_visibility:
            text += " (Hidden)" if self.hidden else " (Open)"
        return text

    def __eq__(self, other) -> bool:
        """Two tiles are equal if they have same suit and rank (ignoring visibility)"""
        if not isinstance(other, Tile):
            return NotImplemented
        return self.suit == other.suit and self.rank == other.rank

    def __hash__(self) -> int:
        return hash((self.suit, self.rank))

    def __lt__(self, other) -> bool:
        """Comparison for sorting"""
        if not isinstance(other, Tile):
            return NotImplemented
        if self.suit != other.suit:
            return self.suit < other.suit
        return self.rank < other.rank

    def __repr__(self) -> str:
        state = "hidden" if self.hidden else "open"
        return f"Tile({self.suit.name}, {self.rank}, {state})"

    def __str__(self) -> str:
        if self.suit == Suit.WINDS:
            return f"Winds {Wind(self.rank).name.capitalize()}"
        if self.suit == Suit.DRAGONS:
            return f"Dragons {Dragon(self.rank).name.capitalize()}"
        return f"{self.suit.name.capitalize()} {self.rank}"

    @classmethod
    def from_index(cls, tile_index: int) -> 'Tile':
        """Create a hidden tile from its kind index (0-33)"""
        if tile_index < 27:
            return cls(Suit(tile_index // 9), tile_index % 9 + 1)
        elif tile_index < 31:
            return cls(Suit.WINDS, tile_index - 27)
        return cls(Suit.DRAGONS, tile_index - 31)


class TileSet:
    """
    A collection of tiles with utility methods.
    Used to build the wall and for counting.
    """

    # Total number of unique tile kinds
    NUM_TILE_TYPES = 34
    # Total tiles in a complete set
    NUM_TILES = 136
    # Copies of each tile kind
    COPIES_PER_TYPE = 4

    def __init__(self, tiles: Optional[List[Tile]] = None):
        self.tiles: List[Tile] = list(tiles) if tiles else []

    def add(self, tile: Tile) -> None:
        self.tiles.append(tile)

    def count(self, tile: Tile) -> int:
        """Count occurrences of a tile kind"""
        return sum(1 for t in self.tiles if t == tile)

    def to_count_array(self) -> np.ndarray:
        """Convert to a 34-element array counting each tile kind."""
        counts = np.zeros(self.NUM_TILE_TYPES, dtype=np.int8)
        for tile in self.tiles:
            counts[tile.tile_index] += 1
        return counts

    @classmethod
    def create_full_set(cls) -> 'TileSet':
        """Create a complete set of 136 hidden tiles"""
        tiles = []
        for _ in range(cls.COPIES_PER_TYPE):
            for suit in NUMBERED_SUITS:
                for rank in range(1, 10):
                    tiles.append(Tile(suit, rank))
            for rank in Wind:
                tiles.append(Tile(Suit.WINDS, rank))
            for rank in Dragon:
                tiles.append(Tile(Suit.DRAGONS, rank))
        return cls(tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __getitem__(self, index):
        return self.tiles[index]

    def __repr__(self) -> str:
        return f"TileSet({len(self.tiles)} tiles)"


# Convenience functions for creating specific tiles
def circle(rank: int, hidden: bool = True) -> Tile:
    """Create a Circles tile (1-9)"""
    return Tile(Suit.CIRCLES, rank, hidden)

def bamboo(rank: int, hidden: bool = True) -> Tile:
    """Create a Bamboos tile (1-9)"""
    return Tile(Suit.BAMBOOS, rank, hidden)

def character(rank: int, hidden: bool = True) -> Tile:
    """Create a Characters tile (1-9)"""
    return Tile(Suit.CHARACTERS, rank, hidden)

def wind(wind_type: Wind, hidden: bool = True) -> Tile:
    """Create a Wind tile"""
    return Tile(Suit.WINDS, int(wind_type), hidden)

def dragon(dragon_type: Dragon, hidden: bool = True) -> Tile:
    """Create a Dragon tile"""
    return Tile(Suit.DRAGONS, int(dragon_type), hidden)
