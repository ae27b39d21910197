"""
Hand Module

A player's ordered tiles and every query the game asks of them: candidate
groups, pickup checks, the exact-cover win check and the best score.
"""

from enum import IntEnum
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple
import numpy as np

from .tiles import Tile, TileSet, Suit, Wind, NUMBERED_SUITS
from .groups import (
    Group, GroupType, find_pairs, find_chows, find_pongs, find_kongs,
    enumerate_groups, find_chow_starter_ranks,
)
from .dlx import find_exact_covers
from .scoring import ScoreEngine, DEFAULT_SCORE_TABLE
from .wall import Wall, DiscardPile, HAND_SIZE


WINNING_HAND_SIZE = HAND_SIZE + 1
# Every kong held in a hand adds one tile to the four groups and a pair
MAX_WINNING_HAND_SIZE = WINNING_HAND_SIZE + 4
WINNING_GROUP_COUNT = 5

_DEFAULT_ENGINE = ScoreEngine(DEFAULT_SCORE_TABLE)


class PickupAction(IntEnum):
    """Ways to claim the newest discard"""
    NONE = 0
    CHOW = 1
    PONG = 2
    KONG = 3


def is_winning_hand(tiles: Iterable[Tile]) -> bool:
    """
    Check whether tiles split exactly into four groups and a pair.

    Cheap rejections come first: a tile count that cannot win, no pair at
    all, fewer than five candidate groups, or a tile slot that no candidate
    group touches. The remaining hands go to the exact-cover solver.
    """
    tiles = list(tiles)
    if not WINNING_HAND_SIZE <= len(tiles) <= MAX_WINNING_HAND_SIZE:
        return False
    if not find_pairs(tiles):
        return False

    groups = enumerate_groups(tiles)
    if len(groups) < WINNING_GROUP_COUNT:
        return False

    covered = 0
    for group in groups:
        covered |= group.mask
    if covered != (1 << len(tiles)) - 1:
        return False

    for cover in find_exact_covers(groups, universe_size=len(tiles)):
        if len(cover) != WINNING_GROUP_COUNT:
            continue
        if any(groups[row].group_type == GroupType.PAIR for row in cover):
            return True
    return False


def max_score(
    tiles: Iterable[Tile],
    round_wind: int,
    seat_wind: int,
    engine: Optional[ScoreEngine] = None,
) -> Tuple[int, int]:
    """Best (base, multiplier) over all selections of disjoint groups."""
    tiles = list(tiles)
    engine = engine or _DEFAULT_ENGINE
    return engine.max_score(tiles, enumerate_groups(tiles), round_wind, seat_wind)


def visible_score(
    tiles: Iterable[Tile],
    round_wind: int,
    seat_wind: int,
    engine: Optional[ScoreEngine] = None,
) -> Tuple[int, int]:
    """Best score of the revealed tiles only, i.e. what opponents can see."""
    revealed = [tile for tile in tiles if not tile.hidden]
    return max_score(revealed, round_wind, seat_wind, engine)


class Hand:
    """
    Ordered tiles owned by one player.

    Holds 13 tiles between turns and 14 after a draw or a pickup.
    Size-changing operations raise ValueError when called out of turn.
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        self.tiles: List[Tile] = list(tiles) if tiles else []

    # Drawing and discarding

    def draw_hand(self, wall: Wall) -> None:
        """Fill an empty hand with 13 tiles from the wall"""
        if self.tiles:
            raise ValueError("Hand must be empty before dealing")
        self.tiles.extend(wall.deal_hand())

    def draw_tile(self, wall: Wall) -> Optional[Tile]:
        """
        Draw one tile from the wall.

        Returns:
            The drawn tile, or None if the wall is empty
        """
        self._require_size(HAND_SIZE, "draw")
        tile = wall.draw()
        if tile is not None:
            self.tiles.append(tile)
        return tile

    def pick_tile_from_discard(self, discard_pile: DiscardPile) -> Tile:
        """Move the newest discard into the hand"""
        self._require_size(HAND_SIZE, "pick up")
        tile = discard_pile.pop()
        self.tiles.append(tile)
        return tile

    def add_tile(self, tile: Tile) -> None:
        self.tiles.append(tile)

    def discard_tile(self, index: int, discard_pile: DiscardPile) -> Tile:
        """
        Discard the tile at index onto the pile.

        Raises:
            ValueError: if the hand does not hold 14 tiles, the index is out of
                range or the tile has been revealed
        """
        self._require_size(WINNING_HAND_SIZE, "discard")
        if not 0 <= index < len(self.tiles):
            raise ValueError(f"Invalid discard index {index}")
        if not self.tiles[index].hidden:
            raise ValueError(f"Cannot discard revealed tile {self.tiles[index]}")
        tile = self.tiles.pop(index)
        discard_pile.add(tile)
        return tile

    def valid_discards(self) -> List[int]:
        """Indices of hidden tiles, which are the only ones that may be discarded"""
        return [index for index, tile in enumerate(self.tiles) if tile.hidden]

    def _require_size(self, size: int, operation: str) -> None:
        if len(self.tiles) != size:
            raise ValueError(f"Cannot {operation} with {len(self.tiles)} tiles in hand, need {size}")

    # Views

    def sort(self) -> None:
        """Sort by suit, then rank"""
        self.tiles.sort()

    def get_tile(self, index: int) -> Tile:
        return self.tiles[index]

    def visible_hand(self) -> 'Hand':
        """Copy of the revealed tiles only"""
        return Hand(tile.copy() for tile in self.tiles if not tile.hidden)

    def copy(self) -> 'Hand':
        return Hand(tile.copy() for tile in self.tiles)

    @property
    def size(self) -> int:
        return len(self.tiles)

    def get_hand_size(self) -> int:
        return len(self.tiles)

    # Candidate groups

    def get_pairs(self) -> List[Group]:
        return find_pairs(self.tiles)

    def get_chows(self) -> List[Group]:
        return find_chows(self.tiles)

    def get_pongs(self) -> List[Group]:
        return find_pongs(self.tiles)

    def get_kongs(self) -> List[Group]:
        return find_kongs(self.tiles)

    def get_combinations(self) -> List[Group]:
        return enumerate_groups(self.tiles)

    # Pickups

    def _hidden_count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t.hidden and t == tile)

    def can_kong(self, tile: Tile) -> bool:
        """Three hidden copies of the discarded tile are in hand"""
        return self._hidden_count(tile) == 3

    def can_pong(self, tile: Tile) -> bool:
        return self._hidden_count(tile) >= 2

    def chow_starters(self, tile: Tile) -> List[int]:
        """
        Starting ranks of every run that the tile completes with hidden tiles.

        Works both before and after the tile has been picked up.
        """
        if tile.suit not in NUMBERED_SUITS:
            return []
        ranks = {t.rank for t in self.tiles if t.hidden and t.suit == tile.suit}
        ranks.add(tile.rank)
        return [start for start in find_chow_starter_ranks(ranks) if start <= tile.rank <= start + 2]

    def can_chow(self, tile: Tile) -> bool:
        return bool(self.chow_starters(tile))

    def available_actions(self, tile: Tile, player_number: int, discarder: int) -> PickupAction:
        """
        Strongest pickup the player may make on a discard.

        Kong beats pong. A chow is only offered to the player seated right
        after the discarder.
        """
        if self.can_kong(tile):
            return PickupAction.KONG
        if self.can_pong(tile):
            return PickupAction.PONG
        if player_number == (discarder + 1) % 4 and self.can_chow(tile):
            return PickupAction.CHOW
        return PickupAction.NONE

    def reveal_combination(
        self,
        tile: Tile,
        action: PickupAction,
        choose_chow: Optional[Callable[[List[int]], int]] = None,
    ) -> List[int]:
        """
        Reveal the group formed with a picked-up tile.

        Args:
            tile: The tile that was picked up (already in hand)
            action: The pickup that was made
            choose_chow: Picks a starting rank when several runs are possible.
                The lowest starting rank is used when it is not given.

        Returns:
            Indices of the revealed tiles
        """
        action = PickupAction(action)
        if action == PickupAction.NONE:
            return []

        if action == PickupAction.KONG:
            indices = [i for i, t in enumerate(self.tiles) if t == tile]
            if len(indices) != 4:
                raise ValueError(f"Kong of {tile} needs 4 tiles, hand holds {len(indices)}")
        elif action == PickupAction.PONG:
            indices = [i for i, t in enumerate(self.tiles) if t.hidden and t == tile][-3:]
            if len(indices) != 3:
                raise ValueError(f"Pong of {tile} needs 3 hidden tiles, hand holds {len(indices)}")
        else:
            starters = self.chow_starters(tile)
            if not starters:
                raise ValueError(f"No chow can be formed with {tile}")
            start = starters[0]
            if len(starters) > 1 and choose_chow is not None:
                start = choose_chow(starters)
                if start not in starters:
                    raise ValueError(f"Rank {start} does not start a chow, choose from {starters}")
            indices = []
            for rank in range(start, start + 3):
                # Prefer the newest copy so the picked-up tile itself is revealed
                matches = [i for i, t in enumerate(self.tiles)
                           if t.hidden and t.suit == tile.suit and t.rank == rank]
                indices.append(matches[-1])

        self.set_tiles_visible(indices)
        return indices

    # Evaluation

    def is_winning_hand(self) -> bool:
        return is_winning_hand(self.tiles)

    def get_max_score(
        self,
        round_wind: int = Wind.EAST,
        seat_wind: int = Wind.EAST,
        engine: Optional[ScoreEngine] = None,
    ) -> Tuple[int, int]:
        return max_score(self.tiles, round_wind, seat_wind, engine)

    def get_visible_score(
        self,
        round_wind: int = Wind.EAST,
        seat_wind: int = Wind.EAST,
        engine: Optional[ScoreEngine] = None,
    ) -> Tuple[int, int]:
        return visible_score(self.tiles, round_wind, seat_wind, engine)

    # Counting

    def count(self, tile: Tile) -> int:
        """Count tiles of the same kind, hidden or not"""
        return sum(1 for t in self.tiles if t == tile)

    def count_suit(self, suit: Suit) -> int:
        return sum(1 for t in self.tiles if t.suit == suit)

    def set_tiles_visible(self, indices: Sequence[int]) -> None:
        for index in indices:
            self.tiles[index].set_visible()

    def all_suits(self) -> Set[Suit]:
        return {tile.suit for tile in self.tiles}

    def all_ranks(self) -> Set[int]:
        """Ranks of numbered-suit tiles. Winds and dragons are ignored."""
        return {tile.rank for tile in self.tiles if tile.suit in NUMBERED_SUITS}

    @property
    def is_fully_concealed(self) -> bool:
        return all(tile.hidden for tile in self.tiles)

    def to_count_array(self) -> np.ndarray:
        return TileSet(self.tiles).to_count_array()

    def describe(self, with_indices: bool = True) -> str:
        """One line per tile, e.g. '3: Bamboos 5 (Open)'"""
        lines = []
        for index, tile in enumerate(self.tiles):
            text = tile.describe(with_visibility=True)
            lines.append(f"{index}: {text}" if with_indices else text)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __getitem__(self, index):
        return self.tiles[index]

    def __repr__(self) -> str:
        return f"Hand({self.tiles})"
