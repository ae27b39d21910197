"""
Candidate Group Enumeration

Derives every candidate scoring group (pairs, chows, pongs, kongs) from an
ordered list of tiles. Groups refer to tile slots in the hand by index, so
two copies of the same tile produce distinct groups.

The enumeration is exhaustive: O(n^2) for pairs, O(n^3) for chows and pongs
and O(n^4) for kongs, which is fine for hands of at most 18 tiles.
"""

from enum import IntEnum
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Sequence, Tuple

from .tiles import Tile, HONOR_SUITS


class GroupType(IntEnum):
    """Kinds of scoring groups"""
    PAIR = 0   # 2 identical hidden tiles
    CHOW = 1   # 3 consecutive ranks of one numbered suit
    PONG = 2   # 3 identical tiles
    KONG = 3   # 4 identical tiles


@dataclass(frozen=True)
class Group:
    """
    A candidate group of tile slots.

    Attributes:
        group_type: Kind of group, fixed when the group is enumerated
        indices: Sorted tile slot indices into the hand
    """
    group_type: GroupType
    indices: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.indices)

    @property
    def mask(self) -> int:
        """Bitmask with one bit set per tile slot"""
        mask = 0
        for index in self.indices:
            mask |= 1 << index
        return mask

    def overlaps(self, other: 'Group') -> bool:
        return bool(self.mask & other.mask)

    def __iter__(self):
        return iter(self.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def __repr__(self) -> str:
        return f"Group({self.group_type.name}, {list(self.indices)})"


def _same_visibility(tiles: Iterable[Tile]) -> bool:
    return len({tile.hidden for tile in tiles}) == 1


def find_pairs(tiles: Sequence[Tile]) -> List[Group]:
    """All index pairs of identical tiles that are both hidden."""
    pairs = []
    for i, j in combinations(range(len(tiles)), 2):
        if tiles[i] == tiles[j] and tiles[i].hidden and tiles[j].hidden:
            pairs.append(Group(GroupType.PAIR, (i, j)))
    return pairs


def find_chows(tiles: Sequence[Tile]) -> List[Group]:
    """
    All index triples forming a run of three consecutive ranks.

    The tiles must share a numbered suit and the same visibility.
    """
    chows = []
    n = len(tiles)
    for i in range(n):
        if tiles[i].suit in HONOR_SUITS:
            continue
        for j in range(i + 1, n):
            if tiles[j].suit != tiles[i].suit:
                continue
            for k in range(j + 1, n):
                if tiles[k].suit != tiles[i].suit:
                    continue
                trio = (tiles[i], tiles[j], tiles[k])
                low, mid, high = sorted(tile.rank for tile in trio)
                if mid - low == 1 and high - mid == 1 and _same_visibility(trio):
                    chows.append(Group(GroupType.CHOW, (i, j, k)))
    return chows


def find_pongs(tiles: Sequence[Tile]) -> List[Group]:
    """All index triples of identical tiles sharing one visibility."""
    pongs = []
    for trio in combinations(range(len(tiles)), 3):
        first = tiles[trio[0]]
        members = [tiles[index] for index in trio]
        if all(tile == first for tile in members) and _same_visibility(members):
            pongs.append(Group(GroupType.PONG, trio))
    return pongs


def find_kongs(tiles: Sequence[Tile]) -> List[Group]:
    """All index quadruples of identical tiles. Visibility may be mixed."""
    kongs = []
    for quad in combinations(range(len(tiles)), 4):
        first = tiles[quad[0]]
        if all(tiles[index] == first for index in quad[1:]):
            kongs.append(Group(GroupType.KONG, quad))
    return kongs


def enumerate_groups(tiles: Sequence[Tile]) -> List[Group]:
    """
    Get all candidate groups of a hand.

    The order is fixed: pairs, chows, pongs, kongs. Both the win check and
    the score search depend on it.
    """
    tiles = list(tiles)
    return find_pairs(tiles) + find_chows(tiles) + find_pongs(tiles) + find_kongs(tiles)


def find_chow_starter_ranks(ranks: Iterable[int]) -> List[int]:
    """
    Ranks that can start a chow, i.e. r with r+1 and r+2 also present.

    Args:
        ranks: Ranks available in one suit

    Returns:
        Sorted list of starting ranks
    """
    available = set(ranks)
    return sorted(r for r in available if r + 1 in available and r + 2 in available)
