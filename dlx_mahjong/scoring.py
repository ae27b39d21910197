"""
Scoring System

Every candidate group is looked up in a fixed score table keyed by
(group type, suit, visibility, wind relevance). A lookup yields a base score
and a multiplier power; a hand scores base * 2 ** multiplier.

The best hand score is found by a backtracking search over all selections
of pairwise disjoint groups. The groups need not cover the whole hand.
Winning hands then receive the mahjong bonuses (concealed hand, one suit,
honors only, terminals only).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, NamedTuple, Sequence, Set, Tuple

from .tiles import Tile, Suit, NUMBERED_SUITS, HONOR_SUITS
from .groups import Group, GroupType


class Visibility(IntEnum):
    """Visibility class of a group"""
    REVEALED = 0  # No hidden tiles
    HIDDEN = 1    # All tiles hidden
    MIXED = 2     # Partially revealed (only possible for kongs)


class ScoreKey(NamedTuple):
    group_type: GroupType
    suit: Suit
    visibility: Visibility
    wind_relevance: int


class ScoreEntry(NamedTuple):
    base: int
    multiplier: int


class ScoreTableError(KeyError):
    """Raised when a group classifies to a key missing from the score table."""


def _default_entries() -> Dict[ScoreKey, ScoreEntry]:
    """
    Build the standard table.

    Pairs are always hidden, and chows and pongs never mix visibility, so
    only kongs get a MIXED class. Winds pongs and kongs get one entry per
    wind relevance (0, 1 or 2); the relevance does not change the value.
    """
    entries: Dict[ScoreKey, ScoreEntry] = {}

    # Pairs
    for suit in NUMBERED_SUITS:
        entries[ScoreKey(GroupType.PAIR, suit, Visibility.HIDDEN, 0)] = ScoreEntry(0, 0)
    for suit in HONOR_SUITS:
        entries[ScoreKey(GroupType.PAIR, suit, Visibility.HIDDEN, 0)] = ScoreEntry(2, 0)

    # Chows; the honor rows can never be looked up but are kept with the others
    for suit in Suit:
        for visibility in (Visibility.HIDDEN, Visibility.REVEALED):
            entries[ScoreKey(GroupType.CHOW, suit, visibility, 0)] = ScoreEntry(0, 0)

    # Pongs: (hidden, revealed)
    pongs = {
        "numbered": ((8, 0), (8, 0)),
        "dragons": ((8, 0), (8, 0)),
        "winds": ((16, 1), (16, 1)),
    }
    # Kongs: (hidden, revealed, mixed)
    kongs = {
        "numbered": ((16, 1), (16, 1), (16, 1)),
        "dragons": ((32, 2), (32, 2), (32, 2)),
        "winds": ((16, 2), (16, 2), (32, 2)),
    }
    classes = {
        GroupType.PONG: (Visibility.HIDDEN, Visibility.REVEALED),
        GroupType.KONG: (Visibility.HIDDEN, Visibility.REVEALED, Visibility.MIXED),
    }
    for group_type, rows in ((GroupType.PONG, pongs), (GroupType.KONG, kongs)):
        for kind, values in rows.items():
            if kind == "numbered":
                keys = [(suit, 0) for suit in NUMBERED_SUITS]
            elif kind == "dragons":
                keys = [(Suit.DRAGONS, 0)]
            else:
                keys = [(Suit.WINDS, relevance) for relevance in range(3)]
            for suit, relevance in keys:
                for visibility, value in zip(classes[group_type], values):
                    entries[ScoreKey(group_type, suit, visibility, relevance)] = ScoreEntry(*value)

    return entries


@dataclass(frozen=True)
class ScoreTable:
    """
    Immutable mapping from ScoreKey to ScoreEntry.

    Build it once and hand it to a ScoreEngine. Tests can inject their own
    tables.
    """
    entries: Mapping[ScoreKey, ScoreEntry] = field(default_factory=dict)

    def __post_init__(self):
        frozen = MappingProxyType({ScoreKey(*key): ScoreEntry(*value) for key, value in self.entries.items()})
        object.__setattr__(self, "entries", frozen)

    @classmethod
    def default(cls) -> 'ScoreTable':
        return cls(_default_entries())

    def lookup(self, key: ScoreKey) -> ScoreEntry:
        try:
            return self.entries[key]
        except KeyError:
            raise ScoreTableError(f"No score table entry for {key}") from None

    def __contains__(self, key) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


DEFAULT_SCORE_TABLE = ScoreTable.default()


def classify_visibility(tiles: Iterable[Tile]) -> Visibility:
    states = {tile.hidden for tile in tiles}
    if states == {True}:
        return Visibility.HIDDEN
    if states == {False}:
        return Visibility.REVEALED
    return Visibility.MIXED


def wind_relevance(group_type: GroupType, suit: Suit, rank: int, round_wind: int, seat_wind: int) -> int:
    """How many of (round wind, seat wind) match a Winds pong or kong. 0 otherwise."""
    if suit != Suit.WINDS or group_type not in (GroupType.PONG, GroupType.KONG):
        return 0
    return int(rank == round_wind) + int(rank == seat_wind)


class ScoreEngine:
    """
    Scores groups and searches for the best-scoring selection of groups.

    An engine holds no search state between calls, so one instance can be
    shared by every player.
    """

    def __init__(self, table: ScoreTable = DEFAULT_SCORE_TABLE):
        self.table = table

    def score_key(self, tiles: Sequence[Tile], group: Group, round_wind: int, seat_wind: int) -> ScoreKey:
        members = [tiles[index] for index in group.indices]
        first = members[0]
        return ScoreKey(
            group.group_type,
            first.suit,
            classify_visibility(members),
            wind_relevance(group.group_type, first.suit, first.rank, round_wind, seat_wind),
        )

    def combination_score(
        self,
        tiles: Sequence[Tile],
        group: Group,
        round_wind: int,
        seat_wind: int,
    ) -> ScoreEntry:
        """
        Look up the score of a single group.

        Raises:
            ScoreTableError: if the group classifies to an unknown key
        """
        return self.table.lookup(self.score_key(tiles, group, round_wind, seat_wind))

    def max_score(
        self,
        tiles: Sequence[Tile],
        groups: Sequence[Group],
        round_wind: int,
        seat_wind: int,
    ) -> Tuple[int, int]:
        """
        Find the highest base score over all selections of disjoint groups.

        The search walks the groups in order; at each level it tries every
        later group that does not overlap the tiles already used. A branch
        replaces the best only when its base score is strictly higher, so on
        equal base scores the first branch found keeps its multiplier.

        Returns:
            (max_base_score, multiplier_power)
        """
        scores = [self.combination_score(tiles, group, round_wind, seat_wind) for group in groups]
        masks = [group.mask for group in groups]

        def search(start: int, used: int) -> Tuple[int, int]:
            best_base = 0
            best_multiplier = 0
            for i in range(start, len(groups)):
                if masks[i] & used:
                    continue
                next_base, next_multiplier = search(i + 1, used | masks[i])
                base, multiplier = scores[i]
                if next_base + base > best_base:
                    best_base = next_base + base
                    best_multiplier = next_multiplier + multiplier
            return best_base, best_multiplier

        return search(0, 0)


def mahjong_bonus(
    base: int,
    multiplier: int,
    fully_concealed: bool,
    suits: Set[int],
    ranks: Set[int],
) -> Tuple[int, int]:
    """
    Apply the bonuses of a winning hand.

    Args:
        base: Base score of the hand
        multiplier: Multiplier power of the hand
        fully_concealed: No tile was revealed when the hand won
        suits: Every suit present in the hand
        ranks: Every rank of a numbered-suit tile in the hand

    Returns:
        Adjusted (base, multiplier)
    """
    base += 20
    if fully_concealed:
        base += 20

    suits = {Suit(suit) for suit in suits}
    if len(suits) == 1:
        only_suit = next(iter(suits))
        # One numbered suit, or only winds / only dragons
        multiplier += 3 if only_suit in NUMBERED_SUITS else 4

    numbered = suits - set(HONOR_SUITS)
    if len(numbered) == 1:
        multiplier += 2

    if set(ranks) in ({1}, {9}):
        multiplier += 4

    return base, multiplier


def final_score(
    base: int,
    multiplier: int,
    won_mahjong: bool = False,
    fully_concealed: bool = False,
    suits: Iterable[int] = (),
    ranks: Iterable[int] = (),
) -> int:
    """Total score base * 2 ** multiplier, with the mahjong bonuses when won."""
    if won_mahjong:
        base, multiplier = mahjong_bonus(base, multiplier, fully_concealed, set(suits), set(ranks))
    return base * 2 ** multiplier
