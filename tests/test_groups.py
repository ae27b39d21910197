"""
Tests for candidate group enumeration
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dlx_mahjong.tiles import Wind, Dragon, circle, bamboo, character, wind, dragon
from dlx_mahjong.groups import (
    Group, GroupType, find_pairs, find_chows, find_pongs, find_kongs,
    enumerate_groups, find_chow_starter_ranks,
)


class TestGroup:
    """Test the group value type"""

    def test_mask(self):
        group = Group(GroupType.PAIR, (0, 3))
        assert group.mask == 0b1001
        assert group.size == 2
        assert list(group) == [0, 3]

    def test_overlaps(self):
        a = Group(GroupType.CHOW, (0, 1, 2))
        b = Group(GroupType.PAIR, (2, 5))
        c = Group(GroupType.PAIR, (3, 4))
        assert a.overlaps(b)
        assert not a.overlaps(c)


class TestPairs:
    """Test pair detection"""

    def test_pair(self):
        assert find_pairs([circle(1), circle(1)]) == [Group(GroupType.PAIR, (0, 1))]

    def test_pair_needs_hidden_tiles(self):
        assert find_pairs([circle(1), circle(1, hidden=False)]) == []

    def test_three_copies_give_three_pairs(self):
        pairs = find_pairs([dragon(Dragon.RED)] * 3)
        assert [p.indices for p in pairs] == [(0, 1), (0, 2), (1, 2)]

    def test_different_tiles(self):
        assert find_pairs([circle(1), bamboo(1), character(1)]) == []


class TestChows:
    """Test chow detection"""

    def test_chow(self):
        assert find_chows([circle(1), circle(2), circle(3)]) == [Group(GroupType.CHOW, (0, 1, 2))]

    def test_unordered_chow(self):
        assert find_chows([bamboo(7), bamboo(5), bamboo(6)]) == [Group(GroupType.CHOW, (0, 1, 2))]

    def test_mixed_suits(self):
        assert find_chows([circle(1), bamboo(2), circle(3)]) == []

    def test_mixed_visibility(self):
        assert find_chows([circle(1), circle(2, hidden=False), circle(3)]) == []

    def test_revealed_chow(self):
        tiles = [character(4, hidden=False), character(5, hidden=False), character(6, hidden=False)]
        assert len(find_chows(tiles)) == 1

    def test_no_honor_chows(self):
        winds = [wind(Wind.EAST), wind(Wind.SOUTH), wind(Wind.WEST)]
        dragons = [dragon(Dragon.RED), dragon(Dragon.GREEN), dragon(Dragon.WHITE)]
        assert find_chows(winds) == []
        assert find_chows(dragons) == []

    def test_gap(self):
        assert find_chows([circle(1), circle(2), circle(4)]) == []


class TestPongsAndKongs:
    """Test pong and kong detection"""

    def test_pong(self):
        assert find_pongs([circle(5)] * 3) == [Group(GroupType.PONG, (0, 1, 2))]

    def test_pong_mixed_visibility(self):
        assert find_pongs([circle(5), circle(5), circle(5, hidden=False)]) == []

    def test_four_copies(self):
        tiles = [wind(Wind.EAST) for _ in range(4)]
        assert len(find_pongs(tiles)) == 4
        assert find_kongs(tiles) == [Group(GroupType.KONG, (0, 1, 2, 3))]

    def test_kong_mixed_visibility(self):
        tiles = [circle(5), circle(5), circle(5, hidden=False), circle(5, hidden=False)]
        assert len(find_kongs(tiles)) == 1


class TestEnumerateGroups:
    """Test the combined candidate list"""

    def test_fixed_order(self):
        tiles = [circle(1), circle(1), circle(1), circle(2), circle(3)]
        types = [group.group_type for group in enumerate_groups(tiles)]
        assert types == [GroupType.PAIR] * 3 + [GroupType.CHOW] * 3 + [GroupType.PONG]

    def test_empty_hand(self):
        assert enumerate_groups([]) == []


class TestChowStarters:
    """Test chow starting ranks"""

    @pytest.mark.parametrize("ranks,expected", [
        ({1, 2, 3}, [1]),
        ({1, 2, 3, 4}, [1, 2]),
        ({3, 4, 5, 6, 7}, [3, 4, 5]),
        ({1, 2, 4}, []),
        (set(), []),
    ])
    def test_starters(self, ranks, expected):
        assert find_chow_starter_ranks(ranks) == expected
