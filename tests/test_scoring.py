"""
Tests for the score table, the score search and the mahjong bonuses
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dlx_mahjong.tiles import Suit, Wind, Dragon, circle, bamboo, character, wind, dragon
from dlx_mahjong.groups import Group, GroupType, enumerate_groups
from dlx_mahjong.scoring import (
    Visibility, ScoreKey, ScoreEntry, ScoreTable, ScoreTableError, ScoreEngine,
    DEFAULT_SCORE_TABLE, classify_visibility, wind_relevance, mahjong_bonus, final_score,
)


class TestScoreTable:
    """Test the default table and lookups"""

    def test_pong_dragons_revealed(self):
        key = ScoreKey(GroupType.PONG, Suit.DRAGONS, Visibility.REVEALED, 0)
        assert DEFAULT_SCORE_TABLE.lookup(key) == ScoreEntry(8, 0)

    def test_kong_winds_hidden_both_winds(self):
        key = ScoreKey(GroupType.KONG, Suit.WINDS, Visibility.HIDDEN, 2)
        assert DEFAULT_SCORE_TABLE.lookup(key) == ScoreEntry(16, 2)

    @pytest.mark.parametrize("suit", [Suit.CIRCLES, Suit.BAMBOOS, Suit.CHARACTERS])
    def test_kong_numbered_row(self, suit):
        for visibility in Visibility:
            key = ScoreKey(GroupType.KONG, suit, visibility, 0)
            assert DEFAULT_SCORE_TABLE.lookup(key) == ScoreEntry(16, 1)

    def test_kong_dragons_row(self):
        for visibility in Visibility:
            key = ScoreKey(GroupType.KONG, Suit.DRAGONS, visibility, 0)
            assert DEFAULT_SCORE_TABLE.lookup(key) == ScoreEntry(32, 2)

    def test_kong_winds_row(self):
        for relevance in range(3):
            assert DEFAULT_SCORE_TABLE.lookup(ScoreKey(GroupType.KONG, Suit.WINDS, Visibility.REVEALED, relevance)) == ScoreEntry(16, 2)
            assert DEFAULT_SCORE_TABLE.lookup(ScoreKey(GroupType.KONG, Suit.WINDS, Visibility.MIXED, relevance)) == ScoreEntry(32, 2)

    def test_pong_rows(self):
        for visibility in (Visibility.HIDDEN, Visibility.REVEALED):
            assert DEFAULT_SCORE_TABLE.lookup(ScoreKey(GroupType.PONG, Suit.BAMBOOS, visibility, 0)) == ScoreEntry(8, 0)
            assert DEFAULT_SCORE_TABLE.lookup(ScoreKey(GroupType.PONG, Suit.WINDS, visibility, 1)) == ScoreEntry(16, 1)

    def test_pongs_never_mixed(self):
        assert ScoreKey(GroupType.PONG, Suit.CIRCLES, Visibility.MIXED, 0) not in DEFAULT_SCORE_TABLE

    def test_table_size(self):
        # 5 pairs, 10 chows, 14 pongs, 21 kongs
        assert len(DEFAULT_SCORE_TABLE) == 50

    def test_revealed_never_worth_less(self):
        """Revealing a pong or kong never lowers its table score"""
        for key, entry in DEFAULT_SCORE_TABLE.entries.items():
            if key.group_type in (GroupType.PONG, GroupType.KONG) and key.visibility == Visibility.HIDDEN:
                revealed = DEFAULT_SCORE_TABLE.lookup(key._replace(visibility=Visibility.REVEALED))
                assert revealed.base >= entry.base
                assert revealed.multiplier >= entry.multiplier

    def test_unknown_key(self):
        key = ScoreKey(GroupType.PAIR, Suit.CIRCLES, Visibility.REVEALED, 0)
        with pytest.raises(ScoreTableError):
            DEFAULT_SCORE_TABLE.lookup(key)
        with pytest.raises(KeyError):
            DEFAULT_SCORE_TABLE.lookup(key)

    def test_table_is_read_only(self):
        key = ScoreKey(GroupType.PAIR, Suit.CIRCLES, Visibility.HIDDEN, 0)
        with pytest.raises(TypeError):
            DEFAULT_SCORE_TABLE.entries[key] = ScoreEntry(100, 0)

    def test_custom_table(self):
        key = ScoreKey(GroupType.PONG, Suit.CIRCLES, Visibility.HIDDEN, 0)
        table = ScoreTable({key: ScoreEntry(10, 1)})
        engine = ScoreEngine(table)
        tiles = [circle(3)] * 3
        assert engine.combination_score(tiles, Group(GroupType.PONG, (0, 1, 2)), Wind.EAST, Wind.EAST) == (10, 1)
        assert len(table) == 1


class TestClassification:
    """Test visibility classes and wind relevance"""

    def test_visibility(self):
        assert classify_visibility([circle(1), circle(1)]) == Visibility.HIDDEN
        assert classify_visibility([circle(1, hidden=False)] * 2) == Visibility.REVEALED
        assert classify_visibility([circle(1), circle(1, hidden=False)]) == Visibility.MIXED

    def test_wind_relevance(self):
        assert wind_relevance(GroupType.PONG, Suit.WINDS, Wind.EAST, Wind.EAST, Wind.EAST) == 2
        assert wind_relevance(GroupType.KONG, Suit.WINDS, Wind.SOUTH, Wind.EAST, Wind.SOUTH) == 1
        assert wind_relevance(GroupType.PONG, Suit.WINDS, Wind.WEST, Wind.EAST, Wind.SOUTH) == 0

    def test_wind_relevance_only_for_wind_triplets(self):
        assert wind_relevance(GroupType.PAIR, Suit.WINDS, Wind.EAST, Wind.EAST, Wind.EAST) == 0
        assert wind_relevance(GroupType.PONG, Suit.DRAGONS, 0, Wind.EAST, Wind.EAST) == 0


class TestCombinationScore:
    """Test scoring single groups"""

    def setup_method(self):
        self.engine = ScoreEngine()

    def test_revealed_dragon_pong(self):
        tiles = [dragon(Dragon.GREEN, hidden=False) for _ in range(3)]
        group = Group(GroupType.PONG, (0, 1, 2))
        assert self.engine.combination_score(tiles, group, Wind.EAST, Wind.EAST) == (8, 0)

    def test_hidden_east_kong(self):
        tiles = [wind(Wind.EAST) for _ in range(4)]
        group = Group(GroupType.KONG, (0, 1, 2, 3))
        assert self.engine.combination_score(tiles, group, Wind.EAST, Wind.EAST) == (16, 2)

    def test_revealing_pong_does_not_lower_score(self):
        tiles = [bamboo(4) for _ in range(3)]
        group = Group(GroupType.PONG, (0, 1, 2))
        hidden = self.engine.combination_score(tiles, group, Wind.EAST, Wind.SOUTH)
        for tile in tiles:
            tile.set_visible()
        revealed = self.engine.combination_score(tiles, group, Wind.EAST, Wind.SOUTH)
        assert revealed.base >= hidden.base
        assert revealed.multiplier >= hidden.multiplier

    def test_honor_pair(self):
        tiles = [wind(Wind.NORTH), wind(Wind.NORTH)]
        assert self.engine.combination_score(tiles, Group(GroupType.PAIR, (0, 1)), Wind.EAST, Wind.EAST) == (2, 0)


class TestMaxScore:
    """Test the best-selection search"""

    def setup_method(self):
        self.engine = ScoreEngine()

    def score(self, tiles, round_wind=Wind.EAST, seat_wind=Wind.EAST):
        return self.engine.max_score(tiles, enumerate_groups(tiles), round_wind, seat_wind)

    def test_empty(self):
        assert self.score([]) == (0, 0)

    def test_no_groups(self):
        assert self.score([circle(1), bamboo(5), dragon(Dragon.RED)]) == (0, 0)

    def test_kong_beats_pong(self):
        # Kong (16, 1) versus pong (8, 0) of the same four tiles
        assert self.score([circle(7)] * 4) == (16, 1)

    def test_disjoint_groups_add_up(self):
        tiles = [dragon(Dragon.RED)] * 3 + [character(9)] * 3 + [wind(Wind.WEST)] * 2
        # Dragon pong 8 + numbered pong 8 + honor pair 2
        assert self.score(tiles) == (18, 0)

    def test_wind_pong(self):
        tiles = [wind(Wind.SOUTH) for _ in range(3)]
        assert self.score(tiles, Wind.SOUTH, Wind.SOUTH) == (16, 1)
        assert self.score(tiles, Wind.EAST, Wind.NORTH) == (16, 1)

    def test_first_branch_kept_on_equal_base(self):
        """On an exact tie in base score the earlier selection keeps its multiplier"""
        pong = ScoreKey(GroupType.PONG, Suit.CIRCLES, Visibility.HIDDEN, 0)
        pair = ScoreKey(GroupType.PAIR, Suit.CIRCLES, Visibility.HIDDEN, 0)
        engine = ScoreEngine(ScoreTable({pong: ScoreEntry(4, 0), pair: ScoreEntry(4, 3)}))
        tiles = [circle(2) for _ in range(3)]
        groups = enumerate_groups(tiles)
        assert [g.group_type for g in groups] == [GroupType.PAIR] * 3 + [GroupType.PONG]

        # Pairs come first, so a pair is found first and keeps its multiplier
        assert engine.max_score(tiles, groups, Wind.EAST, Wind.EAST) == (4, 3)
        # With the pong first, the pong wins the tie
        assert engine.max_score(tiles, groups[::-1], Wind.EAST, Wind.EAST) == (4, 0)

    def test_idempotent(self):
        tiles = [circle(r) for r in range(1, 10)] + [dragon(Dragon.WHITE)] * 3 + [bamboo(2)] * 2
        assert self.score(tiles) == self.score(tiles)


class TestBonuses:
    """Test mahjong bonuses and the final score"""

    def test_win_bonus(self):
        assert mahjong_bonus(0, 0, False, {Suit.CIRCLES, Suit.BAMBOOS}, {1, 5}) == (20, 0)

    def test_concealed_bonus(self):
        assert mahjong_bonus(0, 0, True, {Suit.CIRCLES, Suit.BAMBOOS}, {1, 5}) == (40, 0)

    def test_one_numbered_suit(self):
        # +3 for a single suit and +2 for a single numbered suit
        assert mahjong_bonus(10, 1, False, {Suit.BAMBOOS}, {2, 3, 4}) == (30, 6)

    def test_numbered_suit_with_honors(self):
        assert mahjong_bonus(0, 0, False, {Suit.CHARACTERS, Suit.WINDS, Suit.DRAGONS}, {5}) == (20, 2)

    def test_honors_only(self):
        assert mahjong_bonus(0, 0, False, {Suit.WINDS}, set()) == (20, 4)
        assert mahjong_bonus(0, 0, False, {Suit.WINDS, Suit.DRAGONS}, set()) == (20, 0)

    def test_terminals_only(self):
        assert mahjong_bonus(0, 0, False, {Suit.CIRCLES, Suit.BAMBOOS}, {1}) == (20, 4)
        assert mahjong_bonus(0, 0, False, {Suit.CIRCLES, Suit.BAMBOOS}, {9}) == (20, 4)
        assert mahjong_bonus(0, 0, False, {Suit.CIRCLES, Suit.BAMBOOS}, {1, 9}) == (20, 0)

    def test_final_score(self):
        assert final_score(8, 2) == 32
        assert final_score(8, 2, won_mahjong=False, fully_concealed=True) == 32
        # (8 + 20 + 20) * 2 ** (2 + 3 + 2)
        assert final_score(8, 2, True, True, {Suit.CIRCLES}, {2, 3, 4}) == 48 * 2 ** 7


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
