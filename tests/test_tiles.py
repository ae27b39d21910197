"""
Tests for tiles, the wall and the discard pile
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dlx_mahjong.tiles import (
    Tile, TileSet, Suit, Wind, Dragon,
    circle, bamboo, character, wind, dragon,
)
from dlx_mahjong.wall import Wall, DiscardPile


class TestTiles:
    """Test tile system"""

    def test_tile_creation(self):
        """Test creating tiles"""
        t1 = circle(1)
        assert t1.suit == Suit.CIRCLES
        assert t1.rank == 1
        assert t1.hidden

        t2 = bamboo(5, hidden=False)
        assert t2.suit == Suit.BAMBOOS
        assert not t2.hidden

        t3 = character(9)
        assert t3.suit == Suit.CHARACTERS
        assert t3.rank == 9

    def test_invalid_ranks(self):
        with pytest.raises(ValueError):
            Tile(Suit.CIRCLES, 0)
        with pytest.raises(ValueError):
            Tile(Suit.BAMBOOS, 10)
        with pytest.raises(ValueError):
            Tile(Suit.WINDS, 4)
        with pytest.raises(ValueError):
            Tile(Suit.DRAGONS, 3)

    def test_equality_ignores_visibility(self):
        assert circle(5) == circle(5, hidden=False)
        assert hash(circle(5)) == hash(circle(5, hidden=False))
        assert circle(5) != bamboo(5)
        assert wind(Wind.EAST) != dragon(Dragon.RED)

    def test_set_visible(self):
        tile = dragon(Dragon.GREEN)
        assert tile.hidden
        tile.set_visible()
        assert not tile.hidden

    def test_honor_and_terminal(self):
        assert wind(Wind.SOUTH).is_honor
        assert dragon(Dragon.WHITE).is_honor
        assert not circle(1).is_honor
        assert circle(1).is_terminal
        assert character(9).is_terminal
        assert not bamboo(5).is_terminal
        assert not wind(Wind.EAST).is_terminal

    def test_tile_index(self):
        assert circle(1).tile_index == 0
        assert bamboo(1).tile_index == 9
        assert character(9).tile_index == 26
        assert wind(Wind.EAST).tile_index == 27
        assert wind(Wind.NORTH).tile_index == 30
        assert dragon(Dragon.RED).tile_index == 31
        assert dragon(Dragon.WHITE).tile_index == 33

    def test_tile_from_index(self):
        for tile_index in range(TileSet.NUM_TILE_TYPES):
            assert Tile.from_index(tile_index).tile_index == tile_index

    def test_tile_strings(self):
        assert str(circle(5)) == "Circles 5"
        assert str(wind(Wind.EAST)) == "Winds East"
        assert str(dragon(Dragon.RED)) == "Dragons Red"
        assert circle(5).describe(with_visibility=True) == "Circles 5 (Hidden)"
        assert bamboo(2, hidden=False).describe(with_visibility=True) == "Bamboos 2 (Open)"

    def test_sorting(self):
        tiles = [dragon(Dragon.RED), circle(3), bamboo(1), circle(1)]
        assert sorted(tiles) == [circle(1), circle(3), bamboo(1), dragon(Dragon.RED)]

    def test_wind_rotation(self):
        assert Wind.EAST.rotated() == Wind.NORTH
        assert Wind.NORTH.rotated() == Wind.WEST
        assert Wind.SOUTH.rotated() == Wind.EAST


class TestTileSet:
    """Test tile set operations"""

    def test_create_full_set(self):
        tile_set = TileSet.create_full_set()
        assert len(tile_set) == 136

    def test_tile_counts(self):
        tile_set = TileSet.create_full_set()
        assert tile_set.count(circle(1)) == 4
        assert tile_set.count(wind(Wind.NORTH)) == 4
        assert tile_set.count(dragon(Dragon.WHITE)) == 4

    def test_to_count_array(self):
        counts = TileSet.create_full_set().to_count_array()
        assert counts.shape == (34,)
        assert counts.sum() == 136
        assert np.all(counts == 4)


class TestWall:
    """Test wall and discard pile"""

    def test_wall_creation(self):
        wall = Wall(seed=1)
        assert wall.remaining == 136
        assert not wall.is_empty

    def test_draw(self):
        wall = Wall(seed=1)
        tile = wall.draw()
        assert isinstance(tile, Tile)
        assert wall.remaining == 135
        assert wall.dealt_count == 1

    def test_deal_hand(self):
        wall = Wall(seed=1)
        hand = wall.deal_hand()
        assert len(hand) == 13
        assert wall.remaining == 123

    def test_empty_wall(self):
        wall = Wall(seed=1)
        for _ in range(136):
            assert wall.draw() is not None
        assert wall.is_empty
        assert wall.draw() is None
        with pytest.raises(ValueError):
            wall.deal_hand()

    def test_seeded_shuffle(self):
        first = [(t.suit, t.rank) for t in Wall(seed=42).tiles]
        second = [(t.suit, t.rank) for t in Wall(seed=42).tiles]
        assert first == second

    def test_reset(self):
        wall = Wall(seed=3)
        wall.deal_hand()
        wall.reset()
        assert wall.remaining == 136
        assert wall.dealt_count == 0

    def test_discard_pile(self):
        pile = DiscardPile()
        assert pile.last is None
        pile.add(circle(1))
        pile.add(circle(1))
        pile.add(bamboo(2))
        assert len(pile) == 3
        assert pile.count(circle(1)) == 2
        assert pile.last == bamboo(2)
        assert pile.pop() == bamboo(2)
        assert len(pile) == 2

    def test_pop_empty_pile(self):
        with pytest.raises(ValueError):
            DiscardPile().pop()
