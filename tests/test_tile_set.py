"""Tests for tile_set.py - the boneyard"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import random

import pytest

from dominoes.core.errors import EmptySetError, InsufficientTilesError
from dominoes.core.tile import Tile
from dominoes.core.tile_set import TileSet


class TestTileSetBasic:
    def test_full_set(self):
        ts = TileSet(seed=1)
        assert ts.size == 28
        assert len(set(ts.tiles)) == 28
        assert not ts.is_empty

    def test_deal(self):
        ts = TileSet(seed=1)
        ts.shuffle()
        hand = ts.deal(7)
        assert len(hand) == 7
        assert ts.remaining == 21
        for t in hand:
            assert t not in ts

    def test_deal_zero(self):
        ts = TileSet(seed=1)
        assert ts.deal(0) == []
        assert ts.remaining == 28

    def test_deal_too_many(self):
        ts = TileSet(seed=1)
        with pytest.raises(InsufficientTilesError):
            ts.deal(29)
        # Failed deal leaves the set untouched
        assert ts.remaining == 28

    def test_deal_negative(self):
        with pytest.raises(ValueError):
            TileSet(seed=1).deal(-1)

    def test_deal_one_empty(self):
        ts = TileSet(seed=1)
        ts.deal(28)
        assert ts.is_empty
        with pytest.raises(EmptySetError):
            ts.deal_one()

    def test_draw_empty_returns_none(self):
        ts = TileSet(seed=1)
        ts.deal(28)
        assert ts.draw() is None

    def test_draw(self):
        ts = TileSet(seed=1)
        t = ts.draw()
        assert isinstance(t, Tile)
        assert ts.remaining == 27


class TestTileSetQueries:
    def test_remove_flipped(self):
        ts = TileSet(seed=1)
        assert ts.remove(Tile(5, 3))
        assert Tile(3, 5) not in ts
        assert not ts.remove(Tile(3, 5))
        assert ts.remaining == 27

    def test_contains(self):
        ts = TileSet(seed=1)
        assert ts.contains(Tile(6, 2))
        assert Tile(2, 6) in ts

    def test_highest_double(self):
        ts = TileSet(seed=1)
        assert ts.highest_double() == Tile(6, 6)
        ts.remove(Tile(6, 6))
        assert ts.highest_double() == Tile(5, 5)

    def test_highest_double_none(self):
        ts = TileSet(seed=1)
        for i in range(7):
            ts.remove(Tile(i, i))
        assert ts.highest_double() is None


class TestTileSetReset:
    def test_reset_restores(self):
        ts = TileSet(seed=1)
        ts.deal(10)
        ts.reset()
        assert ts.remaining == 28
        ts.reset()
        assert ts.remaining == 28
        assert len(set(ts.tiles)) == 28

    def test_same_seed_same_sequence(self):
        a = TileSet(seed=42)
        b = TileSet(seed=42)
        a.shuffle()
        b.shuffle()
        assert [t.key for t in a.deal(14)] == [t.key for t in b.deal(14)]

    def test_shared_rng(self):
        a = TileSet(rng=random.Random(7))
        b = TileSet(rng=random.Random(7))
        a.shuffle()
        b.shuffle()
        assert [t.key for t in a.tiles] == [t.key for t in b.tiles]
