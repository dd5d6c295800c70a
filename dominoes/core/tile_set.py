"""Tile set (boneyard) management."""

import random
from typing import List, Optional

from .errors import CorruptSetError, EmptySetError, InsufficientTilesError
from .tile import Tile, STANDARD_SET_SIZE, standard_tiles


class TileSet:
    """The undealt tile pool for one game session.

    Starts as the full double-six set (28 tiles) in canonical order.
    Tiles are dealt and drawn from the tail of the remaining list.

    Randomness comes from a private random.Random owned by the set, so two
    sets built with the same seed and put through the same shuffle/deal
    calls produce identical sequences. Pass `rng` to share a generator
    explicitly instead.
    """

    def __init__(self, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)
        self._tiles: List[Tile] = []
        self.generate_standard()

    def generate_standard(self):
        """(Re)build the full set in canonical order."""
        tiles = standard_tiles()
        if len(tiles) != STANDARD_SET_SIZE:
            raise CorruptSetError(
                f"standard set should have {STANDARD_SET_SIZE} tiles, got {len(tiles)}")
        self._tiles = tiles

    def reset(self):
        """Restore all 28 tiles. The random source is left untouched."""
        self.generate_standard()

    def shuffle(self):
        """Shuffle the remaining tiles in place."""
        self._rng.shuffle(self._tiles)

    def deal(self, count: int) -> List[Tile]:
        """Remove and return `count` tiles from the tail of the set."""
        if count < 0:
            raise ValueError(f"cannot deal a negative number of tiles ({count})")
        if count > len(self._tiles):
            raise InsufficientTilesError(
                f"cannot deal {count} tiles, only {len(self._tiles)} remaining")
        dealt = []
        for _ in range(count):
            dealt.append(self._tiles.pop())
        return dealt

    def deal_one(self) -> Tile:
        """Remove and return a single tile."""
        if not self._tiles:
            raise EmptySetError("no tiles left to deal")
        return self._tiles.pop()

    def draw(self) -> Optional[Tile]:
        """Draw a tile from the boneyard, or None when it is exhausted."""
        if self._tiles:
            return self._tiles.pop()
        return None

    def remove(self, tile: Tile) -> bool:
        """Remove a specific tile (either orientation). False if absent."""
        try:
            self._tiles.remove(tile)
        except ValueError:
            return False
        return True

    def contains(self, tile: Tile) -> bool:
        return tile in self._tiles

    def __contains__(self, tile) -> bool:
        return tile in self._tiles

    def highest_double(self) -> Optional[Tile]:
        """The remaining double with the highest pip value, if any."""
        doubles = [t for t in self._tiles if t.is_double]
        if not doubles:
            return None
        return max(doubles, key=lambda t: t.pip_a)

    @property
    def tiles(self) -> List[Tile]:
        """Copy of the remaining tiles, tail last."""
        return list(self._tiles)

    @property
    def remaining(self) -> int:
        """Number of tiles still in the set."""
        return len(self._tiles)

    @property
    def size(self) -> int:
        return len(self._tiles)

    @property
    def is_empty(self) -> bool:
        return len(self._tiles) == 0

    def __len__(self):
        return len(self._tiles)

    def __repr__(self):
        return f"TileSet({len(self._tiles)} remaining)"
