"""Hand management - held tiles and playability queries."""

from typing import Iterable, List, Optional

from .tile import Tile


class Hand:
    """A player's tiles for the current round.

    Tiles keep the order they were received in; every query that returns
    tiles preserves that order. Membership is flip-invariant.
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None):
        self._tiles: List[Tile] = list(tiles) if tiles else []

    def add(self, tile: Tile):
        """Take a tile into the hand."""
        if tile is None:
            raise ValueError("cannot add None to a hand")
        self._tiles.append(tile)

    def add_many(self, tiles: Iterable[Tile]):
        for tile in tiles:
            self.add(tile)

    def remove(self, tile: Tile) -> bool:
        """Remove a tile. Returns False if the hand does not hold it."""
        try:
            self._tiles.remove(tile)
        except ValueError:
            return False
        return True

    def contains(self, tile: Tile) -> bool:
        return tile in self._tiles

    def __contains__(self, tile) -> bool:
        return tile in self._tiles

    def clear(self):
        self._tiles = []

    def playable_for(self, pip: int) -> List[Tile]:
        """Tiles that connect to a single pip value."""
        return [t for t in self._tiles if t.connects_to(pip)]

    def playable_against(self, left_pip: Optional[int],
                         right_pip: Optional[int]) -> List[Tile]:
        """Tiles that connect to either open end.

        With no open ends (empty layout) every held tile is playable.
        """
        if left_pip is None and right_pip is None:
            return list(self._tiles)
        return [t for t in self._tiles
                if (left_pip is not None and t.connects_to(left_pip))
                or (right_pip is not None and t.connects_to(right_pip))]

    def can_play(self, left_pip: Optional[int], right_pip: Optional[int]) -> bool:
        if left_pip is None and right_pip is None:
            return bool(self._tiles)
        for t in self._tiles:
            if left_pip is not None and t.connects_to(left_pip):
                return True
            if right_pip is not None and t.connects_to(right_pip):
                return True
        return False

    def doubles(self) -> List[Tile]:
        return [t for t in self._tiles if t.is_double]

    def highest_double(self) -> Optional[Tile]:
        """Double with the highest pip value, or None."""
        doubles = self.doubles()
        if not doubles:
            return None
        return max(doubles, key=lambda t: t.pip_a)

    def highest_tile(self) -> Optional[Tile]:
        """Tile with the highest pip total; the earliest held wins ties."""
        if not self._tiles:
            return None
        return max(self._tiles, key=lambda t: t.total_pips)

    def total_pips(self) -> int:
        """Sum of all pips held, used for end-of-round scoring."""
        return sum(t.total_pips for t in self._tiles)

    def sorted_view(self) -> List[Tile]:
        """Display order: by total pips, then by the lower side."""
        return sorted(self._tiles, key=lambda t: (t.total_pips, t.low))

    @property
    def tiles(self) -> List[Tile]:
        return list(self._tiles)

    @property
    def size(self) -> int:
        return len(self._tiles)

    @property
    def is_empty(self) -> bool:
        return not self._tiles

    def __len__(self):
        return len(self._tiles)

    def __iter__(self):
        return iter(list(self._tiles))

    def clone(self) -> 'Hand':
        """Copy for simulation or snapshots."""
        return Hand(self._tiles)

    def __repr__(self):
        return f"Hand({' '.join(str(t) for t in self._tiles)})"
