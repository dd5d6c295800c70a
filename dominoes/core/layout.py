"""Layout (the board) - the growing chain and its two open ends."""

from enum import Enum
from typing import List, Optional, Tuple

from .errors import BoardNotEmptyError
from .tile import Tile


class End(Enum):
    LEFT = "left"
    RIGHT = "right"


class Layout:
    """The line of play.

    Attributes:
        sequence: Pip values along the chain. The opening tile contributes
            both of its pips; every later tile contributes only its
            unmatched pip, which becomes the new open end.
        left_end: Open pip value at the head (None when empty)
        right_end: Open pip value at the tail (None when empty)
        played_tiles: Tiles in the order they were placed
    """

    def __init__(self):
        self._sequence: List[int] = []
        self._played: List[Tile] = []
        self.left_end: Optional[int] = None
        self.right_end: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self._played

    @property
    def sequence(self) -> List[int]:
        return list(self._sequence)

    @property
    def played_tiles(self) -> List[Tile]:
        return list(self._played)

    @property
    def both_ends(self) -> Tuple[Optional[int], Optional[int]]:
        return (self.left_end, self.right_end)

    @property
    def tile_count(self) -> int:
        return len(self._played)

    @property
    def total_pips(self) -> int:
        return sum(self._sequence)

    def can_play(self, tile: Tile) -> bool:
        """Whether the tile may legally be placed somewhere."""
        if self.is_empty:
            return True
        return tile.connects_to(self.left_end) or tile.connects_to(self.right_end)

    def ends_for(self, tile: Tile) -> List[End]:
        """Ends the tile fits, left first. Both ends when the layout is empty."""
        if self.is_empty:
            return [End.LEFT, End.RIGHT]
        ends = []
        if tile.connects_to(self.left_end):
            ends.append(End.LEFT)
        if tile.connects_to(self.right_end):
            ends.append(End.RIGHT)
        return ends

    def play_first(self, tile: Tile):
        """Seed an empty layout with the opening tile."""
        if not self.is_empty:
            raise BoardNotEmptyError("cannot play an opening tile on a non-empty layout")
        self._played.append(tile)
        self._sequence = [tile.pip_a, tile.pip_b]
        self.left_end = tile.pip_a
        self.right_end = tile.pip_b

    def play_left(self, tile: Tile) -> bool:
        """Attach at the head. False (and no change) if it does not match."""
        if self.is_empty:
            self.play_first(tile)
            return True
        if not tile.connects_to(self.left_end):
            return False

        new_end = tile.other_side(self.left_end)
        self._played.append(tile)
        self._sequence.insert(0, new_end)
        self.left_end = new_end
        return True

    def play_right(self, tile: Tile) -> bool:
        """Attach at the tail. False (and no change) if it does not match."""
        if self.is_empty:
            self.play_first(tile)
            return True
        if not tile.connects_to(self.right_end):
            return False

        new_end = tile.other_side(self.right_end)
        self._played.append(tile)
        self._sequence.append(new_end)
        self.right_end = new_end
        return True

    def play_auto(self, tile: Tile) -> bool:
        """Place on whichever end fits, trying the left end first."""
        if self.is_empty:
            self.play_first(tile)
            return True
        if tile.connects_to(self.left_end):
            return self.play_left(tile)
        if tile.connects_to(self.right_end):
            return self.play_right(tile)
        return False

    def play_on_end(self, tile: Tile, end: End) -> bool:
        if end == End.LEFT:
            return self.play_left(tile)
        return self.play_right(tile)

    def is_blocked(self) -> bool:
        """Both open ends ask for the same pip."""
        return not self.is_empty and self.left_end == self.right_end

    def reset(self):
        """Clear back to an empty layout."""
        self._sequence = []
        self._played = []
        self.left_end = None
        self.right_end = None

    def __repr__(self):
        if self.is_empty:
            return "Layout(empty)"
        chain = "-".join(str(p) for p in self._sequence)
        return f"Layout({chain}, ends={self.left_end}/{self.right_end})"
