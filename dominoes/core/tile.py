"""Domino tile with flip-invariant identity."""

from typing import List, Tuple

from .errors import InvalidPipError

MAX_PIP = 6  # Double-six set

# Number of unique tiles in a double-N set: (N+1)(N+2)/2
STANDARD_SET_SIZE = (MAX_PIP + 1) * (MAX_PIP + 2) // 2


class Tile:
    """Immutable domino tile [a|b].

    Orientation is kept so a host can show the tile the way it was laid,
    but identity is orientation-free: Tile(3, 5) == Tile(5, 3) and both
    hash the same. Comparison goes through the canonical (low, high) key.
    """
    __slots__ = ('_a', '_b')

    def __init__(self, pip_a: int, pip_b: int):
        for pip in (pip_a, pip_b):
            if not isinstance(pip, int) or isinstance(pip, bool) or not (0 <= pip <= MAX_PIP):
                raise InvalidPipError(
                    f"tile sides must be 0..{MAX_PIP}, got [{pip_a}|{pip_b}]")
        self._a = pip_a
        self._b = pip_b

    @property
    def pip_a(self) -> int:
        return self._a

    @property
    def pip_b(self) -> int:
        return self._b

    @property
    def low(self) -> int:
        return min(self._a, self._b)

    @property
    def high(self) -> int:
        return max(self._a, self._b)

    @property
    def key(self) -> Tuple[int, int]:
        """Canonical (low, high) form used for equality and hashing."""
        return (self.low, self.high)

    @property
    def is_double(self) -> bool:
        return self._a == self._b

    @property
    def total_pips(self) -> int:
        return self._a + self._b

    def connects_to(self, pip: int) -> bool:
        """Whether either side carries the given pip value."""
        return self._a == pip or self._b == pip

    def other_side(self, pip: int) -> int:
        """Pip on the side opposite a matched pip."""
        if self._a == pip:
            return self._b
        if self._b == pip:
            return self._a
        raise ValueError(f"{self} has no side {pip}")

    def flip(self) -> 'Tile':
        """Return a new tile with the sides swapped."""
        return Tile(self._b, self._a)

    def __repr__(self):
        return f"Tile[{self._a}|{self._b}]"

    def __str__(self):
        return f"[{self._a}|{self._b}]"

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self.key == other.key
        return NotImplemented

    def __hash__(self):
        return hash(self.key)

    def __lt__(self, other):
        if isinstance(other, Tile):
            return (self.total_pips, self.low) < (other.total_pips, other.low)
        return NotImplemented


def standard_tiles() -> List[Tile]:
    """All unique tiles of the set in canonical order: [0|0], [0|1] ... [6|6]."""
    return [Tile(a, b) for a in range(MAX_PIP + 1) for b in range(a, MAX_PIP + 1)]


ALL_TILES = standard_tiles()


def tile_to_simple_str(tile: Tile) -> str:
    """Plain "a|b" form, orientation kept. Used in game logs."""
    return f"{tile.pip_a}|{tile.pip_b}"


def make_tiles_from_string(s: str) -> List[Tile]:
    """Parse shorthand like '35 52 6-3 [1|4]' into tiles.

    Each tile is a pair of digits, optionally separated by '-' or '|'
    and optionally wrapped in brackets. Orientation is preserved.
    """
    tiles = []
    digits = []
    for ch in s:
        if ch.isdigit():
            digits.append(int(ch))
            if len(digits) == 2:
                tiles.append(Tile(digits[0], digits[1]))
                digits = []
        elif ch in " ,-|[]":
            continue
        else:
            raise ValueError(f"unexpected character {ch!r} in tile string {s!r}")
    if digits:
        raise ValueError(f"dangling pip in tile string {s!r}")
    return tiles
