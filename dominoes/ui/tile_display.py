"""Tile display formatting with colors for terminal output."""

from typing import Optional

from rich.text import Text

from dominoes.core.tile import Tile, tile_to_simple_str

# One color per pip value so matching sides stand out on the board
PIP_COLORS = {
    0: "white",
    1: "red",
    2: "green",
    3: "yellow",
    4: "blue",
    5: "magenta",
    6: "cyan",
}


def pip_to_rich_text(pip: Optional[int]) -> Text:
    if pip is None:
        return Text("-", style="dim")
    return Text(str(pip), style=f"bold {PIP_COLORS[pip]}")


def tile_to_rich_text(tile: Tile) -> Text:
    """Convert a tile to a Rich Text object with per-pip colors."""
    text = Text("[", style="bold")
    text.append_text(pip_to_rich_text(tile.pip_a))
    text.append("|", style="bold")
    text.append_text(pip_to_rich_text(tile.pip_b))
    text.append("]", style="bold")
    return text


def tiles_to_rich_text(tiles: list, separator: str = " ") -> Text:
    """Convert a list of tiles to Rich Text."""
    result = Text()
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(separator)
        result.append_text(tile_to_rich_text(tile))
    return result


def sequence_to_rich_text(sequence: list) -> Text:
    """Render the layout's pip chain, e.g. 6-3-5-2."""
    result = Text()
    for i, pip in enumerate(sequence):
        if i > 0:
            result.append("-", style="dim")
        result.append_text(pip_to_rich_text(pip))
    return result
