"""User input handling for the terminal UI."""

from typing import List

from rich.console import Console

from dominoes.core.layout import End
from dominoes.core.tile import Tile
from dominoes.engine.action import Action, ActionType, AvailableActions
from dominoes.ui.tile_display import tile_to_simple_str


def get_player_input(console: Console, available: AvailableActions) -> Action:
    """Ask the human which tile to play. The end is asked separately."""
    if available.forced:
        # Drawn tile that fits: only the end is a real choice
        tile = available.playable[0]
        console.print(f"  Drew a playable tile: [bold]{tile_to_simple_str(tile)}[/bold]")
    else:
        tile = _get_tile_input(console, available.playable)
    return Action(ActionType.PLAY, available.player, tile=tile)


def _get_tile_input(console: Console, playable: List[Tile]) -> Tile:
    n = len(playable)
    if n == 1:
        console.input(f"  > Only one playable tile, press Enter to play "
                      f"{tile_to_simple_str(playable[0])} ")
        return playable[0]

    prompt = f"  > Choose tile to play (1-{n}): "
    while True:
        choice = console.input(prompt).strip()
        try:
            idx = int(choice) - 1
            if 0 <= idx < n:
                return playable[idx]
        except ValueError:
            pass
        console.print("  [red]Invalid choice, try again[/red]")


def get_end_input(console: Console, tile: Tile, ends: List[End]) -> End:
    """Ask which end to play on. Anything other than L/LEFT means right."""
    choice = console.input(
        f"  > Play {tile_to_simple_str(tile)} on (L)eft or (R)ight? ").strip().upper()
    if choice in ("L", "LEFT") and End.LEFT in ends:
        return End.LEFT
    if End.RIGHT in ends:
        return End.RIGHT
    return ends[0]
