"""Human player - interfaces with terminal UI for input."""

from typing import List

from rich.console import Console

from dominoes.core.layout import End
from dominoes.core.tile import Tile
from dominoes.engine.action import Action, AvailableActions
from dominoes.player.base import Player, GameView
from dominoes.ui.input_handler import get_end_input, get_player_input
from dominoes.ui.renderer import Renderer


class HumanPlayer(Player):
    """Human player that uses terminal UI for interaction."""

    def __init__(self, name: str, console: Console, renderer: Renderer):
        super().__init__(name)
        self.console = console
        self.renderer = renderer

    def choose_action(self, game_view: GameView,
                      available: AvailableActions) -> Action:
        """Get a play from the human via the UI."""
        if not available.forced:
            self.renderer.render_game_view(game_view)
        self.renderer.render_actions(available)
        return get_player_input(self.console, available)

    def choose_end(self, game_view: GameView, tile: Tile,
                   ends: List[End]) -> End:
        return get_end_input(self.console, tile, ends)
