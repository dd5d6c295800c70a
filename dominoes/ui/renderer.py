"""Rich rendering engine - ties together all UI components."""

from rich.console import Console
from rich.text import Text

from dominoes.engine.action import AvailableActions
from dominoes.engine.event import EventBus, EventType, GameEvent
from dominoes.player.base import GameView
from dominoes.ui.board_layout import render_board, render_game_end, render_playable
from dominoes.ui.tile_display import tile_to_rich_text


class Renderer:
    """Main rendering engine that subscribes to game events."""

    def __init__(self, console: Console, event_bus: EventBus):
        self.console = console
        self.event_bus = event_bus
        self._subscribe_events()

    def _subscribe_events(self):
        """Subscribe to relevant game events."""
        self.event_bus.subscribe(EventType.ROUND_START, self._on_round_start)
        self.event_bus.subscribe(EventType.TILE_PLAYED, self._on_tile_played)
        self.event_bus.subscribe(EventType.TILE_DRAWN, self._on_tile_drawn)
        self.event_bus.subscribe(EventType.PASS, self._on_pass)
        self.event_bus.subscribe(EventType.GAME_END, self._on_game_end)

    def render_game_view(self, game_view: GameView):
        """Render the current board from the acting player's perspective."""
        render_board(self.console, game_view)

    def render_actions(self, available: AvailableActions):
        """Show playable tiles to the player."""
        if not available.forced:
            render_playable(self.console, available)

    def _on_round_start(self, event: GameEvent):
        self.console.print(f"\n  [bold cyan]{'=' * 50}[/bold cyan]")
        self.console.print(f"  [bold]Round {event.data['round_number']}[/bold]")

    def _on_tile_played(self, event: GameEvent):
        d = event.data
        line = Text(f"  {d['name']} ")
        line.append("opens with " if d["is_opening"] else "plays ")
        line.append_text(tile_to_rich_text(d["tile"]))
        if d["end"] is not None:
            line.append(f" on the {d['end'].value}", style="dim")
        line.append(f"   ends {d['left_end']} / {d['right_end']}", style="dim")
        self.console.print(line)

    def _on_tile_drawn(self, event: GameEvent):
        d = event.data
        self.console.print(
            f"  {d['name']} draws from the boneyard "
            f"({d['boneyard_remaining']} left)", style="dim")

    def _on_pass(self, event: GameEvent):
        d = event.data
        self.console.print(
            f"  [yellow]{d['name']} passes[/yellow] "
            f"(consecutive passes: {d['consecutive_passes']})")

    def _on_game_end(self, event: GameEvent):
        players = event.data.get("players", [])
        winner_name = players[event.data["winner"]][0]
        render_game_end(self.console, players, winner_name)

    def pause(self, message: str = "Press Enter to continue..."):
        """Pause and wait for user input."""
        self.console.input(f"\n  {message}")
