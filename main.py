#!/usr/bin/env python3
"""Draw & Block Dominoes - Terminal CLI Game"""

from rich.console import Console
from rich.panel import Panel

from dominoes.engine.event import EventBus, EventType, GameEvent
from dominoes.engine.game import DEFAULT_TARGET_SCORE, GameConfig, GameState
from dominoes.engine.game_logger import GameLogger
from dominoes.engine.round import MAX_PLAYERS, MIN_PLAYERS, run_round
from dominoes.engine.rules import Variant
from dominoes.player.base import build_game_view
from dominoes.player.human import HumanPlayer
from dominoes.ui.board_layout import render_round_result, render_scores
from dominoes.ui.renderer import Renderer

console = Console()

MIN_TARGET_SCORE = 50
MAX_TARGET_SCORE = 500


def show_menu() -> int:
    """Show variant selection menu and return choice."""
    console.print()
    console.print(Panel(
        "[bold cyan]Dominoes[/bold cyan]\n"
        "[dim]Double-six, 2-4 players, hot seat[/dim]",
        border_style="cyan",
        padding=(1, 4),
    ))
    console.print()
    console.print("  Select a game:")
    console.print(f"    1. {Variant.DRAW.display_name}")
    console.print("       [dim]Draw from the boneyard when you cannot play[/dim]")
    console.print(f"    2. {Variant.BLOCK.display_name}")
    console.print("       [dim]No drawing - pass when you cannot play[/dim]")
    console.print("    0. Quit")
    console.print()
    return _ask_int("  > Choose (0-2): ", 0, 2)


def _ask_int(prompt: str, low: int, high: int) -> int:
    while True:
        try:
            choice = int(console.input(prompt).strip())
            if low <= choice <= high:
                return choice
        except ValueError:
            pass
        console.print("  [red]Invalid choice, try again[/red]")


def ask_setup():
    """Ask for player names and target score."""
    num_players = _ask_int(f"  > How many players ({MIN_PLAYERS}-{MAX_PLAYERS})? ",
                           MIN_PLAYERS, MAX_PLAYERS)
    names = []
    for i in range(num_players):
        name = console.input(f"  > Name for player {i + 1}: ").strip()
        names.append(name or f"Player {i + 1}")

    raw = console.input(f"  > Target score (default {DEFAULT_TARGET_SCORE}): ").strip()
    target_score = DEFAULT_TARGET_SCORE
    if raw:
        try:
            target_score = int(raw)
        except ValueError:
            console.print(f"  [yellow]Invalid score, using {DEFAULT_TARGET_SCORE}[/yellow]")
            target_score = DEFAULT_TARGET_SCORE
        if not (MIN_TARGET_SCORE <= target_score <= MAX_TARGET_SCORE):
            console.print(f"  [yellow]Using default score of {DEFAULT_TARGET_SCORE}[/yellow]")
            target_score = DEFAULT_TARGET_SCORE
    return names, target_score


def play_game(variant: Variant):
    """Play complete games until the players stop asking for a rematch."""
    player_names, target_score = ask_setup()
    config = GameConfig(variant=variant, num_players=len(player_names),
                        target_score=target_score)

    event_bus = EventBus()
    renderer = Renderer(console, event_bus)
    players = [HumanPlayer(name, console, renderer) for name in player_names]

    game = GameState(config, player_names, event_bus)

    while True:
        logger = GameLogger(player_names, {
            "variant": config.variant.value,
            "num_players": config.num_players,
            "target_score": config.target_score,
            "tiles_per_player": config.tiles_per_player,
        })
        logger.subscribe_events(event_bus)

        event_bus.emit(GameEvent(EventType.GAME_START, {
            "config": config,
            "players": [(p.name, p.score) for p in game.players],
        }))
        console.print(f"\n  [bold]{variant.display_name}[/bold]  "
                      f"target {config.target_score}")
        console.print(f"  [dim]Session {logger.session_id}[/dim]")

        while not game.is_finished:
            round_state = game.setup_round()

            def get_action(player_idx, available):
                """Route decisions to the player in that seat."""
                gv = build_game_view(
                    player_idx, game.players, round_state.layout,
                    round_state.tile_set.remaining,
                    can_draw=game.rules.allows_drawing,
                    variant_name=variant.display_name,
                    round_label=game.round_label,
                    target_score=config.target_score,
                )
                return players[player_idx].decide(gv, available)

            result = run_round(round_state, get_action)
            logger.end_round(result)
            render_round_result(console, result, player_names)

            game.advance_round(result)
            render_scores(console, [(p.name, p.score) for p in game.players])
            if not game.is_finished:
                renderer.pause()

        log_path = logger.save({p.name: p.score for p in game.players})
        console.print(f"  [dim]Game log saved to {log_path}[/dim]")

        logger.unsubscribe_events(event_bus)

        again = console.input("\n  > Play another game? (y/n): ").strip().lower()
        if again not in ("y", "yes"):
            return
        game.new_game()


def main():
    """Main entry point."""
    try:
        while True:
            choice = show_menu()
            if choice == 0:
                console.print("\n  Thanks for playing! Goodbye!\n")
                break
            play_game(Variant.DRAW if choice == 1 else Variant.BLOCK)
            console.print()
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n  [dim]Game exited[/dim]\n")


if __name__ == "__main__":
    main()
