"""Board layout rendering using Rich."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dominoes.core.layout import End
from dominoes.engine.round import RoundResult
from dominoes.player.base import GameView
from dominoes.ui.tile_display import (
    pip_to_rich_text, sequence_to_rich_text, tile_to_rich_text, tiles_to_rich_text,
)


def render_board(console: Console, game_view: GameView):
    """Render the layout, opponents and the acting player's hand."""
    header = Text()
    header.append(f"  {game_view.round_label}")
    if game_view.can_draw:
        header.append(f"   Boneyard: {game_view.boneyard_remaining}")
    if game_view.target_score:
        header.append(f"   Target: {game_view.target_score}")
    console.print(Panel(header, title=f"[bold]{game_view.variant_name}[/bold]",
                        border_style="cyan"))

    if game_view.layout_sequence:
        chain = Text("  Board: ")
        chain.append_text(sequence_to_rich_text(game_view.layout_sequence))
        console.print(chain)
        ends = Text("  Ends: ")
        ends.append_text(pip_to_rich_text(game_view.left_end))
        ends.append(" <---> ")
        ends.append_text(pip_to_rich_text(game_view.right_end))
        console.print(ends)
    else:
        console.print("  Board: (empty)", style="dim")

    for opp in game_view.opponents:
        console.print(f"  {opp.name}: {opp.num_tiles} tiles, {opp.score} pts", style="dim")

    console.print("─" * 60, style="dim")
    _render_player_hand(console, game_view)


def _render_player_hand(console: Console, game_view: GameView):
    """Render the acting player's hand in display order."""
    console.print(f"  [bold]{game_view.my_name}[/bold] ({game_view.my_score} pts)")
    tiles = game_view.my_hand.sorted_view()
    if tiles:
        console.print(Text("  ") + tiles_to_rich_text(tiles))
    else:
        console.print("  (empty)", style="dim")
    console.print()


def render_playable(console: Console, available):
    """List playable tiles, numbered for selection, with their ends."""
    console.print("  Playable tiles:")
    for i, tile in enumerate(available.playable):
        ends = available.ends_for(tile)
        if len(ends) > 1:
            where = "(either end)"
        elif ends:
            pip = available.left_end if ends[0] == End.LEFT else available.right_end
            where = f"({ends[0].value} end: {pip})"
        else:
            where = ""
        line = Text(f"    {i + 1}. ")
        line.append_text(tile_to_rich_text(tile))
        line.append(f" {where}", style="dim")
        console.print(line)


def render_round_result(console: Console, result: RoundResult, player_names: list):
    """Render how the round ended and the points awarded."""
    console.print()
    winner = player_names[result.winner]
    if result.is_blocked:
        console.print(Panel(
            f"[bold yellow]Blocked! {winner} wins with the lowest hand "
            f"({result.hand_totals[result.winner]} pips)[/bold yellow]",
            border_style="yellow",
        ))
    else:
        console.print(Panel(
            f"[bold green]{winner} dominoes and wins the round![/bold green]",
            border_style="green",
        ))

    table = Table(title="Hands left", border_style="cyan")
    table.add_column("Player", style="bold")
    table.add_column("Pips", justify="right")
    for name, total in zip(player_names, result.hand_totals):
        table.add_row(name, str(total))
    console.print(table)
    console.print(f"  {winner} scores [bold]{result.points}[/bold] points")
    console.print()


def render_scores(console: Console, players: list):
    """Render current scores."""
    table = Table(title="Scores", border_style="cyan")
    table.add_column("Player", style="bold")
    table.add_column("Score", justify="right")

    for name, score in players:
        style = "green" if score > 0 else ""
        table.add_row(name, str(score), style=style)

    console.print(table)


def render_game_end(console: Console, players: list, winner_name: str):
    """Render final game results."""
    console.print()
    console.print(Panel("[bold]Game over[/bold]", border_style="gold1"))

    sorted_players = sorted(players, key=lambda x: x[1], reverse=True)

    table = Table(title="Final scores", border_style="gold1")
    table.add_column("Rank", justify="center")
    table.add_column("Player", style="bold")
    table.add_column("Score", justify="right")

    for i, (name, score) in enumerate(sorted_players):
        style = "bold green" if name == winner_name else ""
        table.add_row(str(i + 1), name, str(score), style=style)

    console.print(table)
    console.print(f"\n  {winner_name} wins the game!")
    console.print()
