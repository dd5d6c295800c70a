"""Abstract player interface and GameView (read-only information barrier)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from dominoes.core.hand import Hand
from dominoes.core.layout import End, Layout
from dominoes.core.tile import Tile
from dominoes.engine.action import Action, AvailableActions


@dataclass
class OpponentView:
    """Read-only view of an opponent (no hidden tiles)."""
    seat: int
    name: str
    score: int
    rounds_won: int
    num_tiles: int


@dataclass
class GameView:
    """Read-only view of visible game state.

    Players see their own tiles, the layout and how many tiles everyone
    else holds. The boneyard contents and other hands stay hidden.
    """
    # Own hand (a copy; changing it does not affect the game)
    my_hand: Hand
    my_seat: int
    my_name: str
    my_score: int

    # Opponents (limited view)
    opponents: List[OpponentView] = field(default_factory=list)

    # Table state
    variant_name: str = ""
    left_end: Optional[int] = None
    right_end: Optional[int] = None
    layout_sequence: List[int] = field(default_factory=list)
    played_tiles: List[Tile] = field(default_factory=list)
    boneyard_remaining: int = 0
    can_draw: bool = True  # False in Block, where the boneyard is never used
    round_label: str = ""
    target_score: int = 0


class Player(ABC):
    """Abstract base class for all players (decision providers)."""

    def __init__(self, name: str):
        self.name = name

    def decide(self, game_view: GameView, available: AvailableActions) -> Action:
        """Full decision for one turn: a tile, then an end when it fits both."""
        action = self.choose_action(game_view, available)
        if action.end is None and action.tile is not None and available.fits_both(action.tile):
            action.end = self.choose_end(game_view, action.tile,
                                         available.ends_for(action.tile))
        return action

    @abstractmethod
    def choose_action(self, game_view: GameView,
                      available: AvailableActions) -> Action:
        """Choose a tile to play from the available options.

        Called whenever the player holds at least one playable tile, and
        again with a single forced tile when a drawn tile fits both ends.
        """
        ...

    @abstractmethod
    def choose_end(self, game_view: GameView, tile: Tile,
                   ends: List[End]) -> End:
        """Choose which end to play a tile that fits both ends."""
        ...


def build_game_view(
    player_idx: int,
    players: List,  # List[PlayerState]
    layout: Layout,
    boneyard_remaining: int,
    can_draw: bool = True,
    variant_name: str = "",
    round_label: str = "",
    target_score: int = 0,
) -> GameView:
    """Build a GameView for the given player."""
    me = players[player_idx]

    opponents = []
    for p in players:
        if p.seat == player_idx:
            continue
        opponents.append(OpponentView(
            seat=p.seat,
            name=p.name,
            score=p.score,
            rounds_won=p.rounds_won,
            num_tiles=p.hand.size,
        ))

    return GameView(
        my_hand=me.hand.clone(),
        my_seat=player_idx,
        my_name=me.name,
        my_score=me.score,
        opponents=opponents,
        variant_name=variant_name,
        left_end=layout.left_end,
        right_end=layout.right_end,
        layout_sequence=layout.sequence,
        played_tiles=layout.played_tiles,
        boneyard_remaining=boneyard_remaining,
        can_draw=can_draw,
        round_label=round_label,
        target_score=target_score,
    )
