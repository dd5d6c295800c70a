"""Action definitions for the game engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from dominoes.core.layout import End
from dominoes.core.tile import Tile


class ActionType(Enum):
    PLAY = "play"
    DRAW = "draw"    # Log label for boneyard draws; never a provider decision
    PASS = "pass"


@dataclass
class Action:
    """A player action.

    For PLAY, `end` picks the side of the layout. It only matters when the
    tile fits both ends; left None the engine plays left first.
    """
    action_type: ActionType
    player: int  # Seat index
    tile: Optional[Tile] = None
    end: Optional[End] = None

    def __repr__(self):
        parts = [f"{self.action_type.value}"]
        if self.tile:
            parts.append(f"tile={self.tile}")
        if self.end:
            parts.append(f"end={self.end.value}")
        return f"Action({', '.join(parts)}, p{self.player})"


@dataclass
class AvailableActions:
    """Options offered to a player at a decision point.

    Attributes:
        player: Seat index being asked
        playable: Tiles that can be placed, in hand order
        ends: For each playable tile, the ends it fits (left first)
        left_end / right_end: Current open ends (None on an empty layout)
        forced: The tile must be played (opening tile or a playable draw);
            only the end is open to choice
    """
    player: int
    playable: List[Tile] = field(default_factory=list)
    ends: Dict[Tile, List[End]] = field(default_factory=dict)
    left_end: Optional[int] = None
    right_end: Optional[int] = None
    forced: bool = False

    @property
    def can_play(self) -> bool:
        return len(self.playable) > 0

    def ends_for(self, tile: Tile) -> List[End]:
        return self.ends.get(tile, [])

    def fits_both(self, tile: Tile) -> bool:
        """Whether the tile fits both ends, so an end choice is needed."""
        return len(self.ends_for(tile)) > 1
