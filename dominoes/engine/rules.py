"""Variant rules - Draw and Block dominoes.

Both variants share the whole round flow. They differ in two places only:

- what a player does when no held tile fits the layout
  (Draw: take tiles from the boneyard until one fits or it runs out;
   Block: pass, the boneyard is never touched)
- what makes a round blocked
  (Draw: boneyard empty and nobody can play;
   Block: every player has passed in a row)
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from dominoes.core.tile import Tile


class Variant(Enum):
    DRAW = "draw"
    BLOCK = "block"

    @property
    def display_name(self) -> str:
        return {Variant.DRAW: "Draw Dominoes", Variant.BLOCK: "Block Dominoes"}[self]


class TurnRules(ABC):
    """Strategy for the variant-specific parts of a turn."""

    variant: Variant
    allows_drawing: bool = False

    @abstractmethod
    def resolve_no_play(self, round_state, player_idx: int) -> Optional[Tile]:
        """Called when the player holds nothing playable.

        Returns a tile that must now be played, or None if the player passes.
        """
        ...

    @abstractmethod
    def is_blocked(self, round_state) -> bool:
        """Whether the round can no longer progress."""
        ...


class DrawRules(TurnRules):
    variant = Variant.DRAW
    allows_drawing = True

    def resolve_no_play(self, round_state, player_idx: int) -> Optional[Tile]:
        # Draw one at a time; the first tile that fits is played immediately
        while True:
            tile = round_state.process_draw(player_idx)
            if tile is None:
                return None
            if round_state.layout.can_play(tile):
                return tile

    def is_blocked(self, round_state) -> bool:
        if not round_state.tile_set.is_empty:
            return False
        return not round_state.any_player_can_play()


class BlockRules(TurnRules):
    variant = Variant.BLOCK
    allows_drawing = False

    def resolve_no_play(self, round_state, player_idx: int) -> Optional[Tile]:
        return None

    def is_blocked(self, round_state) -> bool:
        return round_state.consecutive_passes >= round_state.num_players


def get_rules(variant) -> TurnRules:
    """Rules strategy for a Variant (or its string value)."""
    variant = Variant(variant)
    if variant == Variant.DRAW:
        return DrawRules()
    return BlockRules()
