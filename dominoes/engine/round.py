"""Single round flow control - the core game loop."""

from enum import Enum
from typing import List, Optional, Tuple

from dominoes.core.errors import IllegalPlayError, InvalidPlayerCountError
from dominoes.core.layout import End, Layout
from dominoes.core.player_state import PlayerState
from dominoes.core.tile import STANDARD_SET_SIZE, Tile
from dominoes.core.tile_set import TileSet
from dominoes.engine.action import ActionType, AvailableActions
from dominoes.engine.event import EventBus, EventType, GameEvent
from dominoes.engine.rules import TurnRules, Variant

MIN_PLAYERS = 2
MAX_PLAYERS = 4
TILES_PER_PLAYER = 7  # Regardless of player count


class RoundPhase(Enum):
    SETUP = "setup"
    STARTING_TURN = "starting_turn"
    TURN = "turn"
    RESOLVED = "resolved"


class RoundResult:
    """Result of a completed round."""

    def __init__(self, num_players: int, variant: Variant):
        self.variant = variant
        self.winner: Optional[int] = None  # Seat index of round winner
        self.is_blocked: bool = False
        self.hand_totals: List[int] = [0] * num_players  # Pips left in each hand
        self.points: int = 0  # Points awarded to the winner
        self.score_changes: List[int] = [0] * num_players


class RoundState:
    """State for a single round of play.

    The tile set is owned by the game session and reset here at setup;
    the layout belongs to this round only.
    """

    def __init__(
        self,
        players: List[PlayerState],
        tile_set: TileSet,
        event_bus: EventBus,
        rules: TurnRules,
        layout: Optional[Layout] = None,
        tiles_per_player: int = TILES_PER_PLAYER,
    ):
        if not (MIN_PLAYERS <= len(players) <= MAX_PLAYERS):
            raise InvalidPlayerCountError(
                f"a round needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}")
        if tiles_per_player < 1 or tiles_per_player * len(players) > STANDARD_SET_SIZE:
            raise ValueError(
                f"cannot deal {tiles_per_player} tiles to {len(players)} players")
        self.players = players
        self.tile_set = tile_set
        self.event_bus = event_bus
        self.rules = rules
        self.layout = layout if layout is not None else Layout()
        self.tiles_per_player = tiles_per_player
        self.num_players = len(players)
        self.round_number = 1

        self.phase = RoundPhase.SETUP
        self.current_player = 0
        self.consecutive_passes = 0
        self.turn_count = 0
        self.opening_tile: Optional[Tile] = None

        self.result: Optional[RoundResult] = None
        self.is_finished = False

    @property
    def is_active(self) -> bool:
        return self.phase in (RoundPhase.STARTING_TURN, RoundPhase.TURN)

    @property
    def variant(self) -> Variant:
        return self.rules.variant

    def deal_tiles(self):
        """Reset the table and deal initial hands in seat order."""
        self.layout.reset()
        self.tile_set.reset()
        self.tile_set.shuffle()

        for p in self.players:
            p.reset_for_round()
        for p in self.players:
            p.hand.add_many(self.tile_set.deal(self.tiles_per_player))

        self.phase = RoundPhase.SETUP
        self.consecutive_passes = 0
        self.turn_count = 0

        self.event_bus.emit(GameEvent(EventType.ROUND_START, {
            "round_number": self.round_number,
            "variant": self.variant,
            "players": [(p.name, p.score) for p in self.players],
        }))
        self.event_bus.emit(GameEvent(EventType.DEAL, {
            "players": self.players,
            "tile_set": self.tile_set,
            "boneyard_remaining": self.tile_set.remaining,
        }))

    def find_opening(self) -> Tuple[int, Tile]:
        """Pick the starting player and the tile they must open with.

        The highest double held by anyone wins. With no double on the
        table, the highest-total tile wins instead. Ties keep the first
        found in seat order, then hand order.
        """
        best_seat, best_tile = None, None
        for p in self.players:
            double = p.hand.highest_double()
            if double is not None and (best_tile is None or
                                       double.total_pips > best_tile.total_pips):
                best_seat, best_tile = p.seat, double
        if best_tile is not None:
            return best_seat, best_tile

        for p in self.players:
            for tile in p.hand.tiles:
                if best_tile is None or tile.total_pips > best_tile.total_pips:
                    best_seat, best_tile = p.seat, tile
        return best_seat, best_tile

    def play_opening(self) -> int:
        """Force the starting player to open. Returns their seat."""
        self.phase = RoundPhase.STARTING_TURN
        seat, tile = self.find_opening()
        self.current_player = seat

        self.players[seat].hand.remove(tile)
        self.layout.play_first(tile)
        self.opening_tile = tile
        self.turn_count += 1

        self.event_bus.emit(GameEvent(EventType.TILE_PLAYED, {
            "player": seat,
            "name": self.players[seat].name,
            "tile": tile,
            "end": None,
            "is_opening": True,
            "left_end": self.layout.left_end,
            "right_end": self.layout.right_end,
        }))

        self.phase = RoundPhase.TURN
        return seat

    def get_turn_actions(self, player_idx: int,
                         candidates: Optional[List[Tile]] = None,
                         forced: bool = False) -> AvailableActions:
        """Playable tiles for a player against the current open ends."""
        left, right = self.layout.both_ends
        if candidates is None:
            candidates = self.players[player_idx].hand.playable_against(left, right)
        else:
            candidates = [t for t in candidates if self.layout.can_play(t)]

        return AvailableActions(
            player=player_idx,
            playable=candidates,
            ends={t: self.layout.ends_for(t) for t in candidates},
            left_end=left,
            right_end=right,
            forced=forced,
        )

    def any_player_can_play(self) -> bool:
        left, right = self.layout.both_ends
        return any(p.hand.can_play(left, right) for p in self.players)

    def process_play(self, player_idx: int, tile: Tile, end: Optional[End] = None):
        """Move a tile from a hand onto the layout."""
        hand = self.players[player_idx].hand
        if tile is None or tile not in hand:
            raise IllegalPlayError(f"player {player_idx} does not hold {tile}")

        ends = self.layout.ends_for(tile)
        if not ends:
            raise IllegalPlayError(
                f"{tile} does not fit ends {self.layout.left_end}/{self.layout.right_end}")
        if end is None:
            placed_end = ends[0]
            placed = self.layout.play_auto(tile)
        else:
            placed_end = end
            placed = self.layout.play_on_end(tile, end)
        if not placed:
            raise IllegalPlayError(f"{tile} does not fit the {end.value} end")

        hand.remove(tile)
        self.consecutive_passes = 0

        self.event_bus.emit(GameEvent(EventType.TILE_PLAYED, {
            "player": player_idx,
            "name": self.players[player_idx].name,
            "tile": tile,
            "end": placed_end,
            "is_opening": False,
            "left_end": self.layout.left_end,
            "right_end": self.layout.right_end,
        }))

    def process_draw(self, player_idx: int) -> Optional[Tile]:
        """Draw a boneyard tile into a hand. Returns None if it is empty."""
        tile = self.tile_set.draw()
        if tile is not None:
            self.players[player_idx].hand.add(tile)
            self.event_bus.emit(GameEvent(EventType.TILE_DRAWN, {
                "player": player_idx,
                "name": self.players[player_idx].name,
                "tile": tile,
                "boneyard_remaining": self.tile_set.remaining,
            }))
        return tile

    def process_pass(self, player_idx: int):
        self.consecutive_passes += 1
        self.event_bus.emit(GameEvent(EventType.PASS, {
            "player": player_idx,
            "name": self.players[player_idx].name,
            "consecutive_passes": self.consecutive_passes,
            "boneyard_remaining": self.tile_set.remaining,
        }))

    def is_blocked(self) -> bool:
        return self.rules.is_blocked(self)

    def check_round_end(self, player_idx: int) -> bool:
        """Terminal checks after a turn: empty hand first, then blocked."""
        if self.players[player_idx].hand.is_empty:
            self.process_round_win(player_idx)
            return True
        if self.is_blocked():
            self.process_blocked()
            return True
        return False

    def process_round_win(self, winner_idx: int):
        """Winner empties their hand and scores every other hand's pips."""
        result = self._new_result()
        points = sum(total for i, total in enumerate(result.hand_totals)
                     if i != winner_idx)
        self._finish(result, winner_idx, points)

        self.event_bus.emit(GameEvent(EventType.ROUND_WON, {
            "winner": winner_idx,
            "name": self.players[winner_idx].name,
            "points": points,
            "hand_totals": list(result.hand_totals),
        }))

    def process_blocked(self):
        """Lowest hand wins a blocked round.

        Ties go to the first player in seat order; a later player only
        takes over with a strictly lower total.
        """
        result = self._new_result()
        totals = result.hand_totals

        winner_idx = 0
        lowest = totals[0]
        for i, total in enumerate(totals):
            if total < lowest:
                lowest = total
                winner_idx = i

        others = sum(total for i, total in enumerate(totals) if i != winner_idx)
        points = max(0, others - lowest)
        result.is_blocked = True
        self._finish(result, winner_idx, points)

        self.event_bus.emit(GameEvent(EventType.ROUND_BLOCKED, {
            "winner": winner_idx,
            "name": self.players[winner_idx].name,
            "points": points,
            "hand_totals": list(totals),
        }))

    def _new_result(self) -> RoundResult:
        result = RoundResult(self.num_players, self.variant)
        result.hand_totals = [p.hand.total_pips() for p in self.players]
        return result

    def _finish(self, result: RoundResult, winner_idx: int, points: int):
        result.winner = winner_idx
        result.points = points
        result.score_changes[winner_idx] = points
        self.result = result
        self.is_finished = True
        self.phase = RoundPhase.RESOLVED

    def next_player(self, current: int) -> int:
        """Get the next player index."""
        return (current + 1) % self.num_players


def run_round(round_state: RoundState, get_player_action) -> RoundResult:
    """Execute a complete round.

    Args:
        round_state: The round state
        get_player_action: Callable(player_idx, available_actions) -> Action.
            Must return a PLAY action naming one of the offered tiles.

    Returns:
        RoundResult with the winner and score changes.
    """
    rs = round_state
    rs.deal_tiles()

    opener = rs.play_opening()
    if rs.check_round_end(opener):
        return rs.result

    current = rs.next_player(opener)

    while not rs.is_finished:
        rs.current_player = current
        rs.event_bus.emit(GameEvent(EventType.TURN_START, {
            "player": current,
            "name": rs.players[current].name,
            "left_end": rs.layout.left_end,
            "right_end": rs.layout.right_end,
        }))

        available = rs.get_turn_actions(current)
        if available.can_play:
            action = get_player_action(current, available)
            if action.action_type != ActionType.PLAY:
                raise IllegalPlayError(
                    f"player {current} holds a playable tile and must play")
            rs.process_play(current, action.tile, action.end)
        else:
            tile = rs.rules.resolve_no_play(rs, current)
            if tile is None:
                rs.process_pass(current)
            else:
                # Drawn tile is played at once; only the end may be chosen
                end = None
                forced = rs.get_turn_actions(current, [tile], forced=True)
                if forced.fits_both(tile):
                    end = get_player_action(current, forced).end
                rs.process_play(current, tile, end)

        rs.turn_count += 1
        if rs.check_round_end(current):
            break

        current = rs.next_player(current)

    return rs.result
