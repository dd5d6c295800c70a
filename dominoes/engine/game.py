"""Game management - rounds until a player reaches the target score."""

from typing import Callable, List, Optional

from dominoes.core.errors import InvalidPlayerCountError
from dominoes.core.player_state import PlayerState
from dominoes.core.tile import STANDARD_SET_SIZE
from dominoes.core.tile_set import TileSet
from dominoes.engine.event import EventBus, EventType, GameEvent
from dominoes.engine.round import (
    MAX_PLAYERS, MIN_PLAYERS, TILES_PER_PLAYER, RoundResult, RoundState, run_round,
)
from dominoes.engine.rules import Variant, get_rules

DEFAULT_TARGET_SCORE = 100


class GameConfig:
    """Game configuration."""

    def __init__(
        self,
        variant=Variant.DRAW,
        num_players: int = 2,
        target_score: int = DEFAULT_TARGET_SCORE,
        tiles_per_player: int = TILES_PER_PLAYER,
        seed: Optional[int] = None,  # Fixes the shuffle sequence for replays/tests
    ):
        if not (MIN_PLAYERS <= num_players <= MAX_PLAYERS):
            raise InvalidPlayerCountError(
                f"{MIN_PLAYERS}-{MAX_PLAYERS} players required, got {num_players}")
        if target_score <= 0:
            raise ValueError(f"target_score must be positive, got {target_score}")
        if tiles_per_player < 1 or tiles_per_player * num_players > STANDARD_SET_SIZE:
            raise ValueError(
                f"cannot deal {tiles_per_player} tiles to {num_players} players")

        self.variant = Variant(variant)
        self.num_players = num_players
        self.target_score = target_score
        self.tiles_per_player = tiles_per_player
        self.seed = seed


class GameState:
    """Manages a complete game: a sequence of rounds sharing one tile set."""

    def __init__(self, config: GameConfig, player_names: List[str],
                 event_bus: EventBus):
        if len(player_names) != config.num_players:
            raise InvalidPlayerCountError(
                f"config expects {config.num_players} players, got {len(player_names)} names")
        self.config = config
        self.event_bus = event_bus
        self.rules = get_rules(config.variant)
        self.tile_set = TileSet(seed=config.seed)

        self.players = [PlayerState(i, name) for i, name in enumerate(player_names)]

        self.round_number = 0
        self.round_results: List[RoundResult] = []
        self.is_finished = False
        self.winner: Optional[int] = None
        self.final_scores: List[int] = []

    @property
    def round_label(self) -> str:
        return f"{self.config.variant.display_name} - Round {self.round_number}"

    @property
    def is_active(self) -> bool:
        return self.round_number > 0 and not self.is_finished

    def setup_round(self) -> RoundState:
        """Set up state for a new round."""
        self.round_number += 1
        round_state = RoundState(
            players=self.players,
            tile_set=self.tile_set,
            event_bus=self.event_bus,
            rules=self.rules,
            tiles_per_player=self.config.tiles_per_player,
        )
        round_state.round_number = self.round_number
        return round_state

    def advance_round(self, result: RoundResult):
        """Apply a finished round and check for the end of the game."""
        self.round_results.append(result)

        for i, change in enumerate(result.score_changes):
            if change:
                self.players[i].add_score(change)
                self.event_bus.emit(GameEvent(EventType.SCORE_CHANGE, {
                    "player": i,
                    "name": self.players[i].name,
                    "change": change,
                    "score": self.players[i].score,
                }))

        if result.winner is not None:
            self.players[result.winner].record_round_win()

        if self._check_game_end():
            self._finalize()

    def _check_game_end(self) -> bool:
        return any(p.score >= self.config.target_score for p in self.players)

    def game_winner(self) -> Optional[PlayerState]:
        """Highest score among players at or above the target.

        Several players can cross the target in the same round, so this is
        not necessarily the first to reach it. Equal scores keep seat order.
        """
        qualified = [p for p in self.players if p.score >= self.config.target_score]
        if not qualified:
            return None
        return max(qualified, key=lambda p: p.score)

    def _finalize(self):
        self.is_finished = True
        winner = self.game_winner()
        self.winner = winner.seat
        winner.record_game_win()
        self.final_scores = [p.score for p in self.players]

        self.event_bus.emit(GameEvent(EventType.GAME_END, {
            "winner": winner.seat,
            "scores": self.final_scores,
            "players": [(p.name, p.score) for p in self.players],
        }))

    def new_game(self):
        """Reset scores for a rematch with the same players."""
        for p in self.players:
            p.reset_score()
            p.reset_for_round()
        self.tile_set.reset()
        self.round_number = 0
        self.round_results = []
        self.is_finished = False
        self.winner = None
        self.final_scores = []


def run_game(config: GameConfig, player_names: List[str],
             get_player_action: Callable, event_bus: EventBus) -> GameState:
    """Run a complete game.

    Args:
        config: Game configuration
        player_names: Names for each player, in seat order
        get_player_action: Callable(player_idx, available_actions) -> Action
        event_bus: Event bus for UI updates

    Returns:
        Completed GameState
    """
    game = GameState(config, player_names, event_bus)

    game.event_bus.emit(GameEvent(EventType.GAME_START, {
        "config": config,
        "players": [(p.name, p.score) for p in game.players],
    }))

    while not game.is_finished:
        round_state = game.setup_round()
        result = run_round(round_state, get_player_action)
        game.advance_round(result)

    return game
