"""Game logger - records complete game flow for replay and debugging."""

import json
import os
import uuid
from datetime import datetime
from typing import List, Optional

from dominoes.core.tile import Tile, tile_to_simple_str
from dominoes.engine.action import ActionType
from dominoes.engine.event import EventBus, EventType, GameEvent

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__)))), "logs")


def _tiles_str(tiles) -> List[str]:
    return [tile_to_simple_str(t) for t in tiles]


class GameLogger:
    """Records complete game data to JSON log files."""

    def __init__(self, player_names: List[str], config_info: dict,
                 log_dir: Optional[str] = None):
        self.session_id = uuid.uuid4().hex[:12]
        self.timestamp = datetime.now().isoformat()
        self.player_names = player_names
        self.config_info = config_info
        self.log_dir = log_dir or LOG_DIR

        self.rounds: List[dict] = []
        self._current_round: Optional[dict] = None

    def subscribe_events(self, event_bus: EventBus):
        """Subscribe to engine events for automatic logging."""
        event_bus.subscribe(EventType.DEAL, self._on_deal)
        event_bus.subscribe(EventType.TILE_PLAYED, self._on_play)
        event_bus.subscribe(EventType.TILE_DRAWN, self._on_draw)
        event_bus.subscribe(EventType.PASS, self._on_pass)

    def unsubscribe_events(self, event_bus: EventBus):
        """Detach from the bus once the game has been saved."""
        event_bus.unsubscribe(EventType.DEAL, self._on_deal)
        event_bus.unsubscribe(EventType.TILE_PLAYED, self._on_play)
        event_bus.unsubscribe(EventType.TILE_DRAWN, self._on_draw)
        event_bus.unsubscribe(EventType.PASS, self._on_pass)

    def end_round(self, result):
        """Log the round result."""
        if self._current_round is None:
            return

        self._current_round["result"] = {
            "winner": self.player_names[result.winner] if result.winner is not None else None,
            "is_blocked": result.is_blocked,
            "points": result.points,
            "hand_totals": {
                self.player_names[i]: total
                for i, total in enumerate(result.hand_totals)
            },
            "score_changes": {
                self.player_names[i]: change
                for i, change in enumerate(result.score_changes)
            },
        }
        self._current_round = None

    def save(self, final_scores: dict) -> str:
        """Save the complete game log to a JSON file."""
        log_data = {
            "session_id": self.session_id,
            "timestamp": self.timestamp,
            "config": self.config_info,
            "players": self.player_names,
            "final_scores": final_scores,
            "rounds": self.rounds,
        }

        os.makedirs(self.log_dir, exist_ok=True)
        filepath = os.path.join(self.log_dir, f"game_{self.session_id}.json")

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(log_data, f, ensure_ascii=False, indent=2)

        return filepath

    # --- Event handlers ---

    def _on_deal(self, event: GameEvent):
        """Called after the deal - records boneyard order and initial hands."""
        players = event.data["players"]
        tile_set = event.data["tile_set"]

        round_data = {
            "round_id": uuid.uuid4().hex[:8],
            "boneyard": _tiles_str(tile_set.tiles),
            "initial_hands": {},
            "actions": [],
            "result": None,
        }
        for i, p in enumerate(players):
            round_data["initial_hands"][self.player_names[i]] = {
                "seat": i,
                "tiles": _tiles_str(p.hand.tiles),
            }

        self._current_round = round_data
        self.rounds.append(round_data)

    def _log_action(self, action_type: str, player: int, **kwargs):
        """Log a game action."""
        if self._current_round is None:
            return

        entry = {
            "action": action_type,
            "player": self.player_names[player] if 0 <= player < len(self.player_names) else "?",
            "seat": player,
        }
        for key, val in kwargs.items():
            if isinstance(val, Tile):
                entry[key] = tile_to_simple_str(val)
            else:
                entry[key] = val

        self._current_round["actions"].append(entry)

    def _on_play(self, event: GameEvent):
        d = event.data
        end = d.get("end")
        self._log_action(ActionType.PLAY.value, d["player"],
                         tile=d["tile"],
                         end=end.value if end is not None else None,
                         is_opening=d.get("is_opening", False),
                         ends=[d["left_end"], d["right_end"]])

    def _on_draw(self, event: GameEvent):
        d = event.data
        self._log_action(ActionType.DRAW.value, d["player"], tile=d["tile"],
                         boneyard_remaining=d["boneyard_remaining"])

    def _on_pass(self, event: GameEvent):
        d = event.data
        self._log_action(ActionType.PASS.value, d["player"],
                         consecutive_passes=d["consecutive_passes"])
