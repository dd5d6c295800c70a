"""Player state tracking during a game."""

from .hand import Hand


class PlayerState:
    """Complete state for one player across a game.

    Attributes:
        seat: Seat index (0-3, fixed; also the turn rotation order)
        name: Display name
        score: Cumulative score for the current game
        rounds_won: Rounds won in the current game
        games_won: Games won across rematches
        hand: Current hand (replaced each round)
    """

    def __init__(self, seat: int, name: str, score: int = 0):
        self.seat = seat
        self.name = name
        self.score = score
        self.rounds_won = 0
        self.games_won = 0
        self.hand = Hand()

    def reset_for_round(self):
        """Start a round with an empty hand. Score is kept."""
        self.hand = Hand()

    def add_score(self, delta: int):
        """Accumulate points. Clamping of awards happens at scoring time."""
        self.score += delta

    def reset_score(self):
        """Zero the score and round count for a new game."""
        self.score = 0
        self.rounds_won = 0

    def record_round_win(self):
        self.rounds_won += 1

    def record_game_win(self):
        self.games_won += 1

    @property
    def hand_total(self) -> int:
        return self.hand.total_pips()

    def __repr__(self):
        return (f"PlayerState({self.name}, score={self.score}, "
                f"hand={self.hand.size}, rounds_won={self.rounds_won})")
