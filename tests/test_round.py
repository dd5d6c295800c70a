"""Tests for round.py - round flow and scoring"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dominoes.core.errors import IllegalPlayError, InvalidPlayerCountError
from dominoes.core.hand import Hand
from dominoes.core.layout import End
from dominoes.core.player_state import PlayerState
from dominoes.core.tile import Tile, make_tiles_from_string
from dominoes.core.tile_set import TileSet
from dominoes.engine.action import Action, ActionType
from dominoes.engine.event import EventBus, EventType
from dominoes.engine.round import RoundPhase, RoundState, run_round
from dominoes.engine.rules import BlockRules, DrawRules, Variant


def first_playable(player_idx, available):
    """Always play the first offered tile, letting the engine pick the end."""
    return Action(ActionType.PLAY, player_idx, tile=available.playable[0])


def make_round(num_players=2, rules=None, seed=1):
    players = [PlayerState(i, f"P{i}") for i in range(num_players)]
    return RoundState(
        players=players,
        tile_set=TileSet(seed=seed),
        event_bus=EventBus(),
        rules=rules or DrawRules(),
    )


def set_hands(rs, *hands):
    for p, tiles in zip(rs.players, hands):
        p.hand = Hand(make_tiles_from_string(tiles))


def record(rs, event_type):
    events = []
    rs.event_bus.subscribe(event_type, events.append)
    return events


class TestRoundSetup:
    def test_player_count(self):
        with pytest.raises(InvalidPlayerCountError):
            make_round(num_players=1)
        with pytest.raises(InvalidPlayerCountError):
            make_round(num_players=5)

    def test_tiles_per_player(self):
        players = [PlayerState(i, f"P{i}") for i in range(4)]
        for count in (0, 8):
            with pytest.raises(ValueError):
                RoundState(players=players, tile_set=TileSet(seed=1),
                           event_bus=EventBus(), rules=DrawRules(),
                           tiles_per_player=count)

    def test_deal(self):
        rs = make_round(num_players=3)
        deals = record(rs, EventType.DEAL)
        rs.deal_tiles()
        for p in rs.players:
            assert p.hand.size == 7
        assert rs.tile_set.remaining == 28 - 21
        assert rs.layout.is_empty
        assert len(deals) == 1
        assert deals[0].data["boneyard_remaining"] == 7

    def test_four_players_empty_boneyard(self):
        rs = make_round(num_players=4)
        rs.deal_tiles()
        assert rs.tile_set.is_empty
        all_tiles = [t for p in rs.players for t in p.hand.tiles]
        assert len(set(all_tiles)) == 28


class TestOpening:
    def test_highest_double(self):
        rs = make_round(num_players=3)
        set_hands(rs, "22 56", "55 01", "66 12")
        assert rs.find_opening() == (2, Tile(6, 6))

    def test_no_doubles(self):
        rs = make_round()
        set_hands(rs, "56 01", "36 12")
        assert rs.find_opening() == (0, Tile(5, 6))

    def test_no_doubles_tie_goes_to_seat_order(self):
        rs = make_round()
        set_hands(rs, "01 16", "25 02")
        assert rs.find_opening() == (0, Tile(1, 6))

    def test_play_opening(self):
        rs = make_round()
        set_hands(rs, "22 13", "55 01")
        played = record(rs, EventType.TILE_PLAYED)
        seat = rs.play_opening()
        assert seat == 1
        assert Tile(5, 5) not in rs.players[1].hand
        assert rs.layout.both_ends == (5, 5)
        assert rs.phase == RoundPhase.TURN
        assert played[0].data["is_opening"]
        assert played[0].data["end"] is None


class TestPlay:
    def test_process_play_auto(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "62 13", "01")
        played = record(rs, EventType.TILE_PLAYED)
        rs.process_play(0, Tile(2, 6))
        assert rs.layout.left_end == 2
        assert rs.players[0].hand.size == 1
        assert played[0].data["end"] == End.LEFT

    def test_process_play_chosen_end(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "62", "01")
        rs.process_play(0, Tile(6, 2), End.RIGHT)
        assert rs.layout.both_ends == (6, 2)

    def test_tile_not_held(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "13", "01")
        with pytest.raises(IllegalPlayError):
            rs.process_play(0, Tile(6, 1))

    def test_tile_does_not_fit(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "13", "01")
        with pytest.raises(IllegalPlayError):
            rs.process_play(0, Tile(1, 3))
        assert rs.players[0].hand.size == 1
        assert rs.layout.tile_count == 1

    def test_wrong_end(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 3))
        set_hands(rs, "62", "01")
        with pytest.raises(IllegalPlayError):
            rs.process_play(0, Tile(6, 2), End.RIGHT)
        assert Tile(6, 2) in rs.players[0].hand

    def test_play_resets_passes(self):
        rs = make_round(rules=BlockRules())
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "61", "01")
        rs.process_pass(1)
        rs.process_play(0, Tile(6, 1))
        assert rs.consecutive_passes == 0


class TestDrawRules:
    def test_draw_until_playable(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        rs.tile_set.remove(Tile(6, 6))
        drawn = record(rs, EventType.TILE_DRAWN)
        tile = rs.rules.resolve_no_play(rs, 0)
        assert tile is not None
        assert tile.connects_to(6)
        hand = rs.players[0].hand
        assert tile in hand
        assert hand.size == len(drawn)
        for t in hand.tiles:
            if t != tile:
                assert not t.connects_to(6)

    def test_empty_boneyard(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        rs.tile_set.deal(rs.tile_set.remaining)
        assert rs.rules.resolve_no_play(rs, 0) is None
        assert rs.players[0].hand.is_empty

    def test_blocked(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "12", "34")
        assert not rs.is_blocked()
        rs.tile_set.deal(rs.tile_set.remaining)
        assert rs.is_blocked()
        set_hands(rs, "12", "61")
        assert not rs.is_blocked()


class TestBlockRules:
    def test_pass_instead_of_draw(self):
        rs = make_round(rules=BlockRules())
        assert rs.rules.resolve_no_play(rs, 0) is None
        assert rs.tile_set.remaining == 28

    def test_blocked_after_all_pass(self):
        rs = make_round(num_players=3, rules=BlockRules())
        rs.layout.play_first(Tile(6, 6))
        set_hands(rs, "12", "34", "05")
        passes = record(rs, EventType.PASS)
        rs.process_pass(0)
        rs.process_pass(1)
        assert not rs.is_blocked()
        rs.process_pass(2)
        assert rs.is_blocked()
        assert [e.data["consecutive_passes"] for e in passes] == [1, 2, 3]


class TestScoring:
    def test_round_win(self):
        rs = make_round(num_players=4)
        set_hands(rs, "", "46", "34", "12")
        won = record(rs, EventType.ROUND_WON)
        rs.process_round_win(0)
        result = rs.result
        assert result.winner == 0
        assert result.points == 20
        assert result.score_changes == [20, 0, 0, 0]
        assert not result.is_blocked
        assert rs.is_finished
        assert won[0].data["points"] == 20

    def test_blocked_lowest_wins(self):
        rs = make_round(num_players=3, rules=BlockRules())
        set_hands(rs, "66", "23", "45")
        rs.process_blocked()
        result = rs.result
        assert result.is_blocked
        assert result.winner == 1
        assert result.hand_totals == [12, 5, 9]
        assert result.points == 16
        assert result.score_changes == [0, 16, 0]

    def test_blocked_tie_first_seat(self):
        rs = make_round(num_players=3)
        set_hands(rs, "23", "14", "45")
        rs.process_blocked()
        assert rs.result.winner == 0
        assert rs.result.points == 9

    def test_blocked_equal_hands_score_zero(self):
        rs = make_round()
        set_hands(rs, "23", "14")
        rs.process_blocked()
        assert rs.result.winner == 0
        assert rs.result.points == 0

    def test_empty_hand_beats_blocked(self):
        rs = make_round()
        rs.layout.play_first(Tile(6, 6))
        rs.tile_set.deal(rs.tile_set.remaining)
        set_hands(rs, "", "12")
        assert rs.check_round_end(0)
        assert not rs.result.is_blocked
        assert rs.result.winner == 0
        assert rs.result.points == 3


class TestRunRound:
    def _check_conservation(self, rs):
        held = sum(p.hand.size for p in rs.players)
        assert held + rs.layout.tile_count + rs.tile_set.remaining == 28

    def test_draw_round_completes(self):
        rs = make_round(seed=3)
        result = run_round(rs, first_playable)
        assert result is not None
        assert result.variant == Variant.DRAW
        assert result.winner in (0, 1)
        assert result.score_changes[result.winner] == result.points
        self._check_conservation(rs)
        if not result.is_blocked:
            assert rs.players[result.winner].hand.is_empty

    def test_block_round_completes(self):
        rs = make_round(num_players=3, rules=BlockRules(), seed=5)
        result = run_round(rs, first_playable)
        assert result.variant == Variant.BLOCK
        # Boneyard is never touched in Block
        assert rs.tile_set.remaining == 28 - 21
        self._check_conservation(rs)

    def test_many_seeds(self):
        for seed in range(20):
            for rules in (DrawRules(), BlockRules()):
                rs = make_round(num_players=2 + seed % 3, rules=rules, seed=seed)
                result = run_round(rs, first_playable)
                assert rs.is_finished
                assert rs.phase == RoundPhase.RESOLVED
                assert result.points >= 0
                self._check_conservation(rs)

    def test_turns_alternate(self):
        rs = make_round(num_players=3, seed=2)
        turns = record(rs, EventType.TURN_START)
        run_round(rs, first_playable)
        seats = [e.data["player"] for e in turns]
        for a, b in zip(seats, seats[1:]):
            assert b == (a + 1) % 3

    def test_provider_must_play(self):
        rs = make_round(seed=1)

        def refuse(player_idx, available):
            if available.forced:
                return first_playable(player_idx, available)
            return Action(ActionType.PASS, player_idx)

        with pytest.raises(IllegalPlayError):
            run_round(rs, refuse)


class StackedTileSet(TileSet):
    """Tile set whose shuffle lays out a fixed order (tail is dealt first)."""

    def __init__(self, order):
        self._order = order
        super().__init__(seed=0)

    def shuffle(self):
        self._tiles = list(self._order)


class TestForcedDrawEnd:
    # Seat 0 holds every double and opens 6|6. Seat 1 holds no six, so it
    # draws 0|6 first, which fits both open sixes.
    ORDER = make_tiles_from_string(
        "45 35 34 25 24 23 15 14 56 46 36 26 16 06"  # boneyard, 06 drawn first
        " 13 12 05 04 03 02 01"                       # seat 1
        " 00 55 44 33 22 11 66")                      # seat 0

    def test_provider_picks_end_for_drawn_tile(self):
        players = [PlayerState(i, f"P{i}") for i in range(2)]
        rs = RoundState(players=players, tile_set=StackedTileSet(self.ORDER),
                        event_bus=EventBus(), rules=DrawRules())
        played = record(rs, EventType.TILE_PLAYED)
        drawn = record(rs, EventType.TILE_DRAWN)
        calls = []

        def provider(player_idx, available):
            calls.append((player_idx, available.forced, list(available.playable)))
            action = first_playable(player_idx, available)
            if available.forced:
                action.end = End.RIGHT
            return action

        run_round(rs, provider)

        assert rs.opening_tile == Tile(6, 6)
        assert drawn[0].data["player"] == 1
        assert drawn[0].data["tile"] == Tile(0, 6)
        assert calls[0] == (1, True, [Tile(0, 6)])

        move = played[1].data
        assert move["player"] == 1
        assert move["tile"] == Tile(0, 6)
        assert move["end"] == End.RIGHT
        assert move["left_end"] == 6
        assert move["right_end"] == 0
