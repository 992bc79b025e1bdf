"""Tests for Flows victory conditions."""

from __future__ import annotations

from hexflows.engine.models import PlayerId
from hexflows.games.flows.flows import compute_flows
from hexflows.games.flows.types import (
    FlowPlayer,
    HexPosition,
    PlacedTile,
    Team,
    TileType,
    WinType,
)
from hexflows.games.flows.victory import check_flow_victory, check_victory

RADIUS = 3


def _player(pid: str, edge: int) -> FlowPlayer:
    return FlowPlayer(player_id=PlayerId(pid), edge_position=edge)


def _column() -> dict:
    return {
        HexPosition(r, 0): PlacedTile(
            tile_type=TileType.TWO_SHARPS, rotation=5, position=HexPosition(r, 0),
        )
        for r in range(-3, 4)
    }


def _pocket() -> dict:
    return {
        HexPosition(-2, c): PlacedTile(
            tile_type=TileType.THREE_SHARPS, rotation=0, position=HexPosition(-2, c),
        )
        for c in range(-1, 4)
    }


def _victory(board: dict, players: list[FlowPlayer], teams: list[Team], **kwargs):
    flow_result = compute_flows(board, players, RADIUS)
    return check_victory(board, flow_result, players, teams, RADIUS, **kwargs)


class TestFlowVictory:
    def test_no_winner_on_empty_board(self, opposed_pair) -> None:
        result = check_flow_victory(compute_flows({}, opposed_pair, RADIUS), opposed_pair, [], RADIUS)
        assert result is None

    def test_single_player_victory(self) -> None:
        players = [_player("p1", 0), _player("p2", 1)]
        result = _victory(_column(), players, [])
        assert result is not None
        assert result.winners == ["p1"]
        assert result.win_type == WinType.FLOW

    def test_shared_path_is_a_tie(self, opposed_pair) -> None:
        # A path between opposite edges completes both players' flows at once.
        result = _victory(_column(), opposed_pair, [])
        assert result is not None
        assert result.win_type == WinType.TIE
        assert set(result.winners) == {"p1", "p2"}

    def test_team_victory(self) -> None:
        players = [_player("p1", 0), _player("p2", 1), _player("p3", 3), _player("p4", 4)]
        teams = [
            Team(player1_id=PlayerId("p1"), player2_id=PlayerId("p3")),
            Team(player1_id=PlayerId("p2"), player2_id=PlayerId("p4")),
        ]
        result = _victory(_column(), players, teams)
        assert result is not None
        assert result.winners == ["p1", "p3"]
        assert result.win_type == WinType.FLOW

    def test_team_aims_at_partner_edge(self) -> None:
        # Teammates on edges 0 and 1 do not win by reaching edge 3.
        players = [_player("p1", 0), _player("p2", 1), _player("p3", 2), _player("p4", 3)]
        teams = [
            Team(player1_id=PlayerId("p1"), player2_id=PlayerId("p2")),
            Team(player1_id=PlayerId("p3"), player2_id=PlayerId("p4")),
        ]
        flow_result = compute_flows(_column(), players, RADIUS)
        assert check_flow_victory(flow_result, players, teams, RADIUS) is None

    def test_wall_between_partners_hands_the_other_team_a_win(self) -> None:
        # The column separates edge 2 from edge 3, so p3 and p4 can never meet.
        players = [_player("p1", 0), _player("p2", 1), _player("p3", 2), _player("p4", 3)]
        teams = [
            Team(player1_id=PlayerId("p1"), player2_id=PlayerId("p2")),
            Team(player1_id=PlayerId("p3"), player2_id=PlayerId("p4")),
        ]
        result = _victory(_column(), players, teams)
        assert result is not None
        assert result.winners == ["p1", "p2"]
        assert result.win_type == WinType.CONSTRAINT

    def test_incomplete_path(self, opposed_pair) -> None:
        board = _column()
        del board[HexPosition(3, 0)]
        assert _victory(board, opposed_pair, []) is None


class TestConstraintVictory:
    def test_last_unblocked_party_wins(self, offset_pair) -> None:
        result = _victory(_pocket(), offset_pair, [])
        assert result is not None
        assert result.winners == ["p2"]
        assert result.win_type == WinType.CONSTRAINT

    def test_supermove_keeps_blocked_player_alive(self, offset_pair) -> None:
        assert _victory(_pocket(), offset_pair, [], supermove_enabled=True) is None

    def test_everyone_blocked_is_not_a_win(self, opposed_pair) -> None:
        midline = {
            HexPosition(0, c): PlacedTile(
                tile_type=TileType.THREE_SHARPS, rotation=0, position=HexPosition(0, c),
            )
            for c in range(-3, 4)
        }
        assert _victory(midline, opposed_pair, []) is None

    def test_two_survivors_keep_playing(self) -> None:
        players = [_player("p1", 0), _player("p2", 2), _player("p3", 4)]
        assert _victory(_pocket(), players, []) is None
