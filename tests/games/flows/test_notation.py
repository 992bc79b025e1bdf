"""Tests for Flows move notation."""

from __future__ import annotations

from hexflows.engine.models import PlayerId
from hexflows.games.flows.board import all_positions
from hexflows.games.flows.notation import (
    format_game_record,
    format_move_history,
    format_move_notation,
    position_to_notation,
    rotation_to_orientation,
    tile_type_to_notation,
)
from hexflows.games.flows.types import FlowPlayer, HexPosition, PlacedTile, TileType


def _tile(row: int, col: int, tile_type: TileType, rotation: int) -> PlacedTile:
    return PlacedTile(tile_type=tile_type, rotation=rotation, position=HexPosition(row, col))


class TestPositions:
    def test_own_edge_is_row_a(self) -> None:
        assert position_to_notation(HexPosition(-3, 3), 0, 3) == "A1"
        assert position_to_notation(HexPosition(-3, 0), 0, 3) == "A4"

    def test_center(self) -> None:
        assert position_to_notation(HexPosition(0, 0), 0, 3) == "D4"

    def test_far_side_player_sees_board_turned(self) -> None:
        assert position_to_notation(HexPosition(3, -3), 3, 3) == "A1"
        assert position_to_notation(HexPosition(3, 0), 3, 3) == "A4"

    def test_every_cell_has_a_distinct_name(self) -> None:
        for edge in range(6):
            names = {position_to_notation(p, edge, 3) for p in all_positions(3)}
            assert len(names) == 37


class TestMoves:
    def test_tile_names(self) -> None:
        assert [tile_type_to_notation(t) for t in TileType] == ["T0", "T1", "T2", "T3"]

    def test_orientation_is_relative_to_edge(self) -> None:
        assert rotation_to_orientation(1, 0) == "N"
        assert rotation_to_orientation(4, 3) == "N"
        assert rotation_to_orientation(4, 0) == "S"
        assert rotation_to_orientation(3, 4) == "SW"
        assert [rotation_to_orientation(4, edge) for edge in range(6)] == [
            "S", "SE", "NE", "N", "NW", "SW",
        ]

    def test_straight_tile_reads_along_its_flow(self) -> None:
        # TWO_SHARPS at rotation 5 runs straight from SW to NE.
        tile = _tile(-3, 0, TileType.TWO_SHARPS, 5)
        assert format_move_notation(tile, 1, 0, 3) == "P1A4T2SW"

    def test_single_move(self) -> None:
        tile = _tile(-3, 0, TileType.TWO_SHARPS, 3)
        assert format_move_notation(tile, 1, 0, 3) == "P1A4T2SE"

    def test_history_and_record(self) -> None:
        players = [
            FlowPlayer(player_id=PlayerId("p1"), edge_position=0),
            FlowPlayer(player_id=PlayerId("p2"), edge_position=3),
        ]
        moves = [
            (PlayerId("p1"), _tile(-3, 0, TileType.TWO_SHARPS, 3)),
            (PlayerId("p2"), _tile(3, 0, TileType.NO_SHARPS, 0)),
            (PlayerId("ghost"), _tile(0, 0, TileType.NO_SHARPS, 0)),
        ]
        assert format_move_history(moves, players, 3) == ["P1A4T2SE", "P2A4T0SE", ""]
        record = format_game_record(moves[:2], players, 3)
        assert record == "Game: 2-player\n\n1. P1A4T2SE\n2. P2A4T0SE\n"
