"""Move notation for recording Flows games.

A move reads ``P{player}{row letter}{column}T{tile}{orientation}``, e.g.
``P1A2T0N``.  Positions and orientations are written from the moving
player's point of view: row ``A`` is the row along their own edge and
columns count from their right.
"""

from __future__ import annotations

from hexflows.engine.models import PlayerId
from hexflows.games.flows.types import FlowPlayer, HexPosition, PlacedTile, TileType

ORIENTATION_NAMES = ["N", "NE", "SE", "S", "SW", "NW"]
TILE_TYPE_NAMES = ["T0", "T1", "T2", "T3"]


def position_to_notation(pos: HexPosition, player_edge: int, radius: int) -> str:
    row, col = pos.row, pos.col
    # One 60 degree turn per edge step brings the player's edge to row -R.
    for _ in range(player_edge % 6):
        row, col = -col, row + col
    row_letter = chr(ord("A") + row + radius)
    col_end = min(radius, radius - row)
    return f"{row_letter}{col_end - col + 1}"


def rotation_to_orientation(rotation: int, player_edge: int) -> str:
    # Orientation names are counted from the tile turned two steps past rotation 0.
    return ORIENTATION_NAMES[(rotation + 2 - player_edge + 3) % 6]


def tile_type_to_notation(tile_type: TileType) -> str:
    return TILE_TYPE_NAMES[tile_type]


def format_move_notation(
    tile: PlacedTile, player_number: int, player_edge: int, radius: int,
) -> str:
    position = position_to_notation(tile.position, player_edge, radius)
    tile_name = tile_type_to_notation(tile.tile_type)
    orientation = rotation_to_orientation(tile.rotation, player_edge)
    return f"P{player_number}{position}{tile_name}{orientation}"


def format_move_history(
    moves: list[tuple[PlayerId, PlacedTile]],
    players: list[FlowPlayer],
    radius: int,
) -> list[str]:
    """Notation for each ``(player_id, tile)`` move; unknown players map to ''."""
    seat = {p.player_id: i for i, p in enumerate(players)}
    notations: list[str] = []
    for player_id, tile in moves:
        index = seat.get(player_id)
        if index is None:
            notations.append("")
            continue
        notations.append(
            format_move_notation(tile, index + 1, players[index].edge_position, radius)
        )
    return notations


def format_game_record(
    moves: list[tuple[PlayerId, PlacedTile]],
    players: list[FlowPlayer],
    radius: int,
) -> str:
    lines = [f"Game: {len(players)}-player", ""]
    for number, notation in enumerate(format_move_history(moves, players, radius), start=1):
        lines.append(f"{number}. {notation}")
    return "\n".join(lines) + "\n"
