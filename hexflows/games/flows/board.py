"""Hex board geometry and board-state helpers for Flows.

The board is a diamond of radius R in axial coordinates: a cell is on the
board when ``|row|``, ``|col|`` and ``|row + col|`` are all at most R.  The six
board edges share their numbering with :class:`Direction`, so the edge facing
a player sitting on edge ``e`` is ``(e + 3) % 6``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from hexflows.games.flows.types import (
    DIRECTION_VECTORS,
    Direction,
    HexPosition,
    PlacedTile,
    TileType,
)

Board = dict[HexPosition, PlacedTile]

# Off-board sides of a cell on each edge, in enumeration order.
EDGE_OUTWARD_DIRECTIONS: list[tuple[Direction, Direction]] = [
    (Direction.SOUTH_WEST, Direction.SOUTH_EAST),
    (Direction.SOUTH_EAST, Direction.EAST),
    (Direction.EAST, Direction.NORTH_EAST),
    (Direction.NORTH_WEST, Direction.NORTH_EAST),
    (Direction.WEST, Direction.NORTH_WEST),
    (Direction.SOUTH_WEST, Direction.WEST),
]


def neighbor(pos: HexPosition, direction: int) -> HexPosition:
    d_row, d_col = DIRECTION_VECTORS[direction]
    return HexPosition(pos.row + d_row, pos.col + d_col)


def is_valid_position(pos: HexPosition, radius: int) -> bool:
    return (
        abs(pos.row) <= radius
        and abs(pos.col) <= radius
        and abs(pos.row + pos.col) <= radius
    )


def all_positions(radius: int) -> list[HexPosition]:
    """Every on-board cell, row by row from ``-radius`` upwards."""
    _check_radius(radius)
    positions: list[HexPosition] = []
    for row in range(-radius, radius + 1):
        col_start = max(-radius, -radius - row)
        col_end = min(radius, radius - row)
        for col in range(col_start, col_end + 1):
            positions.append(HexPosition(row, col))
    return positions


def valid_neighbors(pos: HexPosition, radius: int) -> list[HexPosition]:
    return [
        n for n in (neighbor(pos, d) for d in Direction)
        if is_valid_position(n, radius)
    ]


def direction_between(start: HexPosition, end: HexPosition) -> Direction | None:
    """Direction leading from *start* to the adjacent cell *end*, if any."""
    delta = (end.row - start.row, end.col - start.col)
    for direction in Direction:
        if DIRECTION_VECTORS[direction] == delta:
            return direction
    return None


def opposite_edge(edge: int) -> int:
    _check_edge(edge)
    return (edge + 3) % 6


def edge_positions(edge: int, radius: int) -> list[HexPosition]:
    """Boundary cells of *edge*, in a fixed clockwise order."""
    _check_edge(edge)
    _check_radius(radius)
    r = radius
    if edge == 0:
        return [HexPosition(-r, col) for col in range(0, r + 1)]
    if edge == 1:
        return [HexPosition(row, r) for row in range(-r, 1)]
    if edge == 2:
        return [HexPosition(row, r - row) for row in range(0, r + 1)]
    if edge == 3:
        return [HexPosition(r, col) for col in range(-r, 1)]
    if edge == 4:
        return [HexPosition(row, -r) for row in range(0, r + 1)]
    return [HexPosition(row, -r - row) for row in range(-r, 1)]


def edge_positions_with_directions(
    edge: int, radius: int,
) -> list[tuple[HexPosition, Direction]]:
    """Boundary cells of *edge* paired with each of their outward sides.

    Corner cells touch two edges; the shared side is kept by exactly one
    of them so every off-board side belongs to a single edge.
    """
    first, second = EDGE_OUTWARD_DIRECTIONS[edge % 6]
    pairs: list[tuple[HexPosition, Direction]] = []
    for pos in edge_positions(edge, radius):
        pairs.append((pos, first))
        pairs.append((pos, second))
    if edge < 3:
        return pairs[:-1]
    return pairs[1:]


# ------------------------------------------------------------------ #
#  Board state
# ------------------------------------------------------------------ #


class OverlayBoard(Mapping):
    """Read-only view of *board* with one hypothetical tile laid on top.

    The tile shadows whatever sits at its position, so the same view serves
    both placement and replacement previews without copying the board.
    """

    def __init__(self, board: Mapping[HexPosition, PlacedTile], tile: PlacedTile) -> None:
        self._board = board
        self._tile = tile

    def __getitem__(self, pos: HexPosition) -> PlacedTile:
        if pos == self._tile.position:
            return self._tile
        return self._board[pos]

    def __iter__(self) -> Iterator[HexPosition]:
        yield from self._board
        if self._tile.position not in self._board:
            yield self._tile.position

    def __len__(self) -> int:
        return len(self._board) + (0 if self._tile.position in self._board else 1)


def check_position(pos: HexPosition, radius: int) -> None:
    if not is_valid_position(pos, radius):
        raise ValueError(f"Position {tuple(pos)} is off a radius-{radius} board")


def place_tile(board: Board, tile: PlacedTile, radius: int) -> None:
    """Put *tile* on an empty cell. Mutates *board*."""
    check_position(tile.position, radius)
    if tile.position in board:
        raise ValueError(f"Position {tile.position.to_key()} is already occupied")
    board[tile.position] = tile


def replace_tile(board: Board, tile: PlacedTile, radius: int) -> PlacedTile:
    """Swap the tile at ``tile.position`` for *tile*; returns the displaced one."""
    check_position(tile.position, radius)
    displaced = board.get(tile.position)
    if displaced is None:
        raise ValueError(f"No tile to replace at {tile.position.to_key()}")
    board[tile.position] = tile
    return displaced


def board_from_data(tiles: dict) -> Board:
    """Rebuild a board from its ``game_data`` form (``{"row,col": {...}}``)."""
    board: Board = {}
    for key, data in tiles.items():
        pos = HexPosition.from_key(key)
        board[pos] = PlacedTile(
            tile_type=TileType(data["tile_type"]),
            rotation=data["rotation"],
            position=pos,
        )
    return board


def board_to_data(board: Board) -> dict:
    return {
        pos.to_key(): {"tile_type": int(tile.tile_type), "rotation": tile.rotation}
        for pos, tile in board.items()
    }


def _check_radius(radius: int) -> None:
    if radius < 1:
        raise ValueError(f"Board radius must be positive, got {radius}")


def _check_edge(edge: int) -> None:
    if not 0 <= edge <= 5:
        raise ValueError(f"Edge must be in 0..5, got {edge}")
