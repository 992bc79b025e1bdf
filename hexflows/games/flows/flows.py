"""Flow propagation: which cells each player's flow reaches on the current board."""

from __future__ import annotations

from dataclasses import dataclass, field

from hexflows.engine.models import PlayerId
from hexflows.games.flows.board import (
    Board,
    edge_positions_with_directions,
    is_valid_position,
    neighbor,
)
from hexflows.games.flows.tiles import flow_exit
from hexflows.games.flows.types import Direction, FlowPlayer, HexPosition


@dataclass
class FlowResult:
    """Per-player flow coverage computed from a board snapshot.

    ``flow_edges`` maps a cell to the sides its placed tile carries flow
    through and the player owning each side.  ``exits`` holds the
    ``(cell, side)`` pairs where a player's flow left the board.
    """

    flows: dict[PlayerId, set[HexPosition]] = field(default_factory=dict)
    flow_edges: dict[HexPosition, dict[Direction, PlayerId]] = field(default_factory=dict)
    exits: dict[PlayerId, set[tuple[HexPosition, Direction]]] = field(default_factory=dict)

    def flow_edges_to_data(self) -> dict:
        return {
            pos.to_key(): {str(int(d)): pid for d, pid in sorted(sides.items())}
            for pos, sides in self.flow_edges.items()
        }


def trace_flow(
    board: Board,
    start: HexPosition,
    entry: Direction,
    radius: int,
    visited: set[tuple[HexPosition, Direction]] | None = None,
) -> tuple[list[tuple[HexPosition, Direction, Direction]], tuple[HexPosition, Direction] | None]:
    """Follow one flow from *start*, entering through side *entry*.

    Returns the ``(cell, entry, exit)`` steps taken and the off-board exit
    reached, if any.  *visited* is shared across walks of the same player so
    a state is only expanded once.
    """
    if visited is None:
        visited = set()
    steps: list[tuple[HexPosition, Direction, Direction]] = []
    pos, entry_dir = start, Direction(entry)

    while (pos, entry_dir) not in visited:
        visited.add((pos, entry_dir))
        tile = board.get(pos)
        if tile is None:
            break
        exit_dir = flow_exit(tile.tile_type, tile.rotation, entry_dir)
        if exit_dir is None:
            break
        steps.append((pos, entry_dir, exit_dir))
        nxt = neighbor(pos, exit_dir)
        if not is_valid_position(nxt, radius):
            return steps, (pos, exit_dir)
        pos, entry_dir = nxt, exit_dir.opposite()

    return steps, None


def compute_flows(
    board: Board,
    players: list[FlowPlayer],
    radius: int,
) -> FlowResult:
    result = FlowResult()

    for player in players:
        reached: set[HexPosition] = set()
        exits: set[tuple[HexPosition, Direction]] = set()
        visited: set[tuple[HexPosition, Direction]] = set()

        for pos, direction in edge_positions_with_directions(player.edge_position, radius):
            steps, exit_pair = trace_flow(board, pos, direction, radius, visited)
            for cell, entry_dir, exit_dir in steps:
                reached.add(cell)
                sides = result.flow_edges.setdefault(cell, {})
                # First owner of a side keeps it; shared tiles stay per-direction.
                sides.setdefault(entry_dir, player.player_id)
                sides.setdefault(exit_dir, player.player_id)
            if exit_pair is not None:
                exits.add(exit_pair)

        result.flows[player.player_id] = reached
        result.exits[player.player_id] = exits

    return result
