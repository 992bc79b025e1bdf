"""Move legality for Flows.

Legality rests on an optimistic reachability search: every empty cell is
treated as a wildcard that can route a flow from the side it entered to any
other side, while placed tiles only follow their fixed connections.  A party
(solo player or team) is *blocked* when none of its members can reach the
target edge even under that assumption.

A normal placement is illegal when it blocks a party that was not blocked
before, unless it wins the game on the spot or supermove is enabled.  Under
supermove a blocked player may instead replace an existing tile, provided
the replacement unblocks them.

Hypothetical tiles are passed as a one-tile :class:`OverlayBoard`; the real
board is never copied.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping

from hexflows.engine.models import PlayerId
from hexflows.games.flows.board import (
    Board,
    OverlayBoard,
    all_positions,
    check_position,
    edge_positions_with_directions,
    is_valid_position,
    neighbor,
)
from hexflows.games.flows.flows import compute_flows
from hexflows.games.flows.teams import (
    Party,
    get_parties,
    party_of,
    target_edge,
    winning_parties,
)
from hexflows.games.flows.tiles import flow_exit
from hexflows.games.flows.types import (
    Direction,
    FlowPlayer,
    HexPosition,
    PlacedTile,
    Team,
    TileType,
)

logger = logging.getLogger(__name__)

BoardLike = Mapping[HexPosition, PlacedTile]


# ------------------------------------------------------------------ #
#  Reachability
# ------------------------------------------------------------------ #


def shortest_path_length(
    board: BoardLike,
    player: FlowPlayer,
    goal_edge: int,
    radius: int,
) -> int | None:
    """Fewest cells a flow from *player*'s edge must cross to leave via *goal_edge*.

    Returns ``None`` when no route exists even with every empty cell acting
    as a wildcard.
    """
    targets = set(edge_positions_with_directions(goal_edge, radius))
    queue: deque[tuple[HexPosition, Direction, int]] = deque()
    seen: set[tuple[HexPosition, Direction]] = set()

    for pos, direction in edge_positions_with_directions(player.edge_position, radius):
        if (pos, direction) not in seen:
            seen.add((pos, direction))
            queue.append((pos, direction, 1))

    while queue:
        pos, entry, length = queue.popleft()
        tile = board.get(pos)
        if tile is None:
            exits = [d for d in Direction if d != entry]
        else:
            exit_dir = flow_exit(tile.tile_type, tile.rotation, entry)
            exits = [] if exit_dir is None else [exit_dir]

        for exit_dir in exits:
            if (pos, exit_dir) in targets:
                return length
            nxt = neighbor(pos, exit_dir)
            if not is_valid_position(nxt, radius):
                continue
            state = (nxt, exit_dir.opposite())
            if state in seen:
                continue
            seen.add(state)
            queue.append((nxt, state[1], length + 1))

    return None


def has_viable_path(
    board: BoardLike, player: FlowPlayer, goal_edge: int, radius: int,
) -> bool:
    return shortest_path_length(board, player, goal_edge, radius) is not None


def is_party_blocked(board: BoardLike, party: Party, radius: int) -> bool:
    return all(
        not has_viable_path(board, member, target_edge(member, party), radius)
        for member in party
    )


def _blocked_indices(board: BoardLike, parties: list[Party], radius: int) -> set[int]:
    return {i for i, party in enumerate(parties) if is_party_blocked(board, party, radius)}


def _party_index(player_id: PlayerId, parties: list[Party]) -> int:
    for i, party in enumerate(parties):
        if any(p.player_id == player_id for p in party):
            return i
    raise ValueError(f"Player {player_id} is not seated in this game")


def is_player_blocked(
    board: Board,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> bool:
    """True when *player*'s party has no route left. Teammates count jointly."""
    parties = get_parties(players, teams)
    party = party_of(player.player_id, parties)
    if party is None:
        raise ValueError(f"Player {player.player_id} is not seated in this game")
    return is_party_blocked(board, party, radius)


def get_blocked_parties(
    board: Board,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> list[Party]:
    parties = get_parties(players, teams)
    return [parties[i] for i in sorted(_blocked_indices(board, parties, radius))]


def get_blocked_players(
    board: Board,
    tile: PlacedTile,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> set[PlayerId]:
    """Every player whose party would be blocked once *tile* is on the board."""
    check_position(tile.position, radius)
    view = OverlayBoard(board, tile)
    parties = get_parties(players, teams)
    return {
        member.player_id
        for i in _blocked_indices(view, parties, radius)
        for member in parties[i]
    }


# ------------------------------------------------------------------ #
#  Placement
# ------------------------------------------------------------------ #


def completes_flow_victory(
    board: Board,
    tile: PlacedTile,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> bool:
    view = OverlayBoard(board, tile)
    flow_result = compute_flows(view, players, radius)
    return bool(winning_parties(flow_result, get_parties(players, teams), radius))


def is_legal_move(
    board: Board,
    tile: PlacedTile,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
    mover_id: PlayerId | None = None,
) -> bool:
    """Whether *tile* may be placed on its (empty) position.

    With *mover_id* given, a placement that only blocks the mover's own
    party is allowed.
    """
    check_position(tile.position, radius)
    if tile.position in board:
        return False
    parties = get_parties(players, teams)
    return _is_legal_placement(
        board, tile, players, parties, radius, supermove_enabled,
        blocked_before=None, exempt=_exempt_index(mover_id, parties),
    )


def _exempt_index(mover_id: PlayerId | None, parties: list[Party]) -> int | None:
    if mover_id is None:
        return None
    return _party_index(mover_id, parties)


def _is_legal_placement(
    board: Board,
    tile: PlacedTile,
    players: list[FlowPlayer],
    parties: list[Party],
    radius: int,
    supermove_enabled: bool,
    blocked_before: set[int] | None,
    exempt: int | None,
) -> bool:
    view = OverlayBoard(board, tile)
    if winning_parties(compute_flows(view, players, radius), parties, radius):
        return True
    if supermove_enabled:
        return True

    if blocked_before is None:
        blocked_before = _blocked_indices(board, parties, radius)
    for i, party in enumerate(parties):
        if i in blocked_before or i == exempt:
            continue
        if is_party_blocked(view, party, radius):
            return False
    return True


def find_legal_moves(
    board: Board,
    tile_type: TileType,
    rotation: int,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
    mover_id: PlayerId | None = None,
) -> list[HexPosition]:
    parties = get_parties(players, teams)
    exempt = _exempt_index(mover_id, parties)
    blocked_before = None if supermove_enabled else _blocked_indices(board, parties, radius)

    legal: list[HexPosition] = []
    for pos in all_positions(radius):
        if pos in board:
            continue
        tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
        if _is_legal_placement(
            board, tile, players, parties, radius, supermove_enabled,
            blocked_before=blocked_before, exempt=exempt,
        ):
            legal.append(pos)
    return legal


def can_tile_be_placed_anywhere(
    board: Board,
    tile_type: TileType,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
    mover_id: PlayerId | None = None,
) -> bool:
    parties = get_parties(players, teams)
    exempt = _exempt_index(mover_id, parties)
    blocked_before = None if supermove_enabled else _blocked_indices(board, parties, radius)

    for pos in all_positions(radius):
        if pos in board:
            continue
        for rotation in range(6):
            tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
            if _is_legal_placement(
                board, tile, players, parties, radius, supermove_enabled,
                blocked_before=blocked_before, exempt=exempt,
            ):
                return True
    return False


# ------------------------------------------------------------------ #
#  Supermove replacement
# ------------------------------------------------------------------ #


def would_replacement_unblock(
    board: Board,
    tile: PlacedTile,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> bool:
    """True when *player*'s party is blocked now and swapping in *tile* frees it."""
    check_position(tile.position, radius)
    if tile.position not in board:
        return False
    parties = get_parties(players, teams)
    party = parties[_party_index(player.player_id, parties)]
    if not is_party_blocked(board, party, radius):
        return False
    return not is_party_blocked(OverlayBoard(board, tile), party, radius)


def would_replacement_unblock_any_player(
    board: Board,
    tile: PlacedTile,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> bool:
    check_position(tile.position, radius)
    if tile.position not in board:
        return False
    parties = get_parties(players, teams)
    view = OverlayBoard(board, tile)
    return any(
        not is_party_blocked(view, parties[i], radius)
        for i in _blocked_indices(board, parties, radius)
    )


def is_legal_replacement(
    board: Board,
    tile: PlacedTile,
    mover: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_any_player: bool = False,
) -> bool:
    """Supermove check: replace the tile at ``tile.position`` with *tile*.

    Only a blocked mover may replace, and only with a tile that unblocks
    them.  With *supermove_any_player* the mover may instead free any
    blocked party.
    """
    if supermove_any_player:
        return would_replacement_unblock_any_player(board, tile, players, teams, radius)
    return would_replacement_unblock(board, tile, mover, players, teams, radius)


def has_unblocking_replacement(
    board: Board,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> bool:
    """Whether some tile of some type could replace a placed one and free *player*."""
    parties = get_parties(players, teams)
    party = parties[_party_index(player.player_id, parties)]
    if not is_party_blocked(board, party, radius):
        return False
    for pos, existing in board.items():
        for tile_type in TileType:
            for rotation in range(6):
                if tile_type == existing.tile_type and rotation == existing.rotation:
                    continue
                tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
                if not is_party_blocked(OverlayBoard(board, tile), party, radius):
                    return True
    return False


def has_any_legal_move(
    board: Board,
    tile_type: TileType,
    mover: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
    supermove_any_player: bool = False,
) -> bool:
    """Whether *mover* holding *tile_type* can place or (under supermove) replace."""
    if can_tile_be_placed_anywhere(
        board, tile_type, players, teams, radius,
        supermove_enabled=supermove_enabled, mover_id=mover.player_id,
    ):
        return True
    if not supermove_enabled:
        return False
    for pos in list(board):
        for rotation in range(6):
            tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
            if is_legal_replacement(
                board, tile, mover, players, teams, radius, supermove_any_player,
            ):
                logger.debug("Only replacements remain for %s", mover.player_id)
                return True
    return False
