"""Randomised checks of flow tracing, placement legality and supermove.

Boards are random partial fillings of a radius-2 board; seatings cover
opposed, offset and three-player tables.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from hexflows.engine.models import PlayerId
from hexflows.games.flows.board import OverlayBoard, all_positions
from hexflows.games.flows.flows import compute_flows
from hexflows.games.flows.legality import (
    completes_flow_victory,
    find_legal_moves,
    get_blocked_parties,
    is_legal_move,
    is_legal_replacement,
    is_party_blocked,
    is_player_blocked,
)
from hexflows.games.flows.teams import get_parties
from hexflows.games.flows.tiles import flow_exit
from hexflows.games.flows.types import FlowPlayer, PlacedTile, TileType

RADIUS = 2
POSITIONS = all_positions(RADIUS)
SEATINGS = [(0, 3), (0, 2), (1, 3, 5)]


def _players(edges: tuple[int, ...]) -> list[FlowPlayer]:
    return [
        FlowPlayer(player_id=PlayerId(f"p{i + 1}"), edge_position=edge)
        for i, edge in enumerate(edges)
    ]


@st.composite
def boards(draw, max_tiles: int = 12) -> dict:
    cells = draw(st.lists(st.sampled_from(POSITIONS), max_size=max_tiles, unique=True))
    board = {}
    for pos in cells:
        tile_type = draw(st.sampled_from(list(TileType)))
        rotation = draw(st.integers(min_value=0, max_value=5))
        board[pos] = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
    return board


seatings = st.sampled_from(SEATINGS).map(_players)


@given(board=boards(), players=seatings)
@settings(max_examples=50, deadline=None)
def test_flows_do_not_depend_on_board_order(board: dict, players: list[FlowPlayer]) -> None:
    first = compute_flows(board, players, RADIUS)
    again = compute_flows(board, players, RADIUS)
    reordered = compute_flows(dict(reversed(list(board.items()))), players, RADIUS)

    for result in (again, reordered):
        assert result.flows == first.flows
        assert result.flow_edges == first.flow_edges
        assert result.exits == first.exits

    # Each player's reach is traced on its own, so seat order only moves side ownership.
    swapped = compute_flows(board, list(reversed(players)), RADIUS)
    assert swapped.flows == first.flows
    assert swapped.exits == first.exits
    assert swapped.flow_edges.keys() == first.flow_edges.keys()


@given(board=boards(), players=seatings)
@settings(max_examples=50, deadline=None)
def test_every_flow_side_belongs_to_a_placed_tile(board: dict, players: list[FlowPlayer]) -> None:
    result = compute_flows(board, players, RADIUS)
    seated = {p.player_id for p in players}

    for pos, sides in result.flow_edges.items():
        assert pos in board
        tile = board[pos]
        for side, owner in sides.items():
            assert owner in seated
            assert pos in result.flows[owner]
            partner = flow_exit(tile.tile_type, tile.rotation, side)
            assert partner is not None
            assert partner in sides

    for player_id, cells in result.flows.items():
        assert cells <= board.keys()
        for pos, side in result.exits[player_id]:
            assert pos in cells
            assert side in result.flow_edges[pos]


@given(
    board=boards(),
    players=seatings,
    tile_type=st.sampled_from(list(TileType)),
    rotation=st.integers(min_value=0, max_value=5),
    mover=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=40, deadline=None)
def test_relaxing_the_rules_never_makes_a_move_illegal(
    board: dict,
    players: list[FlowPlayer],
    tile_type: TileType,
    rotation: int,
    mover: int,
) -> None:
    mover_id = players[mover % len(players)].player_id
    strict = set(find_legal_moves(board, tile_type, rotation, players, [], RADIUS))
    exempt = set(find_legal_moves(
        board, tile_type, rotation, players, [], RADIUS, mover_id=mover_id,
    ))
    loose = set(find_legal_moves(
        board, tile_type, rotation, players, [], RADIUS,
        supermove_enabled=True, mover_id=mover_id,
    ))

    assert strict <= exempt <= loose
    assert loose == {pos for pos in POSITIONS if pos not in board}
    for pos in POSITIONS:
        if pos in board:
            continue
        tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
        assert is_legal_move(board, tile, players, [], RADIUS) == (pos in strict)


@given(
    board=boards(),
    players=seatings,
    tile_type=st.sampled_from(list(TileType)),
    rotation=st.integers(min_value=0, max_value=5),
)
@settings(max_examples=40, deadline=None)
def test_legal_placements_leave_open_parties_open(
    board: dict,
    players: list[FlowPlayer],
    tile_type: TileType,
    rotation: int,
) -> None:
    parties = get_parties(players, [])
    open_before = [party for party in parties if not is_party_blocked(board, party, RADIUS)]

    for pos in find_legal_moves(board, tile_type, rotation, players, [], RADIUS):
        tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
        if completes_flow_victory(board, tile, players, [], RADIUS):
            continue
        after = OverlayBoard(board, tile)
        for party in open_before:
            assert not is_party_blocked(after, party, RADIUS)


@given(board=boards(max_tiles=10), players=seatings)
@settings(max_examples=25, deadline=None)
def test_only_a_blocked_mover_may_replace(board: dict, players: list[FlowPlayer]) -> None:
    nobody_blocked = not get_blocked_parties(board, players, [], RADIUS)

    for mover in players:
        if is_player_blocked(board, mover, players, [], RADIUS):
            continue
        for pos in board:
            for tile_type in TileType:
                for rotation in range(6):
                    tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
                    assert not is_legal_replacement(board, tile, mover, players, [], RADIUS)
                    if nobody_blocked:
                        assert not is_legal_replacement(
                            board, tile, mover, players, [], RADIUS, supermove_any_player=True,
                        )


@given(board=boards(max_tiles=10), players=seatings)
@settings(max_examples=25, deadline=None)
def test_replacement_needs_an_occupied_cell(board: dict, players: list[FlowPlayer]) -> None:
    empty = [pos for pos in POSITIONS if pos not in board]
    for mover in players:
        for pos in empty:
            tile = PlacedTile(tile_type=TileType.NO_SHARPS, rotation=0, position=pos)
            assert not is_legal_replacement(board, tile, mover, players, [], RADIUS)
            assert not is_legal_replacement(
                board, tile, mover, players, [], RADIUS, supermove_any_player=True,
            )
