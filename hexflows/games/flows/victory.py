"""Victory conditions for Flows: flow wins, ties and constraint wins."""

from __future__ import annotations

import logging

from hexflows.games.flows.board import Board
from hexflows.games.flows.flows import FlowResult
from hexflows.games.flows.legality import (
    can_tile_be_placed_anywhere,
    has_unblocking_replacement,
    is_party_blocked,
)
from hexflows.games.flows.teams import Party, get_parties, winning_parties
from hexflows.games.flows.types import (
    FlowPlayer,
    Team,
    TileType,
    VictoryResult,
    WinType,
)

logger = logging.getLogger(__name__)


def check_flow_victory(
    flow_result: FlowResult,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> VictoryResult | None:
    """Win by completed flow.  Several parties finishing together is a tie."""
    parties = get_parties(players, teams)
    winners = winning_parties(flow_result, parties, radius)
    if not winners:
        return None
    winner_ids = [member.player_id for party in winners for member in party]
    win_type = WinType.TIE if len(winners) > 1 else WinType.FLOW
    return VictoryResult(winners=winner_ids, win_type=win_type)


def check_victory(
    board: Board,
    flow_result: FlowResult,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
) -> VictoryResult | None:
    """Evaluate the board after a change.

    A flow win always takes precedence.  Otherwise, if every party but one
    is eliminated (blocked with no supermove escape) and the survivor can
    still place some tile, the survivor wins by constraint.
    """
    result = check_flow_victory(flow_result, players, teams, radius)
    if result is not None:
        return result

    parties = get_parties(players, teams)
    if len(parties) < 2:
        return None

    survivors = [
        party for party in parties
        if not _is_eliminated(board, party, players, teams, radius, supermove_enabled)
    ]
    if len(survivors) != 1:
        return None

    survivor = survivors[0]
    if not _has_any_placement(board, survivor, players, teams, radius, supermove_enabled):
        return None

    winner_ids = [member.player_id for member in survivor]
    logger.info("Constraint victory for %s", ", ".join(winner_ids))
    return VictoryResult(winners=winner_ids, win_type=WinType.CONSTRAINT)


def _is_eliminated(
    board: Board,
    party: Party,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool,
) -> bool:
    if not is_party_blocked(board, party, radius):
        return False
    if not supermove_enabled:
        return True
    return not any(
        has_unblocking_replacement(board, member, players, teams, radius)
        for member in party
    )


def _has_any_placement(
    board: Board,
    party: Party,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool,
) -> bool:
    mover_id = party[0].player_id
    return any(
        can_tile_be_placed_anywhere(
            board, tile_type, players, teams, radius,
            supermove_enabled=supermove_enabled, mover_id=mover_id,
        )
        for tile_type in TileType
    )
