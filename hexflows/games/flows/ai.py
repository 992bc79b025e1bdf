"""One-ply move search for Flows bots.

Every legal placement (and, for a blocked player under supermove, every
unblocking replacement) is scored on the board it would produce.  Boards that
end or wall off a route get fixed scores, best first:

    WIN_SCORE           our party completes a flow
    SELF_BLOCK_BONUS    we are walled in but supermove can dig us out
    BLOCKING_PENALTY    some other party has no route left
    SELF_BLOCK_PENALTY  we are walled in and supermove is off
    LOSS_SCORE          another party completes a flow

A completed flow decides the score outright; among the walled-in cases the
lowest one counts.

Any other board scores

    OWN_PATH_WEIGHT * own_path**2 + ENEMY_PATH_WEIGHT * enemy_path**2

where ``own_path`` is the shortest wildcard route for the bot's party and
``enemy_path`` the shortest route among all other parties.  A winning
move is always taken first.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass

from hexflows.engine.errors import InvariantViolationError
from hexflows.games.flows.board import Board, OverlayBoard, opposite_edge
from hexflows.games.flows.flows import compute_flows
from hexflows.games.flows.legality import (
    find_legal_moves,
    get_blocked_parties,
    is_legal_replacement,
    is_player_blocked,
    shortest_path_length,
)
from hexflows.games.flows.teams import (
    Party,
    get_parties,
    party_of,
    target_edge,
    winning_parties,
)
from hexflows.games.flows.types import (
    FlowPlayer,
    HexPosition,
    PlacedTile,
    Team,
    TileType,
)

logger = logging.getLogger(__name__)

WIN_SCORE = 100000
LOSS_SCORE = -200000
SELF_BLOCK_BONUS = 25000
BLOCKING_PENALTY = -75000
SELF_BLOCK_PENALTY = -100000
OWN_PATH_WEIGHT = -2
ENEMY_PATH_WEIGHT = 1


@dataclass
class MoveCandidate:
    position: HexPosition
    rotation: int
    is_replacement: bool
    score: float
    is_winning_move: bool = False


def _party_distance(
    board: Mapping[HexPosition, PlacedTile], party: Party, radius: int,
) -> int | None:
    best: int | None = None
    for member in party:
        length = shortest_path_length(board, member, target_edge(member, party), radius)
        if length is not None and (best is None or length < best):
            best = length
    return best


def evaluate_position(
    board: Mapping[HexPosition, PlacedTile],
    ai_player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_enabled: bool = False,
) -> float:
    parties = get_parties(players, teams)
    own_party = party_of(ai_player.player_id, parties)
    if own_party is None:
        raise ValueError(f"Player {ai_player.player_id} is not seated in this game")

    winners = winning_parties(compute_flows(board, players, radius), parties, radius)
    if own_party in winners:
        return WIN_SCORE
    if winners:
        return LOSS_SCORE

    own = _party_distance(board, own_party, radius)
    if own is None and not supermove_enabled:
        return SELF_BLOCK_PENALTY

    enemies = [_party_distance(board, party, radius) for party in parties if party != own_party]
    if None in enemies:
        return BLOCKING_PENALTY
    if own is None:
        return SELF_BLOCK_BONUS

    enemy = min(enemies, default=0)
    return OWN_PATH_WEIGHT * own * own + ENEMY_PATH_WEIGHT * enemy * enemy


def generate_move_candidates(
    board: Board,
    tile_type: TileType,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    supermove_enabled: bool,
    radius: int,
    single_supermove: bool = False,
    supermove_any_player: bool = False,
) -> list[MoveCandidate]:
    candidates: list[MoveCandidate] = []

    for rotation in range(6):
        for pos in find_legal_moves(
            board, tile_type, rotation, players, teams, radius,
            supermove_enabled=supermove_enabled, mover_id=player.player_id,
        ):
            tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
            score = evaluate_position(
                OverlayBoard(board, tile), player, players, teams, radius,
                supermove_enabled=supermove_enabled,
            )
            candidates.append(MoveCandidate(
                position=pos,
                rotation=rotation,
                is_replacement=False,
                score=score,
                is_winning_move=score >= WIN_SCORE,
            ))

    if supermove_enabled and _may_replace(board, player, players, teams, radius, supermove_any_player):
        candidates.extend(_replacement_candidates(
            board, tile_type, player, players, teams, radius,
            single_supermove, supermove_any_player,
        ))

    return candidates


def _may_replace(
    board: Board,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    supermove_any_player: bool,
) -> bool:
    if supermove_any_player:
        return bool(get_blocked_parties(board, players, teams, radius))
    return is_player_blocked(board, player, players, teams, radius)


def _replacement_candidates(
    board: Board,
    tile_type: TileType,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
    single_supermove: bool,
    supermove_any_player: bool,
) -> list[MoveCandidate]:
    candidates: list[MoveCandidate] = []

    for pos, existing in list(board.items()):
        for rotation in range(6):
            tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
            if not is_legal_replacement(
                board, tile, player, players, teams, radius, supermove_any_player,
            ):
                continue

            replaced = OverlayBoard(board, tile)
            score = evaluate_position(
                replaced, player, players, teams, radius, supermove_enabled=True,
            )
            if score < WIN_SCORE and not single_supermove:
                # The displaced tile must be placed right away, without supermove.
                followup = _best_followup_score(
                    replaced, existing.tile_type, player, players, teams, radius,
                )
                if followup is not None:
                    score = followup

            candidates.append(MoveCandidate(
                position=pos,
                rotation=rotation,
                is_replacement=True,
                score=score,
                is_winning_move=score >= WIN_SCORE,
            ))

    return candidates


def _best_followup_score(
    board: OverlayBoard,
    tile_type: TileType,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    radius: int,
) -> float | None:
    best: float | None = None
    for rotation in range(6):
        for pos in find_legal_moves(
            board, tile_type, rotation, players, teams, radius,
            mover_id=player.player_id,
        ):
            tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
            score = evaluate_position(
                OverlayBoard(board, tile), player, players, teams, radius,
                supermove_enabled=True,
            )
            if best is None or score > best:
                best = score
    return best


def select_ai_move(
    board: Board,
    tile_type: TileType,
    player: FlowPlayer,
    players: list[FlowPlayer],
    teams: list[Team],
    supermove_enabled: bool,
    radius: int,
    single_supermove: bool = False,
    supermove_any_player: bool = False,
    rng: random.Random | None = None,
) -> MoveCandidate:
    """Best candidate for *player*; an immediate win is always preferred.

    Raises InvariantViolationError when nothing is playable: the turn loop
    declares a winner before a player can be left without moves.
    """
    candidates = generate_move_candidates(
        board, tile_type, player, players, teams, supermove_enabled, radius,
        single_supermove=single_supermove,
        supermove_any_player=supermove_any_player,
    )
    if not candidates:
        logger.error(
            "No legal move for %s holding %s on a %d-tile board",
            player.player_id, tile_type.name, len(board),
        )
        raise InvariantViolationError(
            f"No legal move for {player.player_id} holding {tile_type.name}"
        )

    for candidate in candidates:
        if candidate.is_winning_move:
            return candidate

    rng = rng or random.Random()
    best = max(candidates, key=lambda c: (c.score, rng.random()))
    logger.debug(
        "AI %s picks %s rotation %d (score %.1f, %d candidates)",
        player.player_id, best.position.to_key(), best.rotation, best.score, len(candidates),
    )
    return best


def select_ai_edge(human_edge: int, available_edges: list[int]) -> int | None:
    """Seat choice for a bot: avoid sitting straight across from the human."""
    across = opposite_edge(human_edge)
    for edge in available_edges:
        if edge != across:
            return edge
    return available_edges[0] if available_edges else None
