"""Heuristic bot for Flows, driven by the plugin's AI view."""

from __future__ import annotations

import logging
import random

from hexflows.config import settings
from hexflows.engine.models import Phase, Player, PlayerId
from hexflows.engine.protocol import GamePlugin
from hexflows.games.flows.ai import select_ai_edge, select_ai_move
from hexflows.games.flows.board import board_from_data
from hexflows.games.flows.types import FlowPlayer, Team, TileType

logger = logging.getLogger(__name__)


class HeuristicStrategy:
    """Greedy one-ply search: shorten our route, lengthen everyone else's."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(settings.ai_seed if seed is None else seed)

    def choose_action(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        plugin: GamePlugin,
        players: list[Player] | None = None,
    ) -> dict:
        view = plugin.state_to_ai_view(game_data, phase, player_id, players or [])

        if view["phase"] == "choose_edge":
            return {"edge": self._choose_edge(view)}

        if view["current_tile"] is None:
            raise ValueError(f"{player_id} has no tile to place")

        seats = [FlowPlayer(**seat) for seat in view["seats"]]
        me = next(seat for seat in seats if seat.player_id == player_id)
        move = select_ai_move(
            board_from_data(view["board"]),
            TileType(view["current_tile"]),
            me,
            seats,
            [Team(**team) for team in view["teams"]],
            view["supermove_allowed"],
            view["board_radius"],
            single_supermove=view["single_supermove"],
            supermove_any_player=view["supermove_any_player"],
            rng=self._rng,
        )
        logger.debug(
            "%s picks %s r%d (score %.1f%s)",
            player_id, move.position.to_key(), move.rotation, move.score,
            ", replacement" if move.is_replacement else "",
        )
        return {
            "kind": "replace" if move.is_replacement else "place",
            "row": move.position.row,
            "col": move.position.col,
            "rotation": move.rotation,
        }

    def _choose_edge(self, view: dict) -> int:
        available = view["available_edges"]
        if not available:
            raise ValueError("No edges left to choose")
        if view["reference_edge"] is None:
            return available[0]
        return select_ai_edge(view["reference_edge"], available)
