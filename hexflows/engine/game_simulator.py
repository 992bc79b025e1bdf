"""Synchronous game simulator: advances game state through auto-resolve phases.

Used by the arena and by tests to play complete games without a host
process around the plugin.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from hexflows.engine.errors import GameEngineError, PluginError
from hexflows.engine.models import Action, GameResult, Phase, Player, PlayerId, TransitionResult
from hexflows.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)

# Upper bound on consecutive auto-resolve phases after one action.
MAX_AUTO_RESOLVE = 50


@dataclass
class SimulationState:
    """Mutable game state for synchronous simulation."""

    game_data: dict
    phase: Phase
    players: list[Player]
    scores: dict[str, float] = field(default_factory=dict)
    game_over: GameResult | None = None


def apply_action_and_resolve(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
) -> None:
    """Apply an action and auto-resolve all subsequent auto-resolve phases.

    Mutates *state* in place.  After return, ``state.phase`` is either a
    non-auto-resolve phase (player needs to act) or ``state.game_over`` is set.
    Engine errors propagate unchanged; anything else the plugin raises is
    wrapped in PluginError.
    """
    _apply(state, _call_plugin(plugin, state, action))
    if state.game_over:
        return
    resolve_auto_phases(plugin, state)


def resolve_auto_phases(plugin: GamePlugin, state: SimulationState) -> None:
    """Step through auto-resolve phases (tile draws) until a player must act."""
    remaining = MAX_AUTO_RESOLVE
    while state.phase.auto_resolve and not state.game_over:
        if remaining == 0:
            raise PluginError(
                f"More than {MAX_AUTO_RESOLVE} auto-resolve phases in a row "
                f"(stuck in {state.phase.name})"
            )
        remaining -= 1

        pid = _phase_player_id(state.phase, state.players)
        synthetic = Action(action_type=state.phase.name, player_id=pid)
        _apply(state, _call_plugin(plugin, state, synthetic))


def clone_state(state: SimulationState) -> SimulationState:
    """Deep-copy a simulation state.

    ``players`` is shared (immutable during a game).
    """
    return SimulationState(
        game_data=copy.deepcopy(state.game_data),
        phase=state.phase.model_copy(deep=True),
        players=state.players,
        scores=dict(state.scores),
        game_over=state.game_over,
    )


def _call_plugin(
    plugin: GamePlugin, state: SimulationState, action: Action,
) -> TransitionResult:
    try:
        return plugin.apply_action(state.game_data, state.phase, action, state.players)
    except GameEngineError:
        raise
    except Exception as e:
        logger.exception("Plugin %s failed in phase %s", plugin.game_id, state.phase.name)
        raise PluginError(f"{plugin.game_id} failed in {state.phase.name}: {e}", e) from e


def _apply(state: SimulationState, result: TransitionResult) -> None:
    state.game_data = result.game_data
    state.phase = result.next_phase
    state.scores = result.scores or state.scores
    state.game_over = result.game_over


def _phase_player_id(phase: Phase, players: list[Player]) -> PlayerId:
    """Extract the acting player from a phase, falling back to first player."""
    if phase.expected_actions:
        pid = phase.expected_actions[0].player_id
        if pid is not None:
            return pid
    pi = phase.metadata.get("player_index")
    if pi is not None and pi < len(players):
        return players[pi].player_id
    return players[0].player_id if players else PlayerId("system")
