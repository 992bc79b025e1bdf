from __future__ import annotations

import logging

from hexflows.engine.models import GameConfig, Phase, Player, PlayerId
from hexflows.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)


def _test_players(count: int) -> list[Player]:
    return [
        Player(
            player_id=PlayerId(f"test-{i}"),
            display_name=f"Test {i}",
            seat_index=i,
        )
        for i in range(count)
    ]


def validate_plugin(plugin: GamePlugin) -> list[str]:
    """Smoke-check a plugin against the host contract. Empty list means OK."""
    errors: list[str] = []

    for attr in ("game_id", "display_name", "min_players", "max_players", "config_schema"):
        if not hasattr(plugin, attr):
            errors.append(f"Missing attribute: {attr}")
    if errors:
        return errors

    if plugin.min_players > plugin.max_players:
        errors.append(
            f"min_players ({plugin.min_players}) exceeds max_players ({plugin.max_players})"
        )

    default_errors = plugin.validate_config({})
    if default_errors:
        errors.append(f"Default options rejected: {'; '.join(default_errors)}")

    for count in sorted({plugin.min_players, plugin.max_players}):
        errors.extend(_check_initial_state(plugin, _test_players(count)))

    return errors


def _check_initial_state(plugin: GamePlugin, players: list[Player]) -> list[str]:
    errors: list[str] = []
    label = f"{len(players)} players"
    config = GameConfig(random_seed=42)

    try:
        game_data, phase, _events = plugin.create_initial_state(players, config)
    except Exception as e:
        logger.warning("create_initial_state raised for %s: %s", label, e)
        return [f"create_initial_state failed with {label}: {e}"]

    if not isinstance(game_data, dict):
        errors.append("create_initial_state must return dict as game_data")
    if not isinstance(phase, Phase):
        errors.append("create_initial_state must return Phase as second element")
        return errors
    if not phase.auto_resolve and not phase.expected_actions:
        errors.append(f"First phase with {label} is not auto_resolve but has no expected_actions")

    try:
        for p in players:
            plugin.get_valid_actions(game_data, phase, p.player_id)
            plugin.get_player_view(game_data, phase, p.player_id, players)
        plugin.get_spectator_summary(game_data, phase, players)
    except Exception as e:
        errors.append(f"View methods failed with {label}: {e}")

    game_data2, _phase2, _events2 = plugin.create_initial_state(players, config)
    if game_data != game_data2:
        errors.append(f"create_initial_state is not deterministic with same seed ({label})")

    return errors
