"""Tests for the bot strategy abstraction."""

import pytest

from hexflows.engine.bot_strategy import (
    RandomStrategy,
    available_strategies,
    get_strategy,
    register_strategy,
)
from hexflows.engine.game_simulator import SimulationState, resolve_auto_phases
from hexflows.engine.models import GameConfig, Phase, Player, PlayerId
from hexflows.games.flows.plugin import FlowsPlugin
from hexflows.games.flows.strategy import HeuristicStrategy


def _make_players() -> list[Player]:
    return [
        Player(player_id=PlayerId("p0"), display_name="P0", seat_index=0),
        Player(player_id=PlayerId("p1"), display_name="P1", seat_index=1, is_bot=True),
    ]


def _make_place_tile_state(**options):
    """Create a state at the place_tile phase."""
    plugin = FlowsPlugin()
    players = _make_players()
    config = GameConfig(random_seed=42, options=options)
    game_data, phase, _ = plugin.create_initial_state(players, config)

    state = SimulationState(
        game_data=game_data, phase=phase, players=players,
        scores={p.player_id: 0.0 for p in players},
    )
    resolve_auto_phases(plugin, state)
    return plugin, state


def test_random_strategy_returns_valid_action():
    plugin, state = _make_place_tile_state()
    strategy = RandomStrategy(seed=123)
    valid = plugin.get_valid_actions(state.game_data, state.phase, PlayerId("p0"))

    chosen = strategy.choose_action(
        state.game_data, state.phase, PlayerId("p0"), plugin
    )
    assert chosen in valid


def test_random_strategy_deterministic_with_seed():
    plugin, state = _make_place_tile_state()

    s1 = RandomStrategy(seed=7)
    s2 = RandomStrategy(seed=7)
    c1 = s1.choose_action(state.game_data, state.phase, PlayerId("p0"), plugin)
    c2 = s2.choose_action(state.game_data, state.phase, PlayerId("p0"), plugin)
    assert c1 == c2


def test_random_strategy_without_moves_raises():
    plugin, state = _make_place_tile_state()
    # p1 is not the expected actor, so it has nothing to choose from.
    with pytest.raises(ValueError, match="No valid actions"):
        RandomStrategy(seed=1).choose_action(
            state.game_data, state.phase, PlayerId("p1"), plugin
        )


def test_heuristic_strategy_returns_valid_action():
    plugin, state = _make_place_tile_state()
    valid = plugin.get_valid_actions(state.game_data, state.phase, PlayerId("p0"))

    chosen = HeuristicStrategy(seed=3).choose_action(
        state.game_data, state.phase, PlayerId("p0"), plugin, state.players
    )
    assert chosen in valid
    assert chosen["kind"] == "place"


def test_heuristic_strategy_picks_an_edge_while_seating():
    plugin = FlowsPlugin()
    players = _make_players()
    game_data, phase, _ = plugin.create_initial_state(
        players, GameConfig(random_seed=1, options={"edge_selection": "seating"}),
    )
    chosen = HeuristicStrategy(seed=0).choose_action(
        game_data, phase, PlayerId("p0"), plugin, players
    )
    assert chosen["edge"] in game_data["available_edges"]


def test_get_strategy_random():
    s = get_strategy("random", seed=5)
    assert isinstance(s, RandomStrategy)


def test_get_strategy_heuristic():
    s = get_strategy("heuristic")
    assert isinstance(s, HeuristicStrategy)


def test_get_strategy_unknown_raises():
    with pytest.raises(ValueError, match="Unknown bot_id"):
        get_strategy("does_not_exist")


def test_register_strategy():
    class FirstMove:
        def choose_action(self, game_data, phase: Phase, player_id, plugin, players=None):
            return plugin.get_valid_actions(game_data, phase, player_id)[0]

    register_strategy("first_move_test", lambda **_kwargs: FirstMove())
    assert "first_move_test" in available_strategies()
    assert isinstance(get_strategy("first_move_test"), FirstMove)
