"""Bot-vs-Bot arena: play many seeded games between strategies and tally the outcomes."""

from __future__ import annotations

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass
from typing import Callable

from hexflows.engine.bot_strategy import BotStrategy
from hexflows.engine.game_simulator import (
    SimulationState,
    apply_action_and_resolve,
    resolve_auto_phases,
)
from hexflows.engine.models import Action, GameConfig, GameResult, Player, PlayerId
from hexflows.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)

# Flows games end well before every cell is filled twice over.
MAX_ACTIONS_PER_GAME = 1000

# z for a two-sided 95% interval
_Z95 = 1.96


@dataclass
class ArenaResult:
    """Tallies for one arena run, keyed by strategy name."""

    num_games: int
    wins: dict[str, int]
    draws: int
    win_types: dict[str, int]
    game_lengths: list[int]
    game_durations_ms: list[float]

    def win_rate(self, name: str) -> float:
        if self.num_games <= 0:
            return 0.0
        return self.wins.get(name, 0) / self.num_games

    def avg_length(self) -> float:
        """Mean number of tile placements per game."""
        if not self.game_lengths:
            return 0.0
        return sum(self.game_lengths) / len(self.game_lengths)

    def confidence_interval_95(self, name: str) -> tuple[float, float]:
        """Wilson score interval for *name*'s win rate."""
        n = self.num_games
        if n == 0:
            return (0.0, 0.0)
        p = self.win_rate(name)
        z2 = _Z95 * _Z95
        scale = 1 + z2 / n
        mid = (p + z2 / (2 * n)) / scale
        half = _Z95 * math.sqrt(p * (1 - p) / n + z2 / (4 * n * n)) / scale
        return (max(0.0, mid - half), min(1.0, mid + half))

    def summary(self) -> str:
        rows = [f"Arena Results ({self.num_games} games)", "=" * 60]
        for name, won in self.wins.items():
            lo, hi = self.confidence_interval_95(name)
            rows.append(
                f"  {name:>12s}: {won:3d} wins ({self.win_rate(name):5.1%})  "
                f"[95% CI: {lo:.1%}-{hi:.1%}]"
            )
        rows.append(f"  {'Draws':>12s}: {self.draws}")
        if self.win_types:
            endings = ", ".join(f"{kind}={count}" for kind, count in sorted(self.win_types.items()))
            rows.append(f"  Endings: {endings}")
        if self.game_durations_ms:
            total_ms = sum(self.game_durations_ms)
            rows.append(
                f"  Avg game: {self.avg_length():.1f} tiles, "
                f"{total_ms / len(self.game_durations_ms):.0f}ms  |  "
                f"Total: {total_ms / 1000:.1f}s"
            )
        return "\n".join(rows)


def run_arena(
    plugin: GamePlugin,
    strategies: dict[str, BotStrategy],
    num_games: int = 100,
    base_seed: int = 0,
    num_players: int = 2,
    game_options: dict | None = None,
    alternate_seats: bool = True,
    progress_callback: Callable[[int, int], None] | None = None,
) -> ArenaResult:
    """Play *num_games* seeded games and tally them per strategy.

    Seats are filled by cycling through *strategies* in order, so two
    strategies can share a six-seat table. With *alternate_seats* the cycle
    starts one strategy later each game. Game ``i`` is seeded with
    ``base_seed + i`` and created with *game_options*.

    A game scores as a draw when it ends in a tie, when its winners were
    played by more than one strategy, or when it hits MAX_ACTIONS_PER_GAME.
    *progress_callback* receives ``(games_completed, num_games)``.
    """
    names = list(strategies)
    if not names:
        raise ValueError("run_arena needs at least one strategy")

    wins = {name: 0 for name in names}
    endings: Counter[str] = Counter()
    draws = 0
    lengths: list[int] = []
    durations: list[float] = []

    for game_idx in range(num_games):
        seed = base_seed + game_idx
        shift = game_idx if alternate_seats else 0
        seating = [names[(seat + shift) % len(names)] for seat in range(num_players)]
        players = _arena_players(seating)
        by_pid = {p.player_id: strategies[p.bot_id] for p in players}

        started = time.monotonic()
        outcome, length = _play_one_game(
            plugin, players, GameConfig(random_seed=seed, options=game_options or {}), by_pid,
        )
        durations.append((time.monotonic() - started) * 1000)
        lengths.append(length)

        if outcome is None:
            logger.warning("Game %d (seed %d) hit the action limit", game_idx, seed)
            draws += 1
        else:
            endings[outcome.reason] += 1
            winning = {p.bot_id for p in players if p.player_id in outcome.winners}
            if outcome.reason == "tie" or len(winning) != 1:
                draws += 1
            else:
                wins[winning.pop()] += 1

        if progress_callback:
            progress_callback(game_idx + 1, num_games)

    return ArenaResult(
        num_games=num_games,
        wins=wins,
        draws=draws,
        win_types=dict(endings),
        game_lengths=lengths,
        game_durations_ms=durations,
    )


def _arena_players(seating: list[str]) -> list[Player]:
    return [
        Player(
            player_id=PlayerId(f"p{seat}"),
            display_name=name,
            seat_index=seat,
            is_bot=True,
            bot_id=name,
        )
        for seat, name in enumerate(seating)
    ]


def _play_one_game(
    plugin: GamePlugin,
    players: list[Player],
    config: GameConfig,
    by_pid: dict[str, BotStrategy],
) -> tuple[GameResult | None, int]:
    """Play a single game synchronously; returns the result and the number of tiles placed."""
    game_data, phase, _ = plugin.create_initial_state(players, config)
    state = SimulationState(
        game_data=game_data,
        phase=phase,
        players=players,
        scores={p.player_id: 0.0 for p in players},
    )
    resolve_auto_phases(plugin, state)

    placed = 0
    for _ in range(MAX_ACTIONS_PER_GAME):
        if state.game_over is not None or not state.phase.expected_actions:
            break
        expected = state.phase.expected_actions[0]
        strategy = by_pid.get(expected.player_id)
        if strategy is None:
            break

        payload = strategy.choose_action(
            state.game_data, state.phase, expected.player_id, plugin, players
        )
        if expected.action_type == "place_tile":
            placed += 1
        apply_action_and_resolve(
            plugin,
            state,
            Action(action_type=expected.action_type, player_id=expected.player_id, payload=payload),
        )

    return state.game_over, placed
