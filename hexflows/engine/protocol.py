from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from hexflows.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


@runtime_checkable
class GamePlugin(Protocol):
    """Interface every game exposes to the host: state in, transitions out.

    ``game_data`` is a plain JSON-compatible dict owned by the host. Plugins
    may update it in place but must hand it back inside a TransitionResult.
    """

    game_id: ClassVar[str]
    display_name: ClassVar[str]
    min_players: ClassVar[int]
    max_players: ClassVar[int]
    description: ClassVar[str]
    config_schema: ClassVar[dict]

    def create_initial_state(
        self, players: list[Player], config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        """Seat the players and return the opening state.

        Must be deterministic for a given ``config.random_seed``. Raises
        ValueError for an unsupported player count or rejected options.
        """
        ...

    def validate_config(self, options: dict) -> list[str]:
        """Human-readable problems with *options*; empty when they are usable."""
        ...

    def get_valid_actions(
        self, game_data: dict, phase: Phase, player_id: PlayerId,
    ) -> list[dict]:
        """Every payload *player_id* may submit now. Empty when it is not their turn."""
        ...

    def validate_action(
        self, game_data: dict, phase: Phase, action: Action,
    ) -> str | None:
        ...

    def apply_action(
        self, game_data: dict, phase: Phase, action: Action, players: list[Player],
    ) -> TransitionResult:
        """Advance the game by one action.

        Auto-resolve phases receive a synthetic action named after the phase.
        A rejected move raises InvalidActionError; an action out of turn
        raises NotYourTurnError; any action after the end raises
        GameNotActiveError.
        """
        ...

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # player_id is None for spectators
        ...

    def resolve_concurrent_actions(
        self,
        game_data: dict,
        phase: Phase,
        actions: dict[str, Action],
        players: list[Player],
    ) -> TransitionResult:
        ...

    def state_to_ai_view(
        self, game_data: dict, phase: Phase, player_id: PlayerId, players: list[Player],
    ) -> dict:
        """Everything a bot needs to choose a move, including ``valid_actions``."""
        ...

    def parse_ai_action(self, response: dict, phase: Phase, player_id: PlayerId) -> Action:
        ...

    def on_player_forfeit(
        self, game_data: dict, phase: Phase, player_id: PlayerId, players: list[Player],
    ) -> TransitionResult | None:
        """Called when a forfeited player's turn comes up.

        Return a TransitionResult that skips their turn, or None if the
        current phase does not belong to them.
        """
        ...

    def get_spectator_summary(
        self, game_data: dict, phase: Phase, players: list[Player],
    ) -> dict:
        ...
