from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import NewType

from pydantic import BaseModel, Field

# --- Identifiers ---
PlayerId = NewType("PlayerId", str)


# --- Player ---
class Player(BaseModel):
    """A seat at the table, as the host knows it."""

    player_id: PlayerId
    display_name: str
    seat_index: int
    color: str = ""
    is_bot: bool = False
    bot_id: str | None = None


class GameConfig(BaseModel):
    """Per-game options (checked by the plugin's ``validate_config``) and the deck seed."""

    options: dict = Field(default_factory=dict)
    random_seed: int | None = None


# --- Phase & Action Queue ---
class ConcurrentMode(str, Enum):
    SEQUENTIAL = "sequential"


class ExpectedAction(BaseModel):
    player_id: PlayerId | None = None
    action_type: str
    constraints: dict = Field(default_factory=dict)


class Phase(BaseModel):
    """Where the game is waiting.

    An ``auto_resolve`` phase (a tile draw) is stepped by the host with a
    synthetic action; ``metadata["player_index"]`` names the seat whose turn it is.
    """

    name: str
    concurrent_mode: ConcurrentMode = ConcurrentMode.SEQUENTIAL
    expected_actions: list[ExpectedAction] = Field(default_factory=list)
    auto_resolve: bool = False
    metadata: dict = Field(default_factory=dict)


# --- Action ---
class Action(BaseModel):
    action_type: str
    player_id: PlayerId
    payload: dict = Field(default_factory=dict)
    timestamp: datetime | None = None


# --- Event ---
class Event(BaseModel):
    event_type: str
    player_id: PlayerId | None = None
    payload: dict = Field(default_factory=dict)


# --- Transition Result ---
class GameResult(BaseModel):
    """How a game ended. Flows scores 1.0 for each winner and 0.0 otherwise."""

    winners: list[PlayerId]
    final_scores: dict[str, float]
    reason: str = "normal"
    details: dict = Field(default_factory=dict)


class TransitionResult(BaseModel):
    game_data: dict
    events: list[Event]
    next_phase: Phase
    scores: dict[str, float] = Field(default_factory=dict)
    game_over: GameResult | None = None
