"""Domain models for Flows."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from hexflows.engine.models import PlayerId


class Direction(IntEnum):
    """Hex side headings, cyclically ordered. Board edges share the numbering."""

    SOUTH_WEST = 0
    WEST = 1
    NORTH_WEST = 2
    NORTH_EAST = 3
    EAST = 4
    SOUTH_EAST = 5

    def opposite(self) -> Direction:
        return Direction((self + 3) % 6)

    def rotate(self, steps: int) -> Direction:
        return Direction((self + steps) % 6)


class TileType(IntEnum):
    NO_SHARPS = 0
    ONE_SHARP = 1
    TWO_SHARPS = 2
    THREE_SHARPS = 3


class WinType(str, Enum):
    FLOW = "flow"
    CONSTRAINT = "constraint"
    TIE = "tie"


class HexPosition(NamedTuple):
    """Axial (row, col) coordinate of one board cell."""

    row: int
    col: int

    def to_key(self) -> str:
        return f"{self.row},{self.col}"

    @classmethod
    def from_key(cls, key: str) -> HexPosition:
        row, col = key.split(",")
        return cls(int(row), int(col))


# (d_row, d_col) offsets indexed by Direction
DIRECTION_VECTORS: list[tuple[int, int]] = [
    (-1, 0),   # SW
    (0, -1),   # W
    (1, -1),   # NW
    (1, 0),    # NE
    (0, 1),    # E
    (-1, 1),   # SE
]


class PlacedTile(BaseModel):
    model_config = ConfigDict(frozen=True)

    tile_type: TileType
    rotation: int = Field(ge=0, le=5)
    position: HexPosition


class FlowPlayer(BaseModel):
    """A seated player as the rules engine sees it."""

    model_config = ConfigDict(frozen=True)

    player_id: PlayerId
    color: str = ""
    edge_position: int = Field(ge=0, le=5)
    is_ai: bool = False


class Team(BaseModel):
    """Two allied players sharing one victory condition."""

    model_config = ConfigDict(frozen=True)

    player1_id: PlayerId
    player2_id: PlayerId

    @property
    def team_id(self) -> str:
        return f"team-{self.player1_id}-{self.player2_id}"

    def members(self) -> tuple[PlayerId, PlayerId]:
        return (self.player1_id, self.player2_id)


class VictoryResult(BaseModel):
    winners: list[PlayerId]
    win_type: WinType
