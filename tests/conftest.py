from __future__ import annotations

import pytest

from hexflows.engine.models import Player, PlayerId
from hexflows.games.flows.plugin import FlowsPlugin
from hexflows.games.flows.types import FlowPlayer


@pytest.fixture
def plugin() -> FlowsPlugin:
    return FlowsPlugin()


@pytest.fixture
def two_players() -> list[Player]:
    return [
        Player(player_id=PlayerId(f"p{i}"), display_name=f"P{i}", seat_index=i)
        for i in range(2)
    ]


@pytest.fixture
def opposed_pair() -> list[FlowPlayer]:
    """Two players across the board from each other (edges 0 and 3)."""
    return [
        FlowPlayer(player_id=PlayerId("p1"), color="#DE8F05", edge_position=0),
        FlowPlayer(player_id=PlayerId("p2"), color="#0173B2", edge_position=3),
    ]


@pytest.fixture
def offset_pair() -> list[FlowPlayer]:
    """Two players on edges 0 and 2, whose routes cross at an angle."""
    return [
        FlowPlayer(player_id=PlayerId("p1"), color="#DE8F05", edge_position=0),
        FlowPlayer(player_id=PlayerId("p2"), color="#0173B2", edge_position=2),
    ]
