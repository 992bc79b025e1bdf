"""Tile catalog for Flows (4 archetypes, 40 tiles in the standard deck)."""

from __future__ import annotations

import random

from hexflows.games.flows.types import Direction, TileType

SW = Direction.SOUTH_WEST
W = Direction.WEST
NW = Direction.NORTH_WEST
NE = Direction.NORTH_EAST
E = Direction.EAST
SE = Direction.SOUTH_EAST

# Rotation-0 connections. Each pair is one internal path between two sides.
TILE_FLOWS: dict[TileType, list[tuple[Direction, Direction]]] = {
    TileType.NO_SHARPS: [(SW, NW), (W, E), (NE, SE)],
    TileType.ONE_SHARP: [(SW, SE), (W, NE), (NW, E)],
    TileType.TWO_SHARPS: [(SW, SE), (W, E), (NW, NE)],
    TileType.THREE_SHARPS: [(SW, SE), (W, NW), (NE, E)],
}

DEFAULT_TILES_PER_TYPE = 10

# Multiplier and increment of the deck shuffle LCG (Numerical Recipes).
_LCG_A = 1664525
_LCG_C = 1013904223
_LCG_M = 2**32


def canonical_connections(tile_type: TileType) -> list[tuple[Direction, Direction]]:
    return list(TILE_FLOWS[TileType(tile_type)])


def rotated_connections(
    tile_type: TileType, rotation: int,
) -> list[tuple[Direction, Direction]]:
    return [(a.rotate(rotation), b.rotate(rotation)) for a, b in TILE_FLOWS[TileType(tile_type)]]


def flow_exit(tile_type: TileType, rotation: int, entry: int) -> Direction | None:
    """Side through which a flow entering at *entry* leaves the tile."""
    return _EXIT_LOOKUP[tile_type][rotation % 6].get(entry)


def validate_catalog() -> None:
    """Check the connection table; raises ValueError if it is malformed."""
    for tile_type, pairs in TILE_FLOWS.items():
        seen: set[Direction] = set()
        for a, b in pairs:
            if a == b:
                raise ValueError(f"{tile_type.name}: path connects {a.name} to itself")
            for d in (a, b):
                if d in seen:
                    raise ValueError(f"{tile_type.name}: side {d.name} used twice")
                seen.add(d)
        for rotation in range(6):
            exits = _EXIT_LOOKUP[tile_type][rotation]
            for entry, exit_dir in exits.items():
                if exits.get(exit_dir) != entry:
                    raise ValueError(
                        f"{tile_type.name} rotation {rotation}: "
                        f"{entry.name}->{exit_dir.name} is not symmetric"
                    )


def build_tile_deck(distribution: list[int] | None = None) -> list[TileType]:
    """Unshuffled deck; *distribution* gives the count of each tile type."""
    if distribution is None:
        distribution = [DEFAULT_TILES_PER_TYPE] * len(TileType)
    if len(distribution) != len(TileType):
        raise ValueError(
            f"Tile distribution needs {len(TileType)} counts, got {len(distribution)}"
        )
    deck: list[TileType] = []
    for tile_type, count in zip(TileType, distribution):
        if count < 0:
            raise ValueError(f"Negative count for {tile_type.name}: {count}")
        deck.extend([tile_type] * count)
    return deck


def shuffle_deck(deck: list[TileType], seed: int | None = None) -> list[TileType]:
    """Fisher-Yates shuffle; a seed makes the order reproducible across runs."""
    shuffled = list(deck)
    if seed is None:
        uniform = random.random
    else:
        state = seed % _LCG_M

        def uniform() -> float:
            nonlocal state
            state = (state * _LCG_A + _LCG_C) % _LCG_M
            return state / _LCG_M

    for i in range(len(shuffled) - 1, 0, -1):
        j = int(uniform() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _build_exit_lookup() -> dict[TileType, list[dict[Direction, Direction]]]:
    lookup: dict[TileType, list[dict[Direction, Direction]]] = {}
    for tile_type in TileType:
        per_rotation: list[dict[Direction, Direction]] = []
        for rotation in range(6):
            exits: dict[Direction, Direction] = {}
            for a, b in rotated_connections(tile_type, rotation):
                exits[a] = b
                exits[b] = a
            per_rotation.append(exits)
        lookup[tile_type] = per_rotation
    return lookup


_EXIT_LOOKUP = _build_exit_lookup()
validate_catalog()
