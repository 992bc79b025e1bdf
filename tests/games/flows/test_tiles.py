"""Tests for the Flows tile catalog and deck."""

from __future__ import annotations

from collections import Counter

import pytest

from hexflows.games.flows.tiles import (
    TILE_FLOWS,
    build_tile_deck,
    canonical_connections,
    flow_exit,
    rotated_connections,
    shuffle_deck,
)
from hexflows.games.flows.types import Direction, TileType


class TestConnections:
    def test_every_tile_uses_all_six_sides(self) -> None:
        for tile_type in TileType:
            sides = [d for pair in TILE_FLOWS[tile_type] for d in pair]
            assert sorted(sides) == list(Direction)

    def test_canonical_connections_copy(self) -> None:
        pairs = canonical_connections(TileType.NO_SHARPS)
        pairs.clear()
        assert len(TILE_FLOWS[TileType.NO_SHARPS]) == 3

    def test_flow_exit_unrotated(self) -> None:
        assert flow_exit(TileType.NO_SHARPS, 0, Direction.SOUTH_WEST) == Direction.NORTH_WEST
        assert flow_exit(TileType.NO_SHARPS, 0, Direction.WEST) == Direction.EAST
        assert flow_exit(TileType.THREE_SHARPS, 0, Direction.NORTH_EAST) == Direction.EAST

    def test_rotation_shifts_both_sides(self) -> None:
        assert rotated_connections(TileType.NO_SHARPS, 1) == [
            (Direction.WEST, Direction.NORTH_EAST),
            (Direction.NORTH_WEST, Direction.SOUTH_EAST),
            (Direction.EAST, Direction.SOUTH_WEST),
        ]
        assert flow_exit(TileType.NO_SHARPS, 1, Direction.WEST) == Direction.NORTH_EAST

    def test_straight_through_rotation(self) -> None:
        # TwoSharps turned five steps runs SW to NE, straight up the board.
        assert flow_exit(TileType.TWO_SHARPS, 5, Direction.SOUTH_WEST) == Direction.NORTH_EAST

    def test_flow_exit_is_symmetric(self) -> None:
        for tile_type in TileType:
            for rotation in range(6):
                for entry in Direction:
                    exit_dir = flow_exit(tile_type, rotation, entry)
                    assert exit_dir is not None
                    assert exit_dir != entry
                    assert flow_exit(tile_type, rotation, exit_dir) == entry


class TestDeck:
    def test_default_deck(self) -> None:
        deck = build_tile_deck()
        assert len(deck) == 40
        assert Counter(deck) == {t: 10 for t in TileType}

    def test_custom_distribution(self) -> None:
        deck = build_tile_deck([1, 0, 2, 0])
        assert deck == [TileType.NO_SHARPS, TileType.TWO_SHARPS, TileType.TWO_SHARPS]

    def test_distribution_length_checked(self) -> None:
        with pytest.raises(ValueError, match="needs 4 counts"):
            build_tile_deck([1, 2, 3])

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError, match="Negative count"):
            build_tile_deck([1, -1, 0, 0])

    def test_seeded_shuffle_is_reproducible(self) -> None:
        deck = build_tile_deck()
        assert shuffle_deck(deck, seed=7) == shuffle_deck(deck, seed=7)

    def test_shuffle_keeps_tiles(self) -> None:
        deck = build_tile_deck()
        shuffled = shuffle_deck(deck, seed=3)
        assert Counter(shuffled) == Counter(deck)
        assert deck == build_tile_deck()

    def test_different_seeds_differ(self) -> None:
        deck = build_tile_deck()
        assert shuffle_deck(deck, seed=1) != shuffle_deck(deck, seed=2)

    def test_unseeded_shuffle(self) -> None:
        assert Counter(shuffle_deck(build_tile_deck())) == Counter(build_tile_deck())
