"""Parties (solo players or two-player teams) and the edges they race towards."""

from __future__ import annotations

from hexflows.engine.models import PlayerId
from hexflows.games.flows.board import edge_positions_with_directions, opposite_edge
from hexflows.games.flows.flows import FlowResult
from hexflows.games.flows.types import Direction, FlowPlayer, HexPosition, Team

Party = tuple[FlowPlayer, ...]


def get_parties(players: list[FlowPlayer], teams: list[Team]) -> list[Party]:
    """Group players into parties: one per team, then one per unteamed player."""
    by_id = {p.player_id: p for p in players}
    parties: list[Party] = []
    teamed: set[PlayerId] = set()

    for team in teams:
        p1 = by_id.get(team.player1_id)
        p2 = by_id.get(team.player2_id)
        if p1 is None or p2 is None:
            raise ValueError(f"{team.team_id} references a player who is not seated")
        if team.player1_id in teamed or team.player2_id in teamed:
            raise ValueError(f"{team.team_id} shares a player with another team")
        parties.append((p1, p2))
        teamed.update(team.members())

    for player in players:
        if player.player_id not in teamed:
            parties.append((player,))
    return parties


def party_of(player_id: PlayerId, parties: list[Party]) -> Party | None:
    for party in parties:
        if any(p.player_id == player_id for p in party):
            return party
    return None


def target_edge(player: FlowPlayer, party: Party) -> int:
    """A team member aims for the partner's edge, a solo player for the far edge."""
    for member in party:
        if member.player_id != player.player_id:
            return member.edge_position
    return opposite_edge(player.edge_position)


def target_exits(
    player: FlowPlayer, party: Party, radius: int,
) -> set[tuple[HexPosition, Direction]]:
    return set(edge_positions_with_directions(target_edge(player, party), radius))


def winning_parties(
    flow_result: FlowResult, parties: list[Party], radius: int,
) -> list[Party]:
    """Parties with at least one member whose flow left through its target edge."""
    winners: list[Party] = []
    for party in parties:
        for player in party:
            exits = flow_result.exits.get(player.player_id, set())
            if exits & target_exits(player, party, radius):
                winners.append(party)
                break
    return winners
