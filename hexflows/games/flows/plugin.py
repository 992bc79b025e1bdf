"""FlowsPlugin: implements the GamePlugin protocol for Flows."""

from __future__ import annotations

import logging
from typing import ClassVar

from hexflows.config import settings
from hexflows.engine.errors import (
    GameNotActiveError,
    InvalidActionError,
    NotYourTurnError,
)
from hexflows.engine.models import (
    Action,
    ConcurrentMode,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from hexflows.games.flows.board import (
    Board,
    board_from_data,
    board_to_data,
    is_valid_position,
    place_tile,
    replace_tile,
)
from hexflows.games.flows.flows import compute_flows
from hexflows.games.flows.legality import (
    can_tile_be_placed_anywhere,
    find_legal_moves,
    has_any_legal_move,
    is_legal_move,
    is_legal_replacement,
)
from hexflows.games.flows.notation import format_game_record, format_move_history
from hexflows.games.flows.teams import get_parties, party_of
from hexflows.games.flows.tiles import build_tile_deck, shuffle_deck
from hexflows.games.flows.types import (
    FlowPlayer,
    HexPosition,
    PlacedTile,
    Team,
    TileType,
    VictoryResult,
    WinType,
)
from hexflows.games.flows.victory import check_victory

logger = logging.getLogger(__name__)

# Board edges per player count when edges are not chosen at the table.
EDGE_LAYOUTS: dict[int, list[int]] = {
    2: [0, 3],
    3: [0, 2, 4],
    4: [0, 1, 2, 3],
    5: [0, 1, 2, 3, 4],
    6: [0, 1, 2, 3, 4, 5],
}

# Seat indices paired into teams.
TEAM_SEAT_PAIRS: dict[int, list[tuple[int, int]]] = {
    4: [(0, 2), (1, 3)],
    6: [(0, 3), (1, 4), (2, 5)],
}

SEAT_COLORS = ["#DE8F05", "#0173B2", "#029E73", "#D55E00", "#CC78BC", "#CA9161"]

EDGE_SELECTION_MODES = ("fixed", "seating")

_BOOL_OPTIONS = ("supermove", "single_supermove", "supermove_any_player", "teams")


class FlowsPlugin:
    """Flows: connect your board edge to the far side with flowing tiles."""

    game_id: ClassVar[str] = "flows"
    display_name: ClassVar[str] = "Flows"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 6
    description: ClassVar[str] = (
        "Place hex tiles to guide your flow from your edge across the board, "
        "without ever cutting off an opponent."
    )
    config_schema: ClassVar[dict] = {
        "type": "object",
        "properties": {
            "board_radius": {"type": "integer", "minimum": 2, "maximum": 6},
            "supermove": {"type": "boolean", "default": False},
            "single_supermove": {"type": "boolean", "default": False},
            "supermove_any_player": {"type": "boolean", "default": False},
            "teams": {"type": "boolean"},
            "tile_distribution": {
                "type": "array",
                "items": {"type": "integer", "minimum": 0},
                "minItems": 4,
                "maxItems": 4,
            },
            "edge_selection": {
                "type": "string",
                "enum": list(EDGE_SELECTION_MODES),
                "default": "fixed",
            },
        },
    }

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        if not self.min_players <= len(players) <= self.max_players:
            raise ValueError(
                f"Flows needs {self.min_players}-{self.max_players} players, got {len(players)}"
            )
        errors = self.validate_config(config.options)
        if errors:
            raise ValueError("; ".join(errors))

        options = _resolve_options(config.options, len(players))
        radius = options.pop("board_radius")
        distribution = options.pop("tile_distribution")
        edge_selection = options.pop("edge_selection")

        deck = shuffle_deck(build_tile_deck(distribution), config.random_seed)

        seats = [
            {
                "player_id": p.player_id,
                "color": p.color or SEAT_COLORS[i % len(SEAT_COLORS)],
                "edge_position": None,
                "is_ai": p.is_bot,
            }
            for i, p in enumerate(players)
        ]

        game_data: dict = {
            "board_radius": radius,
            "board": {"tiles": {}},
            "seats": seats,
            "teams": [],
            "tile_deck": [int(t) for t in deck],
            "current_tile": None,
            "last_placed_position": None,
            "flow_edges": {},
            "move_history": [],
            "options": options,
            "available_edges": [],
            "supermove_in_progress": False,
        }

        events = [
            Event(
                event_type="game_started",
                payload={
                    "players": [p.player_id for p in players],
                    "board_radius": radius,
                    "tiles": len(deck),
                },
            ),
        ]

        if edge_selection == "seating":
            game_data["available_edges"] = list(range(6))
            first_phase = _choose_edge_phase(players[0].player_id, 0)
        else:
            for seat, edge in zip(seats, EDGE_LAYOUTS[len(players)]):
                seat["edge_position"] = edge
            game_data["teams"] = _seat_teams(seats, options["teams"])
            events.append(_seating_event(game_data))
            first_phase = _draw_phase(0)

        logger.info(
            "Flows game created: %d players, radius %d, %d tiles",
            len(players), radius, len(deck),
        )
        return game_data, first_phase, events

    def validate_config(self, options: dict) -> list[str]:
        errors: list[str] = []

        radius = options.get("board_radius")
        if radius is not None and (not isinstance(radius, int) or not 2 <= radius <= 6):
            errors.append(f"board_radius must be an integer in 2..6, got {radius!r}")

        for key in _BOOL_OPTIONS:
            if key in options and not isinstance(options[key], bool):
                errors.append(f"{key} must be a boolean")

        distribution = options.get("tile_distribution")
        if distribution is not None:
            if (
                not isinstance(distribution, list)
                or len(distribution) != len(TileType)
                or not all(isinstance(n, int) and n >= 0 for n in distribution)
            ):
                errors.append("tile_distribution must be a list of 4 non-negative integers")
            elif sum(distribution) == 0:
                errors.append("tile_distribution must contain at least one tile")

        selection = options.get("edge_selection", "fixed")
        if selection not in EDGE_SELECTION_MODES:
            errors.append(f"Unknown edge_selection: {selection}")

        return errors

    # ------------------------------------------------------------------ #
    #  Valid actions
    # ------------------------------------------------------------------ #

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        if not _is_expected(phase, player_id):
            return []
        if phase.name == "choose_edge":
            return [{"edge": edge} for edge in game_data["available_edges"]]
        if phase.name in ("place_tile", "place_replaced_tile"):
            return self._get_valid_tile_moves(game_data, phase)
        return []

    def _get_valid_tile_moves(self, game_data: dict, phase: Phase) -> list[dict]:
        if game_data["current_tile"] is None:
            return []

        board = board_from_data(game_data["board"]["tiles"])
        radius = game_data["board_radius"]
        seats, teams = _seats(game_data), _teams(game_data)
        mover = seats[phase.metadata["player_index"]]
        tile_type = TileType(game_data["current_tile"])
        supermove = _supermove_allowed(game_data, phase)

        moves: list[dict] = []
        for rotation in range(6):
            for pos in find_legal_moves(
                board, tile_type, rotation, seats, teams, radius,
                supermove_enabled=supermove, mover_id=mover.player_id,
            ):
                moves.append(_move_payload("place", pos, rotation))

        if supermove:
            any_player = game_data["options"]["supermove_any_player"]
            for pos in list(board):
                for rotation in range(6):
                    tile = PlacedTile(tile_type=tile_type, rotation=rotation, position=pos)
                    if is_legal_replacement(
                        board, tile, mover, seats, teams, radius, any_player,
                    ):
                        moves.append(_move_payload("replace", pos, rotation))

        return moves

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        if phase.name == "choose_edge":
            return self._validate_choose_edge(game_data, action)
        if phase.name in ("place_tile", "place_replaced_tile"):
            return self._validate_tile_move(game_data, phase, action)
        return None

    def _validate_choose_edge(self, game_data: dict, action: Action) -> str | None:
        edge = action.payload.get("edge")
        if edge is None:
            return "Missing edge in payload"
        if edge not in game_data["available_edges"]:
            return f"Edge {edge} is not available"
        return None

    def _validate_tile_move(
        self, game_data: dict, phase: Phase, action: Action,
    ) -> str | None:
        payload = action.payload
        kind = payload.get("kind", "place")
        if kind not in ("place", "replace"):
            return f"Unknown move kind: {kind}"

        row, col, rotation = payload.get("row"), payload.get("col"), payload.get("rotation")
        if row is None or col is None or rotation is None:
            return "Missing row, col, or rotation in payload"
        if type(row) is not int or type(col) is not int:
            return f"Row and col must be integers, got {row!r}, {col!r}"
        if type(rotation) is not int or not 0 <= rotation <= 5:
            return f"Invalid rotation: {rotation}"
        if game_data["current_tile"] is None:
            return "No tile drawn"

        radius = game_data["board_radius"]
        pos = HexPosition(row, col)
        if not is_valid_position(pos, radius):
            return f"Position {pos.to_key()} is off the board"

        board = board_from_data(game_data["board"]["tiles"])
        seats, teams = _seats(game_data), _teams(game_data)
        mover = seats[phase.metadata["player_index"]]
        tile = PlacedTile(
            tile_type=TileType(game_data["current_tile"]), rotation=rotation, position=pos,
        )
        supermove = _supermove_allowed(game_data, phase)

        if kind == "replace":
            if not supermove:
                return "Supermove is not available"
            if pos not in board:
                return f"No tile to replace at {pos.to_key()}"
            if not is_legal_replacement(
                board, tile, mover, seats, teams, radius,
                game_data["options"]["supermove_any_player"],
            ):
                return f"Replacing the tile at {pos.to_key()} does not unblock a blocked player"
            return None

        if pos in board:
            return f"Position {pos.to_key()} is already occupied"
        if not is_legal_move(
            board, tile, seats, teams, radius,
            supermove_enabled=supermove, mover_id=mover.player_id,
        ):
            return (
                f"Placing tile {tile.tile_type.name} at {pos.to_key()} with rotation "
                f"{rotation} would cut off another player"
            )
        return None

    # ------------------------------------------------------------------ #
    #  Apply action, dispatching to phase handlers
    # ------------------------------------------------------------------ #

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        if phase.name == "game_over":
            raise GameNotActiveError("Game is already over")
        if phase.name == "choose_edge":
            return self._choose_edge(game_data, phase, action, players)
        elif phase.name == "draw_tile":
            return self._draw_tile(game_data, phase, players)
        elif phase.name in ("place_tile", "place_replaced_tile"):
            return self._place_tile(game_data, phase, action, players)
        else:
            raise InvalidActionError(f"Unknown phase: {phase.name}")

    # ---- choose_edge ----

    def _choose_edge(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        _check_turn(phase, action)
        error = self._validate_choose_edge(game_data, action)
        if error:
            raise InvalidActionError(error, action)

        edge = action.payload["edge"]
        seat_index = phase.metadata["player_index"]
        game_data["seats"][seat_index]["edge_position"] = edge
        game_data["available_edges"].remove(edge)

        events = [
            Event(
                event_type="edge_chosen",
                player_id=action.player_id,
                payload={"edge": edge},
            ),
        ]

        next_index = seat_index + 1
        if next_index < len(players):
            next_phase = _choose_edge_phase(players[next_index].player_id, next_index)
        else:
            game_data["teams"] = _seat_teams(
                game_data["seats"], game_data["options"]["teams"],
            )
            game_data["available_edges"] = []
            events.append(_seating_event(game_data))
            next_phase = _draw_phase(0)

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=next_phase,
            scores=_zero_scores(game_data),
        )

    # ---- draw_tile (auto-resolve) ----

    def _draw_tile(
        self, game_data: dict, phase: Phase, players: list[Player],
    ) -> TransitionResult:
        player_index = phase.metadata["player_index"]
        seats, teams = _seats(game_data), _teams(game_data)
        mover = seats[player_index]
        deck = game_data["tile_deck"]

        if not deck:
            logger.warning("Tile deck exhausted on %s's turn", mover.player_id)
            return _finish(
                game_data,
                _constraint_win(mover, seats, teams),
                cause="deck_exhausted",
                events=[Event(event_type="deck_exhausted", player_id=mover.player_id)],
            )

        tile_type = TileType(deck.pop(0))
        game_data["current_tile"] = int(tile_type)
        logger.debug("%s draws %s", mover.player_id, tile_type.name)

        events = [
            Event(
                event_type="tile_drawn",
                player_id=mover.player_id,
                payload={"tile": int(tile_type), "tiles_remaining": len(deck)},
            ),
        ]

        options = game_data["options"]
        board = board_from_data(game_data["board"]["tiles"])
        if not has_any_legal_move(
            board, tile_type, mover, seats, teams, game_data["board_radius"],
            supermove_enabled=options["supermove"],
            supermove_any_player=options["supermove_any_player"],
        ):
            return _finish(
                game_data,
                _constraint_win(mover, seats, teams),
                cause="no_legal_move",
                events=events,
            )

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=_tile_phase("place_tile", mover.player_id, player_index),
            scores=_zero_scores(game_data),
        )

    # ---- place_tile / place_replaced_tile ----

    def _place_tile(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        _check_turn(phase, action)
        error = self._validate_tile_move(game_data, phase, action)
        if error:
            raise InvalidActionError(error, action)

        payload = action.payload
        is_replacement = payload.get("kind", "place") == "replace"
        player_index = phase.metadata["player_index"]
        radius = game_data["board_radius"]
        options = game_data["options"]
        seats, teams = _seats(game_data), _teams(game_data)
        mover = seats[player_index]

        board = board_from_data(game_data["board"]["tiles"])
        tile = PlacedTile(
            tile_type=TileType(game_data["current_tile"]),
            rotation=payload["rotation"],
            position=HexPosition(payload["row"], payload["col"]),
        )
        move_payload = {
            "tile": int(tile.tile_type),
            "row": tile.position.row,
            "col": tile.position.col,
            "rotation": tile.rotation,
        }

        displaced: PlacedTile | None = None
        if is_replacement:
            displaced = replace_tile(board, tile, radius)
            event = Event(
                event_type="tile_replaced",
                player_id=mover.player_id,
                payload={**move_payload, "displaced_tile": int(displaced.tile_type)},
            )
        else:
            place_tile(board, tile, radius)
            event = Event(event_type="tile_placed", player_id=mover.player_id, payload=move_payload)
        events = [event]

        game_data["board"]["tiles"] = board_to_data(board)
        game_data["current_tile"] = None
        game_data["last_placed_position"] = tile.position.to_key()
        game_data["move_history"].append({
            "player_id": mover.player_id,
            **move_payload,
            "replacement": is_replacement,
        })

        victory = _evaluate_board(game_data, board, seats, teams)
        if victory is not None:
            return _finish(game_data, victory, cause=victory.win_type.value, events=events)

        if displaced is not None and not options["single_supermove"]:
            # The displaced tile must be laid again straight away, supermove off.
            game_data["current_tile"] = int(displaced.tile_type)
            game_data["supermove_in_progress"] = True
            if not can_tile_be_placed_anywhere(
                board, displaced.tile_type, seats, teams, radius, mover_id=mover.player_id,
            ):
                return _finish(
                    game_data,
                    _constraint_win(mover, seats, teams),
                    cause="no_legal_move",
                    events=events,
                )
            return TransitionResult(
                game_data=game_data,
                events=events,
                next_phase=_tile_phase("place_replaced_tile", mover.player_id, player_index),
                scores=_zero_scores(game_data),
            )

        if displaced is not None:
            game_data["tile_deck"].append(int(displaced.tile_type))
            events.append(Event(
                event_type="tile_returned",
                player_id=mover.player_id,
                payload={"tile": int(displaced.tile_type)},
            ))

        game_data["supermove_in_progress"] = False
        next_index = (player_index + 1) % len(seats)
        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=_draw_phase(next_index),
            scores=_zero_scores(game_data),
        )

    # ------------------------------------------------------------------ #
    #  Views
    # ------------------------------------------------------------------ #

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        view = {k: v for k, v in game_data.items() if k != "tile_deck"}
        view["tiles_remaining"] = len(game_data["tile_deck"])
        view["move_notation"] = _move_notation(game_data)
        return view

    def state_to_ai_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        players: list[Player],
    ) -> dict:
        reference_edge = None
        for seat in game_data["seats"]:
            if not seat["is_ai"] and seat["edge_position"] is not None:
                reference_edge = seat["edge_position"]
                break

        return {
            "player_id": player_id,
            "phase": phase.name,
            "board_radius": game_data["board_radius"],
            "board": game_data["board"]["tiles"],
            "current_tile": game_data["current_tile"],
            "seats": game_data["seats"],
            "teams": game_data["teams"],
            "available_edges": game_data["available_edges"],
            "reference_edge": reference_edge,
            "supermove_allowed": _supermove_allowed(game_data, phase),
            "single_supermove": game_data["options"]["single_supermove"],
            "supermove_any_player": game_data["options"]["supermove_any_player"],
            "valid_actions": self.get_valid_actions(game_data, phase, player_id),
        }

    def parse_ai_action(
        self,
        response: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> Action:
        action_type = phase.name
        if phase.expected_actions:
            action_type = phase.expected_actions[0].action_type
        return Action(action_type=action_type, player_id=player_id, payload=response)

    def resolve_concurrent_actions(
        self,
        game_data: dict,
        phase: Phase,
        actions: dict[str, Action],
        players: list[Player],
    ) -> TransitionResult:
        raise InvalidActionError("Flows has no concurrent phases")

    def on_player_forfeit(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        players: list[Player],
    ) -> TransitionResult | None:
        if phase.name not in ("place_tile", "place_replaced_tile"):
            return None
        if not _is_expected(phase, player_id):
            return None

        # Hand back the tile in hand and move on.
        if game_data["current_tile"] is not None:
            game_data["tile_deck"].append(game_data["current_tile"])
            game_data["current_tile"] = None
        game_data["supermove_in_progress"] = False

        next_index = (phase.metadata["player_index"] + 1) % len(game_data["seats"])
        return TransitionResult(
            game_data=game_data,
            events=[Event(event_type="turn_skipped", player_id=player_id)],
            next_phase=_draw_phase(next_index),
            scores=_zero_scores(game_data),
        )

    def get_spectator_summary(
        self,
        game_data: dict,
        phase: Phase,
        players: list[Player],
    ) -> dict:
        current = None
        if phase.expected_actions:
            current = phase.expected_actions[0].player_id
        return {
            "phase": phase.name,
            "current_player": current,
            "tiles_placed": len(game_data["board"]["tiles"]),
            "tiles_remaining": len(game_data["tile_deck"]),
            "edges": {s["player_id"]: s["edge_position"] for s in game_data["seats"]},
        }


# ------------------------------------------------------------------ #
#  Helpers
# ------------------------------------------------------------------ #


def _resolve_options(options: dict, num_players: int) -> dict:
    return {
        "board_radius": options.get("board_radius", settings.board_radius),
        "supermove": options.get("supermove", settings.supermove),
        "single_supermove": options.get("single_supermove", settings.single_supermove),
        "supermove_any_player": options.get(
            "supermove_any_player", settings.supermove_any_player,
        ),
        "teams": options.get("teams", num_players in TEAM_SEAT_PAIRS),
        "tile_distribution": options.get(
            "tile_distribution", [settings.tiles_per_type] * len(TileType),
        ),
        "edge_selection": options.get("edge_selection", "fixed"),
    }


def _seat_teams(seats: list[dict], enabled: bool) -> list[dict]:
    if not enabled:
        return []
    pairs = TEAM_SEAT_PAIRS.get(len(seats), [])
    return [
        {"player1_id": seats[a]["player_id"], "player2_id": seats[b]["player_id"]}
        for a, b in pairs
    ]


def _seats(game_data: dict) -> list[FlowPlayer]:
    return [FlowPlayer(**seat) for seat in game_data["seats"]]


def _teams(game_data: dict) -> list[Team]:
    return [Team(**team) for team in game_data["teams"]]


def _supermove_allowed(game_data: dict, phase: Phase) -> bool:
    return game_data["options"]["supermove"] and phase.name == "place_tile"


def _is_expected(phase: Phase, player_id: PlayerId) -> bool:
    return any(ea.player_id == player_id for ea in phase.expected_actions)


def _check_turn(phase: Phase, action: Action) -> None:
    if not _is_expected(phase, action.player_id):
        raise NotYourTurnError(f"It is not {action.player_id}'s turn")


def _move_payload(kind: str, pos: HexPosition, rotation: int) -> dict:
    return {"kind": kind, "row": pos.row, "col": pos.col, "rotation": rotation}


def _choose_edge_phase(player_id: PlayerId, index: int) -> Phase:
    return Phase(
        name="choose_edge",
        concurrent_mode=ConcurrentMode.SEQUENTIAL,
        expected_actions=[ExpectedAction(player_id=player_id, action_type="choose_edge")],
        metadata={"player_index": index},
    )


def _draw_phase(index: int) -> Phase:
    return Phase(name="draw_tile", auto_resolve=True, metadata={"player_index": index})


def _tile_phase(name: str, player_id: PlayerId, index: int) -> Phase:
    return Phase(
        name=name,
        concurrent_mode=ConcurrentMode.SEQUENTIAL,
        expected_actions=[ExpectedAction(player_id=player_id, action_type="place_tile")],
        metadata={"player_index": index},
    )


def _seating_event(game_data: dict) -> Event:
    return Event(
        event_type="seating_complete",
        payload={
            "edges": {s["player_id"]: s["edge_position"] for s in game_data["seats"]},
            "teams": game_data["teams"],
        },
    )


def _evaluate_board(
    game_data: dict, board: Board, seats: list[FlowPlayer], teams: list[Team],
) -> VictoryResult | None:
    radius = game_data["board_radius"]
    flow_result = compute_flows(board, seats, radius)
    game_data["flow_edges"] = flow_result.flow_edges_to_data()
    return check_victory(
        board, flow_result, seats, teams, radius,
        supermove_enabled=game_data["options"]["supermove"],
    )


def _constraint_win(
    mover: FlowPlayer, seats: list[FlowPlayer], teams: list[Team],
) -> VictoryResult:
    party = party_of(mover.player_id, get_parties(seats, teams)) or (mover,)
    return VictoryResult(
        winners=[member.player_id for member in party],
        win_type=WinType.CONSTRAINT,
    )


def _zero_scores(game_data: dict) -> dict[str, float]:
    return {seat["player_id"]: 0.0 for seat in game_data["seats"]}


def _history_moves(game_data: dict) -> list[tuple[PlayerId, PlacedTile]]:
    return [
        (
            entry["player_id"],
            PlacedTile(
                tile_type=TileType(entry["tile"]),
                rotation=entry["rotation"],
                position=HexPosition(entry["row"], entry["col"]),
            ),
        )
        for entry in game_data["move_history"]
    ]


def _move_notation(game_data: dict) -> list[str]:
    if any(seat["edge_position"] is None for seat in game_data["seats"]):
        return []
    return format_move_history(
        _history_moves(game_data), _seats(game_data), game_data["board_radius"],
    )


def _finish(
    game_data: dict,
    victory: VictoryResult,
    cause: str,
    events: list[Event],
) -> TransitionResult:
    scores = _zero_scores(game_data)
    for pid in victory.winners:
        scores[pid] = 1.0

    record = format_game_record(
        _history_moves(game_data), _seats(game_data), game_data["board_radius"],
    )

    logger.info(
        "Flows game over: %s win for %s (%s)",
        victory.win_type.value, ", ".join(victory.winners), cause,
    )
    events = [
        *events,
        Event(
            event_type="game_won",
            payload={
                "winners": list(victory.winners),
                "win_type": victory.win_type.value,
                "cause": cause,
            },
        ),
    ]
    return TransitionResult(
        game_data=game_data,
        events=events,
        next_phase=Phase(name="game_over"),
        scores=scores,
        game_over=GameResult(
            winners=list(victory.winners),
            final_scores=scores,
            reason=victory.win_type.value,
            details={"cause": cause, "record": record},
        ),
    )
