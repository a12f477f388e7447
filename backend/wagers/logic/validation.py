"""
Configuration checks run before any game is scored.

Configuration errors (player counts, bet bounds, bad side data, duplicate
or unknown game types) are rejected here with domain errors. Missing
scores are not checked: they are normal mid-round data.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from wagers.logic.enums import GameType
from wagers.logic.exceptions import DuplicateGameTypeError, InvalidGameConfigError, UnknownGameTypeError
from wagers.logic.settings import DEFAULT_RULES, PLAYER_COUNT_RULES
from wagers.logic.state import (
    BankerGame,
    Game,
    RoundSnapshot,
    VegasGame,
    WolfGame,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Player

_game_adapter: TypeAdapter[Game] = TypeAdapter(Game)

_GAME_TYPES = {t.value for t in GameType}


def validate_game(game: Game, players: Sequence[Player], rules: WagerRules = DEFAULT_RULES) -> None:
    """Check one game against its roster. ``players`` is the game roster, not the round."""
    if game.bet_amount < 0:
        raise InvalidGameConfigError("Bet amount cannot be negative")
    if game.bet_amount > rules.max_bet_amount:
        raise InvalidGameConfigError(f"Bet amount cannot exceed ${rules.max_bet_amount}")

    rule = PLAYER_COUNT_RULES[game.type]
    if not rule.allows(len(players)):
        raise InvalidGameConfigError(f"{rule.message}. Currently has {len(players)} player(s).")

    roster = {p.player_id for p in players}
    if isinstance(game, VegasGame):
        if game.teams is None:
            raise InvalidGameConfigError("Vegas requires team assignments")
        members = [*game.teams.team1, *game.teams.team2]
        if len(set(members)) != 4 or not set(members) <= roster:
            raise InvalidGameConfigError("Vegas teams must be 4 different players from the game")
    elif isinstance(game, WolfGame):
        for decision in game.decisions:
            if decision.wolf_id not in roster:
                raise InvalidGameConfigError(f"Wolf on hole {decision.hole_number} is not in the game")
            if decision.partner_id is not None and (
                decision.partner_id not in roster or decision.partner_id == decision.wolf_id
            ):
                raise InvalidGameConfigError(f"Wolf partner on hole {decision.hole_number} is not valid")
    elif isinstance(game, BankerGame):
        for decision in game.decisions:
            if decision.banker_id not in roster:
                raise InvalidGameConfigError(f"Banker on hole {decision.hole_number} is not in the game")


def validate_round_games(snapshot: RoundSnapshot, rules: WagerRules = DEFAULT_RULES) -> None:
    """Check the games of a round: unique game ids and types, known participants, then each game."""
    ids = Counter(game.game_id for game in snapshot.games)
    repeated_ids = [game_id for game_id, count in ids.items() if count > 1]
    if repeated_ids:
        raise InvalidGameConfigError(f"Duplicate game id: {repeated_ids[0]}")

    types = Counter(game.type for game in snapshot.games)
    repeated = [game_type for game_type, count in types.items() if count > 1]
    if repeated:
        raise DuplicateGameTypeError(f"Duplicate game type: {repeated[0].value}")

    round_players = {p.player_id for p in snapshot.players}
    for game in snapshot.games:
        unknown = set(game.participant_ids) - round_players
        if unknown:
            raise InvalidGameConfigError(f"Participant(s) not in round: {', '.join(sorted(unknown))}")
        validate_game(game, snapshot.players_for(game), rules)


def parse_game(raw: dict[str, Any]) -> Game:
    """Build a game variant from a plain mapping."""
    if not isinstance(raw, dict):
        raise InvalidGameConfigError("Game configuration must be an object")
    _check_game_type(raw)
    try:
        return _game_adapter.validate_python(raw)
    except ValidationError as e:
        raise InvalidGameConfigError(f"Invalid game configuration: {e.errors()[0]['msg']}") from e


def parse_snapshot(data: str | bytes | dict[str, Any]) -> RoundSnapshot:
    """Build a round snapshot from JSON text or a plain mapping."""
    if isinstance(data, (str, bytes)):
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise InvalidGameConfigError(f"Invalid round data: {e}") from e
    else:
        raw = data
    if not isinstance(raw, dict):
        raise InvalidGameConfigError("Invalid round data: expected an object")

    games = raw.get("games", ())
    if isinstance(games, (list, tuple)):
        for game in games:
            if not isinstance(game, dict):
                raise InvalidGameConfigError("Invalid round data: each game must be an object")
            _check_game_type(game)
    try:
        return RoundSnapshot.model_validate(raw)
    except ValidationError as e:
        raise InvalidGameConfigError(f"Invalid round data: {e.errors()[0]['msg']}") from e


def _check_game_type(raw: dict[str, Any]) -> None:
    game_type = raw.get("type")
    if game_type not in _GAME_TYPES:
        raise UnknownGameTypeError(f"Unknown game type: {game_type}")
