"""
Game dispatch and live round calculation.

``score_game`` maps each game variant to its scorer with an exhaustive
match, so adding a variant to ``Game`` without a scorer is a type error.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, assert_never

import structlog

from wagers.logic.games.banker import score_banker
from wagers.logic.games.bingo_bango_bongo import score_bingo_bango_bongo
from wagers.logic.games.dots import score_dots
from wagers.logic.games.match_play import score_match_play
from wagers.logic.games.nassau import score_nassau
from wagers.logic.games.nines import score_nines
from wagers.logic.games.skins import score_skins
from wagers.logic.games.snake import score_snake
from wagers.logic.games.stableford import score_stableford
from wagers.logic.games.vegas import score_vegas
from wagers.logic.games.wolf import score_wolf
from wagers.logic.presses import press_status
from wagers.logic.settings import DEFAULT_RULES, settles_at_finalization
from wagers.logic.state import (
    BankerGame,
    BingoBangoBongoGame,
    MatchPlayGame,
    NassauGame,
    NinesGame,
    SkinsGame,
    SnakeGame,
    StablefordGame,
    VegasGame,
    WolfGame,
)
from wagers.logic.types import CalculationResult
from wagers.logic.validation import validate_round_games

if TYPE_CHECKING:
    from wagers.logic.enums import GameType
    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Game, RoundSnapshot
    from wagers.logic.types import GameResult

logger = structlog.get_logger()


def score_game(snapshot: RoundSnapshot, game: Game, rules: WagerRules = DEFAULT_RULES) -> GameResult:
    """Score one game of the round over its own roster."""
    players = snapshot.players_for(game)
    course = snapshot.course
    match game:
        case NassauGame():
            return score_nassau(players, course, game)
        case MatchPlayGame():
            return score_match_play(players, course, game)
        case SkinsGame():
            return score_skins(players, course, game)
        case WolfGame():
            return score_wolf(players, course, game, rules)
        case NinesGame():
            return score_nines(players, course, game)
        case StablefordGame():
            return score_stableford(players, course, game)
        case VegasGame():
            return score_vegas(players, course, game)
        case SnakeGame():
            return score_snake(players, game)
        case BankerGame():
            return score_banker(players, course, game)
        case BingoBangoBongoGame():
            return score_bingo_bango_bongo(players, game)
        case _:
            assert_never(game)


def calculate(snapshot: RoundSnapshot, rules: WagerRules = DEFAULT_RULES) -> CalculationResult:
    """Live standings for every game, grouped by type and keyed by game id."""
    validate_round_games(snapshot, rules)

    results: dict[GameType, dict[str, GameResult]] = defaultdict(dict)
    statuses = []
    unsettled: list[str] = []
    for game in snapshot.games:
        results[game.type][game.game_id] = score_game(snapshot, game, rules)
        player_count = len(snapshot.players_for(game))
        if not settles_at_finalization(game.type, player_count):
            logger.warning(
                "game will not settle at finalization",
                round_id=snapshot.round_id,
                game_id=game.game_id,
                players=player_count,
            )
            unsettled.append(game.game_id)
        if isinstance(game, NassauGame | MatchPlayGame):
            statuses.append(press_status(snapshot, game, rules))

    dots = None
    if snapshot.dots is not None and snapshot.dots.amount_per_dot > 0:
        dots = score_dots(snapshot.players, snapshot.dots)

    logger.debug("round calculated", round_id=snapshot.round_id, games=len(snapshot.games))
    return CalculationResult(
        round_id=snapshot.round_id,
        results=dict(results),
        press_status=statuses,
        dots=dots,
        unsettled_game_ids=unsettled,
    )
