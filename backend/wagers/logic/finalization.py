"""
Round finalization: score everything once and persist the settlements.

``compute_finalization`` is pure: it validates the games, scores them,
resolves presses, converts every result into obligations and nets them.
``FinalizationCoordinator`` guards against finalizing twice and hands the
plan to the repository, which writes it in a single transaction.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from pydantic import BaseModel

from shared.dal.models import GameResultRecord, PressOutcomeRecord, SettlementRecord
from shared.dal.round_repository import FinalizationConflictError, FinalizationWriteError
from wagers.logic.enums import RoundStatus
from wagers.logic.exceptions import (
    FinalizationFailedError,
    RoundAlreadyFinalizedError,
    RoundNotFoundError,
    SettlementsAlreadyExistError,
)
from wagers.logic.games.dots import score_dots
from wagers.logic.games.match_play import match_play_obligations
from wagers.logic.games.nassau import nassau_obligations
from wagers.logic.games.vegas import vegas_obligations
from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import ZERO
from wagers.logic.presses import PressTree, press_obligations, resolve_tree
from wagers.logic.scoring import score_game
from wagers.logic.settings import DEFAULT_RULES, FINALIZE_MIN_PLAYERS, settles_at_finalization
from wagers.logic.settlement import assert_conserved, check_limits, consolidate, obligations_from_standings
from wagers.logic.state import MatchPlayGame, NassauGame, VegasGame
from wagers.logic.types import (
    FinalizationResult,
    GameResultEntry,
    MatchPlayResult,
    NassauResult,
    Obligation,
    PressResolution,
    Settlement,
    VegasResult,
)
from wagers.logic.validation import validate_round_games

if TYPE_CHECKING:
    from shared.dal.round_repository import RoundRepository
    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Game, RoundSnapshot
    from wagers.logic.types import GameResult

logger = structlog.get_logger()


class FinalizationPlan(BaseModel):
    """Everything a finalization writes, computed before touching storage."""

    round_id: str
    obligations: list[Obligation]
    settlements: list[Settlement]
    press_resolutions: list[PressResolution]
    game_results: list[GameResultEntry]


def game_obligations(game: Game, result: GameResult) -> list[Obligation]:
    """Loser-to-winner debts of one scored game."""
    match game, result:
        case NassauGame(), NassauResult():
            return nassau_obligations(game, (result.front, result.back, result.overall))
        case MatchPlayGame(), MatchPlayResult():
            return match_play_obligations(game, result.match)
        case VegasGame(), VegasResult():
            return vegas_obligations(result)
        case _:
            return obligations_from_standings(result.standings, source=result.game_id)


def compute_finalization(snapshot: RoundSnapshot, rules: WagerRules = DEFAULT_RULES) -> FinalizationPlan:
    """Score the round and turn it into consolidated settlements. Does no I/O."""
    validate_round_games(snapshot, rules)
    log = logger.bind(round_id=snapshot.round_id)

    obligations: list[Obligation] = []
    resolutions: list[PressResolution] = []
    entries: list[GameResultEntry] = []

    for game in snapshot.games:
        players = snapshot.players_for(game)
        if not settles_at_finalization(game.type, len(players)):
            log.warning(
                "skipping game with too few players",
                game_id=game.game_id,
                game_type=game.type,
                players=len(players),
                required=FINALIZE_MIN_PLAYERS[game.type],
            )
            continue

        result = score_game(snapshot, game, rules)
        obligations.extend(game_obligations(game, result))
        entries.extend(
            GameResultEntry(game_id=game.game_id, player_id=s.player_id, net_amount=s.money) for s in result.standings
        )

        if isinstance(game, NassauGame | MatchPlayGame):
            tree = PressTree(snapshot.presses_for(game.game_id))
            game_resolutions = resolve_tree(tree, NetScoreCard(players, snapshot.course), game.bet_amount)
            resolutions.extend(game_resolutions)
            obligations.extend(press_obligations(game_resolutions))

    if snapshot.dots is not None and snapshot.dots.amount_per_dot > 0 and snapshot.dots.achievements:
        dots = score_dots(snapshot.players, snapshot.dots)
        obligations.extend(obligations_from_standings(dots.standings, source="dots"))

    check_limits(obligations, rules)
    settlements = consolidate(obligations, rules)
    assert_conserved(obligations, settlements)

    return FinalizationPlan(
        round_id=snapshot.round_id,
        obligations=obligations,
        settlements=settlements,
        press_resolutions=resolutions,
        game_results=entries,
    )


class FinalizationCoordinator:
    """Finalizes a round exactly once against a round repository."""

    def __init__(self, repository: RoundRepository, rules: WagerRules = DEFAULT_RULES) -> None:
        self._repository = repository
        self._rules = rules

    async def finalize(self, snapshot: RoundSnapshot) -> FinalizationResult:
        round_id = snapshot.round_id
        log = logger.bind(round_id=round_id)
        log.info("round finalize attempt", owner_id=snapshot.owner_id, games=len(snapshot.games))

        stored_status = await self._repository.get_round_status(round_id)
        if stored_status is None:
            raise RoundNotFoundError(f"Round {round_id} not found")
        if RoundStatus.COMPLETED in (snapshot.status, stored_status):
            raise RoundAlreadyFinalizedError("Round is already finalized")
        if await self._repository.count_settlements(round_id) > 0:
            raise SettlementsAlreadyExistError("Settlements already exist for this round")

        plan = compute_finalization(snapshot, self._rules)
        finalized_at = datetime.now(UTC)

        try:
            await self._repository.finalize_round(
                round_id,
                settlements=[
                    SettlementRecord(
                        settlement_id=str(uuid4()),
                        round_id=round_id,
                        from_id=s.from_id,
                        to_id=s.to_id,
                        amount=s.amount,
                        status=s.status.value,
                        created_at=finalized_at,
                    )
                    for s in plan.settlements
                ],
                press_outcomes=[
                    PressOutcomeRecord(
                        press_id=r.press_id,
                        round_id=round_id,
                        game_id=r.game_id,
                        status=r.status.value,
                        winner_id=r.winner_id,
                        loser_id=r.loser_id,
                        amount=r.amount,
                    )
                    for r in plan.press_resolutions
                ],
                game_results=[
                    GameResultRecord(
                        round_id=round_id,
                        game_id=e.game_id,
                        player_id=e.player_id,
                        net_amount=e.net_amount,
                    )
                    for e in plan.game_results
                ],
                finalized_at=finalized_at,
            )
        except FinalizationConflictError as exc:
            log.warning("round finalize conflict", error=str(exc))
            raise RoundAlreadyFinalizedError("Round is already finalized") from exc
        except FinalizationWriteError as exc:
            log.error("round finalize failed", error=str(exc))
            raise FinalizationFailedError("Round could not be finalized") from exc

        log.info(
            "round finalized",
            settlements=len(plan.settlements),
            total_amount=str(sum((s.amount for s in plan.settlements), ZERO)),
        )
        return FinalizationResult(
            round_id=round_id,
            settlements=plan.settlements,
            press_resolutions=plan.press_resolutions,
            game_results=plan.game_results,
            finalized_at=finalized_at,
        )
