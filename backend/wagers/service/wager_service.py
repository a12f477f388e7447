"""
Facade over the wager engine for the rest of the app.

Holds the configured rules and the round repository. Calculation and press
changes are pure and synchronous; finalization and settlement lookups go
through the repository and are async.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from wagers.logic.enums import SettlementStatus
from wagers.logic.exceptions import InvalidPressError, RoundNotFoundError
from wagers.logic.finalization import FinalizationCoordinator, compute_finalization
from wagers.logic.presses import cancel_press, open_press
from wagers.logic.scoring import calculate
from wagers.logic.settings import DEFAULT_RULES
from wagers.logic.types import Settlement

if TYPE_CHECKING:
    from shared.dal.round_repository import RoundRepository
    from wagers.logic.enums import PressSegment
    from wagers.logic.finalization import FinalizationPlan
    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Press, RoundSnapshot
    from wagers.logic.types import CalculationResult, FinalizationResult


class WagerService:
    def __init__(self, repository: RoundRepository, rules: WagerRules = DEFAULT_RULES) -> None:
        self._repository = repository
        self._rules = rules
        self._coordinator = FinalizationCoordinator(repository, rules)

    @property
    def rules(self) -> WagerRules:
        return self._rules

    def calculate(self, snapshot: RoundSnapshot) -> CalculationResult:
        return calculate(snapshot, self._rules)

    def preview_settlements(self, snapshot: RoundSnapshot) -> FinalizationPlan:
        """What finalization would write right now, without writing it."""
        return compute_finalization(snapshot, self._rules)

    def open_press(  # noqa: PLR0913
        self,
        snapshot: RoundSnapshot,
        game_id: str,
        segment: PressSegment,
        start_hole: int,
        initiator_id: str,
        parent_press_id: str | None = None,
        bet_multiplier: Decimal = Decimal(1),
    ) -> Press:
        return open_press(
            snapshot,
            game_id,
            segment,
            start_hole,
            initiator_id,
            parent_press_id=parent_press_id,
            bet_multiplier=bet_multiplier,
        )

    def cancel_press(self, snapshot: RoundSnapshot, press_id: str, requester_id: str) -> Press:
        press = next((p for p in snapshot.presses if p.press_id == press_id), None)
        if press is None:
            raise InvalidPressError(f"Press {press_id} not found")
        return cancel_press(press, requester_id, snapshot.owner_id)

    async def finalize(self, snapshot: RoundSnapshot) -> FinalizationResult:
        return await self._coordinator.finalize(snapshot)

    async def get_settlements(self, round_id: str) -> list[Settlement]:
        if await self._repository.get_round_status(round_id) is None:
            raise RoundNotFoundError(f"Round {round_id} not found")
        records = await self._repository.get_settlements(round_id)
        return [
            Settlement(from_id=r.from_id, to_id=r.to_id, amount=r.amount, status=SettlementStatus(r.status))
            for r in records
        ]
