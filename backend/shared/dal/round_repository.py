"""Abstract interface for round settlement persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from shared.dal.models import GameResultRecord, PressOutcomeRecord, RoundRecord, SettlementRecord


class FinalizationConflictError(Exception):
    """The round was completed or settled by someone else before this write."""


class FinalizationWriteError(Exception):
    """Storage rejected a finalization record for a reason other than a prior finalization."""


class RoundRepository(ABC):
    """Abstract interface for round settlement persistence."""

    @abstractmethod
    async def create_round(self, round_id: str, owner_id: str, status: str = "ACTIVE") -> None: ...

    @abstractmethod
    async def get_round(self, round_id: str) -> RoundRecord | None: ...

    @abstractmethod
    async def get_round_status(self, round_id: str) -> str | None: ...

    @abstractmethod
    async def count_settlements(self, round_id: str) -> int: ...

    @abstractmethod
    async def finalize_round(
        self,
        round_id: str,
        settlements: list[SettlementRecord],
        press_outcomes: list[PressOutcomeRecord],
        game_results: list[GameResultRecord],
        finalized_at: datetime,
    ) -> None:
        """
        Write every finalization record and complete the round in one transaction.

        Raises FinalizationConflictError, leaving storage untouched, when the
        round is missing, already COMPLETED, or already has settlements.
        Raises FinalizationWriteError, also leaving storage untouched, when any
        other record is rejected.
        """

    @abstractmethod
    async def get_settlements(self, round_id: str) -> list[SettlementRecord]: ...

    @abstractmethod
    async def get_press_outcomes(self, round_id: str) -> list[PressOutcomeRecord]: ...

    @abstractmethod
    async def get_game_results(self, round_id: str) -> list[GameResultRecord]: ...
