"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.models import GameResultRecord, PressOutcomeRecord, RoundRecord, SettlementRecord
from shared.dal.round_repository import FinalizationConflictError, FinalizationWriteError, RoundRepository

__all__ = [
    "FinalizationConflictError",
    "FinalizationWriteError",
    "GameResultRecord",
    "PressOutcomeRecord",
    "RoundRecord",
    "RoundRepository",
    "SettlementRecord",
]
