"""Persistence models for the data access layer."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class RoundRecord(BaseModel, frozen=True):
    """Stored state of a round. Status is one of SETUP, ACTIVE, COMPLETED."""

    round_id: str
    owner_id: str
    status: str = "ACTIVE"
    created_at: datetime
    completed_at: datetime | None = None


class SettlementRecord(BaseModel, frozen=True):
    """Net debt between two players written when a round is finalized."""

    settlement_id: str
    round_id: str
    from_id: str
    to_id: str
    amount: Decimal  # always positive, in cents precision
    status: str = "PENDING"  # "PENDING" | "PAID" | "DISPUTED"
    created_at: datetime


class PressOutcomeRecord(BaseModel, frozen=True):
    """Terminal state of a press, written at finalization."""

    press_id: str
    round_id: str
    game_id: str
    status: str  # "WON" | "LOST" | "PUSHED" | "CANCELED"
    winner_id: str | None = None
    loser_id: str | None = None
    amount: Decimal = Decimal(0)


class GameResultRecord(BaseModel, frozen=True):
    """One player's net money in one game, kept for career stats."""

    round_id: str
    game_id: str
    player_id: str
    net_amount: Decimal
