"""SQLite-backed round settlement repository."""

from __future__ import annotations

import asyncio
import sqlite3
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from shared.dal.models import GameResultRecord, PressOutcomeRecord, RoundRecord, SettlementRecord
from shared.dal.round_repository import FinalizationConflictError, FinalizationWriteError, RoundRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteRoundRepository(RoundRepository):
    """SQLite implementation of RoundRepository.

    Finalization runs as one BEGIN IMMEDIATE transaction that re-checks the
    round status and existing settlements before writing. The
    round_finalizations primary key rejects a second finalization even if
    another connection got past the checks.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_round(self, round_id: str, owner_id: str, status: str = "ACTIVE") -> None:
        """Insert a round. Logs a warning and returns on duplicate round_id."""
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO rounds (id, owner_id, status, created_at) VALUES (?, ?, ?, ?)",
                    (round_id, owner_id, status, datetime.now(UTC).isoformat()),
                )
            except sqlite3.IntegrityError:
                logger.warning("round already exists, ignoring duplicate create", round_id=round_id)

    async def get_round(self, round_id: str) -> RoundRecord | None:
        row = self._db.connection.execute(
            "SELECT id, owner_id, status, created_at, completed_at FROM rounds WHERE id = ?",
            (round_id,),
        ).fetchone()
        if row is None:
            return None
        return RoundRecord(
            round_id=row[0],
            owner_id=row[1],
            status=row[2],
            created_at=datetime.fromisoformat(row[3]),
            completed_at=datetime.fromisoformat(row[4]) if row[4] else None,
        )

    async def get_round_status(self, round_id: str) -> str | None:
        row = self._db.connection.execute("SELECT status FROM rounds WHERE id = ?", (round_id,)).fetchone()
        return row[0] if row else None

    async def count_settlements(self, round_id: str) -> int:
        row = self._db.connection.execute(
            "SELECT COUNT(*) FROM settlements WHERE round_id = ?",
            (round_id,),
        ).fetchone()
        return row[0]

    async def finalize_round(
        self,
        round_id: str,
        settlements: list[SettlementRecord],
        press_outcomes: list[PressOutcomeRecord],
        game_results: list[GameResultRecord],
        finalized_at: datetime,
    ) -> None:
        async with self._lock:
            conn = self._db.connection
            try:
                conn.execute("BEGIN IMMEDIATE")
                self._check_can_finalize(conn, round_id)
                conn.execute(
                    "INSERT INTO round_finalizations (round_id, finalized_at) VALUES (?, ?)",
                    (round_id, finalized_at.isoformat()),
                )
                conn.executemany(
                    "INSERT INTO settlements (id, round_id, from_id, to_id, amount, status, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    [
                        (
                            s.settlement_id,
                            round_id,
                            s.from_id,
                            s.to_id,
                            str(s.amount),
                            s.status,
                            s.created_at.isoformat(),
                        )
                        for s in settlements
                    ],
                )
                conn.executemany(
                    "INSERT INTO press_outcomes (press_id, round_id, game_id, status, winner_id, loser_id, amount) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    [
                        (p.press_id, round_id, p.game_id, p.status, p.winner_id, p.loser_id, str(p.amount))
                        for p in press_outcomes
                    ],
                )
                conn.executemany(
                    "INSERT INTO game_results (round_id, game_id, player_id, net_amount) VALUES (?, ?, ?, ?)",
                    [(round_id, g.game_id, g.player_id, str(g.net_amount)) for g in game_results],
                )
                conn.execute(
                    "UPDATE rounds SET status = 'COMPLETED', completed_at = ? WHERE id = ?",
                    (finalized_at.isoformat(), round_id),
                )
                conn.execute("COMMIT")
            except sqlite3.IntegrityError as exc:
                conn.execute("ROLLBACK")
                # only the one-row-per-round guard means another writer got there first
                if "round_finalizations" in str(exc):
                    logger.warning("round finalization conflicted", round_id=round_id, error=str(exc))
                    raise FinalizationConflictError(f"Round {round_id} was already finalized") from exc
                logger.error("round finalization rejected", round_id=round_id, error=str(exc))
                raise FinalizationWriteError(f"Round {round_id} could not be finalized: {exc}") from exc
            except Exception:
                conn.execute("ROLLBACK")
                raise

    async def get_settlements(self, round_id: str) -> list[SettlementRecord]:
        rows = self._db.connection.execute(
            "SELECT id, round_id, from_id, to_id, amount, status, created_at "
            "FROM settlements WHERE round_id = ? ORDER BY rowid",
            (round_id,),
        ).fetchall()
        return [
            SettlementRecord(
                settlement_id=row[0],
                round_id=row[1],
                from_id=row[2],
                to_id=row[3],
                amount=Decimal(row[4]),
                status=row[5],
                created_at=datetime.fromisoformat(row[6]),
            )
            for row in rows
        ]

    async def get_press_outcomes(self, round_id: str) -> list[PressOutcomeRecord]:
        rows = self._db.connection.execute(
            "SELECT press_id, round_id, game_id, status, winner_id, loser_id, amount "
            "FROM press_outcomes WHERE round_id = ? ORDER BY rowid",
            (round_id,),
        ).fetchall()
        return [
            PressOutcomeRecord(
                press_id=row[0],
                round_id=row[1],
                game_id=row[2],
                status=row[3],
                winner_id=row[4],
                loser_id=row[5],
                amount=Decimal(row[6]),
            )
            for row in rows
        ]

    async def get_game_results(self, round_id: str) -> list[GameResultRecord]:
        rows = self._db.connection.execute(
            "SELECT round_id, game_id, player_id, net_amount FROM game_results WHERE round_id = ? ORDER BY rowid",
            (round_id,),
        ).fetchall()
        return [
            GameResultRecord(round_id=row[0], game_id=row[1], player_id=row[2], net_amount=Decimal(row[3]))
            for row in rows
        ]

    @staticmethod
    def _check_can_finalize(conn: sqlite3.Connection, round_id: str) -> None:
        row = conn.execute("SELECT status FROM rounds WHERE id = ?", (round_id,)).fetchone()
        if row is None:
            raise FinalizationConflictError(f"Round {round_id} not found")
        if row[0] == "COMPLETED":
            raise FinalizationConflictError(f"Round {round_id} is already completed")
        existing = conn.execute("SELECT COUNT(*) FROM settlements WHERE round_id = ?", (round_id,)).fetchone()
        if existing[0] > 0:
            raise FinalizationConflictError(f"Settlements already exist for round {round_id}")
