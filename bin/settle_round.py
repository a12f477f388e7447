"""Score a round snapshot and print its standings and settlements.

Usage: python bin/settle_round.py <snapshot.json> [--db PATH]

Without --db the settlements are only previewed. With --db the round is
finalized into that sqlite database (created if missing); a round can be
finalized only once.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from shared.db import Database, SqliteRoundRepository
from shared.logging import setup_logging
from wagers.logic.exceptions import WagerError
from wagers.logic.state import RoundSnapshot
from wagers.logic.types import Settlement
from wagers.logic.validation import parse_snapshot
from wagers.service.settings import WagerServiceSettings
from wagers.service.wager_service import WagerService

logger = structlog.get_logger()


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score and settle a golf round snapshot")
    parser.add_argument("snapshot", type=Path, help="round snapshot JSON file")
    parser.add_argument("--db", type=Path, default=None, help="sqlite database to finalize the round into")
    return parser.parse_args(argv)


def _print_settlements(settlements: list[Settlement]) -> None:
    if not settlements:
        print("No money changes hands.")
        return
    for s in settlements:
        print(f"  {s.from_id} pays {s.to_id} ${s.amount}")


async def _finalize(service: WagerService, repository: SqliteRoundRepository, snapshot: RoundSnapshot) -> None:
    await repository.create_round(snapshot.round_id, snapshot.owner_id, snapshot.status.value)
    result = await service.finalize(snapshot)
    print(f"Round {result.round_id} finalized at {result.finalized_at.isoformat()}")
    _print_settlements(result.settlements)


async def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    settings = WagerServiceSettings()
    setup_logging(settings.log_dir)

    try:
        snapshot = parse_snapshot(args.snapshot.read_text(encoding="utf-8"))
    except OSError as e:
        print(f"Error: cannot read {args.snapshot}: {e}")
        return 1
    except WagerError as e:
        print(f"Error: {e.message}")
        return 1

    db = Database(args.db or settings.db_path)
    if args.db is not None:
        db.connect()
    repository = SqliteRoundRepository(db)
    service = WagerService(repository, settings.to_rules())

    try:
        calculation = service.calculate(snapshot)
        print(calculation.model_dump_json(indent=2))
        if args.db is None:
            plan = service.preview_settlements(snapshot)
            print("Settlements (preview):")
            _print_settlements(plan.settlements)
        else:
            await _finalize(service, repository, snapshot)
    except WagerError as e:
        logger.warning("settle round failed", round_id=snapshot.round_id, code=e.code, error=e.message)
        print(f"Error [{e.code.value}]: {e.message}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
