from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from shared.db.connection import Database
from shared.db.round_repository import SqliteRoundRepository
from wagers.logic.enums import RoundStatus
from wagers.logic.state import Course, DotsConfig, Hole, Player, RoundSnapshot, Score

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from wagers.logic.state import Game, Press


# ============================================================================
# Test Round Builder Helpers
# ============================================================================


def create_course(pars: Sequence[int] | None = None) -> Course:
    """18 holes; hole N has handicap rank N so strokes fall on the first holes."""
    pars = pars if pars is not None else [4] * 18
    return Course(holes=tuple(Hole(hole_number=n, par=par, handicap_rank=n) for n, par in enumerate(pars, start=1)))


def create_player(
    player_id: str,
    strokes: Sequence[int | None] = (),
    *,
    name: str | None = None,
    handicap: int | None = 0,
    putts: Sequence[int | None] = (),
) -> Player:
    """Create a player whose Nth stroke/putt entry is hole N. None leaves the hole unscored."""
    scores = []
    for i in range(max(len(strokes), len(putts))):
        hole_strokes = strokes[i] if i < len(strokes) else None
        hole_putts = putts[i] if i < len(putts) else None
        if hole_strokes is None and hole_putts is None:
            continue
        scores.append(Score(hole_number=i + 1, strokes=hole_strokes, putts=hole_putts))
    return Player(
        player_id=player_id,
        name=name if name is not None else player_id.upper(),
        course_handicap=handicap,
        scores=tuple(scores),
    )


def create_snapshot(
    players: Sequence[Player],
    games: Sequence[Game] = (),
    *,
    presses: Sequence[Press] = (),
    round_id: str = "r1",
    owner_id: str | None = None,
    status: RoundStatus = RoundStatus.ACTIVE,
    course: Course | None = None,
    dots: DotsConfig | None = None,
) -> RoundSnapshot:
    return RoundSnapshot(
        round_id=round_id,
        owner_id=owner_id if owner_id is not None else players[0].player_id,
        status=status,
        players=tuple(players),
        course=course or create_course(),
        games=tuple(games),
        presses=tuple(presses),
        dots=dots,
    )


def par_round(par: int = 4) -> list[int]:
    return [par] * 18


def total_money(standings) -> Decimal:  # noqa: ANN001
    return sum((s.money for s in standings), Decimal(0))


@pytest.fixture
def repo(tmp_path: Path) -> Iterator[SqliteRoundRepository]:
    db = Database(tmp_path / "wagers.db")
    db.connect()
    yield SqliteRoundRepository(db)
    db.close()
