"""
Bingo-Bango-Bongo: three points a hole, recorded by the group.

Bingo is first on the green, bango closest to the pin once everyone is on,
bongo first in the hole. Money is points above or below an equal share of
the points awarded (54 on a complete round), times the bet.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.money import to_money, to_points, zero_sum_money
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import BingoBangoBongoHole, BingoBangoBongoResult, BingoBangoBongoStanding

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import BingoBangoBongoGame, Player


def score_bingo_bango_bongo(players: Sequence[Player], game: BingoBangoBongoGame) -> BingoBangoBongoResult:
    if not players:
        return BingoBangoBongoResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=[], standings=[])

    awards = {a.hole_number: a for a in game.awards}
    tally = {p.player_id: {"bingo": 0, "bango": 0, "bongo": 0} for p in players}
    holes: list[BingoBangoBongoHole] = []

    for hole_number in ALL_HOLES:
        award = awards.get(hole_number)
        if award is None:
            holes.append(BingoBangoBongoHole(hole=hole_number))
            continue
        for kind, player_id in (("bingo", award.bingo_id), ("bango", award.bango_id), ("bongo", award.bongo_id)):
            # awards for players outside the game are ignored
            if player_id in tally:
                tally[player_id][kind] += 1
        holes.append(
            BingoBangoBongoHole(
                hole=hole_number,
                bingo_id=award.bingo_id,
                bango_id=award.bango_id,
                bongo_id=award.bongo_id,
            )
        )

    totals = {player_id: sum(points.values()) for player_id, points in tally.items()}
    # 54 / n on a fully recorded round; unrecorded points are not owed by anyone
    fair_share = Fraction(sum(totals.values()), len(players))
    bet = Fraction(to_money(game.bet_amount))
    money = zero_sum_money({player_id: (total - fair_share) * bet for player_id, total in totals.items()})

    standings = [
        BingoBangoBongoStanding(
            player_id=p.player_id,
            name=p.display_name,
            points=to_points(totals[p.player_id]),
            money=money[p.player_id],
            **tally[p.player_id],
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.points, reverse=True)
    return BingoBangoBongoResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=holes, standings=standings)
