"""
Nines: nine points are shared out on every hole by net-score rank.

Players tied for a rank split the sum of the slots they occupy. Money is
points above or below the fair share of the pool, times the bet, for the
front nine, back nine, and total.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import to_money, to_points, zero_sum_money
from wagers.logic.state import ALL_HOLES, FRONT_NINE
from wagers.logic.types import HolePoints, NinesResult, PointsHole, SplitStanding

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from wagers.logic.state import Course, NinesGame, Player

POINTS_PER_HOLE = 9

# points for 1st, 2nd, ... keyed by group size
POINT_DISTRIBUTION: dict[int, tuple[int, ...]] = {
    2: (6, 3),
    3: (5, 3, 1),
    4: (5, 3, 1, 0),
}


def distribute_points(nets: Mapping[str, int]) -> dict[str, Fraction]:
    """Split the hole's nine points by rank, sharing the slots of tied players."""
    slots = POINT_DISTRIBUTION[len(nets)]
    ranked = sorted(nets, key=lambda player_id: nets[player_id])
    points: dict[str, Fraction] = {}
    i = 0
    while i < len(ranked):
        j = i + 1
        while j < len(ranked) and nets[ranked[j]] == nets[ranked[i]]:
            j += 1
        share = Fraction(sum(slots[i:j]), j - i)
        for player_id in ranked[i:j]:
            points[player_id] = share
        i = j
    return points


def score_nines(players: Sequence[Player], course: Course, game: NinesGame) -> NinesResult:
    count = len(players)
    if count == 0:
        return NinesResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=[], standings=[])

    card = NetScoreCard(players, course)
    front = {p.player_id: Fraction(0) for p in players}
    back = {p.player_id: Fraction(0) for p in players}
    front_scored = back_scored = 0
    holes: list[PointsHole] = []

    for hole_number in ALL_HOLES:
        nets = card.all_net(hole_number)
        if nets is None:
            holes.append(
                PointsHole(
                    hole=hole_number,
                    scores=[
                        HolePoints(player_id=p.player_id, gross=card.gross(p.player_id, hole_number))
                        for p in players
                    ],
                )
            )
            continue

        points = distribute_points(nets)
        bucket = front if hole_number in FRONT_NINE else back
        if hole_number in FRONT_NINE:
            front_scored += 1
        else:
            back_scored += 1
        for player_id, value in points.items():
            bucket[player_id] += value
        holes.append(
            PointsHole(
                hole=hole_number,
                scores=[
                    HolePoints(
                        player_id=p.player_id,
                        gross=card.gross(p.player_id, hole_number),
                        net=nets[p.player_id],
                        points=to_points(points[p.player_id]),
                    )
                    for p in players
                ],
            )
        )

    bet = Fraction(to_money(game.bet_amount))
    front_share = Fraction(POINTS_PER_HOLE * front_scored, count)
    back_share = Fraction(POINTS_PER_HOLE * back_scored, count)
    front_money = zero_sum_money({k: (v - front_share) * bet for k, v in front.items()})
    back_money = zero_sum_money({k: (v - back_share) * bet for k, v in back.items()})

    standings = [
        SplitStanding(
            player_id=p.player_id,
            name=p.display_name,
            points=to_points(front[p.player_id] + back[p.player_id]),
            money=front_money[p.player_id] + back_money[p.player_id],
            front_points=to_points(front[p.player_id]),
            back_points=to_points(back[p.player_id]),
            front_money=front_money[p.player_id],
            back_money=back_money[p.player_id],
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.points, reverse=True)
    return NinesResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=holes, standings=standings)
