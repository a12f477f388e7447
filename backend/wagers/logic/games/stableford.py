"""
Stableford: points for net score against par, paid against the group average.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import to_money, to_points, zero_sum_money
from wagers.logic.state import ALL_HOLES, FRONT_NINE
from wagers.logic.types import HolePoints, PointsHole, SplitStanding, StablefordResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import Course, Player, StablefordGame

DEFAULT_PAR = 4


def stableford_points(net: int, par: int) -> int:
    """Points for one hole: albatross or better 5, eagle 4, birdie 3, par 2, bogey 1, else 0."""
    diff = net - par
    if diff <= -3:
        return 5
    if diff >= 2:
        return 0
    return 2 - diff


def score_stableford(players: Sequence[Player], course: Course, game: StablefordGame) -> StablefordResult:
    if not players:
        return StablefordResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=[], standings=[])

    card = NetScoreCard(players, course)
    front = {p.player_id: 0 for p in players}
    back = {p.player_id: 0 for p in players}
    holes: list[PointsHole] = []

    for hole_number in ALL_HOLES:
        hole = course.hole(hole_number)
        par = hole.par if hole is not None else DEFAULT_PAR
        nets = card.all_net(hole_number)
        scores = []
        for player in players:
            gross = card.gross(player.player_id, hole_number)
            if nets is None:
                scores.append(HolePoints(player_id=player.player_id, gross=gross))
                continue
            net = nets[player.player_id]
            points = stableford_points(net, par)
            if hole_number in FRONT_NINE:
                front[player.player_id] += points
            else:
                back[player.player_id] += points
            scores.append(HolePoints(player_id=player.player_id, gross=gross, net=net, points=to_points(points)))
        holes.append(PointsHole(hole=hole_number, scores=scores))

    totals = {player_id: front[player_id] + back[player_id] for player_id in front}
    average = Fraction(sum(totals.values()), len(players))
    bet = Fraction(to_money(game.bet_amount))
    money = zero_sum_money({player_id: (total - average) * bet for player_id, total in totals.items()})

    standings = [
        SplitStanding(
            player_id=p.player_id,
            name=p.display_name,
            points=to_points(totals[p.player_id]),
            money=money[p.player_id],
            front_points=to_points(front[p.player_id]),
            back_points=to_points(back[p.player_id]),
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.points, reverse=True)
    return StablefordResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=holes, standings=standings)
