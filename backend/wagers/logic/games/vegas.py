"""
Vegas: two teams of two, each hole scored as a two-digit team number.

A team's number is its lower net score followed by the higher one, so nets
of 4 and 5 make 45. The lower number wins the difference on the hole. Team
money is the running difference times the bet, shared equally by its two
players.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import ZERO, allocate_cents, from_cents, to_cents, to_money, zero_sum_money
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import Obligation, PlayerStanding, VegasHole, VegasResult, VegasTeamResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from wagers.logic.state import Course, Player, VegasGame


def team_number(nets: Iterable[int]) -> int:
    low, high = sorted(nets)
    return low * 10 + high


def score_vegas(players: Sequence[Player], course: Course, game: VegasGame) -> VegasResult:
    if game.teams is None or not players:
        return VegasResult(
            game_id=game.game_id,
            bet_amount=game.bet_amount,
            holes=[],
            teams=[],
            standings=[PlayerStanding(player_id=p.player_id, name=p.display_name) for p in players],
        )

    team1, team2 = game.teams.team1, game.teams.team2
    card = NetScoreCard(players, course)
    holes: list[VegasHole] = []
    total_diff = 0

    for hole_number in ALL_HOLES:
        nets = card.all_net(hole_number, (*team1, *team2))
        if nets is None:
            holes.append(VegasHole(hole=hole_number))
            continue
        first = team_number(nets[player_id] for player_id in team1)
        second = team_number(nets[player_id] for player_id in team2)
        diff = second - first
        total_diff += diff
        holes.append(VegasHole(hole=hole_number, team1_number=first, team2_number=second, diff=diff))

    bet = to_money(game.bet_amount)
    team_money = to_money(total_diff * bet)
    half = Fraction(team_money) / 2
    exact = {player_id: half for player_id in team1} | {player_id: -half for player_id in team2}
    money = zero_sum_money(exact)

    return VegasResult(
        game_id=game.game_id,
        bet_amount=game.bet_amount,
        holes=holes,
        teams=[
            VegasTeamResult(team_number=1, player_ids=team1, total_diff=total_diff, money=team_money),
            VegasTeamResult(team_number=2, player_ids=team2, total_diff=-total_diff, money=-team_money),
        ],
        standings=[
            PlayerStanding(player_id=p.player_id, name=p.display_name, money=money.get(p.player_id, ZERO))
            for p in players
        ],
    )


def vegas_obligations(result: VegasResult) -> list[Obligation]:
    """Each losing player pays each winning player a quarter of the team money."""
    if len(result.teams) != 2 or result.teams[0].money == 0:
        return []
    first, second = result.teams
    winners, losers = (first, second) if first.money > 0 else (second, first)
    money = {s.player_id: s.money for s in result.standings}

    obligations: list[Obligation] = []
    for loser_id in losers.player_ids:
        owed = -to_cents(money[loser_id])
        split = allocate_cents({winner_id: Fraction(owed, 200) for winner_id in winners.player_ids}, owed)
        for winner_id, cents in split.items():
            if cents > 0:
                obligations.append(
                    Obligation(
                        from_id=loser_id,
                        to_id=winner_id,
                        amount=from_cents(cents),
                        source=f"{result.game_id}:vegas",
                    )
                )
    return obligations
