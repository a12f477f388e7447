"""
Wolf: a rotating wolf either picks a partner or plays alone against the pack.

The wolf rotates through the roster by hole unless a decision was recorded
for that hole. With a partner it is best ball 2-vs-rest for the bet per
player; alone the wolf risks the bet times the number of opponents (or the
blind multiplier when going lone before anyone hits), split evenly over the
pack. Tied best balls pay nothing.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.enums import WolfOutcome
from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import to_money, zero_sum_money
from wagers.logic.settings import DEFAULT_RULES
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import PlayerStanding, WolfHole, WolfResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Course, Player, WolfDecision, WolfGame


def rotation_player(players: Sequence[Player], hole_number: int) -> str:
    """Default player for a rotating role (wolf, banker) on a hole."""
    return players[(hole_number - 1) % len(players)].player_id


def score_wolf(
    players: Sequence[Player],
    course: Course,
    game: WolfGame,
    rules: WagerRules = DEFAULT_RULES,
) -> WolfResult:
    if not players:
        return WolfResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=[], standings=[])

    card = NetScoreCard(players, course)
    decisions = {d.hole_number: d for d in game.decisions}
    bet = Fraction(to_money(game.bet_amount))
    exact = {p.player_id: Fraction(0) for p in players}
    holes: list[WolfHole] = []

    for hole_number in ALL_HOLES:
        wolf_id, partner_id, is_lone, is_blind = _hole_roles(players, decisions.get(hole_number), hole_number)
        hole = WolfHole(
            hole=hole_number,
            wolf_id=wolf_id,
            partner_id=partner_id,
            is_lone_wolf=is_lone,
            is_blind=is_blind,
        )
        holes.append(hole)

        nets = card.all_net(hole_number)
        if nets is None:
            continue

        wolf_side = [wolf_id] if is_lone else [wolf_id, partner_id]
        pack = [p.player_id for p in players if p.player_id not in wolf_side]
        hole.wolf_team_score = min(nets[player_id] for player_id in wolf_side)
        if not pack:
            continue
        hole.other_team_score = min(nets[player_id] for player_id in pack)

        if is_lone:
            multiplier = rules.blind_wolf_multiplier if is_blind else len(players) - 1
            stake = bet * multiplier
        else:
            stake = bet
        hole.stake = to_money(stake)

        if hole.wolf_team_score < hole.other_team_score:
            hole.outcome = WolfOutcome.WOLF
            sign = 1
        elif hole.other_team_score < hole.wolf_team_score:
            hole.outcome = WolfOutcome.PACK
            sign = -1
        else:
            hole.outcome = WolfOutcome.TIE
            continue

        if is_lone:
            exact[wolf_id] += sign * stake
            for player_id in pack:
                exact[player_id] -= sign * stake / len(pack)
        else:
            for player_id in wolf_side:
                exact[player_id] += sign * bet
            for player_id in pack:
                exact[player_id] -= sign * bet

    money = zero_sum_money(exact)
    standings = [
        PlayerStanding(
            player_id=p.player_id,
            name=p.display_name,
            points=money[p.player_id],
            money=money[p.player_id],
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.money, reverse=True)
    return WolfResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=holes, standings=standings)


def _hole_roles(
    players: Sequence[Player],
    decision: WolfDecision | None,
    hole_number: int,
) -> tuple[str, str | None, bool, bool]:
    """Resolve (wolf, partner, lone, blind) for a hole."""
    if decision is None:
        return rotation_player(players, hole_number), None, True, False

    partner_id = decision.partner_id
    is_lone = decision.is_lone_wolf if decision.is_lone_wolf is not None else partner_id is None
    if partner_id is None:
        is_lone = True
    if is_lone:
        partner_id = None
    return decision.wolf_id, partner_id, is_lone, decision.is_blind and is_lone
