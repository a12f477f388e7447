"""
Banker: one player banks each hole against the best net of everyone else.

The banker rotates through the roster by hole unless a decision was
recorded. Beating the best other net collects the bet from every other
player; losing pays each of them; a tie moves nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wagers.logic.games.wolf import rotation_player
from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import ZERO, to_money
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import BankerHole, BankerResult, PlayerStanding

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import BankerGame, Course, Player


def score_banker(players: Sequence[Player], course: Course, game: BankerGame) -> BankerResult:
    if not players:
        return BankerResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=[], standings=[])

    card = NetScoreCard(players, course)
    decisions = {d.hole_number: d.banker_id for d in game.decisions}
    bet = to_money(game.bet_amount)
    money = {p.player_id: ZERO for p in players}
    holes: list[BankerHole] = []

    for hole_number in ALL_HOLES:
        banker_id = decisions.get(hole_number) or rotation_player(players, hole_number)
        nets = card.all_net(hole_number)
        others = [player_id for player_id in money if player_id != banker_id]
        if nets is None or banker_id not in nets or not others:
            holes.append(BankerHole(hole=hole_number, banker_id=banker_id))
            continue

        banker_net = nets[banker_id]
        best_other = min(nets[player_id] for player_id in others)
        banker_won: bool | None = None
        if banker_net != best_other:
            banker_won = banker_net < best_other
            sign = 1 if banker_won else -1
            money[banker_id] += sign * bet * len(others)
            for player_id in others:
                money[player_id] -= sign * bet
        holes.append(
            BankerHole(
                hole=hole_number,
                banker_id=banker_id,
                banker_net=banker_net,
                best_other_net=best_other,
                banker_won=banker_won,
            )
        )

    standings = [PlayerStanding(player_id=p.player_id, name=p.display_name, money=money[p.player_id]) for p in players]
    standings.sort(key=lambda s: s.money, reverse=True)
    return BankerResult(game_id=game.game_id, bet_amount=game.bet_amount, holes=holes, standings=standings)
