"""
Skins: the sole lowest net score on a hole wins the pot.

The pot is the bet plus anything carried in. A tie for low carries the
whole pot to the next hole. A hole not yet scored by everyone neither pays
nor resets the carryover. Each player's money is what they won minus an
equal share of everything awarded.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING

import structlog

from wagers.logic.handicap import NetScoreCard
from wagers.logic.money import to_money, zero_sum_money
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import PlayerStanding, SkinHole, SkinsResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import Course, Player, SkinsGame

logger = structlog.get_logger()


def score_skins(players: Sequence[Player], course: Course, game: SkinsGame) -> SkinsResult:
    bet = to_money(game.bet_amount)
    skins: list[SkinHole] = []
    carryover = Decimal(0)
    won: dict[str, Decimal] = {p.player_id: Decimal(0) for p in players}

    if not players:
        return SkinsResult(
            game_id=game.game_id,
            bet_amount=game.bet_amount,
            skins=skins,
            total_pot=Decimal(0),
            carryover=carryover,
            standings=[],
        )

    card = NetScoreCard(players, course)
    for hole_number in ALL_HOLES:
        nets = card.all_net(hole_number)
        if nets is None:
            skins.append(SkinHole(hole=hole_number, carried_in=carryover))
            continue

        skin_value = bet + carryover
        lowest = min(nets.values())
        winners = [player_id for player_id, net in nets.items() if net == lowest]
        if len(winners) == 1:
            skins.append(SkinHole(hole=hole_number, winner_id=winners[0], value=skin_value, carried_in=carryover))
            won[winners[0]] += skin_value
            carryover = Decimal(0)
        else:
            skins.append(SkinHole(hole=hole_number, carried_in=carryover))
            carryover = skin_value

    total_pot = sum((s.value for s in skins), Decimal(0))
    share = Fraction(total_pot) / len(players)
    money = zero_sum_money({player_id: Fraction(amount) - share for player_id, amount in won.items()})
    logger.debug("skins scored", game_id=game.game_id, total_pot=str(total_pot), carryover=str(carryover))

    return SkinsResult(
        game_id=game.game_id,
        bet_amount=game.bet_amount,
        skins=skins,
        total_pot=total_pot,
        carryover=carryover,
        standings=[
            PlayerStanding(
                player_id=p.player_id,
                name=p.display_name,
                points=won[p.player_id],
                money=money[p.player_id],
            )
            for p in players
        ],
    )
