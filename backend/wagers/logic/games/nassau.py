"""
Nassau: three independent match-play bets between two players.

Front nine, back nine, and the full eighteen are each worth the bet. A
segment goes to whoever is up after the holes played so far; a segment
with no holes played, or that is all square, pays nothing.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from wagers.logic.handicap import NetScoreCard
from wagers.logic.match import match_result
from wagers.logic.money import to_money
from wagers.logic.types import MatchResult, NassauResult, Obligation, PlayerStanding

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import Course, NassauGame, Player


def score_nassau(players: Sequence[Player], course: Course, game: NassauGame) -> NassauResult:
    first, second = players
    card = NetScoreCard(players, course)
    front = match_result(card, first.player_id, second.player_id, 1, 9)
    back = match_result(card, first.player_id, second.player_id, 10, 18)
    overall = match_result(card, first.player_id, second.player_id, 1, 18)

    money = {first.player_id: Decimal(0), second.player_id: Decimal(0)}
    for ob in nassau_obligations(game, (front, back, overall)):
        money[ob.to_id] += ob.amount
        money[ob.from_id] -= ob.amount

    return NassauResult(
        game_id=game.game_id,
        bet_amount=game.bet_amount,
        front=front,
        back=back,
        overall=overall,
        standings=[
            PlayerStanding(player_id=p.player_id, name=p.display_name, money=to_money(money[p.player_id]))
            for p in players
        ],
    )


def nassau_obligations(game: NassauGame, segments: Sequence[MatchResult]) -> list[Obligation]:
    """One obligation per decided segment, loser to winner, for the bet amount."""
    amount = to_money(game.bet_amount)
    obligations: list[Obligation] = []
    for label, segment in zip(("front", "back", "overall"), segments, strict=True):
        if segment.winner_id is None or segment.loser_id is None or amount <= 0:
            continue
        obligations.append(
            Obligation(
                from_id=segment.loser_id,
                to_id=segment.winner_id,
                amount=amount,
                source=f"{game.game_id}:{label}",
            )
        )
    return obligations
