"""
Dots: round-level junk side-bet.

Every recorded achievement (sandy, greenie, chip-in...) is one dot. Players
collect or pay the per-dot amount for each dot above or below the round
average.
"""

from __future__ import annotations

from collections import Counter
from fractions import Fraction
from typing import TYPE_CHECKING

from wagers.logic.money import to_money, to_points, zero_sum_money
from wagers.logic.types import DotsResult, PlayerStanding

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import DotsConfig, Player


def score_dots(players: Sequence[Player], config: DotsConfig) -> DotsResult:
    roster = {p.player_id for p in players}
    counts = Counter(a.player_id for a in config.achievements if a.player_id in roster)
    total = sum(counts.values())
    if not players:
        return DotsResult(amount_per_dot=config.amount_per_dot, total_dots=0, standings=[])

    average = Fraction(total, len(players))
    per_dot = Fraction(to_money(config.amount_per_dot))
    money = zero_sum_money({p.player_id: (counts[p.player_id] - average) * per_dot for p in players})

    standings = [
        PlayerStanding(
            player_id=p.player_id,
            name=p.display_name,
            points=to_points(counts[p.player_id]),
            money=money[p.player_id],
        )
        for p in players
    ]
    standings.sort(key=lambda s: s.points, reverse=True)
    return DotsResult(amount_per_dot=config.amount_per_dot, total_dots=total, standings=standings)
