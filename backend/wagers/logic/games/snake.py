"""Snake: the last player to three-putt holds the snake and pays everyone."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wagers.logic.money import ZERO, to_money
from wagers.logic.state import ALL_HOLES
from wagers.logic.types import PlayerStanding, SnakeResult, ThreePutt

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import Player, SnakeGame

THREE_PUTT = 3


def score_snake(players: Sequence[Player], game: SnakeGame) -> SnakeResult:
    holder: str | None = None
    history: list[ThreePutt] = []
    for hole_number in ALL_HOLES:
        for player in players:
            putts = player.putts_on(hole_number)
            if putts is not None and putts >= THREE_PUTT:
                holder = player.player_id
                history.append(ThreePutt(hole=hole_number, player_id=player.player_id))

    bet = to_money(game.bet_amount)
    standings = []
    for player in players:
        money = ZERO
        if holder is not None:
            money = -bet * (len(players) - 1) if player.player_id == holder else bet
        standings.append(
            PlayerStanding(
                player_id=player.player_id,
                name=player.display_name,
                points=sum(1 for t in history if t.player_id == player.player_id),
                money=money,
            )
        )

    return SnakeResult(
        game_id=game.game_id,
        bet_amount=game.bet_amount,
        snake_holder_id=holder,
        three_putts=history,
        standings=standings,
    )
