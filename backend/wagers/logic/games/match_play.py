"""
Match play: a single 18-hole head-to-head contest.

Reports hole-by-hole winners and the golf closing convention ("3 & 2")
once the leader is up by more holes than remain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wagers.logic.handicap import NetScoreCard
from wagers.logic.match import hole_winner, match_result
from wagers.logic.money import ZERO, to_money
from wagers.logic.state import ALL_HOLES, HOLES_PER_ROUND
from wagers.logic.types import MatchPlayHole, MatchPlayResult, MatchResult, Obligation, PlayerStanding

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wagers.logic.state import Course, MatchPlayGame, Player


def score_match_play(players: Sequence[Player], course: Course, game: MatchPlayGame) -> MatchPlayResult:
    first, second = players
    card = NetScoreCard(players, course)

    holes: list[MatchPlayHole] = []
    for hole_number in ALL_HOLES:
        played, winner = hole_winner(card, first.player_id, second.player_id, hole_number)
        if not played:
            holes.append(MatchPlayHole(hole=hole_number))
            continue
        holes.append(
            MatchPlayHole(
                hole=hole_number,
                first_net=card.net(first.player_id, hole_number),
                second_net=card.net(second.player_id, hole_number),
                winner_id=winner,
            )
        )

    match = match_result(card, first.player_id, second.player_id, 1, HOLES_PER_ROUND)
    match_over = match.margin > match.holes_remaining

    amount = to_money(game.bet_amount)
    standings = []
    for player in players:
        money = ZERO
        if match.winner_id == player.player_id:
            money = amount
        elif match.loser_id == player.player_id:
            money = -amount
        standings.append(PlayerStanding(player_id=player.player_id, name=player.display_name, money=money))

    return MatchPlayResult(
        game_id=game.game_id,
        bet_amount=game.bet_amount,
        holes=holes,
        match=match,
        match_over=match_over,
        match_status=match_status(match, match_over),
        standings=standings,
    )


def match_status(match: MatchResult, match_over: bool) -> str:
    up = match.up
    if match_over and match.holes_remaining > 0:
        return f"{match.margin} & {match.holes_remaining}"
    if match.holes_remaining > 0:
        direction = "UP" if up > 0 else "DOWN" if up < 0 else ""
        if not direction:
            return f"AS thru {match.holes_played}"
        return f"{match.margin} {direction} thru {match.holes_played}"
    if up == 0:
        return "HALVED"
    return f"{match.margin} & 0"


def match_play_obligations(game: MatchPlayGame, match: MatchResult) -> list[Obligation]:
    amount = to_money(game.bet_amount)
    if match.winner_id is None or match.loser_id is None or amount <= 0:
        return []
    return [Obligation(from_id=match.loser_id, to_id=match.winner_id, amount=amount, source=f"{game.game_id}:match")]
