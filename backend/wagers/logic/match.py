"""
Head-to-head match play over a range of holes.

Shared by nassau segments, match play, and presses. Each hole goes to the
lower net score; halved holes carry no point. Holes where either player
has no score are skipped, so a match over a partially played range reports
only the holes both players finished.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wagers.logic.types import MatchResult

if TYPE_CHECKING:
    from wagers.logic.handicap import NetScoreCard


def hole_winner(card: NetScoreCard, first_id: str, second_id: str, hole_number: int) -> tuple[bool, str | None]:
    """Return (played, winner_id) for one hole."""
    first = card.net(first_id, hole_number)
    second = card.net(second_id, hole_number)
    if first is None or second is None:
        return False, None
    if first < second:
        return True, first_id
    if second < first:
        return True, second_id
    return True, None


def match_result(
    card: NetScoreCard,
    first_id: str,
    second_id: str,
    start_hole: int,
    end_hole: int,
) -> MatchResult:
    """Compute the match state between two players over holes start_hole..end_hole."""
    up = 0
    holes_played = 0
    last_hole_played = start_hole - 1
    for hole_number in range(start_hole, end_hole + 1):
        played, winner = hole_winner(card, first_id, second_id, hole_number)
        if not played:
            continue
        holes_played += 1
        last_hole_played = hole_number
        if winner == first_id:
            up += 1
        elif winner == second_id:
            up -= 1

    holes_remaining = (end_hole - start_hole + 1) - holes_played
    result = MatchResult(
        first_id=first_id,
        second_id=second_id,
        start_hole=start_hole,
        end_hole=end_hole,
        up=up,
        holes_played=holes_played,
        holes_remaining=holes_remaining,
        last_hole_played=last_hole_played,
        margin=abs(up),
    )
    if holes_played == 0:
        return result

    if up > 0:
        result.winner_id, result.loser_id = first_id, second_id
    elif up < 0:
        result.winner_id, result.loser_id = second_id, first_id
    result.status = segment_status(up, holes_remaining)
    return result


def segment_status(up: int, holes_remaining: int) -> str:
    if holes_remaining > 0:
        if up == 0:
            return f"AS ({holes_remaining} to play)"
        return f"{abs(up)} {_direction(up)} ({holes_remaining} to play)"
    if up == 0:
        return "TIED"
    return f"{abs(up)} & 0"


def _direction(up: int) -> str:
    return "UP" if up > 0 else "DOWN"
