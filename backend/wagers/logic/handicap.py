"""
Handicap stroke allocation and net scoring.

Strokes are relative to the lowest handicap among the players of one game,
not the whole round: a 2-player nassau inside an 8-player round gets its
own allowance. Strokes fall on holes from handicap rank 1 (hardest)
downward, at most one per hole.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from wagers.logic.state import Course, Hole, Player


def min_handicap(players: Iterable[Player]) -> int:
    """Lowest course handicap in the group; players without one count as scratch."""
    return min((p.course_handicap or 0 for p in players), default=0)


def handicap_diff(player: Player, players: Iterable[Player]) -> int:
    return (player.course_handicap or 0) - min_handicap(players)


def strokes_received(player: Player, hole: Hole | None, players: Iterable[Player]) -> int:
    """Number of handicap strokes the player gets on this hole (0 or 1)."""
    if hole is None:
        return 0
    return 1 if hole.handicap_rank <= handicap_diff(player, players) else 0


def net_score(player: Player, hole: Hole, players: Iterable[Player]) -> int | None:
    """Gross strokes minus strokes received. None when the hole has not been played."""
    gross = player.strokes_on(hole.hole_number)
    if gross is None:
        return None
    return gross - strokes_received(player, hole, players)


class NetScoreCard:
    """
    Net scores for one game roster.

    The allowance of every player is computed once against the roster's
    minimum handicap; lookups are by player id and hole number.
    """

    def __init__(self, players: Sequence[Player], course: Course) -> None:
        self._players = {p.player_id: p for p in players}
        self._order = [p.player_id for p in players]
        self._course = course
        low = min_handicap(players)
        self._allowance = {p.player_id: (p.course_handicap or 0) - low for p in players}

    @property
    def player_ids(self) -> list[str]:
        return list(self._order)

    def allowance(self, player_id: str) -> int:
        return self._allowance[player_id]

    def strokes(self, player_id: str, hole_number: int) -> int:
        hole = self._course.hole(hole_number)
        if hole is None:
            return 0
        return 1 if hole.handicap_rank <= self._allowance[player_id] else 0

    def gross(self, player_id: str, hole_number: int) -> int | None:
        return self._players[player_id].strokes_on(hole_number)

    def net(self, player_id: str, hole_number: int) -> int | None:
        gross = self.gross(player_id, hole_number)
        if gross is None:
            return None
        return gross - self.strokes(player_id, hole_number)

    def all_net(self, hole_number: int, player_ids: Iterable[str] | None = None) -> dict[str, int] | None:
        """Net scores of every (or the given) player on a hole, or None if any is missing."""
        result: dict[str, int] = {}
        for player_id in player_ids if player_ids is not None else self._order:
            value = self.net(player_id, hole_number)
            if value is None:
                return None
            result[player_id] = value
        return result
