"""
Press side-bets for nassau and match play games.

A press is a new match over the rest of a segment, started by the player
who is behind. Presses can themselves be pressed, so the presses of a game
form a forest. The tree is stored as an adjacency map from parent id to
child ids; every node is resolved on its own hole range, so resolution
order and the parent's outcome never matter.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from wagers.logic.enums import PRESSABLE_GAME_TYPES, GameType, PressSegment, PressStatus, RoundStatus
from wagers.logic.exceptions import InvalidPressError, PressNotActiveError, PressPermissionError
from wagers.logic.handicap import NetScoreCard
from wagers.logic.match import match_result
from wagers.logic.money import to_money
from wagers.logic.settings import DEFAULT_RULES
from wagers.logic.state import HOLES_PER_ROUND, Press
from wagers.logic.types import (
    ActivePressStatus,
    GamePressStatus,
    Obligation,
    PressResolution,
    SegmentPressStatus,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from wagers.logic.settings import WagerRules
    from wagers.logic.state import Game, PressableGame, RoundSnapshot

logger = structlog.get_logger()

# first and last hole of each segment
SEGMENT_RANGES: dict[PressSegment, tuple[int, int]] = {
    PressSegment.FRONT: (1, 9),
    PressSegment.BACK: (10, HOLES_PER_ROUND),
    PressSegment.OVERALL: (1, HOLES_PER_ROUND),
    PressSegment.MATCH: (1, HOLES_PER_ROUND),
}

GAME_SEGMENTS: dict[GameType, tuple[PressSegment, ...]] = {
    GameType.NASSAU: (PressSegment.FRONT, PressSegment.BACK, PressSegment.OVERALL),
    GameType.MATCH_PLAY: (PressSegment.MATCH,),
}


def segment_end(segment: PressSegment) -> int:
    return SEGMENT_RANGES[segment][1]


class PressTree:
    """Presses of one game keyed by id, with children listed per parent id."""

    def __init__(self, presses: Iterable[Press] = ()) -> None:
        self._nodes: dict[str, Press] = {}
        self._children: dict[str | None, list[str]] = defaultdict(list)
        for press in presses:
            if press.press_id in self._nodes:
                raise InvalidPressError(f"Duplicate press id {press.press_id}")
            self._nodes[press.press_id] = press
        for press in self._nodes.values():
            if press.parent_press_id is not None and press.parent_press_id not in self._nodes:
                raise InvalidPressError(f"Parent press {press.parent_press_id} not found")
            self._children[press.parent_press_id].append(press.press_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, press_id: object) -> bool:
        return press_id in self._nodes

    def __iter__(self) -> Iterator[Press]:
        """Depth-first, parents before children."""
        stack = list(reversed(self._children.get(None, [])))
        while stack:
            press_id = stack.pop()
            yield self._nodes[press_id]
            stack.extend(reversed(self._children.get(press_id, [])))

    def get(self, press_id: str) -> Press | None:
        return self._nodes.get(press_id)

    def roots(self) -> list[Press]:
        return [self._nodes[press_id] for press_id in self._children.get(None, [])]

    def children(self, press_id: str) -> list[Press]:
        return [self._nodes[child_id] for child_id in self._children.get(press_id, [])]

    def active(self, segment: PressSegment | None = None) -> list[Press]:
        return [
            p for p in self if p.status == PressStatus.ACTIVE and (segment is None or p.segment == segment)
        ]


def open_press(  # noqa: PLR0913
    snapshot: RoundSnapshot,
    game_id: str,
    segment: PressSegment,
    start_hole: int,
    initiator_id: str,
    parent_press_id: str | None = None,
    bet_multiplier: Decimal = Decimal(1),
    press_id: str | None = None,
) -> Press:
    """Validate and create a new ACTIVE press. The snapshot is not modified."""
    if snapshot.status == RoundStatus.COMPLETED:
        raise InvalidPressError("Cannot press in a completed round")

    game = snapshot.game(game_id)
    if game is None:
        raise InvalidPressError(f"Game {game_id} not found in round")
    if not is_pressable(game):
        raise InvalidPressError(f"Presses are only available for Nassau and Match Play, not {game.type.value}")
    if segment not in GAME_SEGMENTS[game.type]:
        raise InvalidPressError(f"Segment {segment.value} is not valid for {game.type.value}")

    first_hole, last_hole = SEGMENT_RANGES[segment]
    if not first_hole <= start_hole <= last_hole:
        raise InvalidPressError(
            f"Start hole for {segment.value} press must be between {first_hole} and {last_hole}"
        )
    if initiator_id not in {p.player_id for p in snapshot.players_for(game)}:
        raise InvalidPressError("Only a player in the game can press")
    if bet_multiplier <= 0:
        raise InvalidPressError("Bet multiplier must be positive")

    if press_id is not None and any(p.press_id == press_id for p in snapshot.presses):
        raise InvalidPressError(f"Press {press_id} already exists in this round")

    tree = PressTree(snapshot.presses_for(game_id))
    if parent_press_id is not None:
        parent = tree.get(parent_press_id)
        if parent is None:
            raise InvalidPressError(f"Parent press {parent_press_id} not found")
        if parent.segment != segment:
            raise InvalidPressError("A press must be in the same segment as the press it presses")
        if parent.status != PressStatus.ACTIVE:
            raise PressNotActiveError("Can only press an active press")
        if start_hole < parent.start_hole:
            raise InvalidPressError("A press cannot start before the press it presses")

    for existing in tree.active(segment):
        if existing.start_hole == start_hole and existing.parent_press_id == parent_press_id:
            raise InvalidPressError(f"A press already starts on hole {start_hole} in this segment")

    press = Press(
        press_id=press_id or str(uuid4()),
        game_id=game_id,
        segment=segment,
        start_hole=start_hole,
        initiator_id=initiator_id,
        parent_press_id=parent_press_id,
        bet_multiplier=bet_multiplier,
    )
    logger.info(
        "press opened",
        round_id=snapshot.round_id,
        game_id=game_id,
        press_id=press.press_id,
        segment=segment,
        start_hole=start_hole,
    )
    return press


def cancel_press(press: Press, requester_id: str, round_owner_id: str) -> Press:
    if requester_id not in (press.initiator_id, round_owner_id):
        raise PressPermissionError("Only the press initiator or round owner can cancel a press")
    if press.status != PressStatus.ACTIVE:
        raise PressNotActiveError("Can only cancel active presses")
    logger.info("press canceled", press_id=press.press_id, requester_id=requester_id)
    return press.model_copy(update={"status": PressStatus.CANCELED})


def resolve_press(press: Press, card: NetScoreCard, bet_amount: Decimal) -> PressResolution:
    """
    Decide a press from the holes of its own range.

    The initiator plays the other player of the game from the press's start
    hole to the end of its segment. Ahead means WON, behind LOST, and level
    (including no holes played) PUSHED. Presses that are no longer active
    keep their status and carry no money.
    """
    if press.status != PressStatus.ACTIVE:
        return PressResolution(press_id=press.press_id, game_id=press.game_id, status=press.status)

    if press.initiator_id not in card.player_ids:
        raise InvalidPressError(f"Press {press.press_id} initiator is not in the game")
    opponent_id = next(player_id for player_id in card.player_ids if player_id != press.initiator_id)
    match = match_result(card, press.initiator_id, opponent_id, press.start_hole, segment_end(press.segment))
    if match.up > 0:
        status = PressStatus.WON
    elif match.up < 0:
        status = PressStatus.LOST
    else:
        return PressResolution(press_id=press.press_id, game_id=press.game_id, status=PressStatus.PUSHED)

    return PressResolution(
        press_id=press.press_id,
        game_id=press.game_id,
        status=status,
        winner_id=match.winner_id,
        loser_id=match.loser_id,
        amount=to_money(to_money(bet_amount) * press.bet_multiplier),
    )


def resolve_tree(tree: PressTree, card: NetScoreCard, bet_amount: Decimal) -> list[PressResolution]:
    return [resolve_press(press, card, bet_amount) for press in tree]


def press_obligations(resolutions: Iterable[PressResolution]) -> list[Obligation]:
    """Loser-to-winner debts of decided presses. Pushed and canceled presses owe nothing."""
    return [
        Obligation(from_id=r.loser_id, to_id=r.winner_id, amount=r.amount, source=f"{r.game_id}:press:{r.press_id}")
        for r in resolutions
        if r.status in (PressStatus.WON, PressStatus.LOST)
        and r.winner_id is not None
        and r.loser_id is not None
        and r.amount > 0
    ]


def press_status(snapshot: RoundSnapshot, game: PressableGame, rules: WagerRules = DEFAULT_RULES) -> GamePressStatus:
    """Live match status of every segment of a game and whether a press can be opened."""
    players = snapshot.players_for(game)
    status = GamePressStatus(game_id=game.game_id, game_type=game.type, is_auto_press=game.is_auto_press, segments=[])
    if len(players) != 2:
        return status

    first_id, second_id = players[0].player_id, players[1].player_id
    card = NetScoreCard(players, snapshot.course)
    tree = PressTree(snapshot.presses_for(game.game_id))

    for segment in GAME_SEGMENTS[game.type]:
        first_hole, last_hole = SEGMENT_RANGES[segment]
        match = match_result(card, first_id, second_id, first_hole, last_hole)
        active = tree.active(segment)
        recent_press = any(p.start_hole >= match.last_hole_played for p in active)
        can_press = (
            match.margin >= rules.press_trigger_margin and match.holes_remaining > 0 and not recent_press
        )

        active_statuses = []
        for press in active:
            press_match = match_result(card, first_id, second_id, press.start_hole, last_hole)
            has_child = any(child.status == PressStatus.ACTIVE for child in tree.children(press.press_id))
            active_statuses.append(
                ActivePressStatus(
                    press_id=press.press_id,
                    start_hole=press.start_hole,
                    current_score=press_match.up,
                    holes_played=press_match.holes_played,
                    holes_remaining=press_match.holes_remaining,
                    can_press_the_press=(
                        press_match.margin >= rules.press_trigger_margin
                        and press_match.holes_remaining > 0
                        and not has_child
                    ),
                )
            )

        status.segments.append(
            SegmentPressStatus(
                segment=segment,
                current_score=match.up,
                holes_played=match.holes_played,
                holes_remaining=match.holes_remaining,
                can_press=can_press,
                suggest_auto_press=game.is_auto_press and can_press,
                auto_press_hole=match.last_hole_played + 1 if can_press else None,
                active_presses=active_statuses,
            )
        )
    return status


def is_pressable(game: Game) -> bool:
    return game.type in PRESSABLE_GAME_TYPES
