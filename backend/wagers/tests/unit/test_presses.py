"""
Tests for press creation, cancellation, resolution, and live press status.
"""

from decimal import Decimal

import pytest

from wagers.logic.enums import PressSegment, PressStatus, RoundStatus
from wagers.logic.exceptions import InvalidPressError, PressNotActiveError, PressPermissionError
from wagers.logic.handicap import NetScoreCard
from wagers.logic.presses import (
    PressTree,
    cancel_press,
    is_pressable,
    open_press,
    press_obligations,
    press_status,
    resolve_press,
    resolve_tree,
)
from wagers.logic.settings import WagerRules
from wagers.logic.state import MatchPlayGame, NassauGame, Press, SkinsGame
from wagers.tests.conftest import create_course, create_player, create_snapshot

NASSAU = NassauGame(game_id="nassau", bet_amount=Decimal(10))


def _press(press_id: str, start_hole: int = 3, **kwargs) -> Press:
    defaults = {
        "game_id": "nassau",
        "segment": PressSegment.FRONT,
        "initiator_id": "b",
    }
    return Press(press_id=press_id, start_hole=start_hole, **(defaults | kwargs))


def _two_up_snapshot(*presses: Press, game: NassauGame | MatchPlayGame = NASSAU, **kwargs):
    players = [create_player("a", [3, 3]), create_player("b", [4, 4])]
    return create_snapshot(players, [game], presses=presses, **kwargs)


class TestPressTree:
    def test_depth_first_order(self):
        tree = PressTree(
            [
                _press("p1", 1),
                _press("p2", 5),
                _press("p3", 3, parent_press_id="p1"),
            ]
        )

        assert [p.press_id for p in tree] == ["p1", "p3", "p2"]
        assert [p.press_id for p in tree.roots()] == ["p1", "p2"]
        assert [p.press_id for p in tree.children("p1")] == ["p3"]
        assert len(tree) == 3
        assert "p3" in tree

    def test_parent_may_be_listed_after_child(self):
        tree = PressTree([_press("child", 4, parent_press_id="root"), _press("root", 2)])

        assert [p.press_id for p in tree] == ["root", "child"]

    def test_duplicate_id_rejected(self):
        with pytest.raises(InvalidPressError, match="Duplicate"):
            PressTree([_press("p1"), _press("p1", 4)])

    def test_missing_parent_rejected(self):
        with pytest.raises(InvalidPressError, match="not found"):
            PressTree([_press("p1", parent_press_id="ghost")])

    def test_active_filters_status_and_segment(self):
        tree = PressTree(
            [
                _press("p1"),
                _press("p2", status=PressStatus.CANCELED),
                _press("p3", 12, segment=PressSegment.BACK),
            ]
        )

        assert [p.press_id for p in tree.active(PressSegment.FRONT)] == ["p1"]
        assert [p.press_id for p in tree.active()] == ["p1", "p3"]


class TestOpenPress:
    def test_creates_active_press(self):
        snapshot = _two_up_snapshot()

        press = open_press(snapshot, "nassau", PressSegment.FRONT, 3, "b")

        assert press.status == PressStatus.ACTIVE
        assert press.start_hole == 3
        assert press.parent_press_id is None
        assert press.bet_multiplier == Decimal(1)
        assert press.press_id
        assert snapshot.presses == ()

    def test_completed_round_rejected(self):
        snapshot = _two_up_snapshot(status=RoundStatus.COMPLETED)

        with pytest.raises(InvalidPressError, match="completed round"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 3, "b")

    def test_unknown_game_rejected(self):
        with pytest.raises(InvalidPressError, match="not found"):
            open_press(_two_up_snapshot(), "nope", PressSegment.FRONT, 3, "b")

    def test_non_pressable_game_rejected(self):
        players = [create_player("a"), create_player("b")]
        snapshot = create_snapshot(players, [SkinsGame(game_id="skins", bet_amount=Decimal(1))])

        with pytest.raises(InvalidPressError, match="only available"):
            open_press(snapshot, "skins", PressSegment.FRONT, 3, "b")

    def test_wrong_segment_for_game(self):
        with pytest.raises(InvalidPressError, match="not valid"):
            open_press(_two_up_snapshot(), "nassau", PressSegment.MATCH, 3, "b")

    def test_start_hole_outside_segment(self):
        with pytest.raises(InvalidPressError, match="between 10 and 18"):
            open_press(_two_up_snapshot(), "nassau", PressSegment.BACK, 5, "b")

    def test_initiator_must_be_in_game(self):
        players = [create_player("a"), create_player("b"), create_player("c")]
        game = NassauGame(game_id="nassau", bet_amount=Decimal(10), participant_ids=("a", "b"))
        snapshot = create_snapshot(players, [game])

        with pytest.raises(InvalidPressError, match="Only a player in the game"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 3, "c")

    def test_non_positive_multiplier_rejected(self):
        with pytest.raises(InvalidPressError, match="positive"):
            open_press(_two_up_snapshot(), "nassau", PressSegment.FRONT, 3, "b", bet_multiplier=Decimal(0))

    def test_press_the_press(self):
        snapshot = _two_up_snapshot(_press("p1", 2))

        press = open_press(snapshot, "nassau", PressSegment.FRONT, 4, "b", parent_press_id="p1")

        assert press.parent_press_id == "p1"

    def test_parent_not_found(self):
        with pytest.raises(InvalidPressError, match="not found"):
            open_press(_two_up_snapshot(), "nassau", PressSegment.FRONT, 4, "b", parent_press_id="ghost")

    def test_parent_in_other_segment(self):
        snapshot = _two_up_snapshot(_press("p1", 12, segment=PressSegment.BACK))

        with pytest.raises(InvalidPressError, match="same segment"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 4, "b", parent_press_id="p1")

    def test_parent_not_active(self):
        snapshot = _two_up_snapshot(_press("p1", 2, status=PressStatus.CANCELED))

        with pytest.raises(PressNotActiveError):
            open_press(snapshot, "nassau", PressSegment.FRONT, 4, "b", parent_press_id="p1")

    def test_cannot_start_before_parent(self):
        snapshot = _two_up_snapshot(_press("p1", 5))

        with pytest.raises(InvalidPressError, match="cannot start before"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 4, "b", parent_press_id="p1")

    def test_duplicate_start_hole_rejected(self):
        snapshot = _two_up_snapshot(_press("p1", 3))

        with pytest.raises(InvalidPressError, match="already starts on hole 3"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 3, "a")

    def test_same_start_hole_allowed_after_cancel(self):
        snapshot = _two_up_snapshot(_press("p1", 3, status=PressStatus.CANCELED))

        press = open_press(snapshot, "nassau", PressSegment.FRONT, 3, "b")

        assert press.start_hole == 3

    def test_press_id_taken_in_round_rejected(self):
        snapshot = _two_up_snapshot(_press("p1", 3))

        with pytest.raises(InvalidPressError, match="p1 already exists"):
            open_press(snapshot, "nassau", PressSegment.FRONT, 5, "b", press_id="p1")


class TestCancelPress:
    def test_initiator_can_cancel(self):
        canceled = cancel_press(_press("p1"), "b", round_owner_id="a")

        assert canceled.status == PressStatus.CANCELED
        assert canceled.press_id == "p1"

    def test_round_owner_can_cancel(self):
        assert cancel_press(_press("p1"), "owner", round_owner_id="owner").status == PressStatus.CANCELED

    def test_other_player_forbidden(self):
        with pytest.raises(PressPermissionError):
            cancel_press(_press("p1"), "c", round_owner_id="a")

    def test_terminal_press_cannot_be_canceled(self):
        with pytest.raises(PressNotActiveError):
            cancel_press(_press("p1", status=PressStatus.WON), "b", round_owner_id="a")


class TestResolvePress:
    @pytest.fixture
    def card(self):
        # a wins holes 1-2, b wins holes 3-4
        players = [create_player("a", [3, 3, 5, 5]), create_player("b", [4, 4, 4, 4])]
        return NetScoreCard(players, create_course())

    def test_press_uses_only_holes_from_start(self, card):
        resolution = resolve_press(_press("p1", 3), card, Decimal(10))

        assert resolution.status == PressStatus.WON
        assert resolution.winner_id == "b"
        assert resolution.loser_id == "a"
        assert resolution.amount == Decimal("10.00")

    def test_level_pushes_and_behind_loses(self, card):
        resolution = resolve_press(_press("p1", 1, initiator_id="b", segment=PressSegment.OVERALL), card, Decimal(10))

        assert resolution.status == PressStatus.PUSHED

        resolution = resolve_press(_press("p2", 3, initiator_id="a"), card, Decimal(10))
        assert resolution.status == PressStatus.LOST
        assert resolution.winner_id == "b"

    def test_no_holes_played_pushes(self, card):
        resolution = resolve_press(_press("p1", 8), card, Decimal(10))

        assert resolution.status == PressStatus.PUSHED
        assert resolution.amount == 0
        assert resolution.winner_id is None

    def test_multiplier_scales_amount(self, card):
        resolution = resolve_press(_press("p1", 3, bet_multiplier=Decimal(2)), card, Decimal("7.5"))

        assert resolution.amount == Decimal("15.00")

    def test_canceled_press_keeps_status(self, card):
        resolution = resolve_press(_press("p1", 3, status=PressStatus.CANCELED), card, Decimal(10))

        assert resolution.status == PressStatus.CANCELED
        assert resolution.amount == 0

    def test_initiator_outside_game(self, card):
        with pytest.raises(InvalidPressError):
            resolve_press(_press("p1", 3, initiator_id="zz"), card, Decimal(10))

    def test_tree_resolves_each_node_on_its_own_range(self, card):
        tree = PressTree([_press("p1", 1), _press("p2", 3, parent_press_id="p1")])

        resolutions = resolve_tree(tree, card, Decimal(10))

        assert [(r.press_id, r.status) for r in resolutions] == [
            ("p1", PressStatus.PUSHED),
            ("p2", PressStatus.WON),
        ]

    def test_obligations_only_for_decided_presses(self, card):
        tree = PressTree([_press("p1", 1), _press("p2", 3, parent_press_id="p1")])

        obligations = press_obligations(resolve_tree(tree, card, Decimal(10)))

        assert len(obligations) == 1
        assert obligations[0].from_id == "a"
        assert obligations[0].to_id == "b"
        assert obligations[0].source == "nassau:press:p2"


class TestPressStatus:
    def test_two_down_can_press(self):
        status = press_status(_two_up_snapshot(), NASSAU)

        front = status.segments[0]
        assert [s.segment for s in status.segments] == [
            PressSegment.FRONT,
            PressSegment.BACK,
            PressSegment.OVERALL,
        ]
        assert front.current_score == 2
        assert front.holes_played == 2
        assert front.holes_remaining == 7
        assert front.can_press is True
        assert front.auto_press_hole == 3
        assert front.suggest_auto_press is False
        assert status.segments[1].can_press is False

    def test_auto_press_suggested(self):
        game = NassauGame(game_id="nassau", bet_amount=Decimal(10), is_auto_press=True)

        status = press_status(_two_up_snapshot(game=game), game)

        assert status.is_auto_press is True
        assert status.segments[0].suggest_auto_press is True

    def test_trigger_margin_from_rules(self):
        status = press_status(_two_up_snapshot(), NASSAU, WagerRules(press_trigger_margin=3))

        assert status.segments[0].can_press is False

    def test_recent_press_blocks_new_press(self):
        snapshot = _two_up_snapshot(_press("p1", 3))

        front = press_status(snapshot, NASSAU).segments[0]

        assert front.can_press is False
        assert [p.press_id for p in front.active_presses] == ["p1"]
        assert front.active_presses[0].holes_played == 0

    def test_press_the_press_status(self):
        snapshot = _two_up_snapshot(_press("p1", 1))

        front = press_status(snapshot, NASSAU).segments[0]

        assert front.can_press is True
        assert front.active_presses[0].current_score == 2
        assert front.active_presses[0].can_press_the_press is True

    def test_active_child_blocks_press_the_press(self):
        snapshot = _two_up_snapshot(_press("p1", 1), _press("p2", 2, parent_press_id="p1"))

        front = press_status(snapshot, NASSAU).segments[0]

        by_id = {p.press_id: p for p in front.active_presses}
        assert by_id["p1"].can_press_the_press is False

    def test_match_play_has_one_segment(self):
        game = MatchPlayGame(game_id="mp", bet_amount=Decimal(5))

        status = press_status(_two_up_snapshot(game=game), game)

        assert [s.segment for s in status.segments] == [PressSegment.MATCH]
        assert status.segments[0].holes_remaining == 16

    def test_wrong_roster_size_has_no_segments(self):
        players = [create_player("a"), create_player("b"), create_player("c")]
        snapshot = create_snapshot(players, [NASSAU])

        assert press_status(snapshot, NASSAU).segments == []


class TestIsPressable:
    def test_pressable_types(self):
        assert is_pressable(NASSAU)
        assert is_pressable(MatchPlayGame(game_id="mp"))
        assert not is_pressable(SkinsGame(game_id="skins"))
