from decimal import Decimal

from wagers.logic.enums import WolfOutcome
from wagers.logic.games.wolf import rotation_player, score_wolf
from wagers.logic.settings import WagerRules
from wagers.logic.state import WolfDecision, WolfGame
from wagers.tests.conftest import create_course, create_player, total_money


def _players(*hole_one: int):
    return [create_player(player_id, [strokes]) for player_id, strokes in zip("abcd", hole_one, strict=True)]


def _game(*decisions: WolfDecision) -> WolfGame:
    return WolfGame(game_id="wolf", bet_amount=Decimal(2), decisions=decisions)


def _money(result) -> dict[str, Decimal]:  # noqa: ANN001
    return {s.player_id: s.money for s in result.standings}


class TestWolfRoles:
    def test_rotation_by_hole(self):
        players = _players(4, 4, 4, 4)

        assert [rotation_player(players, n) for n in range(1, 6)] == ["a", "b", "c", "d", "a"]

    def test_no_decision_means_lone_rotation_wolf(self):
        result = score_wolf(_players(4, 4, 4, 4), create_course(), _game())

        hole = result.holes[1]
        assert hole.wolf_id == "b"
        assert hole.is_lone_wolf is True
        assert hole.partner_id is None

    def test_decision_without_partner_is_lone(self):
        decision = WolfDecision(hole_number=1, wolf_id="c", is_lone_wolf=False)

        result = score_wolf(_players(4, 4, 4, 4), create_course(), _game(decision))

        assert result.holes[0].wolf_id == "c"
        assert result.holes[0].is_lone_wolf is True


class TestWolfMoney:
    def test_lone_wolf_wins_from_each_opponent(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", is_lone_wolf=True)

        result = score_wolf(_players(3, 4, 4, 4), create_course(), _game(decision))

        assert result.holes[0].outcome == WolfOutcome.WOLF
        assert result.holes[0].stake == Decimal("6.00")
        assert _money(result) == {
            "a": Decimal("6.00"),
            "b": Decimal("-2.00"),
            "c": Decimal("-2.00"),
            "d": Decimal("-2.00"),
        }

    def test_lone_wolf_loses_to_pack(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", is_lone_wolf=True)

        result = score_wolf(_players(5, 4, 6, 6), create_course(), _game(decision))

        assert result.holes[0].outcome == WolfOutcome.PACK
        assert _money(result)["a"] == Decimal("-6.00")
        assert _money(result)["b"] == Decimal("2.00")

    def test_partner_best_ball(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", partner_id="b")

        result = score_wolf(_players(3, 5, 4, 4), create_course(), _game(decision))

        assert result.holes[0].wolf_team_score == 3
        assert result.holes[0].other_team_score == 4
        assert _money(result) == {
            "a": Decimal("2.00"),
            "b": Decimal("2.00"),
            "c": Decimal("-2.00"),
            "d": Decimal("-2.00"),
        }

    def test_blind_wolf_uses_multiplier(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", is_lone_wolf=True, is_blind=True)

        result = score_wolf(_players(3, 4, 4, 4), create_course(), _game(decision))

        assert result.holes[0].is_blind is True
        assert result.holes[0].stake == Decimal("8.00")
        assert _money(result)["a"] == Decimal("8.00")
        assert total_money(result.standings) == 0

    def test_blind_multiplier_comes_from_rules(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", is_lone_wolf=True, is_blind=True)

        result = score_wolf(
            _players(3, 4, 4, 4), create_course(), _game(decision), WagerRules(blind_wolf_multiplier=6)
        )

        assert _money(result)["a"] == Decimal("12.00")

    def test_tie_moves_nothing(self):
        decision = WolfDecision(hole_number=1, wolf_id="a", partner_id="b")

        result = score_wolf(_players(4, 5, 4, 5), create_course(), _game(decision))

        assert result.holes[0].outcome == WolfOutcome.TIE
        assert all(s.money == 0 for s in result.standings)

    def test_unscored_hole_pays_nothing(self):
        players = [create_player("a", [3]), create_player("b", [4]), create_player("c", [4]), create_player("d")]

        result = score_wolf(players, create_course(), _game())

        assert result.holes[0].outcome is None
        assert all(s.money == 0 for s in result.standings)

    def test_zero_sum_over_many_holes(self):
        players = [
            create_player("a", [3, 4, 5, 4, 4, 3]),
            create_player("b", [4, 3, 4, 5, 4, 4]),
            create_player("c", [5, 4, 3, 4, 5, 4]),
            create_player("d", [4, 5, 4, 3, 4, 5]),
        ]
        decisions = (
            WolfDecision(hole_number=2, wolf_id="b", partner_id="c"),
            WolfDecision(hole_number=4, wolf_id="d", is_lone_wolf=True, is_blind=True),
        )

        result = score_wolf(players, create_course(), _game(*decisions))

        assert total_money(result.standings) == 0
