from decimal import Decimal

from wagers.logic.games.skins import score_skins
from wagers.logic.state import SkinsGame
from wagers.tests.conftest import create_course, create_player, par_round, total_money


def _game(bet: str = "5") -> SkinsGame:
    return SkinsGame(game_id="skins", bet_amount=Decimal(bet))


class TestSkins:
    def test_tie_carries_to_next_hole(self):
        players = [
            create_player("a", [3, 4, 3, 4]),
            create_player("b", [4, 3, 3, 4]),
            create_player("c", [4, 4, 4, 3]),
            create_player("d", [4, 4, 4, 4]),
        ]

        result = score_skins(players, create_course(), _game())

        hole3, hole4 = result.skins[2], result.skins[3]
        assert hole3.winner_id is None
        assert hole4.winner_id == "c"
        assert hole4.value == Decimal("10.00")
        assert hole4.carried_in == Decimal("5.00")
        assert result.total_pot == Decimal("20.00")
        assert result.carryover == 0

    def test_money_is_winnings_minus_equal_share(self):
        players = [
            create_player("a", [3, 4, 3, 4]),
            create_player("b", [4, 3, 3, 4]),
            create_player("c", [4, 4, 4, 3]),
            create_player("d", [4, 4, 4, 4]),
        ]

        result = score_skins(players, create_course(), _game())

        money = {s.player_id: s.money for s in result.standings}
        assert money == {
            "a": Decimal("0.00"),
            "b": Decimal("0.00"),
            "c": Decimal("5.00"),
            "d": Decimal("-5.00"),
        }

    def test_unscored_hole_keeps_carryover(self):
        players = [
            create_player("a", [4, 4, 3]),
            create_player("b", [4, 4, 4]),
            create_player("c", [5, None, 4]),
        ]

        result = score_skins(players, create_course(), _game())

        assert result.skins[1].winner_id is None
        assert result.skins[1].carried_in == Decimal("5.00")
        assert result.skins[2].winner_id == "a"
        assert result.skins[2].value == Decimal("10.00")

    def test_pot_and_carryover_account_for_every_scored_hole(self):
        players = [create_player("a", par_round()), create_player("b", par_round())]

        result = score_skins(players, create_course(), _game())

        assert result.total_pot == 0
        assert result.carryover == Decimal("90.00")
        assert all(s.money == 0 for s in result.standings)

    def test_zero_sum_with_uneven_share(self):
        players = [
            create_player("a", [3, 4, 4]),
            create_player("b", [4, 4, 4]),
            create_player("c", [4, 4, 4]),
        ]

        result = score_skins(players, create_course(), _game("1"))

        assert total_money(result.standings) == 0
        assert result.standings[0].points == Decimal("1.00")
