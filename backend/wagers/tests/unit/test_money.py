from decimal import Decimal
from fractions import Fraction

from wagers.logic.money import allocate_cents, from_cents, to_cents, to_money, zero_sum_money


class TestToMoney:
    def test_rounds_half_up(self):
        assert to_money(Decimal("2.345")) == Decimal("2.35")
        assert to_money(Decimal("-2.345")) == Decimal("-2.35")

    def test_fraction(self):
        assert to_money(Fraction(10, 3)) == Decimal("3.33")
        assert to_money(Fraction(20, 3)) == Decimal("6.67")

    def test_cents_conversion(self):
        assert to_cents(Decimal("12.34")) == 1234
        assert from_cents(-1234) == Decimal("-12.34")


class TestAllocateCents:
    def test_split_keeps_total(self):
        split = allocate_cents({"a": Fraction(10, 3), "b": Fraction(10, 3), "c": Fraction(10, 3)}, 1000)

        assert sum(split.values()) == 1000
        assert sorted(split.values()) == [333, 333, 334]

    def test_largest_remainder_wins_extra_cent(self):
        split = allocate_cents({"a": Fraction(1, 300), "b": Fraction(2, 300)}, 1)

        assert split == {"a": 0, "b": 1}

    def test_empty(self):
        assert allocate_cents({}, 0) == {}


class TestZeroSumMoney:
    def test_thirds_sum_to_zero(self):
        money = zero_sum_money({"a": Fraction(20, 3), "b": Fraction(-10, 3), "c": Fraction(-10, 3)})

        assert sum(money.values()) == 0
        assert money["a"] == Decimal("6.67")
        assert sorted([money["b"], money["c"]]) == [Decimal("-3.34"), Decimal("-3.33")]

    def test_exact_values_untouched(self):
        money = zero_sum_money({"a": Fraction(5), "b": Fraction(-5)})

        assert money == {"a": Decimal("5.00"), "b": Decimal("-5.00")}
