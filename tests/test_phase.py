import math
from fractions import Fraction

import pytest

from zxnet.core import Phase


class TestNormalisation:
    def test_default_is_zero(self):
        assert Phase.default() == Phase(0) == Phase()
        assert Phase.default().is_zero()

    def test_reduced_on_construction(self):
        p = Phase(2, 4)
        assert p.fraction == Fraction(1, 2)
        assert (p.numerator, p.denominator) == (1, 2)

    def test_wraps_into_zero_two(self):
        assert Phase(5, 2) == Phase(1, 2)
        assert Phase(-1, 2).fraction == Fraction(3, 2)
        assert Phase(4) == Phase(0)
        assert Phase(-3) == Phase(1)

    @pytest.mark.parametrize("den", [1, 2, 3, 4, 6, 7])
    def test_range_and_congruence(self, den):
        for num in range(-15, 16):
            r = Fraction(num, den)
            f = Phase(r).fraction
            assert 0 <= f < 2
            assert (f - r) % 2 == 0
            assert math.gcd(f.numerator, f.denominator) == 1

    def test_accepts_strings_and_phases(self):
        assert Phase("3/4") == Phase(3, 4)
        assert Phase(Phase(7, 4)) == Phase(-1, 4)
        assert Phase(Fraction(1, 3), 2) == Phase(1, 6)

    @pytest.mark.parametrize("bad", [0.5, 1e-3, True, None, [1, 2]])
    def test_rejects_inexact_values(self, bad):
        with pytest.raises(TypeError):
            Phase(bad)


class TestArithmetic:
    def test_addition_mod_two(self):
        assert Phase(3, 2) + Phase(1, 2) == Phase(0)
        assert Phase(1) + 1 == 0
        assert 1 + Phase(1, 2) == Phase(3, 2)
        assert Phase(7, 4) + Fraction(1, 2) == Phase(1, 4)

    def test_negation_and_subtraction(self):
        assert -Phase(1, 4) == Phase(7, 4)
        assert -Phase(0) == Phase(0)
        assert -Phase(1) == Phase(1)
        assert Phase(1, 4) - Phase(1, 2) == Phase(7, 4)
        assert 1 - Phase(1, 2) == Phase(1, 2)

    def test_double_negation_is_identity(self):
        for num in range(0, 16):
            p = Phase(num, 8)
            assert -(-p) == p


class TestComparison:
    def test_ordering(self):
        ps = [Phase(3, 2), Phase(0), Phase(1, 4), Phase(1)]
        assert sorted(ps) == [Phase(0), Phase(1, 4), Phase(1), Phase(3, 2)]
        assert Phase(1, 2) < Phase(1)
        assert Phase(5, 2) <= Phase(1, 2)

    def test_hash_follows_equality(self):
        assert len({Phase(1, 2), Phase(5, 2), Phase(2, 4)}) == 1

    def test_equality_with_rationals(self):
        assert Phase(1, 2) == Fraction(1, 2)
        assert Phase(0) == 0
        assert Phase(1, 2) != Phase(1, 3)
        assert Phase(1, 2) != 0.5
        assert Phase(1, 2) != "1/2"

    def test_rationals_compare_by_exact_value(self):
        # Phase(5, 2) is stored as 1/2; the plain rational 5/2 is a different number
        assert Phase(5, 2) == Phase(1, 2)
        assert Phase(1, 2) != Fraction(5, 2)
        assert Phase(3, 2) > 1
        assert Phase(1, 2) < Fraction(5, 2)

    @pytest.mark.parametrize("value", [0, 1, Fraction(1, 2), Fraction(7, 4)])
    def test_mixed_set_and_dict_membership(self, value):
        p = Phase(value)
        assert p == value
        assert hash(p) == hash(value)
        assert p in {value}
        assert value in {p}
        assert {value: "x"}[p] == "x"
        assert len({p, value}) == 1

    def test_out_of_range_rational_is_not_a_key(self):
        assert Phase(5, 2) not in {Fraction(5, 2)}
        assert (Phase(5, 2) in {Fraction(5, 2)}) == (Phase(5, 2) == Fraction(5, 2))


class TestPredicatesAndRendering:
    def test_predicates(self):
        assert Phase(1).is_pauli()
        assert not Phase(1, 2).is_pauli()
        assert Phase(3, 2).is_clifford()
        assert not Phase(1, 4).is_clifford()
        assert not Phase(0)
        assert Phase(1, 4)

    def test_float_is_radians(self):
        assert float(Phase(1)) == pytest.approx(math.pi)
        assert float(Phase(1, 2)) == pytest.approx(math.pi / 2)

    @pytest.mark.parametrize(
        "phase, text",
        [(Phase(0), "0"), (Phase(1), "π"), (Phase(1, 2), "π/2"), (Phase(3, 4), "3π/4")],
    )
    def test_str(self, phase, text):
        assert str(phase) == text

    def test_repr(self):
        assert repr(Phase(5, 2)) == "Phase(1/2)"
