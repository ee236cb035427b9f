import math

import pytest

from clinical_safety.dosing.calculator import calculate_weight_based_dose
from clinical_safety.numeric import format_number, ieee_divide, ieee_pow, ieee_sqrt, round_half_away


class TestRoundHalfAway:
    @pytest.mark.parametrize("value,ndigits,expected", [
        (2.5, 0, 3),
        (-2.5, 0, -3),
        (0.125, 2, 0.13),
        (81.25, 1, 81.3),
        (16.04, 1, 16.0),
    ])
    def test_rounding(self, value, ndigits, expected):
        assert round_half_away(value, ndigits) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf])
    def test_infinity_passes_through(self, value):
        assert round_half_away(value, 1) == value

    def test_nan_passes_through(self):
        assert math.isnan(round_half_away(math.nan, 2))

    @pytest.mark.parametrize("value", [1.0e308, -1.0e308, 2.0 ** 60, 5.0e15])
    def test_huge_finite_values_pass_through(self, value):
        assert round_half_away(value, 1) == value

    def test_huge_weight_based_dose_does_not_raise(self, standard_male):
        assert calculate_weight_based_dose(2e306, standard_male) == 2e306 * 80


class TestIEEEArithmetic:
    def test_divide_by_zero(self):
        assert ieee_divide(1, 0) == math.inf
        assert ieee_divide(-1, 0) == -math.inf
        assert math.isnan(ieee_divide(0, 0))

    def test_pow(self):
        assert ieee_pow(0.0, -1.2) == math.inf
        assert math.isnan(ieee_pow(-2.0, 0.5))
        assert ieee_pow(4.0, 0.5) == 2.0

    def test_sqrt(self):
        assert math.isnan(ieee_sqrt(-1))
        assert ieee_sqrt(9) == 3


def test_format_number():
    assert format_number(16.0) == "16"
    assert format_number(32.3) == "32.3"
    assert format_number(10) == "10"
