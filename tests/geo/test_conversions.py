"""
Check the stateless angle & number helpers
"""
import math

from pytest import approx

from route_boxer.geo.conversions import format_num, to_bearing, to_deg, to_rad


def test_to_rad():
    assert to_rad(180) == approx(math.pi)
    assert to_rad(-90) == approx(-math.pi / 2)


def test_to_deg():
    assert to_deg(math.pi / 2) == approx(90.0)


class TestToBearing:
    """Bearings should always be reported in the range [0, 360)"""

    def test_negative_angle(self):
        assert to_bearing(-math.pi / 2) == approx(270.0)

    def test_positive_angle(self):
        assert to_bearing(math.pi / 2) == approx(90.0)

    def test_zero(self):
        assert to_bearing(0.0) == 0.0


class TestFormatNum:
    """Check rounding for display"""

    def test_default_precision(self):
        assert format_num(1.23456789) == 1.23457

    def test_custom_precision(self):
        assert format_num(1.23456789, 2) == 1.23

    def test_zero_digits_rounds_to_integer(self):
        assert format_num(2.4, 0) == 2.0
        assert format_num(2.5, 0) == 3.0

    def test_small_negative_rounds_to_zero(self):
        assert format_num(-1.5e-6) == 0.0

    def test_non_finite_passthrough(self):
        assert format_num(math.inf) == math.inf
