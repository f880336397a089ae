import pytest

from mountmaster.models import Dimensions
from mountmaster.utils import UnitUtils, get_fit_metrics, UNIT_MM, UNIT_INCH


def test_inch_is_exactly_25_4_mm():
    assert UnitUtils.to_mm(1) == 25.4
    assert UnitUtils.from_mm(254) == pytest.approx(10)


def test_display_conversion():
    assert UnitUtils.to_display(203.2, UNIT_INCH) == 8.0
    assert UnitUtils.to_display(7.62, UNIT_INCH) == 0.3
    assert UnitUtils.to_display(6.35, UNIT_MM) == 6.35
    assert UnitUtils.from_display(0.25, UNIT_INCH) == pytest.approx(6.35)
    assert UnitUtils.from_display(42, UNIT_MM) == 42


def test_format_length():
    assert UnitUtils.format_length(254, UNIT_INCH) == '10.00"'
    assert UnitUtils.format_length(594.4, UNIT_MM) == "594mm"


def test_format_dual():
    assert UnitUtils.format_dual(25.4, UNIT_INCH) == '1.000" (25.4mm)'
    assert UnitUtils.format_dual(25.4, UNIT_MM) == '25.4mm (1.000")'


def test_format_size():
    assert UnitUtils.format_size(Dimensions(420, 594), UNIT_MM) == "420 x 594 mm"
    assert UnitUtils.format_size(Dimensions(203.2, 254), UNIT_INCH) == '8.0 x 10.0 "'


def test_fit_metrics():
    assert get_fit_metrics(100, 100, 200, 50) == pytest.approx(0.475)
    assert get_fit_metrics(100, 100, 0, 50) == 0
    assert get_fit_metrics(100, 100, -5, 50) == 0
