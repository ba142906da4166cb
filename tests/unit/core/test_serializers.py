from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.serializers import NumberField, to_number

pytestmark = pytest.mark.unit


class TestToNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("199.98"), 199.98),
            (Decimal("0.00"), 0.0),
            ("12.50", 12.5),
            (3, 3),
            (2.5, 2.5),
            (None, 0),
        ],
    )
    def test_conversions(self, value, expected):
        assert to_number(value) == expected

    def test_decimal_becomes_float(self):
        assert isinstance(to_number(Decimal("1.10")), float)

    def test_int_is_kept(self):
        assert isinstance(to_number(7), int)

    def test_bool_becomes_int(self):
        assert to_number(True) == 1
        assert type(to_number(True)) is int

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_number(object())

    def test_bad_string(self):
        with pytest.raises(ValueError):
            to_number("abc")


class TestNumberField:
    def test_is_read_only_by_default(self):
        assert NumberField().read_only is True

    def test_to_representation(self):
        assert NumberField().to_representation(Decimal("9.99")) == 9.99
