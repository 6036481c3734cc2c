"""Unit tests for Quantity and stock coercion."""

import pytest

from pexpress.domain.exceptions import ValidationError
from pexpress.domain.model.value_objects import Quantity, coerce_stock


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Quantity(-3)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_immutable(self):
        q = Quantity(3)
        with pytest.raises(AttributeError):
            q.value = 4  # type: ignore[misc]

    def test_str(self):
        assert str(Quantity(7)) == "7"


class TestCoerceStock:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (10, 10),
            (0, 0),
            (4.0, 4),
            (None, 0),
            ("12", 0),
            (2.5, 0),
            (True, 0),
        ],
    )
    def test_coercion(self, raw, expected):
        assert coerce_stock(raw) == expected
