"""
Тесты скалярных действий на ℝ≥0

Проверяет:
1. act / weight для ℝ≥0, ℕ, ℚ≥0
2. Проверку закона согласованности при создании действия
3. Отказ на элементах вне типа действия
"""

from fractions import Fraction

import pytest

from src.core.domain.actions import NAT, NNRAT, NNREAL, FunctionAction
from src.core.errors import ScalarActionIncompatible


class TestBuiltinActions:
    """Встроенные действия"""

    def test_nnreal_multiplies(self) -> None:
        assert NNREAL.act(2.5, 4.0) == 10.0
        assert NNREAL.weight(3.0) == 3.0

    def test_nat_is_repeated_addition(self) -> None:
        assert NAT.act(3, 1.5) == 4.5
        assert NAT.act(0, 7.0) == 0.0

    def test_nnrat_acts_on_fractions(self) -> None:
        assert NNRAT.act(Fraction(1, 4), 2.0) == 0.5

    def test_rejects_negative_scalar(self) -> None:
        with pytest.raises(ValueError, match="is not an element of nnreal"):
            NNREAL.act(-1.0, 2.0)

    def test_nat_rejects_float(self) -> None:
        assert not NAT.contains(1.5)
        with pytest.raises(ValueError, match="is not an element of nat"):
            NAT.act(1.5, 1.0)

    def test_bool_is_not_a_scalar(self) -> None:
        assert not NNREAL.contains(True)

    def test_rejects_negative_argument(self) -> None:
        with pytest.raises(ValueError, match="t must be non-negative"):
            NNREAL.act(1.0, -0.5)


class TestCompatibilityLaw:
    """act(r, c·t) = c·act(r, t)"""

    def test_compatible_custom_action(self) -> None:
        """Действие кортежей (a, b) как a·b — согласовано"""
        action = FunctionAction(
            act=lambda r, t: r[0] * r[1] * t,
            contains=lambda r: isinstance(r, tuple) and r[0] * r[1] >= 0,
            samples=[(1.0, 2.0), (0.5, 0.5)],
            name="pairs",
        )
        assert action.act((2.0, 3.0), 1.0) == 6.0
        assert action.weight((0.5, 4.0)) == 2.0

    def test_incompatible_action_rejected(self) -> None:
        """t ↦ r·t² не коммутирует с умножением"""
        with pytest.raises(ScalarActionIncompatible, match="squares"):
            FunctionAction(
                act=lambda r, t: r * t * t,
                contains=lambda r: r >= 0,
                samples=[1.0],
                name="squares",
            )

    def test_negative_output_rejected(self) -> None:
        with pytest.raises(ScalarActionIncompatible):
            FunctionAction(
                act=lambda r, t: -r * t,
                contains=lambda r: True,
                samples=[1.0],
                name="flip",
            )

    def test_incompatible_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            FunctionAction(
                act=lambda r, t: r + t,
                contains=lambda r: True,
                samples=[1.0],
            )
