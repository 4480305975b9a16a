"""
Тесты скаляров и векторных пространств

Проверяет:
1. Нормы и арифметику полей ℝ, ℂ, ℚ и кольца ℤ
2. small_element / large_element (степени нетривиального элемента)
3. Недоступность структуры (inv над ℤ, тривиальная норма)
4. ScalarLine и CoordinateSpace
"""

from fractions import Fraction

import numpy as np
import pytest

from src.core.errors import StructureUnavailableError
from src.core.scalars import (
    COMPLEXES,
    INTEGERS,
    RATIONALS,
    REALS,
    TrivialNormField,
)
from src.core.vectors import REAL_LINE, CoordinateSpace, ScalarLine

# =============================================================================
# СКАЛЯРЫ
# =============================================================================


class TestScalarNorms:
    """Нормы скаляров"""

    def test_real_norm_is_abs(self) -> None:
        assert REALS.norm(-3.5) == 3.5
        assert REALS.norm(0.0) == 0.0

    def test_complex_norm_is_modulus(self) -> None:
        assert COMPLEXES.norm(3 + 4j) == pytest.approx(5.0)

    def test_rational_norm(self) -> None:
        assert RATIONALS.norm(Fraction(-3, 4)) == 0.75

    def test_norm_is_multiplicative(self) -> None:
        a, b = 2 - 1j, -0.5 + 3j
        assert COMPLEXES.norm(a * b) == pytest.approx(COMPLEXES.norm(a) * COMPLEXES.norm(b))

    def test_trivial_norm(self) -> None:
        trivial = TrivialNormField(REALS)
        assert trivial.norm(0.0) == 0.0
        assert trivial.norm(1e-9) == 1.0
        assert trivial.norm(1e9) == 1.0


class TestFieldStructure:
    """Поле против кольца"""

    def test_inverse_in_field(self) -> None:
        assert RATIONALS.inv(Fraction(2, 3)) == Fraction(3, 2)
        assert REALS.inv(4.0) == 0.25

    def test_inverse_of_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError, match="cannot invert zero"):
            REALS.inv(0.0)

    def test_integers_have_no_inverse(self) -> None:
        assert not INTEGERS.is_field
        with pytest.raises(StructureUnavailableError, match="not a field"):
            INTEGERS.inv(2)

    def test_structure_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            INTEGERS.inv(3)

    def test_trivial_norm_field_requires_field_base(self) -> None:
        with pytest.raises(StructureUnavailableError):
            TrivialNormField(INTEGERS)


class TestSmallLargeElements:
    """small_element / large_element"""

    def test_small_element_below_bound(self) -> None:
        """bound = 0.5, c = 2 ⇒ k = 2⁻² = 0.25"""
        k = REALS.small_element(0.5)
        assert k == 0.25
        assert 0 < REALS.norm(k) < 0.5

    def test_small_element_is_minimal_power(self) -> None:
        """Наименьшая степень: ‖k‖ ≥ bound / ‖c‖"""
        for bound in (1e-6, 0.3, 0.99, 5.0):
            k = REALS.small_element(bound)
            assert 0 < abs(k) < bound
            assert abs(k) * 2 >= bound or abs(k) == 0.5

    def test_small_element_rational_exact(self) -> None:
        k = RATIONALS.small_element(0.1)
        assert k == Fraction(1, 16)

    def test_small_element_rejects_non_positive_bound(self) -> None:
        with pytest.raises(ValueError, match="bound must be positive"):
            REALS.small_element(0.0)

    def test_small_element_needs_nontrivial_norm(self) -> None:
        with pytest.raises(StructureUnavailableError, match="not nontrivially normed"):
            TrivialNormField(REALS).small_element(0.5)

    def test_small_element_needs_field(self) -> None:
        with pytest.raises(StructureUnavailableError):
            INTEGERS.small_element(0.5)

    def test_large_element(self) -> None:
        """x = 100: первая степень двойки больше 100 — 128"""
        assert REALS.large_element(100.0) == 128.0
        assert REALS.large_element(0.3) == 1.0

    def test_large_element_in_ring(self) -> None:
        assert INTEGERS.large_element(5.0) == 8


# =============================================================================
# ВЕКТОРНЫЕ ПРОСТРАНСТВА
# =============================================================================


class TestScalarLine:
    """Поле как модуль над собой"""

    def test_real_line_arithmetic(self) -> None:
        assert REAL_LINE.add(1.5, 2.0) == 3.5
        assert REAL_LINE.smul(-2.0, 1.5) == -3.0
        assert REAL_LINE.sub(1.0, 4.0) == -3.0
        assert REAL_LINE.norm(-2.5) == 2.5
        assert REAL_LINE.distance(1.0, 4.0) == 3.0

    def test_complex_line_coordinates(self) -> None:
        line = ScalarLine(COMPLEXES)
        coords = line.coordinates(1 + 2j)
        assert list(coords) == [1.0, 2.0]
        assert line.from_coordinates(coords) == 1 + 2j

    def test_sample_is_deterministic(self) -> None:
        a = REAL_LINE.sample(5, np.random.default_rng(7))
        b = REAL_LINE.sample(5, np.random.default_rng(7))
        assert a == b


class TestCoordinateSpace:
    """Координатное пространство на numpy"""

    def test_vector_and_norm(self) -> None:
        space = CoordinateSpace(2)
        v = space.vector(3.0, 4.0)
        assert space.norm(v) == pytest.approx(5.0)

    def test_norm_order(self) -> None:
        space = CoordinateSpace(2, norm_ord=np.inf)
        assert space.norm(space.vector(3.0, -4.0)) == pytest.approx(4.0)

    def test_equal_with_tolerance(self) -> None:
        space = CoordinateSpace(3)
        assert space.equal(space.vector(1.0, 2.0, 3.0), space.vector(1.0, 2.0, 3.0 + 1e-12))
        assert not space.equal(space.zero(), space.vector(0.0, 0.0, 1e-3))

    def test_wrong_component_count(self) -> None:
        with pytest.raises(ValueError, match="expected 2 components"):
            CoordinateSpace(2).vector(1.0)

    def test_rejects_rational_scalars(self) -> None:
        with pytest.raises(StructureUnavailableError, match="reals or complexes"):
            CoordinateSpace(2, scalars=RATIONALS)

    def test_rejects_zero_dimension(self) -> None:
        with pytest.raises(ValueError, match="dim must be >= 1"):
            CoordinateSpace(0)

    def test_complex_coordinates_round_trip(self) -> None:
        space = CoordinateSpace(2, scalars=COMPLEXES)
        v = space.vector(1 + 1j, -2j)
        assert space.equal(space.from_coordinates(space.coordinates(v)), v)
