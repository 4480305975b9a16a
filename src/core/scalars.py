"""
Scalar fields — внешняя capability ScalarNorm

Полунорма определена над парой (скаляры, модуль). От скаляров движку нужно
немногое: сложение, умножение, норма ‖·‖ : Scalar → ℝ≥0 и, для части операций,
обратный элемент (поле) и элемент нормы > 1 (нетривиально нормированное поле).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ‖0‖ = 0, ‖ab‖ = ‖a‖·‖b‖, ‖1‖ = 1
2. inv() доступен только при is_field=True
3. small_element / large_element строятся как степени нетривиального элемента c (‖c‖ > 1)
"""

import math
from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any

import numpy as np

from src.core.errors import StructureUnavailableError
from src.core.math.numerical_safeguards import validate_positive


class ScalarField(ABC):
    """
    Абстрактное нормированное кольцо/поле скаляров.

    Арифметика по умолчанию делегируется операторам Python; подклассы задают
    нуль, единицу, приведение типов и норму.
    """

    name: str = "scalars"
    is_field: bool = True

    @abstractmethod
    def zero(self) -> Any: ...

    @abstractmethod
    def one(self) -> Any: ...

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Вложение числа Python в тип скаляров."""

    @abstractmethod
    def norm(self, a: Any) -> float:
        """Норма скаляра ‖a‖ ≥ 0."""

    @abstractmethod
    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Any]:
        """Детерминированная выборка скаляров для проверки законов."""

    def nontrivial_element(self) -> Any | None:
        """Элемент с ‖c‖ > 1 или None, если норма тривиальна."""
        return None

    def add(self, a: Any, b: Any) -> Any:
        return a + b

    def mul(self, a: Any, b: Any) -> Any:
        return a * b

    def neg(self, a: Any) -> Any:
        return -a

    def is_zero(self, a: Any) -> bool:
        return a == self.zero()

    def inv(self, a: Any) -> Any:
        """
        Обратный элемент a⁻¹.

        Raises:
            StructureUnavailableError: скаляры образуют кольцо, а не поле
            ZeroDivisionError: a = 0
        """
        if not self.is_field:
            raise StructureUnavailableError(f"{self.name} is not a field: inverse is unavailable")
        if self.is_zero(a):
            raise ZeroDivisionError(f"cannot invert zero in {self.name}")
        return self.one() / a

    def power(self, a: Any, n: int) -> Any:
        result = self.one()
        for _ in range(n):
            result = self.mul(result, a)
        return result

    @property
    def is_nontrivially_normed(self) -> bool:
        return self.nontrivial_element() is not None

    def _require_nontrivial(self) -> Any:
        c = self.nontrivial_element()
        if c is None:
            raise StructureUnavailableError(
                f"{self.name} is not nontrivially normed: no element with norm > 1"
            )
        return c

    def small_element(self, bound: float) -> Any:
        """
        Скаляр k с 0 < ‖k‖ < bound.

        Алгоритм: k = c⁻ⁿ, где c — нетривиальный элемент, n — наименьшая степень
        с ‖c‖⁻ⁿ < bound. Требует нетривиально нормированного поля.

        Raises:
            StructureUnavailableError: нет поля или нетривиальной нормы
            ValueError: bound ≤ 0
        """
        validate_positive(bound, "bound")
        c = self._require_nontrivial()
        c_inv = self.inv(c)
        norm_c = self.norm(c)

        n = max(1, math.ceil(math.log(1.0 / bound) / math.log(norm_c)))
        while norm_c ** (-n) >= bound:
            n += 1
        while n > 1 and norm_c ** (-(n - 1)) < bound:
            n -= 1

        return self.power(c_inv, n)

    def large_element(self, bound: float) -> Any:
        """
        Скаляр k с ‖k‖ > bound (архимедово свойство нормы).

        Алгоритм: k = cⁿ для наименьшего n ≥ 0 с ‖c‖ⁿ > bound.
        """
        if bound < 1.0:
            return self.one()
        c = self._require_nontrivial()
        norm_c = self.norm(c)

        n = max(1, math.floor(math.log(bound) / math.log(norm_c)))
        while norm_c**n <= bound:
            n += 1
        return self.power(c, n)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# =============================================================================
# КОНКРЕТНЫЕ СКАЛЯРЫ
# =============================================================================


class RealField(ScalarField):
    """Поле ℝ (float), норма |·|."""

    name = "reals"

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def coerce(self, value: Any) -> float:
        return float(value)

    def norm(self, a: Any) -> float:
        return abs(float(a))

    def nontrivial_element(self) -> float:
        return 2.0

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[float]:
        return [float(v) for v in rng.normal(0.0, scale, size=n)]


class ComplexField(ScalarField):
    """Поле ℂ (complex), норма — модуль."""

    name = "complexes"

    def zero(self) -> complex:
        return 0j

    def one(self) -> complex:
        return 1 + 0j

    def coerce(self, value: Any) -> complex:
        return complex(value)

    def norm(self, a: Any) -> float:
        return abs(complex(a))

    def nontrivial_element(self) -> complex:
        return 2 + 0j

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[complex]:
        re = rng.normal(0.0, scale, size=n)
        im = rng.normal(0.0, scale, size=n)
        return [complex(a, b) for a, b in zip(re, im)]


class RationalField(ScalarField):
    """Поле ℚ (fractions.Fraction), норма |·| как float."""

    name = "rationals"

    def zero(self) -> Fraction:
        return Fraction(0)

    def one(self) -> Fraction:
        return Fraction(1)

    def coerce(self, value: Any) -> Fraction:
        return Fraction(value)

    def norm(self, a: Any) -> float:
        return float(abs(a))

    def nontrivial_element(self) -> Fraction:
        return Fraction(2)

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Fraction]:
        numerators = rng.integers(-64, 65, size=n)
        denominators = rng.integers(1, 17, size=n)
        return [
            Fraction(int(a), int(b)) * Fraction(scale).limit_denominator(1000)
            for a, b in zip(numerators, denominators)
        ]


class IntegerRing(ScalarField):
    """Кольцо ℤ (int). Не поле: inv и всё, что требует деления, недоступно."""

    name = "integers"
    is_field = False

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def coerce(self, value: Any) -> int:
        return int(value)

    def norm(self, a: Any) -> float:
        return float(abs(a))

    def nontrivial_element(self) -> int:
        return 2

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[int]:
        bound = max(2, int(math.ceil(4 * scale)))
        return [int(v) for v in rng.integers(-bound, bound + 1, size=n)]


class TrivialNormField(ScalarField):
    """
    Поле с тривиальной нормой: ‖0‖ = 0, ‖a‖ = 1 иначе.

    Арифметика берётся у базового поля. Не является нетривиально нормированным,
    поэтому вывод непрерывности над ним недоступен.
    """

    def __init__(self, base: ScalarField):
        if not base.is_field:
            raise StructureUnavailableError(f"{base.name} is not a field")
        self.base = base
        self.name = f"trivially-normed {base.name}"

    def zero(self) -> Any:
        return self.base.zero()

    def one(self) -> Any:
        return self.base.one()

    def coerce(self, value: Any) -> Any:
        return self.base.coerce(value)

    def norm(self, a: Any) -> float:
        return 0.0 if self.is_zero(a) else 1.0

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Any]:
        return self.base.sample(n, rng, scale)

    def __repr__(self) -> str:
        return f"TrivialNormField({self.base!r})"


REALS = RealField()
COMPLEXES = ComplexField()
RATIONALS = RationalField()
INTEGERS = IntegerRing()
