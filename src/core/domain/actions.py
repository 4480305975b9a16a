"""
Compatible scalar actions — семейство действий r • p

Полунорму можно умножать на элементы любого типа R, который действует на ℝ≥0
(и через ℝ≥0 → ℝ на значения полунормы) согласованно с умножением:

    act(r, c · t) = c · act(r, t),   act(r, t) ≥ 0      для всех c, t ≥ 0

Тогда r • p, x ↦ act(r, p(x)), снова абсолютно однородна:
r • (‖a‖ · p(x)) = ‖a‖ · (r • p(x)).

Закон согласованности проверяется ОДИН раз — при создании экземпляра действия
(на фиксированной сетке), а не при каждом вызове.
"""

from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any, Callable, Final

from src.core.errors import ScalarActionIncompatible
from src.core.math.numerical_safeguards import is_close, validate_non_negative

# Сетка неотрицательных чисел для проверки закона согласованности
COMPATIBILITY_GRID: Final[tuple[float, ...]] = (0.0, 0.25, 1.0, 3.0, 17.5)


class ScalarAction(ABC):
    """
    Действие типа R на ℝ≥0, согласованное с умножением.

    Подклассы задают contains (принадлежность r типу R), act и
    sample_elements (элементы R для проверки закона).
    """

    name: str = "action"

    def __init__(self) -> None:
        self._verify_compatibility()

    @abstractmethod
    def contains(self, r: Any) -> bool: ...

    @abstractmethod
    def _act(self, r: Any, t: float) -> float: ...

    @abstractmethod
    def sample_elements(self) -> list[Any]: ...

    def act(self, r: Any, t: float) -> float:
        """
        r • t для t ≥ 0.

        Raises:
            ValueError: r не принадлежит R или t < 0
        """
        if not self.contains(r):
            raise ValueError(f"{r!r} is not an element of {self.name}")
        validate_non_negative(t, "t")
        return float(self._act(r, t))

    def weight(self, r: Any) -> float:
        """Образ r в ℝ≥0: act(r, 1)."""
        return self.act(r, 1.0)

    def _verify_compatibility(self) -> None:
        for r in self.sample_elements():
            for c in COMPATIBILITY_GRID:
                for t in COMPATIBILITY_GRID:
                    scaled = self._act(r, c * t)
                    expected = c * self._act(r, t)
                    if scaled < 0 or not is_close(scaled, expected):
                        raise ScalarActionIncompatible(
                            f"{self.name}: act({r!r}, {c}*{t})={scaled} "
                            f"!= {c}*act({r!r}, {t})={expected}"
                        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NNRealAction(ScalarAction):
    """ℝ≥0 действует умножением."""

    name = "nnreal"

    def contains(self, r: Any) -> bool:
        return isinstance(r, (int, float, Fraction)) and not isinstance(r, bool) and r >= 0

    def _act(self, r: Any, t: float) -> float:
        return float(r) * t

    def sample_elements(self) -> list[Any]:
        return [0.0, 0.5, 1.0, 2.0, 10.0]


class NaturalAction(NNRealAction):
    """ℕ действует кратным сложением n • t = t + … + t (= n·t)."""

    name = "nat"

    def contains(self, r: Any) -> bool:
        return isinstance(r, int) and not isinstance(r, bool) and r >= 0

    def sample_elements(self) -> list[Any]:
        return [0, 1, 2, 7]


class NNRationalAction(NNRealAction):
    """ℚ≥0 (fractions.Fraction) действует умножением."""

    name = "nnrat"

    def contains(self, r: Any) -> bool:
        return isinstance(r, (int, Fraction)) and not isinstance(r, bool) and r >= 0

    def sample_elements(self) -> list[Any]:
        return [Fraction(0), Fraction(1, 3), Fraction(5, 2)]


class FunctionAction(ScalarAction):
    """
    Пользовательское действие из функции act(r, t).

    Согласованность проверяется при создании: несогласованная функция даёт
    ScalarActionIncompatible.
    """

    def __init__(
        self,
        act: Callable[[Any, float], float],
        contains: Callable[[Any], bool],
        samples: list[Any],
        name: str = "custom",
    ):
        self._act_fn = act
        self._contains_fn = contains
        self._samples = list(samples)
        self.name = name
        super().__init__()

    def contains(self, r: Any) -> bool:
        return self._contains_fn(r)

    def _act(self, r: Any, t: float) -> float:
        return self._act_fn(r, t)

    def sample_elements(self) -> list[Any]:
        return self._samples


NNREAL = NNRealAction()
NAT = NaturalAction()
NNRAT = NNRationalAction()
