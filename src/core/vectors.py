"""
Vector spaces — внешняя capability VectorSpace (и Topology для нормированного случая)

От модуля E движку нужны сложение, противоположный элемент и скалярное действие.
Для численного inf (infimal convolution) дополнительно нужны вещественные
координаты, для вывода непрерывности — объемлющая норма ‖·‖_E, задающая
метрику и равномерную структуру.
"""

from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any

import numpy as np

from src.core.errors import StructureUnavailableError
from src.core.math.numerical_safeguards import EPS_SEMINORM_ABS
from src.core.scalars import REALS, ComplexField, RationalField, RealField, ScalarField


class VectorSpace(ABC):
    """
    Абстрактный модуль над скалярами `scalars`.

    has_coordinates: есть ли изоморфизм с ℝⁿ (coordinates / from_coordinates)
    is_normed: есть ли объемлющая норма (norm)
    """

    has_coordinates: bool = False
    is_normed: bool = False

    def __init__(self, scalars: ScalarField):
        self.scalars = scalars

    @abstractmethod
    def zero(self) -> Any: ...

    @abstractmethod
    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Any]:
        """Детерминированная выборка векторов для поточечных проверок."""

    @abstractmethod
    def equal(self, x: Any, y: Any, tol: float = EPS_SEMINORM_ABS) -> bool: ...

    def add(self, x: Any, y: Any) -> Any:
        return x + y

    def neg(self, x: Any) -> Any:
        return -x

    def sub(self, x: Any, y: Any) -> Any:
        return self.add(x, self.neg(y))

    def smul(self, a: Any, x: Any) -> Any:
        return a * x

    def coordinates(self, x: Any) -> np.ndarray:
        raise StructureUnavailableError(f"{self!r} has no real coordinates")

    def from_coordinates(self, v: np.ndarray) -> Any:
        raise StructureUnavailableError(f"{self!r} has no real coordinates")

    def norm(self, x: Any) -> float:
        raise StructureUnavailableError(f"{self!r} carries no ambient norm")

    def distance(self, x: Any, y: Any) -> float:
        return self.norm(self.sub(x, y))


class ScalarLine(VectorSpace):
    """Поле скаляров как модуль над собой (например, ℝ над ℝ)."""

    is_normed = True

    def __init__(self, scalars: ScalarField = REALS):
        super().__init__(scalars)
        self.has_coordinates = isinstance(scalars, (RealField, ComplexField, RationalField))

    def zero(self) -> Any:
        return self.scalars.zero()

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Any]:
        return self.scalars.sample(n, rng, scale)

    def equal(self, x: Any, y: Any, tol: float = EPS_SEMINORM_ABS) -> bool:
        return self.scalars.norm(x - y) <= tol

    def coordinates(self, x: Any) -> np.ndarray:
        if isinstance(self.scalars, ComplexField):
            z = complex(x)
            return np.array([z.real, z.imag])
        if self.has_coordinates:
            return np.array([float(x)])
        return super().coordinates(x)

    def from_coordinates(self, v: np.ndarray) -> Any:
        if isinstance(self.scalars, ComplexField):
            return complex(float(v[0]), float(v[1]))
        if isinstance(self.scalars, RationalField):
            return Fraction(float(v[0]))
        if self.has_coordinates:
            return float(v[0])
        return super().from_coordinates(v)

    def norm(self, x: Any) -> float:
        return self.scalars.norm(x)

    def __repr__(self) -> str:
        return f"ScalarLine({self.scalars!r})"


class CoordinateSpace(VectorSpace):
    """
    Координатное пространство 𝕜ⁿ (𝕜 = ℝ или ℂ) на numpy-векторах.

    Объемлющая норма — numpy.linalg.norm порядка norm_ord.
    """

    has_coordinates = True
    is_normed = True

    def __init__(self, dim: int, scalars: ScalarField = REALS, norm_ord: float = 2):
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        if not isinstance(scalars, (RealField, ComplexField)):
            raise StructureUnavailableError(
                f"CoordinateSpace supports reals or complexes, got {scalars.name}"
            )
        super().__init__(scalars)
        self.dim = dim
        self.norm_ord = norm_ord
        self._dtype = complex if isinstance(scalars, ComplexField) else float

    def zero(self) -> np.ndarray:
        return np.zeros(self.dim, dtype=self._dtype)

    def vector(self, *components: Any) -> np.ndarray:
        if len(components) != self.dim:
            raise ValueError(f"expected {self.dim} components, got {len(components)}")
        return np.array(components, dtype=self._dtype)

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[np.ndarray]:
        real = rng.normal(0.0, scale, size=(n, self.dim))
        if self._dtype is complex:
            imag = rng.normal(0.0, scale, size=(n, self.dim))
            return [row_re + 1j * row_im for row_re, row_im in zip(real, imag)]
        return [row for row in real]

    def equal(self, x: Any, y: Any, tol: float = EPS_SEMINORM_ABS) -> bool:
        return bool(np.allclose(x, y, rtol=0.0, atol=tol))

    def coordinates(self, x: Any) -> np.ndarray:
        arr = np.asarray(x)
        if self._dtype is complex:
            return np.concatenate([arr.real, arr.imag]).astype(float)
        return arr.astype(float)

    def from_coordinates(self, v: np.ndarray) -> np.ndarray:
        if self._dtype is complex:
            return v[: self.dim] + 1j * v[self.dim :]
        return np.asarray(v, dtype=float)

    def norm(self, x: Any) -> float:
        return float(np.linalg.norm(x, ord=self.norm_ord))

    def __repr__(self) -> str:
        return f"CoordinateSpace(dim={self.dim}, scalars={self.scalars!r}, norm_ord={self.norm_ord})"


REAL_LINE = ScalarLine(REALS)
