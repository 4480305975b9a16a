"""
Ring homomorphisms and semilinear maps

comp(p, f) требует σ-полулинейного отображения f : E → F, где σ — гомоморфизм
колец скаляров. Однородность p ∘ f сохраняется только при ‖σ(a)‖ = ‖a‖
(изометричный гомоморфизм) — это capability, а не проверка в рантайме.
"""

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from src.core.errors import StructureUnavailableError
from src.core.math.numerical_safeguards import EPS_SEMINORM_ABS
from src.core.scalars import COMPLEXES, REALS, ScalarField
from src.core.vectors import VectorSpace


@dataclass(frozen=True)
class RingHom:
    """
    Гомоморфизм колец скаляров σ : source → target.

    isometric=True означает ‖σ(a)‖ = ‖a‖ для всех a.
    """

    source: ScalarField
    target: ScalarField
    apply: Callable[[Any], Any]
    isometric: bool
    label: str = "σ"

    def __call__(self, a: Any) -> Any:
        return self.apply(a)

    @classmethod
    def identity(cls, scalars: ScalarField) -> "RingHom":
        return cls(scalars, scalars, lambda a: a, isometric=True, label="id")

    @classmethod
    def conjugation(cls) -> "RingHom":
        """Комплексное сопряжение ℂ → ℂ (изометрично)."""
        return cls(COMPLEXES, COMPLEXES, lambda z: complex(z).conjugate(), isometric=True, label="conj")

    @classmethod
    def real_embedding(cls) -> "RingHom":
        """Вложение ℝ → ℂ (алгебраическое отображение, изометрично)."""
        return cls(REALS, COMPLEXES, complex, isometric=True, label="ℝ→ℂ")


@dataclass(frozen=True)
class LinearMap:
    """
    σ-полулинейное отображение f : domain → codomain:
    f(x + y) = f(x) + f(y),  f(a • x) = σ(a) • f(x).
    """

    domain: VectorSpace
    codomain: VectorSpace
    apply: Callable[[Any], Any]
    ring_hom: RingHom
    label: str = "f"

    def __call__(self, x: Any) -> Any:
        return self.apply(x)

    @classmethod
    def identity(cls, space: VectorSpace) -> "LinearMap":
        return cls(space, space, lambda x: x, RingHom.identity(space.scalars), label="id")

    @classmethod
    def zero(cls, domain: VectorSpace, codomain: VectorSpace) -> "LinearMap":
        if domain.scalars is not codomain.scalars:
            raise StructureUnavailableError("zero map needs a shared scalar field")
        return cls(
            domain,
            codomain,
            lambda x: codomain.zero(),
            RingHom.identity(domain.scalars),
            label="0",
        )

    @classmethod
    def from_matrix(
        cls, matrix: Any, domain: VectorSpace, codomain: VectorSpace, label: str = "A"
    ) -> "LinearMap":
        """Линейное отображение x ↦ A @ x между координатными пространствами."""
        a = np.asarray(matrix)
        return cls(domain, codomain, lambda x: a @ np.asarray(x), RingHom.identity(domain.scalars), label)

    def __add__(self, other: "LinearMap") -> "LinearMap":
        if _hom_key(self.ring_hom) != _hom_key(other.ring_hom):
            raise StructureUnavailableError("cannot add maps over different ring homomorphisms")
        codomain = self.codomain
        return LinearMap(
            self.domain,
            codomain,
            lambda x: codomain.add(self(x), other(x)),
            self.ring_hom,
            label=f"({self.label} + {other.label})",
        )


def _hom_key(hom: RingHom) -> tuple[int, int, str]:
    return (id(hom.source), id(hom.target), hom.label)


class RestrictedSpace(VectorSpace):
    """
    Модуль над 𝕜', рассматриваемый над подполем 𝕜 через алгебраическое
    отображение 𝕜 → 𝕜' (например, ℂⁿ как пространство над ℝ).
    """

    def __init__(self, base: VectorSpace, algebra_map: RingHom):
        if algebra_map.target is not base.scalars:
            raise StructureUnavailableError(
                f"algebra map lands in {algebra_map.target.name}, space is over {base.scalars.name}"
            )
        super().__init__(algebra_map.source)
        self.base = base
        self.algebra_map = algebra_map
        self.has_coordinates = base.has_coordinates
        self.is_normed = base.is_normed

    def zero(self) -> Any:
        return self.base.zero()

    def sample(self, n: int, rng: np.random.Generator, scale: float = 1.0) -> list[Any]:
        return self.base.sample(n, rng, scale)

    def equal(self, x: Any, y: Any, tol: float = EPS_SEMINORM_ABS) -> bool:
        return self.base.equal(x, y, tol)

    def add(self, x: Any, y: Any) -> Any:
        return self.base.add(x, y)

    def neg(self, x: Any) -> Any:
        return self.base.neg(x)

    def smul(self, a: Any, x: Any) -> Any:
        return self.base.smul(self.algebra_map(a), x)

    def coordinates(self, x: Any) -> np.ndarray:
        return self.base.coordinates(x)

    def from_coordinates(self, v: np.ndarray) -> Any:
        return self.base.from_coordinates(v)

    def norm(self, x: Any) -> float:
        return self.base.norm(x)

    def __repr__(self) -> str:
        return f"RestrictedSpace({self.base!r} over {self.scalars.name})"
