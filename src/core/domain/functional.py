"""
Seminorm — функционал-кандидат в полунормы

Immutable value object: отображение E → ℝ вместе со скалярами и модулем,
над которыми оно рассматривается. Все операции алгебры (src.lattice.algebra)
создают новые экземпляры и никогда не изменяют существующие.

ИНВАРИАНТЫ (контракт вызывающего, не проверяются при конструировании):
1. p(0) = 0
2. p(x + y) ≤ p(x) + p(y)            (субаддитивность)
3. p(a • x) = ‖a‖ · p(x)             (абсолютная однородность)

Следствия (не являются независимыми данными):
- p(x) ≥ 0
- p(-x) = p(x)
- |p(x) - p(y)| ≤ p(x - y)

Кванторные свойства нельзя проверить на бесконечной области, поэтому
конструкторы принимают функцию "как есть"; нарушение контракта — неопределённое
поведение. Для property-based проверок см. src.core.contracts.laws.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from src.core.config import DEFAULT_CONFIG, EngineConfig
from src.core.errors import StructureUnavailableError
from src.core.math.numerical_safeguards import is_close
from src.core.scalars import ScalarField
from src.core.vectors import VectorSpace


@dataclass(frozen=True, eq=False)
class Seminorm:
    """
    Полунорма p : E → ℝ над (scalars, space).

    Attributes:
        apply: отображение вычисления p(x)
        space: модуль E
        label: человекочитаемое имя (для repr и отчётов)
        scalars: скаляры (по умолчанию space.scalars)
    """

    apply: Callable[[Any], float]
    space: VectorSpace
    label: str = "p"
    scalars: ScalarField = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.scalars is None:
            object.__setattr__(self, "scalars", self.space.scalars)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, space: VectorSpace) -> "Seminorm":
        """Тождественно нулевая полунорма (⊥ решётки полунорм)."""
        return cls(apply=lambda x: 0.0, space=space, label="0")

    @classmethod
    def of(cls, f: Callable[[Any], float], space: VectorSpace, label: str = "p") -> "Seminorm":
        """
        Полунорма из субаддитивной абсолютно однородной функции.

        Равенство f(0) = 0 следует из однородности при a = 0:
        f(0) = f(0 • 0) = ‖0‖ · f(0) = 0.

        Контракт вызывающего: f субаддитивна и абсолютно однородна на всём E.
        """
        return cls(apply=f, space=space, label=label)

    @classmethod
    def of_smul_le(
        cls, f: Callable[[Any], float], space: VectorSpace, label: str = "p"
    ) -> "Seminorm":
        """
        Полунорма из функции с односторонней оценкой однородности.

        Контракт вызывающего: f(0) = 0, субаддитивность и f(r•x) ≤ ‖r‖·f(x).
        Над полем оценка усиливается до равенства (см. homogeneity_bounds):
        f(x) = f(r⁻¹•(r•x)) ≤ ‖r‖⁻¹·f(r•x), т.е. ‖r‖·f(x) ≤ f(r•x).

        Raises:
            StructureUnavailableError: скаляры не образуют поле
        """
        if not space.scalars.is_field:
            raise StructureUnavailableError(
                f"of_smul_le requires field scalars, got {space.scalars.name}"
            )
        return cls(apply=f, space=space, label=label)

    # -------------------------------------------------------------------------
    # Вычисление
    # -------------------------------------------------------------------------

    def __call__(self, x: Any) -> float:
        return float(self.apply(x))

    def values(self, samples: Iterable[Any]) -> list[float]:
        return [self(x) for x in samples]

    def dist(self, x: Any, y: Any) -> float:
        """Псевдометрика d(x, y) = p(x - y)."""
        return self(self.space.sub(x, y))

    def sub_rev(self, x: Any, y: Any) -> float:
        """p(y - x); совпадает с dist(x, y) по симметрии p(-z) = p(z)."""
        return self(self.space.sub(y, x))

    def abs_sub(self, x: Any, y: Any) -> float:
        """|p(x) - p(y)|; всегда ≤ p(x - y) (субаддитивность в обе стороны)."""
        return abs(self(x) - self(y))

    def pointwise_equal(
        self,
        other: "Seminorm",
        samples: Iterable[Any] | None = None,
        config: EngineConfig | None = None,
    ) -> bool:
        """
        Поточечное равенство на выборке (по умолчанию — детерминированная
        выборка из space по config).
        """
        config = config or DEFAULT_CONFIG
        if samples is None:
            samples = self.space.sample(config.sample_count, config.rng(), config.sample_scale)
        return all(
            is_close(self(x), other(x), rel_tol=config.rel_tol, abs_tol=config.abs_tol)
            for x in samples
        )

    # -------------------------------------------------------------------------
    # Операторы (делегируют в src.lattice)
    # -------------------------------------------------------------------------

    def __add__(self, other: "Seminorm") -> "Seminorm":
        from src.lattice.algebra import add

        return add(self, other)

    def __rmul__(self, r: Any) -> "Seminorm":
        from src.lattice.algebra import smul

        return smul(r, self)

    def __or__(self, other: "Seminorm") -> "Seminorm":
        from src.lattice.algebra import sup

        return sup(self, other)

    def __and__(self, other: "Seminorm") -> "Seminorm":
        from src.lattice.algebra import inf

        return inf(self, other)

    def __le__(self, other: "Seminorm") -> bool:
        from src.lattice.order import POINTWISE_ORDER

        return POINTWISE_ORDER.le(self, other)

    def __lt__(self, other: "Seminorm") -> bool:
        from src.lattice.order import POINTWISE_ORDER

        return POINTWISE_ORDER.lt(self, other)

    def __ge__(self, other: "Seminorm") -> bool:
        return other.__le__(self)

    def __gt__(self, other: "Seminorm") -> bool:
        return other.__lt__(self)

    def __repr__(self) -> str:
        return f"Seminorm({self.label} on {self.space!r})"


def homogeneity_bounds(
    f: Callable[[Any], float], space: VectorSpace, r: Any, x: Any
) -> tuple[float, float, float]:
    """
    Цепочка оценок, усиливающая f(r•x) ≤ ‖r‖·f(x) до равенства.

    Для r ≠ 0:
        upper = ‖r‖ · f(x)                  (оценка в точке (r, x))
        lower = f(x) / ‖r⁻¹‖                (оценка в точке (r⁻¹, r•x))
    и lower ≤ f(r•x) ≤ upper, причём lower = upper, так как ‖r⁻¹‖ = ‖r‖⁻¹.
    Для r = 0 все три значения равны 0.

    SeminormLawValidator проверяет однородность над полем именно этой цепочкой.

    Returns:
        (lower, f(r•x), upper)

    Raises:
        StructureUnavailableError: скаляры не образуют поле
    """
    scalars = space.scalars
    value = float(f(space.smul(r, x)))
    if scalars.is_zero(r):
        return (0.0, value, 0.0)

    r_inv = scalars.inv(r)
    upper = scalars.norm(r) * float(f(x))
    lower = float(f(x)) / scalars.norm(r_inv)
    return (lower, value, upper)
