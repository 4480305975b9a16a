"""
PartialOrder / Lattice — порядковая структура полунорм

p ≤ q  ⟺  ∀x: p(x) ≤ q(x).

Квантор по всем x невычислим, поэтому порядок решается на детерминированной
выборке из пространства (размер и seed из EngineConfig) с толерантными
сравнениями. Это тот же подход, что и проверка законов полунормы: ложные
"≤" возможны только вне выборки.

Структура собирается из небольших независимых интерфейсов, каждый со своим
набором законов (check_laws возвращает имена нарушенных законов):
- PointwiseOrder                 рефлексивность, транзитивность, антисимметрия
- OrderedCancelAddMonoid         0, +, монотонность и сокращение
- JoinSemilattice                ⊔ — точная верхняя грань
- Lattice                        ⊓ — точная нижняя грань (только над полем)
- ConditionallyCompleteLattice   sup_set / inf_set на ограниченных семействах
"""

from dataclasses import dataclass
from typing import Any, Sequence

from src.core.config import DEFAULT_CONFIG, EngineConfig
from src.core.domain.actions import NNREAL, ScalarAction
from src.core.domain.functional import Seminorm
from src.core.errors import PreconditionViolation, StructureUnavailableError
from src.core.math.numerical_safeguards import le_with_tolerance
from src.core.vectors import VectorSpace
from src.lattice.algebra import (
    SeminormFamily,
    add,
    bdd_above,
    inf,
    inf_set,
    smul,
    sup,
    sup_set,
)


# =============================================================================
# PARTIAL ORDER
# =============================================================================


class PointwiseOrder:
    """
    Поточечный порядок на полунормах одного пространства.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def samples(self, space: VectorSpace) -> list[Any]:
        """Детерминированная выборка векторов (плюс нулевой вектор)."""
        cfg = self.config
        return [space.zero()] + space.sample(cfg.sample_count, cfg.rng(), cfg.sample_scale)

    def le(self, p: Seminorm, q: Seminorm, samples: Sequence[Any] | None = None) -> bool:
        if samples is None:
            samples = self.samples(p.space)
        cfg = self.config
        return all(le_with_tolerance(p(x), q(x), cfg.rel_tol, cfg.abs_tol) for x in samples)

    def lt(self, p: Seminorm, q: Seminorm, samples: Sequence[Any] | None = None) -> bool:
        if samples is None:
            samples = self.samples(p.space)
        return self.le(p, q, samples) and not self.le(q, p, samples)

    def equal(self, p: Seminorm, q: Seminorm, samples: Sequence[Any] | None = None) -> bool:
        if samples is None:
            samples = self.samples(p.space)
        return self.le(p, q, samples) and self.le(q, p, samples)

    def check_laws(self, elements: Sequence[Seminorm]) -> list[str]:
        violations = []
        if not elements:
            return violations
        samples = self.samples(elements[0].space)

        for p in elements:
            if not self.le(p, p, samples):
                violations.append(f"le_refl({p.label})")

        for p in elements:
            for q in elements:
                if self.le(p, q, samples) and self.le(q, p, samples):
                    if not p.pointwise_equal(q, samples, self.config):
                        violations.append(f"le_antisymm({p.label}, {q.label})")
                for r in elements:
                    if self.le(p, q, samples) and self.le(q, r, samples):
                        if not self.le(p, r, samples):
                            violations.append(f"le_trans({p.label}, {q.label}, {r.label})")
        return violations


POINTWISE_ORDER = PointwiseOrder()


# =============================================================================
# ORDERED CANCELLATIVE MONOID
# =============================================================================


class OrderedCancelAddMonoid:
    """
    (Seminorm, 0, +, ≤): упорядоченный коммутативный моноид с сокращением.

    Сокращение наследуется от ℝ: p(x) + r(x) ≤ q(x) + r(x) ⇒ p(x) ≤ q(x).
    """

    def __init__(self, space: VectorSpace, order: PointwiseOrder):
        self.space = space
        self.order = order

    def zero(self) -> Seminorm:
        return Seminorm.zero(self.space)

    def add(self, p: Seminorm, q: Seminorm) -> Seminorm:
        return add(p, q)

    def check_laws(self, elements: Sequence[Seminorm]) -> list[str]:
        violations = []
        samples = self.order.samples(self.space)
        eq = self.order.equal
        le = self.order.le
        zero = self.zero()

        for p in elements:
            if not eq(add(p, zero), p, samples):
                violations.append(f"add_zero({p.label})")
            for q in elements:
                if not eq(add(p, q), add(q, p), samples):
                    violations.append(f"add_comm({p.label}, {q.label})")
                for r in elements:
                    if not eq(add(add(p, q), r), add(p, add(q, r)), samples):
                        violations.append(f"add_assoc({p.label}, {q.label}, {r.label})")
                    if le(p, q, samples) and not le(add(r, p), add(r, q), samples):
                        violations.append(f"add_le_add_left({p.label}, {q.label}, {r.label})")
                    if le(add(r, p), add(r, q), samples) and not le(p, q, samples):
                        violations.append(f"le_of_add_le_add_left({p.label}, {q.label}, {r.label})")
        return violations


# =============================================================================
# SEMILATTICE / LATTICE
# =============================================================================


class JoinSemilattice:
    """⊔ как точная верхняя грань; доступна над любым кольцом скаляров."""

    def __init__(self, space: VectorSpace, order: PointwiseOrder):
        self.space = space
        self.order = order

    def sup(self, p: Seminorm, q: Seminorm) -> Seminorm:
        return sup(p, q)

    def check_laws(self, elements: Sequence[Seminorm]) -> list[str]:
        violations = []
        samples = self.order.samples(self.space)
        le = self.order.le

        for p in elements:
            if not self.order.equal(sup(p, p), p, samples):
                violations.append(f"sup_idem({p.label})")
            for q in elements:
                join = sup(p, q)
                if not le(p, join, samples):
                    violations.append(f"le_sup_left({p.label}, {q.label})")
                if not le(q, join, samples):
                    violations.append(f"le_sup_right({p.label}, {q.label})")
                for r in elements:
                    if le(p, r, samples) and le(q, r, samples) and not le(join, r, samples):
                        violations.append(f"sup_le({p.label}, {q.label}, {r.label})")
        return violations


class Lattice(JoinSemilattice):
    """
    Добавляет ⊓ (infimal convolution); требует поля скаляров.

    inf_le_left:  (p ⊓ q)(x) ≤ p(x) + q(0) = p(x)   (u = x)
    le_inf:       c ≤ p, c ≤ q ⇒ c(x) ≤ c(u) + c(x−u) ≤ p(u) + q(x−u) для всех u
    """

    def __init__(self, space: VectorSpace, order: PointwiseOrder):
        if not space.scalars.is_field:
            raise StructureUnavailableError(
                f"lattice of seminorms needs field scalars, got {space.scalars.name}"
            )
        super().__init__(space, order)

    def inf(self, p: Seminorm, q: Seminorm) -> Seminorm:
        return inf(p, q, self.order.config)

    def check_laws(self, elements: Sequence[Seminorm]) -> list[str]:
        violations = super().check_laws(elements)
        samples = self.order.samples(self.space)
        le = self.order.le

        for p in elements:
            if not self.order.equal(self.inf(p, p), p, samples):
                violations.append(f"inf_idem({p.label})")
            for q in elements:
                meet = self.inf(p, q)
                if not le(meet, p, samples):
                    violations.append(f"inf_le_left({p.label}, {q.label})")
                if not le(meet, q, samples):
                    violations.append(f"inf_le_right({p.label}, {q.label})")
                for c in elements:
                    if le(c, p, samples) and le(c, q, samples) and not le(c, meet, samples):
                        violations.append(f"le_inf({p.label}, {q.label}, {c.label})")
        return violations


class ConditionallyCompleteLattice:
    """
    sup_set — точная верхняя грань любого ограниченного сверху семейства;
    на неограниченных семействах — конвенция (нулевая полунорма).
    """

    def __init__(self, space: VectorSpace, order: PointwiseOrder):
        self.space = space
        self.order = order

    def sup_set(self, family: "SeminormFamily | Sequence[Seminorm]") -> Seminorm:
        return sup_set(family, self.space, self.order.config)

    def inf_set(self, seminorms: Sequence[Seminorm]) -> Seminorm:
        return inf_set(seminorms, self.space, self.order.config)

    def check_laws(
        self,
        families: Sequence[Sequence[Seminorm]],
        upper_bounds: Sequence[Seminorm] = (),
    ) -> list[str]:
        """
        le_csSup: каждый член ≤ sup_set; csSup_le: sup_set ≤ любой верхней грани.
        """
        violations = []
        samples = self.order.samples(self.space)
        le = self.order.le

        for family in families:
            if not bdd_above(family, self.space):
                continue
            top = self.sup_set(family)
            for p in family:
                if not le(p, top, samples):
                    violations.append(f"le_csSup({p.label})")
            for bound in upper_bounds:
                if all(le(p, bound, samples) for p in family) and not le(top, bound, samples):
                    violations.append(f"csSup_le({bound.label})")
        return violations


# =============================================================================
# SEMINORM LATTICE
# =============================================================================


@dataclass(frozen=True)
class SeminormLattice:
    """
    Композиция доступных порядковых интерфейсов для данного пространства.

    meet is None, если скаляры не образуют поле.
    """

    order: PointwiseOrder
    monoid: OrderedCancelAddMonoid
    join: JoinSemilattice
    meet: Lattice | None
    complete: ConditionallyCompleteLattice

    @classmethod
    def build(cls, space: VectorSpace, config: EngineConfig | None = None) -> "SeminormLattice":
        order = PointwiseOrder(config)
        meet = Lattice(space, order) if space.scalars.is_field else None
        return cls(
            order=order,
            monoid=OrderedCancelAddMonoid(space, order),
            join=JoinSemilattice(space, order),
            meet=meet,
            complete=ConditionallyCompleteLattice(space, order),
        )

    def bottom(self) -> Seminorm:
        """⊥ = нулевая полунорма."""
        return self.monoid.zero()


def smul_le_smul(
    a: Any,
    b: Any,
    p: Seminorm,
    q: Seminorm,
    action: ScalarAction = NNREAL,
    order: PointwiseOrder = POINTWISE_ORDER,
) -> bool:
    """
    Монотонность: p ≤ q и a ≤ b ⇒ a•p ≤ b•q.

    a·p(x) ≤ b·p(x) ≤ b·q(x), используя p(x) ≥ 0.

    Raises:
        PreconditionViolation: гипотезы не выполнены (a > b или p ≰ q)
    """
    if action.weight(a) > action.weight(b):
        raise PreconditionViolation(f"expected a <= b, got a={a!r}, b={b!r}")
    if not order.le(p, q):
        raise PreconditionViolation(f"expected {p.label} <= {q.label}")
    return order.le(smul(a, p, action), smul(b, q, action))
