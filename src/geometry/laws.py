"""
Ball laws — алгебра шаров полунорм

Равенства множеств невычислимы в общем случае, поэтому каждый закон
реализован конструктивно: функция принимает левую часть и возвращает
каноническое множество правой части (равное ей или содержащее её).
Тесты проверяют законы принадлежностью на выборках (subset_on).

Законы:
- монотонность по радиусу, антитонность по полунорме
- ball(c•p, x, r) = ball(p, x, r/c), c > 0
- ball(p ⊔ q, x, r) = ball(p, x, r) ∩ ball(q, x, r) и конечная версия
- ball(p, x₁, r₁) + ball(p, x₂, r₂) ⊆ ball(p, x₁+x₂, r₁+r₂) (и замкнутая версия)
- ball(p, 0, ‖k‖r) ⊆ k•ball(p, 0, r), равенство при k ≠ 0
- поглощаемость и уравновешенность шаров с центром 0
- −ball, сдвиг, прообраз при композиции, выпуклость
"""

from dataclasses import dataclass
from typing import Any, Iterable

from src.core.domain.actions import NNREAL
from src.core.domain.functional import Seminorm
from src.core.domain.maps import LinearMap
from src.core.errors import PreconditionViolation, StructureUnavailableError
from src.core.math.numerical_safeguards import validate_positive
from src.core.vectors import VectorSpace
from src.geometry.balls import Ball, ClosedBall, ball, closed_ball
from src.geometry.subsets import EmptySet, ScaledSet, Subset, UniversalSet
from src.lattice.algebra import comp
from src.lattice.order import POINTWISE_ORDER


def subset_on(a: Subset, b: Subset, samples: Iterable[Any]) -> bool:
    """A ⊆ B на выборке: каждый элемент выборки из A лежит в B."""
    return all(b.is_element(y) for y in samples if a.is_element(y))


def _require_zero_center(b: Ball | ClosedBall) -> None:
    if not b.space.equal(b.center, b.space.zero()):
        raise PreconditionViolation(f"expected a ball centred at 0, got centre {b.center!r}")


def _require_field(b: Ball, law: str) -> None:
    scalars = b.space.scalars
    if not scalars.is_field:
        raise StructureUnavailableError(f"{law} requires field scalars, got {scalars.name}")


# =============================================================================
# МОНОТОННОСТЬ
# =============================================================================


def ball_mono(b: Ball, r2: float) -> Subset:
    """r₁ ≤ r₂ ⇒ ball p x r₁ ⊆ ball p x r₂; возвращает больший шар."""
    if r2 < b.radius:
        raise PreconditionViolation(f"expected radius >= {b.radius}, got {r2}")
    return ball(b.p, b.center, r2)


def closed_ball_mono(b: ClosedBall, r2: float) -> Subset:
    """r₁ ≤ r₂ ⇒ closed_ball p x r₁ ⊆ closed_ball p x r₂."""
    if r2 < b.radius:
        raise PreconditionViolation(f"expected radius >= {b.radius}, got {r2}")
    return closed_ball(b.p, b.center, r2)


def ball_antitone(b: Ball, q: Seminorm) -> Subset:
    """
    q ≤ p ⇒ ball p x r ⊆ ball q x r; возвращает шар полунормы q.

    Raises:
        PreconditionViolation: q ≰ p на выборке
    """
    if not POINTWISE_ORDER.le(q, b.p):
        raise PreconditionViolation(f"expected {q.label} <= {b.p.label}")
    return ball(q, b.center, b.radius)


# =============================================================================
# ОБРАЗЫ ПРИ АЛГЕБРАИЧЕСКИХ ОПЕРАЦИЯХ
# =============================================================================


def ball_smul(c: float, p: Seminorm, x: Any, r: float) -> Subset:
    """ball(c•p, x, r) = ball(p, x, r/c) для c > 0."""
    validate_positive(NNREAL.weight(c), "c")
    return ball(p, x, r / c)


def closed_ball_smul(c: float, p: Seminorm, x: Any, r: float) -> Subset:
    """closed_ball(c•p, x, r) = closed_ball(p, x, r/c) для c > 0."""
    validate_positive(NNREAL.weight(c), "c")
    return closed_ball(p, x, r / c)


def ball_sup(p: Seminorm, q: Seminorm, x: Any, r: float) -> Subset:
    """ball(p ⊔ q, x, r) = ball(p, x, r) ∩ ball(q, x, r): max(a, b) < r ⟺ a < r ∧ b < r."""
    return ball(p, x, r).intersect(ball(q, x, r))


def ball_finset_sup(seminorms: Iterable[Seminorm], space: VectorSpace, x: Any, r: float) -> Subset:
    """
    ball(⊔ᵢ pᵢ, x, r) = ⋂ᵢ ball(pᵢ, x, r).

    Пустой набор: ⊔ ∅ = 0, и шар нулевой полунормы — всё пространство при r > 0.
    """
    result = ball_zero_functional(space, r)
    for p in seminorms:
        part = ball(p, x, r)
        result = part if isinstance(result, UniversalSet) else result.intersect(part)
    return result


def ball_zero_functional(space: VectorSpace, r: float) -> Subset:
    """Шар нулевой полунормы (⊥): всё пространство при r > 0, иначе ∅."""
    if r <= 0:
        return EmptySet(space)
    return UniversalSet(space)


def closed_ball_zero_functional(space: VectorSpace, r: float) -> Subset:
    """Замкнутый шар ⊥: всё пространство при r ≥ 0, иначе ∅."""
    if r < 0:
        return EmptySet(space)
    return UniversalSet(space)


def ball_add_ball_subset(b1: Ball, b2: Ball) -> Subset:
    """
    ball(p, x₁, r₁) + ball(p, x₂, r₂) ⊆ ball(p, x₁+x₂, r₁+r₂).

    p((y₁+y₂) − (x₁+x₂)) ≤ p(y₁−x₁) + p(y₂−x₂) < r₁ + r₂.
    """
    if b1.p is not b2.p:
        raise PreconditionViolation("Minkowski law needs balls of the same seminorm")
    space = b1.space
    return ball(b1.p, space.add(b1.center, b2.center), b1.radius + b2.radius)


def closed_ball_add_closed_ball_subset(b1: ClosedBall, b2: ClosedBall) -> Subset:
    """closed_ball(p, x₁, r₁) + closed_ball(p, x₂, r₂) ⊆ closed_ball(p, x₁+x₂, r₁+r₂)."""
    if b1.p is not b2.p:
        raise PreconditionViolation("Minkowski law needs balls of the same seminorm")
    space = b1.space
    return closed_ball(b1.p, space.add(b1.center, b2.center), b1.radius + b2.radius)


def ball_zero_subset_smul(k: Any, b: Ball) -> Subset:
    """
    ball(p, 0, ‖k‖·r) ⊆ k • ball(p, 0, r) для любого скаляра k.

    Raises:
        StructureUnavailableError: скаляры не образуют поле
    """
    _require_zero_center(b)
    _require_field(b, "ball_zero_subset_smul")
    return ball(b.p, b.center, b.space.scalars.norm(k) * b.radius)


def smul_ball_zero(k: Any, b: Ball) -> Subset:
    """
    k • ball(p, 0, r).

    При k ≠ 0 — равенство k • ball(p, 0, r) = ball(p, 0, ‖k‖·r):
    y ∈ k • ball ⟺ p(k⁻¹•y) = ‖k‖⁻¹·p(y) < r. При k = 0 — {0} (как ScaledSet).

    Raises:
        StructureUnavailableError: скаляры не образуют поле (k⁻¹ недоступен)
    """
    _require_zero_center(b)
    _require_field(b, "smul_ball_zero")
    if b.space.scalars.is_zero(k):
        return ScaledSet(k, b)
    return ball(b.p, b.center, b.space.scalars.norm(k) * b.radius)


def neg_ball(b: Ball) -> Subset:
    """−ball(p, x, r) = ball(p, −x, r)."""
    return ball(b.p, b.space.neg(b.center), b.radius)


def vadd_ball(v: Any, b: Ball) -> Subset:
    """v + ball(p, x, r) = ball(p, v + x, r)."""
    return ball(b.p, b.space.add(v, b.center), b.radius)


def ball_comp(p: Seminorm, f: LinearMap, x: Any, r: float) -> Subset:
    """f⁻¹(ball(p, f(x), r)) = ball(p ∘ f, x, r)."""
    return ball(comp(p, f), x, r)


def convex_combination(b: Ball | ClosedBall, y1: Any, y2: Any, t: float) -> Any:
    """
    t•y₁ + (1−t)•y₂ для y₁, y₂ из шара — снова точка шара (шар выпуклый):
    p(t(y₁−x) + (1−t)(y₂−x)) ≤ t·p(y₁−x) + (1−t)·p(y₂−x).

    Raises:
        ValueError: t вне [0, 1]
        PreconditionViolation: y₁ или y₂ не лежат в шаре
    """
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"t must lie in [0, 1], got {t}")
    if y1 not in b or y2 not in b:
        raise PreconditionViolation("both points must lie in the ball")
    space = b.space
    scalars = space.scalars
    return space.add(space.smul(scalars.coerce(t), y1), space.smul(scalars.coerce(1.0 - t), y2))


# =============================================================================
# ПОГЛОЩАЕМОСТЬ И УРАВНОВЕШЕННОСТЬ
# =============================================================================


@dataclass(frozen=True)
class AbsorptionWitness:
    """
    Свидетельство поглощаемости шара ball(p, x₀, r) с p(x₀) < r.

    Для любого y и любого скаляра a с ‖a‖ > threshold(y) выполнено y ∈ a • ball:
    p(a⁻¹y − x₀) ≤ ‖a‖⁻¹·p(y) + p(x₀) < r.
    """

    ball: Ball

    def threshold(self, y: Any) -> float:
        """Порог нормы скаляра: p(y) / (r − p(x₀))."""
        b = self.ball
        return b.p(y) / (b.radius - b.p(b.center))

    def scalar_for(self, y: Any) -> Any:
        """Скаляр a с y ∈ a • ball (архимедово свойство нормы скаляров)."""
        return self.ball.space.scalars.large_element(self.threshold(y))

    def absorbs(self, y: Any) -> bool:
        return ScaledSet(self.scalar_for(y), self.ball).is_element(y)


def absorbent_ball(b: Ball) -> AbsorptionWitness:
    """
    Шар, содержащий 0 (p(x₀) < r), поглощающий.

    Raises:
        PreconditionViolation: p(x₀) ≥ r
    """
    if not b.p(b.center) < b.radius:
        raise PreconditionViolation(
            f"absorbent ball needs p(centre) < radius, got {b.p(b.center)} >= {b.radius}"
        )
    return AbsorptionWitness(b)


def absorbent_ball_zero(p: Seminorm, r: float) -> AbsorptionWitness:
    """Шар ball(p, 0, r) с r > 0 поглощающий."""
    validate_positive(r, "r")
    return AbsorptionWitness(Ball(p, p.space.zero(), r))


@dataclass(frozen=True)
class BalancedWitness:
    """
    Свидетельство уравновешенности шара с центром 0:
    ‖a‖ ≤ 1, p(y) < r ⇒ p(a•y) = ‖a‖·p(y) ≤ p(y) < r.
    """

    ball: Ball | ClosedBall

    def image(self, a: Any, y: Any) -> Any:
        """
        a • y, гарантированно лежащий в шаре.

        Raises:
            ValueError: ‖a‖ > 1
            PreconditionViolation: y не лежит в шаре
        """
        space = self.ball.space
        if space.scalars.norm(a) > 1.0:
            raise ValueError(f"balanced images need ‖a‖ <= 1, got {space.scalars.norm(a)}")
        if y not in self.ball:
            raise PreconditionViolation(f"{y!r} is not in {self.ball!r}")
        return space.smul(a, y)


def balanced_ball_zero(b: Ball | ClosedBall) -> BalancedWitness:
    """Шар с центром 0 уравновешен."""
    _require_zero_center(b)
    return BalancedWitness(b)
