"""
NormAdapter — полунорма, совпадающая с нормой пространства

Для нормированного пространства (space.is_normed) норма ‖·‖ сама является
полунормой. Её шары совпадают с метрическими шарами:

    ball(norm_seminorm, x, r) = { y : ‖y − x‖ < r } = Metric.ball x r
"""

from typing import Any

from src.core.domain.functional import Seminorm
from src.core.errors import StructureUnavailableError
from src.core.vectors import VectorSpace
from src.geometry.balls import ball
from src.geometry.subsets import EmptySet, Subset


def norm_seminorm(space: VectorSpace) -> Seminorm:
    """
    Норма пространства как полунорма.

    Raises:
        StructureUnavailableError: у пространства нет объемлющей нормы
    """
    if not space.is_normed:
        raise StructureUnavailableError(f"{space!r} carries no ambient norm")
    return Seminorm.of(space.norm, space, label="‖·‖")


class MetricBall(Subset):
    """Метрический шар { y : dist(y, center) < radius }."""

    def __init__(self, space: VectorSpace, center: Any, radius: float):
        if not space.is_normed:
            raise StructureUnavailableError(f"{space!r} carries no ambient norm")
        super().__init__(space)
        self.center = center
        self.radius = float(radius)

    @property
    def is_empty(self) -> bool:
        return self.radius <= 0

    def is_element(self, y: Any) -> bool:
        return self.space.distance(y, self.center) < self.radius

    def __repr__(self) -> str:
        return f"MetricBall({self.center!r}, {self.radius})"


def ball_norm_seminorm(space: VectorSpace, x: Any, r: float) -> Subset:
    """
    Шар норм-полунормы, выраженный как метрический шар.

    Равенство ball(norm_seminorm(space), x, r) = MetricBall(space, x, r).
    """
    if r <= 0:
        return EmptySet(space)
    return MetricBall(space, x, r)


def norm_seminorm_ball(space: VectorSpace, x: Any, r: float) -> Subset:
    """Тот же шар, построенный через полунорму (для сравнения с метрическим)."""
    return ball(norm_seminorm(space), x, r)


class MetricPreimage(Subset):
    """
    Прообраз p⁻¹(Metric.ball 0 r) = { x : |p(x) − 0| < r } для значений в ℝ.
    """

    def __init__(self, p: Seminorm, radius: float):
        super().__init__(p.space)
        self.p = p
        self.radius = float(radius)

    def is_element(self, y: Any) -> bool:
        return abs(self.p(y)) < self.radius


def preimage_metric_ball(p: Seminorm, r: float) -> Subset:
    """
    p⁻¹(Metric.ball 0 r) = ball(p, 0, r), поскольку |p(x)| = p(x).

    Возвращает прообраз как отдельное множество; совпадение с ball(p, 0, r)
    проверяется принадлежностью.
    """
    return MetricPreimage(p, r)
