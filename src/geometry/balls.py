"""
Шары полунормы

    ball p x r        = { y : p(y − x) < r }
    closed_ball p x r = { y : p(y − x) ≤ r }

Инварианты:
- ball p x r ⊆ closed_ball p x r
- ball пуст при r ≤ 0, closed_ball пуст при r < 0
- closed_ball p x 0 содержит центр (и всё ядро p, сдвинутое в x)

Принадлежность проверяется точным сравнением значения полунормы с радиусом.
"""

from typing import Any

from src.core.domain.functional import Seminorm
from src.geometry.subsets import EmptySet, Subset


class Ball(Subset):
    """Открытый шар { y : p(y − center) < radius }."""

    def __init__(self, p: Seminorm, center: Any, radius: float):
        super().__init__(p.space)
        self.p = p
        self.center = center
        self.radius = float(radius)

    @property
    def is_empty(self) -> bool:
        return self.radius <= 0

    def is_element(self, y: Any) -> bool:
        return self.p(self.space.sub(y, self.center)) < self.radius

    def closure_ball(self) -> "ClosedBall":
        """Замкнутый шар того же радиуса (надмножество)."""
        return ClosedBall(self.p, self.center, self.radius)

    def __repr__(self) -> str:
        return f"Ball({self.p.label}, {self.center!r}, {self.radius})"


class ClosedBall(Subset):
    """Замкнутый шар { y : p(y − center) ≤ radius }."""

    def __init__(self, p: Seminorm, center: Any, radius: float):
        super().__init__(p.space)
        self.p = p
        self.center = center
        self.radius = float(radius)

    @property
    def is_empty(self) -> bool:
        return self.radius < 0

    def is_element(self, y: Any) -> bool:
        return self.p(self.space.sub(y, self.center)) <= self.radius

    def __repr__(self) -> str:
        return f"ClosedBall({self.p.label}, {self.center!r}, {self.radius})"


def ball(p: Seminorm, x: Any, r: float) -> Subset:
    """Открытый шар; при r ≤ 0 — EmptySet."""
    if r <= 0:
        return EmptySet(p.space)
    return Ball(p, x, r)


def closed_ball(p: Seminorm, x: Any, r: float) -> Subset:
    """Замкнутый шар; при r < 0 — EmptySet."""
    if r < 0:
        return EmptySet(p.space)
    return ClosedBall(p, x, r)
