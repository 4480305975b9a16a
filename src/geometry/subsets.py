"""
Subsets of a vector space, defined by membership predicates.

Шары полунорм и их алгебраические образы — производные множества без
собственного хранения: они пересчитываются из (p, x, r) при каждой проверке
принадлежности.

Иерархия:
- Subset (абстрактный)
    - EmptySet / UniversalSet
    - Intersection
    - ScaledSet      k • S
    - TranslatedSet  v + S
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from src.core.vectors import VectorSpace


class Subset(ABC):
    """
    Подмножество модуля `space`, заданное предикатом принадлежности.
    """

    def __init__(self, space: VectorSpace):
        self.space = space

    @property
    def is_empty(self) -> bool:
        """True, если множество заведомо пусто (False не гарантирует непустоту)."""
        return False

    @abstractmethod
    def is_element(self, y: Any) -> bool: ...

    def __contains__(self, y: Any) -> bool:
        return self.is_element(y)

    def intersect(self, other: "Subset") -> "Subset":
        """S ∩ O; вложенные пересечения сливаются в одно."""
        parts: list[Subset] = []
        for s in (self, other):
            if isinstance(s, Intersection):
                parts.extend(s.subsets)
            else:
                parts.append(s)
        return Intersection(parts)

    def __and__(self, other: "Subset") -> "Subset":
        return self.intersect(other)

    def scale(self, k: Any) -> "Subset":
        return ScaledSet(k, self)

    def translate(self, v: Any) -> "Subset":
        return TranslatedSet(v, self)


class EmptySet(Subset):
    """∅."""

    @property
    def is_empty(self) -> bool:
        return True

    def is_element(self, y: Any) -> bool:
        return False

    def __repr__(self) -> str:
        return "EmptySet()"


class UniversalSet(Subset):
    """Всё пространство."""

    def is_element(self, y: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "UniversalSet()"


class Intersection(Subset):
    """Пересечение конечного набора множеств."""

    def __init__(self, subsets: Iterable[Subset]):
        self.subsets = list(subsets)
        if not self.subsets:
            raise ValueError("Intersection needs at least one subset")
        super().__init__(self.subsets[0].space)

    @property
    def is_empty(self) -> bool:
        return any(s.is_empty for s in self.subsets)

    def is_element(self, y: Any) -> bool:
        return all(s.is_element(y) for s in self.subsets)

    def __repr__(self) -> str:
        return f"Intersection({self.subsets!r})"


class ScaledSet(Subset):
    """
    k • S = {k • s : s ∈ S}.

    Принадлежность: при k ≠ 0 — y ∈ k•S ⟺ k⁻¹•y ∈ S (нужно поле);
    при k = 0 — y = 0 и S непусто.
    """

    def __init__(self, k: Any, base: Subset):
        super().__init__(base.space)
        self.k = k
        self.base = base

    @property
    def is_empty(self) -> bool:
        return self.base.is_empty

    def is_element(self, y: Any) -> bool:
        scalars = self.space.scalars
        if scalars.is_zero(self.k):
            return self.space.equal(y, self.space.zero()) and not self.base.is_empty
        return self.base.is_element(self.space.smul(scalars.inv(self.k), y))

    def __repr__(self) -> str:
        return f"ScaledSet({self.k!r}, {self.base!r})"


class TranslatedSet(Subset):
    """v + S = {v + s : s ∈ S}."""

    def __init__(self, v: Any, base: Subset):
        super().__init__(base.space)
        self.v = v
        self.base = base

    @property
    def is_empty(self) -> bool:
        return self.base.is_empty

    def is_element(self, y: Any) -> bool:
        return self.base.is_element(self.space.sub(y, self.v))

    def __repr__(self) -> str:
        return f"TranslatedSet({self.v!r}, {self.base!r})"
