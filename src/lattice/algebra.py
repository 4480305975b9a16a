"""
SeminormAlgebra — построение новых полунорм из имеющихся

Операции (все чистые, создают новый Seminorm):
- zero, add, smul (семейство согласованных действий), sup (⊔, поточечный max)
- inf (⊓, infimal convolution, только над полем)
- sup_set (супремум семейства с разбором ограниченности), finset_sup, inf_set
- comp (композиция с полулинейным отображением), restrict_scalars
- comp_triangle, smul_sup — выборочная проверка тождеств

Каждая операция сохраняет три инварианта полунормы:
    add:  ‖a‖(p+q)(x) = ‖a‖p(x) + ‖a‖q(x); (p+q)(x+y) ≤ p(x)+p(y)+q(x)+q(y)
    smul: r • (‖a‖·p(x)) = ‖a‖·(r • p(x))
    sup:  max(c·s, c·t) = c·max(s, t) при c = ‖a‖ ≥ 0
    inf:  замена переменной u ↦ a•u внутри inf (a ≠ 0), прямой разбор при a = 0

КОНВЕНЦИЯ sup_set: если семейство не ограничено сверху поточечно, результат —
нулевая полунорма (вырожденный случай, не ошибка). Это делает sup_set тотальной
операцией; ⊥ = zero.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Any, Callable, Iterable, Iterator

import numpy as np
from scipy.optimize import minimize

from src.core.config import DEFAULT_CONFIG, EngineConfig
from src.core.domain.actions import NNREAL, ScalarAction
from src.core.domain.functional import Seminorm
from src.core.domain.maps import LinearMap, RestrictedSpace, RingHom
from src.core.errors import StructureUnavailableError
from src.core.math.numerical_safeguards import is_valid_float, le_with_tolerance, tolerance_for
from src.core.vectors import VectorSpace

logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================


def _require_same_space(p: Seminorm, q: Seminorm) -> None:
    if p.space is not q.space or p.scalars is not q.scalars:
        raise ValueError(
            f"seminorms live on different spaces: {p.space!r} vs {q.space!r}"
        )


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def zero(space: VectorSpace) -> Seminorm:
    """Нулевая полунорма на space."""
    return Seminorm.zero(space)


def add(p: Seminorm, q: Seminorm) -> Seminorm:
    """(p + q)(x) = p(x) + q(x)."""
    _require_same_space(p, q)
    return Seminorm(
        apply=lambda x: p(x) + q(x),
        space=p.space,
        label=f"({p.label} + {q.label})",
        scalars=p.scalars,
    )


def smul(r: Any, p: Seminorm, action: ScalarAction = NNREAL) -> Seminorm:
    """
    (r • p)(x) = act(r, p(x)) для согласованного действия action.

    Raises:
        ValueError: r не принадлежит типу, на котором определено action
    """
    if not action.contains(r):
        raise ValueError(f"{r!r} is not an element of {action.name}")
    return Seminorm(
        apply=lambda x: action.act(r, max(p(x), 0.0)),
        space=p.space,
        label=f"{r}•{p.label}",
        scalars=p.scalars,
    )


def sup(p: Seminorm, q: Seminorm) -> Seminorm:
    """(p ⊔ q)(x) = max(p(x), q(x))."""
    _require_same_space(p, q)
    return Seminorm(
        apply=lambda x: max(p(x), q(x)),
        space=p.space,
        label=f"({p.label} ⊔ {q.label})",
        scalars=p.scalars,
    )


# =============================================================================
# INFIMAL CONVOLUTION (⊓)
# =============================================================================


class InfimalConvolutionSolver:
    """
    Вычисление (p ⊓ q)(x) = inf_u (p(u) + q(x − u)).

    Кандидаты:
    1. u = x  →  p(x) + q(0) = p(x)   (даёт p ⊓ q ≤ p точно)
    2. u = 0  →  p(0) + q(x) = q(x)   (даёт p ⊓ q ≤ q точно)
    3. при наличии вещественных координат — покоординатное расщепление
       uᵢ ∈ {0, xᵢ} (жадный спуск), затем Nelder–Mead из 0, x, x/2 и
       точки расщепления с перезапусками из лучшей точки

    Функция u ↦ p(u) + q(x − u) выпукла и ограничена снизу нулём, поэтому
    inf существует; численный результат обрезается снизу нулём. Каждое
    значение — значение целевой функции в некоторой точке u, т.е. верхняя
    оценка inf.
    """

    def __init__(self, p: Seminorm, q: Seminorm, config: EngineConfig | None = None):
        self.p = p
        self.q = q
        self.space = p.space
        self.config = config or DEFAULT_CONFIG

    def objective(self, x: Any, u: Any) -> float:
        return self.p(u) + self.q(self.space.sub(x, u))

    def candidates(self, x: Any) -> list[float]:
        """Значения в точных кандидатах u = x и u = 0."""
        return [self.objective(x, x), self.objective(x, self.space.zero())]

    def _split(self, fun: Callable[[np.ndarray], float], x_coords: np.ndarray) -> np.ndarray:
        """
        Жадный покоординатный спуск по u = mask·x, начиная с u = x.

        Для сепарабельных полунорм (взвешенные ℓ1) расщепление точное.
        """
        mask = np.ones(x_coords.shape, dtype=bool)
        best = fun(x_coords)
        for _ in range(x_coords.size):
            improved = False
            for i in range(x_coords.size):
                mask[i] = not mask[i]
                value = fun(np.where(mask, x_coords, 0.0))
                if value < best - self.config.abs_tol:
                    best = value
                    improved = True
                else:
                    mask[i] = not mask[i]
            if not improved:
                break
        return np.where(mask, x_coords, 0.0)

    def _nelder_mead(self, fun: Callable[[np.ndarray], float], start: np.ndarray) -> float:
        """Nelder–Mead с перезапусками, пока выигрыш превышает abs_tol."""
        cfg = self.config
        budget = cfg.meet_max_iter or 200 * start.size
        options = {
            "maxiter": budget,
            "maxfev": budget,
            "xatol": cfg.meet_xatol,
            "fatol": cfg.abs_tol,
            "adaptive": start.size > 2,
        }
        result = minimize(fun, start, method="Nelder-Mead", options=options)
        best_x, best_f = result.x, float(result.fun)
        for _ in range(cfg.meet_max_restarts):
            result = minimize(fun, best_x, method="Nelder-Mead", options=options)
            if not float(result.fun) < best_f - cfg.abs_tol:
                break
            best_x, best_f = result.x, float(result.fun)
        if not result.success:
            logger.debug("meet optimizer stopped without convergence: %s", result.message)
        return best_f

    def _optimize(self, x: Any) -> list[float]:
        space = self.space
        if self.config.meet_optimizer == "none":
            return []
        if not space.has_coordinates:
            logger.debug("meet on %r: no coordinates, exact candidates only", space)
            return []

        x_coords = np.asarray(space.coordinates(x), dtype=float)

        def fun(v: np.ndarray) -> float:
            return self.objective(x, space.from_coordinates(v))

        split = self._split(fun, x_coords)
        values = [fun(split)]
        for start in (split, np.zeros_like(x_coords), x_coords, 0.5 * x_coords):
            value = self._nelder_mead(fun, start)
            if not is_valid_float(value):
                logger.debug("meet optimizer returned %r at x=%r, discarded", value, x)
                continue
            values.append(value)
        return values

    def __call__(self, x: Any) -> float:
        return max(0.0, min(self.candidates(x) + self._optimize(x)))


def inf(p: Seminorm, q: Seminorm, config: EngineConfig | None = None) -> Seminorm:
    """
    (p ⊓ q)(x) = inf_u (p(u) + q(x − u)).

    Однородность inf доказывается заменой u ↦ a•u, что требует a⁻¹:
    операция определена только над полем.

    Raises:
        StructureUnavailableError: скаляры не образуют поле
    """
    _require_same_space(p, q)
    if not p.scalars.is_field:
        raise StructureUnavailableError(
            f"inf (infimal convolution) requires field scalars, got {p.scalars.name}"
        )
    solver = InfimalConvolutionSolver(p, q, config)
    return Seminorm(
        apply=solver,
        space=p.space,
        label=f"({p.label} ⊓ {q.label})",
        scalars=p.scalars,
    )


# =============================================================================
# СЕМЕЙСТВА И sup_set
# =============================================================================


@dataclass(frozen=True)
class SeminormFamily:
    """
    Перечислимое семейство полунорм i ↦ members(i), i = 0, 1, 2, …

    Attributes:
        members: i-й член семейства
        space: общее пространство
        size: число членов (None — бесконечное семейство)
        upper_bound: свидетельство поточечной ограниченности сверху
            (полунорма q с p_i ≤ q для всех i) или None
    """

    members: Callable[[int], Seminorm]
    space: VectorSpace
    size: int | None = None
    upper_bound: Seminorm | None = None
    label: str = "S"

    @classmethod
    def of(cls, seminorms: Iterable[Seminorm], space: VectorSpace, label: str = "S") -> "SeminormFamily":
        items = tuple(seminorms)
        return cls(members=lambda i: items[i], space=space, size=len(items), label=label)

    @property
    def is_finite(self) -> bool:
        return self.size is not None

    def __iter__(self) -> Iterator[Seminorm]:
        indices = range(self.size) if self.size is not None else count()
        for i in indices:
            yield self.members(i)


class SupStatus(str, Enum):
    """Тег результата sup_set."""

    WELL_DEFINED = "well_defined"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class SupSetResult:
    """
    WellDefined(seminorm) | Degenerate.

    Вырожденный случай сворачивается в нулевую полунорму по конвенции.
    """

    status: SupStatus
    seminorm: Seminorm

    def collapse(self) -> Seminorm:
        return self.seminorm


def _as_family(family: "SeminormFamily | Iterable[Seminorm]", space: VectorSpace | None) -> SeminormFamily:
    if isinstance(family, SeminormFamily):
        return family
    items = tuple(family)
    if space is None:
        if not items:
            raise ValueError("space is required for an empty collection of seminorms")
        space = items[0].space
    return SeminormFamily.of(items, space)


def bdd_above(family: "SeminormFamily | Iterable[Seminorm]", space: VectorSpace | None = None) -> bool:
    """
    Ограничено ли семейство сверху поточечно.

    Конечное семейство ограничено всегда; бесконечное — только при наличии
    свидетельства upper_bound.
    """
    fam = _as_family(family, space)
    return fam.is_finite or fam.upper_bound is not None


def bdd_below(family: "SeminormFamily | Iterable[Seminorm]", space: VectorSpace | None = None) -> bool:
    """Любое семейство полунорм ограничено снизу нулём."""
    return True


def sup_set_tagged(
    family: "SeminormFamily | Iterable[Seminorm]",
    space: VectorSpace | None = None,
    config: EngineConfig | None = None,
) -> SupSetResult:
    """
    Супремум семейства с явным тегом ограниченности.

    - конечное семейство: поточечный max (пустое → 0)
    - бесконечное с upper_bound: поточечный sup, вычисляемый сканированием
      не более family_scan_limit членов с остановкой при достижении upper_bound(x)
    - бесконечное без upper_bound: DEGENERATE, нулевая полунорма
    """
    config = config or DEFAULT_CONFIG
    fam = _as_family(family, space)

    if not bdd_above(fam):
        logger.debug("sup_set over unbounded family %s: degenerate, returning zero", fam.label)
        return SupSetResult(SupStatus.DEGENERATE, Seminorm.zero(fam.space))

    if fam.is_finite:
        members = list(fam)

        def pointwise_max(x: Any) -> float:
            return max((p(x) for p in members), default=0.0)

        seminorm = Seminorm(apply=pointwise_max, space=fam.space, label=f"sSup {fam.label}")
        return SupSetResult(SupStatus.WELL_DEFINED, seminorm)

    bound = fam.upper_bound
    limit = config.family_scan_limit

    def scanned_sup(x: Any) -> float:
        ceiling = bound(x)
        best = 0.0
        for i in range(limit):
            best = max(best, fam.members(i)(x))
            if best >= ceiling - tolerance_for(best, ceiling, config.rel_tol, config.abs_tol):
                break
        return best

    seminorm = Seminorm(apply=scanned_sup, space=fam.space, label=f"sSup {fam.label}")
    return SupSetResult(SupStatus.WELL_DEFINED, seminorm)


def sup_set(
    family: "SeminormFamily | Iterable[Seminorm]",
    space: VectorSpace | None = None,
    config: EngineConfig | None = None,
) -> Seminorm:
    """Тотальный sup_set: вырожденный случай свёрнут в нулевую полунорму."""
    return sup_set_tagged(family, space, config).collapse()


def finset_sup(seminorms: Iterable[Seminorm], space: VectorSpace) -> Seminorm:
    """Свёртка ⊔ по конечному набору, начиная с ⊥ = 0."""
    result = Seminorm.zero(space)
    for p in seminorms:
        result = sup(result, p)
    return result


def inf_set(
    seminorms: Iterable[Seminorm],
    space: VectorSpace,
    config: EngineConfig | None = None,
) -> Seminorm:
    """
    Инфимум конечного набора: свёртка ⊓ (только над полем).

    Пустой набор: sInf ∅ = sSup(нижние грани ∅) = sSup(всё) — неограниченное
    семейство, поэтому результат — нулевая полунорма.
    """
    items = list(seminorms)
    if not items:
        return Seminorm.zero(space)
    result = items[0]
    for p in items[1:]:
        result = inf(result, p, config)
    return result


# =============================================================================
# КОМПОЗИЦИЯ И СМЕНА СКАЛЯРОВ
# =============================================================================


def comp(p: Seminorm, f: LinearMap) -> Seminorm:
    """
    (p ∘ f)(x) = p(f(x)) для σ-полулинейного f : E' → E.

    Однородность: p(f(a•x)) = p(σ(a)•f(x)) = ‖σ(a)‖·p(f(x)) = ‖a‖·p(f(x)).

    Raises:
        StructureUnavailableError: σ не изометричен
        ValueError: codomain f не совпадает с пространством p
    """
    if f.codomain is not p.space:
        raise ValueError(f"map lands in {f.codomain!r}, seminorm lives on {p.space!r}")
    if not f.ring_hom.isometric:
        raise StructureUnavailableError(
            f"comp requires an isometric ring homomorphism, {f.ring_hom.label} is not"
        )
    return Seminorm(
        apply=lambda x: p(f(x)),
        space=f.domain,
        label=f"{p.label}∘{f.label}",
    )


def restrict_scalars(p: Seminorm, algebra_map: RingHom) -> Seminorm:
    """
    Та же функция, рассматриваемая над подполем 𝕜 → 𝕜'.

    Raises:
        StructureUnavailableError: алгебраическое отображение не изометрично
    """
    if not algebra_map.isometric:
        raise StructureUnavailableError("restrict_scalars requires a norm-preserving algebra map")
    space = RestrictedSpace(p.space, algebra_map)
    return Seminorm(apply=p.apply, space=space, label=p.label)


# =============================================================================
# ВЫБОРОЧНЫЕ ТОЖДЕСТВА
# =============================================================================


def _samples(space: VectorSpace, config: EngineConfig) -> list[Any]:
    return [space.zero()] + space.sample(config.sample_count, config.rng(), config.sample_scale)


def comp_triangle(
    p: Seminorm,
    f: LinearMap,
    g: LinearMap,
    config: EngineConfig | None = None,
) -> bool:
    """
    p ∘ (f + g) ≤ p ∘ f + p ∘ g на выборке из domain.

    Субаддитивность p в точке (f(x), g(x)).
    """
    config = config or DEFAULT_CONFIG
    lhs = comp(p, f + g)
    rhs = add(comp(p, f), comp(p, g))
    return all(
        le_with_tolerance(lhs(x), rhs(x), config.rel_tol, config.abs_tol)
        for x in _samples(f.domain, config)
    )


def smul_sup(
    r: Any,
    p: Seminorm,
    q: Seminorm,
    action: ScalarAction = NNREAL,
    config: EngineConfig | None = None,
) -> bool:
    """
    r • (p ⊔ q) = r • p ⊔ r • q на выборке.

    Действие согласовано с умножением на ℝ≥0, поэтому монотонно и
    перестановочно с max.
    """
    config = config or DEFAULT_CONFIG
    lhs = smul(r, sup(p, q), action)
    rhs = sup(smul(r, p, action), smul(r, q, action))
    return lhs.pointwise_equal(rhs, _samples(p.space, config), config)
