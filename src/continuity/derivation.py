"""
ContinuityDerivation — от одного ограниченного окрестностного шара к
равномерной непрерывности полунормы

Вход: closed_ball(p, 0, r), r > 0, является окрестностью нуля объемлющего
нормированного пространства. Свидетельство — метрический радиус ρ > 0 с
B(0, ρ) ⊆ closed_ball(p, 0, r).

Алгоритм для допуска ε > 0:
1. Выбрать скаляр k с 0 < ‖k‖ < ε / r (степень c⁻ⁿ нетривиального элемента).
2. k • closed_ball(p, 0, r) — окрестность нуля: содержит k • B(0, ρ) = B(0, ‖k‖ρ);
   при этом k • closed_ball(p, 0, r) = closed_ball(p, 0, ‖k‖r) ⊆ ball(p, 0, ε).
3. Значит ‖z‖ < δ = ‖k‖ρ ⇒ p(z) < ε — непрерывность в нуле.
4. |p(x) − p(y)| ≤ p(x − y) превращает это в модуль равномерной непрерывности.

Требуется нетривиально нормированное поле скаляров; иначе вывод невозможен
(StructureUnavailableError — структурное предусловие, а не ошибка рантайма).
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable

from src.core.domain.functional import Seminorm
from src.core.errors import PreconditionViolation, StructureUnavailableError
from src.core.math.numerical_safeguards import le_with_tolerance, validate_positive
from src.core.vectors import VectorSpace
from src.lattice.order import POINTWISE_ORDER

logger = logging.getLogger(__name__)


def _require_nontrivially_normed_field(space: VectorSpace) -> None:
    scalars = space.scalars
    if not scalars.is_field or not scalars.is_nontrivially_normed:
        raise StructureUnavailableError(
            f"continuity derivation needs a nontrivially normed field, got {scalars.name}"
        )
    if not space.is_normed:
        raise StructureUnavailableError(f"{space!r} carries no ambient norm (no topology)")


@dataclass(frozen=True)
class ContinuityCertificate:
    """
    Сертификат равномерной непрерывности полунормы.

    Attributes:
        seminorm: полунорма p
        radius: r — радиус шара closed_ball(p, 0, r)
        nhds_radius: ρ — B(0, ρ) ⊆ closed_ball(p, 0, r)
    """

    seminorm: Seminorm
    radius: float
    nhds_radius: float

    @property
    def continuous_at_zero(self) -> bool:
        """
        δ(ε) > 0 для всех ε > 0: нужны r, ρ > 0 и нетривиально нормированное
        поле над нормированным пространством (иначе small_element недоступен).
        """
        space = self.space
        scalars = space.scalars
        return (
            self.radius > 0
            and self.nhds_radius > 0
            and scalars.is_field
            and scalars.is_nontrivially_normed
            and space.is_normed
        )

    @property
    def uniformly_continuous(self) -> bool:
        """|p(x) − p(y)| ≤ p(x − y) переносит модуль в нуле на любую пару."""
        return self.continuous_at_zero

    @property
    def space(self) -> VectorSpace:
        return self.seminorm.space

    def scalar_for(self, eps: float) -> Any:
        """Скаляр k с 0 < ‖k‖ < ε / r."""
        validate_positive(eps, "eps")
        return self.space.scalars.small_element(eps / self.radius)

    def delta(self, eps: float) -> float:
        """
        Модуль непрерывности: dist(x, y) < δ(ε) ⇒ |p(x) − p(y)| < ε.

        Args:
            eps: допуск ε > 0

        Returns:
            δ = ‖k‖ · ρ
        """
        k = self.scalar_for(eps)
        return self.space.scalars.norm(k) * self.nhds_radius

    def check(self, x: Any, y: Any, eps: float) -> bool:
        """
        Проверка импликации модуля на паре точек.

        Returns:
            False только если dist(x, y) < δ(ε), но |p(x) − p(y)| ≥ ε
        """
        if self.space.distance(x, y) >= self.delta(eps):
            return True
        return self.seminorm.abs_sub(x, y) < eps


def derive_continuity(p: Seminorm, r: float, nhds_radius: float) -> ContinuityCertificate:
    """
    Вывод равномерной непрерывности p из окрестностного шара.

    Args:
        p: полунорма на нормированном пространстве
        r: радиус r > 0 шара closed_ball(p, 0, r)
        nhds_radius: ρ > 0 с B(0, ρ) ⊆ closed_ball(p, 0, r) (контракт вызывающего)

    Raises:
        StructureUnavailableError: скаляры не нетривиально нормированное поле
            или у пространства нет нормы
        ValueError: r ≤ 0 или ρ ≤ 0
    """
    validate_positive(r, "r")
    validate_positive(nhds_radius, "nhds_radius")
    _require_nontrivially_normed_field(p.space)

    logger.debug(
        "continuity of %s derived from closed_ball radius %s with neighbourhood radius %s",
        p.label,
        r,
        nhds_radius,
    )
    return ContinuityCertificate(seminorm=p, radius=float(r), nhds_radius=float(nhds_radius))


def continuity_of_le(certificate: ContinuityCertificate, p: Seminorm) -> ContinuityCertificate:
    """
    p ≤ q и q непрерывна ⇒ p непрерывна с тем же модулем:
    closed_ball(q, 0, r) ⊆ closed_ball(p, 0, r).

    Raises:
        PreconditionViolation: p ≰ q на выборке
    """
    q = certificate.seminorm
    if p.space is not q.space:
        raise ValueError("seminorms live on different spaces")
    if not POINTWISE_ORDER.le(p, q):
        raise PreconditionViolation(f"expected {p.label} <= {q.label}")
    return ContinuityCertificate(
        seminorm=p, radius=certificate.radius, nhds_radius=certificate.nhds_radius
    )


def continuity_from_bound(p: Seminorm, bound: float) -> ContinuityCertificate:
    """
    p(x) ≤ C·‖x‖ ⇒ B(0, 1/C) ⊆ closed_ball(p, 0, 1).

    Args:
        p: полунорма
        bound: C > 0 (контракт вызывающего: p ≤ C‖·‖)
    """
    validate_positive(bound, "bound")
    return derive_continuity(p, 1.0, 1.0 / bound)


# =============================================================================
# SHELL RESCALING
# =============================================================================


@dataclass(frozen=True)
class ShellRescaling:
    """
    Результат масштабирования точки в слой ε/‖c‖ ≤ p(d•x) < ε.
    """

    scalar: Any
    value: float
    inverse_norm_bound: float


def rescale_to_shell(p: Seminorm, eps: float, x: Any, c: Any | None = None) -> ShellRescaling:
    """
    Найти d ≠ 0 с ε/‖c‖ ≤ p(d•x) < ε и ‖d‖⁻¹ ≤ ε⁻¹·‖c‖·p(x).

    d = cⁿ для целого n (отрицательные n — степени c⁻¹).

    Raises:
        ValueError: p(x) = 0 или ε ≤ 0
        StructureUnavailableError: нет нетривиального элемента / поля
    """
    validate_positive(eps, "eps")
    space = p.space
    scalars = space.scalars
    px = p(x)
    if px == 0:
        raise ValueError("cannot rescale a point of the kernel (p(x) = 0) to a shell")

    if c is None:
        c = scalars._require_nontrivial()
    norm_c = scalars.norm(c)
    if norm_c <= 1.0:
        raise ValueError(f"shell rescaling needs ‖c‖ > 1, got {norm_c}")

    n = math.floor(math.log(eps / px) / math.log(norm_c))
    while norm_c**n * px >= eps:
        n -= 1
    while norm_c ** (n + 1) * px < eps:
        n += 1

    d = scalars.power(c, n) if n >= 0 else scalars.power(scalars.inv(c), -n)
    value = p(space.smul(d, x))
    return ShellRescaling(
        scalar=d,
        value=value,
        inverse_norm_bound=norm_c * px / eps,
    )


def bound_of_shell(
    p: Seminorm,
    q: Seminorm,
    bound: float,
    eps: float,
    samples: Iterable[Any],
) -> bool:
    """
    Если q ≤ C·p на слое ε/‖c‖ ≤ p < ε, то q(x) ≤ C·p(x) при всех x с p(x) ≠ 0.

    Каждая точка выборки с p(x) ≠ 0 переносится в слой (однородность сохраняет
    отношение q/p), и оценка проверяется там.
    """
    space = p.space
    for x in samples:
        if p(x) == 0:
            continue
        shell = rescale_to_shell(p, eps, x)
        y = space.smul(shell.scalar, x)
        if not le_with_tolerance(q(y), bound * p(y)):
            return False
    return True
