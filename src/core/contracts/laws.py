"""
SeminormLawValidator — выборочная проверка законов полунормы

Конструкторы Seminorm.of / of_smul_le принимают законы как контракт вызывающего.
Этот модуль проверяет контракт на детерминированной выборке векторов и скаляров:

    zero          p(0) = 0
    non_negative  p(x) ≥ 0
    symmetric     p(−x) = p(x)
    subadditive   p(x + y) ≤ p(x) + p(y)
    homogeneous   p(a•x) = ‖a‖·p(x)

Результат — LawCheckReport (pydantic), сериализуемый в JSON по контракту
contracts/schema/law_report.json.
"""

import json
import logging
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, Field

from src.core.config import DEFAULT_CONFIG, EngineConfig
from src.core.contracts.validators import validate_law_report
from src.core.domain.functional import Seminorm, homogeneity_bounds
from src.core.errors import PreconditionViolation
from src.core.math.numerical_safeguards import is_close, le_with_tolerance

logger = logging.getLogger(__name__)


# =============================================================================
# REPORT MODELS
# =============================================================================


class LawName(str, Enum):
    """Проверяемые законы полунормы"""

    ZERO = "zero"
    NON_NEGATIVE = "non_negative"
    SYMMETRIC = "symmetric"
    SUBADDITIVE = "subadditive"
    HOMOGENEOUS = "homogeneous"


class LawViolation(BaseModel):
    """Одно нарушение: закон, обе части неравенства/равенства и точка-свидетель."""

    law: LawName = Field(..., description="Нарушенный закон")
    lhs: float = Field(..., description="Левая часть")
    rhs: float = Field(..., description="Правая часть")
    witness: str = Field(..., description="repr точки (и скаляра), где закон нарушен")

    model_config = {"frozen": True}


class LawCheckReport(BaseModel):
    """
    Итог проверки законов на выборке.

    Immutable модель (frozen=True).
    """

    seminorm: str = Field(..., min_length=1, description="Метка проверенной полунормы")
    samples_checked: int = Field(..., ge=0, description="Число векторов выборки")
    violations: list[LawViolation] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def violated_laws(self) -> set[LawName]:
        return {v.law for v in self.violations}

    def to_json(self) -> str:
        """
        JSON-представление, проверенное по контракту law_report.json.

        Raises:
            jsonschema.ValidationError: нарушение контракта
        """
        data = self.model_dump(mode="json")
        validate_law_report(data)
        return json.dumps(data, ensure_ascii=False)


# =============================================================================
# VALIDATOR
# =============================================================================


class SeminormLawValidator:
    """
    Проверка законов полунормы на выборке из EngineConfig.

    Пары (x, y) для субаддитивности — соседние элементы выборки;
    для однородности каждый x сочетается со скаляром того же индекса.
    Над полем однородность проверяется цепочкой homogeneity_bounds:
    ‖a⁻¹‖⁻¹·p(x) ≤ p(a•x) ≤ ‖a‖·p(x).
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def _close(self, a: float, b: float) -> bool:
        return is_close(a, b, rel_tol=self.config.rel_tol, abs_tol=self.config.abs_tol)

    def _le(self, a: float, b: float) -> bool:
        return le_with_tolerance(a, b, self.config.rel_tol, self.config.abs_tol)

    def _samples(self, p: Seminorm) -> tuple[list[Any], list[Any]]:
        cfg = self.config
        rng = cfg.rng()
        vectors = p.space.sample(cfg.sample_count, rng, cfg.sample_scale)
        scalars = p.space.scalars.sample(cfg.sample_count, rng, cfg.sample_scale)
        return vectors, scalars

    def iter_violations(self, p: Seminorm) -> Iterator[LawViolation]:
        """Все нарушения законов на выборке (ленивый генератор)."""
        space = p.space
        norm = space.scalars.norm

        p0 = p(space.zero())
        if not self._close(p0, 0.0):
            yield LawViolation(law=LawName.ZERO, lhs=p0, rhs=0.0, witness=repr(space.zero()))

        vectors, scalars = self._samples(p)
        for i, x in enumerate(vectors):
            px = p(x)
            if px < -self.config.abs_tol:
                yield LawViolation(law=LawName.NON_NEGATIVE, lhs=px, rhs=0.0, witness=repr(x))

            p_neg = p(space.neg(x))
            if not self._close(p_neg, px):
                yield LawViolation(law=LawName.SYMMETRIC, lhs=p_neg, rhs=px, witness=repr(x))

            y = vectors[(i + 1) % len(vectors)]
            lhs = p(space.add(x, y))
            rhs = px + p(y)
            if not self._le(lhs, rhs):
                yield LawViolation(
                    law=LawName.SUBADDITIVE, lhs=lhs, rhs=rhs, witness=repr((x, y))
                )

            a = scalars[i % len(scalars)]
            if space.scalars.is_field:
                lower, lhs, rhs = homogeneity_bounds(p, space, a, x)
                holds = self._le(lower, lhs) and self._le(lhs, rhs)
            else:
                lhs = p(space.smul(a, x))
                rhs = norm(a) * px
                holds = self._close(lhs, rhs)
            if not holds:
                yield LawViolation(
                    law=LawName.HOMOGENEOUS, lhs=lhs, rhs=rhs, witness=repr((a, x))
                )

    def check(self, p: Seminorm) -> LawCheckReport:
        violations = list(self.iter_violations(p))
        if violations:
            logger.debug(
                "%s violates %d law checks (first: %s)",
                p.label,
                len(violations),
                violations[0].law.value,
            )
        return LawCheckReport(
            seminorm=p.label,
            samples_checked=self.config.sample_count,
            violations=violations,
        )

    def is_valid(self, p: Seminorm) -> bool:
        return next(self.iter_violations(p), None) is None

    def validate(self, p: Seminorm) -> None:
        """
        Raises:
            PreconditionViolation: первый найденный закон нарушен
        """
        violation = next(self.iter_violations(p), None)
        if violation is not None:
            raise PreconditionViolation(
                f"{p.label} violates {violation.law.value} law: "
                f"lhs={violation.lhs}, rhs={violation.rhs} at {violation.witness}"
            )
