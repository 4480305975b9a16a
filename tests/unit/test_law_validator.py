"""
Тесты выборочной проверки законов полунормы

Проверяет:
1. Корректные полунормы на прямой, плоскости и над ℂ проходят проверку
2. Каждое нарушение (zero, non_negative, symmetric, subadditive, homogeneous)
   обнаруживается и попадает в отчёт
3. Отчёт сериализуется в JSON по контракту law_report.json
"""

import json

import numpy as np
import pytest
from pydantic import ValidationError

from src.core.config import EngineConfig
from src.core.contracts.laws import (
    LawCheckReport,
    LawName,
    LawViolation,
    SeminormLawValidator,
)
from src.core.domain import Seminorm, homogeneity_bounds
from src.core.errors import PreconditionViolation
from src.core.scalars import COMPLEXES, REALS
from src.core.vectors import REAL_LINE, CoordinateSpace, ScalarLine
from src.geometry.norm_adapter import norm_seminorm
from src.lattice.algebra import sup


@pytest.fixture
def validator() -> SeminormLawValidator:
    return SeminormLawValidator(EngineConfig(sample_count=16))


class TestValidSeminorms:
    """Полунормы без нарушений"""

    def test_abs_on_line(self, validator: SeminormLawValidator) -> None:
        p = Seminorm.of(abs, REAL_LINE, label="|x|")
        report = validator.check(p)
        assert report.is_valid
        assert report.samples_checked == 16
        assert validator.is_valid(p)
        validator.validate(p)

    def test_euclidean_norm(self, validator: SeminormLawValidator) -> None:
        assert validator.is_valid(norm_seminorm(CoordinateSpace(3)))

    def test_kernel_seminorm(self, validator: SeminormLawValidator) -> None:
        plane = CoordinateSpace(2)
        assert validator.is_valid(Seminorm.of(lambda v: abs(v[0]), plane))

    def test_complex_modulus(self, validator: SeminormLawValidator) -> None:
        assert validator.is_valid(Seminorm.of(abs, ScalarLine(COMPLEXES)))

    def test_join_is_seminorm(self, validator: SeminormLawValidator) -> None:
        plane = CoordinateSpace(2)
        p = Seminorm.of(lambda v: abs(v[0]), plane)
        q = Seminorm.of(lambda v: float(np.abs(v).sum()) / 2, plane)
        assert validator.is_valid(sup(p, q))


class TestViolations:
    """Обнаружение нарушений"""

    def test_nonzero_at_origin(self, validator: SeminormLawValidator) -> None:
        p = Seminorm.of(lambda x: abs(x) + 1.0, REAL_LINE, label="|x|+1")
        report = validator.check(p)
        assert LawName.ZERO in report.violated_laws()
        zero_violation = next(v for v in report.violations if v.law == LawName.ZERO)
        assert zero_violation.lhs == 1.0

    def test_identity_is_not_a_seminorm(self, validator: SeminormLawValidator) -> None:
        """p(x) = x: отрицательные значения и асимметрия"""
        report = validator.check(Seminorm.of(lambda x: x, REAL_LINE, label="x"))
        assert {LawName.NON_NEGATIVE, LawName.SYMMETRIC} <= report.violated_laws()

    def test_square_breaks_subadditivity_and_homogeneity(
        self, validator: SeminormLawValidator
    ) -> None:
        report = validator.check(Seminorm.of(lambda x: x * x, REAL_LINE, label="x²"))
        assert LawName.SUBADDITIVE in report.violated_laws()
        assert LawName.HOMOGENEOUS in report.violated_laws()
        assert not report.is_valid

    def test_validate_raises(self, validator: SeminormLawValidator) -> None:
        p = Seminorm.of(lambda x: x * x, REAL_LINE, label="x²")
        with pytest.raises(PreconditionViolation, match="x² violates"):
            validator.validate(p)

    def test_sqrt_breaks_homogeneity_only(self, validator: SeminormLawValidator) -> None:
        """√|x| субаддитивна, но не однородна"""
        p = Seminorm.of(lambda x: abs(x) ** 0.5, REAL_LINE, label="√|x|")
        assert report_laws(validator, p) == {LawName.HOMOGENEOUS}


def report_laws(validator: SeminormLawValidator, p: Seminorm) -> set[LawName]:
    return validator.check(p).violated_laws()


class TestHomogeneityChain:
    """Однородность над полем через homogeneity_bounds"""

    def test_of_smul_le_seminorm_passes(self, validator: SeminormLawValidator) -> None:
        p = Seminorm.of_smul_le(lambda x: 2.0 * abs(x), REAL_LINE, label="2|x|")
        assert validator.is_valid(p)

    def test_violation_reports_chain_values(self) -> None:
        """Одна пара (a, x): lhs = p(a•x), rhs = ‖a‖·p(x) из цепочки оценок"""
        config = EngineConfig(sample_count=1)
        rng = config.rng()
        x = REAL_LINE.sample(1, rng, config.sample_scale)[0]
        a = REALS.sample(1, rng, config.sample_scale)[0]
        _, value, upper = homogeneity_bounds(lambda t: t * t, REAL_LINE, a, x)

        report = SeminormLawValidator(config).check(
            Seminorm.of(lambda t: t * t, REAL_LINE, label="x²")
        )
        violation = next(v for v in report.violations if v.law == LawName.HOMOGENEOUS)
        assert violation.lhs == value
        assert violation.rhs == upper


class TestReportSerialization:
    """LawCheckReport ↔ JSON"""

    def test_to_json_valid_report(self, validator: SeminormLawValidator) -> None:
        report = validator.check(Seminorm.of(abs, REAL_LINE, label="|x|"))
        data = json.loads(report.to_json())
        assert data == {"seminorm": "|x|", "samples_checked": 16, "violations": []}

    def test_to_json_with_violations(self, validator: SeminormLawValidator) -> None:
        report = validator.check(Seminorm.of(lambda x: x * x, REAL_LINE, label="x²"))
        data = json.loads(report.to_json())
        assert data["seminorm"] == "x²"
        assert data["violations"]
        assert {v["law"] for v in data["violations"]} >= {"subadditive", "homogeneous"}

    def test_report_is_frozen(self) -> None:
        report = LawCheckReport(seminorm="p", samples_checked=0)
        with pytest.raises(ValidationError):
            report.samples_checked = 5  # type: ignore[misc]

    def test_manual_report(self) -> None:
        violation = LawViolation(law=LawName.SYMMETRIC, lhs=1.0, rhs=2.0, witness="3.0")
        report = LawCheckReport(seminorm="q", samples_checked=1, violations=[violation])
        assert report.violated_laws() == {LawName.SYMMETRIC}
        assert json.loads(report.to_json())["violations"][0]["law"] == "symmetric"
