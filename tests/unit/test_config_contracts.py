"""
Tests for EngineConfig and JSON Schema contracts

Проверяет:
- Валидность самих схем
- Значения по умолчанию и иммутабельность EngineConfig
- Валидаторы pydantic-модели
- Загрузку конфигурации из файла с проверкой по контракту
- Валидацию сериализованных отчётов проверки законов
"""

import json
from pathlib import Path

import numpy as np
import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.config import DEFAULT_CONFIG, EngineConfig, load_engine_config
from src.core.contracts import (
    EngineConfigValidator,
    LawReportValidator,
    SchemaLoader,
    validate_engine_config,
    validate_law_report,
)
from src.core.math.numerical_safeguards import EPS_SEMINORM_ABS


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_config_data() -> dict:
    return {
        "abs_tol": 1e-8,
        "rel_tol": 1e-10,
        "sample_count": 32,
        "sample_seed": 7,
        "sample_scale": 2.0,
        "meet_optimizer": "none",
        "meet_max_iter": 100,
        "meet_max_restarts": 3,
        "meet_xatol": 1e-8,
        "family_scan_limit": 500,
    }


@pytest.fixture
def valid_report_data() -> dict:
    return {
        "seminorm": "|x|",
        "samples_checked": 64,
        "violations": [
            {"law": "subadditive", "lhs": 4.0, "rhs": 2.0, "witness": "(1.0, 1.0)"},
        ],
    }


# =============================================================================
# SCHEMAS
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-валидация схем"""

    @pytest.mark.parametrize("name", ["engine_config", "law_report"])
    def test_schema_loads(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["type"] == "object"

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("law_report") is loader.load_schema("law_report")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# ENGINE CONFIG
# =============================================================================


class TestEngineConfigModel:
    """Pydantic-модель конфигурации"""

    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.abs_tol == EPS_SEMINORM_ABS
        assert DEFAULT_CONFIG.sample_count == 64
        assert DEFAULT_CONFIG.meet_optimizer == "nelder-mead"

    def test_frozen(self) -> None:
        with pytest.raises(PydanticValidationError):
            DEFAULT_CONFIG.sample_count = 3  # type: ignore[misc]

    def test_rng_is_reproducible(self) -> None:
        config = EngineConfig(sample_seed=42)
        a = config.rng().normal(size=3)
        b = config.rng().normal(size=3)
        assert np.array_equal(a, b)

    def test_rejects_huge_tolerance(self) -> None:
        with pytest.raises(PydanticValidationError, match="must be < 1"):
            EngineConfig(rel_tol=1.5)

    def test_rejects_non_positive_abs_tol(self) -> None:
        with pytest.raises(PydanticValidationError):
            EngineConfig(abs_tol=0.0)

    def test_rejects_unknown_optimizer(self) -> None:
        with pytest.raises(PydanticValidationError):
            EngineConfig(meet_optimizer="bfgs")  # type: ignore[arg-type]

    def test_config_data_matches_contract(self) -> None:
        validate_engine_config(DEFAULT_CONFIG.model_dump())


class TestEngineConfigContract:
    """Контракт engine_config.json"""

    def test_valid_data(self, valid_config_data: dict) -> None:
        validate_engine_config(valid_config_data)
        assert EngineConfigValidator().is_valid(valid_config_data)

    def test_empty_document_is_valid(self) -> None:
        validate_engine_config({})

    def test_null_iteration_budget(self, valid_config_data: dict) -> None:
        """meet_max_iter = null: бюджет 200·dim"""
        valid_config_data["meet_max_iter"] = None
        validate_engine_config(valid_config_data)
        assert EngineConfig(**valid_config_data).meet_max_iter is None

    def test_unknown_field_rejected(self, valid_config_data: dict) -> None:
        valid_config_data["tolerance"] = 1.0
        with pytest.raises(ValidationError, match="Additional properties"):
            validate_engine_config(valid_config_data)

    def test_wrong_type_rejected(self, valid_config_data: dict) -> None:
        valid_config_data["sample_count"] = "many"
        with pytest.raises(ValidationError):
            validate_engine_config(valid_config_data)

    def test_enum_violation(self, valid_config_data: dict) -> None:
        valid_config_data["meet_optimizer"] = "bfgs"
        errors = list(EngineConfigValidator().iter_errors(valid_config_data))
        assert len(errors) == 1


class TestLoadEngineConfig:
    """Загрузка из файла"""

    def test_load(self, tmp_path: Path, valid_config_data: dict) -> None:
        path = tmp_path / "engine.json"
        path.write_text(json.dumps(valid_config_data), encoding="utf-8")
        config = load_engine_config(path)
        assert config.sample_count == 32
        assert config.meet_optimizer == "none"
        assert config.family_scan_limit == 500

    def test_contract_checked_before_model(self, tmp_path: Path) -> None:
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"sample_count": 0}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_engine_config(path)

    def test_model_validators_applied(self, tmp_path: Path) -> None:
        """rel_tol = 2 проходит схему, но не валидатор модели"""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"rel_tol": 2.0}), encoding="utf-8")
        with pytest.raises(PydanticValidationError):
            load_engine_config(path)


# =============================================================================
# LAW REPORT CONTRACT
# =============================================================================


class TestLawReportContract:
    """Контракт law_report.json"""

    def test_valid_report(self, valid_report_data: dict) -> None:
        validate_law_report(valid_report_data)

    def test_missing_required_field(self, valid_report_data: dict) -> None:
        del valid_report_data["samples_checked"]
        with pytest.raises(ValidationError, match="samples_checked"):
            validate_law_report(valid_report_data)

    def test_unknown_law(self, valid_report_data: dict) -> None:
        valid_report_data["violations"][0]["law"] = "triangle"
        assert not LawReportValidator().is_valid(valid_report_data)

    def test_negative_sample_count(self, valid_report_data: dict) -> None:
        valid_report_data["samples_checked"] = -1
        with pytest.raises(ValidationError):
            validate_law_report(valid_report_data)
