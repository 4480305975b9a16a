"""
JSON Schema Contract Validators

Валидация JSON-документов движка по формальным JSON Schema контрактам
(библиотека jsonschema, Draft 2020-12).

Схемы:
- engine_config.json — файл конфигурации EngineConfig
- law_report.json — сериализованный отчёт проверки законов полунормы
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов из contracts/schema/ в корне репозитория.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Корень репозитория — 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы (с кэшированием).

        Args:
            schema_name: Имя схемы без расширения (например, 'engine_config')

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый валидатор документа против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class EngineConfigValidator(ContractValidator):
    """Валидатор файла конфигурации движка."""

    def __init__(self):
        super().__init__("engine_config")


class LawReportValidator(ContractValidator):
    """Валидатор сериализованного LawCheckReport."""

    def __init__(self):
        super().__init__("law_report")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_engine_config(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Если конфигурация не соответствует схеме
    """
    EngineConfigValidator().validate(data)


def validate_law_report(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Если отчёт не соответствует схеме
    """
    LawReportValidator().validate(data)
