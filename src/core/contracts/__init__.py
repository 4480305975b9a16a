"""
Contract Validation Module

Валидация JSON-контрактов движка (конфигурация, отчёты проверки законов).
Валидатор законов полунорм — в src.core.contracts.laws.
"""

from .validators import (
    ContractValidator,
    EngineConfigValidator,
    LawReportValidator,
    SchemaLoader,
    validate_engine_config,
    validate_law_report,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EngineConfigValidator",
    "LawReportValidator",
    # Functions
    "validate_engine_config",
    "validate_law_report",
]
