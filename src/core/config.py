"""
EngineConfig — конфигурация движка полунорм

Immutable Pydantic модель с параметрами численных проверок:
- допуски сравнений значений полунорм
- размер и seed детерминированной выборки для поточечного порядка
- параметры численного inf (infimal convolution)
- предел сканирования бесконечных семейств в sup_set

Конфигурация может загружаться из JSON-файла, предварительно
проверенного по контракту contracts/schema/engine_config.json.
"""

import json
import logging
from pathlib import Path
from typing import Literal

import numpy as np
from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_engine_config
from src.core.math.numerical_safeguards import EPS_SEMINORM_ABS, EPS_SEMINORM_REL

logger = logging.getLogger(__name__)


class EngineConfig(BaseModel):
    """
    Параметры численных процедур движка.

    Immutable модель (frozen=True): операции принимают config и никогда его не меняют.
    """

    # Допуски
    abs_tol: float = Field(EPS_SEMINORM_ABS, gt=0, description="Абсолютный допуск сравнений")
    rel_tol: float = Field(EPS_SEMINORM_REL, ge=0, description="Относительный допуск сравнений")

    # Выборка для поточечных проверок
    sample_count: int = Field(64, ge=1, le=100_000, description="Число тестовых векторов")
    sample_seed: int = Field(20240601, ge=0, description="Seed генератора выборки")
    sample_scale: float = Field(3.0, gt=0, description="Масштаб (σ) тестовых векторов")

    # Infimal convolution
    meet_optimizer: Literal["nelder-mead", "none"] = Field(
        "nelder-mead", description="Численный поиск inf по u (или только точные кандидаты)"
    )
    meet_max_iter: int | None = Field(
        None, ge=1, description="Предел итераций одного запуска (None — 200·dim)"
    )
    meet_max_restarts: int = Field(
        10, ge=0, description="Перезапуски Nelder–Mead из лучшей точки"
    )
    meet_xatol: float = Field(1e-10, gt=0, description="Допуск оптимизатора по аргументу")

    # Бесконечные семейства
    family_scan_limit: int = Field(
        10_000, ge=1, description="Максимум членов семейства при вычислении sup"
    )

    model_config = {"frozen": True}

    @field_validator("abs_tol", "rel_tol")
    @classmethod
    def validate_tolerance_scale(cls, v: float) -> float:
        """
        Допуск ≥ 1 делает любые сравнения бессмысленными — ошибка ввода.
        """
        if v >= 1.0:
            raise ValueError(f"tolerance {v} must be < 1")
        return v

    def rng(self) -> np.random.Generator:
        """Новый генератор с фиксированным seed: выборка воспроизводима."""
        return np.random.default_rng(self.sample_seed)


DEFAULT_CONFIG = EngineConfig()


def load_engine_config(path: str | Path) -> EngineConfig:
    """
    Загрузка конфигурации из JSON-файла.

    Args:
        path: Путь к JSON-файлу

    Returns:
        EngineConfig

    Raises:
        jsonschema.ValidationError: Документ не соответствует контракту
        pydantic.ValidationError: Значения не прошли валидаторы модели
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_engine_config(data)
    config = EngineConfig(**data)
    logger.debug("loaded engine config from %s: %s", path, config.model_dump())
    return config
