"""
Numerical Safeguards — толерантные сравнения для значений полунорм

Значения полунорм вычисляются в float, поэтому все законы (субаддитивность,
однородность, порядок p ≤ q) проверяются с учётом машинной точности.

Модуль предоставляет:
- Epsilon-параметры для сравнений значений полунорм
- Проверку конечности (NaN/Inf)
- Толерантные сравнения (≈, ≤) с абсолютной и относительной точностью
- Валидацию числовых параметров (радиусы, веса, допуски)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. le_with_tolerance(a, b) никогда не ложен при a ≤ b
2. NaN никогда не считается валидным значением полунормы
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность для сравнений значений полунорм
EPS_SEMINORM_ABS: Final[float] = 1e-9

# Относительная толерантность для сравнений значений полунорм
# Субаддитивность p(x+y) ≤ p(x)+p(y) проверяется относительно масштаба правой части
EPS_SEMINORM_REL: Final[float] = 1e-9


# =============================================================================
# КОНЕЧНОСТЬ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли значение конечным float (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечно
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def tolerance_for(
    a: float,
    b: float,
    rel_tol: float = EPS_SEMINORM_REL,
    abs_tol: float = EPS_SEMINORM_ABS,
) -> float:
    """
    Допуск для сравнения двух значений: max(rel_tol * max(|a|, |b|), abs_tol).
    """
    return max(rel_tol * max(abs(a), abs(b)), abs_tol)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_SEMINORM_REL,
    abs_tol: float = EPS_SEMINORM_ABS,
) -> bool:
    """
    Равенство значений полунорм с учётом машинной точности.

    Examples:
        >>> is_close(1.0, 1.0 + 1e-12)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def le_with_tolerance(
    a: float,
    b: float,
    rel_tol: float = EPS_SEMINORM_REL,
    abs_tol: float = EPS_SEMINORM_ABS,
) -> bool:
    """
    Нестрогое неравенство a ≤ b с допуском.

    Используется для проверки субаддитивности и поточечного порядка:
    ошибки округления в последних битах не должны давать ложных нарушений.

    Examples:
        >>> le_with_tolerance(1.0 + 1e-12, 1.0)
        True
        >>> le_with_tolerance(1.1, 1.0)
        False
    """
    return a <= b + tolerance_for(a, b, rel_tol, abs_tol)


def is_zero(value: float, tol: float = EPS_SEMINORM_ABS) -> bool:
    """
    Проверка |value| ≤ tol.
    """
    return abs(value) <= tol


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    Валидация, что значение конечно и строго больше eps.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        eps: Порог (default: 0.0)

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение конечно и неотрицательно.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
