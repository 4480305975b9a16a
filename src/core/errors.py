"""
Исключения движка полунорм.

Таксономия:
- StructureUnavailableError — операция требует структуры, которой нет у скаляров
  (поле вместо кольца, нетривиальная норма, изометричный гомоморфизм колец)
- PreconditionViolation — явная проверка (валидатор законов, verify_*) нашла
  нарушение контракта вызывающего. Конструкторы полунорм её НЕ бросают:
  кванторные свойства не проверяемы на бесконечной области.
- ScalarActionIncompatible — скалярное действие не согласовано с действием на ℝ≥0

Вырожденные результаты (пустой шар, нулевой sup_set неограниченного семейства)
ошибками не являются.
"""


class SeminormError(Exception):
    """Базовое исключение движка полунорм."""

    pass


class StructureUnavailableError(SeminormError, TypeError):
    """
    Операция недоступна для данной алгебраической структуры.

    Примеры:
    - inf (infimal convolution) над кольцом, а не полем
    - derive_continuity над тривиально нормированным полем
    - comp с неизометричным гомоморфизмом колец скаляров
    """

    pass


class PreconditionViolation(SeminormError, ValueError):
    """
    Нарушен документированный контракт вызывающего (обнаружено явной проверкой).
    """

    pass


class ScalarActionIncompatible(SeminormError, ValueError):
    """
    Скалярное действие R на ℝ≥0 не коммутирует с умножением:
    act(r, c·t) ≠ c·act(r, t).
    """

    pass
