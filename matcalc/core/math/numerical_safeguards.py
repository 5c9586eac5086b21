"""
Numerical Safeguards — Epsilon Constants & Float Guards

Модуль задаёт численные параметры движка матриц и примитивы, на которых
построены решения о pivot, ранге и определителе:
- Epsilon для проверки нулевого pivot / ранга / определителя
- Лимиты размера матрицы (жёсткий и мягкий)
- Параметры форматированного вывода
- Проверки валидности float и размерностей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значения с abs(x) < EPS_PIVOT считаются нулём ТОЛЬКО для pivot/rank/det
2. Равенство матриц остаётся точным (без толерантности)
3. NaN/Inf не записываются в матрицу ни через доступ к элементу, ни через арифметику
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для проверки нулевого pivot, ненулевых строк (rank) и определителя
# Значения с abs(x) < EPS_PIVOT трактуются как точный ноль
EPS_PIVOT: Final[float] = 1e-10

# Толерантность для сравнения результатов с плавающей точкой (A * A^-1 == I)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-9


# =============================================================================
# ЛИМИТЫ РАЗМЕРА МАТРИЦЫ
# =============================================================================

# rows * cols >= MATRIX_LIMIT_ERROR → MatrixTooLarge
MATRIX_LIMIT_ERROR: Final[int] = 10_000_000

# rows * cols >= MATRIX_LIMIT_WARNING → предупреждение о производительности
MATRIX_LIMIT_WARNING: Final[int] = 1_000_000


# =============================================================================
# ПАРАМЕТРЫ ВЫВОДА
# =============================================================================

# Число знаков после запятой в текстовом представлении
DISPLAY_PRECISION: Final[int] = 3

# Ширина поля одного элемента (между разделителями '|')
DISPLAY_WIDTH: Final[int] = 7


# =============================================================================
# ПРОВЕРКИ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_zero(value: float, eps: float = EPS_PIVOT) -> bool:
    """
    Проверка, считается ли значение нулём для pivot/rank/det решений.

    Граница строгая: abs(value) < eps → ноль, abs(value) == eps → не ноль.

    Args:
        value: Проверяемое значение
        eps: Порог (default: EPS_PIVOT)

    Returns:
        True если abs(value) < eps

    Examples:
        >>> is_zero(0.0)
        True
        >>> is_zero(1e-11)
        True
        >>> is_zero(1e-10)
        False
    """
    return abs(value) < eps


def snap_to_zero(value: float, eps: float = EPS_PIVOT) -> float:
    """
    Замена почти-нулевого значения на точный 0.0.

    Убирает артефакты вида -0.0 и 6.1e-17 после тригонометрии и
    накопления ошибок округления.

    Args:
        value: Исходное значение
        eps: Порог (default: EPS_PIVOT)

    Returns:
        0.0 если abs(value) < eps, иначе value

    Examples:
        >>> snap_to_zero(6.123233995736766e-17)
        0.0
        >>> snap_to_zero(-1e-12)
        0.0
        >>> snap_to_zero(0.5)
        0.5
    """
    if is_zero(value, eps):
        return 0.0
    return value


def validate_finite(value: float, name: str) -> float:
    """
    Валидация и приведение значения к конечному float.

    Args:
        value: Проверяемое значение (int или float)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        float(value)

    Raises:
        TypeError: Если значение не число (bool тоже отклоняется)
        ValueError: Если значение NaN/Inf
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")

    result = float(value)
    if not is_valid_float(result):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    return result


def validate_dimension(value: int, name: str) -> int:
    """
    Валидация типа размерности матрицы.

    Проверяет только тип. Положительность проверяется конструктором
    матрицы, т.к. нарушение — это MatrixInvalidDimensions, а не ValueError.

    Args:
        value: Количество строк/столбцов
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value как int

    Raises:
        TypeError: Если value не int (bool отклоняется)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return value
