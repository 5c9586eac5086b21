"""
Elimination Engine — метод Гаусса с частичным выбором pivot

Два режима на одном алгоритме выбора pivot:
- Прямой ход (row-echelon form): для каждого столбца выбирается строка с
  максимальным abs значением, строки ниже pivot обнуляются
- Полная редукция (reduced row-echelon form): после прямого хода каждая
  ненулевая строка нормируется по своему ведущему элементу, а столбец
  ведущего элемента обнуляется во ВСЕХ остальных строках

Опциональная companion-матрица (правая часть Ax=b или I для обращения)
преобразуется синхронно с рабочей копией: те же перестановки, те же
линейные комбинации строк.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входная матрица никогда не изменяется (работа идёт на копии)
2. Companion изменяется на месте и не может совпадать с входной матрицей
3. abs(pivot) < eps → столбец вырожден: MatrixSingular если требуется
   невырожденность, иначе столбец пропускается без продвижения строки
4. Количество перестановок строк возвращается для знака определителя
5. Определитель в пределах eps от нуля возвращается как точный 0.0
"""

import logging
from dataclasses import dataclass
from typing import Optional

from matcalc.core.math.numerical_safeguards import EPS_PIVOT, is_zero, snap_to_zero
from matcalc.core.matrix.dense import Matrix
from matcalc.core.matrix.errors import (
    MatrixDimensionMismatch,
    MatrixNotSquare,
    MatrixSingular,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EliminationResult:
    """Результат метода Гаусса."""

    matrix: Matrix  # Row-echelon или reduced row-echelon форма
    swap_count: int  # Количество перестановок строк в прямом ходе


# =============================================================================
# GAUSSIAN ELIMINATION
# =============================================================================


def gaussian_elimination(
    matrix: Matrix,
    companion: Optional[Matrix] = None,
    full_reduction: bool = False,
    require_nonsingular: bool = False,
    eps: float = EPS_PIVOT,
) -> EliminationResult:
    """
    Приведение матрицы к ступенчатому виду.

    Алгоритм прямого хода:
        для каждого столбца col, пока есть необработанные строки:
            pivot = argmax_{k ≥ pivot_row} |a(k, col)|
            |pivot| < eps → Singular (если require_nonsingular) или пропуск
            перестановка pivot в pivot_row (swap_count += 1)
            row_k -= (a(k, col) / pivot) * row_pivot для k ниже pivot

    Полная редукция (если full_reduction):
        для каждой строки с ведущим элементом p в столбце c:
            row /= p
            row_k -= a(k, c) * row для всех k != row

    Args:
        matrix: Исходная матрица (не изменяется)
        companion: Матрица правой части, изменяется на месте синхронно
        full_reduction: Привести к reduced row-echelon form
        require_nonsingular: Нулевой pivot → MatrixSingular
        eps: Порог нулевого pivot (default: EPS_PIVOT)

    Returns:
        EliminationResult(matrix, swap_count)

    Raises:
        ValueError: если companion — тот же объект, что и matrix
        MatrixDimensionMismatch: если rows(companion) != rows(matrix)
        MatrixSingular: если require_nonsingular и найден нулевой pivot

    Examples:
        >>> a = Matrix.from_rows([[2, 1], [4, 3]])
        >>> gaussian_elimination(a).swap_count
        1
    """
    if companion is matrix:
        raise ValueError("companion must not be the same object as matrix")

    if companion is not None and companion.rows != matrix.rows:
        raise MatrixDimensionMismatch(matrix.rows, matrix.cols, companion.rows, companion.cols)

    work = matrix.copy()
    rows, cols = work.rows, work.cols
    swap_count = 0
    pivot_row = 0

    # Прямой ход
    for col in range(cols):
        if pivot_row >= rows:
            break

        max_row = pivot_row
        max_value = abs(work[pivot_row, col])
        for k in range(pivot_row + 1, rows):
            candidate = abs(work[k, col])
            if candidate > max_value:
                max_value = candidate
                max_row = k

        if is_zero(max_value, eps):
            if require_nonsingular:
                raise MatrixSingular(col)
            logger.debug("Zero pivot in column %d, skipping", col)
            continue

        if max_row != pivot_row:
            work.swap_rows(pivot_row, max_row)
            if companion is not None:
                companion.swap_rows(pivot_row, max_row)
            swap_count += 1
            logger.debug("Swapped rows %d and %d", pivot_row, max_row)

        pivot = work[pivot_row, col]
        for k in range(pivot_row + 1, rows):
            entry = work[k, col]
            if entry == 0.0:
                continue
            factor = -entry / pivot
            work.add_scaled_row(k, pivot_row, factor, start_col=col)
            if companion is not None:
                companion.add_scaled_row(k, pivot_row, factor)

        pivot_row += 1

    if full_reduction:
        _reduce(work, companion, eps)

    return EliminationResult(matrix=work, swap_count=swap_count)


def _reduce(work: Matrix, companion: Optional[Matrix], eps: float) -> None:
    # Обратный ход: нормировка ведущих элементов и обнуление их столбцов
    rows, cols = work.rows, work.cols

    for r in range(rows):
        lead_col = next((c for c in range(cols) if not is_zero(work[r, c], eps)), None)
        if lead_col is None:
            continue

        pivot = work[r, lead_col]
        work.divide_row(r, pivot)
        if companion is not None:
            companion.divide_row(r, pivot)

        for k in range(rows):
            if k == r:
                continue
            entry = work[k, lead_col]
            if entry == 0.0:
                continue
            work.add_scaled_row(k, r, -entry)
            if companion is not None:
                companion.add_scaled_row(k, r, -entry)


# =============================================================================
# DETERMINANT / RANK / INVERSE
# =============================================================================


def determinant(matrix: Matrix, eps: float = EPS_PIVOT) -> float:
    """
    Определитель через прямой ход метода Гаусса.

    det = (-1)^swap_count * Π diag(REF)

    Raises:
        MatrixNotSquare: если матрица не квадратная

    Examples:
        >>> determinant(Matrix.from_rows([[4, 7], [2, 6]]))
        10.0
    """
    if not matrix.is_square():
        raise MatrixNotSquare(matrix.rows, matrix.cols)

    result = gaussian_elimination(matrix, eps=eps)
    echelon = result.matrix

    det = 1.0
    for i in range(echelon.rows):
        det *= echelon[i, i]

    # Почти-ноль → точный 0.0 (без -0.0)
    det = snap_to_zero(det, eps)

    if result.swap_count % 2 != 0 and det != 0.0:
        det = -det

    return det


def rank(matrix: Matrix, eps: float = EPS_PIVOT) -> int:
    """
    Ранг матрицы по ступенчатой форме.

    rank = min(ненулевые строки, ненулевые столбцы), где ненулевая
    строка/столбец содержит хотя бы один элемент с abs > eps.

    Examples:
        >>> rank(Matrix.from_rows([[1, 2], [2, 4]]))
        1
    """
    echelon = gaussian_elimination(matrix, eps=eps).matrix
    values = echelon.to_rows()

    nonzero_rows = sum(1 for row in values if any(abs(v) > eps for v in row))
    nonzero_cols = sum(1 for column in zip(*values) if any(abs(v) > eps for v in column))

    return min(nonzero_rows, nonzero_cols)


def inverse(matrix: Matrix, eps: float = EPS_PIVOT) -> Matrix:
    """
    Обратная матрица через полную редукцию [A | I] → [I | A^-1].

    Raises:
        MatrixNotSquare: если матрица не квадратная
        MatrixSingular: если встречен нулевой pivot
    """
    if not matrix.is_square():
        raise MatrixNotSquare(matrix.rows, matrix.cols)

    n = matrix.rows
    augmented = matrix.augment(Matrix.identity(n))
    reduced = gaussian_elimination(
        augmented,
        full_reduction=True,
        require_nonsingular=True,
        eps=eps,
    ).matrix

    return Matrix.from_rows([row[n:] for row in reduced.to_rows()])
