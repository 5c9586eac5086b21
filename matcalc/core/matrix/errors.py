"""
Matrix Errors — таксономия ошибок движка матриц

Все ошибки локальные и синхронные: возникают в точке нарушения
предусловия, не повторяются и не подавляются внутри движка.

Виды ошибок (MatrixErrorKind):
- INVALID_DIMENSIONS: rows/cols ≤ 0 (конструктор, identity)
- TOO_LARGE: rows * cols ≥ MATRIX_LIMIT_ERROR
- OUT_OF_BOUNDS: доступ к элементу вне матрицы
- DIMENSION_MISMATCH: несовместимые размеры (add/sub/mul/augment/solve)
- NOT_SQUARE: determinant/inverse для не квадратной матрицы
- SINGULAR: нулевой pivot там, где требуется невырожденность
"""

from enum import Enum


class MatrixErrorKind(str, Enum):
    """Вид ошибки матричной операции."""

    INVALID_DIMENSIONS = "invalid_dimensions"
    TOO_LARGE = "too_large"
    OUT_OF_BOUNDS = "out_of_bounds"
    DIMENSION_MISMATCH = "dimension_mismatch"
    NOT_SQUARE = "not_square"
    SINGULAR = "singular"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixError(Exception):
    """
    Базовая ошибка матричной операции.

    Каждый подкласс фиксирует свой kind, по которому вызывающий код может
    ветвиться без isinstance-проверок (см. MatrixOutcome).
    """

    kind: MatrixErrorKind


class MatrixInvalidDimensions(MatrixError):
    """Размерности матрицы должны быть положительными целыми."""

    kind = MatrixErrorKind.INVALID_DIMENSIONS

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Matrix dimensions must be positive integers, got {rows}x{cols}."
        )


class MatrixTooLarge(MatrixError):
    """Матрица превышает жёсткий лимит количества элементов."""

    kind = MatrixErrorKind.TOO_LARGE

    def __init__(self, rows: int, cols: int, limit: int):
        self.rows = rows
        self.cols = cols
        self.limit = limit
        super().__init__(
            f"Matrix too large - {rows}x{cols} = {rows * cols} elements "
            f"exceeds the limit of {limit}."
        )


class MatrixOutOfBounds(MatrixError):
    """Индекс элемента вне [0, rows) x [0, cols)."""

    kind = MatrixErrorKind.OUT_OF_BOUNDS

    def __init__(self, rows: int, cols: int, row: int, col: int):
        self.rows = rows
        self.cols = cols
        self.row = row
        self.col = col
        super().__init__(
            f"Out of matrix bounds: ({row}, {col}). Dimensions are {rows}x{cols}"
        )


class MatrixDimensionMismatch(MatrixError):
    """Размеры операндов несовместимы для операции."""

    kind = MatrixErrorKind.DIMENSION_MISMATCH

    def __init__(
        self,
        first_rows: int,
        first_cols: int,
        second_rows: int,
        second_cols: int,
    ):
        self.first_shape = (first_rows, first_cols)
        self.second_shape = (second_rows, second_cols)
        super().__init__(
            f"Sizes do not match. First matrix dimensions: {first_rows}x{first_cols}, "
            f"second matrix dimensions: {second_rows}x{second_cols}"
        )


class MatrixNotSquare(MatrixError):
    """Операция определена только для квадратных матриц."""

    kind = MatrixErrorKind.NOT_SQUARE

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Matrix must be square for the desired operation, got {rows}x{cols}."
        )


class MatrixSingular(MatrixError):
    """Нулевой pivot при операции, требующей невырожденности."""

    kind = MatrixErrorKind.SINGULAR

    def __init__(self, column: int):
        self.column = column
        super().__init__(
            f"Matrix is singular: zero pivot in column {column}."
        )
