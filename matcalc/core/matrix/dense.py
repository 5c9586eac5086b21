"""
Dense Matrix — плотная матрица double в row-major буфере

Модуль содержит базовый тип движка:
- Плоский row-major буфер list[float] + rows/cols
- Доступ к элементам с проверкой границ
- Арифметика (+, -, *, скаляр, унарный минус, in-place варианты)
- Точное сравнение (==, !=)
- Транспонирование, единичная матрица, augment [A | B]
- Форматированный вывод '|  1.000|  2.000|'

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows > 0, cols > 0, len(buffer) == rows * cols
2. rows * cols < MATRIX_LIMIT_ERROR (иначе MatrixTooLarge)
3. Форма неизменна после создания (нет resize)
4. Каждая операция, создающая матрицу, возвращает независимый буфер
5. In-place изменение только через __iadd__/__isub__/__imul__ и запись элемента
6. NaN/Inf не попадают в буфер: ни через запись элемента, ни через арифметику
   (нечисловой скаляр или переполнение → ValueError, операнды не меняются)
"""

import logging
from typing import Iterable, Sequence

from matcalc.core.math.numerical_safeguards import (
    DISPLAY_PRECISION,
    DISPLAY_WIDTH,
    EPS_PIVOT,
    MATRIX_LIMIT_ERROR,
    MATRIX_LIMIT_WARNING,
    is_valid_float,
    validate_dimension,
    validate_finite,
)
from matcalc.core.matrix.errors import (
    MatrixDimensionMismatch,
    MatrixInvalidDimensions,
    MatrixOutOfBounds,
    MatrixTooLarge,
)

logger = logging.getLogger(__name__)


def _require_finite(data: list[float], operation: str) -> list[float]:
    if not all(is_valid_float(v) for v in data):
        raise ValueError(f"{operation} produced a non-finite value (NaN/Inf)")
    return data


class Matrix:
    """
    Прямоугольная матрица rows x cols значений double.

    Значения хранятся в одном непрерывном списке в row-major порядке:
    элемент (r, c) находится по индексу r * cols + c.

    Матрица изменяема по значениям, но не по форме, поэтому не hashable.
    """

    __slots__ = ("_rows", "_cols", "_data")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int, init_value: float = 0.0):
        """
        Args:
            rows: Количество строк (> 0)
            cols: Количество столбцов (> 0)
            init_value: Начальное значение всех элементов (default: 0.0)

        Raises:
            MatrixInvalidDimensions: если rows ≤ 0 или cols ≤ 0
            MatrixTooLarge: если rows * cols ≥ MATRIX_LIMIT_ERROR
        """
        validate_dimension(rows, "rows")
        validate_dimension(cols, "cols")

        if rows <= 0 or cols <= 0:
            raise MatrixInvalidDimensions(rows, cols)

        size = rows * cols
        if size >= MATRIX_LIMIT_ERROR:
            raise MatrixTooLarge(rows, cols, MATRIX_LIMIT_ERROR)

        if size >= MATRIX_LIMIT_WARNING:
            logger.warning(
                "Large matrix %dx%d (%d elements) may slow down performance",
                rows,
                cols,
                size,
            )

        fill = validate_finite(init_value, "init_value")

        self._rows = rows
        self._cols = cols
        self._data = [fill] * size

    # =========================================================================
    # ФАБРИКИ
    # =========================================================================

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы из вложенных последовательностей.

        Args:
            rows: Строки матрицы, все одинаковой длины

        Returns:
            Новая матрица len(rows) x len(rows[0])

        Raises:
            MatrixInvalidDimensions: если rows пустой или строки пустые
            MatrixDimensionMismatch: если строки разной длины

        Examples:
            >>> Matrix.from_rows([[1, 2], [3, 4]]).shape
            (2, 2)
        """
        row_count = len(rows)
        col_count = len(rows[0]) if row_count else 0

        result = cls(row_count, col_count)
        for r, row in enumerate(rows):
            if len(row) != col_count:
                raise MatrixDimensionMismatch(row_count, col_count, 1, len(row))
            for c, value in enumerate(row):
                result._data[r * col_count + c] = validate_finite(value, f"element ({r}, {c})")

        return result

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """
        Единичная матрица size x size.

        Raises:
            MatrixInvalidDimensions: если size ≤ 0
        """
        validate_dimension(size, "size")
        if size <= 0:
            raise MatrixInvalidDimensions(size, size)

        result = cls(size, size, 0.0)
        for i in range(size):
            result._data[i * size + i] = 1.0
        return result

    @classmethod
    def _from_buffer(cls, rows: int, cols: int, data: list[float]) -> "Matrix":
        # Внутренний конструктор: буфер уже посчитан и принадлежит новой матрице.
        # Размеры не перепроверяются и warning о размере не повторяется
        result = cls.__new__(cls)
        result._rows = rows
        result._cols = cols
        result._data = data
        return result

    def copy(self) -> "Matrix":
        """Независимая копия матрицы."""
        return Matrix._from_buffer(self._rows, self._cols, list(self._data))

    # =========================================================================
    # БАЗОВАЯ ИНФОРМАЦИЯ
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    def is_square(self) -> bool:
        return self._rows == self._cols

    def to_rows(self) -> list[list[float]]:
        """Содержимое матрицы как список строк (копия)."""
        c = self._cols
        return [self._data[r * c:(r + 1) * c] for r in range(self._rows)]

    # =========================================================================
    # ДОСТУП К ЭЛЕМЕНТАМ
    # =========================================================================

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise MatrixOutOfBounds(self._rows, self._cols, row, col)
        return row * self._cols + col

    def get(self, row: int, col: int) -> float:
        """
        Чтение элемента (row, col).

        Raises:
            MatrixOutOfBounds: если индекс вне матрицы
        """
        return self._data[self._index(row, col)]

    def set(self, row: int, col: int, value: float) -> None:
        """
        Запись элемента (row, col).

        Raises:
            MatrixOutOfBounds: если индекс вне матрицы
            ValueError: если value NaN/Inf
        """
        index = self._index(row, col)
        self._data[index] = validate_finite(value, f"element ({row}, {col})")

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, col = key
        self.set(row, col, value)

    def swap_rows(self, row1: int, row2: int) -> None:
        """Перестановка двух строк на месте."""
        if row1 == row2:
            return
        c = self._cols
        self._index(row1, 0)
        self._index(row2, 0)
        data = self._data
        start1, start2 = row1 * c, row2 * c
        data[start1:start1 + c], data[start2:start2 + c] = (
            data[start2:start2 + c],
            data[start1:start1 + c],
        )

    def divide_row(self, row: int, divisor: float) -> None:
        """Деление строки row на divisor на месте."""
        c = self._cols
        start = self._index(row, 0)
        data = self._data
        for j in range(start, start + c):
            data[j] /= divisor

    def add_scaled_row(self, target: int, source: int, factor: float, start_col: int = 0) -> None:
        """
        Элементарная операция: row_target += factor * row_source.

        Столбцы левее start_col не затрагиваются (в прямом ходе там нули).
        """
        c = self._cols
        t = self._index(target, start_col)
        s = self._index(source, start_col)
        data = self._data
        for offset in range(c - start_col):
            data[t + offset] += factor * data[s + offset]

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        # Точное сравнение: равные размеры и поэлементно равные значения
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._cols == other._cols
            and self._data == other._data
        )

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def _check_same_shape(self, other: "Matrix") -> None:
        if self._rows != other._rows or self._cols != other._cols:
            raise MatrixDimensionMismatch(self._rows, self._cols, other._rows, other._cols)

    def add(self, other: "Matrix") -> "Matrix":
        """
        Поэлементная сумма.

        Raises:
            MatrixDimensionMismatch: если размеры различаются
        """
        self._check_same_shape(other)
        data = _require_finite([a + b for a, b in zip(self._data, other._data)], "Addition")
        return Matrix._from_buffer(self._rows, self._cols, data)

    def subtract(self, other: "Matrix") -> "Matrix":
        """
        Поэлементная разность.

        Raises:
            MatrixDimensionMismatch: если размеры различаются
        """
        self._check_same_shape(other)
        data = _require_finite([a - b for a, b in zip(self._data, other._data)], "Subtraction")
        return Matrix._from_buffer(self._rows, self._cols, data)

    def scalar_multiply(self, scalar: float) -> "Matrix":
        """
        Умножение на скаляр.

        Raises:
            ValueError: если scalar NaN/Inf или результат переполняется
        """
        k = validate_finite(scalar, "scalar")
        data = _require_finite([v * k for v in self._data], "Scalar multiplication")
        return Matrix._from_buffer(self._rows, self._cols, data)

    def multiply(self, other: "Matrix") -> "Matrix":
        """
        Матричное произведение self · other.

        result(i, j) = Σ_k self(i, k) * other(k, j)

        Returns:
            Новая матрица rows(self) x cols(other)

        Raises:
            MatrixDimensionMismatch: если cols(self) != rows(other)
        """
        if self._cols != other._rows:
            raise MatrixDimensionMismatch(self._rows, self._cols, other._rows, other._cols)

        n = self._cols
        p = other._cols
        # Столбцы правого операнда как срезы с шагом p
        other_cols = [other._data[j::p] for j in range(p)]

        data: list[float] = []
        for i in range(self._rows):
            row = self._data[i * n:(i + 1) * n]
            for col in other_cols:
                total = 0.0
                for a, b in zip(row, col):
                    total += a * b
                data.append(total)

        return Matrix._from_buffer(self._rows, p, _require_finite(data, "Multiplication"))

    def negate(self) -> "Matrix":
        """Унарный минус: -A == A * -1."""
        return self.scalar_multiply(-1.0)

    def transpose(self) -> "Matrix":
        """Транспонированная матрица cols x rows."""
        c = self._cols
        data = [self._data[r * c + col] for col in range(c) for r in range(self._rows)]
        return Matrix._from_buffer(c, self._rows, data)

    def augment(self, other: "Matrix") -> "Matrix":
        """
        Горизонтальная конкатенация [self | other].

        Raises:
            MatrixDimensionMismatch: если количество строк различается
        """
        if self._rows != other._rows:
            raise MatrixDimensionMismatch(self._rows, self._cols, other._rows, other._cols)

        data: list[float] = []
        for left, right in zip(self.to_rows(), other.to_rows()):
            data.extend(left)
            data.extend(right)
        return Matrix._from_buffer(self._rows, self._cols + other._cols, data)

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: "Matrix | float") -> "Matrix":
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.scalar_multiply(other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Matrix":
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.scalar_multiply(other)
        return NotImplemented

    def __neg__(self) -> "Matrix":
        return self.negate()

    def __iadd__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._data = self.add(other)._data
        return self

    def __isub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._data = self.subtract(other)._data
        return self

    def __imul__(self, other: "Matrix | float") -> "Matrix":
        if isinstance(other, Matrix):
            # Форма может измениться (n x m · m x p), поэтому результат
            # считается отдельно и подменяет состояние целиком
            product = self.multiply(other)
            self._rows, self._cols, self._data = product._rows, product._cols, product._data
            return self
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            self._data = self.scalar_multiply(other)._data
            return self
        return NotImplemented

    # =========================================================================
    # ЛИНЕЙНАЯ АЛГЕБРА (делегирование в elimination / solver / transform)
    # =========================================================================

    def gaussian_elimination(
        self,
        companion: "Matrix | None" = None,
        full_reduction: bool = False,
        require_nonsingular: bool = False,
        eps: float = EPS_PIVOT,
    ):
        """См. matcalc.core.matrix.elimination.gaussian_elimination."""
        from matcalc.core.matrix.elimination import gaussian_elimination

        return gaussian_elimination(
            self,
            companion=companion,
            full_reduction=full_reduction,
            require_nonsingular=require_nonsingular,
            eps=eps,
        )

    def determinant(self) -> float:
        from matcalc.core.matrix.elimination import determinant

        return determinant(self)

    def rank(self) -> int:
        from matcalc.core.matrix.elimination import rank

        return rank(self)

    def inverse(self) -> "Matrix":
        from matcalc.core.matrix.elimination import inverse

        return inverse(self)

    def solve(self, b: "Matrix"):
        """Решение Ax = b, см. matcalc.core.matrix.solver.solve."""
        from matcalc.core.matrix.solver import solve

        return solve(self, b)

    def rotate_3d(self, deg_x: float, deg_y: float, deg_z: float) -> "Matrix":
        from matcalc.core.matrix.transform import rotate_3d

        return rotate_3d(self, deg_x, deg_y, deg_z)

    # =========================================================================
    # ВЫВОД
    # =========================================================================

    def render(
        self,
        precision: int = DISPLAY_PRECISION,
        width: int = DISPLAY_WIDTH,
    ) -> str:
        """
        Текстовое представление: одна строка на строку матрицы.

        Examples:
            >>> print(Matrix.from_rows([[1, 2], [3, 4]]).render())
            |  1.000|  2.000|
            |  3.000|  4.000|
        """
        return "\n".join(_render_row(row, precision, width) for row in self.to_rows())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"


def _render_row(values: Iterable[float], precision: int, width: int) -> str:
    cells = "".join(f"{value:{width}.{precision}f}|" for value in values)
    return f"|{cells}"
