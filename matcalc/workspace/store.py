"""
Matrix Workspace — именованное хранилище матриц

Хранилище отображает имена на матрицы и перенаправляет операции в движок.
Каждая операция возвращает WorkspaceOpResult и НЕ бросает exception для
ошибок уровня матриц или хранилища: вызывающий код (CLI) ветвится по
success / error_code.

Коды ошибок (error_code):
- "not_found": матрица с таким именем отсутствует
- "invalid_name": имя не является идентификатором или слишком длинное
- "empty": в рабочем пространстве нет матриц
- "io_error" / "format_error": ошибки save/load
- "non_finite": результат арифметики переполнился (NaN/Inf)
- MatrixErrorKind.value: ошибка движка (singular, dimension_mismatch, ...)
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from jsonschema import ValidationError

from matcalc.core.matrix import (
    Matrix,
    MatrixError,
    MatrixOutcome,
    SolveStatus,
    run_checked,
)
from matcalc.workspace.config import WorkspaceConfig
from matcalc.workspace.persistence import (
    MATRIX_NAME_PATTERN,
    WorkspaceFormatError,
    read_workspace,
    write_workspace,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceOpResult:
    """Результат операции над рабочим пространством."""

    success: bool
    error_code: str
    message: str
    value: Any = None

    @classmethod
    def ok(cls, message: str, value: Any = None) -> "WorkspaceOpResult":
        return cls(success=True, error_code="", message=message, value=value)

    @classmethod
    def fail(cls, error_code: str, message: str) -> "WorkspaceOpResult":
        return cls(success=False, error_code=error_code, message=message)


class MatrixWorkspace:
    """Именованное хранилище матриц.

    Матрицы хранятся как независимые копии: get() и put() копируют значения,
    поэтому внешний код не может изменить содержимое хранилища напрямую.
    """

    def __init__(self, config: Optional[WorkspaceConfig] = None):
        self.config = config or WorkspaceConfig()
        self._matrices: Dict[str, Matrix] = {}

    # =========================================================================
    # ХРАНИЛИЩЕ
    # =========================================================================

    @property
    def count(self) -> int:
        return len(self._matrices)

    def names(self) -> List[str]:
        return sorted(self._matrices)

    def exists(self, name: str) -> bool:
        return name in self._matrices

    def get(self, name: str) -> Optional[Matrix]:
        matrix = self._matrices.get(name)
        return matrix.copy() if matrix is not None else None

    def put(self, name: str, matrix: Matrix) -> WorkspaceOpResult:
        invalid = self._check_name(name)
        if invalid is not None:
            return invalid
        self._matrices[name] = matrix.copy()
        return WorkspaceOpResult.ok(f"Matrix '{name}' stored.")

    def clear(self) -> None:
        self._matrices.clear()

    def _check_name(self, name: str) -> Optional[WorkspaceOpResult]:
        if len(name) > self.config.max_name_length or not MATRIX_NAME_PATTERN.match(name):
            return WorkspaceOpResult.fail(
                "invalid_name",
                f"Invalid matrix name '{name}': use letters, digits and '_' "
                f"(max {self.config.max_name_length} characters, not starting with a digit).",
            )
        return None

    def _not_found(self, name: str) -> WorkspaceOpResult:
        return WorkspaceOpResult.fail("not_found", f"Matrix '{name}' not found in workspace.")

    def _missing(self, *names: str) -> Optional[WorkspaceOpResult]:
        for name in names:
            if name not in self._matrices:
                return self._not_found(name)
        return None

    def _render(self, matrix: Matrix) -> str:
        return matrix.render(self.config.display_precision, self.config.display_width)

    @staticmethod
    def _failure(outcome: MatrixOutcome) -> WorkspaceOpResult:
        return WorkspaceOpResult.fail(outcome.error_kind.value, outcome.message)

    def _store_result(
        self,
        result_name: str,
        op: Callable[..., Matrix],
        *args: Any,
    ) -> WorkspaceOpResult:
        invalid = self._check_name(result_name)
        if invalid is not None:
            return invalid

        try:
            outcome = run_checked(op, *args)
        except ValueError as e:
            return WorkspaceOpResult.fail("non_finite", str(e))
        if not outcome.ok:
            return self._failure(outcome)

        self._matrices[result_name] = outcome.value
        return WorkspaceOpResult.ok(f"Result saved as '{result_name}'.", outcome.value)

    # =========================================================================
    # СОЗДАНИЕ / УДАЛЕНИЕ / ЗАПОЛНЕНИЕ
    # =========================================================================

    def create(self, name: str, rows: int, cols: int, init_value: float = 0.0) -> WorkspaceOpResult:
        """Создание матрицы rows x cols (существующая с тем же именем заменяется)."""
        invalid = self._check_name(name)
        if invalid is not None:
            return invalid

        outcome = run_checked(Matrix, rows, cols, init_value)
        if not outcome.ok:
            return self._failure(outcome)

        self._matrices[name] = outcome.value
        return WorkspaceOpResult.ok(
            f"Matrix '{name}' created:\n  Dimensions: {rows} x {cols}", outcome.value
        )

    def delete(self, name: str) -> WorkspaceOpResult:
        if name not in self._matrices:
            return self._not_found(name)
        del self._matrices[name]
        return WorkspaceOpResult.ok(f"Matrix '{name}' deleted from workspace.")

    def assign(self, name: str, values: Sequence[Sequence[float]]) -> WorkspaceOpResult:
        """
        Замена всех значений матрицы.

        Форма values должна совпадать с формой матрицы (форма неизменна).
        """
        missing = self._missing(name)
        if missing is not None:
            return missing

        current = self._matrices[name]
        outcome = run_checked(Matrix.from_rows, values)
        if not outcome.ok:
            return self._failure(outcome)

        replacement = outcome.value
        if replacement.shape != current.shape:
            return WorkspaceOpResult.fail(
                "dimension_mismatch",
                f"Sizes do not match. Matrix '{name}' is {current.rows}x{current.cols}, "
                f"values are {replacement.rows}x{replacement.cols}",
            )

        self._matrices[name] = replacement
        return WorkspaceOpResult.ok(f"Matrix '{name}' assigned.", replacement)

    def set_element(self, name: str, row: int, col: int, value: float) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing

        outcome = run_checked(self._matrices[name].set, row, col, value)
        if not outcome.ok:
            return self._failure(outcome)
        return WorkspaceOpResult.ok(f"Matrix '{name}' element ({row}, {col}) set.")

    # =========================================================================
    # ВЫВОД
    # =========================================================================

    def show(self, name: str) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing
        text = f"Matrix '{name}':\n{self._render(self._matrices[name])}"
        return WorkspaceOpResult.ok(text, text)

    def list_all(self) -> WorkspaceOpResult:
        if not self._matrices:
            return WorkspaceOpResult.fail("empty", "Workspace is empty.")
        blocks = [
            f"Matrix '{name}':\n{self._render(self._matrices[name])}\n" for name in self.names()
        ]
        text = "\n".join(blocks)
        return WorkspaceOpResult.ok(text, text)

    # =========================================================================
    # ОПЕРАЦИИ
    # =========================================================================

    def transpose(self, name: str) -> WorkspaceOpResult:
        """Транспонирование на месте: сохранённая матрица заменяется."""
        missing = self._missing(name)
        if missing is not None:
            return missing
        self._matrices[name] = self._matrices[name].transpose()
        return WorkspaceOpResult.ok(f"Matrix '{name}' transposed.", self._matrices[name])

    def scalar_multiply(self, result_name: str, name: str, scalar: float) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing
        return self._store_result(result_name, self._matrices[name].scalar_multiply, scalar)

    def add(self, result_name: str, first: str, second: str) -> WorkspaceOpResult:
        missing = self._missing(first, second)
        if missing is not None:
            return missing
        return self._store_result(result_name, Matrix.add, self._matrices[first], self._matrices[second])

    def subtract(self, result_name: str, first: str, second: str) -> WorkspaceOpResult:
        missing = self._missing(first, second)
        if missing is not None:
            return missing
        return self._store_result(
            result_name, Matrix.subtract, self._matrices[first], self._matrices[second]
        )

    def multiply(self, result_name: str, first: str, second: str) -> WorkspaceOpResult:
        missing = self._missing(first, second)
        if missing is not None:
            return missing
        return self._store_result(
            result_name, Matrix.multiply, self._matrices[first], self._matrices[second]
        )

    def inverse(self, result_name: str, name: str) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing
        return self._store_result(result_name, self._matrices[name].inverse)

    def rank(self, name: str) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing
        value = self._matrices[name].rank()
        return WorkspaceOpResult.ok(f"Rank of matrix '{name}' is: {value}", value)

    def determinant(self, name: str) -> WorkspaceOpResult:
        missing = self._missing(name)
        if missing is not None:
            return missing

        outcome = run_checked(self._matrices[name].determinant)
        if not outcome.ok:
            return self._failure(outcome)
        return WorkspaceOpResult.ok(
            f"Determinant of matrix '{name}' is: {outcome.value:g}", outcome.value
        )

    def solve(self, result_name: str, a_name: str, b_name: str) -> WorkspaceOpResult:
        """
        Решение A x = b. Вектор x сохраняется под result_name только при
        единственном решении; value содержит SolveResult.
        """
        missing = self._missing(a_name, b_name)
        if missing is not None:
            return missing

        invalid = self._check_name(result_name)
        if invalid is not None:
            return invalid

        outcome = run_checked(self._matrices[a_name].solve, self._matrices[b_name])
        if not outcome.ok:
            return self._failure(outcome)

        result = outcome.value
        if result.status == SolveStatus.NO_SOLUTION:
            return WorkspaceOpResult.ok("The system has no solution.", result)
        if result.status == SolveStatus.INFINITE:
            return WorkspaceOpResult.ok("The system has infinite solutions.", result)

        self._matrices[result_name] = result.x
        return WorkspaceOpResult.ok(
            f"The system has a unique solution, saved as '{result_name}'.", result
        )

    def rotate(self, name: str, deg_x: float, deg_y: float, deg_z: float) -> WorkspaceOpResult:
        """Поворот 3D вектора на месте: сохранённый вектор заменяется."""
        missing = self._missing(name)
        if missing is not None:
            return missing

        try:
            outcome = run_checked(self._matrices[name].rotate_3d, deg_x, deg_y, deg_z)
        except ValueError as e:
            return WorkspaceOpResult.fail("non_finite", str(e))
        if not outcome.ok:
            return self._failure(outcome)

        self._matrices[name] = outcome.value
        return WorkspaceOpResult.ok(f"Vector '{name}' rotated.", outcome.value)

    # =========================================================================
    # SAVE / LOAD
    # =========================================================================

    def save(self, filename: str) -> WorkspaceOpResult:
        """Сохранение в storage_dir/filename (формат по расширению)."""
        path = self.config.storage_dir / filename
        try:
            write_workspace(path, {name: self._matrices[name] for name in self.names()})
        except OSError as e:
            return WorkspaceOpResult.fail("io_error", f"Could not open file for writing: {e}")

        logger.info("Saved %d matrices to %s", self.count, path)
        return WorkspaceOpResult.ok(f"Workspace saved successfully as '{path}'.", path)

    def load(self, filename: str) -> WorkspaceOpResult:
        """
        Загрузка из storage_dir/filename.

        Если файл не открывается, содержимое не меняется. Если файл открыт,
        но повреждён, рабочее пространство очищается. При успехе содержимое
        заменяется матрицами из файла.
        """
        path = self.config.storage_dir / filename

        try:
            matrices = read_workspace(path)
        except OSError as e:
            return WorkspaceOpResult.fail("io_error", f"Could not open workspace file '{path}': {e}")
        except (json.JSONDecodeError, ValidationError, WorkspaceFormatError, ValueError) as e:
            self.clear()
            return WorkspaceOpResult.fail("format_error", f"Invalid workspace file '{path}': {e}")
        except MatrixError as e:
            self.clear()
            return WorkspaceOpResult.fail(e.kind.value, str(e))

        self.clear()
        self._matrices.update(matrices)
        logger.info("Loaded %d matrices from %s", self.count, path)
        return WorkspaceOpResult.ok(f"Workspace loaded successfully from '{path}'.", path)
