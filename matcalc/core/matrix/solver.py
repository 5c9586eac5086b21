"""
Linear-System Classifier — решение и классификация Ax = b

Классификация через ранги (теорема Кронекера-Капелли):
1. rank([A|b]) > rank(A) → NO_SOLUTION (система несовместна)
2. rank(A) < cols(A) → INFINITE (совместна, но недоопределена)
3. иначе → UNIQUE, x из полной редукции с b в качестве companion

Порядок проверок фиксирован: несовместность проверяется ДО
недоопределённости.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from matcalc.core.math.numerical_safeguards import EPS_PIVOT
from matcalc.core.matrix.dense import Matrix
from matcalc.core.matrix.elimination import gaussian_elimination, rank
from matcalc.core.matrix.errors import MatrixDimensionMismatch


class SolveStatus(str, Enum):
    """Статус решения линейной системы"""

    UNIQUE = "unique"
    INFINITE = "infinite"
    NO_SOLUTION = "no_solution"


@dataclass(frozen=True)
class SolveResult:
    """Результат решения Ax = b.

    x заполнен только при status == UNIQUE (вектор-столбец cols(A) x 1).
    """

    status: SolveStatus
    x: Optional[Matrix] = None

    @property
    def is_unique(self) -> bool:
        return self.status == SolveStatus.UNIQUE


def solve(a: Matrix, b: Matrix, eps: float = EPS_PIVOT) -> SolveResult:
    """
    Решение линейной системы Ax = b.

    Args:
        a: Матрица коэффициентов m x n
        b: Правая часть, вектор-столбец m x 1
        eps: Порог нулевого pivot (default: EPS_PIVOT)

    Returns:
        SolveResult со статусом и решением (только для UNIQUE)

    Raises:
        MatrixDimensionMismatch: если b не столбец или rows(b) != rows(A)

    Examples:
        >>> a = Matrix.from_rows([[2, 1], [1, 1]])
        >>> b = Matrix.from_rows([[1], [1]])
        >>> solve(a, b).x.to_rows()
        [[0.0], [1.0]]
    """
    if b.cols != 1 or b.rows != a.rows:
        raise MatrixDimensionMismatch(a.rows, a.cols, b.rows, b.cols)

    rank_a = rank(a, eps=eps)
    rank_augmented = rank(a.augment(b), eps=eps)

    if rank_augmented > rank_a:
        return SolveResult(status=SolveStatus.NO_SOLUTION)

    if rank_a < a.cols:
        return SolveResult(status=SolveStatus.INFINITE)

    # rank(A) == rank([A|b]) == cols(A)
    rhs = b.copy()
    gaussian_elimination(a, companion=rhs, full_reduction=True, require_nonsingular=True, eps=eps)

    # Для переопределённой совместной системы (m > n) решением служат первые n строк
    x = Matrix.from_rows(rhs.to_rows()[:a.cols])
    return SolveResult(status=SolveStatus.UNIQUE, x=x)
