"""
matcalc — dense-matrix numerical engine

Создание матриц, арифметика, метод Гаусса (rank, determinant, inverse,
решение Ax = b) и повороты 3D векторов, плюс именованное рабочее
пространство с сохранением в файл.
"""

from matcalc.core.matrix import (
    Matrix,
    MatrixDimensionMismatch,
    MatrixError,
    MatrixErrorKind,
    MatrixInvalidDimensions,
    MatrixNotSquare,
    MatrixOutcome,
    MatrixOutOfBounds,
    MatrixSingular,
    MatrixTooLarge,
    SolveResult,
    SolveStatus,
    run_checked,
)
from matcalc.workspace import MatrixWorkspace, WorkspaceConfig, WorkspaceOpResult

__version__ = "1.0.0"

__all__ = [
    "Matrix",
    "SolveResult",
    "SolveStatus",
    "MatrixOutcome",
    "run_checked",
    "MatrixErrorKind",
    "MatrixError",
    "MatrixInvalidDimensions",
    "MatrixTooLarge",
    "MatrixOutOfBounds",
    "MatrixDimensionMismatch",
    "MatrixNotSquare",
    "MatrixSingular",
    "MatrixWorkspace",
    "WorkspaceConfig",
    "WorkspaceOpResult",
]
