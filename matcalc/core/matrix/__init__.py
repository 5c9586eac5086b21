"""
Dense matrix engine.

Matrix type, Gaussian elimination, linear-system classification and
3D rotations.
"""

from matcalc.core.matrix.dense import Matrix
from matcalc.core.matrix.elimination import (
    EliminationResult,
    determinant,
    gaussian_elimination,
    inverse,
    rank,
)
from matcalc.core.matrix.errors import (
    MatrixDimensionMismatch,
    MatrixError,
    MatrixErrorKind,
    MatrixInvalidDimensions,
    MatrixNotSquare,
    MatrixOutOfBounds,
    MatrixSingular,
    MatrixTooLarge,
)
from matcalc.core.matrix.outcome import MatrixOutcome, run_checked
from matcalc.core.matrix.solver import SolveResult, SolveStatus, solve
from matcalc.core.matrix.transform import (
    rotate_3d,
    rotation_matrix,
    rotation_x,
    rotation_y,
    rotation_z,
)

__all__ = [
    # Matrix type
    "Matrix",
    # Elimination
    "EliminationResult",
    "gaussian_elimination",
    "determinant",
    "rank",
    "inverse",
    # Solver
    "SolveResult",
    "SolveStatus",
    "solve",
    # Transform
    "rotate_3d",
    "rotation_matrix",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    # Result type
    "MatrixOutcome",
    "run_checked",
    # Errors
    "MatrixErrorKind",
    "MatrixError",
    "MatrixInvalidDimensions",
    "MatrixTooLarge",
    "MatrixOutOfBounds",
    "MatrixDimensionMismatch",
    "MatrixNotSquare",
    "MatrixSingular",
]
