"""
Geometric Transform — повороты 3D векторов

Элементарные матрицы поворота (правая система координат), углы в градусах:

    Rx = | 1  0   0 |    Ry = |  c  0  s |    Rz = | c  -s  0 |
         | 0  c  -s |         |  0  1  0 |         | s   c  0 |
         | 0  s   c |         | -s  0  c |         | 0   0  1 |

Композиция R = Rz · Ry · Rx: сначала поворот вокруг X, затем Y, затем Z.
Значения sin/cos с abs < EPS_PIVOT заменяются на точный 0.0, поэтому
повороты на кратные 90° дают точные результаты.
"""

import math

from matcalc.core.math.numerical_safeguards import snap_to_zero, validate_finite
from matcalc.core.matrix.dense import Matrix
from matcalc.core.matrix.errors import MatrixDimensionMismatch


def _sin_cos(degrees: float) -> tuple[float, float]:
    radians = math.radians(validate_finite(degrees, "angle"))
    return snap_to_zero(math.sin(radians)), snap_to_zero(math.cos(radians))


def rotation_x(degrees: float) -> Matrix:
    """Матрица поворота вокруг оси X."""
    s, c = _sin_cos(degrees)
    return Matrix.from_rows([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_y(degrees: float) -> Matrix:
    """Матрица поворота вокруг оси Y."""
    s, c = _sin_cos(degrees)
    return Matrix.from_rows([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


def rotation_z(degrees: float) -> Matrix:
    """Матрица поворота вокруг оси Z."""
    s, c = _sin_cos(degrees)
    return Matrix.from_rows([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def rotation_matrix(deg_x: float, deg_y: float, deg_z: float) -> Matrix:
    """Составной поворот Rz · Ry · Rx."""
    return rotation_z(deg_z) * rotation_y(deg_y) * rotation_x(deg_x)


def rotate_3d(vector: Matrix, deg_x: float, deg_y: float, deg_z: float) -> Matrix:
    """
    Поворот вектора-столбца 3 x 1.

    Args:
        vector: Вектор-столбец 3 x 1 (не изменяется)
        deg_x: Угол поворота вокруг X (градусы)
        deg_y: Угол поворота вокруг Y (градусы)
        deg_z: Угол поворота вокруг Z (градусы)

    Returns:
        Новый вектор R · vector

    Raises:
        MatrixDimensionMismatch: если форма vector не 3 x 1

    Examples:
        >>> v = Matrix.from_rows([[1], [0], [0]])
        >>> rotate_3d(v, 0, 0, 90).to_rows()
        [[0.0], [1.0], [0.0]]
    """
    if vector.shape != (3, 1):
        raise MatrixDimensionMismatch(3, 1, vector.rows, vector.cols)

    return rotation_matrix(deg_x, deg_y, deg_z) * vector
