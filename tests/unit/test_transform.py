"""
Тесты для Geometric Transform

Проверяет:
1. Элементарные повороты на кратные 90° (точные значения)
2. Композицию Rz · Ry · Rx
3. Сохранение длины вектора
4. Требование формы 3 x 1
"""

import math

import pytest

from matcalc.core.matrix import (
    Matrix,
    MatrixDimensionMismatch,
    determinant,
    rotate_3d,
    rotation_matrix,
    rotation_x,
    rotation_y,
    rotation_z,
)


def vector(x: float, y: float, z: float) -> Matrix:
    return Matrix.from_rows([[x], [y], [z]])


def norm(v: Matrix) -> float:
    return math.sqrt(sum(row[0] ** 2 for row in v.to_rows()))


# =============================================================================
# ЭЛЕМЕНТАРНЫЕ ПОВОРОТЫ
# =============================================================================


class TestElementaryRotations:
    """Тесты элементарных поворотов"""

    def test_z_90(self) -> None:
        """(1,0,0) вокруг Z на 90° → (0,1,0) точно"""
        assert rotate_3d(vector(1, 0, 0), 0, 0, 90) == vector(0, 1, 0)

    def test_x_90(self) -> None:
        """(3,1,2) вокруг X на 90° → (3,-2,1)"""
        assert rotate_3d(vector(3, 1, 2), 90, 0, 0) == vector(3, -2, 1)

    def test_y_90(self) -> None:
        """(1,0,0) вокруг Y на 90° → (0,0,-1)"""
        assert rotate_3d(vector(1, 0, 0), 0, 90, 0) == vector(0, 0, -1)

    def test_zero_angles_identity(self) -> None:
        v = vector(1.5, -2.0, 0.25)
        assert rotate_3d(v, 0, 0, 0) == v

    def test_trig_values_snapped(self) -> None:
        """cos(90°) в матрице — точный 0.0"""
        rz = rotation_z(90)
        assert rz.to_rows() == [[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]

    @pytest.mark.parametrize("factory", [rotation_x, rotation_y, rotation_z])
    def test_rotation_is_orthonormal(self, factory) -> None:
        """R · R^T ≈ I, det(R) ≈ 1"""
        r = factory(37.5)
        product = r * r.transpose()
        identity = Matrix.identity(3)
        for got, exp in zip(product.to_rows(), identity.to_rows()):
            assert got == pytest.approx(exp, abs=1e-12)
        assert determinant(r) == pytest.approx(1.0)

    def test_full_turn_returns_to_start(self) -> None:
        v = vector(1, 2, 3)
        result = rotate_3d(v, 360, 360, 360)
        assert [row[0] for row in result.to_rows()] == pytest.approx([1.0, 2.0, 3.0])


# =============================================================================
# КОМПОЗИЦИЯ
# =============================================================================


class TestComposition:
    """Тесты составного поворота"""

    def test_order_x_then_y_then_z(self) -> None:
        """R = Rz · Ry · Rx"""
        expected = rotation_z(30) * rotation_y(45) * rotation_x(60)
        assert rotation_matrix(60, 45, 30) == expected

    def test_x_then_z(self) -> None:
        """(0,1,0): X 90° → (0,0,1), затем Z 90° не меняет"""
        assert rotate_3d(vector(0, 1, 0), 90, 0, 90) == vector(0, 0, 1)

    def test_length_preserved(self) -> None:
        v = vector(3, -4, 12)
        rotated = rotate_3d(v, 17, -123, 250.5)
        assert norm(rotated) == pytest.approx(13.0)

    def test_input_not_modified(self) -> None:
        v = vector(1, 0, 0)
        rotate_3d(v, 0, 0, 90)
        assert v == vector(1, 0, 0)

    def test_method_delegates(self) -> None:
        assert vector(1, 0, 0).rotate_3d(0, 0, 90) == vector(0, 1, 0)


# =============================================================================
# ПРЕДУСЛОВИЯ
# =============================================================================


class TestShapeRequirement:
    """Тесты требования формы 3 x 1"""

    @pytest.mark.parametrize("rows,cols", [(3, 2), (1, 3), (2, 1), (4, 1), (3, 3)])
    def test_non_vector_rejected(self, rows, cols) -> None:
        with pytest.raises(MatrixDimensionMismatch):
            rotate_3d(Matrix(rows, cols, 1.0), 0, 0, 90)

    def test_non_finite_angle_rejected(self) -> None:
        with pytest.raises(ValueError):
            rotate_3d(vector(1, 0, 0), float("nan"), 0, 0)
