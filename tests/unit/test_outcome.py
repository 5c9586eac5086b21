"""
Тесты для MatrixOutcome / run_checked
"""

import pytest

from matcalc.core.matrix import (
    Matrix,
    MatrixErrorKind,
    MatrixOutcome,
    MatrixSingular,
    run_checked,
)


class TestMatrixOutcome:
    """Тесты результата операции"""

    def test_success(self) -> None:
        outcome = MatrixOutcome.success(42)
        assert outcome.ok
        assert outcome.value == 42
        assert outcome.error_kind is None

    def test_failure_from_error(self) -> None:
        outcome = MatrixOutcome.failure(MatrixSingular(2))
        assert not outcome.ok
        assert outcome.value is None
        assert outcome.error_kind == MatrixErrorKind.SINGULAR
        assert "column 2" in outcome.message

    def test_frozen(self) -> None:
        outcome = MatrixOutcome.success(1)
        with pytest.raises(AttributeError):
            outcome.value = 2


class TestRunChecked:
    """Тесты для run_checked"""

    def test_value_returned(self) -> None:
        outcome = run_checked(Matrix.from_rows([[4, 7], [2, 6]]).determinant)
        assert outcome.ok
        assert outcome.value == 10.0

    @pytest.mark.parametrize(
        "op,args,kind",
        [
            (Matrix, (0, 3), MatrixErrorKind.INVALID_DIMENSIONS),
            (Matrix, (10_000, 1_000), MatrixErrorKind.TOO_LARGE),
            (Matrix(2, 2).get, (2, 0), MatrixErrorKind.OUT_OF_BOUNDS),
            (Matrix(2, 3).multiply, (Matrix(4, 2),), MatrixErrorKind.DIMENSION_MISMATCH),
            (Matrix(2, 3).determinant, (), MatrixErrorKind.NOT_SQUARE),
            (Matrix(2, 2).inverse, (), MatrixErrorKind.SINGULAR),
        ],
    )
    def test_error_kinds(self, op, args, kind) -> None:
        """Каждый вид MatrixError превращается в error_kind"""
        outcome = run_checked(op, *args)
        assert not outcome.ok
        assert outcome.error_kind == kind
        assert outcome.message

    def test_kwargs_forwarded(self) -> None:
        outcome = run_checked(Matrix, 2, 2, init_value=3.0)
        assert outcome.value == Matrix(2, 2, 3.0)

    def test_non_matrix_errors_propagate(self) -> None:
        """TypeError/ValueError не перехватываются"""
        with pytest.raises(TypeError):
            run_checked(Matrix, "2", 2)
        with pytest.raises(ValueError):
            run_checked(Matrix, 2, 2, float("nan"))
