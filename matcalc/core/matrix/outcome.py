"""
Matrix Outcome — результат операции без exception

Обёртка для вызывающего кода, который ветвится по виду ошибки вместо
try/except: run_checked выполняет операцию и превращает MatrixError в
неуспешный MatrixOutcome с полем error_kind.

Ошибки, не относящиеся к матрицам (TypeError, ValueError и т.д.),
пробрасываются как есть.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from matcalc.core.matrix.errors import MatrixError, MatrixErrorKind


@dataclass(frozen=True)
class MatrixOutcome:
    """Результат матричной операции: значение или вид ошибки."""

    value: Any = None
    error_kind: Optional[MatrixErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: Any) -> "MatrixOutcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MatrixError) -> "MatrixOutcome":
        return cls(error_kind=error.kind, message=str(error))


def run_checked(op: Callable[..., Any], *args: Any, **kwargs: Any) -> MatrixOutcome:
    """
    Выполнение матричной операции с конверсией MatrixError в MatrixOutcome.

    Examples:
        >>> from matcalc.core.matrix.dense import Matrix
        >>> outcome = run_checked(Matrix, 0, 3)
        >>> outcome.ok, outcome.error_kind.value
        (False, 'invalid_dimensions')
    """
    try:
        value = op(*args, **kwargs)
    except MatrixError as e:
        return MatrixOutcome.failure(e)
    return MatrixOutcome.success(value)
