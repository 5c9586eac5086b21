"""
Workspace Persistence — текстовый и JSON форматы рабочего пространства

Текстовый формат (по матрице на блок):

    A 2 3
    1.0 2.0 3.0
    4.0 5.0 6.0
    <пустая строка>

JSON формат: {"schema_version": "1", "matrices": [{"name", "rows", "cols",
"values"}]}, проверяется контрактом workspace.json до построения матриц.

Формат выбирается по расширению файла: .json → JSON, иначе текст.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping

from matcalc.core.contracts import validate_workspace_document
from matcalc.core.matrix.dense import Matrix

WORKSPACE_SCHEMA_VERSION = "1"

# Имя матрицы: идентификатор (буква или '_', затем буквы/цифры/'_')
MATRIX_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class WorkspaceFormatError(ValueError):
    """Файл рабочего пространства повреждён или не соответствует формату."""
    pass


def is_json_path(path: Path) -> bool:
    return path.suffix.lower() == ".json"


# =============================================================================
# ТЕКСТОВЫЙ ФОРМАТ
# =============================================================================


def dump_text(matrices: Mapping[str, Matrix]) -> str:
    """Сериализация матриц в текстовый формат."""
    lines: list[str] = []
    for name, matrix in matrices.items():
        lines.append(f"{name} {matrix.rows} {matrix.cols}")
        for row in matrix.to_rows():
            lines.append(" ".join(repr(value) for value in row))
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def parse_text(content: str) -> Dict[str, Matrix]:
    """
    Разбор текстового формата.

    Токены разделяются любыми пробельными символами: заголовок
    '<name> <rows> <cols>', затем rows * cols значений.

    Raises:
        WorkspaceFormatError: если заголовок или значение не разбираются
        MatrixError: если заголовок задаёт недопустимые размеры
    """
    tokens = content.split()
    matrices: Dict[str, Matrix] = {}
    pos = 0

    while pos < len(tokens):
        if pos + 3 > len(tokens):
            raise WorkspaceFormatError(f"Incomplete matrix header: {' '.join(tokens[pos:])!r}")

        name, rows_raw, cols_raw = tokens[pos:pos + 3]
        pos += 3

        if not MATRIX_NAME_PATTERN.match(name):
            raise WorkspaceFormatError(f"Invalid matrix name {name!r}")

        try:
            rows, cols = int(rows_raw), int(cols_raw)
        except ValueError:
            raise WorkspaceFormatError(
                f"Invalid dimensions for matrix '{name}': {rows_raw} x {cols_raw}"
            )

        matrix = Matrix(rows, cols)
        for r in range(rows):
            for c in range(cols):
                try:
                    matrix[r, c] = float(tokens[pos])
                except (IndexError, ValueError):
                    raise WorkspaceFormatError(
                        f"Failed to read value for matrix '{name}' element at ({r}, {c})"
                    )
                pos += 1

        matrices[name] = matrix

    return matrices


# =============================================================================
# JSON ФОРМАТ
# =============================================================================


def to_document(matrices: Mapping[str, Matrix]) -> Dict[str, Any]:
    """Матрицы → JSON документ (dict)."""
    return {
        "schema_version": WORKSPACE_SCHEMA_VERSION,
        "matrices": [
            {
                "name": name,
                "rows": matrix.rows,
                "cols": matrix.cols,
                "values": matrix.to_rows(),
            }
            for name, matrix in matrices.items()
        ],
    }


def from_document(document: Dict[str, Any]) -> Dict[str, Matrix]:
    """
    JSON документ → матрицы.

    Raises:
        ValidationError: если документ не соответствует workspace.json
        WorkspaceFormatError: если values не совпадает с rows/cols
            или имя встречается дважды
        MatrixError: если размеры недопустимы
    """
    validate_workspace_document(document)

    matrices: Dict[str, Matrix] = {}
    for entry in document["matrices"]:
        name = entry["name"]
        values = entry["values"]

        if name in matrices:
            raise WorkspaceFormatError(f"Duplicate matrix name '{name}'")

        if len(values) != entry["rows"] or any(len(row) != entry["cols"] for row in values):
            raise WorkspaceFormatError(
                f"Values of matrix '{name}' do not match declared shape "
                f"{entry['rows']} x {entry['cols']}"
            )

        matrices[name] = Matrix.from_rows(values)

    return matrices


# =============================================================================
# ФАЙЛЫ
# =============================================================================


def write_workspace(path: Path, matrices: Mapping[str, Matrix]) -> None:
    """
    Запись рабочего пространства в файл (каталог создаётся при необходимости).

    Raises:
        OSError: при ошибке записи
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if is_json_path(path):
        content = json.dumps(to_document(matrices), indent=2)
    else:
        content = dump_text(matrices)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def read_workspace(path: Path) -> Dict[str, Matrix]:
    """
    Чтение рабочего пространства из файла.

    Raises:
        OSError: если файл не читается
        json.JSONDecodeError: если JSON файл повреждён
        ValidationError: если JSON не соответствует контракту
        WorkspaceFormatError / MatrixError: если содержимое некорректно
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    if is_json_path(path):
        return from_document(json.loads(content))
    return parse_text(content)
