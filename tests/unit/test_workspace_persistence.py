"""
Тесты для Workspace Persistence

Проверяет:
1. Текстовый формат (запись, разбор, ошибки разбора)
2. JSON формат (контракт, дубликаты, несовпадение формы)
3. Выбор формата по расширению файла
"""

import json

import pytest
from jsonschema import ValidationError

from matcalc.core.matrix import Matrix, MatrixInvalidDimensions
from matcalc.workspace.persistence import (
    WorkspaceFormatError,
    dump_text,
    from_document,
    parse_text,
    read_workspace,
    to_document,
    write_workspace,
)


@pytest.fixture
def matrices():
    return {
        "A": Matrix.from_rows([[1, 2, 3], [4, 5, 6]]),
        "b": Matrix.from_rows([[0.1], [-2.5]]),
    }


# =============================================================================
# ТЕКСТОВЫЙ ФОРМАТ
# =============================================================================


class TestTextFormat:
    """Тесты текстового формата"""

    def test_dump_layout(self, matrices) -> None:
        """Заголовок 'name rows cols', строки значений, пустая строка"""
        text = dump_text(matrices)
        assert text == "A 2 3\n1.0 2.0 3.0\n4.0 5.0 6.0\n\nb 2 1\n0.1\n-2.5\n\n"

    def test_dump_empty(self) -> None:
        assert dump_text({}) == ""

    def test_parse_dumped_text(self, matrices) -> None:
        parsed = parse_text(dump_text(matrices))
        assert parsed == matrices

    def test_values_preserved_exactly(self) -> None:
        """repr() сохраняет float без потерь"""
        original = {"x": Matrix.from_rows([[1 / 3, 2 ** 0.5]])}
        assert parse_text(dump_text(original)) == original

    def test_parse_any_whitespace(self) -> None:
        parsed = parse_text("M 2 2 1 2\n3\t4\n")
        assert parsed["M"].to_rows() == [[1.0, 2.0], [3.0, 4.0]]

    def test_parse_empty(self) -> None:
        assert parse_text("  \n\n") == {}

    def test_incomplete_header(self) -> None:
        with pytest.raises(WorkspaceFormatError, match="Incomplete matrix header"):
            parse_text("A 1 1 5.0\nB 2")

    def test_invalid_name(self) -> None:
        with pytest.raises(WorkspaceFormatError, match="Invalid matrix name"):
            parse_text("9A 1 1 5.0")

    def test_invalid_dimensions(self) -> None:
        with pytest.raises(WorkspaceFormatError, match="Invalid dimensions for matrix 'A'"):
            parse_text("A two 1 5.0")

    def test_non_positive_dimensions(self) -> None:
        with pytest.raises(MatrixInvalidDimensions):
            parse_text("A 0 1")

    def test_missing_value(self) -> None:
        with pytest.raises(WorkspaceFormatError, match=r"matrix 'A' element at \(1, 0\)"):
            parse_text("A 2 1 5.0")

    def test_non_numeric_value(self) -> None:
        with pytest.raises(WorkspaceFormatError, match=r"element at \(0, 1\)"):
            parse_text("A 1 2 5.0 abc")

    def test_non_finite_value(self) -> None:
        with pytest.raises(WorkspaceFormatError):
            parse_text("A 1 1 nan")


# =============================================================================
# JSON ФОРМАТ
# =============================================================================


class TestJsonFormat:
    """Тесты JSON документа"""

    def test_document_structure(self, matrices) -> None:
        document = to_document(matrices)
        assert document["schema_version"] == "1"
        assert [m["name"] for m in document["matrices"]] == ["A", "b"]
        assert document["matrices"][0]["values"] == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]

    def test_from_document(self, matrices) -> None:
        assert from_document(to_document(matrices)) == matrices

    def test_contract_violation(self) -> None:
        with pytest.raises(ValidationError):
            from_document({"schema_version": "1"})

    def test_duplicate_name(self) -> None:
        entry = {"name": "A", "rows": 1, "cols": 1, "values": [[1.0]]}
        with pytest.raises(WorkspaceFormatError, match="Duplicate matrix name 'A'"):
            from_document({"schema_version": "1", "matrices": [entry, entry]})

    @pytest.mark.parametrize(
        "values",
        [
            [[1.0, 2.0]],
            [[1.0], [2.0], [3.0]],
            [[1.0, 2.0], [3.0]],
        ],
    )
    def test_shape_mismatch(self, values) -> None:
        document = {
            "schema_version": "1",
            "matrices": [{"name": "A", "rows": 2, "cols": 1, "values": values}],
        }
        with pytest.raises(WorkspaceFormatError, match="do not match declared shape"):
            from_document(document)


# =============================================================================
# ФАЙЛЫ
# =============================================================================


class TestFiles:
    """Тесты записи/чтения файлов"""

    def test_text_file(self, tmp_path, matrices) -> None:
        path = tmp_path / "ws.txt"
        write_workspace(path, matrices)
        assert path.read_text(encoding="utf-8").startswith("A 2 3\n")
        assert read_workspace(path) == matrices

    def test_json_file(self, tmp_path, matrices) -> None:
        path = tmp_path / "ws.json"
        write_workspace(path, matrices)
        assert json.loads(path.read_text(encoding="utf-8"))["schema_version"] == "1"
        assert read_workspace(path) == matrices

    def test_suffix_case_insensitive(self, tmp_path, matrices) -> None:
        path = tmp_path / "ws.JSON"
        write_workspace(path, matrices)
        json.loads(path.read_text(encoding="utf-8"))

    def test_creates_parent_directories(self, tmp_path, matrices) -> None:
        path = tmp_path / "nested" / "dir" / "ws.txt"
        write_workspace(path, matrices)
        assert path.exists()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_workspace(tmp_path / "missing.txt")

    def test_corrupt_json(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            read_workspace(path)
