"""
Tests for JSON Schema Contract Validators

Тестирование контракта рабочего пространства (workspace.json):
- Валидность самой схемы
- Валидация правильных документов
- Детекция нарушений required полей
- Детекция нарушений типов
- Детекция нарушений constraints (minimum/const/pattern)
- Документы, построенные из матриц
"""

import copy

import pytest
from jsonschema import ValidationError

from matcalc.core.contracts import (
    SchemaLoader,
    WorkspaceDocumentValidator,
    validate_workspace_document,
)
from matcalc.core.matrix import Matrix
from matcalc.workspace.persistence import to_document


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_workspace():
    """Валидный документ рабочего пространства для тестирования."""
    return {
        "schema_version": "1",
        "matrices": [
            {
                "name": "A",
                "rows": 2,
                "cols": 2,
                "values": [[4.0, 7.0], [2.0, 6.0]],
            },
            {
                "name": "b_vec",
                "rows": 2,
                "cols": 1,
                "values": [[1], [-2.5]],
            },
        ],
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_workspace_schema():
    """Проверка загрузки схемы."""
    loader = SchemaLoader()

    schema = loader.load_schema("workspace")

    assert schema["properties"]["schema_version"]["const"] == "1"
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("workspace")
    schema2 = loader.load_schema("workspace")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path):
    """Проверка ошибки при отсутствующем каталоге схем."""
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Файл, не являющийся JSON Schema, отклоняется."""
    (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")
    loader = SchemaLoader(tmp_path)

    with pytest.raises(ValueError, match="Invalid JSON Schema"):
        loader.load_schema("broken")


# =============================================================================
# TESTS - WORKSPACE VALIDATION
# =============================================================================


def test_workspace_validator_accepts_valid_data(valid_workspace):
    """Валидация правильного документа."""
    validator = WorkspaceDocumentValidator()
    validator.validate(valid_workspace)  # Не должно выбросить исключение
    assert validator.is_valid(valid_workspace)


def test_workspace_validate_function(valid_workspace):
    """Проверка функции validate_workspace_document."""
    validate_workspace_document(valid_workspace)


def test_workspace_accepts_empty_matrix_list(valid_workspace):
    """Пустое рабочее пространство — валидный документ."""
    data = copy.deepcopy(valid_workspace)
    data["matrices"] = []

    validate_workspace_document(data)


def test_workspace_rejects_missing_required_field(valid_workspace):
    """Валидация отклоняет данные без обязательных полей."""
    data = copy.deepcopy(valid_workspace)
    del data["matrices"][0]["values"]

    with pytest.raises(ValidationError) as exc_info:
        validate_workspace_document(data)
    assert "'values' is a required property" in str(exc_info.value)


def test_workspace_rejects_wrong_schema_version(valid_workspace):
    """schema_version фиксирован."""
    data = copy.deepcopy(valid_workspace)
    data["schema_version"] = "2"

    with pytest.raises(ValidationError):
        validate_workspace_document(data)


def test_workspace_rejects_wrong_type(valid_workspace):
    """Валидация отклоняет неправильный тип данных."""
    data = copy.deepcopy(valid_workspace)
    data["matrices"][0]["rows"] = "2"

    with pytest.raises(ValidationError) as exc_info:
        validate_workspace_document(data)
    assert "is not of type 'integer'" in str(exc_info.value)


def test_workspace_rejects_non_numeric_value(valid_workspace):
    data = copy.deepcopy(valid_workspace)
    data["matrices"][0]["values"][1][0] = "x"

    with pytest.raises(ValidationError) as exc_info:
        validate_workspace_document(data)
    assert "is not of type 'number'" in str(exc_info.value)


@pytest.mark.parametrize("field", ["rows", "cols"])
def test_workspace_rejects_zero_dimension(valid_workspace, field):
    """rows/cols ≥ 1."""
    data = copy.deepcopy(valid_workspace)
    data["matrices"][0][field] = 0

    with pytest.raises(ValidationError):
        validate_workspace_document(data)


@pytest.mark.parametrize("name", ["1A", "has space", "", "a-b"])
def test_workspace_rejects_invalid_name(valid_workspace, name):
    """Имя матрицы должно быть идентификатором."""
    data = copy.deepcopy(valid_workspace)
    data["matrices"][0]["name"] = name

    with pytest.raises(ValidationError):
        validate_workspace_document(data)


def test_workspace_rejects_unknown_property(valid_workspace):
    data = copy.deepcopy(valid_workspace)
    data["matrices"][0]["comment"] = "not allowed"

    assert not WorkspaceDocumentValidator().is_valid(data)


def test_workspace_iter_errors_reports_all(valid_workspace):
    """iter_errors возвращает все нарушения сразу."""
    data = copy.deepcopy(valid_workspace)
    data["schema_version"] = "0"
    data["matrices"][1]["cols"] = -1

    errors = list(WorkspaceDocumentValidator().iter_errors(data))
    assert len(errors) == 2


# =============================================================================
# TESTS - DOCUMENTS BUILT FROM MATRICES
# =============================================================================


def test_matrix_document_is_valid():
    """Документ, построенный из матриц, проходит контракт."""
    document = to_document({
        "A": Matrix.from_rows([[1, 2], [3, 4]]),
        "v": Matrix(3, 1, 0.5),
    })

    validate_workspace_document(document)
    assert document["matrices"][1]["values"] == [[0.5], [0.5], [0.5]]
