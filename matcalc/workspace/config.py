"""
Workspace Config — настройки рабочего пространства матриц

Immutable Pydantic модель: каталог хранения, параметры вывода,
ограничения на имена матриц.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from matcalc.core.math.numerical_safeguards import DISPLAY_PRECISION, DISPLAY_WIDTH


class WorkspaceConfig(BaseModel):
    """
    Конфигурация рабочего пространства.

    Immutable модель (frozen=True): изменение настроек создаёт новый экземпляр.
    """

    storage_dir: Path = Field(
        default=Path("workspaces"),
        description="Каталог для save/load файлов рабочего пространства",
    )
    display_precision: int = Field(
        default=DISPLAY_PRECISION, ge=0, le=12, description="Знаков после запятой при выводе"
    )
    display_width: int = Field(
        default=DISPLAY_WIDTH, ge=1, le=40, description="Ширина поля элемента при выводе"
    )
    max_name_length: int = Field(
        default=64, ge=1, le=256, description="Максимальная длина имени матрицы"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("storage_dir")
    @classmethod
    def validate_storage_dir(cls, v: Path) -> Path:
        """Пустой путь недопустим: файлы не должны писаться в текущий каталог неявно."""
        if str(v).strip() in ("", "."):
            raise ValueError("storage_dir must be a non-empty directory path")
        return v
