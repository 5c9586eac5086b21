"""
Contract Validation Module

Модуль для валидации JSON контрактов matcalc.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    WorkspaceDocumentValidator,
    validate_workspace_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "WorkspaceDocumentValidator",
    # Functions
    "validate_workspace_document",
]
