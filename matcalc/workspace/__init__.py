"""
Matrix workspace: named matrix store, configuration and persistence.
"""

from matcalc.workspace.config import WorkspaceConfig
from matcalc.workspace.persistence import (
    MATRIX_NAME_PATTERN,
    WORKSPACE_SCHEMA_VERSION,
    WorkspaceFormatError,
    dump_text,
    from_document,
    parse_text,
    read_workspace,
    to_document,
    write_workspace,
)
from matcalc.workspace.store import MatrixWorkspace, WorkspaceOpResult

__all__ = [
    # Config
    "WorkspaceConfig",
    # Store
    "MatrixWorkspace",
    "WorkspaceOpResult",
    # Persistence
    "MATRIX_NAME_PATTERN",
    "WORKSPACE_SCHEMA_VERSION",
    "WorkspaceFormatError",
    "dump_text",
    "parse_text",
    "to_document",
    "from_document",
    "read_workspace",
    "write_workspace",
]
