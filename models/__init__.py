"""
========================================
Data models for the SP generator
========================================

Immutable value types shared by the schema reader, the template renderer
and the CLI.

Modules:
    procedure_models: Action, Column, Table and generation structures

Example:
    >>> from models import Action, Column, Table
    >>> Action.UPDATE.suffix
    '_update'
"""

from models.procedure_models import (
    Action,
    Column,
    GenerateOption,
    GeneratedProcedure,
    ProcedureContext,
    StoredProcedureStructure,
    Table,
    TemplateSettings,
)

__all__ = [
    'Action',
    'Column',
    'GenerateOption',
    'GeneratedProcedure',
    'ProcedureContext',
    'StoredProcedureStructure',
    'Table',
    'TemplateSettings',
]
