"""
=========================================
Stored-procedure generation package.
=========================================

Pipeline from table schema to procedure text.

Modules:
    schema_reader: Reads the table description from INFORMATION_SCHEMA
    parameter_namer: Converts column names to driver parameter names
    column_filter: Selects the columns each action works on
    template_renderer: Loads and renders Jinja2 templates
    procedure_assembler: Builds StoredProcedureStructure values
    procedure_generator: Runs the per-action pipeline
    output_writer: Writes procedures to files or stdout
"""

__all__ = [
    'GenerationError',
    'OutputWriteError',
    'ParameterNamer',
    'ProcedureGenerator',
    'SchemaReadError',
    'TemplateError',
    'TemplateRenderer',
    'create_stored_procedure_for_action',
    'filter_column_by_action',
    'read_table_description',
    'write_procedure',
]

from .column_filter import filter_column_by_action
from .output_writer import OutputWriteError, write_procedure
from .parameter_namer import ParameterNamer
from .procedure_assembler import create_stored_procedure_for_action
from .procedure_generator import GenerationError, ProcedureGenerator
from .schema_reader import SchemaReadError, read_table_description
from .template_renderer import TemplateError, TemplateRenderer
