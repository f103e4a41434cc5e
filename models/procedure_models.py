"""
===========================================================
Data models for stored-procedure generation
===========================================================

Immutable value types passed through the generation pipeline. They are
separated from the generator logic so templates, tests and the CLI can
share them without circular imports.

Models:
    Action: Closed enumeration of procedure actions
    Column: One column of the inspected table
    Table: Table name plus ordered columns
    StoredProcedureStructure: Rendered parts of one procedure
    TemplateSettings: Location of the on-disk templates
    GenerateOption: Run-level generation settings
    ProcedureContext: Context handed to the procedure template
    GeneratedProcedure: Final rendered procedure text

Example:
    >>> from models.procedure_models import Action, Column, Table
    >>>
    >>> table = Table(
    ...     name='users',
    ...     columns=(
    ...         Column(name='id', sql_type='int', is_primary_key=True, parameter_name='@id'),
    ...         Column(name='name', sql_type='varchar(50)', parameter_name='@name'),
    ...     )
    ... )
    >>> Action.SELECT.suffix
    '_select'
"""

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple


class Action(Enum):
    """Stored-procedure action.

    The value doubles as the CLI flag name, the procedure suffix stem and
    the query template stem.
    """

    SELECT = 'select'
    INSERT = 'insert'
    UPDATE = 'update'
    DELETE = 'delete'

    @property
    def suffix(self) -> str:
        """Procedure name and output file suffix, e.g. '_select'."""
        return f"_{self.value}"

    @property
    def template_file(self) -> str:
        """Query template file name at the template root."""
        return f"{self.value}.tmpl"

    @property
    def has_where_condition(self) -> bool:
        """Whether procedures for this action carry a WHERE clause."""
        return self is not Action.INSERT


@dataclass(frozen=True)
class Column:
    """Column description read from the database.

    Attributes:
        name: Column name
        sql_type: SQL type including any length suffix, e.g. 'varchar(50)'
        is_primary_key: True if the column is part of the primary key
        parameter_name: Driver-specific bound-parameter name, e.g. '@name'
    """

    name: str
    sql_type: str
    is_primary_key: bool = False
    parameter_name: str = ''


@dataclass(frozen=True)
class Table:
    """Table description: name plus columns in catalog order."""

    name: str
    columns: Tuple[Column, ...] = ()

    @property
    def primary_key_columns(self) -> Tuple[Column, ...]:
        return tuple(column for column in self.columns if column.is_primary_key)

    def with_columns(self, columns) -> 'Table':
        """Return a copy of this table holding only the given columns."""
        return Table(name=self.name, columns=tuple(columns))


@dataclass(frozen=True)
class StoredProcedureStructure:
    """Rendered sections of a single stored procedure.

    Attributes:
        action: Action the procedure implements
        parameter_section: Rendered parameter declarations
        query: Rendered query body
        where_condition: Rendered WHERE clause, always empty for INSERT
    """

    action: Action
    parameter_section: str = ''
    query: str = ''
    where_condition: str = ''


@dataclass(frozen=True)
class TemplateSettings:
    """Location of the template files.

    Action templates live at the folder root; driver templates live in a
    sub-folder named after the driver.
    """

    folder: Path
    select_template: str = Action.SELECT.template_file
    insert_template: str = Action.INSERT.template_file
    update_template: str = Action.UPDATE.template_file
    delete_template: str = Action.DELETE.template_file

    PARAMETER_SECTION_TEMPLATE = 'parameterSection.tmpl'
    PARAMETER_CONVERT_TEMPLATE = 'parameterConvert.tmpl'
    PROCEDURE_TEMPLATE = 'procedure.tmpl'

    def template_for(self, action: Action) -> str:
        """Template name (relative to folder) of the query body for an action."""
        templates = {
            Action.SELECT: self.select_template,
            Action.INSERT: self.insert_template,
            Action.UPDATE: self.update_template,
            Action.DELETE: self.delete_template,
        }
        return templates[action]

    def parameter_section_template(self, driver: str) -> str:
        return f"{driver}/{self.PARAMETER_SECTION_TEMPLATE}"

    def parameter_convert_template(self, driver: str) -> str:
        return f"{driver}/{self.PARAMETER_CONVERT_TEMPLATE}"

    def procedure_template(self, driver: str) -> str:
        return f"{driver}/{self.PROCEDURE_TEMPLATE}"

    def driver_folder(self, driver: str) -> Path:
        return self.folder / driver

    def available_drivers(self) -> Tuple[str, ...]:
        """Drivers that have a template sub-folder, sorted by name."""
        if not self.folder.is_dir():
            return ()
        return tuple(sorted(path.name for path in self.folder.iterdir() if path.is_dir()))


@dataclass(frozen=True)
class GenerateOption:
    """Run-level settings, built once from the command line.

    Attributes:
        driver: Target driver name (selects the driver template folder)
        procedure_name: Base procedure name; the action suffix is appended
        actions: Requested actions in generation order
        template: Template settings
        action_parameter: Driver parameter name for the literal 'action'
    """

    driver: str
    procedure_name: str
    actions: Tuple[Action, ...]
    template: TemplateSettings
    action_parameter: str = ''

    def procedure_name_for(self, action: Action) -> str:
        return self.procedure_name + action.suffix


@dataclass(frozen=True)
class ProcedureContext:
    """Context rendered by the driver procedure template.

    action_parameter is the driver's bound-parameter name for the literal
    'action' (e.g. '@action'). The bundled templates do not use it; it is
    available to custom procedure templates that dispatch on an action
    parameter.
    """

    procedure_name: str
    structure: StoredProcedureStructure
    action_parameter: str = ''

    def template_variables(self) -> Dict[str, Any]:
        """Top-level template variables, one per field."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


@dataclass(frozen=True)
class GeneratedProcedure:
    """Final procedure text for one action."""

    action: Action
    procedure_name: str
    text: str
