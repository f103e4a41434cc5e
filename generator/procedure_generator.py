"""
==================================================
Stored-procedure generation pipeline.
==================================================

Turns a table description into one procedure per requested action:

    1. Filter the table's columns for the action
    2. Render the action's query template
    3. Build the WHERE clause over the key columns
    4. Render the driver's parameter section
    5. Assemble the StoredProcedureStructure
    6. Render the driver's procedure template

UPDATE is the exception to step 1 for the query body and parameter
section: both receive the full table, since an update needs the key
columns as parameters and the update template itself leaves them out of
the SET list.

Example:
    >>> from generator.procedure_generator import ProcedureGenerator
    >>>
    >>> generator = ProcedureGenerator(renderer, option)
    >>> for procedure in generator.generate(table):
    ...     print(procedure.procedure_name)
    sp_users_select
    sp_users_insert
"""

import logging
from typing import Iterator, List

from generator.column_filter import filter_table_by_action
from generator.procedure_assembler import create_stored_procedure_for_action
from generator.template_renderer import TemplateError, TemplateRenderer
from models.procedure_models import (
    Action,
    GenerateOption,
    GeneratedProcedure,
    ProcedureContext,
    StoredProcedureStructure,
    Table,
)
from sql.query_builder import where_condition_builder

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Exception raised when a procedure cannot be generated."""
    pass


class ProcedureGenerator:
    """
    Renders stored procedures for the actions of a GenerateOption.

    Attributes:
        renderer: Template renderer rooted at the template folder
        option: Run-level generation settings
    """

    def __init__(self, renderer: TemplateRenderer, option: GenerateOption):
        self.renderer = renderer
        self.option = option

    def build_structure(self, action: Action, table: Table) -> StoredProcedureStructure:
        """
        Render the query, parameter section and WHERE clause for one action.

        Raises:
            TemplateError: If a template is missing, invalid or fails to render
        """
        settings = self.option.template
        model = table if action is Action.UPDATE else filter_table_by_action(action, table)

        query = self.renderer.render_file(settings.template_for(action), table=model)
        where_condition = where_condition_builder(model.columns)
        parameter_section = self.renderer.render_file(
            settings.parameter_section_template(self.option.driver),
            table=model
        )

        return create_stored_procedure_for_action(
            action,
            query,
            where_condition,
            parameter_section=parameter_section
        )

    def generate_sql(self, table: Table) -> List[StoredProcedureStructure]:
        """Build the structures for all requested actions, in request order."""
        return [self.build_structure(action, table) for action in self.option.actions]

    def generate_file(self, structure: StoredProcedureStructure) -> str:
        """
        Render the final procedure text for a structure.

        Raises:
            TemplateError: If the procedure template fails
        """
        context = ProcedureContext(
            procedure_name=self.option.procedure_name_for(structure.action),
            structure=structure,
            action_parameter=self.option.action_parameter,
        )
        return self.renderer.render_file(
            self.option.template.procedure_template(self.option.driver),
            **context.template_variables()
        )

    def generate_procedure(self, action: Action, table: Table) -> GeneratedProcedure:
        """
        Generate the complete procedure text for one action.

        Raises:
            GenerationError: If any template step fails
        """
        procedure_name = self.option.procedure_name_for(action)
        try:
            structure = self.build_structure(action, table)
            text = self.generate_file(structure)
        except TemplateError as e:
            raise GenerationError(f"Failed to generate {procedure_name}: {e}")

        logger.info(f"✅ Generated {procedure_name}")
        return GeneratedProcedure(action=action, procedure_name=procedure_name, text=text)

    def generate(self, table: Table) -> Iterator[GeneratedProcedure]:
        """
        Yield the generated procedure for each requested action in order.

        Procedures are produced lazily so a caller writing them out keeps
        the earlier outputs when a later action fails.
        """
        for action in self.option.actions:
            yield self.generate_procedure(action, table)
