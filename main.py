"""
=========================================================
Command-line entry point for the stored-procedure generator.
=========================================================

Inspects one table through INFORMATION_SCHEMA and writes select, insert,
update and delete stored procedures rendered from the driver templates.

Flow:
    1. Parse and validate arguments into an immutable GenerateOption
    2. Open the database connection (released on every exit path)
    3. Read the table description once
    4. For each requested action: render the procedure and write it out

Key Design Principles:
    - core.logger for console/file logging (stderr; stdout carries SQL)
    - Pipeline modules raise their own exceptions; main() is the only
      place that turns an error into an exit code

Usage:
    # Print select and insert procedures for dbo.users
    python main.py "Driver={ODBC Driver 18 for SQL Server};Server=db;Database=shop" mssql users -s -i

    # Write sp_users_*.sql files for all four actions
    python main.py "user:secret@localhost/shop" postgres users -s -u -d -i -o out/sp_users

Example:
    >>> from main import StoredProcedureOrchestrator
    >>>
    >>> orchestrator = StoredProcedureOrchestrator(option, connection_string)
    >>> orchestrator.run(table_name='users', output_file='out/users')
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from core.config import Config, ConfigurationError, get_config
from core.logger import get_logger, setup_logging
from generator.output_writer import OutputWriteError, write_procedure
from generator.parameter_namer import ParameterNamer
from generator.procedure_generator import GenerationError, ProcedureGenerator
from generator.schema_reader import SchemaReadError, read_table_description
from generator.template_renderer import TemplateError, TemplateRenderer
from models.procedure_models import Action, GenerateOption, TemplateSettings
from utils.database_utils import DatabaseConnectionError, database_session

logger = get_logger(__name__)

# Order in which selected actions are generated, independent of flag order
ACTION_ORDER = (Action.SELECT, Action.DELETE, Action.INSERT, Action.UPDATE)

GENERATION_ERRORS = (
    ConfigurationError,
    DatabaseConnectionError,
    SchemaReadError,
    TemplateError,
    GenerationError,
    OutputWriteError,
)


class StoredProcedureOrchestrator:
    """
    Runs one generation: schema read, rendering and output.

    Attributes:
        option: Run-level generation settings
        connection_string: Connection string as given on the command line
        renderer: Template renderer rooted at the option's template folder
        generator: ProcedureGenerator for the option
        config: Output file mode and encoding source
    """

    def __init__(
        self,
        option: GenerateOption,
        connection_string: str,
        renderer: Optional[TemplateRenderer] = None,
        config: Optional[Config] = None
    ):
        self.option = option
        self.connection_string = connection_string
        self.renderer = renderer or TemplateRenderer(option.template.folder)
        self.generator = ProcedureGenerator(self.renderer, option)
        self.config = config or get_config()

    def run(self, table_name: str, output_file: Optional[str] = None) -> List[Optional[Path]]:
        """
        Generate and write the procedures for a table.

        Each procedure is written as soon as it is rendered, so files for
        earlier actions remain when a later one fails.

        Args:
            table_name: Table to inspect
            output_file: Output base path; None prints to stdout

        Returns:
            Written file paths (None entries for procedures printed to stdout)

        Raises:
            DatabaseConnectionError, SchemaReadError, TemplateError,
            GenerationError, OutputWriteError
        """
        namer = ParameterNamer(self.renderer, self.option.template, self.option.driver)

        with database_session(self.option.driver, self.connection_string) as connection:
            table = read_table_description(connection, table_name, namer)

        written = []
        for procedure in self.generator.generate(table):
            written.append(write_procedure(
                procedure.text,
                procedure.action,
                output_file=output_file,
                mode=self.config.output_file_mode,
                encoding=self.config.output_encoding
            ))

        return written


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog='sprocgen',
        description="Generate stored procedures from a table's schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Select and insert procedures on stdout
  sprocgen "Driver={ODBC Driver 18 for SQL Server};Server=db;Database=shop" mssql users -s -i

  # All procedures written to out/sp_users_<action>.sql
  sprocgen "user:secret@localhost/shop" postgres users -s -u -d -i -o out/sp_users
        """
    )

    parser.add_argument('connection_string', help='Connection string')
    parser.add_argument('driver_name', help='Driver name (mssql, mysql, postgres)')
    parser.add_argument('table_name', help='Table name')

    parser.add_argument('-s', '--select', action='store_true',
                        help='Add select action into stored procedure')
    parser.add_argument('-u', '--update', action='store_true',
                        help='Add update action into stored procedure')
    parser.add_argument('-d', '--delete', action='store_true',
                        help='Add delete action into stored procedure')
    parser.add_argument('-i', '--insert', action='store_true',
                        help='Add insert action into stored procedure')
    parser.add_argument('-p', '--procedure-name', default='',
                        help='Stored procedure name (default: sp_<table>)')
    parser.add_argument('-o', '--output-file', default='',
                        help='Output file base path; one <path>_<action>.sql per action')

    parser.add_argument('--templates-dir', default=None,
                        help='Template folder (default: $SPROCGEN_TEMPLATES_DIR or the bundled templates/)')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose logging (DEBUG level)')
    parser.add_argument('--log-file', default=None,
                        help='Also write log output to this file')

    return parser


def collect_actions(args: argparse.Namespace) -> Tuple[Action, ...]:
    """Return the selected actions in generation order."""
    return tuple(action for action in ACTION_ORDER if getattr(args, action.value))


def validate_arguments(args: argparse.Namespace, settings: TemplateSettings) -> None:
    """
    Check the arguments before any database work.

    Raises:
        ConfigurationError: If the connection string, table name or driver
            is empty, or the driver has no template folder
    """
    if not args.connection_string.strip():
        raise ConfigurationError("Connection string is not specified")

    if not args.table_name.strip():
        raise ConfigurationError("Table name is not specified")

    if not args.driver_name.strip():
        raise ConfigurationError("Driver name is not specified")

    if not settings.folder.is_dir():
        raise ConfigurationError(f"Template folder not found: {settings.folder}")

    if not settings.driver_folder(args.driver_name).is_dir():
        available = ', '.join(settings.available_drivers()) or 'none'
        raise ConfigurationError(
            f"No templates for driver {args.driver_name!r} (available: {available})"
        )


def build_generate_option(
    args: argparse.Namespace,
    settings: TemplateSettings,
    renderer: TemplateRenderer
) -> GenerateOption:
    """
    Build the immutable run settings from parsed arguments.

    Raises:
        TemplateError: If the driver's parameter template cannot be rendered
    """
    procedure_name = args.procedure_name or f"sp_{args.table_name}"
    action_parameter = ParameterNamer(renderer, settings, args.driver_name)('action')

    return GenerateOption(
        driver=args.driver_name,
        procedure_name=procedure_name,
        actions=collect_actions(args),
        template=settings,
        action_parameter=action_parameter
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line interface for the generator.

    Exit Codes:
        0: Success
        1: Error
        130: User interrupt (Ctrl+C)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
        setup_logging(
            log_level='DEBUG' if args.verbose else config.log_level,
            log_file=args.log_file,
            log_dir=str(config.project.logs_dir) if args.log_file else None,
            use_colors=sys.stderr.isatty()
        )

        settings = TemplateSettings(folder=Path(args.templates_dir) if args.templates_dir else config.templates_dir)
        validate_arguments(args, settings)

        renderer = TemplateRenderer(settings.folder)
        option = build_generate_option(args, settings, renderer)

        if not option.actions:
            logger.warning("⚠️  No action selected. Use -s, -u, -d or -i.")
            return 0

        logger.info(
            f"Generating {', '.join(action.value for action in option.actions)} "
            f"procedures for '{args.table_name}' ({option.driver})"
        )

        orchestrator = StoredProcedureOrchestrator(
            option, args.connection_string, renderer=renderer, config=config
        )
        orchestrator.run(args.table_name, output_file=args.output_file or None)

        logger.info("🎉 Generation completed")
        return 0

    except GENERATION_ERRORS as e:
        logger.error(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"❌ Unexpected error: {e}", exc_info=True)
        return 1


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    cli()
