"""
==================================================
Schema inspection for the target table.
==================================================

Runs one INFORMATION_SCHEMA query and turns the result into a Table whose
columns carry their SQL type (with length suffix), primary-key flag and
driver-specific parameter name.

Example:
    >>> from generator.schema_reader import read_table_description
    >>>
    >>> with database_session('mssql', conn_str) as conn:
    ...     table = read_table_description(conn, 'users', namer)
    >>> [column.name for column in table.columns]
    ['id', 'name']
"""

import logging
from typing import Callable

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from models.procedure_models import Column, Table
from sql.query_builder import format_column_type, table_description_sql

logger = logging.getLogger(__name__)


class SchemaReadError(Exception):
    """Exception raised when the table description cannot be read."""
    pass


def column_from_row(row, parameter_namer: Callable[[str], str]) -> Column:
    """
    Build a Column from one metadata row.

    Args:
        row: (ColumnName, DataType, MaxLength, IsPrimaryKey) sequence
        parameter_namer: Maps a column name to its bound-parameter name

    Raises:
        SchemaReadError: If the row does not have the expected shape
    """
    try:
        name, type_name, max_length, is_primary = tuple(row)
        sql_type = format_column_type(type_name, max_length)
    except (TypeError, ValueError) as e:
        raise SchemaReadError(f"Unexpected metadata row {row!r}: {e}")

    return Column(
        name=name,
        sql_type=sql_type,
        is_primary_key=bool(is_primary),
        parameter_name=parameter_namer(name),
    )


def read_table_description(
    connection: Connection,
    table_name: str,
    parameter_namer: Callable[[str], str]
) -> Table:
    """
    Read the column description of a table.

    Columns keep the order the catalog returns them in.

    Args:
        connection: Open SQLAlchemy connection
        table_name: Table to inspect
        parameter_namer: Maps a column name to its bound-parameter name

    Returns:
        Table with all columns

    Raises:
        SchemaReadError: If the query or reading a row fails
    """
    logger.info(f"Reading schema of table '{table_name}'")

    try:
        result = connection.execute(text(table_description_sql()), {'table_name': table_name})
        rows = result.fetchall()
    except SQLAlchemyError as e:
        logger.error(f"Metadata query failed: {e}")
        raise SchemaReadError(f"Failed to read description of table '{table_name}': {e}")

    table = Table(
        name=table_name,
        columns=tuple(column_from_row(row, parameter_namer) for row in rows)
    )

    if not table.columns:
        logger.warning(f"⚠️  Table '{table_name}' has no columns (does it exist?)")
    else:
        logger.info(
            f"Found {len(table.columns)} columns "
            f"({len(table.primary_key_columns)} primary key)"
        )

    return table
