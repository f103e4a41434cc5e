"""
============================
SQL Query Builder Utilities.
============================

Low-level building blocks for the SQL text the generator runs or emits.

Metadata Query Functions:
- table_description_sql: Column catalog query with primary-key membership

Builders:
- format_column_type: Append the length suffix to a base type name
- where_condition_builder: Nullable-parameter WHERE clause over key columns

Usage:
    from sql.query_builder import table_description_sql, where_condition_builder

    rows = conn.execute(text(table_description_sql()), {'table_name': 'users'})
    where = where_condition_builder(table.primary_key_columns)
"""

from typing import Iterable, Optional

from models.procedure_models import Column

# CHARACTER_MAXIMUM_LENGTH value SQL Server reports for (max) types
UNLIMITED_LENGTH = -1


def table_description_sql() -> str:
    """
    Generate the column metadata query for one table.

    The query reads INFORMATION_SCHEMA only, so it runs on any engine that
    exposes the ANSI catalog views. The table name is bound as
    ``:table_name``.

    Returns:
        SQL query returning ColumnName, DataType, MaxLength, IsPrimaryKey
        per column in catalog order
    """
    return """SELECT col.COLUMN_NAME AS ColumnName,
    col.DATA_TYPE AS DataType,
    col.CHARACTER_MAXIMUM_LENGTH AS MaxLength,
    CASE WHEN con.CONSTRAINT_NAME IS NULL THEN 0 ELSE 1 END AS IsPrimaryKey
FROM INFORMATION_SCHEMA.COLUMNS col
LEFT JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE ke
    ON col.COLUMN_NAME = ke.COLUMN_NAME
    AND col.TABLE_SCHEMA = ke.CONSTRAINT_SCHEMA
    AND col.TABLE_NAME = ke.TABLE_NAME
LEFT JOIN INFORMATION_SCHEMA.TABLE_CONSTRAINTS con
    ON con.TABLE_NAME = ke.TABLE_NAME
    AND con.CONSTRAINT_CATALOG = ke.CONSTRAINT_CATALOG
    AND con.CONSTRAINT_SCHEMA = ke.CONSTRAINT_SCHEMA
    AND con.CONSTRAINT_NAME = ke.CONSTRAINT_NAME
    AND con.CONSTRAINT_TYPE = 'PRIMARY KEY'
WHERE col.TABLE_NAME = :table_name"""


def format_column_type(type_name: str, max_length: Optional[int] = None) -> str:
    """
    Append the character length to a type name.

    Args:
        type_name: Base type, e.g. 'varchar'
        max_length: CHARACTER_MAXIMUM_LENGTH value, or None when not applicable

    Returns:
        'varchar(50)', 'nvarchar(max)' for -1, or the bare type name

    Example:
        >>> format_column_type('varchar', 50)
        'varchar(50)'
        >>> format_column_type('nvarchar', -1)
        'nvarchar(max)'
        >>> format_column_type('int')
        'int'
    """
    if max_length is None:
        return type_name

    length = int(max_length)
    if length == UNLIMITED_LENGTH:
        return f"{type_name}(max)"
    return f"{type_name}({length})"


def where_condition_builder(columns: Iterable[Column]) -> str:
    """
    Build the WHERE clause matching key columns against their parameters.

    Each key column contributes ``(col = @param OR @param IS NULL)`` so that
    a NULL parameter disables that filter. Non-key columns are ignored.

    Args:
        columns: Table columns; only primary-key columns are used

    Returns:
        WHERE clause, or an empty string when there are no key columns

    Example:
        >>> where_condition_builder([Column('id', 'int', True, '@id')])
        'WHERE ((id = @id OR @id IS NULL))'
    """
    key_columns = [column for column in columns if column.is_primary_key]
    if not key_columns:
        return ""

    last = len(key_columns) - 1
    parts = ["WHERE ("]
    for index, column in enumerate(key_columns):
        parts.append(
            f"({column.name} = {column.parameter_name} OR {column.parameter_name} IS NULL)"
        )
        if index != last:
            parts.append(" AND ")
    parts.append(")")

    return "".join(parts)
