"""
====================================================
SQL utilities package for stored-procedure generation.
====================================================

Pure functions producing SQL text: the metadata query the schema reader
runs and the fragments spliced into generated procedures.

The package follows a clear organization:
    - query_builder.py: Metadata queries and clause builders

Example:
    >>> from sql.query_builder import format_column_type, where_condition_builder
    >>>
    >>> format_column_type('varchar', 50)
    'varchar(50)'
"""

__version__ = "1.0.0"
__all__ = [
    'table_description_sql',
    'format_column_type',
    'where_condition_builder',
]

from .query_builder import (
    format_column_type,
    table_description_sql,
    where_condition_builder,
)
