"""
==========================
Utility Functions Package.
==========================

Reusable helpers for database connectivity.

Modules:
    database_utils: Driver mapping, engine creation and connection scoping
"""

__version__ = "1.0.0"
__all__ = [
    'DatabaseConnectionError',
    'build_connection_url',
    'create_generator_engine',
    'database_session',
    'get_dialect',
    'is_odbc_connection_string',
]

from .database_utils import (
    DatabaseConnectionError,
    build_connection_url,
    create_generator_engine,
    database_session,
    get_dialect,
    is_odbc_connection_string,
)
