"""
Shared pytest configuration and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path to enable importing project modules
# This allows tests to import from 'core', 'generator', 'sql', etc. without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests - isolated function-level tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interactions")
    config.addinivalue_line("markers", "smoke: Smoke tests - basic functionality checks")
    config.addinivalue_line("markers", "edge_case: Edge case tests - boundary conditions")
    config.addinivalue_line("markers", "system: System tests - full system behavior tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - complete workflow tests")


@pytest.fixture
def templates_dir():
    """Bundled template folder."""
    return project_root / 'templates'


@pytest.fixture
def users_columns():
    """Columns of the sample 'users' table: id (PK, int), name (varchar(50))."""
    from models.procedure_models import Column

    return (
        Column(name='id', sql_type='int', is_primary_key=True, parameter_name='@id'),
        Column(name='name', sql_type='varchar(50)', is_primary_key=False, parameter_name='@name'),
    )


@pytest.fixture
def users_table(users_columns):
    """Sample 'users' table."""
    from models.procedure_models import Table

    return Table(name='users', columns=users_columns)


@pytest.fixture
def users_rows():
    """INFORMATION_SCHEMA rows describing the sample 'users' table."""
    return [
        ('id', 'int', None, 1),
        ('name', 'varchar', 50, 0),
    ]
