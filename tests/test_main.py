"""
===============================================
Comprehensive pytest suite for main.py
===============================================

Sections:
---------
1. Unit tests - argument handling and option building
2. CLI tests - exit codes and error handling
3. End-to-end tests - schema rows to written procedures

Available markers:
------------------
unit, integration, edge_case, e2e, smoke

Mocks and helpers:
------------------
- FakeResult / FakeConnection / FakeEngine: stand in for the SQLAlchemy
  engine created by utils.database_utils, returning INFORMATION_SCHEMA rows

How to Execute:
---------------
All tests:          python -m pytest tests/test_main.py -v
By category:        python -m pytest tests/test_main.py -m e2e
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from core.config import ConfigurationError, get_config
from main import (
    StoredProcedureOrchestrator,
    build_generate_option,
    build_parser,
    collect_actions,
    main,
    validate_arguments,
)
from generator.template_renderer import TemplateRenderer
from models.procedure_models import Action, TemplateSettings

ODBC = 'Server=db;Database=shop'

# ====================
# Mock Helper Classes
# ====================

class FakeResult:
    """Mock SQLAlchemy result object."""
    def __init__(self, rows):
        self.rows = rows

    def fetchall(self):
        return list(self.rows)


class FakeConnection:
    """Mock SQLAlchemy connection answering the metadata query."""
    def __init__(self, rows=None, execute_side_effect=None):
        self.rows = rows or []
        self._execute_side_effect = execute_side_effect
        self.executed = []
        self.closed = False

    def execute(self, statement, params=None):
        self.executed.append((str(statement), params))
        if self._execute_side_effect:
            raise self._execute_side_effect
        return FakeResult(self.rows)

    def close(self):
        self.closed = True


class FakeEngine:
    """Mock SQLAlchemy engine."""
    def __init__(self, connection):
        self.connection_obj = connection
        self.disposed = False

    def connect(self):
        return self.connection_obj

    def dispose(self):
        self.disposed = True


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep main() from replacing the test session's logging handlers."""
    with patch('main.setup_logging'):
        yield


@pytest.fixture
def fake_database(users_rows):
    """Patch engine creation; yields the FakeEngine serving the users table."""
    engine = FakeEngine(FakeConnection(users_rows))
    with patch('utils.database_utils.create_engine', return_value=engine) as mock_create_engine:
        engine.create_engine = mock_create_engine
        yield engine


def parse(*argv):
    return build_parser().parse_args(list(argv))

# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_parser_short_and_long_flags():
    args = parse(ODBC, 'mssql', 'users', '-s', '--update', '-p', 'usp_users', '--output-file', 'out/u')

    assert args.connection_string == ODBC
    assert args.driver_name == 'mssql'
    assert args.table_name == 'users'
    assert args.select and args.update
    assert not args.delete and not args.insert
    assert args.procedure_name == 'usp_users'
    assert args.output_file == 'out/u'


@pytest.mark.unit
def test_actions_collected_in_fixed_order():
    args = parse(ODBC, 'mssql', 'users', '-u', '-i', '-d', '-s')
    assert collect_actions(args) == (Action.SELECT, Action.DELETE, Action.INSERT, Action.UPDATE)


@pytest.mark.unit
def test_no_actions_selected():
    assert collect_actions(parse(ODBC, 'mssql', 'users')) == ()


@pytest.mark.unit
def test_default_procedure_name(templates_dir):
    settings = TemplateSettings(folder=templates_dir)
    args = parse(ODBC, 'mssql', 'users', '-s')

    option = build_generate_option(args, settings, TemplateRenderer(templates_dir))

    assert option.procedure_name == 'sp_users'
    assert option.action_parameter == '@action'
    assert option.actions == (Action.SELECT,)


@pytest.mark.unit
def test_procedure_name_override(templates_dir):
    settings = TemplateSettings(folder=templates_dir)
    args = parse(ODBC, 'postgres', 'users', '-d', '-p', 'users_proc')

    option = build_generate_option(args, settings, TemplateRenderer(templates_dir))

    assert option.procedure_name == 'users_proc'
    assert option.action_parameter == 'p_action'


@pytest.mark.unit
@pytest.mark.parametrize('argv, message', [
    (('', 'mssql', 'users'), 'Connection string'),
    ((ODBC, 'mssql', ''), 'Table name'),
    ((ODBC, '', 'users'), 'Driver name'),
    ((ODBC, 'oracle', 'users'), 'oracle'),
])
def test_validate_arguments_rejects(templates_dir, argv, message):
    with pytest.raises(ConfigurationError, match=message):
        validate_arguments(parse(*argv), TemplateSettings(folder=templates_dir))


@pytest.mark.unit
def test_validate_arguments_missing_template_folder(tmp_path):
    settings = TemplateSettings(folder=tmp_path / 'nowhere')
    with pytest.raises(ConfigurationError, match='Template folder'):
        validate_arguments(parse(ODBC, 'mssql', 'users'), settings)

# ===============
# 2. CLI TESTS
# ===============

@pytest.mark.integration
def test_empty_table_name_exits_with_error(fake_database):
    assert main([ODBC, 'mssql', '', '-s']) == 1
    fake_database.create_engine.assert_not_called()


@pytest.mark.integration
def test_empty_connection_string_exits_with_error(fake_database):
    assert main(['', 'mssql', 'users', '-s']) == 1
    fake_database.create_engine.assert_not_called()


@pytest.mark.integration
def test_unknown_driver_exits_with_error(fake_database):
    assert main([ODBC, 'oracle', 'users', '-s']) == 1


@pytest.mark.integration
def test_no_action_is_a_no_op(fake_database, capsys):
    assert main([ODBC, 'mssql', 'users']) == 0
    assert capsys.readouterr().out == ''
    fake_database.create_engine.assert_not_called()


@pytest.mark.integration
def test_query_failure_exits_with_error_and_releases_connection(users_rows):
    error = OperationalError('SELECT', {}, Exception('timeout'))
    engine = FakeEngine(FakeConnection(execute_side_effect=error))

    with patch('utils.database_utils.create_engine', return_value=engine):
        assert main([ODBC, 'mssql', 'users', '-s']) == 1

    assert engine.connection_obj.closed
    assert engine.disposed


@pytest.mark.integration
def test_missing_template_exits_with_error(fake_database, tmp_path):
    folder = tmp_path / 'templates'
    (folder / 'mssql').mkdir(parents=True)
    (folder / 'mssql' / 'parameterConvert.tmpl').write_text('@{{ name }}', encoding='utf-8')

    assert main([ODBC, 'mssql', 'users', '-s', '--templates-dir', str(folder)]) == 1


@pytest.fixture
def fresh_config():
    """Rebuild the cached configuration from the patched environment."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.mark.integration
@pytest.mark.parametrize('variable, value', [
    ('SPROCGEN_OUTPUT_MODE', '999'),
    ('SPROCGEN_LOG_LEVEL', 'LOUD'),
])
def test_invalid_environment_exits_with_error(fake_database, fresh_config, monkeypatch, caplog, variable, value):
    monkeypatch.setenv(variable, value)

    assert main([ODBC, 'mssql', 'users', '-s']) == 1

    errors = [record for record in caplog.records if record.levelname == 'ERROR']
    assert len(errors) == 1
    assert errors[0].getMessage().startswith('❌ ')
    assert value in errors[0].getMessage()
    assert errors[0].exc_info is None
    fake_database.create_engine.assert_not_called()

@pytest.mark.integration
def test_keyboard_interrupt_exit_code():
    with patch('main.StoredProcedureOrchestrator.run', side_effect=KeyboardInterrupt):
        assert main([ODBC, 'mssql', 'users', '-s']) == 130


@pytest.mark.integration
def test_unexpected_error_exit_code():
    with patch('main.StoredProcedureOrchestrator.run', side_effect=RuntimeError('boom')):
        assert main([ODBC, 'mssql', 'users', '-s']) == 1

# =====================
# 3. END-TO-END TESTS
# =====================

@pytest.mark.e2e
def test_select_and_insert_written_to_files(fake_database, tmp_path):
    base = tmp_path / 'sp_users'

    assert main([ODBC, 'mssql', 'users', '-s', '-i', '-o', str(base)]) == 0

    select_sql = (tmp_path / 'sp_users_select.sql').read_text(encoding='utf-8')
    insert_sql = (tmp_path / 'sp_users_insert.sql').read_text(encoding='utf-8')

    assert 'CREATE PROCEDURE sp_users_select' in select_sql
    assert 'WHERE ((id = @id OR @id IS NULL))' in select_sql

    assert 'CREATE PROCEDURE sp_users_insert' in insert_sql
    assert 'INSERT INTO users (name)' in insert_sql
    assert 'VALUES (@name)' in insert_sql
    assert 'WHERE' not in insert_sql
    assert '@id' not in insert_sql

    assert not (tmp_path / 'sp_users_update.sql').exists()
    assert not (tmp_path / 'sp_users_delete.sql').exists()


@pytest.mark.e2e
def test_procedures_printed_to_stdout_in_order(fake_database, capsys):
    assert main([ODBC, 'mssql', 'users', '-i', '-s', '-u', '-d']) == 0

    out = capsys.readouterr().out
    positions = [out.index(f"CREATE PROCEDURE sp_users_{name}") for name in
                 ('select', 'delete', 'insert', 'update')]
    assert positions == sorted(positions)


@pytest.mark.e2e
def test_metadata_query_bound_to_table_name(fake_database):
    assert main([ODBC, 'mssql', 'users', '-s']) == 0

    executed = fake_database.connection_obj.executed
    assert len(executed) == 1
    assert executed[0][1] == {'table_name': 'users'}
    assert fake_database.connection_obj.closed
    assert fake_database.disposed


@pytest.mark.e2e
def test_earlier_files_remain_when_later_action_fails(fake_database, tmp_path):
    folder = tmp_path / 'templates'
    (folder / 'mssql').mkdir(parents=True)
    (folder / 'select.tmpl').write_text('SELECT 1', encoding='utf-8')
    (folder / 'mssql' / 'parameterConvert.tmpl').write_text('@{{ name }}', encoding='utf-8')
    (folder / 'mssql' / 'parameterSection.tmpl').write_text('', encoding='utf-8')
    (folder / 'mssql' / 'procedure.tmpl').write_text('{{ procedure_name }}', encoding='utf-8')
    base = tmp_path / 'out'

    code = main([ODBC, 'mssql', 'users', '-s', '-i', '-o', str(base), '--templates-dir', str(folder)])

    assert code == 1
    assert (tmp_path / 'out_select.sql').read_text(encoding='utf-8') == 'sp_users_select'
    assert not (tmp_path / 'out_insert.sql').exists()


@pytest.mark.smoke
def test_orchestrator_run_returns_written_paths(fake_database, templates_dir, tmp_path):
    settings = TemplateSettings(folder=templates_dir)
    renderer = TemplateRenderer(templates_dir)
    option = build_generate_option(parse(ODBC, 'mssql', 'users', '-d'), settings, renderer)

    paths = StoredProcedureOrchestrator(option, ODBC).run('users', output_file=str(tmp_path / 'p'))

    assert paths == [tmp_path / 'p_delete.sql']
