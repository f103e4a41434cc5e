"""Per-action column selection."""

from typing import Callable, Iterable, Tuple

from models.procedure_models import Action, Column, Table


def filter_columns(columns: Iterable[Column], predicate: Callable[[Column], bool]) -> Tuple[Column, ...]:
    """Return the columns matching predicate, in their original order."""
    return tuple(column for column in columns if predicate(column))


def filter_column_by_action(action: Action, columns: Iterable[Column]) -> Tuple[Column, ...]:
    """
    Select the columns an action's statement works on.

    INSERT and UPDATE write the non-key columns, DELETE matches on the key
    columns only and SELECT returns every column.
    """
    if action in (Action.INSERT, Action.UPDATE):
        return filter_columns(columns, lambda column: not column.is_primary_key)
    if action is Action.DELETE:
        return filter_columns(columns, lambda column: column.is_primary_key)
    return tuple(columns)


def filter_table_by_action(action: Action, table: Table) -> Table:
    """Return a copy of table holding only the columns relevant to action."""
    return table.with_columns(filter_column_by_action(action, table.columns))
