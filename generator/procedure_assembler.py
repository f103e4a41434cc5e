"""Assembly of rendered sections into a StoredProcedureStructure."""

from models.procedure_models import Action, StoredProcedureStructure


def create_stored_procedure_for_action(
    action: Action,
    query: str,
    where_condition: str,
    parameter_section: str = ''
) -> StoredProcedureStructure:
    """
    Combine the rendered query and WHERE clause for one action.

    INSERT procedures never carry a WHERE clause: whatever was computed is
    dropped. Other actions keep the given clause unchanged.

    Example:
        >>> create_stored_procedure_for_action(Action.INSERT, 'INSERT ...', 'WHERE (...)').where_condition
        ''
    """
    if not action.has_where_condition:
        where_condition = ''

    return StoredProcedureStructure(
        action=action,
        parameter_section=parameter_section,
        query=query,
        where_condition=where_condition,
    )
