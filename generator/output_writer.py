"""
Output of generated procedures.

With an output base path each procedure goes to ``<base><suffix>.sql``
(for example ``out/users_select.sql``); without one it is printed to
stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from models.procedure_models import Action

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o755


class OutputWriteError(Exception):
    """Exception raised when a generated procedure cannot be written."""
    pass


def output_path(base: str, action: Action) -> Path:
    """Return the file path for an action's procedure: '<base><suffix>.sql'."""
    return Path(f"{base}{action.suffix}.sql")


def write_procedure(
    text: str,
    action: Action,
    output_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
    mode: int = DEFAULT_FILE_MODE,
    encoding: str = 'utf-8'
) -> Optional[Path]:
    """
    Write one generated procedure.

    Args:
        text: Procedure text
        action: Action the procedure implements (selects the file suffix)
        output_file: Output base path; None prints to stream instead
        stream: Text stream for printing (defaults to sys.stdout)
        mode: Permission bits applied to the written file
        encoding: File encoding

    Returns:
        Path of the written file, or None when printed

    Raises:
        OutputWriteError: If the file cannot be written
    """
    if not output_file:
        print(text, file=stream or sys.stdout)
        return None

    path = output_path(output_file, action)
    try:
        path.write_text(text, encoding=encoding)
        path.chmod(mode)
    except OSError as e:
        logger.error(f"❌ Cannot write {path}: {e}")
        raise OutputWriteError(f"Failed to write {path}: {e}")

    logger.info(f"📄 Wrote {path}")
    return path
