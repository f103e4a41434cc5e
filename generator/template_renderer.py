"""
==================================================
Template rendering for generated SQL.
==================================================

Loads action and driver templates from the template folder and renders
them with typed context objects. Templates are Jinja2 files; besides the
standard Jinja2 features they can call one helper, ``minus(a, b)``, for
index arithmetic such as deciding whether to emit a trailing separator.

Template contexts:
    query / parameter section templates: ``table`` (models.Table)
    parameter convert template: ``name`` (column name)
    procedure template: ``procedure_name``, ``structure``, ``action_parameter``
        (``action_parameter`` is unused by the bundled templates and exists
        for custom ones)

Templates are read from disk on every render; nothing is cached.

Example:
    >>> from generator.template_renderer import TemplateRenderer
    >>>
    >>> renderer = TemplateRenderer(Path('templates'))
    >>> renderer.render_file('select.tmpl', table=table)
"""

import logging
from pathlib import Path
from typing import Any

import jinja2

logger = logging.getLogger(__name__)


class TemplateError(Exception):
    """Base exception for template loading and rendering failures."""
    pass


class TemplateLoadError(TemplateError):
    """Raised when a template file is missing or unreadable."""
    pass


class TemplateSyntaxError(TemplateError):
    """Raised when a template cannot be parsed."""
    pass


class TemplateRenderError(TemplateError):
    """Raised when a parsed template fails while rendering."""
    pass


def minus(a: int, b: int) -> int:
    """Template helper: a - b."""
    return a - b


class TemplateRenderer:
    """
    Jinja2-backed renderer rooted at a template folder.

    Attributes:
        folder: Template root directory
        environment: Jinja2 environment loading templates from folder
    """

    def __init__(self, folder: Path):
        self.folder = Path(folder)
        self.environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.folder), encoding='utf-8'),
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            cache_size=0,
        )
        self.environment.globals['minus'] = minus

    def load(self, template_name: str) -> jinja2.Template:
        """
        Read and parse a template file.

        Args:
            template_name: Path relative to the template folder, '/' separated

        Returns:
            Parsed Jinja2 template

        Raises:
            TemplateLoadError: If the file does not exist or cannot be read
            TemplateSyntaxError: If the file is not a valid template
        """
        try:
            return self.environment.get_template(template_name)
        except jinja2.TemplateNotFound:
            raise TemplateLoadError(
                f"Template not found: {self.folder / template_name}"
            )
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                f"Invalid template {self.folder / template_name} (line {e.lineno}): {e.message}"
            )
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(
                f"Cannot read template {self.folder / template_name}: {e}"
            )

    def render_file(self, template_name: str, **context: Any) -> str:
        """
        Render a template file with the given context.

        Raises:
            TemplateLoadError: If the file does not exist or cannot be read
            TemplateSyntaxError: If the file is not a valid template
            TemplateRenderError: If rendering fails (e.g. unknown attribute)
        """
        template = self.load(template_name)
        logger.debug(f"Rendering template {template_name}")
        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateRenderError(f"Failed to render {template_name}: {e}")
