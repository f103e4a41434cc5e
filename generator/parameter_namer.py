"""
Bound-parameter naming.

Each driver folder holds a ``parameterConvert.tmpl`` whose only job is to
turn a column name into that driver's parameter syntax, for example
``@{{ name }}`` for SQL Server.
"""

import logging

from generator.template_renderer import TemplateRenderer
from models.procedure_models import TemplateSettings

logger = logging.getLogger(__name__)


def generate_parameter_name(
    renderer: TemplateRenderer,
    settings: TemplateSettings,
    driver: str,
    column_name: str
) -> str:
    """
    Render the driver's parameter template for one column name.

    The template file is read again on every call.

    Args:
        renderer: Template renderer rooted at the template folder
        settings: Template settings
        driver: Driver name selecting the template folder
        column_name: Raw column name

    Returns:
        Parameter name with surrounding whitespace removed

    Raises:
        TemplateError: If the template is missing, invalid or fails to render
    """
    template_name = settings.parameter_convert_template(driver)
    return renderer.render_file(template_name, name=column_name).strip()


class ParameterNamer:
    """Callable binding a renderer, settings and driver for the schema reader."""

    def __init__(self, renderer: TemplateRenderer, settings: TemplateSettings, driver: str):
        self.renderer = renderer
        self.settings = settings
        self.driver = driver

    def __call__(self, column_name: str) -> str:
        name = generate_parameter_name(self.renderer, self.settings, self.driver, column_name)
        logger.debug(f"Parameter for column {column_name!r}: {name!r}")
        return name
