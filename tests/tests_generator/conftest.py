"""
Shared fixtures for generator tests.

Key fixtures:
- write_templates: writes a throwaway template tree under tmp_path.
- renderer: TemplateRenderer over the bundled templates.
- option_factory: GenerateOption factory over the bundled templates.
"""

import pytest


@pytest.fixture
def write_templates(tmp_path):
    """
    Factory writing template files under tmp_path/'templates'.

    Takes a mapping of relative path -> content and returns the folder.
    """
    def factory(files):
        folder = tmp_path / 'templates'
        for relative, content in files.items():
            path = folder / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        return folder

    return factory


@pytest.fixture
def renderer(templates_dir):
    from generator.template_renderer import TemplateRenderer

    return TemplateRenderer(templates_dir)


@pytest.fixture
def option_factory(templates_dir):
    """Factory for GenerateOption values over the bundled templates."""
    from models.procedure_models import Action, GenerateOption, TemplateSettings

    def factory(actions=(Action.SELECT,), driver='mssql', procedure_name='sp_users', folder=None):
        return GenerateOption(
            driver=driver,
            procedure_name=procedure_name,
            actions=tuple(actions),
            template=TemplateSettings(folder=folder or templates_dir),
            action_parameter='@action' if driver == 'mssql' else 'p_action'
        )

    return factory
