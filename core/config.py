"""
================================================
Configuration management for the SP generator.
================================================

Loads run-independent configuration from environment variables (.env file)
and provides a centralized Config instance for application-wide access.
get_config() builds the instance on first call; importing this module
never raises ConfigurationError.

Per-run settings (driver, table, actions) are not stored here: they are
parsed from the command line into an immutable GenerateOption value
(see models.procedure_models).

The configuration system ensures:
- Single source of truth for template location and output settings
- Type conversion and validation
- Environment-specific overrides through .env

Example:
    >>> from core.config import get_config
    >>>
    >>> config = get_config()
    >>>
    >>> # Template root directory
    >>> print(config.templates_dir)
    >>>
    >>> # File mode applied to generated .sql files
    >>> print(oct(config.output_file_mode))
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


class ConfigurationError(Exception):
    """Exception raised for invalid or missing configuration values."""
    pass


def parse_file_mode(value: str) -> int:
    """Parse an octal permission string such as '755' or '0o644'.

    Args:
        value: Octal string, with or without the 0o prefix

    Returns:
        Integer file mode

    Raises:
        ConfigurationError: If the value is not a valid octal permission
    """
    text = value.strip().lower()
    if text.startswith('0o'):
        text = text[2:]
    try:
        mode = int(text, 8)
    except ValueError:
        raise ConfigurationError(f"Invalid output file mode: {value!r}")
    if not 0 <= mode <= 0o777:
        raise ConfigurationError(f"Output file mode out of range: {value!r}")
    return mode


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def parse_log_level(value: str) -> str:
    """Normalize a logging level name such as 'info' to 'INFO'.

    Raises:
        ConfigurationError: If the name is not a standard logging level
    """
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid log level: {value!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return level


@dataclass(frozen=True)
class GeneratorConfig:
    """Generator configuration settings.

    Attributes:
        templates_dir: Root folder holding the action and driver templates
        output_file_mode: Permission bits applied to written .sql files
        output_encoding: Text encoding of written .sql files
        log_level: Default logging level name
    """

    templates_dir: Path
    output_file_mode: int
    output_encoding: str
    log_level: str


@dataclass(frozen=True)
class ProjectConfig:
    """Project-wide path settings.

    Attributes:
        project_root: Absolute path to project root directory
        default_templates_dir: Bundled templates directory
        logs_dir: Path to logs directory
    """

    project_root: Path
    default_templates_dir: Path
    logs_dir: Path


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        generator: GeneratorConfig instance with template and output settings
        project: ProjectConfig instance with project directory paths

    Example:
        >>> config = Config()
        >>> config.templates_dir
        PosixPath('.../templates')
    """

    def __init__(self, environ: Optional[dict] = None):
        """Initialize configuration from environment variables.

        Args:
            environ: Optional mapping used instead of os.environ (tests)

        Raises:
            ConfigurationError: If an environment value cannot be parsed
        """
        env = os.environ if environ is None else environ

        project_root = Path(__file__).parent.parent
        self.project = ProjectConfig(
            project_root=project_root,
            default_templates_dir=project_root / 'templates',
            logs_dir=project_root / 'logs'
        )

        templates_dir = env.get('SPROCGEN_TEMPLATES_DIR')
        self.generator = GeneratorConfig(
            templates_dir=Path(templates_dir) if templates_dir else self.project.default_templates_dir,
            output_file_mode=parse_file_mode(env.get('SPROCGEN_OUTPUT_MODE', '755')),
            output_encoding=env.get('SPROCGEN_OUTPUT_ENCODING', 'utf-8'),
            log_level=parse_log_level(env.get('SPROCGEN_LOG_LEVEL', 'INFO'))
        )

    @property
    def templates_dir(self) -> Path:
        """Get the template root directory."""
        return self.generator.templates_dir

    @property
    def output_file_mode(self) -> int:
        """Get the permission bits for generated files."""
        return self.generator.output_file_mode

    @property
    def output_encoding(self) -> str:
        """Get the encoding for generated files."""
        return self.generator.output_encoding

    @property
    def log_level(self) -> str:
        """Get the default logging level."""
        return self.generator.log_level


@lru_cache(maxsize=None)
def get_config() -> Config:
    """Return the process-wide configuration, built on first call.

    Raises:
        ConfigurationError: If an environment value cannot be parsed
    """
    return Config()
