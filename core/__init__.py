"""
=====================================================
Core infrastructure package for the SP generator.
=====================================================

This package provides centralized configuration management and logging
infrastructure used throughout the generator.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import get_config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Templates in {get_config().templates_dir}")
"""

__version__ = "0.1.0"
__all__ = ['get_logger', 'setup_logging', 'get_config', 'Config', 'ConfigurationError']

from core.config import Config, ConfigurationError, get_config
from core.logger import get_logger, setup_logging
