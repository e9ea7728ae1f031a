"""Configuration management module."""

from .constants import DEFAULTS, ORACLE, APP
from .argument_parser import parse_arguments
from .generator_config import GeneratorConfig
from .config_manager import GeneratorConfigManager, get_config_manager, get_generator_config

__all__ = [
    'DEFAULTS',
    'ORACLE',
    'APP',
    'parse_arguments',
    'GeneratorConfig',
    'GeneratorConfigManager',
    'get_config_manager',
    'get_generator_config',
]
