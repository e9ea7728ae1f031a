"""Configuration manager for restsuite."""

import dataclasses
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from restsuite.base_interfaces import ConfigurationError
from restsuite.config.constants import DEFAULTS
from restsuite.config.generator_config import GeneratorConfig
from restsuite.testcases.data_models import ValidationResult
from restsuite.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_SECTION = 'restsuite'


class GeneratorConfigManager:
    """Manages configuration for test suite generation."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default.
        """
        self.config_path = Path(config_path) if config_path else Path(DEFAULTS.CONFIG_FILE)
        self._config_cache: Optional[GeneratorConfig] = None
        self._raw_config: Optional[Dict[str, Any]] = None

    def load_config(self, reload: bool = False) -> GeneratorConfig:
        """Load generator configuration from file.

        Args:
            reload: Force reload from file even if cached

        Returns:
            GeneratorConfig instance

        Raises:
            ConfigurationError: If the file cannot be parsed or the
                configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        logger.info(f"Loading configuration from {self.config_path}")

        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}. Using default configuration.")
            self._config_cache = GeneratorConfig.get_default_config()
            return self._config_cache

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise ConfigurationError(f"Failed to parse {self.config_path}: {e}") from e

        section = self._raw_config.get(CONFIG_SECTION, {})
        if not section:
            logger.warning(f"No {CONFIG_SECTION} section found in config. Using default configuration.")
            self._config_cache = GeneratorConfig.get_default_config()
            return self._config_cache

        config = self._parse_config(section)
        self._check(config)

        self._config_cache = config
        logger.info("Configuration loaded successfully")
        return self._config_cache

    @staticmethod
    def _check(config: GeneratorConfig) -> None:
        validation = config.validate()
        if not validation.is_valid:
            error_msg = f"Invalid configuration: {'; '.join(validation.errors)}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        for warning in validation.warnings:
            logger.warning(f"Configuration warning: {warning}")

    def _parse_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Parse the nested configuration sections into a GeneratorConfig.

        Args:
            config_dict: Raw ``restsuite`` section

        Returns:
            GeneratorConfig instance
        """
        defaults = GeneratorConfig()

        gen_config = config_dict.get('generation') or {}
        oracle_config = config_dict.get('oracle') or {}
        values_config = config_dict.get('values') or {}
        auth_config = config_dict.get('authentication') or {}
        exec_config = config_dict.get('execution') or {}
        search_config = config_dict.get('search') or {}
        output_config = config_dict.get('output') or {}
        logging_config = config_dict.get('logging') or {}

        return GeneratorConfig(
            # Generation
            strategy=gen_config.get('strategy', defaults.strategy),
            experiment_name=gen_config.get('experiment_name', defaults.experiment_name),
            number_of_tests=gen_config.get('number_of_tests', defaults.number_of_tests),
            faulty_ratio=gen_config.get('faulty_ratio', defaults.faulty_ratio),
            max_attempts_per_candidate=gen_config.get('max_attempts_per_candidate',
                                                      defaults.max_attempts_per_candidate),
            random_seed=gen_config.get('random_seed'),

            # External oracle
            oracle_command=self._substitute_env_vars(oracle_config.get('command')),
            oracle_command_windows=self._substitute_env_vars(oracle_config.get('command_windows')),
            resources_dir=oracle_config.get('resources_dir', defaults.resources_dir),
            query_strategy=oracle_config.get('query_strategy', defaults.query_strategy),
            number_of_candidates=oracle_config.get('number_of_candidates', defaults.number_of_candidates),
            max_rounds=oracle_config.get('max_rounds'),
            oracle_timeout=oracle_config.get('timeout'),

            # Parameter values
            data_dir=values_config.get('data_dir', defaults.data_dir),
            use_stored_values=values_config.get('use_stored_values', defaults.use_stored_values),
            stored_value_probability=values_config.get('stored_value_probability',
                                                       defaults.stored_value_probability),

            # Authentication
            auth_headers=self._substitute_mapping(auth_config.get('headers') or {}),
            auth_query_parameters=self._substitute_mapping(auth_config.get('query_parameters') or {}),

            # Execution
            base_url=exec_config.get('base_url'),
            request_timeout=exec_config.get('request_timeout', defaults.request_timeout),
            max_workers=exec_config.get('max_workers', defaults.max_workers),

            # Search-based generation
            suite_size=search_config.get('suite_size', defaults.suite_size),
            population_size=search_config.get('population_size', defaults.population_size),
            generations=search_config.get('generations', defaults.generations),
            mutation_probability=search_config.get('mutation_probability', defaults.mutation_probability),
            tournament_size=search_config.get('tournament_size', defaults.tournament_size),

            # Output
            output_file=output_config.get('file', defaults.output_file),
            log_level=logging_config.get('level', defaults.log_level),
            log_to_file=logging_config.get('to_file', defaults.log_to_file),
            log_dir=logging_config.get('dir', defaults.log_dir),
        )

    def _substitute_env_vars(self, value: Optional[str]) -> Optional[str]:
        """Substitute a ``${VAR}`` reference with the environment value.

        Args:
            value: Configuration value that may reference an environment variable

        Returns:
            Value with the environment variable substituted, or None if not found
        """
        if not value:
            return None

        value = str(value)
        if value.startswith('${') and value.endswith('}'):
            env_var = value[2:-1]
            env_value = os.getenv(env_var)
            if env_value is None:
                logger.warning(f"Environment variable {env_var} not found")
            return env_value

        return value

    def _substitute_mapping(self, mapping: Dict[str, Any]) -> Dict[str, str]:
        substituted = {}
        for key, value in mapping.items():
            resolved = self._substitute_env_vars(value)
            if resolved is not None:
                substituted[str(key)] = resolved
        return substituted

    def get_config(self) -> GeneratorConfig:
        """Get current configuration, loading if necessary."""
        if self._config_cache is None:
            return self.load_config()
        return self._config_cache

    def update_config(self, **kwargs) -> GeneratorConfig:
        """Update configuration with new values.

        Args:
            **kwargs: GeneratorConfig fields to override; ``None`` values are ignored

        Returns:
            Updated GeneratorConfig instance

        Raises:
            ConfigurationError: If the result is invalid or a field is unknown
        """
        current_config = self.get_config()

        unknown = set(kwargs) - set(GeneratorConfig.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown configuration fields: {sorted(unknown)}")

        overrides = {k: v for k, v in kwargs.items() if v is not None}
        updated_config = dataclasses.replace(current_config, **overrides)
        self._check(updated_config)

        self._config_cache = updated_config
        return updated_config

    def validate_current_config(self) -> ValidationResult:
        """Validate current configuration."""
        return self.get_config().validate()


# Global configuration manager instance
_config_manager: Optional[GeneratorConfigManager] = None


def get_config_manager(config_path: Optional[str] = None) -> GeneratorConfigManager:
    """Get global configuration manager instance.

    Args:
        config_path: Optional path to configuration file

    Returns:
        GeneratorConfigManager instance
    """
    global _config_manager
    if _config_manager is None or config_path is not None:
        _config_manager = GeneratorConfigManager(config_path)
    return _config_manager


def get_generator_config(config_path: Optional[str] = None) -> GeneratorConfig:
    """Get generator configuration."""
    return get_config_manager(config_path).get_config()
