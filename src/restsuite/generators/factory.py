"""Construction of generators from configuration."""

from typing import Optional

from restsuite.auth.authenticator import create_authenticator
from restsuite.base_interfaces import Authenticator, ConfigurationError, TestCaseOracle
from restsuite.config.generator_config import GeneratorConfig
from restsuite.generators.base_generator import BaseTestCaseGenerator
from restsuite.generators.oracle_generator import OracleDrivenTestCaseGenerator
from restsuite.generators.random_generator import RandomTestCaseGenerator
from restsuite.oracle.subprocess_oracle import SubprocessOracle
from restsuite.values.parameter_values import ParameterValueRepository


def create_generator(config: GeneratorConfig,
                     oracle: Optional[TestCaseOracle] = None,
                     authenticator: Optional[Authenticator] = None,
                     value_repository: Optional[ParameterValueRepository] = None) -> BaseTestCaseGenerator:
    """Create the generator selected by ``config.strategy``.

    The search strategy seeds its suites with random test cases, so it gets
    a ``RandomTestCaseGenerator`` too.

    Args:
        config: Generator configuration
        oracle: Oracle for the oracle strategy; a ``SubprocessOracle`` is
            built from the configuration when omitted
        authenticator: Overrides the authenticator described by the configuration
        value_repository: Overrides the repository opened from the configuration

    Returns:
        Configured generator

    Raises:
        ConfigurationError: If the strategy is unknown or the oracle cannot be set up
    """
    authenticator = authenticator or create_authenticator(config)

    if config.strategy in ('random', 'search'):
        return RandomTestCaseGenerator(config, authenticator, value_repository)

    if config.strategy == 'oracle':
        if oracle is None:
            oracle = SubprocessOracle.from_config(config)
        return OracleDrivenTestCaseGenerator(config, oracle, authenticator, value_repository)

    raise ConfigurationError(f"Unknown generation strategy: {config.strategy}")
