"""REST API test suite generation.

Generators produce test cases operation by operation until the nominal and
faulty quotas of each operation are met. The oracle-driven generator lets an
external predictor select and label batches of candidates; the search-based
strategy evolves whole suites.
"""

__version__ = "1.0.0"

# Data models first: the interfaces and every other module build on them
from restsuite.testcases.data_models import (
    HttpMethod,
    ParameterLocation,
    ParameterSpec,
    Operation,
    TestCase,
    TestResult,
)

# Base interfaces and errors
from restsuite.base_interfaces import (
    TestCaseOracle,
    Authenticator,
    BaseTestExecutor,
    RestSuiteError,
    GenerationError,
    ValidationError,
    OracleInvocationError,
    MissingExpectedOutcomeError,
    ConfigurationError,
)

from restsuite.config.generator_config import GeneratorConfig
from restsuite.values.parameter_values import ParameterValueStore, ParameterValueRepository
from restsuite.generators import (
    GenerationIndex,
    BaseTestCaseGenerator,
    RandomTestCaseGenerator,
    OracleDrivenTestCaseGenerator,
    create_generator,
)
from restsuite.oracle.subprocess_oracle import SubprocessOracle
from restsuite.searchbased import SearchBasedSuite, TestSuiteGenerationProblem, EvolutionaryOptimizer

__all__ = [
    '__version__',

    # Data Models
    'HttpMethod',
    'ParameterLocation',
    'ParameterSpec',
    'Operation',
    'TestCase',
    'TestResult',

    # Base Interfaces
    'TestCaseOracle',
    'Authenticator',
    'BaseTestExecutor',

    # Exceptions
    'RestSuiteError',
    'GenerationError',
    'ValidationError',
    'OracleInvocationError',
    'MissingExpectedOutcomeError',
    'ConfigurationError',

    # Components
    'GeneratorConfig',
    'ParameterValueStore',
    'ParameterValueRepository',
    'GenerationIndex',
    'BaseTestCaseGenerator',
    'RandomTestCaseGenerator',
    'OracleDrivenTestCaseGenerator',
    'create_generator',
    'SubprocessOracle',
    'SearchBasedSuite',
    'TestSuiteGenerationProblem',
    'EvolutionaryOptimizer',
]
