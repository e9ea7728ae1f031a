"""Base interfaces and exception classes shared by restsuite components."""

from abc import ABC, abstractmethod
from typing import List, Optional
from restsuite.testcases.data_models import TestCase, TestResult, Operation


class TestCaseOracle(ABC):
    """External decision-maker that labels, accepts or rejects candidates."""

    __test__ = False

    @abstractmethod
    def label(self, candidates: List[TestCase], remaining: int, faulty_ratio: float) -> List[TestCase]:
        """Submit a batch of candidates and return the accepted, labeled ones.

        The call blocks until the oracle has decided.

        Args:
            candidates: Current round's candidates
            remaining: Number of tests still wanted for the operation
            faulty_ratio: Configured proportion of faulty tests

        Returns:
            Surviving candidates, in the oracle's preferred order

        Raises:
            OracleInvocationError: If the oracle could not be consulted
        """
        pass


class Authenticator(ABC):
    """Decorates accepted test cases with authentication data."""

    @abstractmethod
    def authenticate(self, test_case: TestCase) -> TestCase:
        """Return a copy of ``test_case`` with authentication data applied.

        The input test case must not be modified.
        """
        pass


class BaseTestExecutor(ABC):
    """Abstract base class for test executors."""

    __test__ = False

    @abstractmethod
    def execute_test(self, test_case: TestCase, operation: Optional[Operation] = None) -> TestResult:
        """Execute a single test case.

        Args:
            test_case: Test case to execute
            operation: Operation the test case targets, used for the verdict

        Returns:
            TestResult with the observed outcome
        """
        pass

    def execute_test_suite(self, test_cases: List[TestCase],
                           operation: Optional[Operation] = None) -> List[TestResult]:
        """Execute test cases one after another."""
        return [self.execute_test(test_case, operation) for test_case in test_cases]


# Exception classes for restsuite components
class RestSuiteError(Exception):
    """Base exception for restsuite errors."""
    pass


class GenerationError(RestSuiteError):
    """Error during test case generation."""
    pass


class ValidationError(GenerationError):
    """A generated candidate violates the structural constraints of its operation."""

    def __init__(self, message: str, test_case_id: Optional[str] = None,
                 errors: Optional[List[str]] = None):
        super().__init__(message)
        self.test_case_id = test_case_id
        self.errors = errors or []


class OracleInvocationError(RestSuiteError):
    """The external oracle failed to start, exited with an error or timed out."""
    pass


class MissingExpectedOutcomeError(RestSuiteError):
    """A test case's expected outcome matches no documented response code."""

    def __init__(self, message: str, test_case_id: Optional[str] = None):
        super().__init__(message)
        self.test_case_id = test_case_id


class ConfigurationError(RestSuiteError):
    """Error in configuration."""
    pass
