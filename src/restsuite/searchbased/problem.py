"""Search problem of finding a good REST API test suite."""

from typing import Callable, Dict, List, Optional

from restsuite.base_interfaces import (
    BaseTestExecutor, ConfigurationError, GenerationError, MissingExpectedOutcomeError
)
from restsuite.generators.base_generator import BaseTestCaseGenerator
from restsuite.searchbased.suite import SearchBasedSuite
from restsuite.testcases.data_models import Operation, TestCase, TestResult
from restsuite.utils.logger import get_logger

logger = get_logger(__name__)


def coverage_fitness(suite: SearchBasedSuite) -> float:
    """Default fitness: operations covered, distinct status codes per operation and failures."""
    operations = {tc.operation_id for tc in suite.variables if tc is not None}
    statuses = set()
    failures = 0
    for tc in suite.variables:
        result = suite.get_result(tc.test_case_id) if tc is not None else None
        if result is None:
            continue
        statuses.add((tc.operation_id, result.status_code))
        if not result.passed:
            failures += 1
    return float(len(operations) + len(statuses) + failures)


class TestSuiteGenerationProblem:
    """Creates random suites over a set of operations and evaluates them.

    Test cases are drawn from a generator so that they respect the same
    parameter constraints, faulty ratio and authentication as the other
    strategies. Evaluation executes the test cases that have no result yet
    and then computes the suite's fitness.
    """

    __test__ = False

    number_of_objectives = 1

    def __init__(self, operations: List[Operation], generator: BaseTestCaseGenerator,
                 suite_size: int, executor: Optional[BaseTestExecutor] = None,
                 fitness: Optional[Callable[[SearchBasedSuite], float]] = None):
        if not operations:
            raise ConfigurationError("Search-based generation needs at least one operation")
        if suite_size <= 0:
            raise ConfigurationError("suite_size must be positive")

        self.operations = list(operations)
        self._operations_by_id: Dict[str, Operation] = {op.operation_id: op for op in self.operations}
        self.generator = generator
        self.suite_size = suite_size
        self.executor = executor
        self.fitness = fitness or coverage_fitness

    @property
    def number_of_variables(self) -> int:
        return self.suite_size

    def operation_for(self, test_case: TestCase) -> Operation:
        return self._operations_by_id[test_case.operation_id]

    def create_random_test_case(self) -> TestCase:
        """Random authenticated test case for a random operation.

        Faulty test cases are drawn with the generator's faulty ratio when the
        chosen operation allows one.
        """
        generator = self.generator
        operation = generator.rng.choice(self.operations)

        test_case = None
        if generator.rng.random() < generator.faulty_ratio:
            try:
                test_case = generator.generate_faulty_candidate(operation)
            except GenerationError as e:
                logger.debug(f"Falling back to a nominal test case: {e}")
        if test_case is None:
            test_case = generator.generate_valid_candidate(operation)

        return generator.authenticator.authenticate(test_case)

    def create_solution(self) -> SearchBasedSuite:
        return SearchBasedSuite.create_random(self)

    def evaluate(self, suite: SearchBasedSuite) -> SearchBasedSuite:
        """Execute untested test cases of the suite and set its fitness."""
        if self.executor is not None:
            for test_case in suite.untested():
                suite.replace_result(test_case.test_case_id, self._execute(test_case))

        suite.fitness = self.fitness(suite)
        return suite

    def _execute(self, test_case: TestCase) -> TestResult:
        try:
            return self.executor.execute_test(test_case, self.operation_for(test_case))
        except MissingExpectedOutcomeError as e:
            logger.warning(f"Cannot judge {test_case.test_case_id}: {e}")
            return TestResult(
                test_case_id=test_case.test_case_id,
                status_code=None,
                passed=False,
                error_message=str(e),
            )
