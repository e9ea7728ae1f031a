"""Base generator driving per-operation test case generation."""

import json
import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from restsuite.auth.authenticator import NoAuthenticator
from restsuite.base_interfaces import Authenticator, GenerationError, ValidationError
from restsuite.config.generator_config import GeneratorConfig
from restsuite.generators.generation_index import GenerationIndex
from restsuite.generators.value_generators import ParameterValueGenerator, value_matches_type
from restsuite.testcases.data_models import (
    Operation, ParameterLocation, TestCase, new_test_case_id
)
from restsuite.utils.logger import Logger, get_logger
from restsuite.values.parameter_values import ParameterValueRepository

MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
INVALID_PARAMETER_VALUE = "invalid_parameter_value"


class BaseTestCaseGenerator(ABC):
    """Generates test cases for one operation at a time.

    Strategies implement ``generate_for_operation``. They create a fresh
    ``GenerationIndex`` on entry, stop only when ``has_next`` reports
    completion, and count each accepted test case exactly once through
    ``accept``.
    """

    def __init__(self, config: GeneratorConfig,
                 authenticator: Optional[Authenticator] = None,
                 value_repository: Optional[ParameterValueRepository] = None,
                 rng: Optional[random.Random] = None):
        """Initialize the generator.

        Args:
            config: Generator configuration
            authenticator: Decorates accepted test cases; defaults to no authentication
            value_repository: Stored parameter values; opened from the
                configuration when ``use_stored_values`` is set
            rng: Random source; seeded from ``config.random_seed`` by default
        """
        self.config = config
        self.logger = get_logger(self.__class__.__name__)
        self.number_of_tests = config.number_of_tests
        self.faulty_ratio = config.faulty_ratio
        self.max_attempts = config.max_attempts_per_candidate

        self.rng = rng or random.Random(config.random_seed)
        self.authenticator = authenticator or NoAuthenticator()

        if value_repository is None and config.use_stored_values:
            value_repository = ParameterValueRepository(config.experiment_name, config.data_dir)
        self.value_repository = value_repository
        self.value_generator = ParameterValueGenerator(
            self.rng, value_repository, config.stored_value_probability
        )

    def generate(self, operations: List[Operation]) -> Dict[str, List[TestCase]]:
        """Generate test cases for every operation.

        Returns:
            Test cases keyed by operation id
        """
        results: Dict[str, List[TestCase]] = {}
        for operation in operations:
            results[operation.operation_id] = self.generate_for_operation(operation)
        return results

    @abstractmethod
    def generate_for_operation(self, operation: Operation) -> List[TestCase]:
        """Generate the test cases of one operation until ``has_next`` is false."""
        pass

    def new_index(self) -> GenerationIndex:
        return GenerationIndex(target=self.number_of_tests, faulty_ratio=self.faulty_ratio)

    def has_next(self, index: GenerationIndex) -> bool:
        """Completion predicate for one operation's generation."""
        return index.has_next()

    def accept(self, test_case: TestCase, index: GenerationIndex, results: List[TestCase]) -> bool:
        """Authenticate, append and count a test case if its quota allows it.

        Returns:
            True if the test case was accepted
        """
        if not index.accepts(test_case):
            self.logger.debug(f"Discarding {Logger.format_test_case(test_case)}: quota reached")
            return False

        authenticated = self.authenticator.authenticate(test_case)
        results.append(authenticated)
        index.record_accepted(authenticated)
        self.logger.debug(f"Accepted {Logger.format_test_case(authenticated)}")
        return True

    def generate_random_valid_candidate(self, operation: Operation) -> TestCase:
        """Build a nominal candidate with values satisfying each parameter.

        Required parameters are always present; optional ones are included
        with probability equal to their weight.
        """
        test_case = TestCase(
            test_case_id=new_test_case_id(operation.operation_id),
            operation_id=operation.operation_id,
            method=operation.method,
            path=operation.path,
        )

        for param in operation.parameters:
            if param.required or self.rng.random() < param.weight:
                test_case.set_parameter_value(param, self.value_generator.valid_value(operation, param))

        return test_case

    def generate_valid_candidate(self, operation: Operation,
                                 index: Optional[GenerationIndex] = None) -> TestCase:
        """Generate candidates until one passes ``check_validity``.

        Raises:
            GenerationError: If no valid candidate was produced within
                ``max_attempts_per_candidate`` attempts
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generate_random_valid_candidate(operation)
            if index is not None:
                index.record_generated()
            try:
                self.check_validity(candidate, operation)
                return candidate
            except ValidationError as e:
                self.logger.debug(f"Discarding invalid candidate (attempt {attempt}): {e}")

        raise GenerationError(
            f"Could not generate a valid test case for {operation.operation_id} "
            f"after {self.max_attempts} attempts"
        )

    def _faulty_options(self, operation: Operation):
        removable = [
            p for p in operation.required_parameters if p.location != ParameterLocation.PATH
        ]
        invalidatable = [p for p in operation.parameters if self.value_generator.can_invalidate(p)]
        return removable, invalidatable

    def can_generate_faulty(self, operation: Operation) -> bool:
        """Whether the operation has a parameter that can be removed or made invalid."""
        removable, invalidatable = self._faulty_options(operation)
        return bool(removable or invalidatable)

    def generate_faulty_candidate(self, operation: Operation) -> TestCase:
        """Derive a faulty candidate from a valid one.

        The candidate either lacks a required (non-path) parameter or carries
        a value violating its parameter's type or constraints.

        Raises:
            GenerationError: If the operation has no parameter that can be
                removed or made invalid
        """
        removable, invalidatable = self._faulty_options(operation)
        if not removable and not invalidatable:
            raise GenerationError(
                f"Operation {operation.operation_id} has no parameter that can be made faulty"
            )

        test_case = self.generate_random_valid_candidate(operation)
        options = [MISSING_REQUIRED_PARAMETER] * bool(removable) + [INVALID_PARAMETER_VALUE] * bool(invalidatable)
        reason = self.rng.choice(options)

        if reason == MISSING_REQUIRED_PARAMETER:
            test_case.remove_parameter(self.rng.choice(removable))
        else:
            param = self.rng.choice(invalidatable)
            test_case.set_parameter_value(param, self.value_generator.invalid_value(operation, param))

        test_case.faulty = True
        test_case.faulty_reason = reason
        return test_case

    def check_validity(self, test_case: TestCase, operation: Operation) -> None:
        """Check a candidate against the structure of its operation.

        Raises:
            ValidationError: If a required parameter is missing, a value does
                not match its declared type or enum, or the candidate does not
                belong to the operation
        """
        errors = []

        if test_case.operation_id != operation.operation_id:
            errors.append(f"belongs to {test_case.operation_id}, not {operation.operation_id}")
        if test_case.method != operation.method:
            errors.append(f"method {test_case.method.value} does not match {operation.method.value}")

        for param in operation.parameters:
            value = test_case.get_parameter_value(param)
            if value is None:
                if param.required:
                    errors.append(f"missing required parameter {param.name}")
                continue
            if param.location == ParameterLocation.BODY and param.type == 'object':
                try:
                    json.loads(value)
                except ValueError:
                    errors.append(f"body of {param.name} is not valid JSON")
                continue
            if not value_matches_type(value, param):
                errors.append(f"value '{value}' of {param.name} does not match type {param.type}")

        unresolved = [
            name for name in _path_placeholders(operation.path) if name not in test_case.path_parameters
        ]
        if unresolved:
            errors.append(f"unresolved path parameters {unresolved}")

        if errors:
            raise ValidationError(
                f"Test case {test_case.test_case_id} is invalid: {'; '.join(errors)}",
                test_case_id=test_case.test_case_id,
                errors=errors,
            )


def _path_placeholders(path: str) -> List[str]:
    names = []
    rest = path
    while '{' in rest and '}' in rest:
        start = rest.index('{')
        end = rest.index('}', start)
        names.append(rest[start + 1:end])
        rest = rest[end + 1:]
    return names
