"""Test case generation driven by an external labeling oracle."""

from typing import List, Optional

from restsuite.base_interfaces import (
    Authenticator, ConfigurationError, OracleInvocationError, TestCaseOracle
)
from restsuite.config.generator_config import GeneratorConfig
from restsuite.generators.base_generator import BaseTestCaseGenerator
from restsuite.generators.generation_index import GenerationIndex
from restsuite.testcases.data_models import Operation, TestCase
from restsuite.utils.logger import Logger
from restsuite.values.parameter_values import ParameterValueRepository


class OracleDrivenTestCaseGenerator(BaseTestCaseGenerator):
    """Generates test cases in rounds, letting an oracle select and label them.

    Each round builds a batch of validated candidates and hands it to the
    oracle, which returns the candidates it keeps, each labeled nominal or
    faulty. Survivors are accepted while their quota allows it. Rounds repeat
    until the operation's index is complete.

    A failed oracle invocation drops the whole round: nothing from it is
    accepted and the next round starts with a fresh batch.
    """

    def __init__(self, config: GeneratorConfig, oracle: TestCaseOracle,
                 authenticator: Optional[Authenticator] = None,
                 value_repository: Optional[ParameterValueRepository] = None,
                 rng=None):
        """Initialize the generator.

        Args:
            config: Generator configuration
            oracle: Oracle consulted once per round
            authenticator: Decorates accepted test cases
            value_repository: Stored parameter values
            rng: Random source

        Raises:
            ConfigurationError: If no oracle is given or the batch size is not positive
        """
        super().__init__(config, authenticator, value_repository, rng)
        if oracle is None:
            raise ConfigurationError("Oracle-driven generation requires an oracle")
        if config.number_of_candidates <= 0:
            raise ConfigurationError("number_of_candidates must be positive")

        self.oracle = oracle
        self.number_of_candidates = config.number_of_candidates
        self.max_rounds = config.max_rounds

    def generate_for_operation(self, operation: Operation) -> List[TestCase]:
        self.logger.info(f"Generating {self.number_of_tests} test cases for {operation} "
                         f"with batches of {self.number_of_candidates} candidates")
        index = self.new_index()
        results: List[TestCase] = []
        rounds = 0

        while self.has_next(index):
            if self.max_rounds is not None and rounds >= self.max_rounds:
                self.logger.warning(
                    f"{operation.operation_id}: stopping after {rounds} rounds with "
                    f"{index.accepted}/{index.target} test cases"
                )
                break
            rounds += 1
            self._run_round(operation, index, results, rounds)

        self.logger.info(f"{operation.operation_id}: {Logger.format_index_summary(index)} "
                         f"rounds={rounds}")
        return results

    def generate_candidate_batch(self, operation: Operation) -> List[TestCase]:
        """Generate ``number_of_candidates`` validated candidates."""
        return [
            self.generate_valid_candidate(operation)
            for _ in range(self.number_of_candidates)
        ]

    def _run_round(self, operation: Operation, index: GenerationIndex,
                   results: List[TestCase], round_number: int) -> None:
        candidates = self.generate_candidate_batch(operation)

        try:
            labeled = self.oracle.label(candidates, index.remaining, self.faulty_ratio)
        except OracleInvocationError as e:
            self.logger.error(f"{operation.operation_id}: oracle failed in round {round_number}, "
                              f"discarding {len(candidates)} candidates: {e}", exc_info=True)
            return
        except KeyboardInterrupt:
            self.logger.error(f"{operation.operation_id}: interrupted in round {round_number}, "
                              f"discarding {len(candidates)} candidates")
            raise

        index.record_generated(len(candidates))
        accepted = 0
        seen = {tc.test_case_id for tc in results}
        for test_case in labeled:
            if not self.has_next(index):
                break
            if test_case.operation_id != operation.operation_id or test_case.test_case_id in seen:
                self.logger.debug(f"Ignoring oracle row {Logger.format_test_case(test_case)}: "
                                  f"foreign operation or repeated id")
                continue
            seen.add(test_case.test_case_id)
            if self.accept(test_case, index, results):
                accepted += 1

        self.logger.info(
            f"{operation.operation_id}: round {round_number} kept {len(labeled)}/{len(candidates)} "
            f"candidates, accepted {accepted} ({Logger.format_index_summary(index)})"
        )
