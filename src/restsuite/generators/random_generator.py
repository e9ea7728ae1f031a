"""Random test case generation strategy."""

from typing import List

from restsuite.generators.base_generator import BaseTestCaseGenerator
from restsuite.generators.generation_index import GenerationIndex
from restsuite.testcases.data_models import Operation, TestCase
from restsuite.utils.logger import Logger


class RandomTestCaseGenerator(BaseTestCaseGenerator):
    """Accepts random candidates directly, honouring nominal and faulty quotas."""

    def generate_for_operation(self, operation: Operation) -> List[TestCase]:
        self.logger.info(f"Generating {self.number_of_tests} test cases for {operation}")
        index = self.new_index()
        results: List[TestCase] = []

        if index.faulty_quota and not self.can_generate_faulty(operation):
            self.logger.warning(
                f"{operation.operation_id}: no parameter can be made faulty, "
                f"generating {index.target} nominal test cases instead"
            )
            index.waive_faulty_quota()

        while self.has_next(index):
            if self._wants_faulty(index):
                candidate = self.generate_faulty_candidate(operation)
                index.record_generated()
            else:
                candidate = self.generate_valid_candidate(operation, index)
            self.accept(candidate, index, results)

        self.logger.info(f"{operation.operation_id}: {Logger.format_index_summary(index)}")
        return results

    def _wants_faulty(self, index: GenerationIndex) -> bool:
        if not index.has_next_faulty():
            return False
        if not index.has_next_nominal():
            return True
        return self.rng.random() < self.faulty_ratio
