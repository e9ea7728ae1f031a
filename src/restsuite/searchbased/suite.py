"""Test suite representation for population-based search."""

import copy
from typing import Any, Dict, Iterable, List, Optional

from restsuite.testcases.data_models import TestCase, TestResult


class SearchBasedSuite:
    """One candidate test suite of an evolutionary search.

    A suite holds a fixed number of test case slots, one per variable of its
    problem, and the results of executing them keyed by test case id. Result
    keys are always a subset of the ids currently held in the slots.

    Variation operators mutate test cases in place, so suites never share
    test cases or results: ``duplicate()`` copies every one of them.
    """

    def __init__(self, problem, test_cases: Optional[Iterable[TestCase]] = None):
        """Create a suite.

        Args:
            problem: Governing problem; must provide ``number_of_variables``
                and ``create_random_test_case()``
            test_cases: Initial slot contents; left empty (None) when omitted
        """
        self.problem = problem
        size = problem.number_of_variables
        slots = list(test_cases) if test_cases is not None else [None] * size
        if len(slots) != size:
            raise ValueError(f"Suite needs {size} test cases, got {len(slots)}")

        self._test_cases: List[Optional[TestCase]] = slots
        self._results: Dict[str, TestResult] = {}
        self.objectives: List[float] = [0.0] * getattr(problem, "number_of_objectives", 1)
        self.attributes: Dict[Any, Any] = {}

    @classmethod
    def create_random(cls, problem) -> 'SearchBasedSuite':
        """Create a suite whose every slot comes from ``problem.create_random_test_case()``."""
        suite = cls(problem)
        for i in range(suite.number_of_variables):
            suite.set_variable(i, problem.create_random_test_case())
        return suite

    @property
    def number_of_variables(self) -> int:
        return len(self._test_cases)

    @property
    def variables(self) -> List[TestCase]:
        """The test cases of the suite (a new list; the test cases are shared)."""
        return list(self._test_cases)

    @property
    def fitness(self) -> float:
        return self.objectives[0]

    @fitness.setter
    def fitness(self, value: float) -> None:
        self.objectives[0] = value

    def get_variable(self, i: int) -> TestCase:
        return self._test_cases[i]

    def set_variable(self, i: int, test_case: TestCase) -> None:
        """Place a test case in slot ``i``.

        The result of the replaced test case is dropped unless another slot
        still holds a test case with the same id.
        """
        previous = self._test_cases[i]
        self._test_cases[i] = test_case
        if previous is not None and previous.test_case_id not in self._current_ids():
            self._results.pop(previous.test_case_id, None)

    def get_result(self, test_case_id: str) -> Optional[TestResult]:
        return self._results.get(test_case_id)

    @property
    def results(self) -> List[TestResult]:
        return list(self._results.values())

    def has_result(self, test_case_id: str) -> bool:
        return test_case_id in self._results

    def replace_result(self, test_case_id: str, result: TestResult) -> None:
        """Replace the result stored for ``test_case_id`` with ``result``.

        Any prior entry under ``test_case_id`` is removed before ``result`` is
        inserted under its own test case id. This is the only way results
        enter a suite.

        Raises:
            ValueError: If ``result`` belongs to no test case of the suite
        """
        if result.test_case_id not in self._current_ids():
            raise ValueError(f"Result {result.test_case_id} does not belong to a test case of this suite")
        self._results.pop(test_case_id, None)
        self._results[result.test_case_id] = result

    def add_results(self, results: Iterable[TestResult]) -> None:
        """Store several results, each through ``replace_result``."""
        for result in results:
            self.replace_result(result.test_case_id, result)

    def discard_result(self, test_case_id: str) -> None:
        """Forget the result of a test case, e.g. after mutating it in place."""
        self._results.pop(test_case_id, None)

    def untested(self) -> List[TestCase]:
        """Test cases without a stored result."""
        return [tc for tc in self._test_cases if tc is not None and tc.test_case_id not in self._results]

    def duplicate(self) -> 'SearchBasedSuite':
        """Return an independent copy of the suite.

        Every test case and every result of a current test case is copied
        with its ``copy()`` method, so mutating the duplicate is never
        observable through the original.
        """
        duplicate = SearchBasedSuite(
            self.problem,
            [tc.copy() if tc is not None else None for tc in self._test_cases],
        )
        for tc in self._test_cases:
            if tc is not None and tc.test_case_id in self._results:
                duplicate._results[tc.test_case_id] = self._results[tc.test_case_id].copy()
        duplicate.objectives = list(self.objectives)
        duplicate.attributes = copy.deepcopy(self.attributes)
        return duplicate

    def _current_ids(self) -> set:
        return {tc.test_case_id for tc in self._test_cases if tc is not None}

    def __len__(self) -> int:
        return len(self._test_cases)

    def __repr__(self) -> str:
        return (f"SearchBasedSuite(size={len(self._test_cases)}, results={len(self._results)}, "
                f"fitness={self.fitness})")
