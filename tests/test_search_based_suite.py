"""Tests for search-based suites, their problem and the optimizer."""

import itertools

import pytest

from restsuite.base_interfaces import BaseTestExecutor
from restsuite.generators.random_generator import RandomTestCaseGenerator
from restsuite.searchbased.evolution import EvolutionaryOptimizer
from restsuite.searchbased.problem import TestSuiteGenerationProblem, coverage_fitness
from restsuite.searchbased.suite import SearchBasedSuite
from restsuite.testcases.data_models import TestResult
from conftest import make_test_case


class CountingProblem:
    """Minimal problem producing numbered test cases."""

    def __init__(self, size):
        self.number_of_variables = size
        self._ids = itertools.count()

    def create_random_test_case(self):
        return make_test_case(f"tc{next(self._ids)}", header_parameters={"X-Trace": "t"})


def result_for(test_case, status=200, passed=True):
    return TestResult(test_case_id=test_case.test_case_id, status_code=status, passed=passed)


def filled_suite(size):
    suite = SearchBasedSuite.create_random(CountingProblem(size))
    for test_case in suite.variables:
        suite.replace_result(test_case.test_case_id, result_for(test_case))
    suite.attributes["history"] = ["created"]
    suite.fitness = 3.0
    return suite


def snapshot(suite):
    return (
        [tc.copy() for tc in suite.variables],
        {r.test_case_id: r.copy() for r in suite.results},
        list(suite.objectives),
        {k: list(v) for k, v in suite.attributes.items()},
    )


def test_create_random_fills_every_slot():
    suite = SearchBasedSuite.create_random(CountingProblem(4))

    assert len(suite) == 4
    assert [tc.test_case_id for tc in suite.variables] == ["tc0", "tc1", "tc2", "tc3"]
    assert suite.results == []


@pytest.mark.parametrize("size", [1, 6])
def test_duplicate_shares_nothing(size):
    original = filled_suite(size)
    before = snapshot(original)

    duplicate = original.duplicate()
    assert snapshot(duplicate) == before

    for i, test_case in enumerate(duplicate.variables):
        assert test_case is not original.get_variable(i)
        assert duplicate.get_result(test_case.test_case_id) is not original.get_result(test_case.test_case_id)
        test_case.query_parameters["status"] = "mutated"
        test_case.header_parameters.clear()
        test_case.path_parameters["petId"] = "999"
        test_case.body = "changed"
        test_case.faulty = True
        duplicate.get_result(test_case.test_case_id).status_code = 500
        duplicate.replace_result(test_case.test_case_id, result_for(test_case, 404, False))
    duplicate.set_variable(0, make_test_case("replacement"))
    duplicate.attributes["history"].append("mutated")
    duplicate.fitness = 10.0

    assert snapshot(original) == before


def test_replace_result_twice_keeps_the_second():
    suite = SearchBasedSuite.create_random(CountingProblem(2))
    test_case = suite.get_variable(0)
    first = result_for(test_case, 200, True)
    second = result_for(test_case, 500, False)

    suite.replace_result(test_case.test_case_id, first)
    suite.replace_result(test_case.test_case_id, second)

    assert suite.results == [second]
    assert suite.get_result(test_case.test_case_id) == second


def test_replace_result_moves_entry_to_new_test_case():
    suite = SearchBasedSuite.create_random(CountingProblem(2))
    old, new = suite.get_variable(0), suite.get_variable(1)
    suite.replace_result(old.test_case_id, result_for(old))

    suite.replace_result(old.test_case_id, result_for(new, 201))

    assert not suite.has_result(old.test_case_id)
    assert suite.get_result(new.test_case_id).status_code == 201


def test_results_must_belong_to_the_suite():
    suite = SearchBasedSuite.create_random(CountingProblem(1))

    with pytest.raises(ValueError):
        suite.replace_result("stranger", result_for(make_test_case("stranger")))


def test_replacing_a_slot_drops_its_result():
    suite = filled_suite(3)
    old_id = suite.get_variable(1).test_case_id

    suite.set_variable(1, make_test_case("fresh"))

    assert not suite.has_result(old_id)
    assert [tc.test_case_id for tc in suite.untested()] == ["fresh"]


def test_suite_size_must_match_problem():
    with pytest.raises(ValueError):
        SearchBasedSuite(CountingProblem(2), [make_test_case()])


class FakeExecutor(BaseTestExecutor):
    """Answers 200 for nominal and 400 for faulty tests."""

    def __init__(self):
        self.executed = []

    def execute_test(self, test_case, operation=None):
        self.executed.append(test_case.test_case_id)
        status = 400 if test_case.faulty else 200
        return TestResult(test_case_id=test_case.test_case_id, status_code=status, passed=True)


def test_problem_evaluates_only_untested_cases(config, pet_operation, add_pet_operation):
    executor = FakeExecutor()
    problem = TestSuiteGenerationProblem(
        [pet_operation, add_pet_operation], RandomTestCaseGenerator(config), 4, executor
    )
    suite = problem.create_solution()

    problem.evaluate(suite)
    problem.evaluate(suite)

    assert len(executor.executed) == 4
    assert suite.untested() == []
    assert suite.fitness == coverage_fitness(suite)
    assert suite.fitness >= 2


def test_optimizer_returns_fittest_suite(config, pet_operation, add_pet_operation):
    executor = FakeExecutor()
    problem = TestSuiteGenerationProblem(
        [pet_operation, add_pet_operation], RandomTestCaseGenerator(config), 5, executor
    )
    optimizer = EvolutionaryOptimizer(problem, population_size=4, generations=3,
                                      mutation_probability=0.5, max_workers=2)

    best = optimizer.run()

    assert len(best) == 5
    assert len(optimizer.population) == 4
    assert best.fitness == max(suite.fitness for suite in optimizer.population)
    assert all(best.get_result(tc.test_case_id) is not None for tc in best.variables)
    # Survivors never share test case objects
    seen = [id(tc) for suite in optimizer.population for tc in suite.variables]
    assert len(seen) == len(set(seen))


def test_problem_without_executor_ranks_by_operation_coverage(config, pet_operation):
    problem = TestSuiteGenerationProblem([pet_operation], RandomTestCaseGenerator(config), 3)
    suite = problem.evaluate(problem.create_solution())

    assert suite.results == []
    assert suite.fitness == 1.0
