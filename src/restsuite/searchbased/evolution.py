"""Evolutionary optimizer over ``SearchBasedSuite`` populations."""

import random
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from restsuite.base_interfaces import ConfigurationError
from restsuite.config.generator_config import GeneratorConfig
from restsuite.searchbased.problem import TestSuiteGenerationProblem
from restsuite.searchbased.suite import SearchBasedSuite
from restsuite.utils.logger import get_logger


class EvolutionaryOptimizer:
    """(mu + lambda) evolution of test suites.

    Parents are chosen by tournament, duplicated and mutated; parents and
    offspring then compete for the next population. Suites of one generation
    are evaluated concurrently, which relies on ``duplicate()`` never sharing
    test cases between suites.
    """

    def __init__(self, problem: TestSuiteGenerationProblem, population_size: int = 10,
                 generations: int = 20, mutation_probability: float = 0.3,
                 tournament_size: int = 2, max_workers: int = 4,
                 rng: Optional[random.Random] = None):
        if population_size <= 0:
            raise ConfigurationError("population_size must be positive")
        if generations < 0:
            raise ConfigurationError("generations must not be negative")
        if not 0.0 <= mutation_probability <= 1.0:
            raise ConfigurationError("mutation_probability must be between 0 and 1")
        if tournament_size <= 0:
            raise ConfigurationError("tournament_size must be positive")

        self.problem = problem
        self.population_size = population_size
        self.generations = generations
        self.mutation_probability = mutation_probability
        self.tournament_size = tournament_size
        self.max_workers = max_workers
        self.rng = rng or problem.generator.rng
        self.logger = get_logger("EvolutionaryOptimizer")
        self.population: List[SearchBasedSuite] = []

    @classmethod
    def from_config(cls, problem: TestSuiteGenerationProblem,
                    config: GeneratorConfig) -> 'EvolutionaryOptimizer':
        return cls(
            problem,
            population_size=config.population_size,
            generations=config.generations,
            mutation_probability=config.mutation_probability,
            tournament_size=config.tournament_size,
            max_workers=config.max_workers,
        )

    def run(self) -> SearchBasedSuite:
        """Evolve the population and return the fittest suite."""
        self.population = [self.problem.create_solution() for _ in range(self.population_size)]
        self.evaluate_population(self.population)
        self.logger.info(f"Initial population: best fitness {self.best().fitness}")

        for generation in range(1, self.generations + 1):
            offspring = [self.mutate(self.select().duplicate()) for _ in range(self.population_size)]
            self.evaluate_population(offspring)

            combined = self.population + offspring
            combined.sort(key=lambda suite: suite.fitness, reverse=True)
            self.population = combined[:self.population_size]
            self.logger.info(f"Generation {generation}/{self.generations}: "
                             f"best fitness {self.best().fitness}")

        return self.best()

    def best(self) -> SearchBasedSuite:
        return max(self.population, key=lambda suite: suite.fitness)

    def select(self) -> SearchBasedSuite:
        """Binary (or larger) tournament selection."""
        contestants = [self.rng.choice(self.population) for _ in range(self.tournament_size)]
        return max(contestants, key=lambda suite: suite.fitness)

    def mutate(self, suite: SearchBasedSuite) -> SearchBasedSuite:
        """Mutate a suite in place.

        Each slot is mutated with ``mutation_probability``: either replaced
        by a new random test case or, for nominal test cases, given a new
        valid value for one parameter.
        """
        for i in range(suite.number_of_variables):
            if self.rng.random() >= self.mutation_probability:
                continue
            test_case = suite.get_variable(i)
            operation = self.problem.operation_for(test_case)
            if not test_case.faulty and operation.parameters and self.rng.random() < 0.5:
                param = self.rng.choice(operation.parameters)
                value = self.problem.generator.value_generator.valid_value(operation, param)
                test_case.set_parameter_value(param, value)
                suite.discard_result(test_case.test_case_id)
            else:
                suite.set_variable(i, self.problem.create_random_test_case())
        return suite

    def evaluate_population(self, suites: List[SearchBasedSuite]) -> None:
        if self.max_workers <= 1 or len(suites) <= 1:
            for suite in suites:
                self.problem.evaluate(suite)
            return
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            list(executor.map(self.problem.evaluate, suites))
