"""Search-based test suite generation."""

from restsuite.searchbased.suite import SearchBasedSuite
from restsuite.searchbased.problem import TestSuiteGenerationProblem, coverage_fitness
from restsuite.searchbased.evolution import EvolutionaryOptimizer

__all__ = ['SearchBasedSuite', 'TestSuiteGenerationProblem', 'coverage_fitness', 'EvolutionaryOptimizer']
