"""Test case generators and their per-operation bookkeeping."""

from restsuite.generators.generation_index import GenerationIndex, split_quotas
from restsuite.generators.base_generator import BaseTestCaseGenerator
from restsuite.generators.random_generator import RandomTestCaseGenerator
from restsuite.generators.oracle_generator import OracleDrivenTestCaseGenerator
from restsuite.generators.factory import create_generator

__all__ = [
    'GenerationIndex',
    'split_quotas',
    'BaseTestCaseGenerator',
    'RandomTestCaseGenerator',
    'OracleDrivenTestCaseGenerator',
    'create_generator',
]
