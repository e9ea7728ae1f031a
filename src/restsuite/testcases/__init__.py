"""Test case and test result models.

Submodules ``exchange``, ``expected_outcome`` and ``operation_loader`` are
imported explicitly by their users.
"""

from restsuite.testcases.data_models import (
    HttpMethod,
    ParameterLocation,
    ParameterSpec,
    Operation,
    TestCase,
    TestResult,
    ValidationResult,
    new_test_case_id,
)

__all__ = [
    'HttpMethod',
    'ParameterLocation',
    'ParameterSpec',
    'Operation',
    'TestCase',
    'TestResult',
    'ValidationResult',
    'new_test_case_id',
]
