"""Execution of generated test cases."""

from restsuite.execution.test_executor import TestExecutor

__all__ = ['TestExecutor']
