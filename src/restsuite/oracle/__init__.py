"""Oracles that select and label candidate test cases."""

from restsuite.base_interfaces import TestCaseOracle
from restsuite.oracle.subprocess_oracle import SubprocessOracle

__all__ = ['TestCaseOracle', 'SubprocessOracle']
