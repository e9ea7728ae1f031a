"""Persistence of previously observed parameter values."""

from restsuite.values.parameter_values import ParameterValueStore, ParameterValueRepository

__all__ = ['ParameterValueStore', 'ParameterValueRepository']
