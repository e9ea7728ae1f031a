"""Parameter value synthesis for generated test cases."""

import json
import math
import random
import string
from typing import List, Optional

from restsuite.testcases.data_models import Operation, ParameterSpec
from restsuite.values.parameter_values import ParameterValueRepository

_NAMES = ['Alice', 'Bob', 'Charlie', 'Diana', 'Eve', 'Frank']
_BOOLEANS = ('true', 'false')


def value_matches_type(value: str, param: ParameterSpec) -> bool:
    """Check a string value against the parameter's type and constraints."""
    if param.enum_values:
        return value in param.enum_values

    if param.type == 'integer':
        try:
            number = int(value)
        except ValueError:
            return False
        return _within_bounds(number, param)

    if param.type == 'number':
        try:
            number = float(value)
        except ValueError:
            return False
        return _within_bounds(number, param)

    if param.type == 'boolean':
        return value in _BOOLEANS

    if param.type == 'object':
        try:
            return isinstance(json.loads(value), dict)
        except ValueError:
            return False

    return True


def _within_bounds(number: float, param: ParameterSpec) -> bool:
    if param.minimum is not None and number < param.minimum:
        return False
    if param.maximum is not None and number > param.maximum:
        return False
    return True


class ParameterValueGenerator:
    """Draws valid and invalid values for operation parameters.

    Previously observed values from the parameter value repository are reused
    with probability ``stored_value_probability``; otherwise values come from
    the parameter's enum, its examples, or type-based synthesis.
    """

    def __init__(self, rng: random.Random,
                 repository: Optional[ParameterValueRepository] = None,
                 stored_value_probability: float = 0.5):
        self.rng = rng
        self.repository = repository
        self.stored_value_probability = stored_value_probability

    def _stored(self, operation: Operation, param: ParameterSpec, valid: bool) -> List[str]:
        if self.repository is None:
            return []
        store = self.repository.get_store(operation.operation_id, param.name)
        values = store.valid_values if valid else store.invalid_values
        return sorted(values)

    def valid_value(self, operation: Operation, param: ParameterSpec) -> str:
        """Return a value satisfying the parameter's type and constraints."""
        stored = [v for v in self._stored(operation, param, valid=True) if value_matches_type(v, param)]
        if stored and self.rng.random() < self.stored_value_probability:
            return self.rng.choice(stored)

        if param.enum_values:
            return self.rng.choice(param.enum_values)

        examples = [v for v in param.examples if value_matches_type(v, param)]
        if examples:
            return self.rng.choice(examples)

        return self._synthesize(param)

    def invalid_value(self, operation: Operation, param: ParameterSpec) -> Optional[str]:
        """Return a value violating the parameter's constraints.

        Returns:
            An invalid value, or None if the parameter accepts any string
        """
        stored = [v for v in self._stored(operation, param, valid=False) if not value_matches_type(v, param)]
        if stored and self.rng.random() < self.stored_value_probability:
            return self.rng.choice(stored)

        if param.enum_values:
            candidate = "invalid_" + self._random_word(4, 8)
            while candidate in param.enum_values:
                candidate += "_"
            return candidate

        if param.type in ('integer', 'number'):
            if param.maximum is not None and self.rng.random() < 0.5:
                return str(int(param.maximum) + self.rng.randint(1, 100))
            if param.minimum is not None and self.rng.random() < 0.5:
                return str(int(param.minimum) - self.rng.randint(1, 100))
            return self.rng.choice(['not_a_number', 'NaN_value', '12abc'])

        if param.type == 'boolean':
            return self.rng.choice(['maybe', 'yes_no', '2'])

        if param.type == 'object':
            return 'not_an_object'

        return None

    def can_invalidate(self, param: ParameterSpec) -> bool:
        return bool(param.enum_values) or param.type in ('integer', 'number', 'boolean', 'object')

    def _synthesize(self, param: ParameterSpec) -> str:
        name = param.name.lower()

        if param.type == 'integer':
            if param.minimum is not None:
                low = math.ceil(param.minimum)
            elif param.maximum is not None:
                low = math.floor(param.maximum) - 999
            else:
                low = 18 if 'age' in name else 1
            if param.maximum is not None:
                high = math.floor(param.maximum)
            elif 'age' in name:
                high = 80
            elif 'count' in name or 'size' in name or 'limit' in name:
                high = 100
            else:
                high = low + 999
            return str(self.rng.randint(low, max(low, high)))

        if param.type == 'number':
            if param.minimum is not None:
                low = float(param.minimum)
            elif param.maximum is not None:
                low = float(param.maximum) - 100.0
            else:
                low = 0.1
            high = float(param.maximum) if param.maximum is not None else low + 100.0
            value = round(self.rng.uniform(low, max(low, high)), 2)
            return str(min(max(value, low), max(low, high)))

        if param.type == 'boolean':
            return self.rng.choice(_BOOLEANS)

        if param.type == 'array':
            return ','.join(f"item_{i}" for i in range(self.rng.randint(1, 5)))

        if param.type == 'object':
            return json.dumps({"key": "value", "nested": {"data": self.rng.randint(1, 100)}})

        if 'email' in name:
            return f"user{self.rng.randint(1, 1000)}@example.com"
        if 'name' in name:
            return self.rng.choice(_NAMES)
        if name == 'id' or name.endswith('id'):
            return f"id_{self.rng.randint(1000, 9999)}"
        if 'date' in name:
            return f"20{self.rng.randint(10, 29)}-{self.rng.randint(1, 12):02d}-{self.rng.randint(1, 28):02d}"
        return self._random_word(5, 12)

    def _random_word(self, min_length: int, max_length: int) -> str:
        length = self.rng.randint(min_length, max_length)
        return ''.join(self.rng.choice(string.ascii_lowercase + string.digits) for _ in range(length))
