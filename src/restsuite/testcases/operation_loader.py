"""Loading of the operations under test from a YAML test configuration."""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from restsuite.base_interfaces import ConfigurationError
from restsuite.testcases.data_models import HttpMethod, Operation, ParameterLocation, ParameterSpec
from restsuite.utils.logger import get_logger

logger = get_logger(__name__)


def _parse_parameter(raw: Dict[str, Any]) -> ParameterSpec:
    location_name = raw.get('in', 'query')
    try:
        location = ParameterLocation(location_name)
    except ValueError:
        raise ConfigurationError(f"Unknown parameter location '{location_name}' for {raw.get('name')}") from None

    return ParameterSpec(
        name=str(raw['name']),
        location=location,
        type=str(raw.get('type', 'string')),
        required=bool(raw.get('required', location == ParameterLocation.PATH)),
        enum_values=[str(v) for v in raw.get('enum', []) or []],
        examples=[str(v) for v in raw.get('examples', []) or []],
        minimum=raw.get('minimum'),
        maximum=raw.get('maximum'),
        weight=float(raw.get('weight', 0.5)),
    )


def _parse_responses(raw: Any) -> Dict[str, str]:
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return {str(code): str(description or "") for code, description in raw.items()}
    if isinstance(raw, list):
        return {str(code): "" for code in raw}
    raise ConfigurationError(f"responses must be a mapping or a list, got {type(raw).__name__}")


def parse_operation(raw: Dict[str, Any]) -> Operation:
    """Build an ``Operation`` from its dictionary description."""
    try:
        operation = Operation(
            operation_id=str(raw['operationId']),
            method=HttpMethod.parse(raw.get('method', 'GET')),
            path=str(raw['path']),
            parameters=[_parse_parameter(p) for p in raw.get('parameters', []) or []],
            responses=_parse_responses(raw.get('responses')),
        )
    except KeyError as e:
        raise ConfigurationError(f"Operation is missing required key {e}") from e
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    validation = operation.validate()
    if not validation.is_valid:
        raise ConfigurationError(
            f"Invalid operation {operation.operation_id}: {'; '.join(validation.errors)}"
        )
    for warning in validation.warnings:
        logger.warning(f"Operation {operation.operation_id}: {warning}")

    return operation


def load_test_configuration(config_path: Union[str, Path]) -> List[Operation]:
    """Load the operations to test from a YAML file.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Test configuration not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse test configuration {path}: {e}") from e

    raw_operations = raw_config.get('operations') or []
    if not isinstance(raw_operations, list):
        raise ConfigurationError("'operations' must be a list")

    operations = [parse_operation(raw) for raw in raw_operations]
    ids = [op.operation_id for op in operations]
    if len(ids) != len(set(ids)):
        raise ConfigurationError("Duplicate operation ids in test configuration")

    logger.info(f"Loaded {len(operations)} operations from {path}")
    return operations
