"""Data models for REST API test case generation."""

import uuid
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from datetime import datetime
from enum import Enum


class HttpMethod(Enum):
    """HTTP methods supported by generated test cases."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: Any) -> 'HttpMethod':
        """Parse a method name case-insensitively."""
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value}") from None


class ParameterLocation(Enum):
    """Where a parameter travels in the HTTP request."""
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM = "formData"
    BODY = "body"


# Constants for validation
class ValidationConstants:
    """Constants used in validation."""
    MIN_RATIO = 0.0
    MAX_RATIO = 1.0
    VALID_PARAMETER_TYPES = {"string", "integer", "number", "boolean", "array", "object"}
    VALID_STRATEGIES = {"random", "oracle", "search"}
    DEFAULT_RESPONSE = "default"


@dataclass
class ValidationResult:
    """Result of validation with errors, warnings, and confidence score."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    confidence: float = 1.0

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning to the validation result."""
        self.warnings.append(warning)

    def merge(self, other: 'ValidationResult', prefix: str = "") -> None:
        """Merge another validation result into this one."""
        prefix_str = f"{prefix}: " if prefix else ""
        self.errors.extend([f"{prefix_str}{error}" for error in other.errors])
        self.warnings.extend([f"{prefix_str}{warning}" for warning in other.warnings])
        if not other.is_valid:
            self.is_valid = False
        self.confidence = min(self.confidence, other.confidence)


class ValidationMixin:
    """Mixin class providing common validation utilities."""

    @staticmethod
    def _validate_non_empty_string(value: Optional[str], field_name: str) -> List[str]:
        """Validate that a string field is not empty."""
        errors = []
        if not value or not str(value).strip():
            errors.append(f"{field_name} cannot be empty")
        return errors

    @staticmethod
    def _validate_range(value: float, min_val: float, max_val: float, field_name: str) -> List[str]:
        """Validate that a numeric value is within range."""
        errors = []
        if not (min_val <= value <= max_val):
            errors.append(f"{field_name} must be between {min_val} and {max_val}")
        return errors

    @staticmethod
    def _validate_positive(value: float, field_name: str) -> List[str]:
        """Validate that a numeric value is positive."""
        errors = []
        if value <= 0:
            errors.append(f"{field_name} must be positive")
        return errors


@dataclass
class ParameterSpec(ValidationMixin):
    """Specification of one operation parameter."""
    name: str
    location: ParameterLocation = ParameterLocation.QUERY
    type: str = "string"
    required: bool = False
    enum_values: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    weight: float = 0.5

    def __str__(self) -> str:
        req_str = "required" if self.required else "optional"
        return f"{self.name} ({self.location.value}): {self.type} ({req_str})"

    def validate(self) -> ValidationResult:
        """Validate parameter specification."""
        result = ValidationResult(is_valid=True)

        for error in self._validate_non_empty_string(self.name, "Parameter name"):
            result.add_error(error)

        if self.type not in ValidationConstants.VALID_PARAMETER_TYPES:
            result.add_error(f"Unknown parameter type: {self.type}")

        for error in self._validate_range(self.weight, 0.0, 1.0, "Parameter weight"):
            result.add_error(error)

        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            result.add_error("Parameter minimum is greater than maximum")

        if self.location == ParameterLocation.PATH and not self.required:
            result.add_warning("Path parameters should be required")

        result.confidence = 1.0 if result.is_valid else 0.0
        return result


@dataclass
class Operation(ValidationMixin):
    """One documented API endpoint and method combination."""
    operation_id: str
    method: HttpMethod
    path: str
    parameters: List[ParameterSpec] = field(default_factory=list)
    responses: Dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.method.value} {self.path} ({self.operation_id})"

    def get_parameter(self, name: str, location: Optional[ParameterLocation] = None) -> Optional[ParameterSpec]:
        """Look up a parameter by name (and optionally by location)."""
        for param in self.parameters:
            if param.name == name and (location is None or param.location == location):
                return param
        return None

    @property
    def required_parameters(self) -> List[ParameterSpec]:
        return [p for p in self.parameters if p.required]

    def validate(self) -> ValidationResult:
        """Validate the operation description."""
        result = ValidationResult(is_valid=True)

        for error in self._validate_non_empty_string(self.operation_id, "Operation id"):
            result.add_error(error)

        for error in self._validate_non_empty_string(self.path, "Operation path"):
            result.add_error(error)

        for i, param in enumerate(self.parameters):
            result.merge(param.validate(), f"Parameter {i} ({param.name})")

        keys = [(p.location, p.name) for p in self.parameters]
        if len(keys) != len(set(keys)):
            result.add_error("Duplicate parameter names found")

        for param in self.parameters:
            if param.location == ParameterLocation.PATH and "{" + param.name + "}" not in self.path:
                result.add_error(f"Path parameter {param.name} does not appear in {self.path}")

        if not self.responses:
            result.add_warning("Operation documents no responses")

        result.confidence = 1.0 if result.is_valid else 0.5
        return result


def new_test_case_id(operation_id: str = "") -> str:
    """Create a unique test case identifier."""
    suffix = f"_{operation_id}" if operation_id else ""
    return f"test_{uuid.uuid4().hex[:12]}{suffix}"


@dataclass
class TestCase:
    """One HTTP interaction against an API operation.

    A test case may be mutated freely while it is a candidate or part of a
    search-based suite. Once ``finalize()`` has been called (after export)
    every attribute assignment raises ``AttributeError``.
    """
    test_case_id: str
    operation_id: str
    method: HttpMethod
    path: str
    path_parameters: Dict[str, str] = field(default_factory=dict)
    query_parameters: Dict[str, str] = field(default_factory=dict)
    header_parameters: Dict[str, str] = field(default_factory=dict)
    form_parameters: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    faulty: bool = False
    faulty_reason: str = ""
    expected_status_code: Optional[str] = None
    finalized: bool = field(default=False, compare=False)

    __test__ = False  # not a pytest test class

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "finalized", False):
            raise AttributeError(f"Test case {self.test_case_id} is finalized; cannot set {name}")
        super().__setattr__(name, value)

    def copy(self) -> 'TestCase':
        """Return an independent value copy (never finalized)."""
        return TestCase(
            test_case_id=self.test_case_id,
            operation_id=self.operation_id,
            method=self.method,
            path=self.path,
            path_parameters=dict(self.path_parameters),
            query_parameters=dict(self.query_parameters),
            header_parameters=dict(self.header_parameters),
            form_parameters=dict(self.form_parameters),
            body=self.body,
            faulty=self.faulty,
            faulty_reason=self.faulty_reason,
            expected_status_code=self.expected_status_code,
        )

    def finalize(self) -> None:
        """Freeze the test case once it has been exported."""
        self.finalized = True

    def parameters_for(self, location: ParameterLocation) -> Dict[str, str]:
        """Return the parameter map for a location."""
        if location == ParameterLocation.PATH:
            return self.path_parameters
        if location == ParameterLocation.QUERY:
            return self.query_parameters
        if location == ParameterLocation.HEADER:
            return self.header_parameters
        if location == ParameterLocation.FORM:
            return self.form_parameters
        raise ValueError(f"Location {location.value} has no parameter map")

    def get_parameter_value(self, param: ParameterSpec) -> Optional[str]:
        if param.location == ParameterLocation.BODY:
            return self.body
        return self.parameters_for(param.location).get(param.name)

    def set_parameter_value(self, param: ParameterSpec, value: str) -> None:
        if self.finalized:
            raise AttributeError(f"Test case {self.test_case_id} is finalized")
        if param.location == ParameterLocation.BODY:
            self.body = value
        else:
            self.parameters_for(param.location)[param.name] = value

    def remove_parameter(self, param: ParameterSpec) -> None:
        if self.finalized:
            raise AttributeError(f"Test case {self.test_case_id} is finalized")
        if param.location == ParameterLocation.BODY:
            self.body = None
        else:
            self.parameters_for(param.location).pop(param.name, None)

    def resolved_path(self) -> str:
        """Path with its path parameters substituted."""
        path = self.path
        for name, value in self.path_parameters.items():
            path = path.replace("{" + name + "}", value)
        return path

    def __str__(self) -> str:
        kind = "faulty" if self.faulty else "nominal"
        return f"{self.test_case_id}: {self.method.value} {self.path} ({kind})"


@dataclass
class TestResult:
    """Observed outcome of executing one test case."""
    test_case_id: str
    status_code: Optional[int]
    passed: bool
    response_body: str = ""
    response_time: float = 0.0
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    __test__ = False  # not a pytest test class

    def copy(self) -> 'TestResult':
        """Return an independent value copy."""
        return TestResult(
            test_case_id=self.test_case_id,
            status_code=self.status_code,
            passed=self.passed,
            response_body=self.response_body,
            response_time=self.response_time,
            error_message=self.error_message,
            timestamp=self.timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_case_id": self.test_case_id,
            "status_code": self.status_code,
            "passed": self.passed,
            "response_time": self.response_time,
            "error_message": self.error_message,
            "timestamp": self.timestamp.isoformat(),
        }
