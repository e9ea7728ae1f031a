"""Configuration model for test suite generation."""

import platform
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from restsuite.testcases.data_models import ValidationConstants, ValidationMixin, ValidationResult


@dataclass
class GeneratorConfig(ValidationMixin):
    """Configuration for the generators, the oracle and the search."""

    # Generation
    strategy: str = "random"
    experiment_name: str = "restsuite"
    number_of_tests: int = 10
    faulty_ratio: float = 0.1
    max_attempts_per_candidate: int = 50
    random_seed: Optional[int] = None

    # External oracle
    oracle_command: Optional[str] = None
    oracle_command_windows: Optional[str] = None
    resources_dir: str = "target/oracle"
    query_strategy: str = "uncertainty"
    number_of_candidates: int = 5
    max_rounds: Optional[int] = None
    oracle_timeout: Optional[float] = None

    # Parameter values
    data_dir: str = "target/test-data"
    use_stored_values: bool = True
    stored_value_probability: float = 0.5

    # Authentication
    auth_headers: Dict[str, str] = field(default_factory=dict)
    auth_query_parameters: Dict[str, str] = field(default_factory=dict)

    # Execution
    base_url: Optional[str] = None
    request_timeout: float = 10.0
    max_workers: int = 4

    # Search-based generation
    suite_size: int = 10
    population_size: int = 10
    generations: int = 20
    mutation_probability: float = 0.3
    tournament_size: int = 2

    # Output
    output_file: str = "target/test-cases.csv"
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'GeneratorConfig':
        """Create GeneratorConfig from a flat dictionary."""
        return cls(**{k: v for k, v in config_dict.items()
                      if k in cls.__dataclass_fields__})

    def get_oracle_command(self) -> Optional[str]:
        """Oracle command for the current operating system."""
        if platform.system() == "Windows" and self.oracle_command_windows:
            return self.oracle_command_windows
        return self.oracle_command

    def validate(self) -> ValidationResult:
        """Validate generator configuration."""
        result = ValidationResult(is_valid=True)

        if self.strategy not in ValidationConstants.VALID_STRATEGIES:
            result.add_error(
                f"Unknown strategy '{self.strategy}'. "
                f"Valid strategies: {sorted(ValidationConstants.VALID_STRATEGIES)}"
            )

        for error in self._validate_non_empty_string(self.experiment_name, "experiment_name"):
            result.add_error(error)

        if self.number_of_tests < 0:
            result.add_error("number_of_tests cannot be negative")

        for error in self._validate_range(
            self.faulty_ratio,
            ValidationConstants.MIN_RATIO,
            ValidationConstants.MAX_RATIO,
            "faulty_ratio"
        ):
            result.add_error(error)

        for error in self._validate_positive(self.max_attempts_per_candidate, "max_attempts_per_candidate"):
            result.add_error(error)

        for error in self._validate_positive(self.number_of_candidates, "number_of_candidates"):
            result.add_error(error)

        if self.max_rounds is not None:
            for error in self._validate_positive(self.max_rounds, "max_rounds"):
                result.add_error(error)

        if self.oracle_timeout is not None:
            for error in self._validate_positive(self.oracle_timeout, "oracle_timeout"):
                result.add_error(error)

        if self.strategy == "oracle":
            if not self.get_oracle_command():
                result.add_error("oracle_command is required for the oracle strategy")
            for error in self._validate_non_empty_string(self.query_strategy, "query_strategy"):
                result.add_error(error)

        for error in self._validate_range(
            self.stored_value_probability, 0.0, 1.0, "stored_value_probability"
        ):
            result.add_error(error)

        for error in self._validate_positive(self.request_timeout, "request_timeout"):
            result.add_error(error)

        if self.max_workers < 1:
            result.add_error("max_workers must be at least 1")

        for name in ("suite_size", "population_size", "generations", "tournament_size"):
            for error in self._validate_positive(getattr(self, name), name):
                result.add_error(error)

        for error in self._validate_range(self.mutation_probability, 0.0, 1.0, "mutation_probability"):
            result.add_error(error)

        if self.tournament_size > self.population_size:
            result.add_warning("tournament_size is larger than population_size")

        if self.faulty_ratio > 0 and self.number_of_tests > 0 and round(self.number_of_tests * self.faulty_ratio) == 0:
            result.add_warning("faulty_ratio is too small to produce any faulty test case")

        result.confidence = 1.0 if result.is_valid else 0.5
        return result

    @classmethod
    def get_default_config(cls) -> 'GeneratorConfig':
        """Get default configuration with safe values."""
        return cls()
