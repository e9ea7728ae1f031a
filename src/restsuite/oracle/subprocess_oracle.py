"""Oracle running as an external process that communicates through a CSV file."""

import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from restsuite.base_interfaces import ConfigurationError, OracleInvocationError, TestCaseOracle
from restsuite.config.constants import ORACLE
from restsuite.config.generator_config import GeneratorConfig
from restsuite.testcases.data_models import TestCase
from restsuite.testcases.exchange import read_test_cases, write_test_cases
from restsuite.utils.logger import get_logger


class SubprocessOracle(TestCaseOracle):
    """Labels candidates by running an external predictor command.

    Each call rewrites the exchange file with the candidates, runs::

        <command> <resources_dir> <exchange_path> <query_strategy> <remaining> <faulty_ratio>

    and blocks until the process exits. The process leaves in the exchange
    file only the candidates it selected, with their ``faulty`` flag set.

    Two instances must not share a resources directory when used concurrently.
    """

    def __init__(self, command: Union[str, Sequence[str]], resources_dir: str,
                 query_strategy: str = "uncertainty", timeout: Optional[float] = None):
        """Initialize the oracle.

        Args:
            command: Predictor command, as a string (split shell-style) or argument list
            resources_dir: Directory shared with the predictor; must exist
            query_strategy: Strategy the predictor uses to choose candidates
            timeout: Seconds to wait for the predictor; None waits indefinitely

        Raises:
            ConfigurationError: If the command is empty or the resources directory is missing
        """
        self.logger = get_logger("SubprocessOracle")

        self.command = shlex.split(command) if isinstance(command, str) else list(command or [])
        if not self.command:
            raise ConfigurationError("No oracle command configured")

        self.resources_dir = Path(resources_dir)
        if not self.resources_dir.is_dir():
            raise ConfigurationError(f"Oracle resources directory not found: {self.resources_dir}")

        self.query_strategy = query_strategy
        self.timeout = timeout
        self.exchange_path = self.resources_dir / ORACLE.EXCHANGE_FILE_NAME

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> 'SubprocessOracle':
        """Create an oracle from the ``oracle`` configuration section."""
        return cls(
            command=config.get_oracle_command() or "",
            resources_dir=config.resources_dir,
            query_strategy=config.query_strategy,
            timeout=config.oracle_timeout,
        )

    def build_arguments(self, remaining: int, faulty_ratio: float) -> List[str]:
        """Full argument vector for one invocation."""
        return self.command + [
            str(self.resources_dir),
            str(self.exchange_path),
            self.query_strategy,
            str(int(remaining)),
            str(float(faulty_ratio)),
        ]

    def label(self, candidates: List[TestCase], remaining: int, faulty_ratio: float) -> List[TestCase]:
        written = write_test_cases(self.exchange_path, candidates)
        args = self.build_arguments(remaining, faulty_ratio)
        self.logger.debug(f"Running oracle on {written} candidates: {' '.join(args)}")

        try:
            subprocess.run(args, check=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise OracleInvocationError(f"Oracle command not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise OracleInvocationError(f"Oracle timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise OracleInvocationError(f"Oracle exited with status {e.returncode}") from e
        except OSError as e:
            raise OracleInvocationError(f"Oracle could not be started: {e}") from e

        try:
            labeled = read_test_cases(self.exchange_path)
        except (OSError, ValueError) as e:
            raise OracleInvocationError(f"Could not read oracle output {self.exchange_path}: {e}") from e

        self.logger.debug(f"Oracle kept {len(labeled)} of {written} candidates")
        return labeled
