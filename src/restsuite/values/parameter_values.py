"""Persistent cache of valid and invalid values observed for a parameter."""

import threading
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Set, Tuple

from restsuite.utils.file_utils import (
    append_csv_value,
    create_file_if_not_exists,
    ensure_directory,
    read_csv_values,
    sanitize_filename,
    write_csv_values,
)
from restsuite.utils.logger import get_logger

logger = get_logger(__name__)

VALID_CSV = "valid.csv"
INVALID_CSV = "invalid.csv"
VALUES_DIR = "validAndInvalidValues"


class ParameterValueStore:
    """Valid and invalid values of one (experiment, operation, parameter).

    Values live in ``<data_dir>/<experiment>/validAndInvalidValues/<operation>/<parameter>/``
    as two CSV files with one value per row. Both files are created empty if
    absent and loaded at construction time. Changes made to the files by other
    processes are only seen after ``reload()``.

    The two sets are kept disjoint: recording a value as valid removes it from
    the invalid set (and its file), and vice versa.
    """

    def __init__(self, experiment_name: str, operation_id: str, parameter_name: str,
                 data_dir: str = "target/test-data"):
        self.experiment_name = experiment_name
        self.operation_id = operation_id
        self.parameter_name = parameter_name
        self.csv_dir = (
            Path(data_dir) / sanitize_filename(experiment_name, 100) / VALUES_DIR
            / sanitize_filename(operation_id, 100) / sanitize_filename(parameter_name, 100)
        )

        ensure_directory(self.csv_dir)
        create_file_if_not_exists(self.valid_csv_path)
        create_file_if_not_exists(self.invalid_csv_path)

        self._valid: Set[str] = set()
        self._invalid: Set[str] = set()
        self.reload()

    @property
    def valid_csv_path(self) -> Path:
        return self.csv_dir / VALID_CSV

    @property
    def invalid_csv_path(self) -> Path:
        return self.csv_dir / INVALID_CSV

    @property
    def valid_values(self) -> FrozenSet[str]:
        return frozenset(self._valid)

    @property
    def invalid_values(self) -> FrozenSet[str]:
        return frozenset(self._invalid)

    def reload(self) -> None:
        """Replace the in-memory sets with the content of the CSV files."""
        valid = set(read_csv_values(self.valid_csv_path))
        invalid = set(read_csv_values(self.invalid_csv_path))

        conflicting = valid & invalid
        if conflicting:
            # Both files were edited externally; invalid wins
            logger.warning(
                f"{len(conflicting)} values of {self.operation_id}.{self.parameter_name} "
                f"are both valid and invalid; treating them as invalid"
            )
            valid -= conflicting

        self._valid = valid
        self._invalid = invalid
        logger.debug(
            f"Loaded {len(self._valid)} valid and {len(self._invalid)} invalid values "
            f"for {self.operation_id}.{self.parameter_name}"
        )

    def is_valid(self, value: str) -> bool:
        return value in self._valid

    def is_invalid(self, value: str) -> bool:
        return value in self._invalid

    def record_valid(self, value: str) -> bool:
        """Record a value as valid.

        Returns:
            True if the stored sets changed
        """
        return self._record(value, self._valid, self.valid_csv_path, self._invalid, self.invalid_csv_path)

    def record_invalid(self, value: str) -> bool:
        """Record a value as invalid.

        Returns:
            True if the stored sets changed
        """
        return self._record(value, self._invalid, self.invalid_csv_path, self._valid, self.valid_csv_path)

    @staticmethod
    def _record(value: str, target: Set[str], target_path: Path,
                other: Set[str], other_path: Path) -> bool:
        if value in target:
            return False

        if value in other:
            other.discard(value)
            write_csv_values(other_path, sorted(other))

        target.add(value)
        append_csv_value(target_path, value)
        return True

    def __len__(self) -> int:
        return len(self._valid) + len(self._invalid)

    def __repr__(self) -> str:
        return (
            f"ParameterValueStore({self.experiment_name!r}, {self.operation_id!r}, "
            f"{self.parameter_name!r}, valid={len(self._valid)}, invalid={len(self._invalid)})"
        )


class ParameterValueRepository:
    """Lazily opened ``ParameterValueStore`` instances of one experiment.

    Opening stores and recording values through the repository is serialized,
    so one repository can be shared by the threads of a test executor.
    """

    def __init__(self, experiment_name: str, data_dir: str = "target/test-data"):
        self.experiment_name = experiment_name
        self.data_dir = data_dir
        self._stores: Dict[Tuple[str, str], ParameterValueStore] = {}
        self._lock = threading.RLock()

    def get_store(self, operation_id: str, parameter_name: str) -> ParameterValueStore:
        key = (operation_id, parameter_name)
        with self._lock:
            store = self._stores.get(key)
            if store is None:
                store = ParameterValueStore(self.experiment_name, operation_id, parameter_name, self.data_dir)
                self._stores[key] = store
            return store

    def record(self, operation_id: str, parameter_name: str, value: str, valid: bool = True) -> bool:
        """Record a value as valid or invalid in its store.

        Returns:
            True if the stored sets changed
        """
        with self._lock:
            store = self.get_store(operation_id, parameter_name)
            return store.record_valid(value) if valid else store.record_invalid(value)

    def find_store(self, operation_id: str, parameter_name: str) -> Optional[ParameterValueStore]:
        """Return a store only if it has already been opened."""
        return self._stores.get((operation_id, parameter_name))
