"""Focused constants organization."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ApplicationDefaults:
    """Default command line values."""
    CONFIG_FILE: str = "config/config.yaml"
    TEST_CONFIG_FILE: str = "config/test-config.yaml"
    LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class OracleConstants:
    """Names shared with the external oracle process."""
    EXCHANGE_FILE_NAME: str = "test-cases_pool.csv"


@dataclass(frozen=True)
class ApplicationMetadata:
    """Application metadata and system constants."""
    VERSION: str = "restsuite 1.0.0"
    EXIT_SUCCESS: int = 0
    EXIT_FAILURE: int = 1

    @property
    def strategies(self) -> List[str]:
        """Generation strategies selectable from the command line."""
        return ['random', 'oracle', 'search']


# Singleton instances for easy access
DEFAULTS = ApplicationDefaults()
ORACLE = OracleConstants()
APP = ApplicationMetadata()
