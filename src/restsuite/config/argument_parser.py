"""Command line argument parsing."""

import argparse
from typing import List, Optional
from .constants import DEFAULTS, APP


class ArgumentParserBuilder:
    """Builder for creating argument parser with fluent interface."""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="restsuite",
            description="Generate REST API test suites with random, oracle-driven or search-based strategies",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_usage_examples()
        )
        self._add_core_arguments()
        self._add_optional_arguments()

    def _add_core_arguments(self) -> None:
        """Add core arguments."""
        self.parser.add_argument(
            '--config', '-c',
            type=str,
            default=DEFAULTS.CONFIG_FILE,
            help=f'Generator configuration file (default: {DEFAULTS.CONFIG_FILE})'
        )

        self.parser.add_argument(
            '--test-config', '-t',
            type=str,
            default=DEFAULTS.TEST_CONFIG_FILE,
            help=f'Operations to test (default: {DEFAULTS.TEST_CONFIG_FILE})'
        )

        self.parser.add_argument(
            '--strategy', '-s',
            type=str,
            choices=APP.strategies,
            default=None,
            help='Generation strategy (overrides the configuration file)'
        )

    def _add_optional_arguments(self) -> None:
        """Add optional configuration arguments."""
        self.parser.add_argument(
            '--number-of-tests', '-n',
            type=int,
            default=None,
            help='Test cases to generate per operation'
        )

        self.parser.add_argument(
            '--faulty-ratio', '-f',
            type=float,
            default=None,
            help='Proportion of faulty test cases, between 0 and 1'
        )

        self.parser.add_argument(
            '--experiment', '-e',
            type=str,
            default=None,
            help='Experiment name used for stored parameter values'
        )

        self.parser.add_argument(
            '--output', '-o',
            type=str,
            default=None,
            help='CSV file receiving the generated test cases'
        )

        self.parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for reproducible generation'
        )

        self.parser.add_argument(
            '--log-level',
            type=str,
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
            default=None,
            help=f'Logging level (default: {DEFAULTS.LOG_LEVEL})'
        )

        self.parser.add_argument(
            '--version', '-V',
            action='version',
            version=APP.VERSION
        )

    def _get_usage_examples(self) -> str:
        """Get formatted usage examples."""
        return """
Examples:
  # Random generation, 20 tests per operation, 20% faulty
  restsuite --test-config config/test-config.yaml -n 20 -f 0.2

  # Let an external predictor select and label the candidates
  restsuite --strategy oracle --config config/config.yaml

  # Search-based suite generation against a running API
  restsuite --strategy search --log-level DEBUG
        """

    def build(self) -> argparse.ArgumentParser:
        """Build and return the configured parser."""
        return self.parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments using builder pattern."""
    parser = ArgumentParserBuilder().build()
    return parser.parse_args(argv)
