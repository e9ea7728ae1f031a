"""Command-line interface for restsuite."""

import sys
from typing import Dict, List, Optional

from restsuite.base_interfaces import RestSuiteError
from restsuite.config.argument_parser import parse_arguments
from restsuite.config.config_manager import GeneratorConfigManager
from restsuite.config.constants import APP, DEFAULTS
from restsuite.config.generator_config import GeneratorConfig
from restsuite.execution.test_executor import TestExecutor
from restsuite.generators.factory import create_generator
from restsuite.searchbased.evolution import EvolutionaryOptimizer
from restsuite.searchbased.problem import TestSuiteGenerationProblem
from restsuite.testcases.data_models import Operation, TestCase
from restsuite.testcases.exchange import write_test_cases
from restsuite.testcases.operation_loader import load_test_configuration
from restsuite.utils.logger import Logger, get_logger


def load_configuration(args) -> GeneratorConfig:
    """Load the configuration file and apply command line overrides."""
    manager = GeneratorConfigManager(args.config)
    manager.load_config()
    return manager.update_config(
        strategy=args.strategy,
        number_of_tests=args.number_of_tests,
        faulty_ratio=args.faulty_ratio,
        experiment_name=args.experiment,
        output_file=args.output,
        random_seed=args.seed,
        log_level=args.log_level,
    )


def run_generation(config: GeneratorConfig, operations: List[Operation]) -> List[TestCase]:
    """Generate test cases with the random or oracle-driven strategy."""
    logger = get_logger("cli")
    generator = create_generator(config)
    generated = generator.generate(operations)

    test_cases = [tc for op in operations for tc in generated.get(op.operation_id, [])]
    if config.base_url:
        executor = TestExecutor.from_config(config, generator.value_repository)
        operations_by_id = {op.operation_id: op for op in operations}
        results = executor.run_test_suite(test_cases, operations_by_id)
        for result in results:
            if not result.passed:
                logger.warning(f"Test {result.test_case_id} failed: {result.error_message}")
    return test_cases


def run_search(config: GeneratorConfig, operations: List[Operation]) -> List[TestCase]:
    """Evolve a single suite with the search-based strategy."""
    logger = get_logger("cli")
    generator = create_generator(config)

    executor = None
    if config.base_url:
        executor = TestExecutor.from_config(config, generator.value_repository)
    else:
        logger.warning("No base URL configured; suites are ranked without executing them")

    problem = TestSuiteGenerationProblem(operations, generator, config.suite_size, executor)
    best = EvolutionaryOptimizer.from_config(problem, config).run()
    logger.info(f"Best suite: {len(best)} test cases, fitness {best.fitness}")
    return best.variables


def export_test_cases(test_cases: List[TestCase], output_file: str) -> int:
    """Write the final suite and freeze its test cases."""
    count = write_test_cases(output_file, test_cases)
    for test_case in test_cases:
        test_case.finalize()
    return count


def summarize(test_cases: List[TestCase]) -> Dict[str, int]:
    faulty = sum(1 for tc in test_cases if tc.faulty)
    return {'total': len(test_cases), 'nominal': len(test_cases) - faulty, 'faulty': faulty}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI tool."""
    args = parse_arguments(argv)
    Logger.configure(level=args.log_level or DEFAULTS.LOG_LEVEL)
    logger = get_logger("cli")

    try:
        config = load_configuration(args)
        Logger.configure(level=config.log_level, log_to_file=config.log_to_file, log_dir=config.log_dir)

        logger.info("=" * 60)
        logger.info(f"{APP.VERSION} - strategy: {config.strategy}")
        logger.info("=" * 60)

        operations = load_test_configuration(args.test_config)
        logger.info(f"Loaded {len(operations)} operations from {args.test_config}")

        if config.strategy == 'search':
            test_cases = run_search(config, operations)
        else:
            test_cases = run_generation(config, operations)

        count = export_test_cases(test_cases, config.output_file)
        summary = summarize(test_cases)
        logger.info(f"Wrote {count} test cases to {config.output_file} "
                    f"({summary['nominal']} nominal, {summary['faulty']} faulty)")

    except RestSuiteError as e:
        logger.error(f"Generation failed: {e}")
        return APP.EXIT_FAILURE

    return APP.EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
