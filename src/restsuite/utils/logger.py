"""Logging utility for restsuite."""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional, Any


ROOT_LOGGER_NAME = "restsuite"


class Logger:
    """Centralized logging utility."""

    _instance: Optional[logging.Logger] = None

    @classmethod
    def configure(cls, level: str = "INFO",
                  log_to_file: bool = False,
                  log_dir: str = "logs") -> logging.Logger:
        """Configure the root ``restsuite`` logger.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Whether to log to file
            log_dir: Directory for log files

        Returns:
            Configured root logger
        """
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(getattr(logging, level.upper()))

        # Clear existing handlers
        logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_to_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = log_path / f"restsuite_{timestamp}.log"

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            logger.info(f"Logging to file: {log_file}")

        cls._instance = logger
        return logger

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """Get a logger below the ``restsuite`` root logger.

        The root logger is configured with defaults on first use.

        Args:
            name: Component name; module names already under ``restsuite``
                are used as they are

        Returns:
            Logger instance
        """
        if cls._instance is None:
            cls.configure()

        if not name or name == ROOT_LOGGER_NAME:
            return logging.getLogger(ROOT_LOGGER_NAME)
        if name.startswith(ROOT_LOGGER_NAME + "."):
            return logging.getLogger(name)
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    @classmethod
    def reset(cls):
        """Reset the logger instance."""
        cls._instance = None

    @classmethod
    def format_test_case(cls, test_case: Any, max_length: int = 80) -> str:
        """Format a test case for logging."""
        if test_case is None:
            return "<none>"
        test_id = getattr(test_case, "test_case_id", "")
        method = getattr(test_case, "method", None)
        path = getattr(test_case, "path", "")
        faulty = getattr(test_case, "faulty", False)
        reason = getattr(test_case, "faulty_reason", "")

        method_name = getattr(method, "value", method) or "?"
        short_path = path if len(path) <= max_length else path[:max_length] + "..."

        parts = [f"{method_name} {short_path}", f"id={test_id}"]
        parts.append("faulty" if faulty else "nominal")
        if reason:
            parts.append(f"reason={reason}")
        return " | ".join(parts)

    @classmethod
    def format_index_summary(cls, index: Any) -> str:
        """Format generation counters for logging."""
        if index is None:
            return "index unavailable"
        return (
            f"accepted={index.accepted}/{index.target} "
            f"nominal={index.nominal}/{index.nominal_quota} "
            f"faulty={index.faulty}/{index.faulty_quota} "
            f"generated={index.generated}"
        )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Convenience function to get logger.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return Logger.get_logger(name)
