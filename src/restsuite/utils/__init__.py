"""Utility modules for restsuite."""

from .logger import get_logger, Logger

format_test_case = Logger.format_test_case
format_index_summary = Logger.format_index_summary

from .file_utils import (
    sanitize_filename,
    ensure_directory,
    create_file_if_not_exists,
    read_csv_values,
    write_csv_values,
    append_csv_value,
)

__all__ = [
    'get_logger',
    'Logger',
    'format_test_case',
    'format_index_summary',

    'sanitize_filename',
    'ensure_directory',
    'create_file_if_not_exists',
    'read_csv_values',
    'write_csv_values',
    'append_csv_value',
]
