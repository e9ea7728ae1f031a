"""File and CSV utility functions."""

import csv
from pathlib import Path
from typing import List, Union, Iterable
import logging

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def sanitize_filename(text: str, max_length: int = 50) -> str:
    """Sanitize text for use in a file or directory name.

    Args:
        text: Text to sanitize
        max_length: Maximum length of sanitized text

    Returns:
        Sanitized filename-safe text
    """
    clean_text = text.replace('\n', ' ').replace('\r', ' ').strip()
    clean_text = ''.join(c if c.isalnum() or c in '_-.' else '_' for c in clean_text)

    if len(clean_text) > max_length:
        clean_text = clean_text[:max_length]

    return clean_text


def ensure_directory(dir_path: PathLike) -> Path:
    """Ensure directory exists, create if needed."""
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Directory ensured: {path}")
    return path


def create_file_if_not_exists(file_path: PathLike) -> Path:
    """Create an empty file (and its parents) if it does not exist yet."""
    path = Path(file_path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.debug(f"Created empty file: {path}")
    return path


def read_csv_values(file_path: PathLike) -> List[str]:
    """Read the first column of every row of a CSV file.

    Args:
        file_path: CSV file with one value per row

    Returns:
        Values in file order; empty list if the file is missing
    """
    path = Path(file_path)
    if not path.exists():
        return []

    with open(path, 'r', encoding='utf-8', newline='') as f:
        return [row[0] for row in csv.reader(f) if row]


def write_csv_values(file_path: PathLike, values: Iterable[str]) -> None:
    """Rewrite a CSV file with one value per row."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f)
        for value in values:
            writer.writerow([value])


def append_csv_value(file_path: PathLike, value: str) -> None:
    """Append one value as a new row of a CSV file."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'a', encoding='utf-8', newline='') as f:
        csv.writer(f).writerow([value])
