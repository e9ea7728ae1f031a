"""CSV exchange format for batches of test cases.

The same format is used for the file shared with the external oracle and for
exported suites. Each row holds one test case; parameter maps are URL-encoded
``name=value&...`` strings so that any character survives the round trip.
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Union
from urllib.parse import parse_qsl, urlencode

from restsuite.testcases.data_models import TestCase, HttpMethod
from restsuite.utils.logger import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = [
    "testCaseId",
    "operationId",
    "path",
    "httpMethod",
    "headerParameters",
    "pathParameters",
    "queryParameters",
    "formParameters",
    "bodyParameter",
    "hasBody",
    "faulty",
    "faultyReason",
    "expectedStatusCode",
]


def encode_parameters(parameters: Dict[str, str]) -> str:
    """Encode a parameter map as a single CSV field."""
    return urlencode(list(parameters.items()))


def decode_parameters(text: str) -> Dict[str, str]:
    """Decode a parameter map written by ``encode_parameters``."""
    if not text:
        return {}
    return dict(parse_qsl(text, keep_blank_values=True, strict_parsing=True))


def _to_row(test_case: TestCase) -> Dict[str, str]:
    return {
        "testCaseId": test_case.test_case_id,
        "operationId": test_case.operation_id,
        "path": test_case.path,
        "httpMethod": test_case.method.value,
        "headerParameters": encode_parameters(test_case.header_parameters),
        "pathParameters": encode_parameters(test_case.path_parameters),
        "queryParameters": encode_parameters(test_case.query_parameters),
        "formParameters": encode_parameters(test_case.form_parameters),
        "bodyParameter": test_case.body or "",
        "hasBody": "false" if test_case.body is None else "true",
        "faulty": "true" if test_case.faulty else "false",
        "faultyReason": test_case.faulty_reason,
        "expectedStatusCode": test_case.expected_status_code or "",
    }


def _from_row(row: Dict[str, str]) -> TestCase:
    body_field = row.get("bodyParameter") or ""
    has_body = row.get("hasBody") or ("true" if body_field else "false")
    return TestCase(
        test_case_id=row["testCaseId"],
        operation_id=row["operationId"],
        method=HttpMethod.parse(row["httpMethod"]),
        path=row["path"],
        header_parameters=decode_parameters(row.get("headerParameters") or ""),
        path_parameters=decode_parameters(row.get("pathParameters") or ""),
        query_parameters=decode_parameters(row.get("queryParameters") or ""),
        form_parameters=decode_parameters(row.get("formParameters") or ""),
        body=body_field if has_body.strip().lower() == "true" else None,
        faulty=(row.get("faulty") or "").strip().lower() == "true",
        faulty_reason=row.get("faultyReason") or "",
        expected_status_code=row.get("expectedStatusCode") or None,
    )


def write_test_cases(file_path: Union[str, Path], test_cases: Iterable[TestCase]) -> int:
    """Write test cases to a CSV file, replacing any previous content.

    Returns:
        Number of rows written
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for test_case in test_cases:
            writer.writerow(_to_row(test_case))
            count += 1

    logger.debug(f"Wrote {count} test cases to {path}")
    return count


def read_test_cases(file_path: Union[str, Path]) -> List[TestCase]:
    """Read test cases from a CSV file in the exchange format.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a row cannot be turned into a test case
    """
    path = Path(file_path)
    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)
        missing = {"testCaseId", "operationId", "path", "httpMethod"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path} is missing columns: {sorted(missing)}")
        test_cases = []
        for line_number, row in enumerate(reader, start=2):
            try:
                test_cases.append(_from_row(row))
            except (KeyError, ValueError) as e:
                raise ValueError(f"{path}:{line_number}: invalid test case row: {e}") from e

    logger.debug(f"Read {len(test_cases)} test cases from {path}")
    return test_cases
