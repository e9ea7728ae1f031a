"""Resolution of the status code a test case is expected to produce."""

from typing import Optional

from restsuite.base_interfaces import MissingExpectedOutcomeError
from restsuite.testcases.data_models import TestCase, Operation, ValidationConstants


def _status_class(code: str) -> Optional[int]:
    if len(code) == 3 and code.isdigit():
        return int(code[0])
    if len(code) == 3 and code[0].isdigit() and code[1:].upper() == "XX":
        return int(code[0])
    return None


def resolve_expected_status_code(test_case: TestCase, operation: Operation) -> Optional[str]:
    """Find the documented response code matching a test's expected outcome.

    Lookup order:

    1. the test's explicit ``expected_status_code`` if the operation documents it;
    2. otherwise the first documented code of the matching class (2xx for
       nominal tests, 4xx for faulty ones);
    3. otherwise ``None`` if the operation has a ``default`` response, meaning
       only the response structure can be checked.

    Raises:
        MissingExpectedOutcomeError: If nothing matches and no default response
            exists.
    """
    responses = operation.responses
    has_default = ValidationConstants.DEFAULT_RESPONSE in responses

    if test_case.expected_status_code is not None:
        if test_case.expected_status_code in responses:
            return test_case.expected_status_code
        if has_default:
            return None
        raise MissingExpectedOutcomeError(
            f"Expected status code {test_case.expected_status_code} of test case "
            f"{test_case.test_case_id} is not among the response codes of {operation.operation_id}",
            test_case_id=test_case.test_case_id,
        )

    wanted_class = 4 if test_case.faulty else 2
    for code in responses:
        if _status_class(code) == wanted_class:
            return code

    if has_default:
        return None

    kind = "faulty" if test_case.faulty else "nominal"
    raise MissingExpectedOutcomeError(
        f"No {wanted_class}xx response documented for {kind} test case "
        f"{test_case.test_case_id} of {operation.operation_id} and no default response exists",
        test_case_id=test_case.test_case_id,
    )


def status_matches(expected: Optional[str], faulty: bool, status_code: Optional[int]) -> bool:
    """Verdict of an observed status code against the expected outcome.

    A 5xx response never passes. With no resolved code, nominal tests expect
    2xx and faulty tests expect 4xx.
    """
    if status_code is None or status_code >= 500:
        return False

    if expected is not None:
        expected_class = _status_class(expected)
        if expected.isdigit():
            return int(expected) == status_code
        if expected_class is not None:
            return status_code // 100 == expected_class

    return status_code // 100 == (4 if faulty else 2)
