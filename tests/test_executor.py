"""Tests for the HTTP test executor."""

from unittest.mock import MagicMock

import pytest
import requests

from restsuite.base_interfaces import ConfigurationError, MissingExpectedOutcomeError
from restsuite.execution.test_executor import TestExecutor
from restsuite.testcases.data_models import HttpMethod, Operation
from restsuite.values.parameter_values import ParameterValueRepository
from conftest import make_test_case


def mock_session(*status_codes):
    session = MagicMock(spec=requests.Session)
    responses = []
    for status in status_codes:
        response = MagicMock()
        response.status_code = status
        response.text = f"status {status}"
        responses.append(response)
    session.request.side_effect = responses
    return session


def test_nominal_request_is_sent_and_passes(pet_operation):
    session = mock_session(200)
    executor = TestExecutor("http://api.test/v1/", session=session)
    test_case = make_test_case(header_parameters={"X-Trace": "abc"})

    result = executor.execute_test(test_case, pet_operation)

    session.request.assert_called_once_with(
        "GET",
        "http://api.test/v1/pets/5",
        params={"status": "sold"},
        headers={"X-Trace": "abc"},
        data=None,
        timeout=10.0,
    )
    assert result.passed
    assert result.status_code == 200
    assert result.test_case_id == test_case.test_case_id
    assert result.response_body == "status 200"


def test_faulty_request_expects_client_error(pet_operation):
    executor = TestExecutor("http://api.test", session=mock_session(400, 200, 500))
    faulty = make_test_case(faulty=True)

    assert executor.execute_test(faulty, pet_operation).passed
    assert not executor.execute_test(faulty, pet_operation).passed
    server_error = executor.execute_test(faulty, pet_operation)
    assert not server_error.passed
    assert "500" in server_error.error_message


def test_form_parameters_are_sent_as_data(add_pet_operation):
    session = mock_session(201)
    executor = TestExecutor("http://api.test", session=session)
    test_case = make_test_case(operation_id="addPet", method=HttpMethod.POST, path="/pets",
                               path_parameters={}, query_parameters={}, form_parameters={"name": "Rex"})

    result = executor.execute_test(test_case, add_pet_operation)

    assert result.passed
    assert session.request.call_args.kwargs["data"] == {"name": "Rex"}
    assert session.request.call_args.kwargs["params"] is None


def test_connection_errors_become_failed_results(pet_operation):
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = requests.exceptions.ConnectionError("refused")
    executor = TestExecutor("http://api.test", session=session)

    result = executor.execute_test(make_test_case(), pet_operation)

    assert not result.passed
    assert result.status_code is None
    assert "refused" in result.error_message


def test_missing_expected_outcome_propagates():
    operation = Operation("getPet", HttpMethod.GET, "/pets/{petId}", responses={"200": ""})
    executor = TestExecutor("http://api.test", session=mock_session(400))

    with pytest.raises(MissingExpectedOutcomeError):
        executor.execute_test(make_test_case(faulty=True), operation)


def test_unjudgeable_test_does_not_abort_the_suite(caplog):
    operation = Operation("getPet", HttpMethod.GET, "/pets/{petId}", responses={"200": ""})
    session = mock_session(200)
    executor = TestExecutor("http://api.test", session=session, max_workers=2)
    nominal = make_test_case("nominal")
    faulty = make_test_case("faulty", faulty=True)

    with caplog.at_level("ERROR", logger="restsuite"):
        results = executor.run_test_suite([nominal, faulty], {"getPet": operation})

    assert [r.test_case_id for r in results] == ["nominal", "faulty"]
    assert results[0].passed
    assert not results[1].passed
    assert results[1].status_code is None
    assert results[1].error_message
    assert session.request.call_count == 1
    assert any("Cannot judge faulty" in record.getMessage() for record in caplog.records)


def test_passing_nominal_values_are_recorded(tmp_path, pet_operation):
    repository = ParameterValueRepository("exp", str(tmp_path))
    executor = TestExecutor("http://api.test", session=mock_session(200, 400),
                            value_repository=repository)

    executor.execute_test(make_test_case(), pet_operation)
    executor.execute_test(make_test_case(query_parameters={"status": "available"}), pet_operation)

    assert repository.get_store("getPet", "status").valid_values == {"sold"}
    assert repository.get_store("getPet", "petId").valid_values == {"5"}


def test_suite_results_keep_input_order(pet_operation):
    session = MagicMock(spec=requests.Session)

    def respond(method, url, **kwargs):
        response = MagicMock()
        response.status_code = 200
        response.text = url
        return response

    session.request.side_effect = respond
    executor = TestExecutor("http://api.test", session=session, max_workers=3)
    test_cases = [make_test_case(f"tc{i}", path_parameters={"petId": str(i)}) for i in range(8)]

    results = executor.run_test_suite(test_cases, {"getPet": pet_operation})

    assert [r.test_case_id for r in results] == [f"tc{i}" for i in range(8)]
    assert [r.response_body for r in results] == [f"http://api.test/pets/{i}" for i in range(8)]
    assert all(r.passed for r in results)
    assert executor.run_test_suite([]) == []


def test_base_url_is_required():
    with pytest.raises(ConfigurationError):
        TestExecutor("")
