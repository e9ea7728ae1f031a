"""Tests for the base generator behaviour and the random strategy."""

import dataclasses

import pytest

from restsuite.auth.authenticator import NoAuthenticator, StaticAuthenticator, create_authenticator
from restsuite.base_interfaces import GenerationError, ValidationError
from restsuite.generators.base_generator import INVALID_PARAMETER_VALUE, MISSING_REQUIRED_PARAMETER
from restsuite.generators.random_generator import RandomTestCaseGenerator
from restsuite.testcases.data_models import HttpMethod, Operation, ParameterLocation, ParameterSpec
from restsuite.values.parameter_values import ParameterValueRepository


def test_ten_tests_at_thirty_percent(config, pet_operation):
    generator = RandomTestCaseGenerator(config)

    test_cases = generator.generate_for_operation(pet_operation)

    assert len(test_cases) == 10
    assert sum(1 for tc in test_cases if not tc.faulty) == 7
    assert sum(1 for tc in test_cases if tc.faulty) == 3
    assert len({tc.test_case_id for tc in test_cases}) == 10


def test_nominal_tests_pass_validity_check(config, pet_operation):
    generator = RandomTestCaseGenerator(config)

    for test_case in generator.generate_for_operation(pet_operation):
        if not test_case.faulty:
            generator.check_validity(test_case, pet_operation)
            assert test_case.faulty_reason == ""


def test_faulty_tests_carry_a_reason(config, pet_operation):
    generator = RandomTestCaseGenerator(config)

    faulty = [tc for tc in generator.generate_for_operation(pet_operation) if tc.faulty]

    assert faulty
    for test_case in faulty:
        assert test_case.faulty_reason in (MISSING_REQUIRED_PARAMETER, INVALID_PARAMETER_VALUE)
        with pytest.raises(ValidationError):
            generator.check_validity(test_case, pet_operation)


def test_each_operation_gets_a_fresh_index(config, pet_operation, add_pet_operation):
    generator = RandomTestCaseGenerator(config)

    generated = generator.generate([pet_operation, add_pet_operation])

    assert set(generated) == {"getPet", "addPet"}
    assert all(len(tests) == 10 for tests in generated.values())
    assert all(tc.operation_id == "addPet" for tc in generated["addPet"])


def test_random_valid_candidate_fills_required_parameters(config, pet_operation):
    generator = RandomTestCaseGenerator(config)

    candidate = generator.generate_random_valid_candidate(pet_operation)

    assert candidate.method == HttpMethod.GET
    assert "petId" in candidate.path_parameters
    assert candidate.query_parameters["status"] in ("available", "sold")
    assert 1 <= int(candidate.path_parameters["petId"]) <= 100
    assert "{" not in candidate.resolved_path()


def test_body_parameter_goes_to_body(config):
    operation = Operation("createPet", HttpMethod.POST, "/pets", parameters=[
        ParameterSpec("pet", ParameterLocation.BODY, "object", required=True),
    ], responses={"201": ""})
    generator = RandomTestCaseGenerator(config)

    candidate = generator.generate_random_valid_candidate(operation)

    assert candidate.body.startswith("{")
    generator.check_validity(candidate, operation)


def test_check_validity_reports_each_problem(config, pet_operation):
    generator = RandomTestCaseGenerator(config)
    candidate = generator.generate_random_valid_candidate(pet_operation)
    candidate.query_parameters["status"] = "lost"
    candidate.path_parameters["petId"] = "abc"

    with pytest.raises(ValidationError) as excinfo:
        generator.check_validity(candidate, pet_operation)

    assert excinfo.value.test_case_id == candidate.test_case_id
    assert len(excinfo.value.errors) == 2


def test_missing_required_parameter_is_invalid(config, pet_operation):
    generator = RandomTestCaseGenerator(config)
    candidate = generator.generate_random_valid_candidate(pet_operation)
    del candidate.query_parameters["status"]

    with pytest.raises(ValidationError, match="missing required parameter status"):
        generator.check_validity(candidate, pet_operation)


def test_valid_candidate_gives_up_after_max_attempts(config, pet_operation, monkeypatch):
    generator = RandomTestCaseGenerator(dataclasses.replace(config, max_attempts_per_candidate=3))
    index = generator.new_index()

    def always_invalid(test_case, operation):
        raise ValidationError("invalid", test_case_id=test_case.test_case_id)

    monkeypatch.setattr(generator, "check_validity", always_invalid)

    with pytest.raises(GenerationError):
        generator.generate_valid_candidate(pet_operation, index)
    assert index.generated == 3
    assert index.accepted == 0


def test_operation_without_faultable_parameter(config):
    operation = Operation("search", HttpMethod.GET, "/search", parameters=[
        ParameterSpec("q", ParameterLocation.QUERY, "string"),
    ], responses={"200": ""})
    generator = RandomTestCaseGenerator(config)

    assert not generator.can_generate_faulty(operation)
    with pytest.raises(GenerationError):
        generator.generate_faulty_candidate(operation)

    test_cases = generator.generate_for_operation(operation)

    assert len(test_cases) == 10
    assert not any(tc.faulty for tc in test_cases)


def test_parameterless_operation_with_default_ratio(config):
    operation = Operation("health", HttpMethod.GET, "/health", [], {"200": "ok"})
    generator = RandomTestCaseGenerator(dataclasses.replace(config, faulty_ratio=0.1))

    test_cases = generator.generate_for_operation(operation)

    assert len(test_cases) == 10
    assert all(not tc.faulty and tc.resolved_path() == "/health" for tc in test_cases)


def test_faultable_operation_keeps_its_faulty_quota(config, add_pet_operation):
    generator = RandomTestCaseGenerator(config)

    assert generator.can_generate_faulty(add_pet_operation)
    assert sum(1 for tc in generator.generate_for_operation(add_pet_operation) if tc.faulty) == 3


def test_integer_with_negative_maximum_only(config):
    operation = Operation("temps", HttpMethod.GET, "/temps", parameters=[
        ParameterSpec("below", ParameterLocation.QUERY, "integer", required=True, maximum=-1),
        ParameterSpec("delta", ParameterLocation.QUERY, "number", required=True, maximum=-0.5),
    ], responses={"200": ""})
    generator = RandomTestCaseGenerator(dataclasses.replace(config, faulty_ratio=0.0))

    test_cases = generator.generate_for_operation(operation)

    assert len(test_cases) == 10
    for test_case in test_cases:
        assert int(test_case.query_parameters["below"]) <= -1
        assert float(test_case.query_parameters["delta"]) <= -0.5


def test_stored_valid_values_are_reused(config):
    operation = Operation("findByOwner", HttpMethod.GET, "/pets", parameters=[
        ParameterSpec("owner", ParameterLocation.QUERY, "string", required=True),
    ], responses={"200": ""})
    repository = ParameterValueRepository(config.experiment_name, config.data_dir)
    repository.record("findByOwner", "owner", "stored-owner")
    generator = RandomTestCaseGenerator(
        dataclasses.replace(config, stored_value_probability=1.0), value_repository=repository
    )

    candidate = generator.generate_random_valid_candidate(operation)

    assert candidate.query_parameters["owner"] == "stored-owner"


def test_accepted_tests_are_authenticated(config, pet_operation):
    authenticator = StaticAuthenticator(headers={"Authorization": "Bearer token"})
    generator = RandomTestCaseGenerator(config, authenticator=authenticator)

    test_cases = generator.generate_for_operation(pet_operation)

    assert all(tc.header_parameters["Authorization"] == "Bearer token" for tc in test_cases)


def test_authenticators_do_not_modify_their_input(config, pet_operation):
    generator = RandomTestCaseGenerator(config)
    candidate = generator.generate_random_valid_candidate(pet_operation)
    before = candidate.copy()

    authenticated = StaticAuthenticator({"X-Key": "k"}, {"apikey": "q"}).authenticate(candidate)

    assert candidate == before
    assert authenticated is not candidate
    assert authenticated.header_parameters["X-Key"] == "k"
    assert authenticated.query_parameters["apikey"] == "q"
    assert NoAuthenticator().authenticate(candidate) == candidate


def test_create_authenticator_from_config(config):
    assert isinstance(create_authenticator(config), NoAuthenticator)
    configured = dataclasses.replace(config, auth_headers={"Authorization": "x"})
    assert isinstance(create_authenticator(configured), StaticAuthenticator)


def test_same_seed_gives_same_values(config, pet_operation):
    first = RandomTestCaseGenerator(config).generate_for_operation(pet_operation)
    second = RandomTestCaseGenerator(config).generate_for_operation(pet_operation)

    assert [tc.query_parameters for tc in first] == [tc.query_parameters for tc in second]
    assert [tc.faulty for tc in first] == [tc.faulty for tc in second]
