"""Shared fixtures for restsuite tests."""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from restsuite.config.generator_config import GeneratorConfig
from restsuite.testcases.data_models import (
    HttpMethod, Operation, ParameterLocation, ParameterSpec, TestCase
)


@pytest.fixture
def config(tmp_path):
    """Configuration writing every file below the test's temporary directory."""
    resources = tmp_path / "oracle"
    resources.mkdir()
    return GeneratorConfig(
        experiment_name="unit",
        number_of_tests=10,
        faulty_ratio=0.3,
        random_seed=7,
        data_dir=str(tmp_path / "data"),
        resources_dir=str(resources),
        output_file=str(tmp_path / "suite.csv"),
    )


@pytest.fixture
def pet_operation():
    return Operation(
        operation_id="getPet",
        method=HttpMethod.GET,
        path="/pets/{petId}",
        parameters=[
            ParameterSpec("petId", ParameterLocation.PATH, "integer", required=True, minimum=1, maximum=100),
            ParameterSpec("status", ParameterLocation.QUERY, "string", required=True,
                          enum_values=["available", "sold"]),
            ParameterSpec("limit", ParameterLocation.QUERY, "integer", minimum=1, maximum=50),
            ParameterSpec("X-Trace", ParameterLocation.HEADER, "string"),
        ],
        responses={"200": "ok", "400": "bad request", "404": "not found"},
    )


@pytest.fixture
def add_pet_operation():
    return Operation(
        operation_id="addPet",
        method=HttpMethod.POST,
        path="/pets",
        parameters=[
            ParameterSpec("name", ParameterLocation.FORM, "string", required=True),
            ParameterSpec("age", ParameterLocation.FORM, "integer", minimum=0, maximum=30),
        ],
        responses={"201": "created", "default": "error"},
    )


def make_test_case(test_case_id="tc1", **overrides):
    """Build a small test case for data-level tests."""
    fields = dict(
        test_case_id=test_case_id,
        operation_id="getPet",
        method=HttpMethod.GET,
        path="/pets/{petId}",
        path_parameters={"petId": "5"},
        query_parameters={"status": "sold"},
    )
    fields.update(overrides)
    return TestCase(**fields)
