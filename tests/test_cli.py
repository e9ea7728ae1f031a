"""End-to-end tests of the command line entry point."""

import yaml

from restsuite.cli import main
from restsuite.testcases.exchange import read_test_cases
from restsuite.utils.logger import Logger

OPERATIONS = {"operations": [
    {"operationId": "getPet", "method": "GET", "path": "/pets/{petId}",
     "parameters": [{"name": "petId", "in": "path", "type": "integer", "minimum": 1}],
     "responses": {"200": "ok", "404": "not found"}},
    {"operationId": "listPets", "method": "GET", "path": "/pets",
     "parameters": [{"name": "limit", "in": "query", "type": "integer", "required": True}],
     "responses": {"200": "ok", "400": "bad request"}},
]}


def write_files(tmp_path, generation):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"restsuite": {
        "generation": generation,
        "values": {"data_dir": str(tmp_path / "data")},
        "search": {"suite_size": 4, "population_size": 3, "generations": 2},
        "execution": {"max_workers": 1},
    }}), encoding="utf-8")
    test_config_path = tmp_path / "test-config.yaml"
    test_config_path.write_text(yaml.safe_dump(OPERATIONS), encoding="utf-8")
    return str(config_path), str(test_config_path)


def teardown_function(function):
    Logger.reset()


def test_random_generation_writes_suite(tmp_path):
    config_path, test_config_path = write_files(tmp_path, {"number_of_tests": 4, "faulty_ratio": 0.5})
    output = tmp_path / "out" / "suite.csv"

    exit_code = main(["-c", config_path, "-t", test_config_path, "-o", str(output), "--seed", "1"])

    assert exit_code == 0
    test_cases = read_test_cases(output)
    assert len(test_cases) == 8
    assert sum(1 for tc in test_cases if tc.faulty) == 4
    assert {tc.operation_id for tc in test_cases} == {"getPet", "listPets"}


def test_search_strategy_writes_best_suite(tmp_path):
    config_path, test_config_path = write_files(tmp_path, {"random_seed": 5})
    output = tmp_path / "search.csv"

    exit_code = main(["-c", config_path, "-t", test_config_path, "-s", "search", "-o", str(output)])

    assert exit_code == 0
    assert len(read_test_cases(output)) == 4


def test_configuration_errors_give_failure_exit_code(tmp_path):
    config_path, _ = write_files(tmp_path, {})

    assert main(["-c", config_path, "-t", str(tmp_path / "missing.yaml")]) == 1
    assert main(["-c", config_path, "-t", str(tmp_path / "missing.yaml"), "-f", "2"]) == 1


def test_oracle_strategy_without_resources_fails(tmp_path):
    config_path, test_config_path = write_files(tmp_path, {})
    config = yaml.safe_load((tmp_path / "config.yaml").read_text(encoding="utf-8"))
    config["restsuite"]["oracle"] = {"command": "predict", "resources_dir": str(tmp_path / "nowhere")}
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f)

    assert main(["-c", config_path, "-t", test_config_path, "-s", "oracle"]) == 1
