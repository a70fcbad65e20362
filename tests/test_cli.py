import argparse
import json

import pytest

from knapsacksolver.algorithm_formatter import Parameters
from knapsacksolver.cli import main, run
from knapsacksolver.dynamic_programming_bellman import dynamic_programming_bellman_array_all
from knapsacksolver.instance import InstanceBuilder
from knapsacksolver.solution import read_solution

ITEMS = [(24, 12), (13, 7), (23, 11), (15, 8), (16, 9), (31, 15), (9, 5)]
CAPACITY = 30


def _instance():
    builder = InstanceBuilder()
    builder.set_capacity(CAPACITY)
    for profit, weight in ITEMS:
        builder.add_item(profit, weight)
    return builder.build()


def _write_instance(tmp_path):
    path = tmp_path / "instance.txt"
    lines = [f"{len(ITEMS)} {CAPACITY}"] + [f"{p} {w}" for p, w in ITEMS]
    path.write_text("\n".join(lines) + "\n")
    return path


def _args(**overrides):
    values = dict(
        algorithm=None, input="", format="", output="", initial_solution="",
        certificate="", seed=0, time_limit=None, verbosity_level=0,
        only_write_at_the_end=False, partial_solution_size=None)
    values.update(overrides)
    return argparse.Namespace(**values)


def _expected():
    return dynamic_programming_bellman_array_all(
        _instance(), Parameters(verbosity_level=0)).value


@pytest.mark.parametrize("algorithm", [
    "dynamic-programming-bellman-rec",
    "dynamic-programming-bellman-array-all",
    "dynamic-programming-bellman-array-one",
    "dynamic-programming-bellman-array-part",
    "dynamic-programming-bellman-array-rec",
])
def test_main_writes_certificate_and_json(tmp_path, algorithm):
    instance_path = _write_instance(tmp_path)
    certificate = tmp_path / "solution.txt"
    json_path = tmp_path / "output.json"
    code = main([
        "-i", str(instance_path), "-a", algorithm, "-v", "0",
        "-c", str(certificate), "-o", str(json_path)])
    assert code == 0
    expected = _expected()
    solution = read_solution(_instance(), str(certificate))
    assert solution.profit == expected
    assert solution.feasible
    data = json.loads(json_path.read_text())
    assert data["Output"]["Value"] == expected
    assert data["Output"]["Bound"] == expected
    assert data["IntermediaryOutputs"]


@pytest.mark.parametrize("algorithm", [
    "dynamic-programming-bellman-array",
    "dynamic-programming-bellman-array-parallel",
])
def test_run_value_only_algorithms(algorithm):
    output = run(_instance(), _args(algorithm=algorithm))
    assert output.value == _expected()
    assert output.bound == output.value


def test_run_default_algorithm_with_partial_solution_size():
    output = run(_instance(), _args(partial_solution_size=2))
    assert output.value == _expected()
    assert output.solution.profit == output.value


def test_run_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        run(_instance(), _args(algorithm="minknap-unknown"))


def test_run_missing_initial_solution(tmp_path):
    with pytest.raises(OSError):
        run(_instance(), _args(initial_solution=str(tmp_path / "missing.txt")))


def test_only_write_at_the_end(tmp_path):
    instance_path = _write_instance(tmp_path)
    certificate = tmp_path / "solution.txt"
    code = main([
        "-i", str(instance_path), "-v", "0", "-e", "-c", str(certificate)])
    assert code == 0
    assert read_solution(_instance(), str(certificate)).profit == _expected()


def test_time_limit_zero_gives_empty_certificate(tmp_path):
    instance_path = _write_instance(tmp_path)
    certificate = tmp_path / "solution.txt"
    json_path = tmp_path / "output.json"
    code = main([
        "-i", str(instance_path), "-a", "dynamic-programming-bellman-array-one",
        "-v", "0", "-t", "0", "-c", str(certificate), "-o", str(json_path)])
    assert code == 0
    assert certificate.read_text() == "0\n"
    assert json.loads(json_path.read_text())["Output"]["Value"] == 0


def test_missing_input_returns_one():
    assert main(["-v", "0"]) == 1


def test_help_returns_one():
    assert main(["--help"]) == 1


def test_unknown_format_raises(tmp_path):
    instance_path = _write_instance(tmp_path)
    with pytest.raises(ValueError, match="Unknown instance format"):
        main(["-i", str(instance_path), "-f", "unknown", "-v", "0"])