import io
import json
import math

from knapsacksolver.algorithm_formatter import AlgorithmFormatter, Output, Parameters
from knapsacksolver.instance import PROFIT_MAX, InstanceBuilder
from knapsacksolver.solution import Solution


def _instance():
    builder = InstanceBuilder()
    builder.set_capacity(10)
    builder.add_item(6, 4)
    builder.add_item(5, 5)
    builder.add_item(7, 6)
    return builder.build()


def _formatter(**kwargs):
    kwargs.setdefault("verbosity_level", 0)
    parameters = Parameters(**kwargs)
    output = Output(_instance())
    return AlgorithmFormatter(parameters, output), output


def test_initial_output():
    output = Output(_instance())
    assert output.value == 0
    assert output.bound == PROFIT_MAX
    assert not output.has_solution()
    assert output.solution.number_of_items == 0


def test_update_value_only_when_better():
    formatter, output = _formatter()
    formatter.update_value(7, "a")
    assert output.value == 7
    formatter.update_value(5, "b")
    assert output.value == 7


def test_update_bound_only_when_lower():
    formatter, output = _formatter()
    formatter.update_bound(20, "a")
    assert output.bound == 20
    formatter.update_bound(30, "b")
    assert output.bound == 20


def test_update_solution_stores_copy():
    formatter, output = _formatter()
    solution = Solution(output.instance)
    solution.add(0)
    solution.add(1)
    formatter.update_solution(solution, "s")
    solution.remove(0)
    assert output.solution.item_ids == [0, 1]
    assert output.value == output.solution.profit
    assert output.has_solution()


def test_update_solution_rejects_infeasible_and_worse():
    formatter, output = _formatter()
    infeasible = Solution(output.instance)
    infeasible.fill()
    formatter.update_solution(infeasible, "s")
    assert output.solution.number_of_items == 0
    good = Solution(output.instance)
    good.add(0)
    good.add(2)
    formatter.update_solution(good, "good")
    worse = Solution(output.instance)
    worse.add(1)
    formatter.update_solution(worse, "worse")
    assert output.solution.item_ids == [0, 2]


def test_solution_equal_to_value_accepted_without_solution():
    formatter, output = _formatter()
    solution = Solution(output.instance)
    solution.add(0)
    formatter.update_value(solution.profit, "value")
    formatter.update_solution(solution, "solution")
    assert output.solution.item_ids == [0]


def test_callback_called_on_updates():
    seen = []
    formatter, output = _formatter(new_solution_callback=lambda o: seen.append(o.value))
    formatter.update_value(3, "a")
    formatter.update_value(2, "b")
    formatter.update_value(4, "c")
    assert seen == [3, 4]


def test_json_output_records():
    formatter, output = _formatter(json_output=True)
    formatter.start("Test")
    formatter.update_value(4, "a")
    formatter.update_bound(9, "b")
    formatter.end()
    assert "Parameters" in output.json
    assert len(output.json["IntermediaryOutputs"]) == 2
    assert output.json["Output"]["Value"] == 4
    assert output.json["Output"]["Bound"] == 9


def test_gaps_invariant():
    output = Output(_instance())
    output.value = 5
    output.bound = 8
    assert output.absolute_optimality_gap() == output.bound - output.value
    assert math.isclose(output.relative_optimality_gap() * output.bound,
                        output.absolute_optimality_gap())


def test_write_json_output_round_trip(tmp_path):
    formatter, output = _formatter(json_output=True)
    formatter.update_value(6, "a")
    formatter.end()
    path = tmp_path / "out.json"
    output.write_json_output(str(path))
    assert json.loads(path.read_text()) == output.json


def test_write_json_output_empty_path_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    formatter, output = _formatter(json_output=True)
    formatter.update_value(6, "a")
    formatter.end()
    output.write_json_output("")
    assert list(tmp_path.iterdir()) == []
    assert output.json["Output"]["Value"] == 6


def test_verbose_report():
    stream = io.StringIO()
    parameters = Parameters(verbosity_level=1, output_stream=stream)
    output = Output(_instance())
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("My algorithm")
    formatter.print_header()
    formatter.update_value(6, "it 0")
    formatter.end()
    text = stream.getvalue()
    assert "KnapsackSolver" in text
    assert "My algorithm" in text
    assert "Final statistics" in text
    assert "it 0" in text


def test_silent_report():
    stream = io.StringIO()
    parameters = Parameters(verbosity_level=0, output_stream=stream)
    formatter = AlgorithmFormatter(parameters, Output(_instance()))
    formatter.start("Silent")
    formatter.print_header()
    formatter.update_value(6, "x")
    formatter.end()
    assert stream.getvalue() == ""


def test_needs_to_end_with_zero_limit():
    assert Parameters(time_limit=0).needs_to_end()
    assert not Parameters().needs_to_end()