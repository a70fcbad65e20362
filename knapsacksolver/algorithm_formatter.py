"""Algorithm parameters, outputs and the progress reporting shared by solvers."""

from __future__ import annotations

import json
import math
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TextIO

from knapsacksolver.instance import PROFIT_MAX, Instance
from knapsacksolver.solution import Solution


@dataclass
class Parameters:
    """Settings common to every algorithm."""

    verbosity_level: int = 1
    time_limit: float = math.inf
    json_output: bool = False
    new_solution_callback: Optional[Callable[["Output"], None]] = None
    output_stream: Optional[TextIO] = None
    start_time: float = field(default_factory=time.monotonic)

    def elapsed_time(self) -> float:
        """Seconds since the parameters were created."""
        return time.monotonic() - self.start_time

    def needs_to_end(self) -> bool:
        """Whether the time limit has been reached."""
        return self.elapsed_time() >= self.time_limit

    def format(self) -> str:
        return (
            f"Time limit:             {self.time_limit}\n"
            f"Verbosity level:        {self.verbosity_level}\n"
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "TimeLimit": self.time_limit if math.isfinite(self.time_limit) else None,
            "VerbosityLevel": self.verbosity_level,
        }


@dataclass
class Output:
    """Best solution, value and bound found by an algorithm."""

    instance: Instance
    solution: Solution = field(init=False)
    value: int = 0
    bound: int = PROFIT_MAX
    time: float = 0.0
    json: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.solution = Solution(self.instance)

    def has_solution(self) -> bool:
        return self.solution.number_of_items > 0 and self.solution.feasible

    def absolute_optimality_gap(self) -> int:
        return self.bound - self.value

    def relative_optimality_gap(self) -> float:
        if self.bound == 0:
            return 0.0
        return self.absolute_optimality_gap() / self.bound

    def to_json(self) -> dict[str, Any]:
        return {
            "Solution": self.solution.to_json(),
            "Value": self.value,
            "Bound": self.bound,
            "AbsoluteOptimalityGap": self.absolute_optimality_gap(),
            "RelativeOptimalityGap": self.relative_optimality_gap(),
            "Time": self.time,
        }

    def format(self) -> str:
        return (
            f"Value:                        {self.value}\n"
            f"Bound:                        {self.bound}\n"
            f"Absolute optimality gap:      {self.absolute_optimality_gap()}\n"
            f"Relative optimality gap (%):  {self.relative_optimality_gap() * 100:.2f}\n"
            f"Time (s):                     {self.time:.4f}\n"
        )

    def write_json_output(self, json_output_path: str) -> None:
        """Write the JSON record; an empty path writes nothing."""
        if not json_output_path:
            return
        try:
            with open(json_output_path, "w") as file:
                json.dump(self.json, file, indent=4)
        except OSError as error:
            raise OSError(f'Unable to open file "{json_output_path}".') from error


class AlgorithmFormatter:
    """Updates an output and reports the progress of an algorithm."""

    def __init__(self, parameters: Parameters, output: Output):
        self.parameters = parameters
        self.output = output
        self._stream = parameters.output_stream or sys.stdout

    def _write(self, text: str) -> None:
        if self.parameters.verbosity_level > 0:
            self._stream.write(text)

    def start(self, algorithm_name: str) -> None:
        if self.parameters.json_output:
            self.output.json["Parameters"] = self.parameters.to_json()
        if self.parameters.verbosity_level == 0:
            return
        self._write(
            "====================================\n"
            "           KnapsackSolver           \n"
            "====================================\n"
            "\n"
            "Problem\n"
            "-------\n"
            "Knapsack problem\n"
            "\n"
            "Instance\n"
            "--------\n")
        self._write(self.output.instance.format(self.parameters.verbosity_level))
        self._write(
            "\n"
            "Algorithm\n"
            "---------\n"
            f"{algorithm_name}\n"
            "\n"
            "Parameters\n"
            "----------\n")
        self._write(self.parameters.format())

    def print_header(self) -> None:
        if self.parameters.verbosity_level == 0:
            return
        self._write(
            "\n"
            f"{'Time (s)':>12}{'Sol.':>6}{'Value':>24}{'Bound':>24}"
            f"{'Gap':>16}{'Gap (%)':>8}{'Comment':>32}\n"
            f"{'--------':>12}{'----':>6}{'-----':>24}{'-----':>24}"
            f"{'---':>16}{'-------':>8}{'-------':>32}\n")
        self.print("")

    def print(self, s: str) -> None:
        if self.parameters.verbosity_level == 0:
            return
        output = self.output
        self._write(
            f"{output.time:>12.3f}"
            f"{int(output.has_solution()):>6}"
            f"{output.value:>24}"
            f"{output.bound:>24}"
            f"{output.absolute_optimality_gap():>16}"
            f"{output.relative_optimality_gap() * 100:>8.2f}"
            f"{s:>32}\n")

    def _record(self, s: str) -> None:
        self.print(s)
        if self.parameters.json_output:
            self.output.json.setdefault("IntermediaryOutputs", []).append(
                self.output.to_json())
        if self.parameters.new_solution_callback is not None:
            self.parameters.new_solution_callback(self.output)

    def update_solution(self, solution_new: Solution, s: str) -> None:
        """Store the solution if it improves on the current one."""
        if not solution_new.feasible:
            return
        new_value = solution_new.objective_value
        if self.output.has_solution():
            better = new_value > self.output.value
        else:
            better = new_value >= self.output.value
        if not better:
            return
        self.output.time = self.parameters.elapsed_time()
        self.output.solution = solution_new.copy()
        self.output.value = self.output.solution.objective_value
        self._record(s)

    def update_value(self, value_new: int, s: str) -> None:
        if value_new <= self.output.value:
            return
        self.output.time = self.parameters.elapsed_time()
        self.output.value = value_new
        self._record(s)

    def update_bound(self, bound_new: int, s: str) -> None:
        if bound_new >= self.output.bound:
            return
        self.output.time = self.parameters.elapsed_time()
        self.output.bound = bound_new
        self._record(s)

    def end(self) -> None:
        self.output.time = self.parameters.elapsed_time()
        if self.parameters.json_output:
            self.output.json["Output"] = self.output.to_json()
        if self.parameters.verbosity_level == 0:
            return
        self._write("\nFinal statistics\n----------------\n")
        self._write(self.output.format())
        self._write("\nSolution\n--------\n")
        self._write(self.output.solution.format(self.parameters.verbosity_level))