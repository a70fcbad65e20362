"""Bellman dynamic programming algorithms that rebuild the solution in passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from knapsacksolver.algorithm_formatter import AlgorithmFormatter, Output, Parameters
from knapsacksolver.dynamic_programming_bellman import (
    _add_item,
    _all_items_fit,
    _array_values,
)
from knapsacksolver.instance import Instance
from knapsacksolver.solution import Solution

_EMPTY: frozenset[int] = frozenset()


@dataclass
class _IterationsOutput(Output):
    number_of_iterations: int = 0

    def to_json(self) -> dict[str, Any]:
        data = super().to_json()
        data["NumberOfIterations"] = self.number_of_iterations
        return data

    def format(self) -> str:
        return (super().format()
                + f"Number of iterations:         {self.number_of_iterations}\n")


@dataclass
class DynamicProgrammingBellmanArrayOneOutput(_IterationsOutput):
    """Output of the single line algorithm."""


@dataclass
class DynamicProgrammingBellmanArrayPartOutput(_IterationsOutput):
    """Output of the partial solution algorithm."""


@dataclass
class DynamicProgrammingBellmanArrayPartParameters(Parameters):
    """Parameters of the partial solution algorithm."""

    partial_solution_size: int = 64

    def format(self) -> str:
        return (super().format()
                + f"Partial solution size:  {self.partial_solution_size}\n")

    def to_json(self) -> dict[str, Any]:
        data = super().to_json()
        data["PartialSolutionSize"] = self.partial_solution_size
        return data


def dynamic_programming_bellman_array_one(
        instance: Instance,
        parameters: Optional[Parameters] = None) -> DynamicProgrammingBellmanArrayOneOutput:
    """Retrieve an optimal solution one item per pass over a single array."""
    parameters = parameters or Parameters()
    output = DynamicProgrammingBellmanArrayOneOutput(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - array - single line")
    formatter.print_header()

    if _all_items_fit(instance, formatter, output):
        return output

    items = instance.items
    capacity = instance.capacity
    optimal_value = -1
    optimal_value_local = -1
    solution = Solution(instance)
    last_item_id = instance.number_of_items - 1
    remaining_capacity = capacity
    values: list[int] = []
    while solution.profit != optimal_value:
        output.number_of_iterations += 1
        values = [0] * (capacity + 1)
        new_last_item_id = -1

        for item_id, item in enumerate(items[:last_item_id + 1]):
            if item.weight > remaining_capacity:
                continue
            if parameters.needs_to_end():
                formatter.end()
                return output

            candidate = values[remaining_capacity - item.weight] + item.profit
            if candidate > values[remaining_capacity]:
                values[remaining_capacity] = candidate
                new_last_item_id = item_id
                if candidate == optimal_value_local:
                    break

            values[:remaining_capacity + 1] = _add_item(
                values[:remaining_capacity + 1], item)

            if output.value < values[remaining_capacity]:
                formatter.update_value(values[remaining_capacity], f"it {item_id}")

        if output.number_of_iterations == 1:
            optimal_value = values[capacity]
            formatter.update_value(optimal_value, "algorithm end (value)")
            formatter.update_bound(output.value, "algorithm end (bound)")

        new_item = instance.item(new_last_item_id)
        solution.add(new_last_item_id)
        remaining_capacity -= new_item.weight
        optimal_value_local -= new_item.profit
        last_item_id = new_last_item_id - 1

    formatter.update_solution(solution, "algorithm end (solution)")
    formatter.end()
    return output


def dynamic_programming_bellman_array_part(
        instance: Instance,
        parameters: Optional[DynamicProgrammingBellmanArrayPartParameters] = None,
) -> DynamicProgrammingBellmanArrayPartOutput:
    """Retrieve an optimal solution a few items per pass, storing partial solutions."""
    parameters = parameters or DynamicProgrammingBellmanArrayPartParameters()
    size = parameters.partial_solution_size
    if size < 1:
        raise ValueError("The partial solution size must be at least 1.")
    output = DynamicProgrammingBellmanArrayPartOutput(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - array - partial")
    formatter.print_header()

    if _all_items_fit(instance, formatter, output):
        return output

    items = instance.items
    capacity = instance.capacity
    optimal_value = -1
    optimal_value_local = -1
    remaining_capacity = capacity
    solution = Solution(instance)
    first_item_id = 0
    last_item_id = instance.number_of_items - 1
    while solution.profit != optimal_value:
        output.number_of_iterations += 1
        tracked = range(first_item_id, min(first_item_id + size, last_item_id + 1))

        optimal_weight = remaining_capacity
        values = [0] * (capacity + 1)
        partial_solutions = [_EMPTY] * (capacity + 1)
        new_last_item_id = last_item_id

        found = False
        for item_id in range(first_item_id, last_item_id + 1):
            item = items[item_id]
            if parameters.needs_to_end():
                formatter.end()
                return output

            for weight in range(remaining_capacity, item.weight - 1, -1):
                candidate = values[weight - item.weight] + item.profit
                if candidate <= values[weight]:
                    continue
                values[weight] = candidate
                previous = partial_solutions[weight - item.weight]
                partial_solutions[weight] = (
                    previous | {item_id} if item_id in tracked else previous)
                if candidate == optimal_value_local:
                    optimal_weight = weight
                    new_last_item_id = item_id
                    found = True
                    break
            if found:
                break

            if output.value < values[remaining_capacity]:
                formatter.update_value(values[remaining_capacity], f"it {item_id}")

        if first_item_id == 0:
            optimal_value = values[optimal_weight]
            formatter.update_value(optimal_value, "algorithm end (value)")
            formatter.update_bound(output.value, "algorithm end (bound)")

        for item_id in sorted(partial_solutions[optimal_weight]):
            solution.add(item_id)
        if not solution.feasible:
            raise RuntimeError("!solution.feasible()")
        if solution.profit == output.bound:
            break

        first_item_id += size
        last_item_id = new_last_item_id
        remaining_capacity = capacity - solution.weight
        optimal_value_local = optimal_value - solution.profit

    formatter.update_solution(solution, "algorithm end (solution)")
    formatter.end()
    return output


def _array_rec(
        instance: Instance,
        parameters: Parameters,
        solution: Solution,
        item_id_1: int,
        item_id_2: int,
        capacity: int) -> None:
    items = instance.items
    middle = (item_id_1 + item_id_2 - 1) // 2 + 1
    values_1 = _array_values(items[item_id_1:middle], capacity, parameters.needs_to_end)
    values_2 = _array_values(items[middle:item_id_2], capacity, parameters.needs_to_end)

    capacity_1 = max(
        range(capacity + 1),
        key=lambda c: values_1[c] + values_2[capacity - c])
    capacity_2 = capacity - capacity_1

    if item_id_1 == middle - 1 and values_1[capacity_1] == items[item_id_1].profit:
        solution.add(item_id_1)
    if middle == item_id_2 - 1 and values_2[capacity_2] == items[middle].profit:
        solution.add(middle)

    if item_id_1 != middle - 1:
        _array_rec(instance, parameters, solution, item_id_1, middle, capacity_1)
    if middle != item_id_2 - 1:
        _array_rec(instance, parameters, solution, middle, item_id_2, capacity_2)


def dynamic_programming_bellman_array_rec(
        instance: Instance, parameters: Optional[Parameters] = None) -> Output:
    """Retrieve an optimal solution by splitting the items in halves recursively."""
    parameters = parameters or Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - array - recursive scheme")
    formatter.print_header()

    if _all_items_fit(instance, formatter, output):
        return output

    solution = Solution(instance)
    _array_rec(instance, parameters, solution, 0, instance.number_of_items,
               instance.capacity)
    if parameters.needs_to_end():
        formatter.end()
        return output

    formatter.update_solution(solution, "algorithm end (solution)")
    formatter.update_bound(output.value, "algorithm end (bound)")
    formatter.end()
    return output